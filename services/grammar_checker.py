import httpx
import logging
from typing import List, Optional
from config import Config
from models import GrammarFinding, GrammarCheckResult

class LanguageToolClient:
    """Thin client for the LanguageTool /v2/check endpoint."""

    def __init__(self, url: Optional[str] = None, language: Optional[str] = None,
                 timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url or Config.LANGUAGETOOL_URL
        self.language = language or Config.LANGUAGETOOL_LANGUAGE
        self.timeout = timeout if timeout is not None else Config.GRAMMAR_CHECK_TIMEOUT
        self.transport = transport

    async def check_text(self, text: str) -> List[GrammarFinding]:
        """Send text to LanguageTool and return every match it reports"""
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        data = {"text": text, "language": self.language}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(self.url, data=data, headers=headers)

            if response.status_code != 200:
                error_text = response.text if response.content else "Unknown error"
                raise Exception(f"Grammar check failed: {response.status_code} - {error_text}")

            return self.parse_matches(response.json())

    def parse_matches(self, payload: dict) -> List[GrammarFinding]:
        """Parse LanguageTool matches into our format"""
        findings = []
        for match in payload["matches"]:
            findings.append(GrammarFinding(
                category_id=match["rule"]["category"]["id"],
                message=match["message"],
                replacements=[r["value"] for r in match.get("replacements", [])],
                context=match["context"]["text"],
            ))
        return findings


class GrammarChecker:
    def __init__(self, client: Optional[LanguageToolClient] = None):
        self.client = client or LanguageToolClient()
        self.ignored_category = Config.SPELLING_CATEGORY_ID

    async def check_syntax_and_grammar(self, text: str) -> GrammarCheckResult:
        """Report grammar/syntax findings for text, leaving out spelling issues.

        Grammar checking is best effort: any failure talking to the service or
        reading its answer is logged and reported as zero issues.
        """
        if not text or not text.strip():
            return GrammarCheckResult(count=0, issues="")

        try:
            findings = await self.client.check_text(text)
        except Exception as e:
            logging.error(f"Error checking grammar/syntax: {e}", exc_info=True)
            return GrammarCheckResult(count=0, issues="")

        matches = [f for f in findings if f.category_id != self.ignored_category]
        ignored = len(findings) - len(matches)
        if ignored:
            logging.info(f"Ignored {ignored} spelling findings")

        return GrammarCheckResult(count=len(matches), issues=self.format_findings(matches))

    def format_findings(self, findings: List[GrammarFinding]) -> str:
        issues = ""
        for index, finding in enumerate(findings, start=1):
            issues += f"Issue {index}:\n"
            issues += f"- Message: {finding.message}\n"
            issues += f"- Suggestion: {', '.join(finding.replacements)}\n"
            issues += f"- Context: {finding.context}\n"
        return issues
