import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from config import Config
from models import (
    TranscriptionResult,
    TranscriptWord,
    WordDetails,
    GrammarSyntaxIssues,
    Report,
)
from services.grammar_checker import GrammarChecker

class ReportBuilder:
    def __init__(self, grammar_checker: Optional[GrammarChecker] = None):
        self.filler_words = Config.FILLER_WORDS
        self.grammar_checker = grammar_checker or GrammarChecker()

    def compute_word_details(self, words: List[TranscriptWord]) -> WordDetails:
        """Count fillers and distinct non-filler words (case-insensitive)"""
        filler_count = 0
        vocabulary = 0
        total_words = 0
        seen = set()
        different_words = []

        for word in words:
            total_words += 1
            lowered = word.text.lower()
            if lowered in self.filler_words:
                filler_count += 1
            elif lowered not in seen:
                vocabulary += 1
                seen.add(lowered)
                different_words.append(lowered)

        return WordDetails(
            filler_words_count=filler_count,
            unique_vocabulary=vocabulary,
            total_words=total_words,
            different_words=tuple(different_words),
        )

    @staticmethod
    def format_confidence(confidence: float) -> str:
        # Decimal keeps 0.8765 -> "87.65" instead of binary float drift
        percentage = Decimal(str(confidence)) * 100
        return format(percentage.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP), "f")

    async def generate_transcription_report(self, transcription: TranscriptionResult, question: str) -> Report:
        """Build the transcription report, including LanguageTool results"""
        word_details = self.compute_word_details(transcription.words)

        grammar = await self.grammar_checker.check_syntax_and_grammar(transcription.text)
        if grammar.count > 0:
            grammar_issues = GrammarSyntaxIssues(count=grammar.count, issues=grammar.issues)
        else:
            grammar_issues = GrammarSyntaxIssues(count=0, issues=Config.NO_ISSUES_MESSAGE)

        logging.info(
            f"Report for transcript {transcription.id}: {word_details.total_words} words, "
            f"{word_details.filler_words_count} fillers, {grammar_issues.count} grammar issues"
        )

        return Report(
            id=transcription.id,
            status=transcription.status,
            audio_url=transcription.audio_url,
            overall_confidence=self.format_confidence(transcription.confidence),
            question=question,
            transcript=transcription.text,
            word_details=word_details,
            grammar_syntax_issues=grammar_issues,
        )
