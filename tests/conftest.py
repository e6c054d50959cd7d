import pytest
from models import GrammarCheckResult, GrammarFinding, TranscriptionResult


class FakeLanguageToolClient:
    """Stands in for LanguageToolClient; returns canned findings or raises."""

    def __init__(self, findings=None, error=None):
        self.findings = findings or []
        self.error = error
        self.calls = []

    async def check_text(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.findings


class FakeGrammarChecker:
    def __init__(self, result=None):
        self.result = result or GrammarCheckResult(count=0, issues="")
        self.calls = []

    async def check_syntax_and_grammar(self, text):
        self.calls.append(text)
        return self.result


def make_finding(category_id="GRAMMAR", message="Possible agreement error.",
                 replacements=None, context="He go to school"):
    return GrammarFinding(
        category_id=category_id,
        message=message,
        replacements=replacements if replacements is not None else ["goes"],
        context=context,
    )


@pytest.fixture
def transcription():
    return TranscriptionResult.model_validate({
        "id": "tr_123",
        "status": "completed",
        "audio_url": "https://cdn.example.com/audio.mp3",
        "confidence": 0.8765,
        "text": "Um hello um Hello world",
        "words": [
            {"text": "Um", "start": 0, "end": 200, "confidence": 0.9},
            {"text": "hello", "start": 250, "end": 600, "confidence": 0.95},
            {"text": "um", "start": 700, "end": 800, "confidence": 0.7},
            {"text": "Hello", "start": 900, "end": 1200, "confidence": 0.93},
            {"text": "world", "start": 1300, "end": 1700, "confidence": 0.97},
        ],
    })
