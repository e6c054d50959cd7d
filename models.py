from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Tuple

class TranscriptWord(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: str
    start: Optional[int] = None
    end: Optional[int] = None
    confidence: Optional[float] = None
    speaker: Optional[str] = None

class TranscriptionResult(BaseModel):
    """Completed transcript as returned by AssemblyAI; unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    status: Optional[str] = None
    audio_url: Optional[str] = None
    confidence: float = Field(0.0, ge=0.0, le=1.0, allow_inf_nan=False)
    text: str = ""
    words: List[TranscriptWord] = []

    # AssemblyAI sends null for these on empty audio
    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence_or_zero(cls, value):
        return 0.0 if value is None else value

    @field_validator("text", mode="before")
    @classmethod
    def _text_or_empty(cls, value):
        return "" if value is None else value

    @field_validator("words", mode="before")
    @classmethod
    def _words_or_empty(cls, value):
        return [] if value is None else value

class WordDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    filler_words_count: int
    unique_vocabulary: int
    total_words: int
    different_words: Tuple[str, ...]

class GrammarSyntaxIssues(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int
    issues: str

class Report(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str]
    status: Optional[str]
    audio_url: Optional[str]
    overall_confidence: str
    question: str
    transcript: str
    word_details: WordDetails
    grammar_syntax_issues: GrammarSyntaxIssues

class GrammarFinding(BaseModel):
    category_id: str
    message: str
    replacements: List[str] = []
    context: str = ""

class GrammarCheckResult(BaseModel):
    count: int
    issues: str

class ReportRequest(BaseModel):
    transcription: TranscriptionResult
    question: str
