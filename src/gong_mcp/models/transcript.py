"""Transcript output models."""

from pydantic import Field, model_validator

from gong_mcp.models.base import GongBaseModel


class SentenceSpan(GongBaseModel):
    """A sentence inside a monologue. Times are milliseconds from call start."""

    start: int = 0
    end: int = 0
    text: str = ""


class Sentence(SentenceSpan):
    """A sentence attributed to its speaker, in call order."""

    speaker_id: str | None = None


class MonologueRecord(GongBaseModel):
    """A run of sentences by one speaker."""

    speaker_id: str | None = None
    topic: str | None = None
    sentences: list[SentenceSpan] = Field(default_factory=list)


class TranscriptRecord(GongBaseModel):
    """Transcript of one call with flattened sentences and counts."""

    call_id: str
    monologues: list[MonologueRecord] = Field(default_factory=list)
    sentences: list[Sentence] = Field(default_factory=list)
    sentence_count: int = Field(0, ge=0)
    speaker_count: int = Field(0, ge=0)
    monologue_count: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_counts(self) -> "TranscriptRecord":
        """Counts must agree with the sequences they describe."""
        if self.sentence_count != len(self.sentences):
            raise ValueError("sentence_count must equal the number of sentences")
        if self.monologue_count != len(self.monologues):
            raise ValueError("monologue_count must equal the number of monologues")
        return self
