"""Call-related output models and the normalized call filter."""

from typing import Any

from pydantic import Field

from gong_mcp.models.base import GongBaseModel


class CallFilter(GongBaseModel):
    """Normalized filter for a ``list_calls`` request."""

    from_time: str | None = Field(None, description="ISO-8601 lower bound on call start")
    to_time: str | None = Field(None, description="ISO-8601 upper bound on call start")
    workspace_id: str | None = None
    call_ids: list[str] | None = None
    primary_user_ids: list[str] | None = None
    cursor: str | None = None
    include_structure: bool = False

    @classmethod
    def for_call(cls, call_id: str, include_structure: bool = False) -> "CallFilter":
        """Filter addressing exactly one call, with no date range."""
        return cls(call_ids=[call_id], include_structure=include_structure)


class ParticipantRef(GongBaseModel):
    """A call participant as emitted in every call shape."""

    id: str = ""
    name: str = ""
    email: str = ""
    title: str = ""
    affiliation: str = "Unknown"
    speaker_id: str | None = None
    user_id: str | None = None
    phone_number: str | None = None
    methods: list[str] = Field(default_factory=list)
    context: list[dict[str, Any]] = Field(default_factory=list)


class ParticipantSummary(GongBaseModel):
    """Affiliation and speaker counts derived from a participant list."""

    total: int = Field(0, ge=0)
    internal: int = Field(0, ge=0)
    external: int = Field(0, ge=0)
    speakers: int = Field(0, ge=0)


class StructureItem(GongBaseModel):
    """An agenda/structure section of a call."""

    name: str = ""
    duration_seconds: int = 0


class CallSummary(GongBaseModel):
    """Display-oriented call record used in search results."""

    id: str = ""
    title: str = "Untitled"
    started_at: str = ""
    duration_seconds: int = 0
    direction: str = ""
    participants: list[ParticipantRef] = Field(default_factory=list)
    url: str = ""
    structure: list[StructureItem] = Field(default_factory=list)


class CallDetail(GongBaseModel):
    """Diagnostic call record. Absent upstream fields are kept as null."""

    id: str | None = None
    title: str | None = None
    started_at: str | None = None
    duration_seconds: int | None = None
    direction: str | None = None
    participants: list[ParticipantRef] = Field(default_factory=list)
    url: str | None = None
    structure: list[StructureItem] = Field(default_factory=list)
    scheduled: str | None = None
    scope: str | None = None
    media: str | None = None
    language: str | None = None
    workspace_id: str | None = None
    primary_user_id: str | None = None
    system: str | None = None
    purpose: str | None = None
    meeting_url: str | None = None
    custom_data: Any = None
    is_private: bool | None = None
    calendar_event_id: str | None = None
    participant_count: int = 0
    participant_summary: ParticipantSummary = Field(default_factory=ParticipantSummary)


class ParticipantsView(GongBaseModel):
    """Participants of one call with summary and speaker labels."""

    call_id: str
    participants: list[ParticipantRef] = Field(default_factory=list)
    summary: ParticipantSummary = Field(default_factory=ParticipantSummary)
    speaker_map: dict[str, str] = Field(default_factory=dict)


class SearchResult(GongBaseModel):
    """Result of the ``search_calls`` tool."""

    calls: list[CallSummary] = Field(default_factory=list)
    count: int = Field(0, ge=0)
    total_available: int = Field(0, ge=0)
    truncated: bool = False
    next_cursor: str | None = None
    has_more: bool = False
    filters_echo: dict[str, Any] = Field(default_factory=dict)
