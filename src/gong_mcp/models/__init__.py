"""Pydantic models for gong-mcp."""

from gong_mcp.models.base import GongBaseModel, UpstreamBaseModel
from gong_mcp.models.calls import (
    CallDetail,
    CallFilter,
    CallSummary,
    ParticipantRef,
    ParticipantsView,
    ParticipantSummary,
    SearchResult,
    StructureItem,
)
from gong_mcp.models.gong import (
    Affiliation,
    Call,
    CallContent,
    CallMetaData,
    CallPage,
    CallTranscript,
    Direction,
    Media,
    Monologue,
    Party,
    PartyMethod,
    Records,
    Scope,
    StructureSection,
    TranscriptSentence,
    TranscriptSet,
    User,
    UserPage,
)
from gong_mcp.models.transcript import (
    MonologueRecord,
    Sentence,
    SentenceSpan,
    TranscriptRecord,
)
from gong_mcp.models.users import StatusRecord, UserList, UserRecord

__all__ = [
    "Affiliation",
    "Call",
    "CallContent",
    "CallDetail",
    "CallFilter",
    "CallMetaData",
    "CallPage",
    "CallSummary",
    "CallTranscript",
    "Direction",
    "GongBaseModel",
    "Media",
    "Monologue",
    "MonologueRecord",
    "ParticipantRef",
    "ParticipantSummary",
    "ParticipantsView",
    "Party",
    "PartyMethod",
    "Records",
    "Scope",
    "SearchResult",
    "Sentence",
    "SentenceSpan",
    "StatusRecord",
    "StructureItem",
    "StructureSection",
    "TranscriptRecord",
    "TranscriptSentence",
    "TranscriptSet",
    "UpstreamBaseModel",
    "User",
    "UserList",
    "UserPage",
    "UserRecord",
]
