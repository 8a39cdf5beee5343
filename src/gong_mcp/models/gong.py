"""Gong API payload models.

These models are the typed intermediate representation produced by decoding
upstream JSON. Every field the API may omit is optional here; defaults for the
emitted shapes are applied in ``tools.shaping``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from gong_mcp.models.base import UpstreamBaseModel


class Direction(str, Enum):
    """Call direction."""

    INBOUND = "Inbound"
    OUTBOUND = "Outbound"
    CONFERENCE = "Conference"
    UNKNOWN = "Unknown"


class Scope(str, Enum):
    """Whether a call involved external parties."""

    INTERNAL = "Internal"
    EXTERNAL = "External"
    UNKNOWN = "Unknown"


class Media(str, Enum):
    """Recorded media type."""

    VIDEO = "Video"
    AUDIO = "Audio"


class Affiliation(str, Enum):
    """Party affiliation relative to the Gong company."""

    INTERNAL = "Internal"
    EXTERNAL = "External"
    UNKNOWN = "Unknown"


class PartyMethod(str, Enum):
    """How a party joined the call."""

    INVITEE = "Invitee"
    ATTENDEE = "Attendee"


class Records(UpstreamBaseModel):
    """Paging information attached to every list response."""

    total_records: int | None = None
    current_page_size: int | None = None
    current_page_number: int | None = None
    cursor: str | None = None


class CallMetaData(UpstreamBaseModel):
    """Call metadata block (``metaData``)."""

    id: str | None = None
    url: str | None = None
    title: str | None = None
    scheduled: str | None = None
    started: str | None = None
    duration: int | None = Field(None, description="Duration in seconds")
    primary_user_id: str | None = None
    direction: Direction | None = None
    system: str | None = None
    scope: Scope | None = None
    media: Media | None = None
    language: str | None = None
    workspace_id: str | None = None
    sdr_disposition: str | None = None
    client_unique_id: str | None = None
    custom_data: Any = None
    purpose: str | None = None
    meeting_url: str | None = None
    is_private: bool | None = None
    calendar_event_id: str | None = None


class Party(UpstreamBaseModel):
    """A call participant (``parties[]``)."""

    id: str | None = None
    email_address: str | None = None
    name: str | None = None
    title: str | None = None
    user_id: str | None = None
    speaker_id: str | None = None
    context: list[dict[str, Any]] | None = None
    affiliation: Affiliation | None = None
    phone_number: str | None = None
    methods: list[PartyMethod] | None = None


class StructureSection(UpstreamBaseModel):
    """An agenda/structure section of a call."""

    name: str | None = None
    duration: int | None = None


class CallContent(UpstreamBaseModel):
    """Optional call content. Only ``structure`` is ever requested."""

    structure: list[StructureSection] | None = None


class Call(UpstreamBaseModel):
    """One call from ``/v2/calls/extensive``."""

    meta_data: CallMetaData | None = None
    parties: list[Party] | None = None
    content: CallContent | None = None


class CallPage(UpstreamBaseModel):
    """Response of ``/v2/calls/extensive``."""

    request_id: str | None = None
    records: Records | None = None
    calls: list[Call] | None = None

    @property
    def next_cursor(self) -> str | None:
        """Continuation cursor, if the upstream reports more pages."""
        if self.records is None or not self.records.cursor:
            return None
        return self.records.cursor


class TranscriptSentence(UpstreamBaseModel):
    """A sentence inside a monologue. Times are milliseconds from call start."""

    start: int | None = None
    end: int | None = None
    text: str | None = None


class Monologue(UpstreamBaseModel):
    """A run of sentences by one speaker."""

    speaker_id: str | None = None
    topic: str | None = None
    sentences: list[TranscriptSentence] | None = None


class CallTranscript(UpstreamBaseModel):
    """Transcript of one call."""

    call_id: str | None = None
    transcript: list[Monologue] | None = None


class TranscriptSet(UpstreamBaseModel):
    """Response of ``/v2/calls/transcript``."""

    request_id: str | None = None
    records: Records | None = None
    call_transcripts: list[CallTranscript] | None = None


class User(UpstreamBaseModel):
    """A Gong user."""

    id: str | None = None
    email_address: str | None = None
    created: str | None = None
    active: bool | None = None
    first_name: str | None = None
    last_name: str | None = None
    title: str | None = None
    phone_number: str | None = None
    manager_id: str | None = None


class UserPage(UpstreamBaseModel):
    """Response of ``/v2/users``."""

    request_id: str | None = None
    records: Records | None = None
    users: list[User] | None = None

    @property
    def next_cursor(self) -> str | None:
        """Continuation cursor, if the upstream reports more pages."""
        if self.records is None or not self.records.cursor:
            return None
        return self.records.cursor
