"""Response shaping from Gong payloads to the emitted records.

All functions here are pure. Display shapes (call summary, participant, user)
replace missing upstream values with defaults; the call detail shape keeps
them as null.
"""

from enum import Enum

from gong_mcp.models.calls import (
    CallDetail,
    CallSummary,
    ParticipantRef,
    ParticipantsView,
    ParticipantSummary,
    StructureItem,
)
from gong_mcp.models.gong import (
    Affiliation,
    Call,
    CallMetaData,
    CallTranscript,
    Party,
    User,
    UserPage,
)
from gong_mcp.models.transcript import (
    MonologueRecord,
    Sentence,
    SentenceSpan,
    TranscriptRecord,
)
from gong_mcp.models.users import UserList, UserRecord


def tag_name(value: Enum | None) -> str | None:
    """Render an upstream enumeration as its textual tag."""
    return value.value if value is not None else None


def shape_participant(party: Party) -> ParticipantRef:
    """Shape one upstream party."""
    return ParticipantRef(
        id=party.id or "",
        name=party.name or "",
        email=party.email_address or "",
        title=party.title or "",
        affiliation=tag_name(party.affiliation) or Affiliation.UNKNOWN.value,
        speaker_id=party.speaker_id,
        user_id=party.user_id,
        phone_number=party.phone_number,
        methods=[method.value for method in party.methods or []],
        context=list(party.context or []),
    )


def shape_participants(parties: list[Party] | None) -> list[ParticipantRef]:
    """Shape a party list, preserving upstream order."""
    return [shape_participant(party) for party in parties or []]


def summarize_participants(participants: list[ParticipantRef]) -> ParticipantSummary:
    """Derive affiliation and speaker counts.

    Participants with an Unknown affiliation count toward ``total`` only.
    """
    return ParticipantSummary(
        total=len(participants),
        internal=sum(1 for p in participants if p.affiliation == Affiliation.INTERNAL.value),
        external=sum(1 for p in participants if p.affiliation == Affiliation.EXTERNAL.value),
        speakers=sum(1 for p in participants if p.speaker_id),
    )


def build_speaker_map(participants: list[ParticipantRef]) -> dict[str, str]:
    """Map speaker ids to ``"<name> (<affiliation>)"`` labels."""
    return {
        p.speaker_id: f"{p.name or 'Unknown'} ({p.affiliation})"
        for p in participants
        if p.speaker_id
    }


def _structure(call: Call) -> list[StructureItem]:
    if call.content is None:
        return []
    return [
        StructureItem(name=section.name or "", duration_seconds=section.duration or 0)
        for section in call.content.structure or []
    ]


def shape_call_summary(call: Call) -> CallSummary:
    """Shape a call for list and search results."""
    meta = call.meta_data or CallMetaData()
    return CallSummary(
        id=meta.id or "",
        title=meta.title or "Untitled",
        started_at=meta.started or "",
        duration_seconds=meta.duration or 0,
        direction=tag_name(meta.direction) or "",
        participants=shape_participants(call.parties),
        url=meta.url or "",
        structure=_structure(call),
    )


def shape_call_detail(call: Call) -> CallDetail:
    """Shape a call with its full metadata."""
    meta = call.meta_data or CallMetaData()
    participants = shape_participants(call.parties)
    return CallDetail(
        id=meta.id,
        title=meta.title,
        started_at=meta.started,
        duration_seconds=meta.duration,
        direction=tag_name(meta.direction),
        participants=participants,
        url=meta.url,
        structure=_structure(call),
        scheduled=meta.scheduled,
        scope=tag_name(meta.scope),
        media=tag_name(meta.media),
        language=meta.language,
        workspace_id=meta.workspace_id,
        primary_user_id=meta.primary_user_id,
        system=meta.system,
        purpose=meta.purpose,
        meeting_url=meta.meeting_url,
        custom_data=meta.custom_data,
        is_private=meta.is_private,
        calendar_event_id=meta.calendar_event_id,
        participant_count=len(participants),
        participant_summary=summarize_participants(participants),
    )


def shape_participants_view(call_id: str, call: Call) -> ParticipantsView:
    """Shape the participants of one call with summary and speaker map."""
    participants = shape_participants(call.parties)
    return ParticipantsView(
        call_id=(call.meta_data.id if call.meta_data else None) or call_id,
        participants=participants,
        summary=summarize_participants(participants),
        speaker_map=build_speaker_map(participants),
    )


def shape_transcript(call_id: str, transcript: CallTranscript) -> TranscriptRecord:
    """Flatten a call transcript into ordered sentences.

    Sentences keep monologue order, then sentence order within a monologue.
    """
    monologues: list[MonologueRecord] = []
    sentences: list[Sentence] = []
    speaker_ids: set[str] = set()

    for monologue in transcript.transcript or []:
        if monologue.speaker_id:
            speaker_ids.add(monologue.speaker_id)

        spans = [
            SentenceSpan(start=s.start or 0, end=s.end or 0, text=s.text or "")
            for s in monologue.sentences or []
        ]
        monologues.append(
            MonologueRecord(
                speaker_id=monologue.speaker_id,
                topic=monologue.topic,
                sentences=spans,
            )
        )
        sentences.extend(
            Sentence(
                speaker_id=monologue.speaker_id,
                start=span.start,
                end=span.end,
                text=span.text,
            )
            for span in spans
        )

    return TranscriptRecord(
        call_id=transcript.call_id or call_id,
        monologues=monologues,
        sentences=sentences,
        sentence_count=len(sentences),
        speaker_count=len(speaker_ids),
        monologue_count=len(monologues),
    )


def shape_user(user: User) -> UserRecord:
    """Shape one upstream user."""
    return UserRecord(
        id=user.id or "",
        email=user.email_address or "",
        first_name=user.first_name or "",
        last_name=user.last_name or "",
        active=bool(user.active),
    )


def shape_user_list(page: UserPage) -> UserList:
    """Shape one page of users."""
    users = [shape_user(user) for user in page.users or []]
    next_cursor = page.next_cursor
    return UserList(
        users=users,
        count=len(users),
        has_more=next_cursor is not None,
        next_cursor=next_cursor,
        message=f"Retrieved {len(users)} users" if users else "No users found",
    )
