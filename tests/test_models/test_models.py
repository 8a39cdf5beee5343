"""Tests for the upstream and output models."""

from typing import Any

import pytest
from pydantic import ValidationError

from gong_mcp.models import (
    Affiliation,
    CallPage,
    Direction,
    Party,
    TranscriptRecord,
)


@pytest.mark.unit
class TestUpstreamModels:
    """Tests for decoding Gong payloads."""

    def test_decodes_camel_case_payload(self, calls_page_payload: dict[str, Any]) -> None:
        """Test a complete page decodes into typed models."""
        page = CallPage.model_validate(calls_page_payload)

        call = page.calls[0]
        assert call.meta_data.direction is Direction.CONFERENCE
        assert call.meta_data.primary_user_id == "u1"
        assert call.parties[0].affiliation is Affiliation.INTERNAL
        assert page.records.total_records == 1

    def test_numeric_ids_become_strings(self) -> None:
        """Test numeric identifiers are accepted as strings."""
        party = Party.model_validate({"id": 12345, "speakerId": 6789, "userId": 42})

        assert party.id == "12345"
        assert party.speaker_id == "6789"
        assert party.user_id == "42"

    def test_unmodelled_fields_are_ignored(self) -> None:
        """Test extra upstream fields do not break decoding."""
        party = Party.model_validate({"id": "p1", "someNewField": {"nested": True}})

        assert party.id == "p1"

    def test_unknown_enum_value_is_rejected(self) -> None:
        """Test an unknown affiliation fails decoding."""
        with pytest.raises(ValidationError):
            Party.model_validate({"affiliation": "Partner"})

    def test_empty_cursor_is_no_continuation(self) -> None:
        """Test an empty cursor string means no further pages."""
        page = CallPage.model_validate({"records": {"cursor": ""}, "calls": []})

        assert page.next_cursor is None


@pytest.mark.unit
class TestTranscriptRecord:
    """Tests for transcript count consistency."""

    def test_counts_must_match(self) -> None:
        """Test a sentence count that disagrees with the sentences is rejected."""
        with pytest.raises(ValidationError, match="sentence_count"):
            TranscriptRecord(call_id="1", sentences=[], sentence_count=2)

    def test_consistent_record(self) -> None:
        """Test a consistent empty record."""
        record = TranscriptRecord(call_id="1")

        assert record.sentence_count == 0
        assert record.monologue_count == 0
