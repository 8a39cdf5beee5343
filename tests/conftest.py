"""Pytest configuration and shared fixtures."""

import copy
from typing import Any
from unittest.mock import AsyncMock

import pytest
from pydantic import SecretStr

from gong_mcp.models.gong import CallPage, TranscriptSet, UserPage
from gong_mcp.server import GongMCPServer
from gong_mcp.tools.gong_api import GongAPIClient
from gong_mcp.utils.config import GongConfig

CALL_ID = "7782342274025937895"


@pytest.fixture
def gong_config() -> GongConfig:
    """Gong configuration pointing at a fake endpoint.

    Returns:
        GongConfig instance
    """
    return GongConfig(
        endpoint="https://api.gong.test/",
        key_id="test-key",
        key_secret=SecretStr("test-secret"),
        timeout=5.0,
    )


@pytest.fixture
def parties_payload() -> list[dict[str, Any]]:
    """Six parties: two internal, three external, one unknown; three speakers."""
    return [
        {
            "id": "p1",
            "emailAddress": "ana@gong-customer.com",
            "name": "Ana Lopez",
            "title": "Account Executive",
            "userId": "u1",
            "speakerId": "A",
            "affiliation": "Internal",
            "methods": ["Invitee", "Attendee"],
            "context": [{"system": "Salesforce", "objects": []}],
        },
        {
            "id": "p2",
            "emailAddress": "ben@gong-customer.com",
            "name": "Ben Ode",
            "userId": "u2",
            "speakerId": "B",
            "affiliation": "Internal",
            "methods": ["Attendee"],
        },
        {
            "id": "p3",
            "emailAddress": "cara@acme.com",
            "name": "Cara Singh",
            "title": "VP Operations",
            "speakerId": "C",
            "affiliation": "External",
        },
        {"id": "p4", "name": "Dev Patel", "affiliation": "External"},
        {"id": "p5", "emailAddress": "ops@acme.com", "affiliation": "External"},
        {"id": "p6", "phoneNumber": "+15550100", "affiliation": "Unknown"},
    ]


@pytest.fixture
def call_payload(parties_payload: list[dict[str, Any]]) -> dict[str, Any]:
    """One call as returned by /v2/calls/extensive."""
    return {
        "metaData": {
            "id": CALL_ID,
            "url": f"https://app.gong.io/call?id={CALL_ID}",
            "title": "Acme renewal",
            "scheduled": "2024-05-01T15:00:00Z",
            "started": "2024-05-01T15:02:11Z",
            "duration": 1800,
            "primaryUserId": "u1",
            "direction": "Conference",
            "system": "Zoom",
            "scope": "External",
            "media": "Video",
            "language": "eng",
            "workspaceId": "w1",
            "meetingUrl": "https://zoom.us/j/123",
            "isPrivate": False,
            "calendarEventId": "evt-1",
            "sdrDisposition": None,
        },
        "parties": parties_payload,
        "content": {
            "structure": [
                {"name": "Intro", "duration": 120},
                {"name": "Demo", "duration": 900},
            ]
        },
    }


@pytest.fixture
def calls_page_payload(call_payload: dict[str, Any]) -> dict[str, Any]:
    """A single-page /v2/calls/extensive response."""
    return {
        "requestId": "req-calls",
        "records": {
            "totalRecords": 1,
            "currentPageSize": 1,
            "currentPageNumber": 0,
        },
        "calls": [call_payload],
    }


@pytest.fixture
def many_calls_page_payload(call_payload: dict[str, Any]) -> dict[str, Any]:
    """Five calls and a continuation cursor."""
    calls = []
    for i in range(5):
        call = copy.deepcopy(call_payload)
        call["metaData"]["id"] = f"call-{i}"
        call["metaData"]["title"] = f"Call {i}"
        calls.append(call)
    return {
        "requestId": "req-many",
        "records": {
            "totalRecords": 12,
            "currentPageSize": 5,
            "currentPageNumber": 0,
            "cursor": "eyJwYWdlIjoxfQ",
        },
        "calls": calls,
    }


@pytest.fixture
def transcript_payload() -> dict[str, Any]:
    """A /v2/calls/transcript response: speaker A says s1, s2; speaker B says s3."""
    return {
        "requestId": "req-transcript",
        "records": {"totalRecords": 1, "currentPageSize": 1, "currentPageNumber": 0},
        "callTranscripts": [
            {
                "callId": CALL_ID,
                "transcript": [
                    {
                        "speakerId": "A",
                        "topic": "Intro",
                        "sentences": [
                            {"start": 0, "end": 1500, "text": "s1"},
                            {"start": 1500, "end": 3200, "text": "s2"},
                        ],
                    },
                    {
                        "speakerId": "B",
                        "topic": None,
                        "sentences": [{"start": 3200, "end": 5000, "text": "s3"}],
                    },
                ],
            }
        ],
    }


@pytest.fixture
def users_payload() -> dict[str, Any]:
    """A /v2/users response with a continuation cursor."""
    return {
        "requestId": "req-users",
        "records": {
            "totalRecords": 3,
            "currentPageSize": 2,
            "currentPageNumber": 0,
            "cursor": "users-page-2",
        },
        "users": [
            {
                "id": "u1",
                "emailAddress": "ana@gong-customer.com",
                "firstName": "Ana",
                "lastName": "Lopez",
                "active": True,
                "created": "2021-01-10T09:00:00Z",
            },
            {
                "id": 234599484848423,
                "emailAddress": "ben@gong-customer.com",
                "firstName": "Ben",
                "active": False,
            },
        ],
    }


@pytest.fixture
def mock_gong_client(
    calls_page_payload: dict[str, Any],
    transcript_payload: dict[str, Any],
    users_payload: dict[str, Any],
) -> AsyncMock:
    """Gong API client whose operations return the payload fixtures."""
    client = AsyncMock(spec=GongAPIClient)
    client.list_calls.return_value = CallPage.model_validate(calls_page_payload)
    client.get_call_transcripts.return_value = TranscriptSet.model_validate(
        transcript_payload
    )
    client.list_users.return_value = UserPage.model_validate(users_payload)
    return client


@pytest.fixture
def configured_server(gong_config: GongConfig, mock_gong_client: AsyncMock) -> GongMCPServer:
    """Server with credentials and a mocked upstream client."""
    return GongMCPServer(config=gong_config, client=mock_gong_client)


@pytest.fixture
def unconfigured_server() -> GongMCPServer:
    """Server started without credentials."""
    return GongMCPServer(config=None)
