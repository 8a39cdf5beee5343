"""Resource URI routing for the ``gong://`` scheme.

Grammar, checked in this order:

    gong://status                       -> STATUS
    gong://users                        -> USER_LIST
    gong://calls/{id}/transcript        -> TRANSCRIPT
    gong://calls/{id}/participants      -> PARTICIPANTS
    gong://calls/{id}                   -> CALL_DETAIL
    anything else                       -> UNRECOGNIZED

Matching works on ``/``-separated path segments, so an id that merely ends
with ``participants`` is still a call id.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from gong_mcp.utils.errors import ErrorCode, MCPServerError

STATUS_URI = "gong://status"
USERS_URI = "gong://users"
CALLS_PREFIX = "gong://calls/"

TRANSCRIPT_SEGMENT = "transcript"
PARTICIPANTS_SEGMENT = "participants"


class RouteKind(Enum):
    """Closed set of resource routes."""

    STATUS = "status"
    USER_LIST = "user_list"
    CALL_DETAIL = "call_detail"
    PARTICIPANTS = "participants"
    TRANSCRIPT = "transcript"
    UNRECOGNIZED = "unrecognized"


SUB_RESOURCES: dict[str, RouteKind] = {
    TRANSCRIPT_SEGMENT: RouteKind.TRANSCRIPT,
    PARTICIPANTS_SEGMENT: RouteKind.PARTICIPANTS,
}


class Route(BaseModel):
    """Outcome of routing one URI."""

    model_config = ConfigDict(frozen=True)

    kind: RouteKind
    uri: str
    call_id: str | None = None


def _missing_identifier(uri: str) -> MCPServerError:
    return MCPServerError(
        error_code=ErrorCode.INVALID_PARAMS,
        message="Call ID cannot be empty",
        details={
            "uri": uri,
            "reason": "missing_call_id",
            "expected_format": "gong://calls/{callId}[/participants|/transcript]",
        },
    )


def _route_call(uri: str) -> Route:
    segments = uri[len(CALLS_PREFIX):].split("/")

    if len(segments) == 1:
        (call_id,) = segments
        if not call_id or call_id in SUB_RESOURCES:
            raise _missing_identifier(uri)
        return Route(kind=RouteKind.CALL_DETAIL, uri=uri, call_id=call_id)

    if len(segments) == 2 and segments[1] in SUB_RESOURCES:
        call_id = segments[0]
        if not call_id:
            raise _missing_identifier(uri)
        return Route(kind=SUB_RESOURCES[segments[1]], uri=uri, call_id=call_id)

    return Route(kind=RouteKind.UNRECOGNIZED, uri=uri)


def route_uri(uri: str) -> Route:
    """Classify a resource URI.

    Args:
        uri: Resource URI as received from the client

    Returns:
        Route carrying the route kind and, for call routes, the call id

    Raises:
        MCPServerError: INVALID_PARAMS if a call route has an empty call id
    """
    if uri == STATUS_URI:
        return Route(kind=RouteKind.STATUS, uri=uri)
    if uri == USERS_URI:
        return Route(kind=RouteKind.USER_LIST, uri=uri)
    if uri.startswith(CALLS_PREFIX):
        return _route_call(uri)
    return Route(kind=RouteKind.UNRECOGNIZED, uri=uri)
