"""Upstream request builders for the Gong API.

Every builder is pure: it turns a normalized filter into the request body (or
query parameters) the Gong endpoint expects. Fields that are absent in the
filter are omitted from the request.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from gong_mcp.models.calls import CallFilter


class ListCallsParams(BaseModel):
    """Parameters for ``POST /v2/calls/extensive``."""

    model_config = ConfigDict(frozen=True)

    filter: dict[str, Any] = Field(default_factory=dict)
    content_selector: dict[str, Any] = Field(default_factory=dict)
    cursor: str | None = None

    def to_request_body(self) -> dict[str, Any]:
        """Render the JSON body sent to Gong."""
        body: dict[str, Any] = {
            "filter": self.filter,
            "contentSelector": self.content_selector,
        }
        if self.cursor:
            body["cursor"] = self.cursor
        return body


def build_calls_filter(call_filter: CallFilter) -> dict[str, Any]:
    """Build the ``filter`` object of a calls request."""
    fields = {
        "fromDateTime": call_filter.from_time,
        "toDateTime": call_filter.to_time,
        "workspaceId": call_filter.workspace_id,
        "callIds": call_filter.call_ids,
        "primaryUserIds": call_filter.primary_user_ids,
    }
    return {key: value for key, value in fields.items() if value is not None}


def build_content_selector(include_structure: bool) -> dict[str, Any]:
    """Build the ``contentSelector`` object of a calls request.

    Parties are always requested. Structure is the most expensive optional
    content and is only requested on demand. Outcome, highlights and trackers
    are never requested.
    """
    exposed_fields: dict[str, Any] = {"parties": True}
    if include_structure:
        exposed_fields["content"] = {"structure": True}
    return {"exposedFields": exposed_fields}


def build_list_calls_params(call_filter: CallFilter) -> ListCallsParams:
    """Build the parameters of a ``list_calls`` request.

    Args:
        call_filter: Normalized filter

    Returns:
        ListCallsParams ready for the API client
    """
    return ListCallsParams(
        filter=build_calls_filter(call_filter),
        content_selector=build_content_selector(call_filter.include_structure),
        cursor=call_filter.cursor,
    )


def build_transcript_request(call_ids: list[str]) -> dict[str, Any]:
    """Build the body of ``POST /v2/calls/transcript``.

    The filter carries only the call ids: no date range.
    """
    return {"filter": {"callIds": list(call_ids)}}


def build_users_params(cursor: str | None = None) -> dict[str, Any]:
    """Build the query parameters of ``GET /v2/users``."""
    params: dict[str, Any] = {"includeAvatars": "false"}
    if cursor:
        params["cursor"] = cursor
    return params
