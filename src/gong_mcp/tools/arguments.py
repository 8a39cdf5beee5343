"""Argument validation for the ``search_calls`` tool."""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    field_validator,
)

from gong_mcp.models.calls import CallFilter
from gong_mcp.utils.errors import ErrorCode, MCPServerError

SEARCH_CALLS_TOOL = "search_calls"

SEARCH_CALLS_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "from_date_time": {
            "type": ["string", "null"],
            "description": "Only calls started at or after this ISO-8601 date-time (e.g. 2024-01-01T00:00:00Z).",
        },
        "to_date_time": {
            "type": ["string", "null"],
            "description": "Only calls started before this ISO-8601 date-time.",
        },
        "workspace_id": {
            "type": ["string", "null"],
            "description": "Only calls in this Gong workspace.",
        },
        "call_ids": {
            "type": ["array", "null"],
            "items": {"type": "string"},
            "description": "Only these call ids.",
        },
        "primary_user_ids": {
            "type": ["array", "null"],
            "items": {"type": "string"},
            "description": "Only calls hosted by these Gong user ids.",
        },
        "cursor": {
            "type": ["string", "null"],
            "description": "Cursor from a previous result's nextCursor, to fetch the next page.",
        },
        "limit": {
            "type": ["integer", "null"],
            "minimum": 0,
            "description": "Maximum number of calls to return from the page. Returns the whole page if omitted.",
        },
        "include_structure": {
            "type": ["boolean", "null"],
            "description": "Include the call structure (agenda sections). Default: false.",
            "default": False,
        },
    },
    "additionalProperties": False,
}


class SearchCallsArguments(BaseModel):
    """Validated ``search_calls`` arguments.

    Unknown keys are rejected like any other invalid argument.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    from_date_time: StrictStr | None = None
    to_date_time: StrictStr | None = None
    workspace_id: StrictStr | None = None
    call_ids: list[StrictStr] | None = None
    primary_user_ids: list[StrictStr] | None = None
    cursor: StrictStr | None = None
    limit: int | None = Field(None, ge=0)
    include_structure: StrictBool = False

    @field_validator("limit", mode="before")
    @classmethod
    def reject_boolean_limit(cls, v: Any) -> Any:
        """Booleans are not counts."""
        if isinstance(v, bool):
            raise ValueError("limit must be a non-negative integer")
        return v

    @field_validator("include_structure", mode="before")
    @classmethod
    def null_means_default(cls, v: Any) -> Any:
        """Treat an explicit null like an absent key."""
        return False if v is None else v

    def to_filter(self) -> CallFilter:
        """Normalize into the upstream call filter."""
        return CallFilter(
            from_time=self.from_date_time,
            to_time=self.to_date_time,
            workspace_id=self.workspace_id,
            call_ids=self.call_ids,
            primary_user_ids=self.primary_user_ids,
            cursor=self.cursor,
            include_structure=self.include_structure,
        )

    def filters_echo(self) -> dict[str, Any]:
        """Supplied arguments, echoed back in the search result."""
        return self.model_dump(exclude_none=True)


def validate_search_arguments(arguments: dict[str, Any] | None) -> SearchCallsArguments:
    """Type-check and default the ``search_calls`` argument bag.

    Args:
        arguments: Raw tool arguments, possibly None

    Returns:
        Validated arguments

    Raises:
        MCPServerError: INVALID_PARAMS listing every field that failed
    """
    arguments = arguments or {}
    try:
        return SearchCallsArguments.model_validate(arguments)
    except ValidationError as e:
        raise MCPServerError(
            error_code=ErrorCode.INVALID_PARAMS,
            message=f"Invalid arguments for {SEARCH_CALLS_TOOL}",
            details={
                "tool": SEARCH_CALLS_TOOL,
                "errors": [
                    {
                        "field": ".".join(str(p) for p in err["loc"]),
                        "message": err["msg"],
                    }
                    for err in e.errors()
                ],
                "arguments": arguments,
            },
        ) from e
