"""Client-side limiting of one upstream page of calls."""

from typing import Any

from gong_mcp.models.calls import CallSummary, SearchResult


def paginate_calls(
    calls: list[CallSummary],
    limit: int | None = None,
    next_cursor: str | None = None,
    filters_echo: dict[str, Any] | None = None,
) -> SearchResult:
    """Apply an optional result limit to one page of calls.

    ``truncated`` only describes the client-side limit. ``has_more`` only
    describes whether the upstream page has a continuation cursor; the two are
    independent.

    Args:
        calls: Every call of the upstream page, in upstream order
        limit: Maximum number of calls to return, or None for no limit
        next_cursor: Continuation cursor reported by the upstream page
        filters_echo: Validated arguments to echo back

    Returns:
        SearchResult for the page
    """
    total_available = len(calls)
    truncated = limit is not None and limit < total_available
    kept = calls[:limit] if truncated else list(calls)

    return SearchResult(
        calls=kept,
        count=len(kept),
        total_available=total_available,
        truncated=truncated,
        next_cursor=next_cursor or None,
        has_more=bool(next_cursor),
        filters_echo=filters_echo or {},
    )
