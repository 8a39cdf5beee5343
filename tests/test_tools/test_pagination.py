"""Tests for the search result limit."""

import pytest

from gong_mcp.models.calls import CallSummary
from gong_mcp.tools.pagination import paginate_calls


def _calls(n: int) -> list[CallSummary]:
    return [CallSummary(id=str(i), title=f"Call {i}") for i in range(n)]


@pytest.mark.unit
class TestPaginateCalls:
    """Tests for paginate_calls."""

    def test_limit_below_total_truncates(self) -> None:
        """Test N=5, L=3 keeps the first three calls."""
        result = paginate_calls(_calls(5), limit=3)

        assert result.count == 3
        assert result.total_available == 5
        assert result.truncated is True
        assert [c.id for c in result.calls] == ["0", "1", "2"]

    def test_limit_above_total(self) -> None:
        """Test N=2, L=5 keeps everything."""
        result = paginate_calls(_calls(2), limit=5)

        assert result.count == 2
        assert result.total_available == 2
        assert result.truncated is False

    def test_limit_equal_to_total(self) -> None:
        """Test a limit equal to the page size does not truncate."""
        result = paginate_calls(_calls(4), limit=4)

        assert result.count == 4
        assert result.truncated is False

    def test_no_limit(self) -> None:
        """Test no limit returns the whole page."""
        result = paginate_calls(_calls(5))

        assert result.count == 5
        assert result.truncated is False

    def test_zero_limit(self) -> None:
        """Test a zero limit returns no calls but reports what was available."""
        result = paginate_calls(_calls(3), limit=0)

        assert result.calls == []
        assert result.count == 0
        assert result.total_available == 3
        assert result.truncated is True

    def test_empty_page(self) -> None:
        """Test an empty page is a successful empty result."""
        result = paginate_calls([], limit=10)

        assert result.count == 0
        assert result.total_available == 0
        assert result.truncated is False
        assert result.has_more is False

    def test_has_more_is_independent_of_truncation(self) -> None:
        """Test the upstream cursor drives has_more, not the limit."""
        result = paginate_calls(_calls(2), next_cursor="cursor-2")

        assert result.truncated is False
        assert result.has_more is True
        assert result.next_cursor == "cursor-2"

    def test_empty_cursor_means_no_more(self) -> None:
        """Test an empty cursor is treated as absent."""
        result = paginate_calls(_calls(2), next_cursor="")

        assert result.has_more is False
        assert result.next_cursor is None

    def test_filters_echo(self) -> None:
        """Test the echoed filters are carried through."""
        result = paginate_calls(_calls(1), filters_echo={"workspace_id": "w1"})

        assert result.filters_echo == {"workspace_id": "w1"}
