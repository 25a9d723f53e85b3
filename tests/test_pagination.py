"""
Unit Tests for paginate_text

Tests the line-oriented paginator:
- Page boundaries on PAGE_SIZE lines
- Out-of-range sentinel
- Character cap and the at-least-one-line rule
- Page count adjustment when the character cap is hit
"""

import dataclasses

import pytest

from paginate_mcp.config import Config
from paginate_mcp.errors import InvalidArgumentError
from paginate_mcp.pagination import OUT_OF_RANGE_PAGE, PaginationResult, paginate_text
from tests.conftest import create_multi_line_output, generate_exact_page_output

PAGE_SIZE = Config.PAGE_SIZE
MAX_CHARS_PER_PAGE = Config.MAX_CHARS_PER_PAGE

pytestmark = [pytest.mark.unit]


class TestBasicPagination:
    """Line-based page boundaries."""

    def test_short_text_is_single_page(self):
        """Fewer than PAGE_SIZE lines come back whole on page 1."""
        text = create_multi_line_output(100)

        result = paginate_text(text, 1)

        assert result == PaginationResult(content=text, current_page=1, total_pages=1)

    def test_exactly_one_page_of_lines(self):
        text = generate_exact_page_output(1)

        result = paginate_text(text, 1)

        assert len(result.content.split("\n")) == PAGE_SIZE
        assert result.current_page == 1
        assert result.total_pages == 1

    def test_three_pages(self):
        """2100 lines paginate into 3 pages; page 2 starts at Line 701."""
        text = generate_exact_page_output(3)

        first = paginate_text(text, 1)
        second = paginate_text(text, 2)
        last = paginate_text(text, 3)

        assert first.total_pages == 3
        first_lines = first.content.split("\n")
        assert first_lines[0] == "Line 1"
        assert first_lines[-1] == f"Line {PAGE_SIZE}"

        assert second.content.startswith("Line 701\n")
        assert second.current_page == 2
        assert second.total_pages == 3

        last_lines = last.content.split("\n")
        assert last_lines[0] == "Line 1401"
        assert last_lines[-1] == "Line 2100"
        assert len(last_lines) == PAGE_SIZE

    @pytest.mark.parametrize("pages", [1, 2, 4])
    def test_first_line_of_each_page(self, pages):
        """Page i of a k*PAGE_SIZE-line text starts at global line (i-1)*PAGE_SIZE+1."""
        text = generate_exact_page_output(pages)

        for page in range(1, pages + 1):
            result = paginate_text(text, page)
            assert result.total_pages == pages
            assert result.content.split("\n")[0] == f"Line {(page - 1) * PAGE_SIZE + 1}"

    def test_partial_last_page(self):
        text = create_multi_line_output(PAGE_SIZE + 1, "Line")

        result = paginate_text(text, 2)

        assert result.content == f"Line {PAGE_SIZE + 1}"
        assert result.total_pages == 2

    def test_default_page_is_first(self):
        assert paginate_text("alpha\nbeta").content == "alpha\nbeta"

    def test_custom_page_size(self):
        result = paginate_text("a\nb\nc", 2, page_size=2)

        assert result == PaginationResult(content="c", current_page=2, total_pages=2)


class TestOutOfRange:
    """Pages outside [1, total_pages] return the sentinel."""

    @pytest.mark.parametrize("page", [0, -1, -700])
    def test_non_positive_pages(self, page):
        text = generate_exact_page_output(2)

        result = paginate_text(text, page)

        assert result.content == ""
        assert result.current_page == OUT_OF_RANGE_PAGE
        assert result.total_pages == 2
        assert not result.in_range

    def test_page_past_the_end(self):
        text = create_multi_line_output(10)

        result = paginate_text(text, 2)

        assert result == PaginationResult(content="", current_page=0, total_pages=1)

    def test_far_past_the_end(self):
        result = paginate_text(generate_exact_page_output(3), 99)

        assert result.current_page == OUT_OF_RANGE_PAGE
        assert result.total_pages == 3


class TestEdgeCases:
    def test_empty_text(self):
        """Empty text is one empty page, distinguishable from out-of-range by current_page."""
        result = paginate_text("", 1)

        assert result == PaginationResult(content="", current_page=1, total_pages=1)
        assert result.in_range

    def test_single_line_without_newline(self):
        result = paginate_text("Single line", 1)

        assert result.content == "Single line"
        assert result.total_pages == 1

    def test_trailing_newline_is_preserved(self):
        text = "first\nsecond\n"

        assert paginate_text(text, 1).content == text

    def test_windows_line_endings_split_on_newline_only(self):
        text = "one\r\ntwo\r\n"

        assert paginate_text(text, 1).content == text

    def test_result_is_immutable(self):
        result = paginate_text("x", 1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.content = "y"


class TestCharacterLimit:
    """Character cap applied within a page."""

    def test_page_stays_under_limit(self):
        """700 lines of 100 chars are cut to the 297 lines that fit."""
        text = "\n".join("Z" * 100 for _ in range(PAGE_SIZE))

        result = paginate_text(text, 1)

        lines = result.content.split("\n")
        assert len(lines) == 297
        assert len(result.content) <= MAX_CHARS_PER_PAGE
        assert result.total_pages == 1

    def test_stops_before_line_that_would_overflow(self):
        """Each 5000-char line counts 5001 with its newline, so 5 fit and the 6th overflows."""
        line = "Y" * 5000
        text = "\n".join(line for _ in range(10))

        result = paginate_text(text, 1)

        included = result.content.split("\n")
        assert len(included) == 5
        assert len(result.content) <= MAX_CHARS_PER_PAGE

    def test_single_line_over_limit_returned_whole(self):
        """A line longer than the cap is never cut and never dropped."""
        very_long_line = "X" * 35000

        result = paginate_text(very_long_line, 1)

        assert result.content == very_long_line
        assert result.current_page == 1

    def test_first_line_over_limit_ends_page(self):
        text = "X" * 35000 + "\nshort"

        result = paginate_text(text, 1)

        assert result.content == "X" * 35000

    def test_total_pages_raised_when_limit_reached(self):
        """Lines of 2999 chars fill the cap exactly after 10 lines."""
        line = "W" * 2999
        text = "\n".join(line for _ in range(20))

        result = paginate_text(text, 1)

        assert len(result.content.split("\n")) == 10
        assert result.total_pages == 2  # len(text) // 30000 + 1

    def test_total_pages_raised_for_oversized_line(self):
        result = paginate_text("X" * 65000, 1)

        assert result.total_pages == 3

    def test_custom_character_cap(self):
        result = paginate_text("aaaa\nbbbb\ncccc", 1, max_chars=10)

        assert result.content == "aaaa\nbbbb"
        assert result.total_pages == 2

    @pytest.mark.parametrize("overrides", [{"page_size": 0}, {"max_chars": 0}, {"page_size": -5}])
    def test_explicit_non_positive_caps_are_rejected(self, overrides):
        """An explicit 0 is not swapped for the configured default."""
        with pytest.raises(InvalidArgumentError, match="must be > 0"):
            paginate_text("aaaa\nbbbb", 1, **overrides)
