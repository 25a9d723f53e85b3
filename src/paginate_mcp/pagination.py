"""Line-oriented pagination with a hard per-page character cap.

Pages are cut every ``PAGE_SIZE`` lines. Inside a page, lines are added
until the next one would push the page past ``MAX_CHARS_PER_PAGE``; the
first line of a page is always included, even when it alone exceeds the
cap, so a single huge line can still be read.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .config import Config
from .errors import InvalidArgumentError

# current_page value reported for pages outside [1, total_pages]
OUT_OF_RANGE_PAGE = 0


@dataclass(frozen=True)
class PaginationResult:
    """One page of text plus the pagination metadata for it."""

    content: str
    current_page: int
    total_pages: int

    @property
    def in_range(self) -> bool:
        return self.current_page != OUT_OF_RANGE_PAGE


def split_lines(text: str) -> list[str]:
    """Split on newline only. An empty string is one empty line."""
    return text.split("\n")


def _limit_characters(lines: list[str], max_chars: int) -> tuple[list[str], int]:
    included: list[str] = []
    char_count = 0

    for line in lines:
        line_length = len(line) + 1  # newline joining it to the next line
        if included and char_count + line_length > max_chars:
            break
        included.append(line)
        char_count += line_length

    return included, char_count


def paginate_text(
    text: str,
    page: int = 1,
    *,
    page_size: Optional[int] = None,
    max_chars: Optional[int] = None,
) -> PaginationResult:
    """
    Return the requested 1-indexed page of ``text``.

    Args:
        text: Full text to paginate
        page: Page number (1-indexed)
        page_size: Lines per page (default: Config.PAGE_SIZE)
        max_chars: Character cap per page (default: Config.MAX_CHARS_PER_PAGE)

    Returns:
        PaginationResult. Pages below 1 or past the last page come back with
        empty content and ``current_page == OUT_OF_RANGE_PAGE``.

    Raises:
        InvalidArgumentError: If page_size or max_chars is not positive

    Examples:
        >>> paginate_text("", 1)
        PaginationResult(content='', current_page=1, total_pages=1)
    """
    page_size = Config.PAGE_SIZE if page_size is None else page_size
    max_chars = Config.MAX_CHARS_PER_PAGE if max_chars is None else max_chars
    if page_size <= 0 or max_chars <= 0:
        raise InvalidArgumentError(
            f"page_size and max_chars must be > 0, got {page_size} and {max_chars}"
        )

    lines = split_lines(text)
    total_lines = len(lines)
    total_pages = math.ceil(total_lines / page_size)

    start = (page - 1) * page_size
    end = min(start + page_size, total_lines)

    if page < 1 or start >= total_lines:
        return PaginationResult("", OUT_OF_RANGE_PAGE, total_pages)

    included, char_count = _limit_characters(lines[start:end], max_chars)
    content = "\n".join(included)

    if char_count >= max_chars:
        # Character-bound pages hold fewer lines than page_size, so the
        # line-based page count underestimates.
        total_pages = max(total_pages, len(text) // max_chars + 1)

    return PaginationResult(content, page, total_pages)
