"""Data models for stored command output."""

from dataclasses import dataclass, field

from ..pagination import paginate_text, split_lines
from ..tokens import estimate_tokens


@dataclass(frozen=True)
class StoredOutput:
    """
    Full formatted output of one command, kept until every page is read.

    Invariants:
    - total_pages >= 1 (even empty output occupies one page)
    - total_lines >= 1
    - fields never change after creation
    """

    command: str
    full_output: str
    return_code: int
    estimated_tokens: int
    total_lines: int
    total_pages: int

    @classmethod
    def create(cls, command: str, full_output: str, return_code: int) -> "StoredOutput":
        """
        Create a StoredOutput, deriving the size metadata from the text.

        ``total_pages`` comes from paginating page 1, so it includes the
        upward adjustment made when the character cap is hit.
        """
        return cls(
            command=command,
            full_output=full_output,
            return_code=return_code,
            estimated_tokens=estimate_tokens(full_output),
            total_lines=len(split_lines(full_output)),
            total_pages=paginate_text(full_output, 1).total_pages,
        )


@dataclass(frozen=True)
class PageRead:
    """Read-tracking snapshot taken right after a page was marked read."""

    pages_read: list[int] = field(default_factory=list)
    all_pages_read: bool = False
