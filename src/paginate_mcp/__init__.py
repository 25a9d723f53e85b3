"""Paginate MCP - run shell commands and page through large output."""

__version__ = "1.0.0"

from .pagination import PaginationResult, paginate_text
from .session import PagingService
from .store import OutputStore, StoredOutput
from .tokens import estimate_tokens

__all__ = [
    "OutputStore",
    "PaginationResult",
    "PagingService",
    "StoredOutput",
    "__version__",
    "estimate_tokens",
    "paginate_text",
]
