"""Output store

In-memory storage of paginated command output with per-page read tracking.
"""

from .manager import OutputStore
from .models import PageRead, StoredOutput

__all__ = ["OutputStore", "PageRead", "StoredOutput"]
