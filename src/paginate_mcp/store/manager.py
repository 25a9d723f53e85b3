"""In-memory output store with read tracking and eviction."""

import threading

from loguru import logger

from ..errors import (
    DuplicateOutputError,
    InvalidArgumentError,
    OutputNotFoundError,
    PageOutOfRangeError,
)
from .models import PageRead, StoredOutput


class OutputStore:
    """
    Process-lifetime store of paginated command output.

    Features:
    - Keyed by opaque output IDs minted by the caller
    - Tracks which pages of each output have been delivered
    - Evicts an output as soon as its last unread page is recorded

    Eviction is the only deletion path; nothing expires on a timer and
    nothing survives a restart.

    Thread safety:
    - All table access happens under one lock
    - record_page_read() marks, snapshots and evicts in a single critical
      section, so only one caller can observe the read that completes an
      output
    """

    def __init__(self):
        """Initialize empty output and read-set tables."""
        self._outputs: dict[str, StoredOutput] = {}
        self._pages_read: dict[str, set[int]] = {}
        self._lock = threading.Lock()

    def __contains__(self, output_id: str) -> bool:
        with self._lock:
            return output_id in self._outputs

    def __len__(self) -> int:
        with self._lock:
            return len(self._outputs)

    def put(
        self, output_id: str, command: str, full_output: str, return_code: int
    ) -> StoredOutput:
        """
        Store a command's formatted output with an empty read-set.

        Args:
            output_id: Fresh identifier (must not already be stored)
            command: Command that produced the output
            full_output: Formatted STDOUT/STDERR/return-code block
            return_code: Process exit status

        Returns:
            The StoredOutput that was inserted

        Raises:
            InvalidArgumentError: If output_id is empty
            DuplicateOutputError: If output_id is already stored
        """
        if not output_id:
            raise InvalidArgumentError("output_id is required")

        stored = StoredOutput.create(command, full_output, return_code)

        with self._lock:
            if output_id in self._outputs:
                raise DuplicateOutputError(output_id)
            self._outputs[output_id] = stored
            self._pages_read[output_id] = set()

        logger.info(
            f"Stored output {output_id} "
            f"(pages={stored.total_pages}, lines={stored.total_lines}, "
            f"tokens~{stored.estimated_tokens})"
        )
        return stored

    def get(self, output_id: str) -> StoredOutput:
        """
        Return the stored output for an ID.

        Raises:
            OutputNotFoundError: If the ID was never stored or was evicted
        """
        with self._lock:
            return self._get_locked(output_id)

    def mark_read(self, output_id: str, page: int) -> None:
        """
        Add a page to the read-set. Marking a page twice is a no-op.

        Raises:
            OutputNotFoundError: If the ID is unknown or already evicted
            PageOutOfRangeError: If page is outside [1, total_pages]
        """
        with self._lock:
            self._get_page_locked(output_id, page)
            self._pages_read[output_id].add(page)

    def is_complete(self, output_id: str) -> bool:
        """True once every page of the output has been read."""
        with self._lock:
            return self._is_complete_locked(output_id)

    def read_pages(self, output_id: str) -> list[int]:
        """Ascending snapshot of the pages read so far."""
        with self._lock:
            self._get_locked(output_id)
            return sorted(self._pages_read[output_id])

    def evict(self, output_id: str) -> None:
        """Remove an output and its read-set together."""
        with self._lock:
            self._evict_locked(output_id)

    def record_page_read(self, output_id: str, page: int) -> PageRead:
        """
        Mark a page read and evict the output if that completed it.

        Args:
            output_id: Stored output ID
            page: Page that was just delivered

        Returns:
            PageRead snapshot taken before any eviction

        Raises:
            OutputNotFoundError: If the ID is unknown or already evicted
            PageOutOfRangeError: If page is outside [1, total_pages]
        """
        with self._lock:
            self._get_page_locked(output_id, page)
            self._pages_read[output_id].add(page)
            snapshot = PageRead(
                pages_read=sorted(self._pages_read[output_id]),
                all_pages_read=self._is_complete_locked(output_id),
            )
            logger.debug(f"Output {output_id}: page {page} read, pages_read={snapshot.pages_read}")
            if snapshot.all_pages_read:
                self._evict_locked(output_id)
            return snapshot

    def clear(self) -> int:
        """
        Drop every stored output.

        Returns:
            Number of outputs discarded
        """
        with self._lock:
            count = len(self._outputs)
            self._outputs.clear()
            self._pages_read.clear()
        return count

    def _get_locked(self, output_id: str) -> StoredOutput:
        stored = self._outputs.get(output_id)
        if stored is None:
            raise OutputNotFoundError(output_id)
        return stored

    def _get_page_locked(self, output_id: str, page: int) -> StoredOutput:
        # Completion compares set size to total_pages, so only real pages may enter the set.
        stored = self._get_locked(output_id)
        if not 1 <= page <= stored.total_pages:
            raise PageOutOfRangeError(page, stored.total_pages)
        return stored

    def _is_complete_locked(self, output_id: str) -> bool:
        stored = self._get_locked(output_id)
        return len(self._pages_read[output_id]) == stored.total_pages

    def _evict_locked(self, output_id: str) -> None:
        if self._outputs.pop(output_id, None) is None:
            logger.debug(f"Evict skipped, output {output_id} not stored")
            return
        self._pages_read.pop(output_id, None)
        logger.info(f"Evicted output {output_id}")
