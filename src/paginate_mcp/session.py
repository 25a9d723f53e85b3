"""Run and ReadPage operations over an output store and command runner."""

import asyncio
import uuid
from typing import Any, Optional

from loguru import logger

from .commands import CommandRunner, format_command_output
from .config import Config
from .errors import InvalidArgumentError, PageOutOfRangeError
from .pagination import paginate_text
from .store import OutputStore
from .tokens import estimate_tokens

CLEANUP_NOTE = "All pages read. Output has been removed from memory."


def should_paginate(estimated_tokens: int) -> bool:
    """True when output is too large to return inline."""
    return estimated_tokens > Config.MAX_DIRECT_TOKENS


class PagingService:
    """
    Decides inline vs paginated delivery and serves pages on request.

    The store and runner are injected so the server owns their lifetime
    and tests can build isolated instances.
    """

    def __init__(self, store: OutputStore, runner: Optional[CommandRunner] = None):
        self.store = store
        self.runner = runner or CommandRunner()

    async def run_command(
        self,
        command: str,
        working_directory: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> dict[str, Any]:
        """
        Execute a command and return its output inline or as a paginated handle.

        Args:
            command: Shell command to execute
            working_directory: Directory to run in (default: server cwd)
            timeout: Seconds before the command is killed (default: Config.COMMAND_TIMEOUT)

        Returns:
            ``status == "complete"`` response with the full output, or
            ``status == "paginated"`` response carrying an ``output_id``

        Raises:
            InvalidArgumentError: If command is empty
            CommandTimeoutError: If the command exceeded its timeout
            CommandExecutionError: If the command could not be started
        """
        if not command or not command.strip():
            raise InvalidArgumentError("Command is required")

        result = await asyncio.to_thread(
            self.runner.run, command, cwd=working_directory, timeout=timeout
        )

        full_output = format_command_output(result)
        estimated_tokens = estimate_tokens(full_output)

        if not should_paginate(estimated_tokens):
            return {
                "status": "complete",
                "output": full_output,
                "estimated_tokens": estimated_tokens,
                "command": command,
                "return_code": result.return_code,
            }

        output_id = str(uuid.uuid4())
        stored = self.store.put(output_id, command, full_output, result.return_code)
        total_pages = stored.total_pages

        return {
            "status": "paginated",
            "output_id": output_id,
            "message": (
                f"Output too large ({estimated_tokens} estimated tokens). "
                f"Use 'read_output_page' tool to retrieve all {total_pages} pages sequentially."
            ),
            "instruction": (
                f"IMPORTANT: You must paginate through ALL {total_pages} pages using "
                f"read_output_page(output_id='{output_id}', page=N) "
                f"where N goes from 1 to {total_pages}."
            ),
            "command": command,
            "return_code": result.return_code,
            "total_pages": total_pages,
            "total_lines": stored.total_lines,
            "estimated_tokens": estimated_tokens,
        }

    def read_page(self, output_id: str, page: int = 1) -> dict[str, Any]:
        """
        Return one page of a stored output and record it as read.

        The output is evicted by the call that reads its last unread page;
        that response carries ``cleanup_note``.

        Raises:
            InvalidArgumentError: If output_id is missing or page is not an integer
            OutputNotFoundError: If output_id is unknown or already evicted
            PageOutOfRangeError: If page is outside [1, total_pages]
        """
        if not output_id:
            raise InvalidArgumentError("output_id is required")
        if isinstance(page, bool) or not isinstance(page, int):
            raise InvalidArgumentError(f"page must be an integer, got {page!r}")

        stored = self.store.get(output_id)
        result = paginate_text(stored.full_output, page)

        # Empty content alone is ambiguous: page 1 of empty output is a real page.
        if not result.in_range:
            logger.warning(f"Output {output_id}: page {page} out of range (total={stored.total_pages})")
            raise PageOutOfRangeError(page, stored.total_pages)

        read = self.store.record_page_read(output_id, page)

        response: dict[str, Any] = {
            "output_id": output_id,
            "command": stored.command,
            "page": result.current_page,
            "total_pages": stored.total_pages,
            "pages_read": read.pages_read,
            "all_pages_read": read.all_pages_read,
            "content": result.content,
            "has_next": result.current_page < stored.total_pages,
            "has_previous": result.current_page > 1,
        }
        if read.all_pages_read:
            response["cleanup_note"] = CLEANUP_NOTE

        return response
