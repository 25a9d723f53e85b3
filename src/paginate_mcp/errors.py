"""Error taxonomy surfaced to MCP callers as tool errors."""

from fastmcp.exceptions import ToolError


class PaginateError(ToolError):
    """Base class for every error raised by the pagination server."""


class InvalidArgumentError(PaginateError):
    """A required input is missing or malformed. No state was mutated."""


class OutputNotFoundError(PaginateError):
    """The output ID was never stored or has already been evicted."""

    def __init__(self, output_id: str):
        self.output_id = output_id
        super().__init__(
            f"Output ID '{output_id}' not found. It may have expired or been invalid."
        )


class DuplicateOutputError(PaginateError):
    """An output ID was stored twice."""

    def __init__(self, output_id: str):
        self.output_id = output_id
        super().__init__(f"Output ID '{output_id}' is already stored")


class PageOutOfRangeError(PaginateError):
    """Requested page lies outside ``[1, total_pages]``."""

    def __init__(self, page: int, total_pages: int):
        self.page = page
        self.total_pages = total_pages
        super().__init__(f"Page {page} does not exist. Total pages: {total_pages}")


class CommandTimeoutError(PaginateError):
    """The command did not finish before its timeout and was killed."""

    def __init__(self, command: str, timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(f"Command timed out after {timeout} seconds: {command}")


class CommandExecutionError(PaginateError):
    """The command could not be started at all."""
