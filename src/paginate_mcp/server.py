"""FastMCP server exposing paginated command execution."""

import json
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastmcp import FastMCP
from loguru import logger

from .config import Config
from .session import PagingService
from .store import OutputStore

RUN_TOOL_DESCRIPTION = (
    "Execute a shell command and capture its output. Returns full output if "
    "under {threshold:,} estimated tokens, otherwise stores it and returns an "
    "ID for pagination."
)
READ_TOOL_DESCRIPTION = (
    "Retrieve a specific page of stored command output using the output ID"
)


def create_server(service: Optional[PagingService] = None) -> FastMCP:
    """
    Build the FastMCP server around a paging service.

    Args:
        service: Service to expose (default: new service over a fresh store)

    Returns:
        FastMCP instance with run_paginated_cmd and read_output_page registered
    """
    if service is None:
        service = PagingService(OutputStore())

    @asynccontextmanager
    async def lifespan(app):
        logger.info(f"Starting {Config.SERVER_NAME} server...")
        logger.info(
            f"Pagination: threshold={Config.MAX_DIRECT_TOKENS} tokens, "
            f"page_size={Config.PAGE_SIZE} lines, "
            f"max_chars_per_page={Config.MAX_CHARS_PER_PAGE}"
        )

        yield  # Server runs here

        discarded = service.store.clear()
        if discarded:
            logger.warning(f"Discarded {discarded} partially read output(s) on shutdown")
        logger.info(f"{Config.SERVER_NAME} shutting down...")

    mcp = FastMCP(name=Config.SERVER_NAME, lifespan=lifespan)

    @mcp.tool(
        name="run_paginated_cmd",
        description=RUN_TOOL_DESCRIPTION.format(threshold=Config.MAX_DIRECT_TOKENS),
    )
    async def run_paginated_cmd(
        command: str,
        working_directory: Optional[str] = None,
        timeout: int = Config.COMMAND_TIMEOUT,
    ) -> str:
        """
        Args:
            command: The shell command to execute
            working_directory: Optional working directory for command execution
            timeout: Optional timeout in seconds (default: Config.COMMAND_TIMEOUT)
        """
        response = await service.run_command(command, working_directory, timeout)
        return json.dumps(response, indent=2)

    @mcp.tool(name="read_output_page", description=READ_TOOL_DESCRIPTION)
    def read_output_page(output_id: str, page: int = 1) -> str:
        """
        Args:
            output_id: The ID of the stored output
            page: Page number to retrieve (1-indexed)
        """
        response = service.read_page(output_id, page)
        return json.dumps(response, indent=2)

    return mcp


def configure_logging() -> None:
    """Send loguru output to stderr (stdout belongs to the stdio transport)."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> | <level>{message}</level>",
        level=Config.LOG_LEVEL,
    )

    if Config.LOG_FILE:
        logger.add(
            Config.LOG_FILE,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            level="DEBUG",
        )


def main():
    """
    Main entry point for the paginate-mcp server.

    Configures loguru, validates Config and runs the server on
    Config.TRANSPORT (stdio by default).
    """
    configure_logging()

    try:
        Config.validate()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    mcp = create_server()

    try:
        if Config.TRANSPORT == "stdio":
            mcp.run(transport="stdio")
        else:
            mcp.run(transport=Config.TRANSPORT, host=Config.HOST, port=Config.PORT)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
