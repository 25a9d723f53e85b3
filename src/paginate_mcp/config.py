"""Centralized configuration for the paginate-mcp server."""

import os
from typing import Optional


class Config:
    """
    Paginate MCP configuration with environment variable overrides.

    Every threshold used by the pagination engine lives here so that the
    tool descriptions, the store and the paginator agree on one value.
    """

    @staticmethod
    def _parse_port(port_str: str) -> int:
        """Parse and validate port number from string."""
        try:
            port = int(port_str)
            if not (1 <= port <= 65535):
                raise ValueError(f"Port must be 1-65535, got {port}")
            return port
        except ValueError as e:
            raise ValueError(f"Invalid PORT environment variable: {e}")

    # ========================================================================
    # Server Configuration
    # ========================================================================
    SERVER_NAME: str = "paginate-mcp"
    TRANSPORT: str = os.getenv("PAGINATE_MCP_TRANSPORT", "stdio")
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = _parse_port.__func__(os.getenv("PORT", "8001"))

    # ========================================================================
    # Pagination
    # ========================================================================
    PAGE_SIZE: int = int(os.getenv("PAGINATE_PAGE_SIZE", "700"))  # lines per page
    MAX_CHARS_PER_PAGE: int = int(os.getenv("PAGINATE_MAX_CHARS_PER_PAGE", "30000"))

    # ========================================================================
    # Token Estimation
    # ========================================================================
    TOKEN_ESTIMATE_RATIO: float = float(os.getenv("PAGINATE_TOKEN_RATIO", "0.25"))
    # Outputs estimated above this many tokens are stored and paginated
    MAX_DIRECT_TOKENS: int = int(os.getenv("PAGINATE_MAX_DIRECT_TOKENS", "5000"))

    # ========================================================================
    # Command Execution
    # ========================================================================
    COMMAND_TIMEOUT: int = int(os.getenv("PAGINATE_COMMAND_TIMEOUT", "30"))  # seconds

    # ========================================================================
    # Logging
    # ========================================================================
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = os.getenv("PAGINATE_LOG_FILE") or None

    VALID_TRANSPORTS = ("stdio", "sse", "http", "streamable-http")

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration consistency.

        Checks:
        - All size and time limits are > 0
        - TOKEN_ESTIMATE_RATIO is within (0, 1]
        - TRANSPORT is one FastMCP understands

        Returns:
            True if validation passes

        Raises:
            ValueError: If validation fails
        """
        errors = []

        for name in ("PAGE_SIZE", "MAX_CHARS_PER_PAGE", "MAX_DIRECT_TOKENS", "COMMAND_TIMEOUT"):
            value = getattr(cls, name)
            if value <= 0:
                errors.append(f"{name} must be > 0, got {value}")

        if not (0 < cls.TOKEN_ESTIMATE_RATIO <= 1):
            errors.append(
                f"TOKEN_ESTIMATE_RATIO must be in (0, 1], got {cls.TOKEN_ESTIMATE_RATIO}"
            )

        if cls.TRANSPORT not in cls.VALID_TRANSPORTS:
            errors.append(
                f"TRANSPORT must be one of {', '.join(cls.VALID_TRANSPORTS)}, got '{cls.TRANSPORT}'"
            )

        if errors:
            raise ValueError(f"Config validation failed: {'; '.join(errors)}")

        return True
