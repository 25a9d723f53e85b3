"""
Entry point for running paginate_mcp as a module.

Allows running the server via:
    python -m paginate_mcp
    uv run python -m paginate_mcp
"""

from paginate_mcp.server import main

if __name__ == "__main__":
    main()
