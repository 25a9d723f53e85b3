"""Test suite for paginate-mcp."""
