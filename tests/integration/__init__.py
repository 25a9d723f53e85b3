"""Integration tests for paginate-mcp.

These tests spawn real shell commands through CommandRunner.

Test Organization:
- test_paging_flow.py: Run -> ReadPage -> eviction with live subprocesses
"""
