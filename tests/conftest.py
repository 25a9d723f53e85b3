"""Pytest fixtures and test utilities for the paginate-mcp test suite."""

import sys
from unittest.mock import Mock

import pytest

from paginate_mcp.commands import CommandResult, CommandRunner
from paginate_mcp.session import PagingService
from paginate_mcp.store import OutputStore


# ============================================================================
# TEXT GENERATORS
# ============================================================================


def generate_exact_page_output(pages: int, page_size: int = 700) -> str:
    """Text of exactly ``pages * page_size`` lines: 'Line 1' .. 'Line N'."""
    return "\n".join(f"Line {i}" for i in range(1, pages * page_size + 1))


def create_multi_line_output(line_count: int, line_content: str = "Test line") -> str:
    """Text of ``line_count`` numbered lines."""
    return "\n".join(f"{line_content} {i}" for i in range(1, line_count + 1))


def python_command(code: str) -> str:
    """Shell command running ``code`` with the current interpreter."""
    return f'"{sys.executable}" -c "{code}"'


# ============================================================================
# STORE / SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def store():
    """Fresh, empty output store."""
    return OutputStore()


@pytest.fixture
def fake_runner():
    """
    CommandRunner stand-in that returns a canned CommandResult.

    Tests set ``fake_runner.result`` (or ``fake_runner.run.side_effect``)
    before calling the service.
    """
    runner = Mock(spec=CommandRunner)

    def set_result(stdout: str = "", stderr: str = "", return_code: int = 0):
        runner.run.return_value = CommandResult(
            command="test",
            cwd="/tmp",
            stdout=stdout,
            stderr=stderr,
            return_code=return_code,
        )

    runner.set_result = set_result
    set_result()
    return runner


@pytest.fixture
def service(store, fake_runner):
    """PagingService over a fresh store and the fake runner."""
    return PagingService(store, fake_runner)
