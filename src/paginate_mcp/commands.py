"""Shell command execution with timeout enforcement."""

from __future__ import annotations

import os
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .config import Config
from .errors import CommandExecutionError, CommandTimeoutError, InvalidArgumentError


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a command that ran to completion."""

    command: str
    cwd: str
    stdout: str
    stderr: str
    return_code: int


class CommandRunner:
    """Execute shell commands and capture their output."""

    def __init__(self, *, timeout_seconds: float | None = None) -> None:
        self._timeout_seconds = (
            Config.COMMAND_TIMEOUT if timeout_seconds is None else timeout_seconds
        )

    def run(
        self,
        command: str,
        *,
        cwd: str | Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """
        Run a command through the shell and wait for it to finish.

        A non-zero exit status is a normal result. Only a timeout or a
        failure to start the process raises.

        Raises:
            InvalidArgumentError: Empty command, bad cwd or non-positive timeout
            CommandTimeoutError: Command exceeded its timeout (process group killed)
            CommandExecutionError: Process could not be started
        """
        if not command or not command.strip():
            raise InvalidArgumentError("Command is required")

        timeout = self._timeout_seconds if timeout is None else timeout
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise InvalidArgumentError(f"timeout must be a number, got {timeout!r}")
        if timeout <= 0:
            raise InvalidArgumentError(f"timeout must be > 0, got {timeout}")

        work_dir = self._resolve_cwd(cwd)
        logger.info(f"Running command (timeout={timeout}s, cwd={work_dir}): {command}")

        try:
            process = subprocess.Popen(
                command,
                shell=True,
                cwd=work_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                start_new_session=True,
            )
        except OSError as exc:
            raise CommandExecutionError(f"Failed to execute command: {exc}") from exc

        try:
            stdout, stderr = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired as exc:
            _kill_process_group(process)
            logger.warning(f"Command timed out after {timeout}s | command={command}")
            raise CommandTimeoutError(command, timeout) from exc

        logger.debug(f"Command finished with exit code {process.returncode}: {command}")
        return CommandResult(
            command=command,
            cwd=work_dir,
            stdout=stdout or "",
            stderr=stderr or "",
            return_code=process.returncode,
        )

    @staticmethod
    def _resolve_cwd(cwd: str | Path | None) -> str:
        if cwd is None:
            return os.getcwd()
        work_dir = Path(cwd).expanduser()
        if not work_dir.exists():
            raise InvalidArgumentError(f"Working directory not found: {cwd}")
        if not work_dir.is_dir():
            raise InvalidArgumentError(f"Working directory is not a directory: {cwd}")
        return str(work_dir.resolve())


def _kill_process_group(process: subprocess.Popen) -> None:
    # The shell runs as a session leader, so its pid is the group id.
    if hasattr(os, "killpg"):
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except OSError as exc:
            logger.debug(f"Could not kill process group {process.pid}: {exc}")
            process.kill()
    else:
        process.kill()
    process.communicate()


def format_command_output(result: CommandResult) -> str:
    """Format captured output as the STDOUT / STDERR / return code block."""
    return (
        f"=== STDOUT ===\n{result.stdout}\n\n"
        f"=== STDERR ===\n{result.stderr}\n\n"
        f"=== Return Code: {result.return_code} ==="
    )
