"""Foreground execution of saved commands."""

from __future__ import annotations

import logging
import shlex
import subprocess
import time

from cmd_keeper.storage.models import ExecutionResult

logger = logging.getLogger(__name__)

EMPTY_COMMAND = "Empty command"


def tokenize(command: str) -> list[str]:
    """Shell-style word splitting. No globbing, pipes or variable expansion."""
    return shlex.split(command)


class ShellRunner:
    """Run a command with the caller's stdin/stdout/stderr and wait for it."""

    def execute(self, command: str) -> ExecutionResult:
        try:
            args = tokenize(command)
        except ValueError as e:
            return ExecutionResult(exit_code=-1, launched=False, reason=f"Invalid command: {e}")

        if not args:
            return ExecutionResult(exit_code=-1, launched=False, reason=EMPTY_COMMAND)

        logger.info("Running: %s", args)
        start = time.monotonic()
        try:
            proc = subprocess.run(args)
        except FileNotFoundError:
            logger.warning("Command not found: %s", args[0])
            return ExecutionResult(exit_code=-1, launched=False, reason=f"Command not found: {args[0]}")
        except PermissionError:
            logger.warning("Permission denied: %s", args[0])
            return ExecutionResult(exit_code=-1, launched=False, reason=f"Permission denied: {args[0]}")
        except OSError as e:
            logger.warning("Failed to start %s: %s", args[0], e)
            return ExecutionResult(exit_code=-1, launched=False, reason=f"Failed to start {args[0]}: {e}")

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info("Exited with code %d after %dms", proc.returncode, elapsed_ms)
        return ExecutionResult(exit_code=proc.returncode, execution_time_ms=elapsed_ms)
