"""Subprocess execution for the linkerd and kubectl CLIs."""

import logging
import subprocess
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, Field

from src.common.errors import CommandError

logger = logging.getLogger(__name__)

# Signature-compatible with subprocess.run; tests swap in a scripted fake
CommandRunner = Callable[..., subprocess.CompletedProcess]


class CommandResult(BaseModel):
    """Captured output of a finished command."""

    command: List[str] = Field(description="Executed argv")
    returncode: int = Field(description="Process exit status")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")


def run_command(
    command: Sequence[str],
    stdin: Optional[str] = None,
    runner: CommandRunner = subprocess.run,
    timeout: Optional[float] = None,
) -> CommandResult:
    """Run a command and capture its output.

    Args:
        command: Full argv, executable first.
        stdin: Optional text piped to the process.
        runner: Callable with the ``subprocess.run`` signature.
        timeout: Seconds before the process is killed; ``None`` waits forever.

    Returns:
        CommandResult for a zero exit status.

    Raises:
        CommandError: If the process cannot be started, times out, or exits
            with a non-zero status.
    """
    argv = [str(part) for part in command]
    logger.debug(f"Running: {' '.join(argv)}")

    try:
        completed = runner(
            argv,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandError(argv, stderr=f"timed out after {e.timeout}s") from e
    except OSError as e:
        raise CommandError(argv, stderr=str(e)) from e

    result = CommandResult(
        command=argv,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )

    if result.returncode != 0:
        logger.warning(f"Command exited with {result.returncode}: {' '.join(argv)}")
        raise CommandError(argv, result.returncode, result.stdout, result.stderr)

    return result
