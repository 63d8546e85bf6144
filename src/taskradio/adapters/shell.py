"""
Shell execution helper.

Thin wrapper around subprocess used for the few places that talk to the
git and gh command-line tools. Callers decide what a non-zero exit means.
"""

import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger("Shell")


@dataclass(frozen=True)
class ShellResult:
    """Captured output of one command."""

    stdout: str
    stderr: str
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


ShellRunner = Callable[[str], ShellResult]


def shx(command: str | Sequence[str], cwd: Path | None = None) -> ShellResult:
    """
    Run a command and capture its output.

    Args:
        command: A shell string, or an argv list run without a shell
        cwd: Working directory (defaults to the current one)

    Returns:
        ShellResult with stripped stdout/stderr. A missing executable is
        reported as returncode 127 rather than raised.
    """
    use_shell = isinstance(command, str)
    logger.debug(f"Running: {command if use_shell else ' '.join(command)}")

    try:
        completed = subprocess.run(
            command,
            shell=use_shell,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        return ShellResult(stdout="", stderr=str(e), returncode=127)

    return ShellResult(
        stdout=completed.stdout.strip(),
        stderr=completed.stderr.strip(),
        returncode=completed.returncode,
    )
