"""
Output - Console output formatting.

Provides pretty-printed output with colors and formatting.
"""

import json
import sys

from taskradio.application.radio.pull import PullResult
from taskradio.application.radio.push import PushOutcome, PushResult
from taskradio.core.domain.entities import Task
from taskradio.core.exceptions import (
    ClaimConflictError,
    CredentialError,
    InvalidTransitionError,
    RadioError,
    TaskNotFoundError,
    ValidationError,
)


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


class Symbols:
    """Unicode symbols for terminal output."""

    CHECK = "✓"
    CROSS = "✗"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"


# Short remarks shown under an error, keyed by error kind
ERROR_HINTS: dict[type, str] = {
    ValidationError: "check the required flags (--title, --description, --repo)",
    TaskNotFoundError: "list tasks with `taskradio pull --all` to find the right --exid",
    ClaimConflictError: "switch to the claiming branch, or pick another task",
    InvalidTransitionError: "tasks move QUEUED -> CLAIMED -> DELIVERED, never back",
    CredentialError: "pass --auth as-robot:env(VAR), --auth as-robot:shx(cmd), or --auth as-human",
}


class Console:
    """
    Console output helper with colors and formatting.

    Attributes:
        color: Whether to use ANSI color codes.
        verbose: Whether to print debug messages.
        quiet: Whether to suppress most output (for CI/scripting).
        json_mode: Whether to output JSON format for programmatic use.
    """

    def __init__(
        self,
        color: bool = True,
        verbose: bool = False,
        quiet: bool = False,
        json_mode: bool = False,
    ):
        """
        Initialize the console output helper.

        Args:
            color: Enable colored output. Automatically disabled if stdout is not a TTY.
            verbose: Enable verbose debug output.
            quiet: Suppress most output, only show errors and final summary.
            json_mode: Output JSON format instead of text.
        """
        self.json_mode = json_mode
        self.color = color and sys.stdout.isatty() and not json_mode
        self.verbose = verbose
        self.quiet = quiet or json_mode

        if self.quiet:
            self.verbose = False

    def _c(self, text: str, *codes: str) -> str:
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "", force: bool = False) -> None:
        """
        Print text to stdout.

        Args:
            text: Text to print. Defaults to empty string for blank line.
            force: Print even in quiet mode.
        """
        if self.quiet and not force:
            return
        print(text)

    def success(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        """Print an error message. Always printed, to stderr."""
        print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED), file=sys.stderr)

    def error_rich(self, exc: BaseException) -> None:
        """
        Print an error with a short hint for its kind.

        Always prints, even in quiet mode.
        """
        if self.json_mode:
            payload = {"error": type(exc).__name__, "message": str(exc)}
            print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
            return

        self.error(str(exc))
        if not isinstance(exc, RadioError):
            return
        for kind, hint in ERROR_HINTS.items():
            if isinstance(exc, kind):
                print(self._c(f"    {hint}", Colors.DIM), file=sys.stderr)
                break

    def config_errors(self, errors: list[str]) -> None:
        self.error("Configuration errors:")
        for error in errors:
            print(self._c(f"    {Symbols.DOT} {error}", Colors.RED), file=sys.stderr)

    def warning(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"    {text}", Colors.DIM))

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """
        Print a formatted table with headers.

        Automatically calculates column widths based on content.
        """
        if self.quiet:
            return
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD) for i, h in enumerate(headers)
        )
        self.print(header_line)
        self.print("  " + "  ".join("-" * w for w in widths))

        for row in rows:
            row_line = "  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            self.print(row_line)

    # -------------------------------------------------------------------------
    # Task rendering
    # -------------------------------------------------------------------------

    def json(self, payload: object) -> None:
        """Print a JSON document (used in json_mode)."""
        print(json.dumps(payload, ensure_ascii=False, indent=2))

    def task_detail(self, task: Task) -> None:
        """Print every field of one task."""
        if self.quiet:
            return
        self.print(self._c(f"  {task.status.emoji} {task.title}", Colors.BOLD))
        self.detail(f"exid:      {task.exid}")
        self.detail(f"repo:      {task.repo}")
        self.detail(f"status:    {task.status.value}")
        self.detail(f"pushed:    {task.pushed_at.isoformat()} by {task.pushed_by}")
        if task.claimed_by:
            claimed_at = task.claimed_at.isoformat() if task.claimed_at else "?"
            self.detail(f"claimed:   {claimed_at} by {task.claimed_by} on {task.branch}")
        if task.delivered_at:
            self.detail(f"delivered: {task.delivered_at.isoformat()}")
        self.print()
        for line in task.description.splitlines():
            self.print(f"    {line}")

    def task_list(self, tasks: list[Task]) -> None:
        if self.json_mode:
            self.json([task.to_dict() for task in tasks])
            return
        if not tasks:
            self.info("No tasks found")
            return
        rows = [
            [task.exid, f"{task.status.emoji} {task.status.value}", task.title, task.branch or ""]
            for task in tasks
        ]
        self.table(["EXID", "STATUS", "TITLE", "BRANCH"], rows)

    def push_result(self, result: PushResult) -> None:
        if self.json_mode:
            self.json({"outcome": result.outcome.value, "task": result.task.to_dict()})
            return

        messages = {
            PushOutcome.CREATED: "Task broadcast",
            PushOutcome.FOUND: "Task already on the channel",
            PushOutcome.UPDATED: "Task updated",
            PushOutcome.UNCHANGED: "Nothing to change",
        }
        self.success(f"{messages[result.outcome]} ({result.outcome.value}): {result.task.exid}")
        self.task_detail(result.task)

    def pull_result(self, result: PullResult) -> None:
        if self.json_mode:
            self.json({"cached": result.cached, "task": result.task.to_dict()})
            return
        self.task_detail(result.task)
        if result.cached:
            self.detail("cached into os.fileops")
