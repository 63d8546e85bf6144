"""
GitHub Issues format - compose a Task into an issue and extract it back.

Issue layout:
    title: "🎙️ task - <task title>"
    body:
        🦫🎙️   dispatch to foreman

        ```
        💧 task enqueued
           ├─ priority = ?
           ├─ yieldage = ?
           └─ leverage = ?
        ```

        🌲 tree planted at <branch>          (only once claimed)

        ### title

        <task title>

        ### description

        <task description>                  (always the last block)

Status is not stored. It is derived from the issue state, the assignee list,
and the tree marker line (see derive_status).

Precision loss: the issue only exposes its creation date, so claimed_at and
delivered_at are approximated with it. Round-trips preserve every other field.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date

from taskradio.core.domain.entities import Task
from taskradio.core.domain.enums import TaskStatus
from taskradio.core.domain.value_objects import RepoRef


TITLE_PREFIX = "🎙️ task - "

DISPATCH_BANNER = "🦫🎙️   dispatch to foreman"

ENQUEUED_BLOCK = "\n".join(
    [
        "```",
        "💧 task enqueued",
        "   ├─ priority = ?",
        "   ├─ yieldage = ?",
        "   └─ leverage = ?",
        "```",
    ]
)

TITLE_HEADER = "### title"
DESCRIPTION_HEADER = "### description"

MARKER_PLANTED = "planted"
MARKER_DELIVERED = "delivered"

_TITLE_PREFIX_PATTERN = re.compile(r"^🎙️?\s*task\s*-\s*", re.IGNORECASE)
_TREE_PATTERN = re.compile(r"🌲\s+tree\s+(planted|delivered)\s+at\s+(\S+)")
_TITLE_HEADER_PATTERN = re.compile(r"^### title[ \t]*$", re.MULTILINE)
_DESCRIPTION_HEADER_PATTERN = re.compile(r"^### description[ \t]*\n", re.MULTILINE)


@dataclass
class IssueContent:
    """Title and body ready to send to the tracker."""

    title: str
    body: str


@dataclass
class IssueSnapshot:
    """The minimal issue data the tracker returns for a task."""

    number: str
    title: str
    body: str
    state: str  # "open" | "closed"
    created_at: date
    author: str
    assignees: list[str] = field(default_factory=list)


def is_task_title(issue_title: str) -> bool:
    """Check whether an issue was created by this system."""
    return issue_title.startswith(TITLE_PREFIX)


def compose_issue_title(title: str) -> str:
    return f"{TITLE_PREFIX}{title}"


def compose_tree_line(task: Task) -> str:
    """Render the branch marker line, or '' while the task is unclaimed."""
    if not task.branch:
        return ""
    if task.status is TaskStatus.DELIVERED:
        return f"🌲 tree {MARKER_DELIVERED} at {task.branch}"
    if task.status is TaskStatus.CLAIMED:
        return f"🌲 tree {MARKER_PLANTED} at {task.branch}"
    return ""


def compose_issue(task: Task) -> IssueContent:
    """
    Compose a GitHub issue title and body from a task.

    Args:
        task: The task to render

    Returns:
        IssueContent with the prefixed title and the templated body
    """
    blocks = [DISPATCH_BANNER, ENQUEUED_BLOCK]

    tree_line = compose_tree_line(task)
    if tree_line:
        blocks.append(tree_line)

    blocks.extend(
        [
            TITLE_HEADER,
            task.title,
            DESCRIPTION_HEADER,
            task.description,
        ]
    )

    return IssueContent(
        title=compose_issue_title(task.title),
        body="\n\n".join(blocks),
    )


def derive_status(state: str, has_assignee: bool, marker: str | None) -> TaskStatus:
    """
    Reconstruct a task status from the raw issue signals.

    Precedence: closed or delivered marker wins, then assignee or planted
    marker, otherwise the task is still queued.

    Args:
        state: Issue state ("open" or "closed")
        has_assignee: Whether anyone is assigned
        marker: Tree marker found in the body ("planted", "delivered", or None)
    """
    if state.lower() == "closed" or marker == MARKER_DELIVERED:
        return TaskStatus.DELIVERED
    if has_assignee or marker == MARKER_PLANTED:
        return TaskStatus.CLAIMED
    return TaskStatus.QUEUED


def _split_preamble(body: str) -> tuple[str, str]:
    """Split the body at the title header into (preamble, rest)."""
    match = _TITLE_HEADER_PATTERN.search(body)
    if not match:
        return body, ""
    return body[: match.start()], body[match.start() :]


def extract_tree_marker(body: str) -> tuple[str | None, str | None]:
    """
    Find the tree marker line in the body preamble.

    Returns:
        (marker, branch), both None when the line is absent
    """
    preamble, _ = _split_preamble(body)
    match = _TREE_PATTERN.search(preamble)
    if not match:
        return None, None
    return match.group(1), match.group(2)


def extract_description(body: str, title: str | None = None) -> str:
    """
    Read the description block, which runs to the end of the body.

    Args:
        body: Issue body
        title: Task title, used to step over the title block so a title
            that looks like a header is not mistaken for one
    """
    _, section = _split_preamble(body)
    if not section:
        section = body

    offset = 0
    title_block = f"{TITLE_HEADER}\n\n{title}\n\n" if title is not None else None
    if title_block and section.startswith(title_block):
        offset = len(title_block)

    match = _DESCRIPTION_HEADER_PATTERN.search(section, offset)
    if not match:
        return ""
    content = section[match.end() :]
    if content.startswith("\n"):
        content = content[1:]
    return content


def extract_task_title(issue_title: str) -> str:
    if issue_title.startswith(TITLE_PREFIX):
        return issue_title[len(TITLE_PREFIX) :]
    return _TITLE_PREFIX_PATTERN.sub("", issue_title, count=1).strip()


def extract_task_from_issue(issue: IssueSnapshot, repo: RepoRef) -> Task:
    """
    Extract a task from GitHub issue data.

    Args:
        issue: Issue fields as returned by the tracker
        repo: Repository the issue lives in

    Returns:
        The task, with claim/delivery dates approximated by the creation date
    """
    title = extract_task_title(issue.title)
    marker, branch = extract_tree_marker(issue.body)
    status = derive_status(issue.state, bool(issue.assignees), marker)

    # The tracker does not record when a claim or delivery happened.
    approximated = issue.created_at
    claimed_at = approximated if status is not TaskStatus.QUEUED else None
    delivered_at = approximated if status is TaskStatus.DELIVERED else None

    return Task(
        exid=issue.number,
        title=title,
        description=extract_description(issue.body, title),
        status=status,
        repo=repo,
        pushed_by=issue.author,
        pushed_at=issue.created_at,
        claimed_by=issue.assignees[0] if issue.assignees else None,
        claimed_at=claimed_at,
        branch=branch,
        delivered_at=delivered_at,
    )
