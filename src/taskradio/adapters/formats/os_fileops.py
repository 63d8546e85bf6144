"""
Local file format - compose a Task into a markdown file with YAML
frontmatter and extract it back.

File layout:
    ---
    exid: '123'
    title: Fix the login page
    status: QUEUED
    repo: owner/name
    pushed_by: alice
    pushed_at: 2026-01-30
    claimed_by: null
    claimed_at: null
    delivered_at: null
    branch: null
    ---

    🎙️ task - Fix the login page

    🦫  dispatch to foreman

    💧 task enqueued
       ├─ priority = ?
       ├─ yieldage = ?
       └─ leverage = ?

    ---

    Fix the login page

    <description>

The frontmatter is authoritative for every field except the description,
which is everything after the title line below the body separator.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any

import yaml

from taskradio.core.domain.entities import Task
from taskradio.core.domain.enums import TaskStatus
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.exceptions import TaskFormatError

from .gh_issues import TITLE_PREFIX, compose_tree_line


logger = logging.getLogger("OsFileopsFormat")

FRONTMATTER_FIELDS = (
    "exid",
    "title",
    "status",
    "repo",
    "pushed_by",
    "pushed_at",
    "claimed_by",
    "claimed_at",
    "delivered_at",
    "branch",
)

BODY_SEPARATOR = "\n---\n"

_FRONTMATTER_PATTERN = re.compile(r"\A---\n(.*?)\n---\n", re.DOTALL)


def _dump_frontmatter(task: Task) -> str:
    data: dict[str, Any] = {
        "exid": task.exid,
        "title": task.title,
        "status": task.status.value,
        "repo": task.repo.slug,
        "pushed_by": task.pushed_by,
        "pushed_at": task.pushed_at,
        "claimed_by": task.claimed_by,
        "claimed_at": task.claimed_at,
        "delivered_at": task.delivered_at,
        "branch": task.branch,
    }
    return yaml.safe_dump(
        data,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )


def compose_task_file(task: Task) -> str:
    """
    Compose the primary file content for a task.

    Args:
        task: The task to render

    Returns:
        Markdown text with YAML frontmatter
    """
    body_lines = [
        "",
        f"{TITLE_PREFIX}{task.title}",
        "",
        "🦫  dispatch to foreman",
        "",
        "💧 task enqueued",
        "   ├─ priority = ?",
        "   ├─ yieldage = ?",
        "   └─ leverage = ?",
    ]

    tree_line = compose_tree_line(task)
    if tree_line:
        body_lines.extend(["", tree_line])

    body_lines.extend(["", "---", "", task.title, "", task.description])

    return f"---\n{_dump_frontmatter(task)}---\n" + "\n".join(body_lines) + "\n"


# =============================================================================
# Extraction
# =============================================================================


def _as_text(data: dict[str, Any], name: str, required: bool = True) -> str | None:
    value = data.get(name)
    if value is None:
        if required:
            raise TaskFormatError(f"invalid task file: no {name}", field=name)
        return None
    return str(value)


def _as_date(data: dict[str, Any], name: str, required: bool = False) -> date | None:
    value = data.get(name)
    if value is None:
        if required:
            raise TaskFormatError(f"invalid task file: no {name}", field=name)
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise TaskFormatError(
            f"invalid task file: bad date for {name}: {value!r}", field=name, cause=e
        ) from e


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """
    Split a task file into its frontmatter mapping and remaining body.

    Raises:
        TaskFormatError: If the frontmatter is missing, unclosed, or not a mapping
    """
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        raise TaskFormatError("invalid task file: no frontmatter")

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise TaskFormatError(f"invalid task file: bad YAML: {e}", cause=e) from e

    if not isinstance(data, dict):
        raise TaskFormatError("invalid task file: frontmatter must be a mapping")

    return data, content[match.end() :]


def extract_description(body: str, title: str) -> str:
    """Read the description that follows the title line after the separator."""
    index = body.find(BODY_SEPARATOR)
    section = body[index + len(BODY_SEPARATOR) :] if index >= 0 else body

    title_block = f"\n{title}\n\n"
    if section.startswith(title_block):
        section = section[len(title_block) :]
    else:
        logger.debug(f"Title line not found below separator for '{title}'")
        section = section.lstrip("\n")

    if section.endswith("\n"):
        section = section[:-1]
    return section


def extract_task_from_file(content: str) -> Task:
    """
    Extract a task from primary file content.

    Args:
        content: Full text of a task.<exid>._.md file

    Returns:
        The decoded task

    Raises:
        TaskFormatError: If a required field is missing or malformed
    """
    data, body = parse_frontmatter(content)

    exid = _as_text(data, "exid")
    title = _as_text(data, "title")

    status_raw = _as_text(data, "status")
    try:
        status = TaskStatus.from_string(status_raw)
    except ValueError as e:
        raise TaskFormatError(
            f'invalid task file: invalid status "{status_raw}"', field="status", cause=e
        ) from e

    repo_raw = _as_text(data, "repo")
    try:
        repo = RepoRef.from_slug(repo_raw)
    except ValueError as e:
        raise TaskFormatError(
            f'invalid task file: invalid repo "{repo_raw}"', field="repo", cause=e
        ) from e

    return Task(
        exid=exid,
        title=title,
        description=extract_description(body, title),
        status=status,
        repo=repo,
        pushed_by=_as_text(data, "pushed_by"),
        pushed_at=_as_date(data, "pushed_at", required=True),
        claimed_by=_as_text(data, "claimed_by", required=False),
        claimed_at=_as_date(data, "claimed_at"),
        branch=_as_text(data, "branch", required=False),
        delivered_at=_as_date(data, "delivered_at"),
    )
