"""
Push Orchestrator - create or update a task on a channel.

Without an exid the push creates (subject to the idempotency mode).
With an exid it applies title, description, and status edits to the
stored task, enforcing the lifecycle state machine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path

from taskradio.adapters.fileops.bootstrap import bootstrap_radio_dir
from taskradio.core.domain.entities import Task
from taskradio.core.domain.enums import Channel, IdempotencyMode, TaskStatus
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.exceptions import (
    InvalidTransitionError,
    TaskNotFoundError,
    TitleConflictError,
    ValidationError,
)
from taskradio.core.ports.git_context import GitContextPort
from taskradio.core.ports.task_channel import TaskChannelPort

from .channels import ChannelProvider, resolve_repo
from .transitions import apply_status_transition


class PushOutcome(Enum):
    """What a push did to the channel."""

    CREATED = "created"
    FOUND = "found"  # findsert matched an existing task, nothing written
    UPDATED = "updated"
    UNCHANGED = "unchanged"  # update with nothing to change, nothing written


@dataclass(frozen=True)
class PushResult:
    task: Task
    outcome: PushOutcome


def validate_title(title: str | None) -> str:
    if title is None or not title.strip():
        raise ValidationError("--title required for new task", field="title")
    if "\n" in title or "\r" in title:
        raise ValidationError("title must be a single line", field="title")
    return title


def validate_description(description: str | None) -> str:
    if description is None or not description.strip():
        raise ValidationError("--description required for new task", field="description")
    return description


class RadioPushOrchestrator:
    """
    Orchestrates task creation and updates.

    The orchestrator owns the state machine; adapters only persist what
    they are given.
    """

    def __init__(
        self,
        channels: ChannelProvider,
        git: GitContextPort,
        cwd: Path | None = None,
        root: Path | None = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the orchestrator.

        Args:
            channels: Adapter selection
            git: Actor, branch, and repo lookups
            cwd: Working directory for the local .radio shortcut
            root: Radio root override
            today: Clock for pushed_at, claimed_at, delivered_at
        """
        self.channels = channels
        self.git = git
        self.cwd = cwd or Path.cwd()
        self.root = root
        self.today = today
        self.logger = logging.getLogger("RadioPushOrchestrator")

    def push(
        self,
        via: Channel,
        repo: RepoRef | None = None,
        exid: str | None = None,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
        idem: IdempotencyMode = IdempotencyMode.FINDSERT,
    ) -> PushResult:
        """
        Create or update a task.

        Args:
            via: Channel to push to
            repo: Target repo (inferred from git when None)
            exid: Existing task to update; None creates
            title: Title for a new task, or a rename
            description: Description for a new task, or a replacement
            status: Status to move an existing task to
            idem: How creation treats an existing task with the same title

        Returns:
            PushResult with the stored task and what happened
        """
        repo = resolve_repo(repo, self.git)

        if via is Channel.OS_FILEOPS:
            bootstrap_radio_dir(repo, self.cwd, self.root)

        channel = self.channels.get(via, repo)

        if exid:
            return self._update(channel, repo, exid, title, description, status)

        if status is not None and status is not TaskStatus.QUEUED:
            raise ValidationError("--status requires --exid of an existing task", field="status")
        return self._create(
            channel, repo, validate_title(title), validate_description(description), idem
        )

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def _create(
        self,
        channel: TaskChannelPort,
        repo: RepoRef,
        title: str,
        description: str,
        idem: IdempotencyMode,
    ) -> PushResult:
        existing = channel.get_by_unique(repo, title)

        if idem is IdempotencyMode.FINDSERT:
            if existing:
                self.logger.info(f"Found existing task {existing.exid}: {title}")
                return PushResult(task=existing, outcome=PushOutcome.FOUND)
            task = channel.findsert(self._new_task(repo, title, description))
            self.logger.info(f"Created task {task.exid} on {channel.channel.value}")
            return PushResult(task=task, outcome=PushOutcome.CREATED)

        # upsert keeps the match's identity and lifecycle, overwriting the content
        if existing:
            if existing.status is TaskStatus.DELIVERED and existing.description != description:
                raise InvalidTransitionError(
                    f"cannot edit a delivered task (task {existing.exid})",
                    exid=existing.exid,
                    status_before=existing.status,
                    status_after=existing.status,
                )
            task = channel.upsert(existing.with_changes(description=description))
        else:
            task = channel.upsert(self._new_task(repo, title, description))

        self.logger.info(f"Upserted task {task.exid} on {channel.channel.value}")
        return PushResult(task=task, outcome=PushOutcome.CREATED)

    def _new_task(self, repo: RepoRef, title: str, description: str) -> Task:
        return Task(
            exid="",
            title=title,
            description=description,
            status=TaskStatus.QUEUED,
            repo=repo,
            pushed_by=self.git.current_actor(),
            pushed_at=self.today(),
        )

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def _update(
        self,
        channel: TaskChannelPort,
        repo: RepoRef,
        exid: str,
        title: str | None,
        description: str | None,
        status: TaskStatus | None,
    ) -> PushResult:
        found = channel.get_by_primary(exid)
        if found is None:
            raise TaskNotFoundError(f"task not found: {exid}", exid=exid)

        updated = found
        has_changes = False

        if title is not None and title != found.title:
            validate_title(title)
            holder = channel.get_by_unique(repo, title)
            if holder is not None and holder.exid != found.exid:
                raise TitleConflictError(
                    f"title already held by task {holder.exid}: {title}",
                    title=title,
                    exid=holder.exid,
                )
            updated = updated.with_changes(title=title)
            has_changes = True

        if description is not None and description != found.description:
            validate_description(description)
            updated = updated.with_changes(description=description)
            has_changes = True

        if has_changes and found.status is TaskStatus.DELIVERED:
            raise InvalidTransitionError(
                f"cannot edit a delivered task (task {found.exid})",
                exid=found.exid,
                status_before=found.status,
                status_after=status or found.status,
            )

        if status is not None and (status is not found.status or status is TaskStatus.CLAIMED):
            updated = apply_status_transition(updated, status, self.git, self.today)
            if status is not found.status:
                has_changes = True
                violations = updated.lifecycle_violations()
                if violations:
                    raise InvalidTransitionError(
                        f"task {found.exid} would be stored inconsistently: "
                        f"{'; '.join(violations)}",
                        exid=found.exid,
                        status_before=found.status,
                        status_after=status,
                    )

        if not has_changes:
            self.logger.info(f"No changes for task {exid}")
            return PushResult(task=found, outcome=PushOutcome.UNCHANGED)

        task = channel.upsert(updated)
        self.logger.info(f"Updated task {task.exid}: {found.status.value} -> {task.status.value}")
        return PushResult(task=task, outcome=PushOutcome.UPDATED)
