"""
Pull Orchestrator - read tasks from a channel.

A single task pulled from a remote channel is also cached into the local
channel so it stays readable offline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from taskradio.adapters.fileops.bootstrap import bootstrap_radio_dir
from taskradio.core.domain.entities import Task
from taskradio.core.domain.enums import Channel, TaskStatus
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.exceptions import TaskNotFoundError, ValidationError
from taskradio.core.ports.git_context import GitContextPort

from .channels import ChannelProvider, resolve_repo


@dataclass(frozen=True)
class PullResult:
    task: Task
    cached: bool = False  # written into the local channel


class RadioPullOrchestrator:
    """Orchestrates listing and fetching tasks."""

    def __init__(
        self,
        channels: ChannelProvider,
        git: GitContextPort,
        cwd: Path | None = None,
        root: Path | None = None,
    ):
        self.channels = channels
        self.git = git
        self.cwd = cwd or Path.cwd()
        self.root = root
        self.logger = logging.getLogger("RadioPullOrchestrator")

    def pull_all(
        self,
        via: Channel,
        repo: RepoRef | None = None,
        status: TaskStatus | None = None,
        limit: int | None = None,
    ) -> list[Task]:
        """
        List tasks on a channel.

        Args:
            via: Channel to read
            repo: Target repo (inferred from git when None)
            status: Only tasks in this status
            limit: Maximum number of tasks
        """
        if limit is not None and limit < 1:
            raise ValidationError(f"--limit must be positive, got {limit}", field="limit")

        repo = resolve_repo(repo, self.git)
        tasks = self.channels.get(via, repo).get_all(repo, status=status, limit=limit)
        self.logger.info(f"Pulled {len(tasks)} task(s) from {via.value} for {repo}")
        return tasks

    def pull_one(
        self,
        via: Channel,
        repo: RepoRef | None = None,
        exid: str | None = None,
        title: str | None = None,
    ) -> PullResult:
        """
        Fetch one task by exid or by title.

        Args:
            via: Channel to read
            repo: Target repo (inferred from git when None)
            exid: External id (mutually exclusive with title)
            title: Exact title (mutually exclusive with exid)

        Returns:
            PullResult; cached is True when the task was copied locally

        Raises:
            ValidationError: Unless exactly one of exid and title is given
            TaskNotFoundError: If the channel has no such task
        """
        if bool(exid) == bool(title):
            raise ValidationError("exactly one of --exid or --title required", field="exid")

        repo = resolve_repo(repo, self.git)
        channel = self.channels.get(via, repo)

        task = channel.get_by_primary(exid) if exid else channel.get_by_unique(repo, title)
        if task is None:
            ref = exid or title
            raise TaskNotFoundError(
                f"task not found on {via.value}: {ref}", exid=exid, title=title
            )

        if via is Channel.OS_FILEOPS:
            return PullResult(task=task, cached=False)

        # a cache write failure fails the pull
        bootstrap_radio_dir(repo, self.cwd, self.root)
        local = self.channels.get(Channel.OS_FILEOPS, repo)
        local.findsert(task)
        self.logger.info(f"Cached task {task.exid} into {Channel.OS_FILEOPS.value}")
        return PullResult(task=task, cached=True)
