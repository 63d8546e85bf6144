"""
OS Fileops Adapter - Implements TaskChannelPort on flat local files.

Each task is a primary markdown file plus at most one empty status flag
file. Every overwrite first copies the primary file to a dated backup.
There is no cross-process locking; concurrent writers race and the last
one wins, with the backups as the only history.
"""

from __future__ import annotations

import logging
import shutil
import uuid
from collections.abc import Callable, Iterator
from datetime import date
from pathlib import Path

from taskradio.adapters.formats.os_fileops import compose_task_file, extract_task_from_file
from taskradio.core.domain.entities import Task
from taskradio.core.domain.enums import Channel, TaskStatus
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.ports.task_channel import DEFAULT_LIST_LIMIT, TaskChannelPort

from .paths import PRIMARY_GLOB, RadioPaths, get_radio_paths


def generate_exid() -> str:
    """Short random id for locally created tasks."""
    return uuid.uuid4().hex[:8]


class OsFileopsChannel(TaskChannelPort):
    """
    Local filesystem implementation of the TaskChannelPort.

    Lookups by title read every primary file in the repo directory; the
    directories are per-developer and expected to stay small.
    """

    def __init__(
        self,
        repo: RepoRef,
        root: Path | None = None,
        today: Callable[[], date] = date.today,
        exid_factory: Callable[[], str] = generate_exid,
    ):
        """
        Initialize the local adapter.

        Args:
            repo: Repository that get_by_primary and delete act on
            root: Radio root override (defaults to ~/git/.radio)
            today: Clock for backup date stamps
            exid_factory: Id generator for new tasks
        """
        self.repo = repo
        self.root = root
        self._today = today
        self._exid_factory = exid_factory
        self.logger = logging.getLogger("OsFileopsChannel")

    @property
    def channel(self) -> Channel:
        return Channel.OS_FILEOPS

    def paths_for(self, repo: RepoRef) -> RadioPaths:
        return get_radio_paths(repo, "global", root=self.root)

    # -------------------------------------------------------------------------
    # TaskChannelPort Implementation - Read Operations
    # -------------------------------------------------------------------------

    def get_by_primary(self, exid: str) -> Task | None:
        return self._read(self.paths_for(self.repo), exid)

    def get_by_unique(self, repo: RepoRef, title: str) -> Task | None:
        for task in self._iter_primaries(self.paths_for(repo)):
            if task.title == title:
                return task
        return None

    def get_all(
        self,
        repo: RepoRef,
        status: TaskStatus | None = None,
        limit: int | None = None,
    ) -> list[Task]:
        limit = DEFAULT_LIST_LIMIT if limit is None else limit
        paths = self.paths_for(repo)
        tasks: list[Task] = []
        if limit <= 0:
            return tasks

        # DELIVERED tasks carry no flag, so they can only be found by reading
        if status is not None and status is not TaskStatus.DELIVERED:
            candidates = self._iter_flagged(paths, status)
        else:
            candidates = self._iter_primaries(paths)

        for task in candidates:
            if status is not None and task.status is not status:
                continue
            tasks.append(task)
            if len(tasks) >= limit:
                break

        self.logger.debug(f"Listed {len(tasks)} task(s) in {paths.radio_dir}")
        return tasks

    # -------------------------------------------------------------------------
    # TaskChannelPort Implementation - Write Operations
    # -------------------------------------------------------------------------

    def findsert(self, task: Task) -> Task:
        found = self.get_by_unique(task.repo, task.title)
        if found:
            self.logger.debug(f"Found existing task {found.exid} for '{task.title}'")
            return found
        return self._create(task)

    def upsert(self, task: Task) -> Task:
        paths = self.paths_for(task.repo)
        if task.exid:
            found = self._read(paths, task.exid)
        else:
            found = self.get_by_unique(task.repo, task.title)

        if found is None:
            return self._create(task)

        merged = task.with_changes(exid=found.exid)
        primary = paths.task_file(found.exid)
        backup = paths.next_backup(found.exid, self._today())
        shutil.copy2(primary, backup)
        self.logger.info(f"Backed up {primary.name} to {backup.name}")

        self._write(paths, merged)
        self.logger.info(f"Updated task {merged.exid}: {merged.title}")
        return merged

    def delete(self, exid: str) -> None:
        paths = self.paths_for(self.repo)
        primary = paths.task_file(exid)
        if primary.exists():
            primary.unlink()
            self.logger.info(f"Deleted {primary.name}")
        self._clear_flags(paths, exid)

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _read(self, paths: RadioPaths, exid: str) -> Task | None:
        primary = paths.task_file(exid)
        if not primary.is_file():
            return None
        return extract_task_from_file(primary.read_text(encoding="utf-8"))

    def _iter_primaries(self, paths: RadioPaths) -> Iterator[Task]:
        if not paths.radio_dir.is_dir():
            return
        for primary in sorted(paths.radio_dir.glob(PRIMARY_GLOB)):
            yield extract_task_from_file(primary.read_text(encoding="utf-8"))

    def _iter_flagged(self, paths: RadioPaths, status: TaskStatus) -> Iterator[Task]:
        if not paths.radio_dir.is_dir():
            return
        for flag in sorted(paths.radio_dir.glob(paths.status_flag_glob(status))):
            task = self._read(paths, RadioPaths.exid_from_flag(flag, status))
            if task is not None:
                yield task

    def _create(self, task: Task) -> Task:
        created = task if task.exid else task.with_changes(exid=self._exid_factory())
        self._write(self.paths_for(created.repo), created)
        self.logger.info(f"Created task {created.exid}: {created.title}")
        return created

    def _write(self, paths: RadioPaths, task: Task) -> None:
        paths.radio_dir.mkdir(parents=True, exist_ok=True)
        paths.task_file(task.exid).write_text(compose_task_file(task), encoding="utf-8")

        self._clear_flags(paths, task.exid)
        if task.status is not TaskStatus.DELIVERED:
            paths.status_flag(task.exid, task.status).touch()
            self.logger.debug(f"Flagged {task.exid} as {task.status.value}")

    def _clear_flags(self, paths: RadioPaths, exid: str) -> None:
        for status in TaskStatus:
            flag = paths.status_flag(exid, status)
            if flag.exists():
                flag.unlink()
