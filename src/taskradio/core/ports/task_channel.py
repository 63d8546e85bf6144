"""
Task Channel Port - Abstract interface for task storage backends.

Implementations:
- GhIssuesChannel: GitHub Issues (remote, team-visible)
- OsFileopsChannel: flat files under the local radio directory

A new channel plugs into the push/pull orchestrators by implementing
these six operations.
"""

from abc import ABC, abstractmethod

from taskradio.core.domain.entities import Task
from taskradio.core.domain.enums import Channel, TaskStatus
from taskradio.core.domain.value_objects import RepoRef


DEFAULT_LIST_LIMIT = 100


class TaskChannelPort(ABC):
    """
    Abstract interface for task channels.

    "Not found" is returned as None by the get_by_* lookups, never raised.
    Every other failure propagates to the caller.
    """

    @property
    @abstractmethod
    def channel(self) -> Channel:
        """Which channel this adapter serves."""
        ...

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_by_primary(self, exid: str) -> Task | None:
        """
        Fetch a task by its external id.

        Args:
            exid: Channel-assigned identifier

        Returns:
            The task, or None if absent
        """
        ...

    @abstractmethod
    def get_by_unique(self, repo: RepoRef, title: str) -> Task | None:
        """
        Fetch a task by its exact title within a repo.

        Args:
            repo: Repository scope
            title: Exact task title

        Returns:
            The task, or None if absent
        """
        ...

    @abstractmethod
    def get_all(
        self,
        repo: RepoRef,
        status: TaskStatus | None = None,
        limit: int | None = None,
    ) -> list[Task]:
        """
        List tasks, optionally filtered by exact status.

        Args:
            repo: Repository scope
            status: Only return tasks in this status
            limit: Maximum number of tasks (defaults to DEFAULT_LIST_LIMIT)
        """
        ...

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    @abstractmethod
    def findsert(self, task: Task) -> Task:
        """
        Return the existing task with the same (repo, title), else create it.

        Never overwrites an existing match.

        Returns:
            The stored task, carrying its exid
        """
        ...

    @abstractmethod
    def upsert(self, task: Task) -> Task:
        """
        Update the task matched by exid (or by (repo, title) if it has no exid),
        else create it.

        Returns:
            The stored task, carrying its exid
        """
        ...

    @abstractmethod
    def delete(self, exid: str) -> None:
        """Remove (local) or close (remote) a task. Terminal."""
        ...
