"""
Status transitions - the task lifecycle state machine.

Legal moves:
    QUEUED  -> CLAIMED     sets claimed_by, claimed_at, branch
    CLAIMED -> CLAIMED     re-claim from the same branch only (no change)
    CLAIMED -> DELIVERED   sets delivered_at

Everything else raises InvalidTransitionError. Callers skip this for a
status that is re-supplied unchanged, except CLAIMED, whose branch check
always runs.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from taskradio.core.domain.entities import Task
from taskradio.core.domain.enums import TaskStatus
from taskradio.core.exceptions import ClaimConflictError, InvalidTransitionError
from taskradio.core.ports.git_context import GitContextPort


LEGAL_TRANSITIONS: frozenset[tuple[TaskStatus, TaskStatus]] = frozenset(
    {
        (TaskStatus.QUEUED, TaskStatus.CLAIMED),
        (TaskStatus.CLAIMED, TaskStatus.CLAIMED),
        (TaskStatus.CLAIMED, TaskStatus.DELIVERED),
    }
)


def is_legal_transition(before: TaskStatus, after: TaskStatus) -> bool:
    return (before, after) in LEGAL_TRANSITIONS


def _reject(task: Task, after: TaskStatus, reason: str) -> InvalidTransitionError:
    return InvalidTransitionError(
        f"{reason} (task {task.exid}: {task.status.value} -> {after.value})",
        exid=task.exid,
        status_before=task.status,
        status_after=after,
    )


def apply_status_transition(
    task: Task,
    after: TaskStatus,
    git: GitContextPort,
    today: Callable[[], date] = date.today,
) -> Task:
    """
    Move a task to a new status.

    Args:
        task: Task in its stored state
        after: Requested status
        git: Source of the current actor and branch
        today: Clock for claimed_at / delivered_at

    Returns:
        The task with lifecycle fields set for the new status

    Raises:
        InvalidTransitionError: For any move outside the table
        ClaimConflictError: For a re-claim from another branch
    """
    before = task.status

    if before is TaskStatus.DELIVERED:
        raise _reject(task, after, "delivery is terminal")
    if after is TaskStatus.QUEUED:
        raise _reject(task, after, "claims cannot be rescinded")
    if before is TaskStatus.QUEUED and after is TaskStatus.DELIVERED:
        raise _reject(task, after, "cannot deliver an unclaimed task")
    if not is_legal_transition(before, after):
        raise _reject(task, after, "invalid status transition")

    if before is TaskStatus.QUEUED:
        return task.with_changes(
            status=TaskStatus.CLAIMED,
            claimed_by=git.current_actor(),
            claimed_at=today(),
            branch=git.current_branch(),
        )

    if after is TaskStatus.CLAIMED:
        current_branch = git.current_branch()
        if current_branch != task.branch:
            raise ClaimConflictError(
                exid=task.exid,
                claimed_branch=task.branch,
                current_branch=current_branch,
            )
        return task

    return task.with_changes(status=TaskStatus.DELIVERED, delivered_at=today())
