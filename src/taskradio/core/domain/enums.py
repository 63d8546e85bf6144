"""
Domain enums - Task status, channel, and idempotency mode.
"""

from __future__ import annotations

from enum import Enum


class TaskStatus(Enum):
    """Lifecycle status of a task. Moves forward only."""

    QUEUED = "QUEUED"
    CLAIMED = "CLAIMED"
    DELIVERED = "DELIVERED"

    @classmethod
    def from_string(cls, value: str) -> TaskStatus:
        """
        Parse a status from its stored or user-supplied form.

        Raises:
            ValueError: If the value is not one of the three statuses
        """
        normalized = value.strip().upper()
        for status in cls:
            if status.value == normalized:
                return status
        raise ValueError(f"Unknown task status: {value!r}")

    @property
    def emoji(self) -> str:
        """Get emoji representation."""
        return {
            TaskStatus.QUEUED: "💧",
            TaskStatus.CLAIMED: "🌲",
            TaskStatus.DELIVERED: "✅",
        }[self]

    def is_terminal(self) -> bool:
        """Check if no further transition is allowed."""
        return self is TaskStatus.DELIVERED


class Channel(Enum):
    """Storage backend a task is broadcast on."""

    GH_ISSUES = "gh.issues"
    OS_FILEOPS = "os.fileops"

    @classmethod
    def from_string(cls, value: str) -> Channel:
        """Parse channel from its dotted name (e.g. 'gh.issues')."""
        normalized = value.strip().lower().replace("_", ".")
        for channel in cls:
            if channel.value == normalized:
                return channel
        raise ValueError(f"Unknown channel: {value!r}")

    @property
    def is_remote(self) -> bool:
        return self is Channel.GH_ISSUES


class IdempotencyMode(Enum):
    """How the create path treats an existing task with the same title."""

    FINDSERT = "findsert"  # return the existing match untouched
    UPSERT = "upsert"  # overwrite the existing match

    @classmethod
    def from_string(cls, value: str) -> IdempotencyMode:
        normalized = value.strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise ValueError(f"Unknown idempotency mode: {value!r}")
