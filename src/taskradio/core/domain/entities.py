"""
Domain Entities - Objects with identity that persist over time.

A Task keeps its identity (exid) for its whole life. Changes produce a new
frozen instance via with_changes(), never a new identity.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date
from typing import Any

from .enums import TaskStatus
from .value_objects import RepoRef


@dataclass(frozen=True)
class Task:
    """
    A unit of dispatchable work.

    Primary key is exid (assigned by the channel on first persist).
    Unique key is (repo, title) within one channel.
    """

    # Identity
    exid: str
    title: str

    # Content
    description: str

    # Lifecycle
    status: TaskStatus
    repo: RepoRef
    pushed_by: str
    pushed_at: date

    # Claim metadata (all None until claimed)
    claimed_by: str | None = None
    claimed_at: date | None = None
    branch: str | None = None

    delivered_at: date | None = None

    def with_changes(self, **changes: Any) -> Task:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    @property
    def is_persisted(self) -> bool:
        return bool(self.exid)

    def lifecycle_violations(self) -> list[str]:
        """
        Check the status-dependent field invariants.

        Returns:
            List of violation messages (empty when consistent)
        """
        violations: list[str] = []
        claim_fields = {
            "claimed_by": self.claimed_by,
            "claimed_at": self.claimed_at,
            "branch": self.branch,
        }

        if self.status is TaskStatus.QUEUED:
            for name, value in claim_fields.items():
                if value is not None:
                    violations.append(f"{name} must be null while QUEUED")
        else:
            for name, value in claim_fields.items():
                if value is None:
                    violations.append(f"{name} must be set once {self.status.value}")

        if self.status is TaskStatus.DELIVERED and self.delivered_at is None:
            violations.append("delivered_at must be set once DELIVERED")
        if self.status is not TaskStatus.DELIVERED and self.delivered_at is not None:
            violations.append(f"delivered_at must be null while {self.status.value}")

        return violations

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "exid": self.exid,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "repo": self.repo.slug,
            "pushed_by": self.pushed_by,
            "pushed_at": self.pushed_at.isoformat(),
            "claimed_by": self.claimed_by,
            "claimed_at": self.claimed_at.isoformat() if self.claimed_at else None,
            "delivered_at": self.delivered_at.isoformat() if self.delivered_at else None,
            "branch": self.branch,
        }
