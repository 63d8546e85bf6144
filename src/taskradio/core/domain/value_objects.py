"""
Value Objects - Immutable objects defined by their attributes.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoRef:
    """
    Target repository for a task.

    Scopes title uniqueness and every storage location.
    """

    owner: str
    name: str

    def __post_init__(self) -> None:
        if not self.owner or not self.name:
            raise ValueError("RepoRef requires both owner and name")
        if "/" in self.owner or "/" in self.name:
            raise ValueError(f"Invalid repo segment in {self.owner!r}/{self.name!r}")

    @classmethod
    def from_slug(cls, slug: str) -> RepoRef:
        """
        Parse an 'owner/name' string.

        Raises:
            ValueError: If the slug does not have exactly two non-empty parts
        """
        parts = slug.strip().split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f'invalid repo format: "{slug}" (expected "owner/name")')
        return cls(owner=parts[0], name=parts[1])

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.slug
