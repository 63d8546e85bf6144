"""
Git Context Port - Lookups about the caller's workspace.

The orchestrators only see this interface, so they stay free of ambient
process state and can be driven with fixed values in tests.
"""

from abc import ABC, abstractmethod

from taskradio.core.domain.value_objects import RepoRef


class GitContextPort(ABC):
    """Opaque string lookups against the current git workspace."""

    @abstractmethod
    def current_branch(self) -> str:
        """Name of the checked-out branch."""
        ...

    @abstractmethod
    def current_actor(self) -> str:
        """Identity of whoever is running the command."""
        ...

    @abstractmethod
    def current_repo(self) -> RepoRef | None:
        """Owner/name of the current repository, or None outside a repo."""
        ...
