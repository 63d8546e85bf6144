"""
Configuration Provider Port - Abstract interface for configuration.

Implementations:
- EnvironmentConfigProvider: Load from env vars with CLI overrides
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


def default_radio_root() -> Path:
    """Shared per-user store: ~/git/.radio"""
    return Path.home() / "git" / ".radio"


class AuthRole(Enum):
    """How a GitHub credential was obtained."""

    AS_ROBOT = "as-robot"  # explicit token from env var or shell command
    AS_HUMAN = "as-human"  # gh cli login session
    ENV = "env"  # GITHUB_TOKEN fallback


@dataclass(frozen=True)
class GitHubAuth:
    """
    Credential for the gh.issues channel.

    token is None only for AS_HUMAN, meaning "fetch the gh session token".
    """

    token: str | None
    role: AuthRole

    def is_valid(self) -> bool:
        if self.role is AuthRole.AS_HUMAN:
            return self.token is None
        return bool(self.token)

    def __repr__(self) -> str:
        masked = "***" if self.token else None
        return f"GitHubAuth(token={masked!r}, role={self.role.value!r})"


@dataclass
class GitHubConfig:
    """Configuration for the GitHub REST API."""

    base_url: str = "https://api.github.com"
    timeout: float | None = None  # None = no timeout imposed

    def is_valid(self) -> bool:
        return self.base_url.startswith(("http://", "https://"))


@dataclass
class RadioConfig:
    """Complete application configuration."""

    root: Path = field(default_factory=default_radio_root)
    github: GitHubConfig = field(default_factory=GitHubConfig)


class ConfigProviderPort(ABC):
    """Abstract interface for configuration loading."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> RadioConfig:
        """Load the complete configuration."""
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        ...
