"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .config_provider import (
    AuthRole,
    ConfigProviderPort,
    GitHubAuth,
    GitHubConfig,
    RadioConfig,
    default_radio_root,
)
from .git_context import GitContextPort
from .task_channel import DEFAULT_LIST_LIMIT, TaskChannelPort


__all__ = [
    "DEFAULT_LIST_LIMIT",
    "AuthRole",
    "ConfigProviderPort",
    "GitContextPort",
    "GitHubAuth",
    "GitHubConfig",
    "RadioConfig",
    "TaskChannelPort",
    "default_radio_root",
]
