"""
Channel selection - build the adapter for a Channel enum value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path

from taskradio.adapters.fileops.adapter import OsFileopsChannel
from taskradio.adapters.github.adapter import GhIssuesChannel
from taskradio.adapters.github.client import GitHubApiClient
from taskradio.core.domain.enums import Channel
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.exceptions import CredentialError, ValidationError
from taskradio.core.ports.config_provider import GitHubAuth, GitHubConfig
from taskradio.core.ports.git_context import GitContextPort
from taskradio.core.ports.task_channel import TaskChannelPort


ChannelFactory = Callable[[RepoRef], TaskChannelPort]


def resolve_repo(repo: RepoRef | None, git: GitContextPort) -> RepoRef:
    """
    Use the explicit repo, else the one inferred from the git workspace.

    Raises:
        ValidationError: If neither is available
    """
    if repo is not None:
        return repo
    inferred = git.current_repo()
    if inferred is None:
        raise ValidationError("--repo required (not in a git repo)", field="repo")
    return inferred


class ChannelProvider:
    """
    Selects and constructs task channel adapters.

    Factories can be registered per channel, which is how tests swap in
    in-memory or mocked adapters. A shared GitHub client, when given, is
    handed to every gh.issues adapter.
    """

    def __init__(
        self,
        root: Path | None = None,
        auth: GitHubAuth | None = None,
        github: GitHubConfig | None = None,
        client: GitHubApiClient | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.root = root
        self.auth = auth
        self.github = github or GitHubConfig()
        self.client = client
        self.today = today
        self.logger = logging.getLogger("ChannelProvider")
        self._factories: dict[Channel, ChannelFactory] = {
            Channel.OS_FILEOPS: self._build_fileops,
            Channel.GH_ISSUES: self._build_gh_issues,
        }

    def register(self, channel: Channel, factory: ChannelFactory) -> None:
        """Replace the adapter factory for a channel."""
        self._factories[channel] = factory

    def get(self, channel: Channel, repo: RepoRef) -> TaskChannelPort:
        """
        Get the adapter for a channel, scoped to a repo.

        Raises:
            CredentialError: If gh.issues is requested without a credential
        """
        self.logger.debug(f"Selecting {channel.value} adapter for {repo}")
        return self._factories[channel](repo)

    def _build_fileops(self, repo: RepoRef) -> TaskChannelPort:
        return OsFileopsChannel(repo, root=self.root, today=self.today)

    def _build_gh_issues(self, repo: RepoRef) -> TaskChannelPort:
        if self.auth is None:
            raise CredentialError(
                "no credential supplied for the gh.issues channel", method=None
            )
        return GhIssuesChannel(repo, self.auth, self.github, client=self.client)
