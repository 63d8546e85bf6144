"""
Git CLI context - answers GitContextPort queries by shelling out to git.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from taskradio.adapters.github.client import GitHubApiClient
from taskradio.adapters.shell import ShellResult, shx
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.exceptions import ChannelError, ValidationError
from taskradio.core.ports.git_context import GitContextPort


UNKNOWN_ACTOR = "unknown"

# git@github.com:owner/name.git, ssh://git@github.com/owner/name.git
_SSH_REMOTE = re.compile(r"^(?:ssh://)?[\w.-]+@[\w.-]+(?::\d+)?[:/]([^/]+)/([^/]+?)(?:\.git)?/?$")
# https://github.com/owner/name.git, https://token@github.com/owner/name
_HTTPS_REMOTE = re.compile(r"^https?://(?:[^@/]+@)?[\w.-]+(?::\d+)?/([^/]+)/([^/]+?)(?:\.git)?/?$")


def parse_repo_from_remote_url(url: str) -> RepoRef | None:
    """
    Parse owner/name out of a git remote URL.

    Returns:
        RepoRef, or None for URLs in neither SSH nor HTTPS form
    """
    url = url.strip()
    for pattern in (_HTTPS_REMOTE, _SSH_REMOTE):
        match = pattern.match(url)
        if match:
            return RepoRef(owner=match.group(1), name=match.group(2))
    return None


class GitCliContext(GitContextPort):
    """
    Workspace lookups through the git command line.

    The actor is the GitHub login when a GitHub client is supplied, else
    git's user.name, else "unknown".
    """

    def __init__(
        self,
        cwd: Path | None = None,
        github_client: GitHubApiClient | None = None,
        shx=shx,
    ):
        self.cwd = cwd
        self.github_client = github_client
        self._shx = shx
        self.logger = logging.getLogger("GitCliContext")

    def _git(self, *args: str) -> ShellResult:
        return self._shx(["git", *args], cwd=self.cwd)

    def current_branch(self) -> str:
        result = self._git("branch", "--show-current")
        if not result.ok or not result.stdout:
            raise ValidationError(
                f"could not determine the current git branch: {result.stderr or 'detached HEAD'}",
                field="branch",
            )
        return result.stdout

    def current_actor(self) -> str:
        if self.github_client is not None:
            try:
                login = self.github_client.get_current_user().get("login")
            except ChannelError as e:
                self.logger.warning(f"Could not look up GitHub login, using git config: {e}")
            else:
                if login:
                    return login

        result = self._git("config", "user.name")
        if result.ok and result.stdout:
            return result.stdout

        return UNKNOWN_ACTOR

    def current_repo(self) -> RepoRef | None:
        result = self._git("remote", "get-url", "origin")
        if not result.ok or not result.stdout:
            self.logger.debug(f"No origin remote: {result.stderr}")
            return None

        repo = parse_repo_from_remote_url(result.stdout)
        if repo is None:
            self.logger.debug(f"Unrecognized remote url: {result.stdout}")
        return repo
