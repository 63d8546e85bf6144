"""
Shared pytest fixtures for the taskradio test suite.

Fixture Categories:
- Domain: sample repos and tasks
- Context: a fixed git context and clock
- Channels: local adapter on tmp_path, mocked GitHub client
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from taskradio.adapters.fileops.adapter import OsFileopsChannel
from taskradio.adapters.github.client import GitHubApiClient
from taskradio.application.radio.channels import ChannelProvider
from taskradio.core.domain.entities import Task
from taskradio.core.domain.enums import Channel, TaskStatus
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.ports.git_context import GitContextPort


TODAY = date(2026, 1, 30)


class StaticGitContext(GitContextPort):
    """Git context with fixed answers."""

    def __init__(
        self,
        branch: str = "feat/login",
        actor: str = "casey",
        repo: RepoRef | None = None,
    ):
        self.branch = branch
        self.actor = actor
        self.repo = repo

    def current_branch(self) -> str:
        return self.branch

    def current_actor(self) -> str:
        return self.actor

    def current_repo(self) -> RepoRef | None:
        return self.repo


def make_task(**overrides) -> Task:
    """Build a QUEUED task, overriding any field."""
    fields = {
        "exid": "a1b2c3d4",
        "title": "Fix the login page",
        "description": "The login button does nothing on Safari.",
        "status": TaskStatus.QUEUED,
        "repo": RepoRef("acme", "webapp"),
        "pushed_by": "casey",
        "pushed_at": TODAY,
    }
    fields.update(overrides)
    return Task(**fields)


def make_issue(
    number: int,
    title: str,
    body: str = "",
    state: str = "open",
    assignees: list[str] | None = None,
    author: str = "casey",
    created_at: str = "2026-01-30T10:00:00Z",
    pull_request: bool = False,
) -> dict:
    """Build a GitHub REST issue payload."""
    data = {
        "number": number,
        "title": title,
        "body": body,
        "state": state,
        "assignees": [{"login": login} for login in assignees or []],
        "user": {"login": author},
        "created_at": created_at,
    }
    if pull_request:
        data["pull_request"] = {"url": f"https://api.github.com/pulls/{number}"}
    return data


# =============================================================================
# Domain
# =============================================================================


@pytest.fixture
def repo() -> RepoRef:
    return RepoRef("acme", "webapp")


@pytest.fixture
def queued_task() -> Task:
    return make_task()


@pytest.fixture
def claimed_task() -> Task:
    return make_task(
        status=TaskStatus.CLAIMED,
        claimed_by="robin",
        claimed_at=TODAY,
        branch="feat/login",
    )


@pytest.fixture
def delivered_task() -> Task:
    return make_task(
        status=TaskStatus.DELIVERED,
        claimed_by="robin",
        claimed_at=TODAY,
        branch="feat/login",
        delivered_at=TODAY,
    )


# =============================================================================
# Context
# =============================================================================


@pytest.fixture
def git() -> StaticGitContext:
    return StaticGitContext(repo=RepoRef("acme", "webapp"))


@pytest.fixture
def today():
    return lambda: TODAY


# =============================================================================
# Channels
# =============================================================================


@pytest.fixture
def radio_root(tmp_path: Path) -> Path:
    return tmp_path / "radio"


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def fileops(repo, radio_root, today) -> OsFileopsChannel:
    return OsFileopsChannel(repo, root=radio_root, today=today)


@pytest.fixture
def mock_github_client() -> MagicMock:
    return MagicMock(spec=GitHubApiClient)


@pytest.fixture
def channels(radio_root, today) -> ChannelProvider:
    """Provider with the local channel on tmp_path and no GitHub credential."""
    return ChannelProvider(root=radio_root, today=today)


@pytest.fixture
def remote_channel() -> MagicMock:
    """A mocked gh.issues adapter."""
    channel = MagicMock()
    channel.channel = Channel.GH_ISSUES
    return channel
