"""
GitHub Issues Adapter - Implements TaskChannelPort on GitHub Issues.

This is the remote, team-visible channel. Each task is one issue whose
title carries the task prefix; issues without it are invisible here.

Key mappings:
- exid -> issue number
- title -> issue title (prefixed)
- description -> last block of the issue body
- status -> derived from open/closed, assignees, and the tree marker
- pushed_by / pushed_at -> issue author / creation date
- claimed_by -> first assignee
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from taskradio.adapters.formats.gh_issues import (
    IssueSnapshot,
    compose_issue,
    compose_issue_title,
    extract_task_from_issue,
    is_task_title,
)
from taskradio.adapters.shell import ShellRunner, shx
from taskradio.core.domain.entities import Task
from taskradio.core.domain.enums import Channel, TaskStatus
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.exceptions import ResourceNotFoundError
from taskradio.core.ports.config_provider import AuthRole, GitHubAuth, GitHubConfig
from taskradio.core.ports.task_channel import DEFAULT_LIST_LIMIT, TaskChannelPort

from .auth import fetch_session_token
from .client import GitHubApiClient


CLOSE_REASON_DELIVERED = "completed"
CLOSE_REASON_DELETED = "not_planned"


def parse_issue(data: dict[str, Any]) -> IssueSnapshot:
    """Convert a REST issue payload into the fields the codec reads."""
    created_raw = data.get("created_at") or ""
    try:
        created_at = datetime.fromisoformat(created_raw.replace("Z", "+00:00")).date()
    except ValueError:
        created_at = date.today()

    return IssueSnapshot(
        number=str(data.get("number", "")),
        title=data.get("title") or "",
        body=data.get("body") or "",
        state=(data.get("state") or "open").lower(),
        created_at=created_at,
        author=(data.get("user") or {}).get("login", "unknown"),
        assignees=[a.get("login", "") for a in data.get("assignees") or [] if a.get("login")],
    )


def is_pull_request(data: dict[str, Any]) -> bool:
    return "pull_request" in data


class GhIssuesChannel(TaskChannelPort):
    """
    GitHub Issues implementation of the TaskChannelPort.

    The adapter only ever uses the credential it was constructed with.
    For as-human, the gh session token is fetched on first use.
    """

    def __init__(
        self,
        repo: RepoRef,
        auth: GitHubAuth,
        config: GitHubConfig | None = None,
        client: GitHubApiClient | None = None,
        shx: ShellRunner = shx,
    ):
        """
        Initialize the GitHub Issues adapter.

        Args:
            repo: Repository that get_by_primary and delete act on
            auth: Resolved credential
            config: API configuration
            client: Pre-built client (tests inject a mocked one)
            shx: Shell runner used to fetch the gh session token
        """
        self.repo = repo
        self.auth = auth
        self.config = config or GitHubConfig()
        self._client = client
        self._shx = shx
        self.logger = logging.getLogger("GhIssuesChannel")

    @property
    def channel(self) -> Channel:
        return Channel.GH_ISSUES

    @property
    def client(self) -> GitHubApiClient:
        """The API client, created with the resolved token on first use."""
        if self._client is None:
            token = self.auth.token
            if self.auth.role is AuthRole.AS_HUMAN and token is None:
                token = fetch_session_token(self._shx)
            self._client = GitHubApiClient(
                token=token or "",
                base_url=self.config.base_url,
                timeout=self.config.timeout,
            )
        return self._client

    # -------------------------------------------------------------------------
    # TaskChannelPort Implementation - Read Operations
    # -------------------------------------------------------------------------

    def get_by_primary(self, exid: str) -> Task | None:
        self.logger.debug(f"Looking up issue #{exid} in {self.repo}")
        try:
            data = self.client.get_issue(self.repo, exid)
        except ResourceNotFoundError:
            return None

        if not data or is_pull_request(data) or not is_task_title(data.get("title") or ""):
            return None
        return extract_task_from_issue(parse_issue(data), self.repo)

    def get_by_unique(self, repo: RepoRef, title: str) -> Task | None:
        issue_title = compose_issue_title(title)
        self.logger.debug(f"Searching {repo} for '{issue_title}'")

        # a search phrase cannot hold a quote; the exact title is checked below
        phrase = issue_title.replace('"', " ")
        query = f'"{phrase}" in:title repo:{repo.slug} is:issue'
        for data in self.client.search_issues(query):
            if is_pull_request(data):
                continue
            if data.get("title") == issue_title:
                return extract_task_from_issue(parse_issue(data), repo)
        return None

    def get_all(
        self,
        repo: RepoRef,
        status: TaskStatus | None = None,
        limit: int | None = None,
    ) -> list[Task]:
        limit = DEFAULT_LIST_LIMIT if limit is None else limit
        state = "closed" if status is TaskStatus.DELIVERED else "all"

        tasks: list[Task] = []
        if limit <= 0:
            return tasks

        for data in self.client.iter_issues(repo, state=state):
            if is_pull_request(data) or not is_task_title(data.get("title") or ""):
                continue
            task = extract_task_from_issue(parse_issue(data), repo)
            if status is not None and task.status is not status:
                continue
            tasks.append(task)
            if len(tasks) >= limit:
                break

        self.logger.debug(f"Listed {len(tasks)} task(s) in {repo}")
        return tasks

    # -------------------------------------------------------------------------
    # TaskChannelPort Implementation - Write Operations
    # -------------------------------------------------------------------------

    def findsert(self, task: Task) -> Task:
        found = self.get_by_unique(task.repo, task.title)
        if found:
            self.logger.debug(f"Found existing issue #{found.exid} for '{task.title}'")
            return found
        return self._create(task)

    def upsert(self, task: Task) -> Task:
        if task.exid:
            found = self.get_by_primary(task.exid)
        else:
            found = self.get_by_unique(task.repo, task.title)

        if found is None:
            return self._create(task)

        content = compose_issue(task)
        self.client.update_issue(task.repo, found.exid, title=content.title, body=content.body)
        self.logger.info(f"Updated issue #{found.exid}: {task.title}")

        if (
            task.status is TaskStatus.CLAIMED
            and task.claimed_by
            and task.claimed_by != found.claimed_by
        ):
            self.client.add_assignees(task.repo, found.exid, [task.claimed_by])
            self.logger.info(f"Assigned issue #{found.exid} to {task.claimed_by}")

        if task.status is TaskStatus.DELIVERED and found.status is not TaskStatus.DELIVERED:
            self.client.close_issue(task.repo, found.exid, reason=CLOSE_REASON_DELIVERED)
            self.logger.info(f"Closed issue #{found.exid} as delivered")

        return task.with_changes(exid=found.exid)

    def delete(self, exid: str) -> None:
        self.client.close_issue(self.repo, exid, reason=CLOSE_REASON_DELETED)
        self.logger.info(f"Closed issue #{exid} as not planned")

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _create(self, task: Task) -> Task:
        content = compose_issue(task)
        data = self.client.create_issue(task.repo, content.title, content.body)
        exid = str(data.get("number", ""))
        self.logger.info(f"Created issue #{exid}: {task.title}")

        if task.status is not TaskStatus.QUEUED and task.claimed_by:
            self.client.add_assignees(task.repo, exid, [task.claimed_by])
        if task.status is TaskStatus.DELIVERED:
            self.client.close_issue(task.repo, exid, reason=CLOSE_REASON_DELIVERED)

        return task.with_changes(exid=exid)
