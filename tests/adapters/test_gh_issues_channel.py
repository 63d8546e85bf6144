"""
Tests for GhIssuesChannel.

The API client is mocked; these tests cover the mapping between tasks and
issue payloads and which endpoints each operation touches.
"""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from conftest import make_issue, make_task

from taskradio.adapters.formats.gh_issues import compose_issue
from taskradio.adapters.github.adapter import GhIssuesChannel, is_pull_request, parse_issue
from taskradio.adapters.shell import ShellResult
from taskradio.core.domain import Channel, RepoRef, TaskStatus
from taskradio.core.exceptions import AccessDeniedError, CredentialError, ResourceNotFoundError
from taskradio.core.ports.config_provider import AuthRole, GitHubAuth


def issue_for(task, number=7, state="open", assignees=None, **kwargs):
    content = compose_issue(task)
    return make_issue(number, content.title, content.body, state=state, assignees=assignees, **kwargs)


@pytest.fixture
def auth():
    return GitHubAuth(token="ghp_test", role=AuthRole.AS_ROBOT)


@pytest.fixture
def adapter(repo, auth, mock_github_client):
    return GhIssuesChannel(repo, auth, client=mock_github_client)


# =============================================================================
# Payload parsing
# =============================================================================


class TestParseIssue:
    """Tests for parse_issue."""

    def test_fields(self):
        snapshot = parse_issue(make_issue(42, "🎙️ task - x", "body", assignees=["robin"]))

        assert snapshot.number == "42"
        assert snapshot.state == "open"
        assert snapshot.created_at == date(2026, 1, 30)
        assert snapshot.author == "casey"
        assert snapshot.assignees == ["robin"]

    def test_bad_created_at_falls_back_to_today(self):
        snapshot = parse_issue(make_issue(1, "t", created_at="yesterday"))
        assert snapshot.created_at == date.today()

    def test_null_body(self):
        data = make_issue(1, "t")
        data["body"] = None
        assert parse_issue(data).body == ""

    def test_is_pull_request(self):
        assert is_pull_request(make_issue(1, "t", pull_request=True))
        assert not is_pull_request(make_issue(1, "t"))


# =============================================================================
# Read operations
# =============================================================================


class TestGetByPrimary:
    """Tests for get_by_primary."""

    def test_found(self, adapter, mock_github_client, queued_task):
        mock_github_client.get_issue.return_value = issue_for(queued_task, number=7)

        task = adapter.get_by_primary("7")

        assert task == queued_task.with_changes(exid="7")
        mock_github_client.get_issue.assert_called_once_with(RepoRef("acme", "webapp"), "7")

    def test_not_found(self, adapter, mock_github_client):
        mock_github_client.get_issue.side_effect = ResourceNotFoundError("nope", status_code=404)
        assert adapter.get_by_primary("7") is None

    def test_pull_request_is_not_a_task(self, adapter, mock_github_client, queued_task):
        mock_github_client.get_issue.return_value = issue_for(queued_task, pull_request=True)
        assert adapter.get_by_primary("7") is None

    def test_foreign_issue_is_not_a_task(self, adapter, mock_github_client):
        mock_github_client.get_issue.return_value = make_issue(7, "Bug: crash")
        assert adapter.get_by_primary("7") is None

    def test_other_errors_propagate(self, adapter, mock_github_client):
        mock_github_client.get_issue.side_effect = AccessDeniedError("denied", status_code=403)
        with pytest.raises(AccessDeniedError):
            adapter.get_by_primary("7")

    def test_claim_date_is_creation_date(self, adapter, mock_github_client, claimed_task):
        mock_github_client.get_issue.return_value = issue_for(
            claimed_task, number=7, assignees=["robin"], created_at="2026-01-02T08:00:00Z"
        )

        task = adapter.get_by_primary("7")

        assert task.claimed_at == date(2026, 1, 2)
        assert task.pushed_at == date(2026, 1, 2)


class TestGetByUnique:
    """Tests for get_by_unique."""

    def test_exact_title_match(self, adapter, mock_github_client, queued_task, repo):
        mock_github_client.search_issues.return_value = [
            issue_for(queued_task.with_changes(title="Fix the login page twice"), number=3),
            issue_for(queued_task, number=4),
        ]

        task = adapter.get_by_unique(repo, "Fix the login page")

        assert task.exid == "4"
        query = mock_github_client.search_issues.call_args.args[0]
        assert query == '"🎙️ task - Fix the login page" in:title repo:acme/webapp is:issue'

    def test_no_match(self, adapter, mock_github_client, repo):
        mock_github_client.search_issues.return_value = []
        assert adapter.get_by_unique(repo, "anything") is None

    def test_skips_pull_requests(self, adapter, mock_github_client, queued_task, repo):
        mock_github_client.search_issues.return_value = [issue_for(queued_task, pull_request=True)]
        assert adapter.get_by_unique(repo, queued_task.title) is None

    def test_title_with_quotes(self, adapter, mock_github_client, queued_task, repo):
        quoted = queued_task.with_changes(title='Rename "Sign in" button')
        mock_github_client.search_issues.return_value = [issue_for(quoted, number=5)]

        task = adapter.get_by_unique(repo, quoted.title)

        assert task.exid == "5"
        assert task.title == quoted.title
        query = mock_github_client.search_issues.call_args.args[0]
        assert query == '"🎙️ task - Rename  Sign in  button" in:title repo:acme/webapp is:issue'


class TestGetAll:
    """Tests for get_all."""

    @pytest.fixture
    def issues(self, claimed_task):
        return [
            issue_for(make_task(title="one"), number=1),
            make_issue(2, "Unrelated bug"),
            issue_for(claimed_task.with_changes(title="two"), number=3, assignees=["robin"]),
            issue_for(make_task(title="pr"), number=4, pull_request=True),
            issue_for(make_task(title="three"), number=5, state="closed"),
        ]

    def test_lists_task_issues_only(self, adapter, mock_github_client, issues, repo):
        mock_github_client.iter_issues.return_value = iter(issues)

        tasks = adapter.get_all(repo)

        assert [t.title for t in tasks] == ["one", "two", "three"]
        mock_github_client.iter_issues.assert_called_once_with(repo, state="all")

    def test_filters_by_status(self, adapter, mock_github_client, issues, repo):
        mock_github_client.iter_issues.return_value = iter(issues)
        tasks = adapter.get_all(repo, TaskStatus.CLAIMED)
        assert [t.exid for t in tasks] == ["3"]

    def test_delivered_lists_closed_issues(self, adapter, mock_github_client, issues, repo):
        mock_github_client.iter_issues.return_value = iter(issues)
        adapter.get_all(repo, TaskStatus.DELIVERED)
        mock_github_client.iter_issues.assert_called_once_with(repo, state="closed")

    def test_stops_at_limit(self, adapter, mock_github_client, issues, repo):
        mock_github_client.iter_issues.return_value = iter(issues)
        assert [t.title for t in adapter.get_all(repo, limit=1)] == ["one"]

    def test_zero_limit(self, adapter, mock_github_client, repo):
        assert adapter.get_all(repo, limit=0) == []
        mock_github_client.iter_issues.assert_not_called()


# =============================================================================
# Write operations
# =============================================================================


class TestFindsert:
    """Tests for findsert."""

    def test_returns_existing(self, adapter, mock_github_client, queued_task):
        mock_github_client.search_issues.return_value = [issue_for(queued_task, number=4)]

        task = adapter.findsert(queued_task.with_changes(exid=""))

        assert task.exid == "4"
        mock_github_client.create_issue.assert_not_called()

    def test_creates_when_absent(self, adapter, mock_github_client, queued_task):
        mock_github_client.search_issues.return_value = []
        mock_github_client.create_issue.return_value = {"number": 11}

        task = adapter.findsert(queued_task.with_changes(exid=""))

        assert task.exid == "11"
        content = compose_issue(queued_task)
        mock_github_client.create_issue.assert_called_once_with(
            queued_task.repo, content.title, content.body
        )
        mock_github_client.add_assignees.assert_not_called()
        mock_github_client.close_issue.assert_not_called()

    def test_creates_delivered_task_closed(self, adapter, mock_github_client, delivered_task):
        mock_github_client.search_issues.return_value = []
        mock_github_client.create_issue.return_value = {"number": 12}

        adapter.findsert(delivered_task.with_changes(exid=""))

        mock_github_client.add_assignees.assert_called_once_with(delivered_task.repo, "12", ["robin"])
        mock_github_client.close_issue.assert_called_once_with(
            delivered_task.repo, "12", reason="completed"
        )


class TestUpsert:
    """Tests for upsert."""

    def test_creates_when_absent(self, adapter, mock_github_client, queued_task):
        mock_github_client.search_issues.return_value = []
        mock_github_client.create_issue.return_value = {"number": 11}

        assert adapter.upsert(queued_task.with_changes(exid="")).exid == "11"

    def test_updates_body(self, adapter, mock_github_client, queued_task):
        mock_github_client.get_issue.return_value = issue_for(queued_task, number=7)
        changed = queued_task.with_changes(exid="7", description="new text")

        result = adapter.upsert(changed)

        content = compose_issue(changed)
        mock_github_client.update_issue.assert_called_once_with(
            changed.repo, "7", title=content.title, body=content.body
        )
        mock_github_client.add_assignees.assert_not_called()
        assert result == changed

    def test_claim_assigns(self, adapter, mock_github_client, queued_task, claimed_task):
        mock_github_client.get_issue.return_value = issue_for(queued_task, number=7)

        adapter.upsert(claimed_task.with_changes(exid="7"))

        mock_github_client.add_assignees.assert_called_once_with(claimed_task.repo, "7", ["robin"])
        mock_github_client.close_issue.assert_not_called()

    def test_reclaim_by_same_actor_does_not_reassign(self, adapter, mock_github_client, claimed_task):
        mock_github_client.get_issue.return_value = issue_for(
            claimed_task, number=7, assignees=["robin"]
        )

        adapter.upsert(claimed_task.with_changes(exid="7"))

        mock_github_client.add_assignees.assert_not_called()

    def test_delivery_closes(self, adapter, mock_github_client, claimed_task, delivered_task):
        mock_github_client.get_issue.return_value = issue_for(
            claimed_task, number=7, assignees=["robin"]
        )

        adapter.upsert(delivered_task.with_changes(exid="7"))

        mock_github_client.close_issue.assert_called_once_with(
            delivered_task.repo, "7", reason="completed"
        )
        body = mock_github_client.update_issue.call_args.kwargs["body"]
        assert "🌲 tree delivered at feat/login" in body


class TestDelete:
    def test_closes_as_not_planned(self, adapter, mock_github_client, repo):
        adapter.delete("7")
        mock_github_client.close_issue.assert_called_once_with(repo, "7", reason="not_planned")


# =============================================================================
# Client construction
# =============================================================================


class TestClientConstruction:
    """The client is built lazily from the resolved credential."""

    def test_channel(self, adapter):
        assert adapter.channel is Channel.GH_ISSUES

    def test_robot_token_used_directly(self, repo, auth):
        adapter = GhIssuesChannel(repo, auth)
        with patch("taskradio.adapters.github.adapter.GitHubApiClient") as client_cls:
            adapter.client
        assert client_cls.call_args.kwargs["token"] == "ghp_test"

    def test_human_fetches_session_token_once(self, repo):
        shx = MagicMock(return_value=ShellResult(stdout="gho_session", stderr=""))
        adapter = GhIssuesChannel(repo, GitHubAuth(None, AuthRole.AS_HUMAN), shx=shx)

        with patch("taskradio.adapters.github.adapter.GitHubApiClient") as client_cls:
            adapter.client
            adapter.client

        shx.assert_called_once_with("gh auth token")
        assert client_cls.call_count == 1
        assert client_cls.call_args.kwargs["token"] == "gho_session"

    def test_human_without_session(self, repo):
        shx = MagicMock(return_value=ShellResult(stdout="", stderr="not logged in", returncode=1))
        adapter = GhIssuesChannel(repo, GitHubAuth(None, AuthRole.AS_HUMAN), shx=shx)

        with pytest.raises(CredentialError, match="gh auth login"):
            adapter.client
