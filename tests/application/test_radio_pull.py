"""
Tests for RadioPullOrchestrator.
"""

from unittest.mock import MagicMock

import pytest
from conftest import StaticGitContext, make_task

from taskradio.application.radio.pull import RadioPullOrchestrator
from taskradio.core.domain import Channel, RepoRef, TaskStatus
from taskradio.core.exceptions import ChannelError, TaskNotFoundError, ValidationError


LOCAL = Channel.OS_FILEOPS
REMOTE = Channel.GH_ISSUES


@pytest.fixture
def orchestrator(channels, git, workdir, radio_root):
    return RadioPullOrchestrator(channels, git, cwd=workdir, root=radio_root)


@pytest.fixture
def remote(channels, remote_channel):
    channels.register(REMOTE, lambda repo: remote_channel)
    return remote_channel


@pytest.fixture
def seeded(fileops, queued_task, claimed_task):
    fileops.findsert(queued_task.with_changes(exid="q1", title="queued one"))
    fileops.findsert(claimed_task.with_changes(exid="c1", title="claimed one"))
    return fileops


# =============================================================================
# pull_all
# =============================================================================


class TestPullAll:
    def test_lists_everything(self, orchestrator, seeded):
        tasks = orchestrator.pull_all(LOCAL)
        assert sorted(t.exid for t in tasks) == ["c1", "q1"]

    def test_filters_by_status(self, orchestrator, seeded):
        tasks = orchestrator.pull_all(LOCAL, status=TaskStatus.CLAIMED)
        assert [t.exid for t in tasks] == ["c1"]

    def test_limit(self, orchestrator, seeded):
        assert len(orchestrator.pull_all(LOCAL, limit=1)) == 1

    @pytest.mark.parametrize("limit", [0, -5])
    def test_limit_must_be_positive(self, orchestrator, limit):
        with pytest.raises(ValidationError) as exc_info:
            orchestrator.pull_all(LOCAL, limit=limit)
        assert exc_info.value.field == "limit"

    def test_empty_repo(self, orchestrator):
        assert orchestrator.pull_all(LOCAL) == []

    def test_remote_passes_filters(self, orchestrator, remote, repo):
        remote.get_all.return_value = [make_task(exid="5")]

        tasks = orchestrator.pull_all(REMOTE, status=TaskStatus.QUEUED, limit=10)

        assert [t.exid for t in tasks] == ["5"]
        remote.get_all.assert_called_once_with(repo, status=TaskStatus.QUEUED, limit=10)

    def test_listing_does_not_cache(self, orchestrator, remote, radio_root):
        remote.get_all.return_value = [make_task(exid="5")]
        orchestrator.pull_all(REMOTE)
        assert not radio_root.exists()

    def test_repo_required_outside_git(self, channels, workdir, radio_root):
        orchestrator = RadioPullOrchestrator(
            channels, StaticGitContext(repo=None), cwd=workdir, root=radio_root
        )
        with pytest.raises(ValidationError, match="--repo required"):
            orchestrator.pull_all(LOCAL)


# =============================================================================
# pull_one
# =============================================================================


class TestPullOne:
    @pytest.mark.parametrize("exid,title", [(None, None), ("1", "t")])
    def test_exactly_one_selector(self, orchestrator, exid, title):
        with pytest.raises(ValidationError, match="exactly one"):
            orchestrator.pull_one(LOCAL, exid=exid, title=title)

    def test_local_by_exid(self, orchestrator, seeded, radio_root):
        repo_dir = radio_root / "acme" / "webapp"
        before = sorted(p.name for p in repo_dir.iterdir())

        result = orchestrator.pull_one(LOCAL, exid="q1")

        assert result.task.title == "queued one"
        assert result.cached is False
        assert sorted(p.name for p in repo_dir.iterdir()) == before

    def test_local_by_title(self, orchestrator, seeded):
        assert orchestrator.pull_one(LOCAL, title="claimed one").task.exid == "c1"

    def test_local_missing(self, orchestrator):
        with pytest.raises(TaskNotFoundError) as exc_info:
            orchestrator.pull_one(LOCAL, exid="nope")
        assert exc_info.value.exid == "nope"

    def test_explicit_repo(self, orchestrator, fileops, queued_task):
        other = RepoRef("acme", "other")
        fileops.findsert(queued_task.with_changes(repo=other))

        result = orchestrator.pull_one(LOCAL, repo=other, title=queued_task.title)

        assert result.task.repo == other

    def test_remote_is_cached_locally(self, orchestrator, remote, fileops, workdir):
        remote_task = make_task(exid="17", title="from github")
        remote.get_by_primary.return_value = remote_task

        result = orchestrator.pull_one(REMOTE, exid="17")

        assert result.cached is True
        assert result.task == remote_task
        assert fileops.get_by_primary("17") == remote_task
        assert (workdir / ".radio").is_symlink()

    def test_remote_by_title(self, orchestrator, remote, repo):
        remote.get_by_unique.return_value = make_task(exid="17")

        orchestrator.pull_one(REMOTE, title="Fix the login page")

        remote.get_by_unique.assert_called_once_with(repo, "Fix the login page")

    def test_cached_copy_is_not_refreshed(self, orchestrator, remote, fileops):
        fileops.findsert(make_task(exid="17", description="old copy"))
        remote.get_by_primary.return_value = make_task(exid="17", description="new copy")

        orchestrator.pull_one(REMOTE, exid="17")

        assert fileops.get_by_primary("17").description == "old copy"

    def test_remote_missing(self, orchestrator, remote, radio_root):
        remote.get_by_primary.return_value = None

        with pytest.raises(TaskNotFoundError, match="gh.issues"):
            orchestrator.pull_one(REMOTE, exid="17")
        assert not radio_root.exists()

    def test_remote_failure_propagates(self, orchestrator, remote):
        remote.get_by_primary.side_effect = ChannelError("boom", status_code=502)

        with pytest.raises(ChannelError):
            orchestrator.pull_one(REMOTE, exid="17")

    def test_cache_write_failure_fails_the_pull(self, orchestrator, remote, channels):
        remote.get_by_primary.return_value = make_task(exid="17")
        local = MagicMock()
        local.findsert.side_effect = OSError("No space left on device")
        channels.register(LOCAL, lambda repo: local)

        with pytest.raises(OSError, match="No space left"):
            orchestrator.pull_one(REMOTE, exid="17")
        local.findsert.assert_called_once_with(make_task(exid="17"))
