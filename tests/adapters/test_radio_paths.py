"""
Tests for radio path resolution.
"""

from datetime import date
from pathlib import Path

import pytest

from taskradio.adapters.fileops.paths import RadioPaths, get_radio_paths, get_radio_root
from taskradio.core.domain import TaskStatus


class TestGetRadioPaths:
    """Tests for get_radio_paths."""

    def test_global_variant(self, repo, tmp_path):
        paths = get_radio_paths(repo, "global", root=tmp_path)
        assert paths.radio_dir == tmp_path / "acme" / "webapp"

    def test_local_variant(self, repo, tmp_path):
        paths = get_radio_paths(repo, "local", cwd=tmp_path)
        assert paths.radio_dir == tmp_path / ".radio"

    def test_default_root(self, repo, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_radio_root() == tmp_path / "git" / ".radio"
        assert get_radio_paths(repo).radio_dir == tmp_path / "git" / ".radio" / "acme" / "webapp"

    def test_unknown_variant(self, repo):
        with pytest.raises(ValueError):
            get_radio_paths(repo, "shared")


class TestRadioPaths:
    """Tests for the per-repo file names."""

    @pytest.fixture
    def paths(self, tmp_path):
        return RadioPaths(radio_dir=tmp_path)

    def test_file_names(self, paths, tmp_path):
        assert paths.readme == tmp_path / "readme.md"
        assert paths.task_file("42") == tmp_path / "task.42._.md"
        assert paths.status_flag("42", TaskStatus.CLAIMED) == tmp_path / "task.42._.status=CLAIMED.flag"
        assert paths.status_flag_glob(TaskStatus.QUEUED) == "task.*._.status=QUEUED.flag"

    def test_backup_names(self, paths, tmp_path):
        stamp = date(2026, 1, 30)
        assert paths.backup("42", stamp) == tmp_path / "task.42.bak.2026-01-30.md"
        assert paths.backup("42", stamp, 3) == tmp_path / "task.42.bak.2026-01-30.3.md"

    def test_next_backup_skips_taken_names(self, paths):
        stamp = date(2026, 1, 30)
        paths.backup("42", stamp).touch()
        paths.backup("42", stamp, 2).touch()

        assert paths.next_backup("42", stamp) == paths.backup("42", stamp, 3)

    def test_exid_round_trips_through_flag_names(self, paths):
        flag = paths.status_flag("99", TaskStatus.QUEUED)
        assert RadioPaths.exid_from_flag(flag, TaskStatus.QUEUED) == "99"

    def test_is_frozen(self, paths):
        with pytest.raises(AttributeError):
            paths.radio_dir = Path("/elsewhere")
