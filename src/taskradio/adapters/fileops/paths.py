"""
Radio path resolution for the os.fileops channel.

Layout under the radio root (default ~/git/.radio):

    readme.md
    <owner>/<name>/readme.md
    <owner>/<name>/task.<exid>._.md
    <owner>/<name>/task.<exid>._.status=<STATUS>.flag
    <owner>/<name>/task.<exid>.bak.<isodate>.md
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Literal

from taskradio.core.domain.enums import TaskStatus
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.ports.config_provider import default_radio_root


README_NAME = "readme.md"
LOCAL_SHORTCUT_NAME = ".radio"

PRIMARY_GLOB = "task.*._.md"


def get_radio_root(root: Path | None = None) -> Path:
    """Root of the shared store, ~/git/.radio unless overridden."""
    return Path(root) if root is not None else default_radio_root()


@dataclass(frozen=True)
class RadioPaths:
    """File locations for one repo's radio directory."""

    radio_dir: Path

    @property
    def readme(self) -> Path:
        return self.radio_dir / README_NAME

    def task_file(self, exid: str) -> Path:
        return self.radio_dir / f"task.{exid}._.md"

    def status_flag(self, exid: str, status: TaskStatus) -> Path:
        return self.radio_dir / f"task.{exid}._.status={status.value}.flag"

    def status_flag_glob(self, status: TaskStatus) -> str:
        return f"task.*._.status={status.value}.flag"

    def backup(self, exid: str, stamp: date, sequence: int = 1) -> Path:
        """
        Backup path for a pre-overwrite snapshot.

        The first backup of a day is task.<exid>.bak.<date>.md; later ones
        the same day get a .2, .3, ... suffix.
        """
        suffix = "" if sequence <= 1 else f".{sequence}"
        return self.radio_dir / f"task.{exid}.bak.{stamp.isoformat()}{suffix}.md"

    def next_backup(self, exid: str, stamp: date) -> Path:
        """First backup path for the day that is not taken yet."""
        sequence = 1
        candidate = self.backup(exid, stamp, sequence)
        while candidate.exists():
            sequence += 1
            candidate = self.backup(exid, stamp, sequence)
        return candidate

    @staticmethod
    def exid_from_flag(path: Path, status: TaskStatus) -> str:
        """task.<exid>._.status=<STATUS>.flag -> <exid>"""
        return path.name[len("task.") : -len(f"._.status={status.value}.flag")]


def get_radio_paths(
    repo: RepoRef,
    variant: Literal["global", "local"] = "global",
    cwd: Path | None = None,
    root: Path | None = None,
) -> RadioPaths:
    """
    Compute the radio directory for a repo.

    Args:
        repo: Repository whose tasks live in the directory
        variant: "global" for <root>/<owner>/<name>, "local" for <cwd>/.radio
        cwd: Working directory for the local variant
        root: Radio root override for the global variant

    Returns:
        RadioPaths for the chosen directory
    """
    if variant == "local":
        base = Path(cwd) if cwd is not None else Path.cwd()
        return RadioPaths(radio_dir=base / LOCAL_SHORTCUT_NAME)
    if variant != "global":
        raise ValueError(f"Unknown radio path variant: {variant!r}")
    return RadioPaths(radio_dir=get_radio_root(root) / repo.owner / repo.name)
