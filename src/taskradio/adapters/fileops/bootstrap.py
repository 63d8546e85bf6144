"""
Bootstrap of the shared radio directory.

Idempotent: readmes are only written when missing, and the local .radio
shortcut is created or repointed. A real directory named .radio in the
working directory is never touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from taskradio.core.domain.value_objects import RepoRef

from .paths import LOCAL_SHORTCUT_NAME, README_NAME, get_radio_paths, get_radio_root


logger = logging.getLogger("RadioBootstrap")

ROOT_README = """\
# .radio

> global radio directory for cross-repo task dispatch

this directory stores tasks broadcast via `taskradio push --via os.fileops`.

## structure

- `$owner/$repo/` - tasks for each repo
- `$owner/$repo/task.{exid}._.md` - task content with frontmatter
- `$owner/$repo/task.{exid}._.status=QUEUED.flag` - status flag for fast glob

## usage

tasks here are accessible from each repo via its `.radio/` symlink.

cross-repo dispatch writes directly here without a local symlink.
"""

REPO_README = """\
# .radio/{owner}/{name}

> local radio cache for {owner}/{name}

this directory stores tasks for the {owner}/{name} repository.

## files

- `readme.md` - this file
- `task.{{exid}}._.md` - main task file with yaml frontmatter
- `task.{{exid}}.bak.{{isodate}}.md` - backup from a prior edit
- `task.{{exid}}._.status={{STATUS}}.flag` - empty flag file for status glob
"""


@dataclass(frozen=True)
class BootstrapResult:
    """Where the repo's tasks live and where the shortcut points from."""

    global_dir: Path
    local_symlink: Path


def ensure_root_readme(root: Path | None = None) -> Path:
    radio_root = get_radio_root(root)
    readme = radio_root / README_NAME
    if readme.exists():
        return readme

    radio_root.mkdir(parents=True, exist_ok=True)
    readme.write_text(ROOT_README, encoding="utf-8")
    logger.info(f"Created {readme}")
    return readme


def ensure_repo_readme(repo: RepoRef, root: Path | None = None) -> Path:
    """Create the repo directory and its readme; returns the directory."""
    paths = get_radio_paths(repo, "global", root=root)
    if paths.readme.exists():
        return paths.radio_dir

    paths.radio_dir.mkdir(parents=True, exist_ok=True)
    paths.readme.write_text(REPO_README.format(owner=repo.owner, name=repo.name), encoding="utf-8")
    logger.info(f"Created {paths.readme}")
    return paths.radio_dir


def ensure_local_symlink(repo: RepoRef, cwd: Path, root: Path | None = None) -> Path:
    """
    Point <cwd>/.radio at the repo's global directory.

    An existing symlink with another target is replaced. An existing
    regular file or directory is left alone.
    """
    local = Path(cwd) / LOCAL_SHORTCUT_NAME
    target = get_radio_paths(repo, "global", root=root).radio_dir

    if local.is_symlink():
        if Path(local.readlink()) == target:
            return local
        logger.info(f"Repointing {local} (was {local.readlink()})")
        local.unlink()
    elif local.exists():
        logger.debug(f"{local} exists and is not a symlink, leaving it alone")
        return local

    local.symlink_to(target, target_is_directory=True)
    logger.info(f"Linked {local} -> {target}")
    return local


def bootstrap_radio_dir(repo: RepoRef, cwd: Path, root: Path | None = None) -> BootstrapResult:
    """
    Ensure the radio directory structure exists for a repo.

    Args:
        repo: Repository to bootstrap
        cwd: Working directory that receives the .radio shortcut
        root: Radio root override

    Returns:
        BootstrapResult with the global directory and the shortcut path
    """
    ensure_root_readme(root)
    global_dir = ensure_repo_readme(repo, root)
    local_symlink = ensure_local_symlink(repo, cwd, root)
    return BootstrapResult(global_dir=global_dir, local_symlink=local_symlink)
