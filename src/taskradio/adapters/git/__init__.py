"""
Git Adapter - Workspace context from the git command line.
"""

from taskradio.adapters.git.context import GitCliContext, parse_repo_from_remote_url


__all__ = ["GitCliContext", "parse_repo_from_remote_url"]
