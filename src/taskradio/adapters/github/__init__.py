"""
GitHub Adapter - Task channel on GitHub Issues.

This module provides the GhIssuesChannel and related components for
broadcasting tasks as GitHub issues.
"""

from taskradio.adapters.github.adapter import GhIssuesChannel
from taskradio.adapters.github.auth import fetch_session_token, resolve_github_auth
from taskradio.adapters.github.client import GitHubApiClient


__all__ = ["GhIssuesChannel", "GitHubApiClient", "fetch_session_token", "resolve_github_auth"]
