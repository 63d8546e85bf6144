"""
Adapters - Concrete implementations of the core ports.

- formats/: codecs for each channel's native representation
- github/: gh.issues channel (GitHub REST API)
- fileops/: os.fileops channel (flat files under the radio root)
- git/: workspace context from the git command line
- config/: configuration providers
"""

from .config import EnvironmentConfigProvider
from .fileops import OsFileopsChannel, bootstrap_radio_dir, get_radio_paths
from .git import GitCliContext
from .github import GhIssuesChannel, GitHubApiClient, resolve_github_auth


__all__ = [
    "EnvironmentConfigProvider",
    "GhIssuesChannel",
    "GitCliContext",
    "GitHubApiClient",
    "OsFileopsChannel",
    "bootstrap_radio_dir",
    "get_radio_paths",
    "resolve_github_auth",
]
