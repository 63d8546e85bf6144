"""
GitHub credential resolution for the gh.issues channel.

The --auth argument accepts:
    as-robot:env(VAR)       token read from environment variable VAR
    as-robot:shx(command)   token printed by a shell command (vault, 1password, ...)
    as-human                the gh cli login session (fetched on first use)

Without an argument, GITHUB_TOKEN is used when set.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from taskradio.adapters.shell import ShellRunner, shx
from taskradio.core.exceptions import CredentialError
from taskradio.core.ports.config_provider import AuthRole, GitHubAuth


logger = logging.getLogger("GitHubAuth")

_SHX_PATTERN = re.compile(r"^as-robot:shx\((.+)\)$")
_ENV_PATTERN = re.compile(r"^as-robot:env\((.+)\)$")

NO_AUTH_TIPS = "\n".join(
    [
        "no auth detected for gh.issues channel",
        "",
        "tips:",
        "├─ --auth as-human",
        "│     use gh cli logged-in session (interactive)",
        "├─ --auth as-robot:env(VAR)",
        "│     use token from environment variable",
        "└─ --auth as-robot:shx(command)",
        "      execute shell command to retrieve token",
    ]
)


def is_automated_context(env: Mapping[str, str]) -> bool:
    """Test runs and CI must use explicit tokens, never a personal session."""
    return "PYTEST_CURRENT_TEST" in env or env.get("CI", "").lower() == "true"


def resolve_github_auth(
    auth_arg: str | None,
    env: Mapping[str, str],
    shx: ShellRunner = shx,
) -> GitHubAuth:
    """
    Resolve a GitHub credential from the --auth argument.

    Args:
        auth_arg: Value of --auth (None when not given)
        env: Environment to read tokens from
        shx: Shell runner for as-robot:shx(...)

    Returns:
        GitHubAuth; token is None for as-human

    Raises:
        CredentialError: When the requested method yields no token
    """
    if auth_arg:
        auth_arg = auth_arg.strip()

        shx_match = _SHX_PATTERN.match(auth_arg)
        if shx_match:
            result = shx(shx_match.group(1))
            token = result.stdout.strip()
            if not token:
                raise CredentialError(
                    f"--auth as-robot:shx(...) command produced no output. stderr: {result.stderr}",
                    method=AuthRole.AS_ROBOT.value,
                )
            logger.debug("Resolved token from shell command")
            return GitHubAuth(token=token, role=AuthRole.AS_ROBOT)

        env_match = _ENV_PATTERN.match(auth_arg)
        if env_match:
            var_name = env_match.group(1)
            token = env.get(var_name)
            if not token:
                raise CredentialError(
                    f"--auth as-robot:env({var_name}) specified but {var_name} is not set",
                    method=AuthRole.AS_ROBOT.value,
                )
            logger.debug(f"Resolved token from ${var_name}")
            return GitHubAuth(token=token, role=AuthRole.AS_ROBOT)

        if auth_arg == AuthRole.AS_HUMAN.value:
            if is_automated_context(env):
                raise CredentialError(
                    "--auth as-human is forbidden in automated runs. "
                    "use --auth as-robot:env(TOKEN_VAR) or --auth as-robot:shx(command) instead.",
                    method=AuthRole.AS_HUMAN.value,
                )
            return GitHubAuth(token=None, role=AuthRole.AS_HUMAN)

        raise CredentialError(f"unrecognized --auth value: {auth_arg!r}\n\n{NO_AUTH_TIPS}")

    token = env.get("GITHUB_TOKEN")
    if token:
        logger.debug("Resolved token from $GITHUB_TOKEN")
        return GitHubAuth(token=token, role=AuthRole.ENV)

    raise CredentialError(NO_AUTH_TIPS)


def fetch_session_token(shx: ShellRunner = shx) -> str:
    """
    Read the token of the gh cli login session.

    Raises:
        CredentialError: If gh is missing or not logged in
    """
    result = shx("gh auth token")
    token = result.stdout.strip()
    if not result.ok or not token:
        raise CredentialError(
            f"could not read gh cli session token. run `gh auth login` first. stderr: {result.stderr}",
            method=AuthRole.AS_HUMAN.value,
        )
    return token
