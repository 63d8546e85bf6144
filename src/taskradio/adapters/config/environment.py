"""
Environment configuration provider.

Reads:
    TASKRADIO_ROOT              radio root directory (default ~/git/.radio)
    TASKRADIO_GITHUB_API_URL    GitHub REST API root
    TASKRADIO_HTTP_TIMEOUT      per-request timeout in seconds (unset = none)

CLI overrides win over the environment.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from taskradio.core.ports.config_provider import (
    ConfigProviderPort,
    GitHubConfig,
    RadioConfig,
    default_radio_root,
)


ENV_ROOT = "TASKRADIO_ROOT"
ENV_GITHUB_API_URL = "TASKRADIO_GITHUB_API_URL"
ENV_HTTP_TIMEOUT = "TASKRADIO_HTTP_TIMEOUT"


class EnvironmentConfigProvider(ConfigProviderPort):
    """Configuration from environment variables and CLI overrides."""

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        cli_overrides: dict[str, Any] | None = None,
    ):
        """
        Args:
            env: Environment to read (defaults to os.environ)
            cli_overrides: Values from the command line; None entries are ignored
        """
        self.env = env if env is not None else os.environ
        self.cli_overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
        self.logger = logging.getLogger("EnvironmentConfigProvider")
        self._errors: list[str] = []

    @property
    def name(self) -> str:
        return "environment"

    def load(self) -> RadioConfig:
        self._errors = []

        root_value = self.cli_overrides.get("root") or self.env.get(ENV_ROOT)
        root = Path(root_value).expanduser() if root_value else default_radio_root()

        github = GitHubConfig(
            base_url=self.cli_overrides.get("github_api_url")
            or self.env.get(ENV_GITHUB_API_URL)
            or GitHubConfig.base_url,
            timeout=self._parse_timeout(),
        )

        config = RadioConfig(root=root, github=github)
        self.logger.debug(f"Loaded config: root={config.root} api={config.github.base_url}")
        return config

    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        config = self.load()
        errors = list(self._errors)

        if not config.github.is_valid():
            errors.append(
                f"Invalid GitHub API URL ({ENV_GITHUB_API_URL}): {config.github.base_url!r}"
            )
        if config.root.exists() and not config.root.is_dir():
            errors.append(f"Radio root is not a directory ({ENV_ROOT}): {config.root}")

        return errors

    def _parse_timeout(self) -> float | None:
        raw = self.cli_overrides.get("timeout", self.env.get(ENV_HTTP_TIMEOUT))
        if raw is None or raw == "":
            return None
        try:
            timeout = float(raw)
        except (TypeError, ValueError):
            self._errors.append(f"Invalid timeout ({ENV_HTTP_TIMEOUT}): {raw!r}")
            return None
        if timeout <= 0:
            self._errors.append(f"Timeout must be positive ({ENV_HTTP_TIMEOUT}): {raw!r}")
            return None
        return timeout
