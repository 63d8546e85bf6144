"""
Config Adapter - Configuration providers.
"""

from taskradio.adapters.config.environment import EnvironmentConfigProvider


__all__ = ["EnvironmentConfigProvider"]
