"""
CLI module - Command line interface for taskradio.
"""

from .app import main, run
from .exit_codes import ExitCode


__all__ = ["ExitCode", "main", "run"]
