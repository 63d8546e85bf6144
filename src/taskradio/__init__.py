"""
taskradio - dispatch tasks between agents over GitHub issues or local files.

Layers:
- core/: domain model, ports, and exceptions
- adapters/: channel implementations and workspace integrations
- application/: push and pull orchestration
- cli/: command-line front-end
"""

__version__ = "0.1.0"
