"""
Application layer - Use cases built on the core ports.

- radio/: push and pull orchestrators and the status state machine
"""

from .radio import (
    ChannelProvider,
    PullResult,
    PushOutcome,
    PushResult,
    RadioPullOrchestrator,
    RadioPushOrchestrator,
)


__all__ = [
    "ChannelProvider",
    "PullResult",
    "PushOutcome",
    "PushResult",
    "RadioPullOrchestrator",
    "RadioPushOrchestrator",
]
