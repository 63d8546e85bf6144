"""
Radio - push and pull orchestration over task channels.
"""

from .channels import ChannelProvider, resolve_repo
from .pull import PullResult, RadioPullOrchestrator
from .push import PushOutcome, PushResult, RadioPushOrchestrator
from .transitions import LEGAL_TRANSITIONS, apply_status_transition, is_legal_transition


__all__ = [
    "LEGAL_TRANSITIONS",
    "ChannelProvider",
    "PullResult",
    "PushOutcome",
    "PushResult",
    "RadioPullOrchestrator",
    "RadioPushOrchestrator",
    "apply_status_transition",
    "is_legal_transition",
    "resolve_repo",
]
