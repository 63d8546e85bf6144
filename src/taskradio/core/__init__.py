"""
Core module - Pure domain logic with no external dependencies.

This module contains:
- domain/: Entities, value objects, and domain enums
- ports/: Abstract interfaces that adapters must implement
- exceptions: Centralized exception hierarchy
"""

from .domain import Channel, IdempotencyMode, RepoRef, Task, TaskStatus
from .exceptions import (
    ChannelError,
    ClaimConflictError,
    ConflictError,
    CredentialError,
    InvalidTransitionError,
    RadioError,
    TaskFormatError,
    TaskNotFoundError,
    TitleConflictError,
    ValidationError,
)


__all__ = [
    "Channel",
    "ChannelError",
    "ClaimConflictError",
    "ConflictError",
    "CredentialError",
    "IdempotencyMode",
    "InvalidTransitionError",
    "RadioError",
    "RepoRef",
    "Task",
    "TaskFormatError",
    "TaskNotFoundError",
    "TaskStatus",
    "TitleConflictError",
    "ValidationError",
]
