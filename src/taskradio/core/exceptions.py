"""
Centralized exception hierarchy for taskradio.

Every error carries enough structured context (exid, statuses, field name)
for the caller to build an actionable message. None of them are retried or
suppressed inside this package.

Hierarchy:
    RadioError
    ├── ValidationError
    ├── TaskNotFoundError
    ├── ConflictError
    │   ├── ClaimConflictError
    │   └── TitleConflictError
    ├── InvalidTransitionError
    ├── CredentialError
    ├── TaskFormatError
    └── ChannelError
        ├── AuthenticationError
        ├── AccessDeniedError
        ├── ResourceNotFoundError
        └── RateLimitError
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from .domain.enums import TaskStatus


__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "ChannelError",
    "ClaimConflictError",
    "ConflictError",
    "CredentialError",
    "InvalidTransitionError",
    "RadioError",
    "RateLimitError",
    "ResourceNotFoundError",
    "TaskFormatError",
    "TaskNotFoundError",
    "TitleConflictError",
    "ValidationError",
]


class RadioError(Exception):
    """Base exception for all taskradio errors."""

    def __init__(self, message: str, *, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


# =============================================================================
# Caller errors
# =============================================================================


class ValidationError(RadioError):
    """A required field is missing or malformed."""

    def __init__(self, message: str, *, field: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


class TaskNotFoundError(RadioError):
    """The referenced task does not exist on the channel."""

    def __init__(
        self,
        message: str = "task not found",
        *,
        exid: str | None = None,
        title: str | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.exid = exid
        self.title = title


class ConflictError(RadioError):
    """The requested change collides with existing state."""


class ClaimConflictError(ConflictError):
    """A claimed task was re-claimed from a different branch."""

    def __init__(
        self,
        message: str = "task already claimed by different branch",
        *,
        exid: str | None = None,
        claimed_branch: str | None = None,
        current_branch: str | None = None,
        **kwargs,
    ):
        super().__init__(
            f"{message}: claimed on '{claimed_branch}', current branch is '{current_branch}'",
            **kwargs,
        )
        self.exid = exid
        self.claimed_branch = claimed_branch
        self.current_branch = current_branch


class TitleConflictError(ConflictError):
    """Another task already holds the title within the repo and channel."""

    def __init__(self, message: str, *, title: str, exid: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.title = title
        self.exid = exid


class InvalidTransitionError(RadioError):
    """The status move is not in the lifecycle transition table."""

    def __init__(
        self,
        message: str = "invalid status transition",
        *,
        exid: str | None = None,
        status_before: TaskStatus | None = None,
        status_after: TaskStatus | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.exid = exid
        self.status_before = status_before
        self.status_after = status_after


class CredentialError(RadioError):
    """No usable credential for the remote channel."""

    def __init__(self, message: str, *, method: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.method = method


class TaskFormatError(RadioError):
    """A stored task could not be decoded."""

    def __init__(self, message: str, *, field: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


# =============================================================================
# Upstream (backing store) errors
# =============================================================================


class ChannelError(RadioError):
    """The backing store failed."""

    def __init__(
        self,
        message: str,
        *,
        exid: str | None = None,
        status_code: int | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.exid = exid
        self.status_code = status_code


class AuthenticationError(ChannelError):
    """The remote rejected the credential."""


class AccessDeniedError(ChannelError):
    """The credential lacks permission for the operation."""


class ResourceNotFoundError(ChannelError):
    """The remote resource does not exist."""


class RateLimitError(ChannelError):
    """The remote throttled the request."""

    def __init__(self, message: str, *, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after
