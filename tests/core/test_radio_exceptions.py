"""
Tests for the exception hierarchy.
"""

import pytest

from taskradio.core.domain import TaskStatus
from taskradio.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ChannelError,
    ClaimConflictError,
    ConflictError,
    CredentialError,
    InvalidTransitionError,
    RadioError,
    RateLimitError,
    ResourceNotFoundError,
    TaskFormatError,
    TaskNotFoundError,
    TitleConflictError,
    ValidationError,
)


class TestRadioError:
    """Tests for the base error."""

    def test_message_only(self):
        assert str(RadioError("boom")) == "boom"

    def test_includes_cause(self):
        cause = OSError("disk full")
        error = RadioError("write failed", cause=cause)

        assert error.cause is cause
        assert str(error) == "write failed (caused by: disk full)"


class TestHierarchy:
    """Every error is a RadioError, grouped by kind."""

    @pytest.mark.parametrize(
        "cls",
        [
            ValidationError,
            TaskNotFoundError,
            ConflictError,
            InvalidTransitionError,
            CredentialError,
            TaskFormatError,
            ChannelError,
        ],
    )
    def test_kinds_derive_from_radio_error(self, cls):
        assert issubclass(cls, RadioError)

    def test_conflicts(self):
        assert issubclass(ClaimConflictError, ConflictError)
        assert issubclass(TitleConflictError, ConflictError)

    @pytest.mark.parametrize(
        "cls", [AuthenticationError, AccessDeniedError, ResourceNotFoundError, RateLimitError]
    )
    def test_upstream_errors_are_channel_errors(self, cls):
        assert issubclass(cls, ChannelError)


class TestStructuredContext:
    """Errors carry the fields a caller needs to build a message."""

    def test_validation_field(self):
        assert ValidationError("missing", field="title").field == "title"

    def test_not_found_ref(self):
        error = TaskNotFoundError(exid="42")
        assert error.exid == "42"
        assert error.title is None
        assert str(error) == "task not found"

    def test_claim_conflict_names_both_branches(self):
        error = ClaimConflictError(exid="42", claimed_branch="feat/a", current_branch="feat/b")

        assert error.claimed_branch == "feat/a"
        assert error.current_branch == "feat/b"
        assert "feat/a" in str(error)
        assert "feat/b" in str(error)

    def test_invalid_transition_statuses(self):
        error = InvalidTransitionError(
            exid="42",
            status_before=TaskStatus.QUEUED,
            status_after=TaskStatus.DELIVERED,
        )
        assert error.status_before is TaskStatus.QUEUED
        assert error.status_after is TaskStatus.DELIVERED

    def test_channel_error_status_code(self):
        error = AccessDeniedError("denied", status_code=403)
        assert error.status_code == 403

    def test_rate_limit_retry_after(self):
        error = RateLimitError("slow down", retry_after=30, status_code=429)
        assert error.retry_after == 30
        assert error.status_code == 429
