"""
Exit codes for the taskradio CLI.

Each error kind maps to its own non-zero code so scripts can react
without parsing messages.
"""

from enum import IntEnum

from taskradio.core.exceptions import (
    AuthenticationError,
    ChannelError,
    ConflictError,
    CredentialError,
    InvalidTransitionError,
    TaskFormatError,
    TaskNotFoundError,
    ValidationError,
)


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    VALIDATION_ERROR = 3
    NOT_FOUND = 4
    CONFLICT = 5
    INVALID_TRANSITION = 6
    CREDENTIAL_ERROR = 7
    CHANNEL_ERROR = 8
    FORMAT_ERROR = 9
    SIGINT = 130

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExitCode":
        """
        Map an exception to an exit code.

        Args:
            exc: The exception that ended the command

        Returns:
            The matching exit code, ERROR for anything unrecognized
        """
        if isinstance(exc, KeyboardInterrupt):
            return cls.SIGINT
        if isinstance(exc, ValidationError):
            return cls.VALIDATION_ERROR
        if isinstance(exc, TaskNotFoundError):
            return cls.NOT_FOUND
        if isinstance(exc, ConflictError):
            return cls.CONFLICT
        if isinstance(exc, InvalidTransitionError):
            return cls.INVALID_TRANSITION
        if isinstance(exc, (CredentialError, AuthenticationError)):
            return cls.CREDENTIAL_ERROR
        if isinstance(exc, TaskFormatError):
            return cls.FORMAT_ERROR
        if isinstance(exc, ChannelError):
            return cls.CHANNEL_ERROR
        return cls.ERROR
