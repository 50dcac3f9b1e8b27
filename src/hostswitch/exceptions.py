"""
Exception classes for hostswitch.

All exceptions inherit from HostSwitchError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional

from .enums import ErrorCode


class HostSwitchError(Exception):
    """Base exception for all hostswitch errors."""

    default_code = ErrorCode.IO_FAILURE

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidProfileNameError(HostSwitchError):
    """Raised when a profile name fails the restricted character set."""

    default_code = ErrorCode.INVALID_NAME


class ProfileNotFoundError(HostSwitchError):
    """Raised when a profile file does not exist."""

    default_code = ErrorCode.NOT_FOUND


class ProfileExistsError(HostSwitchError):
    """Raised when creating a profile whose name is already taken."""

    default_code = ErrorCode.ALREADY_EXISTS


class ActiveProfileError(HostSwitchError):
    """Raised when deleting the profile that is currently active."""

    default_code = ErrorCode.CANNOT_DELETE_ACTIVE


class StorageError(HostSwitchError):
    """Raised when a read, write or copy operation fails."""

    default_code = ErrorCode.IO_FAILURE


class PermissionDeniedError(StorageError):
    """Raised when the OS rejects a write to the hosts file."""

    default_code = ErrorCode.PERMISSION_DENIED


class ElevationError(HostSwitchError):
    """Raised when the elevation helper cannot be invoked."""

    default_code = ErrorCode.ELEVATION_FAILED


class EditorError(HostSwitchError):
    """Raised when the external editor cannot be started or fails."""

    default_code = ErrorCode.EDITOR_FAILED
