"""
Enumeration types for hostswitch.

These enums provide type-safe constants for error codes, switch states
and output options throughout the system.
"""

from enum import Enum


class ErrorCode(Enum):
    """Error codes carried by exceptions and failed results."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    CANNOT_DELETE_ACTIVE = "cannot_delete_active"
    PERMISSION_DENIED = "permission_denied"
    ELEVATION_FAILED = "elevation_failed"
    IO_FAILURE = "io_failure"
    INVALID_NAME = "invalid_name"
    EDITOR_FAILED = "editor_failed"


class ProfileSource(Enum):
    """Where the content of a newly created profile comes from."""

    DEFAULT_TEMPLATE = "default_template"
    LIVE_FILE = "live_file"


class SwitchState(Enum):
    """States a profile switch passes through."""

    REQUESTED = "requested"
    VALIDATED = "validated"
    ELEVATION_CHECKED = "elevation_checked"
    ELEVATING = "elevating"
    BACKUP_DECISION = "backup_decision"
    APPLYING = "applying"
    RECORDED = "recorded"
    FAILED = "failed"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    SUCCESS = "success"
    WARN = "warn"
    ERROR = "error"
