"""
Data models for hostswitch.

This module defines the persisted active-profile record and the result
structures returned by the orchestrator and the privilege gate.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .enums import ErrorCode, SwitchState


@dataclass
class ActiveProfileRecord:
    """The single persisted record of which profile is active."""

    profile: Optional[str]
    checksum: Optional[str]
    updated_at: str

    def to_dict(self) -> dict:
        """Serialize using the on-disk key names."""
        return {
            "profile": self.profile,
            "checksum": self.checksum,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ActiveProfileRecord":
        """
        Build a record from its on-disk form.

        Raises:
            ValueError: If the data does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ValueError("record must be a JSON object")

        profile = data.get("profile")
        checksum = data.get("checksum")
        if profile is not None and not isinstance(profile, str):
            raise ValueError("profile must be a string or null")
        if checksum is not None and not isinstance(checksum, str):
            raise ValueError("checksum must be a string or null")

        return cls(
            profile=profile,
            checksum=checksum,
            updated_at=str(data.get("updatedAt", "")),
        )


@dataclass
class ProfileInfo:
    """A profile name annotated with whether it is the active one."""

    name: str
    is_current: bool = False


@dataclass
class ElevationResult:
    """Outcome of re-running hostswitch under elevated privileges."""

    success: bool
    message: str
    exit_code: Optional[int] = None


@dataclass
class SwitchResult:
    """Outcome of a profile switch."""

    success: bool
    message: Optional[str]
    state: SwitchState
    backup_path: Optional[Path] = None
    requires_sudo: bool = False
    warnings: list[str] = field(default_factory=list)
    error_code: Optional[ErrorCode] = None
    # Set when an elevated child ran; its exit status is passed through
    exit_code: Optional[int] = None


@dataclass
class CommandResult:
    """Structured result every orchestrator operation converts to."""

    success: bool
    message: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)
    requires_sudo: bool = False
    requires_confirmation: bool = False
    error_code: Optional[ErrorCode] = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        data = {}
        for key, value in self.data.items():
            if isinstance(value, Path):
                data[key] = str(value)
            elif isinstance(value, list):
                data[key] = [
                    {"name": item.name, "is_current": item.is_current}
                    if isinstance(item, ProfileInfo) else str(item)
                    for item in value
                ]
            else:
                data[key] = value

        return {
            "success": self.success,
            "message": self.message,
            "data": data,
            "requires_sudo": self.requires_sudo,
            "requires_confirmation": self.requires_confirmation,
            "error_code": self.error_code.value if self.error_code else None,
            "warnings": list(self.warnings),
        }
