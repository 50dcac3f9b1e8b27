"""
Profile Store for hostswitch.

A catalog of named profiles kept as one file per profile in the profile
directory. File existence defines profile existence; there is no separate
metadata. The store knows nothing about which profile is active.
"""

import re
from pathlib import Path

from .config import HostSwitchConfig
from .enums import ProfileSource
from .exceptions import (
    InvalidProfileNameError,
    ProfileExistsError,
    ProfileNotFoundError,
    StorageError,
)
from .storage import FileSystem


PROFILE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

DEFAULT_HOSTS_CONTENT = (
    "# Host Database\n"
    "# localhost is used to configure the loopback interface\n"
    "# when the system is booting. Do not change this entry.\n"
    "127.0.0.1       localhost\n"
    "255.255.255.255 broadcasthost\n"
    "::1             localhost\n"
)


def validate_profile_name(name: str) -> str:
    """
    Check a profile name against the allowed character set.

    Args:
        name: Candidate profile name

    Returns:
        The name unchanged

    Raises:
        InvalidProfileNameError: If the name is empty or has other characters
    """
    if not name or not name.strip():
        raise InvalidProfileNameError(
            "Profile name cannot be empty",
            details={"name": name or ""},
        )
    if not PROFILE_NAME_PATTERN.fullmatch(name):
        raise InvalidProfileNameError(
            "Invalid profile name. Use only letters, numbers, hyphens, and underscores",
            details={"name": name},
        )
    return name


class ProfileStore:
    """CRUD over profile files in the profile directory."""

    def __init__(self, file_system: FileSystem, config: HostSwitchConfig) -> None:
        self._fs = file_system
        self._profiles_dir = config.profiles_dir
        self._hosts_path = config.hosts_path
        self._suffix = config.profile_suffix

    def list(self) -> set[str]:
        """
        Enumerate profile names.

        Returns:
            Names of files in the profile directory with the profile suffix,
            suffix stripped. Empty if the directory does not exist.
        """
        if not self._fs.exists(self._profiles_dir):
            return set()

        try:
            entries = self._fs.list_dir(self._profiles_dir)
        except OSError as e:
            raise StorageError(
                f"Failed to list profiles: {e}",
                details={"path": str(self._profiles_dir), "error": str(e)},
            ) from e

        return {
            entry[: -len(self._suffix)]
            for entry in entries
            if entry.endswith(self._suffix) and len(entry) > len(self._suffix)
        }

    def exists(self, name: str) -> bool:
        return self._fs.exists(self.path(name))

    def require(self, name: str) -> Path:
        """
        Return the path of an existing profile.

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        profile_path = self.path(name)
        if not self._fs.exists(profile_path):
            raise ProfileNotFoundError(
                f"Profile '{name}' does not exist.",
                details={"name": name},
            )
        return profile_path

    def path(self, name: str) -> Path:
        """Return the canonical file path for a profile."""
        return self._profiles_dir / f"{name}{self._suffix}"

    def create(self, name: str, source: ProfileSource) -> Path:
        """
        Create a profile from the default template or the live hosts file.

        Args:
            name: Profile name
            source: Where the initial content comes from

        Returns:
            Path of the new profile file

        Raises:
            ProfileExistsError: If a profile with that name already exists
            StorageError: If the file cannot be written
        """
        profile_path = self.path(name)
        if self._fs.exists(profile_path):
            raise ProfileExistsError(
                f"Profile '{name}' already exists.",
                details={"name": name},
            )

        try:
            self._fs.ensure_dir(self._profiles_dir)
            if source == ProfileSource.LIVE_FILE:
                self._fs.copy(self._hosts_path, profile_path)
            else:
                self._fs.write_text(profile_path, DEFAULT_HOSTS_CONTENT)
        except OSError as e:
            raise StorageError(
                f"Error creating profile: {e}",
                details={"name": name, "error": str(e)},
            ) from e

        return profile_path

    def delete(self, name: str) -> None:
        """
        Remove a profile file.

        Raises:
            ProfileNotFoundError: If the profile does not exist
            StorageError: If the file cannot be removed
        """
        profile_path = self.require(name)
        try:
            self._fs.unlink(profile_path)
        except OSError as e:
            raise StorageError(
                f"Error deleting profile: {e}",
                details={"name": name, "error": str(e)},
            ) from e

    def read(self, name: str) -> str:
        """
        Read a profile's content.

        Raises:
            ProfileNotFoundError: If the profile does not exist
            StorageError: If the file cannot be read
        """
        return self._read(name, binary=False)

    def read_bytes(self, name: str) -> bytes:
        """Read a profile's content without decoding."""
        return self._read(name, binary=True)

    def _read(self, name: str, binary: bool):
        profile_path = self.require(name)
        try:
            if binary:
                return self._fs.read_bytes(profile_path)
            return self._fs.read_text(profile_path)
        except OSError as e:
            raise StorageError(
                f"Error reading profile: {e}",
                details={"name": name, "error": str(e)},
            ) from e
