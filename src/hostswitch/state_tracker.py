"""
Current-State Tracker for hostswitch.

Persists which profile is active together with a checksum of the live hosts
file taken at the moment of the switch. Comparing that checksum with the
file's current content tells whether the hosts file was edited outside of
hostswitch since then ("drift").
"""

import hashlib
from datetime import datetime, timezone
from typing import Callable, Optional

from .config import HostSwitchConfig
from .exceptions import StorageError
from .models import ActiveProfileRecord
from .storage import FileSystem


def compute_checksum(content: bytes) -> str:
    """
    Compute the drift checksum of hosts file content.

    MD5 keeps records compatible with existing current.json files; it is a
    change detector, not a security boundary.
    """
    return hashlib.md5(content).hexdigest()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CurrentStateTracker:
    """
    Tracks the active profile and detects out-of-band hosts file edits.

    Reads fail open: a missing, unreadable or malformed record is treated
    as "no active profile" and as drifted.
    """

    def __init__(
        self,
        file_system: FileSystem,
        config: HostSwitchConfig,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """
        Initialize the tracker.

        Args:
            file_system: Storage used for the record and the hosts file
            config: Paths of the record and the live hosts file
            clock: Source of the record timestamp
        """
        self._fs = file_system
        self._record_path = config.current_profile_file
        self._hosts_path = config.hosts_path
        self._clock = clock

    def get_record(self) -> Optional[ActiveProfileRecord]:
        """Load the persisted record, or None if absent or unreadable."""
        try:
            if not self._fs.exists(self._record_path):
                return None
            return ActiveProfileRecord.from_dict(self._fs.read_json(self._record_path))
        except (OSError, ValueError):
            # json.JSONDecodeError is a ValueError
            return None

    def get_active(self) -> Optional[str]:
        record = self.get_record()
        return record.profile if record else None

    def compute_checksum(self) -> Optional[str]:
        """Checksum of the live hosts file, or None if it cannot be read."""
        try:
            return compute_checksum(self._fs.read_bytes(self._hosts_path))
        except OSError:
            return None

    def set_active(self, name: str) -> ActiveProfileRecord:
        """
        Record name as the active profile with the live file's checksum.

        An unreadable hosts file is recorded with a null checksum.

        Raises:
            StorageError: If the record cannot be written
        """
        record = ActiveProfileRecord(
            profile=name,
            checksum=self.compute_checksum(),
            updated_at=self._clock().isoformat(),
        )

        try:
            self._fs.ensure_dir(self._record_path.parent)
            self._fs.write_json(self._record_path, record.to_dict())
        except OSError as e:
            raise StorageError(
                f"Failed to write current profile record: {e}",
                details={"path": str(self._record_path), "error": str(e)},
            ) from e

        return record

    def is_drifted(self) -> bool:
        """
        Check whether the hosts file changed since the last recorded switch.

        Returns:
            False only when a record with a non-null checksum exists and it
            equals the live file's current checksum
        """
        record = self.get_record()
        if record is None or not record.checksum:
            return True

        current = self.compute_checksum()
        if current is None:
            return True
        return current != record.checksum
