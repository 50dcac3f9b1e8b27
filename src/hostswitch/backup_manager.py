"""
Backup Manager for hostswitch.

Snapshots the live hosts file into the backup directory before it is
overwritten. Backups are best effort: a failed backup never blocks a switch.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from .config import HostSwitchConfig
from .console import ConsoleLogger
from .storage import FileSystem


BACKUP_PREFIX = "hosts_"


def backup_name(moment: datetime) -> str:
    """
    Build a backup file name from a UTC ISO-8601 timestamp.

    Millisecond precision with ':' and '.' made file-safe, e.g.
    hosts_2024-01-02T03-04-05-678Z.
    """
    moment = moment.astimezone(timezone.utc)
    stamp = moment.strftime("%Y-%m-%dT%H-%M-%S-") + f"{moment.microsecond // 1000:03d}Z"
    return f"{BACKUP_PREFIX}{stamp}"


class BackupManager:
    """Creates and lists timestamped copies of the hosts file."""

    def __init__(
        self,
        file_system: FileSystem,
        config: HostSwitchConfig,
        logger: Optional[ConsoleLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._fs = file_system
        self._backup_dir = config.backup_dir
        self._hosts_path = config.hosts_path
        self._logger = logger
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def backup(self) -> Optional[Path]:
        """
        Copy the live hosts file into the backup directory.

        Returns:
            Path of the new backup, or None if it could not be created
        """
        try:
            self._fs.ensure_dir(self._backup_dir)
            target = self._unused_path(backup_name(self._clock()))
            self._fs.copy(self._hosts_path, target)
        except OSError as e:
            if self._logger:
                self._logger.warning(
                    f"Could not back up {self._hosts_path}: {e}",
                    {"hosts_path": str(self._hosts_path), "error": str(e)},
                )
            return None

        if self._logger:
            self._logger.debug("Backed up hosts file", {"backup_path": str(target)})
        return target

    def list_backups(self) -> list[Path]:
        """Return existing backups, oldest first."""
        if not self._fs.exists(self._backup_dir):
            return []
        names = sorted(
            name for name in self._fs.list_dir(self._backup_dir)
            if name.startswith(BACKUP_PREFIX)
        )
        return [self._backup_dir / name for name in names]

    def _unused_path(self, name: str) -> Path:
        # Existing backups are never overwritten
        candidate = self._backup_dir / name
        counter = 1
        while self._fs.exists(candidate):
            candidate = self._backup_dir / f"{name}_{counter}"
            counter += 1
        return candidate
