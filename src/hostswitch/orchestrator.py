"""
Switch Orchestrator for hostswitch.

This module composes the profile store, the current-state tracker, the
backup manager and the privilege gate into the user-facing operations:
- create, delete, show and list profiles
- switch the live hosts file to a profile, backing it up first when no
  profile is active or the file was edited outside of hostswitch
- hand a switch off to an elevated re-run when privileges are missing

Every HostSwitchError raised below this layer is converted into a
structured result; nothing propagates to the caller in normal operation.
"""

from pathlib import Path
from typing import Optional, Sequence

from .backup_manager import BackupManager
from .config import HostSwitchConfig
from .console import ConsoleLogger
from .editor import EditorLauncher
from .enums import ErrorCode, ProfileSource, SwitchState
from .exceptions import (
    ActiveProfileError,
    HostSwitchError,
    PermissionDeniedError,
    StorageError,
)
from .i18n import get_message
from .models import CommandResult, ProfileInfo, SwitchResult
from .privilege import PrivilegeGate
from .profile_store import ProfileStore, validate_profile_name
from .state_tracker import CurrentStateTracker
from .storage import FileSystem, LocalFileSystem


class SwitchOrchestrator:
    """
    Main service behind every hostswitch command.

    Collaborators are injected so tests can run against a temporary
    directory and a fake process runner without touching /etc/hosts.
    """

    def __init__(
        self,
        config: HostSwitchConfig,
        file_system: Optional[FileSystem] = None,
        logger: Optional[ConsoleLogger] = None,
        privilege_gate: Optional[PrivilegeGate] = None,
        profile_store: Optional[ProfileStore] = None,
        state_tracker: Optional[CurrentStateTracker] = None,
        backup_manager: Optional[BackupManager] = None,
        language: Optional[str] = None,
        rerun_args: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            config: Paths and options
            file_system: Storage adapter (defaults to LocalFileSystem)
            logger: Optional console logger for diagnostics
            privilege_gate: Elevation policy (defaults to PrivilegeGate)
            profile_store: Profile catalog (built from config if omitted)
            state_tracker: Active-profile tracker (built from config if omitted)
            backup_manager: Backup manager (built from config if omitted)
            language: Message language (defaults to config.language)
            rerun_args: Global arguments prepended to an elevated re-run
        """
        self._config = config
        self._fs = file_system or LocalFileSystem()
        self._logger = logger
        self._language = language or config.language
        self._gate = privilege_gate or PrivilegeGate(helper=config.elevation_helper)
        self._store = profile_store or ProfileStore(self._fs, config)
        self._tracker = state_tracker or CurrentStateTracker(self._fs, config)
        self._backups = backup_manager or BackupManager(self._fs, config, logger)
        self._rerun_args = list(rerun_args) if rerun_args is not None else [
            "--config-dir", str(config.config_dir),
            "--hosts-file", str(config.hosts_path),
            "--language", self._language,
            "--log-format", config.log_format,
            "--no-update-check",
        ]

    @property
    def config(self) -> HostSwitchConfig:
        return self._config

    @property
    def language(self) -> str:
        return self._language

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_active_profile(self) -> Optional[str]:
        return self._tracker.get_active()

    def profile_exists(self, name: str) -> bool:
        return self._store.exists(name)

    def profile_path(self, name: str) -> Path:
        return self._store.path(name)

    def list_profiles(self) -> CommandResult:
        """List profiles sorted by name, flagging the active one."""
        try:
            names = sorted(self._store.list())
        except HostSwitchError as e:
            return self._error_result(e, "error.list_failed")

        current = self._tracker.get_active()
        profiles = [ProfileInfo(name=name, is_current=name == current) for name in names]
        return CommandResult(success=True, data={"profiles": profiles})

    def deletable_profiles(self) -> list[ProfileInfo]:
        result = self.list_profiles()
        if not result.success:
            return []
        return [profile for profile in result.data["profiles"] if not profile.is_current]

    def get_profile_content(self, name: str) -> CommandResult:
        try:
            validate_profile_name(name)
            content = self._store.read(name)
        except HostSwitchError as e:
            return self._error_result(e, "error.read_failed")
        return CommandResult(success=True, data={"name": name, "content": content})

    def get_status(self) -> CommandResult:
        """Report the active profile and whether the hosts file drifted."""
        active = self._tracker.get_active()
        drifted = self._tracker.is_drifted()
        if active is None:
            message = get_message("current.none", self._language)
        else:
            message = get_message("current.active", self._language, name=active)
        return CommandResult(
            success=True,
            message=message,
            data={"active": active, "drifted": drifted},
        )

    def list_backups(self) -> CommandResult:
        try:
            backups = self._backups.list_backups()
        except OSError as e:
            return CommandResult(
                success=False,
                message=get_message("error.list_failed", self._language, error=str(e)),
                error_code=ErrorCode.IO_FAILURE,
            )
        return CommandResult(success=True, data={"backups": backups})

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_profile(self, name: str, from_live_file: bool = False) -> CommandResult:
        """
        Create a profile from the default template or the live hosts file.

        Returns:
            CommandResult whose message states the content's origin
        """
        source = ProfileSource.LIVE_FILE if from_live_file else ProfileSource.DEFAULT_TEMPLATE
        try:
            validate_profile_name(name)
            path = self._store.create(name, source)
        except HostSwitchError as e:
            return self._error_result(e, "error.create_failed")

        key = "create.from_current" if from_live_file else "create.default"
        self._debug("Created profile", {"name": name, "source": source.value, "path": str(path)})
        return CommandResult(
            success=True,
            message=get_message(key, self._language, name=name),
            data={"name": name, "path": path, "source": source.value},
        )

    def delete_profile(self, name: str) -> CommandResult:
        """Delete a profile unless it is the active one."""
        try:
            validate_profile_name(name)
            self._store.require(name)
            if self._tracker.get_active() == name:
                raise ActiveProfileError(
                    f"Cannot delete the currently active profile '{name}'.",
                    details={"name": name},
                )
            self._store.delete(name)
        except HostSwitchError as e:
            return self._error_result(e, "error.delete_failed")

        self._debug("Deleted profile", {"name": name})
        return CommandResult(
            success=True,
            message=get_message("delete.success", self._language, name=name),
            data={"name": name},
        )

    def edit_profile(self, name: str, launcher: EditorLauncher) -> CommandResult:
        """Open a profile in the external editor."""
        try:
            validate_profile_name(name)
            launcher.open(self._store.require(name))
        except HostSwitchError as e:
            return self._error_result(e, "error.read_failed")

        return CommandResult(
            success=True,
            message=get_message("edit.success", self._language, name=name),
            data={"name": name},
        )

    def switch_profile(self, name: str) -> SwitchResult:
        """
        Replace the live hosts file with a profile.

        Validation failures and copy failures are terminal. A failed backup
        only leaves backup_path unset. When elevation is required the
        elevated re-run's outcome is the final result.
        """
        try:
            validate_profile_name(name)
            self._store.require(name)
        except HostSwitchError as e:
            return self._switch_failure(e)

        if self._gate.requires_elevation(self._config.hosts_path):
            return self._elevate(name)

        warnings: list[str] = []
        backup_path: Optional[Path] = None
        active = self._tracker.get_active()
        drifted = self._tracker.is_drifted()
        if active is None or drifted:
            backup_path = self._backups.backup()
            if drifted and active is not None:
                warnings.append(get_message("switch.drift_warning", self._language))
                self._debug("Hosts file drifted", {"active": active})

        try:
            content = self._store.read_bytes(name)
            self._write_hosts(content)
        except HostSwitchError as e:
            return self._switch_failure(e, backup_path=backup_path, warnings=warnings)

        try:
            self._tracker.set_active(name)
        except StorageError as e:
            return SwitchResult(
                success=False,
                message=get_message(
                    "error.record_failed",
                    self._language,
                    error=e.details.get("error", e.message),
                ),
                state=SwitchState.FAILED,
                backup_path=backup_path,
                warnings=warnings,
                error_code=e.code,
            )
        self._debug("Switched profile", {"name": name, "backup_path": str(backup_path)})
        return SwitchResult(
            success=True,
            message=get_message("switch.success", self._language, name=name),
            state=SwitchState.RECORDED,
            backup_path=backup_path,
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _elevate(self, name: str) -> SwitchResult:
        """
        Hand the switch to an elevated child process.

        The child prints its own concluding message, so once it has run the
        result carries only its exit status. A message is produced here only
        when the child could not be started.
        """
        if self._logger:
            self._logger.info(get_message("switch.elevating", self._language))

        result = self._gate.elevate_and_rerun([*self._rerun_args, "switch", "--", name])
        if result.exit_code is None:
            return SwitchResult(
                success=False,
                message=get_message("error.elevation_failed", self._language, message=result.message),
                state=SwitchState.FAILED,
                error_code=ErrorCode.ELEVATION_FAILED,
            )

        self._debug("Elevated switch finished", {"name": name, "exit_code": result.exit_code})
        if result.success:
            return SwitchResult(
                success=True,
                message=None,
                state=SwitchState.ELEVATING,
                exit_code=result.exit_code,
            )
        return SwitchResult(
            success=False,
            message=None,
            state=SwitchState.FAILED,
            error_code=ErrorCode.ELEVATION_FAILED,
            exit_code=result.exit_code,
        )

    def _write_hosts(self, content: bytes) -> None:
        hosts_path = self._config.hosts_path
        try:
            self._fs.replace_contents(hosts_path, content)
        except PermissionError as e:
            raise PermissionDeniedError(
                f"Permission denied writing {hosts_path}",
                details={"path": str(hosts_path), "error": str(e)},
            ) from e
        except OSError as e:
            raise StorageError(
                f"Failed to write {hosts_path}: {e}",
                details={"path": str(hosts_path), "error": str(e)},
            ) from e

    def _switch_failure(
        self,
        error: HostSwitchError,
        backup_path: Optional[Path] = None,
        warnings: Optional[list[str]] = None,
    ) -> SwitchResult:
        result = self._error_result(error, "error.switch_failed")
        return SwitchResult(
            success=False,
            message=result.message or error.message,
            state=SwitchState.FAILED,
            backup_path=backup_path,
            requires_sudo=result.requires_sudo,
            warnings=warnings or [],
            error_code=error.code,
        )

    def _error_result(self, error: HostSwitchError, io_key: str) -> CommandResult:
        """Convert an exception into a failed CommandResult with a translated message."""
        code = error.code
        name = error.details.get("name", "")

        if code == ErrorCode.INVALID_NAME:
            key = "error.invalid_name" if name.strip() else "error.invalid_name.empty"
        elif code in (
            ErrorCode.NOT_FOUND,
            ErrorCode.ALREADY_EXISTS,
            ErrorCode.CANNOT_DELETE_ACTIVE,
            ErrorCode.PERMISSION_DENIED,
        ):
            key = f"error.{code.value}"
        elif code == ErrorCode.EDITOR_FAILED:
            key = "error.editor_failed"
        else:
            key = io_key

        if code == ErrorCode.EDITOR_FAILED:
            detail = error.message
        else:
            detail = error.details.get("error", error.message)
        message = get_message(key, self._language, name=name, error=detail)
        self._debug("Operation failed", error.to_dict())

        return CommandResult(
            success=False,
            message=message,
            requires_sudo=code == ErrorCode.PERMISSION_DENIED,
            error_code=code,
        )

    def _debug(self, message: str, data: Optional[dict] = None) -> None:
        if self._logger:
            self._logger.debug(message, data)
