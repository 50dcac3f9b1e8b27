"""
hostswitch - Switch between named hosts-file profiles.

This package keeps named copies of the system hosts file, swaps the live
file for one of them on request, backs the live file up before overwriting
unmanaged content and re-runs itself under sudo when it lacks privileges.
"""

__version__ = "0.1.0"
__author__ = "hostswitch contributors"

from hostswitch.exceptions import (
    HostSwitchError,
    InvalidProfileNameError,
    ProfileNotFoundError,
    ProfileExistsError,
    ActiveProfileError,
    StorageError,
    PermissionDeniedError,
    ElevationError,
    EditorError,
)
from hostswitch.enums import (
    ErrorCode,
    LogLevel,
    ProfileSource,
    SwitchState,
)
from hostswitch.models import (
    ActiveProfileRecord,
    CommandResult,
    ElevationResult,
    ProfileInfo,
    SwitchResult,
)
from hostswitch.config import (
    HostSwitchConfig,
    create_default_config,
    default_hosts_path,
    load_config,
)
from hostswitch.storage import (
    FileSystem,
    LocalFileSystem,
)
from hostswitch.profile_store import (
    ProfileStore,
    DEFAULT_HOSTS_CONTENT,
    validate_profile_name,
)
from hostswitch.state_tracker import (
    CurrentStateTracker,
    compute_checksum,
)
from hostswitch.backup_manager import (
    BackupManager,
)
from hostswitch.privilege import (
    PrivilegeGate,
    ProcessRunner,
    SubprocessRunner,
)
from hostswitch.console import (
    ConsoleLogger,
    LogEntry,
)
from hostswitch.i18n import (
    get_message,
    get_all_message_keys,
    get_missing_translations,
    validate_translations,
    TRANSLATIONS,
    SUPPORTED_LANGUAGES,
    DEFAULT_LANGUAGE,
)
from hostswitch.editor import (
    EditorLauncher,
)
from hostswitch.update_checker import (
    UpdateChecker,
    UpdateInfo,
)
from hostswitch.orchestrator import (
    SwitchOrchestrator,
)
from hostswitch.interactive import (
    InteractiveMenu,
)
from hostswitch.cli import (
    main as cli_main,
    create_parser,
)

__all__ = [
    # Exceptions
    "HostSwitchError",
    "InvalidProfileNameError",
    "ProfileNotFoundError",
    "ProfileExistsError",
    "ActiveProfileError",
    "StorageError",
    "PermissionDeniedError",
    "ElevationError",
    "EditorError",
    # Enums
    "ErrorCode",
    "LogLevel",
    "ProfileSource",
    "SwitchState",
    # Models
    "ActiveProfileRecord",
    "CommandResult",
    "ElevationResult",
    "ProfileInfo",
    "SwitchResult",
    # Configuration
    "HostSwitchConfig",
    "create_default_config",
    "default_hosts_path",
    "load_config",
    # Storage
    "FileSystem",
    "LocalFileSystem",
    # Profile Store
    "ProfileStore",
    "DEFAULT_HOSTS_CONTENT",
    "validate_profile_name",
    # State Tracker
    "CurrentStateTracker",
    "compute_checksum",
    # Backup Manager
    "BackupManager",
    # Privilege Gate
    "PrivilegeGate",
    "ProcessRunner",
    "SubprocessRunner",
    # Console
    "ConsoleLogger",
    "LogEntry",
    # I18n
    "get_message",
    "get_all_message_keys",
    "get_missing_translations",
    "validate_translations",
    "TRANSLATIONS",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    # Editor
    "EditorLauncher",
    # Update Checker
    "UpdateChecker",
    "UpdateInfo",
    # Orchestrator
    "SwitchOrchestrator",
    # Interactive
    "InteractiveMenu",
    # CLI
    "cli_main",
    "create_parser",
]
