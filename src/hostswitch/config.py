"""
Configuration for hostswitch.

This module defines the configuration structure, the platform-dependent
defaults (config root, hosts file location) and the environment overrides
read at startup. A `.env` file in the config root is honoured through
python-dotenv without overriding variables already set in the environment.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values


CONFIG_DIR_NAME = ".hostswitch"
PROFILE_SUFFIX = ".hosts"

POSIX_HOSTS_PATH = Path("/etc/hosts")
WINDOWS_HOSTS_PATH = Path("C:\\Windows\\System32\\drivers\\etc\\hosts")

SUPPORTED_LANGUAGES = ("en", "ja")
LOG_FORMATS = ("text", "json")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _is_true(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


def default_hosts_path(platform: Optional[str] = None) -> Path:
    """Return the live hosts file location for a platform."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return WINDOWS_HOSTS_PATH
    return POSIX_HOSTS_PATH


@dataclass
class HostSwitchConfig:
    """Locations and options used by every hostswitch component."""

    config_dir: Path
    profiles_dir: Path
    backup_dir: Path
    hosts_path: Path
    current_profile_file: Path
    update_check_file: Path
    profile_suffix: str = PROFILE_SUFFIX
    language: str = "en"
    color: bool = True
    log_format: str = "text"
    update_check: bool = True
    elevation_helper: str = "sudo"
    debug: bool = False
    extra: dict[str, str] = field(default_factory=dict)

    def ensure_dirs(self) -> None:
        """
        Create the config root, profile and backup directories.

        Raises:
            OSError: If a directory cannot be created
        """
        for directory in (self.config_dir, self.profiles_dir, self.backup_dir):
            directory.mkdir(parents=True, exist_ok=True)


def create_default_config(
    home: Optional[Path] = None,
    platform: Optional[str] = None,
    config_dir: Optional[Path] = None,
    hosts_path: Optional[Path] = None,
) -> HostSwitchConfig:
    """
    Create the default configuration.

    Args:
        home: Home directory (defaults to Path.home())
        platform: Platform identifier as in sys.platform
        config_dir: Explicit config root, overrides home
        hosts_path: Explicit hosts file, overrides the platform default

    Returns:
        HostSwitchConfig with default settings
    """
    if config_dir is None:
        config_dir = (home or Path.home()) / CONFIG_DIR_NAME
    config_dir = Path(config_dir)

    return HostSwitchConfig(
        config_dir=config_dir,
        profiles_dir=config_dir / "profiles",
        backup_dir=config_dir / "backups",
        hosts_path=Path(hosts_path) if hosts_path else default_hosts_path(platform),
        current_profile_file=config_dir / "current.json",
        update_check_file=config_dir / "update-check.json",
    )


def load_config(
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
    platform: Optional[str] = None,
    dotenv_path: Optional[Path] = None,
) -> HostSwitchConfig:
    """
    Load configuration from the environment.

    Recognised variables: HOSTSWITCH_HOME, HOSTSWITCH_HOSTS_FILE,
    HOSTSWITCH_LANG, HOSTSWITCH_LOG_FORMAT, HOSTSWITCH_NO_UPDATE_CHECK,
    HOSTSWITCH_SUDO, HOSTSWITCH_DEBUG and NO_COLOR.

    Args:
        env: Environment mapping (defaults to os.environ)
        home: Home directory used when HOSTSWITCH_HOME is unset
        platform: Platform identifier as in sys.platform
        dotenv_path: .env file to merge (defaults to <config root>/.env)

    Returns:
        HostSwitchConfig with overrides applied
    """
    env = dict(os.environ if env is None else env)

    home_override = env.get("HOSTSWITCH_HOME")
    config_dir = Path(home_override).expanduser() if home_override else None
    base = create_default_config(home=home, platform=platform, config_dir=config_dir)

    if dotenv_path is None:
        dotenv_path = base.config_dir / ".env"
    file_values: dict[str, str] = {}
    if Path(dotenv_path).is_file():
        file_values = {
            key: value
            for key, value in dotenv_values(dotenv_path).items()
            if value is not None
        }

    # Real environment variables win over the .env file
    merged = {**file_values, **env}

    hosts_override = merged.get("HOSTSWITCH_HOSTS_FILE")
    if hosts_override:
        base.hosts_path = Path(hosts_override).expanduser()

    language = (merged.get("HOSTSWITCH_LANG") or base.language).lower()
    if language in SUPPORTED_LANGUAGES:
        base.language = language

    log_format = (merged.get("HOSTSWITCH_LOG_FORMAT") or base.log_format).lower()
    if log_format in LOG_FORMATS:
        base.log_format = log_format

    if "NO_COLOR" in merged:
        base.color = False
    if _is_true(merged.get("HOSTSWITCH_NO_UPDATE_CHECK")):
        base.update_check = False
    if merged.get("HOSTSWITCH_SUDO"):
        base.elevation_helper = merged["HOSTSWITCH_SUDO"]
    base.debug = _is_true(merged.get("HOSTSWITCH_DEBUG"))
    base.extra = file_values

    return base
