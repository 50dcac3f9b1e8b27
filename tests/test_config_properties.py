"""
Property-based tests for configuration loading.

Verifies platform defaults, environment overrides and .env handling.
"""

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from hostswitch.config import (
    CONFIG_DIR_NAME,
    POSIX_HOSTS_PATH,
    WINDOWS_HOSTS_PATH,
    HostSwitchConfig,
    create_default_config,
    default_hosts_path,
    load_config,
)


dir_names = st.from_regex(r"[a-z][a-z0-9_]{0,12}", fullmatch=True)


class TestDefaultConfigProperty:
    """Default layout lives under <home>/.hostswitch."""

    @given(name=dir_names)
    @settings(max_examples=50)
    def test_layout_under_home(self, name: str) -> None:
        home = Path("/tmp") / name
        config = create_default_config(home=home, platform="linux")

        assert config.config_dir == home / CONFIG_DIR_NAME
        assert config.profiles_dir == home / CONFIG_DIR_NAME / "profiles"
        assert config.backup_dir == home / CONFIG_DIR_NAME / "backups"
        assert config.current_profile_file == home / CONFIG_DIR_NAME / "current.json"
        assert config.update_check_file == home / CONFIG_DIR_NAME / "update-check.json"
        assert config.hosts_path == POSIX_HOSTS_PATH
        assert config.profile_suffix == ".hosts"

    def test_platform_hosts_paths(self) -> None:
        assert default_hosts_path("linux") == POSIX_HOSTS_PATH
        assert default_hosts_path("darwin") == POSIX_HOSTS_PATH
        assert default_hosts_path("win32") == WINDOWS_HOSTS_PATH

    def test_explicit_paths_win(self) -> None:
        config = create_default_config(
            home=Path("/home/user"),
            config_dir=Path("/srv/hs"),
            hosts_path=Path("/srv/hosts"),
        )

        assert config.config_dir == Path("/srv/hs")
        assert config.profiles_dir == Path("/srv/hs/profiles")
        assert config.hosts_path == Path("/srv/hosts")

    def test_ensure_dirs_creates_layout(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = create_default_config(config_dir=Path(tmpdir) / "nested" / "hs")
            config.ensure_dirs()

            assert config.config_dir.is_dir()
            assert config.profiles_dir.is_dir()
            assert config.backup_dir.is_dir()

            # Idempotent
            config.ensure_dirs()


class TestEnvironmentOverrideProperty:
    """Environment variables override defaults; real env wins over .env."""

    @given(name=dir_names)
    @settings(max_examples=50)
    def test_home_and_hosts_overrides(self, name: str) -> None:
        env = {
            "HOSTSWITCH_HOME": f"/tmp/{name}/state",
            "HOSTSWITCH_HOSTS_FILE": f"/tmp/{name}/hosts",
        }
        config = load_config(env=env, dotenv_path=Path("/nonexistent/.env"))

        assert config.config_dir == Path(f"/tmp/{name}/state")
        assert config.profiles_dir == Path(f"/tmp/{name}/state/profiles")
        assert config.hosts_path == Path(f"/tmp/{name}/hosts")

    @given(language=st.sampled_from(["en", "ja", "EN", "Ja"]))
    @settings(max_examples=20)
    def test_supported_language_is_applied(self, language: str) -> None:
        config = load_config(
            env={"HOSTSWITCH_LANG": language},
            home=Path("/tmp/home"),
            dotenv_path=Path("/nonexistent/.env"),
        )

        assert config.language == language.lower()

    @given(log_format=st.sampled_from(["json", "JSON", "text", "xml", ""]))
    @settings(max_examples=20)
    def test_log_format_override(self, log_format: str) -> None:
        config = load_config(
            env={"HOSTSWITCH_LOG_FORMAT": log_format},
            home=Path("/tmp/home"),
            dotenv_path=Path("/nonexistent/.env"),
        )

        expected = log_format.lower() if log_format.lower() in ("text", "json") else "text"
        assert config.log_format == expected

    @given(language=st.sampled_from(["de", "fr", "xx", ""]))
    @settings(max_examples=20)
    def test_unsupported_language_keeps_default(self, language: str) -> None:
        config = load_config(
            env={"HOSTSWITCH_LANG": language},
            home=Path("/tmp/home"),
            dotenv_path=Path("/nonexistent/.env"),
        )

        assert config.language == "en"

    def test_flags_from_environment(self) -> None:
        config = load_config(
            env={
                "NO_COLOR": "",
                "HOSTSWITCH_NO_UPDATE_CHECK": "1",
                "HOSTSWITCH_SUDO": "doas",
                "HOSTSWITCH_DEBUG": "true",
            },
            home=Path("/tmp/home"),
            dotenv_path=Path("/nonexistent/.env"),
        )

        assert config.color is False
        assert config.update_check is False
        assert config.elevation_helper == "doas"
        assert config.debug is True

    def test_defaults_without_environment(self) -> None:
        config = load_config(
            env={},
            home=Path("/tmp/home"),
            platform="linux",
            dotenv_path=Path("/nonexistent/.env"),
        )

        assert isinstance(config, HostSwitchConfig)
        assert config.config_dir == Path("/tmp/home") / CONFIG_DIR_NAME
        assert config.hosts_path == POSIX_HOSTS_PATH
        assert config.color is True
        assert config.update_check is True
        assert config.elevation_helper == "sudo"
        assert config.debug is False

    def test_dotenv_values_are_used(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            dotenv = Path(tmpdir) / ".env"
            dotenv.write_text(
                "HOSTSWITCH_LANG=ja\nHOSTSWITCH_HOSTS_FILE=/tmp/from-dotenv\n",
                encoding="utf-8",
            )

            config = load_config(env={}, home=Path(tmpdir), dotenv_path=dotenv)

            assert config.language == "ja"
            assert config.hosts_path == Path("/tmp/from-dotenv")
            assert config.extra["HOSTSWITCH_LANG"] == "ja"

    def test_environment_wins_over_dotenv(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            dotenv = Path(tmpdir) / ".env"
            dotenv.write_text("HOSTSWITCH_LANG=ja\n", encoding="utf-8")

            config = load_config(
                env={"HOSTSWITCH_LANG": "en"},
                home=Path(tmpdir),
                dotenv_path=dotenv,
            )

            assert config.language == "en"

    def test_dotenv_in_config_root_is_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / "state"
            root.mkdir()
            (root / ".env").write_text("HOSTSWITCH_SUDO=doas\n", encoding="utf-8")

            config = load_config(env={"HOSTSWITCH_HOME": str(root)})

            assert config.elevation_helper == "doas"
