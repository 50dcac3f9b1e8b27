"""
Property-based tests for the privilege gate.

A recording runner stands in for subprocess so no real elevation is ever
requested.
"""

import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hostswitch.enums import ErrorCode
from hostswitch.exceptions import ElevationError
from hostswitch.privilege import ELEVATED_MARKER, PrivilegeGate, ProcessRunner


PROGRAM = ["/usr/bin/python3", "-m", "hostswitch"]

arguments = st.lists(
    st.from_regex(r"[A-Za-z0-9_-]{1,15}", fullmatch=True),
    min_size=1,
    max_size=6,
)


class RecordingRunner:
    """ProcessRunner returning a fixed exit code and recording calls."""

    def __init__(self, exit_code: int = 0, error: Optional[OSError] = None) -> None:
        self.exit_code = exit_code
        self.error = error
        self.calls: list[tuple[list[str], dict]] = []

    def run(self, command: Sequence[str], env: Mapping[str, str]) -> int:
        self.calls.append((list(command), dict(env)))
        if self.error is not None:
            raise self.error
        return self.exit_code


def make_gate(
    runner: Optional[RecordingRunner] = None,
    env: Optional[dict] = None,
    uid: Optional[int] = 1000,
    helper_path: Optional[str] = "/usr/bin/sudo",
    platform: str = "linux",
) -> PrivilegeGate:
    return PrivilegeGate(
        runner=runner or RecordingRunner(),
        env=env if env is not None else {"PATH": "/usr/bin"},
        platform=platform,
        uid_provider=lambda: uid,
        which=lambda name: helper_path,
        program=PROGRAM,
    )


class TestElevationDetectionProperty:
    """Elevation is detected from uid 0, SUDO_USER or the re-run marker."""

    def test_recording_runner_is_a_process_runner(self) -> None:
        assert isinstance(RecordingRunner(), ProcessRunner)

    @given(uid=st.integers(min_value=1, max_value=65535))
    @settings(max_examples=50)
    def test_regular_user_requires_elevation(self, uid: int) -> None:
        gate = make_gate(uid=uid)

        assert not gate.is_elevated()
        assert gate.requires_elevation(Path("/etc/hosts"))

    def test_root_is_elevated(self) -> None:
        gate = make_gate(uid=0)

        assert gate.is_elevated()
        assert not gate.requires_elevation(Path("/etc/hosts"))

    def test_sudo_user_is_elevated(self) -> None:
        gate = make_gate(env={"SUDO_USER": "alice"})

        assert gate.is_elevated()

    def test_marker_is_elevated(self) -> None:
        gate = make_gate(env={ELEVATED_MARKER: "1"})

        assert gate.is_elevated()

    def test_marker_must_be_one(self) -> None:
        gate = make_gate(env={ELEVATED_MARKER: "0"})

        assert not gate.is_elevated()


class TestCommandReconstructionProperty:
    """The elevated re-run is helper + program + the original arguments."""

    @given(args=arguments)
    @settings(max_examples=100)
    def test_command_preserves_arguments(self, args: list[str]) -> None:
        runner = RecordingRunner()
        gate = make_gate(runner=runner)

        result = gate.elevate_and_rerun(args)

        assert result.success
        assert result.exit_code == 0
        command, env = runner.calls[0]
        assert command == ["/usr/bin/sudo", *PROGRAM, *args]
        assert env[ELEVATED_MARKER] == "1"
        assert env["PATH"] == "/usr/bin"

    def test_custom_helper_is_resolved(self) -> None:
        looked_up = []
        gate = PrivilegeGate(
            runner=RecordingRunner(),
            env={},
            platform="linux",
            helper="doas",
            uid_provider=lambda: 1000,
            which=lambda name: looked_up.append(name) or f"/usr/bin/{name}",
            program=PROGRAM,
        )

        assert gate.build_command(["switch", "dev"]) == [
            "/usr/bin/doas", *PROGRAM, "switch", "dev",
        ]
        assert looked_up == ["doas"]

    def test_default_program_reinvokes_module(self) -> None:
        gate = PrivilegeGate(
            runner=RecordingRunner(),
            env={},
            platform="linux",
            which=lambda name: "/usr/bin/sudo",
        )

        assert gate.build_command(["list"]) == [
            "/usr/bin/sudo", sys.executable, "-m", "hostswitch", "list",
        ]


class TestFailureMappingProperty:
    """Failures become unsuccessful results; nothing raises."""

    @given(exit_code=st.integers(min_value=1, max_value=255))
    @settings(max_examples=50)
    def test_nonzero_exit_is_failure(self, exit_code: int) -> None:
        gate = make_gate(runner=RecordingRunner(exit_code=exit_code))

        result = gate.elevate_and_rerun(["switch", "dev"])

        assert not result.success
        assert result.exit_code == exit_code
        assert str(exit_code) in result.message

    def test_missing_helper(self) -> None:
        runner = RecordingRunner()
        gate = make_gate(runner=runner, helper_path=None)

        result = gate.elevate_and_rerun(["switch", "dev"])

        assert not result.success
        assert result.message.startswith("Failed to execute sudo")
        assert result.exit_code is None
        assert runner.calls == []

    def test_missing_helper_raises_from_build_command(self) -> None:
        gate = make_gate(helper_path=None)

        with pytest.raises(ElevationError) as excinfo:
            gate.build_command(["switch", "dev"])

        assert excinfo.value.code == ErrorCode.ELEVATION_FAILED
        assert excinfo.value.details == {"helper": "sudo"}

    def test_spawn_error(self) -> None:
        gate = make_gate(runner=RecordingRunner(error=PermissionError("denied")))

        result = gate.elevate_and_rerun(["switch", "dev"])

        assert not result.success
        assert "denied" in result.message
        assert result.exit_code is None

    def test_windows_never_spawns(self) -> None:
        runner = RecordingRunner()
        gate = make_gate(runner=runner, env={ELEVATED_MARKER: "0"}, platform="win32")

        result = gate.elevate_and_rerun(["switch", "dev"])

        assert not result.success
        assert "Windows" in result.message
        assert runner.calls == []
