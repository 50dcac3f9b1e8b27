"""
Privilege Gate for hostswitch.

Decides whether writing the hosts file needs elevated privileges and, if so,
re-runs the same hostswitch command under the platform's elevation helper
(sudo by default). Spawning goes through the ProcessRunner protocol so tests
never request real elevation.
"""

import ctypes
import os
import shutil
import subprocess
import sys
from abc import abstractmethod
from pathlib import Path
from typing import Callable, Mapping, Optional, Protocol, Sequence, runtime_checkable

from .exceptions import ElevationError
from .models import ElevationResult


ELEVATED_MARKER = "HOSTSWITCH_ELEVATED"


@runtime_checkable
class ProcessRunner(Protocol):
    """Protocol for running a command and waiting for it with inherited I/O."""

    @abstractmethod
    def run(self, command: Sequence[str], env: Mapping[str, str]) -> int:
        """
        Run command to completion.

        Returns:
            The process exit code

        Raises:
            OSError: If the command cannot be started
        """
        ...


class SubprocessRunner:
    """ProcessRunner that inherits stdin, stdout and stderr."""

    def run(self, command: Sequence[str], env: Mapping[str, str]) -> int:
        return subprocess.call(list(command), env=dict(env))


def _windows_is_admin() -> bool:
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError):
        return False


def _effective_uid() -> Optional[int]:
    geteuid = getattr(os, "geteuid", None)
    return geteuid() if geteuid else None


class PrivilegeGate:
    """
    Elevation policy and re-execution for writes to the hosts file.

    Any write to the hosts file is assumed to need elevation unless the
    process already runs elevated; filesystem permissions are not checked first.
    """

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        env: Optional[Mapping[str, str]] = None,
        platform: Optional[str] = None,
        helper: str = "sudo",
        uid_provider: Callable[[], Optional[int]] = _effective_uid,
        which: Callable[[str], Optional[str]] = shutil.which,
        program: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Initialize the gate.

        Args:
            runner: Process runner (defaults to SubprocessRunner)
            env: Environment of this process (defaults to os.environ)
            platform: Platform identifier as in sys.platform
            helper: Elevation helper executable
            uid_provider: Returns the effective uid, None where unsupported
            which: Executable lookup used to locate the helper
            program: Command prefix that re-invokes hostswitch
        """
        self._runner = runner or SubprocessRunner()
        self._env = dict(os.environ if env is None else env)
        self._platform = platform or sys.platform
        self._helper = helper
        self._uid_provider = uid_provider
        self._which = which
        self._program = list(program) if program else [sys.executable, "-m", "hostswitch"]

    @property
    def is_windows(self) -> bool:
        return self._platform.startswith("win")

    def is_elevated(self) -> bool:
        """True if this process can already write the hosts file."""
        if self._env.get(ELEVATED_MARKER) == "1":
            return True
        if self.is_windows:
            return _windows_is_admin()
        if self._uid_provider() == 0:
            return True
        return "SUDO_USER" in self._env

    def requires_elevation(self, target_path: Path) -> bool:
        return not self.is_elevated()

    def build_command(self, args: Sequence[str]) -> list[str]:
        """
        Build the elevated re-invocation of hostswitch.

        Raises:
            ElevationError: If the elevation helper is not installed
        """
        helper_path = self._which(self._helper)
        if helper_path is None:
            raise ElevationError(
                f"Failed to execute {self._helper}: elevation helper not found",
                details={"helper": self._helper},
            )
        return [helper_path, *self._program, *args]

    def elevate_and_rerun(self, args: Sequence[str]) -> ElevationResult:
        """
        Re-run hostswitch with the same arguments under elevation.

        Blocks until the child exits. The child inherits the terminal so a
        password prompt stays visible.

        Returns:
            ElevationResult with success mapped from exit code 0. exit_code
            is None when the child could not be started.
        """
        try:
            exit_code = self._spawn(args)
        except ElevationError as e:
            return ElevationResult(success=False, message=e.message)

        if exit_code == 0:
            return ElevationResult(
                success=True,
                message="Operation completed successfully.",
                exit_code=exit_code,
            )
        return ElevationResult(
            success=False,
            message=f"Operation failed with {self._helper} (exit code {exit_code}).",
            exit_code=exit_code,
        )

    def _spawn(self, args: Sequence[str]) -> int:
        """
        Start the elevated child and wait for it.

        Raises:
            ElevationError: If no child could be started
        """
        if self.is_windows:
            raise ElevationError(
                "Automatic elevation is not supported on Windows. "
                "Run hostswitch from an administrator terminal.",
                details={"platform": self._platform},
            )

        command = self.build_command(args)
        child_env = dict(self._env)
        child_env[ELEVATED_MARKER] = "1"

        try:
            return self._runner.run(command, child_env)
        except OSError as e:
            raise ElevationError(
                f"Failed to execute {self._helper}: {e}",
                details={"command": command, "error": str(e)},
            ) from e
