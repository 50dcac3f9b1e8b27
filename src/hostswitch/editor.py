"""
External editor launcher.

Opens a profile file in $VISUAL, $EDITOR or the platform default as a
blocking subprocess that inherits the terminal.
"""

import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from .exceptions import EditorError


DEFAULT_POSIX_EDITOR = "vi"
DEFAULT_WINDOWS_EDITOR = "notepad"


class EditorLauncher:
    """Resolves and runs the user's editor."""

    def __init__(
        self,
        env: Optional[Mapping[str, str]] = None,
        platform: Optional[str] = None,
        call: Callable[[Sequence[str]], int] = subprocess.call,
    ) -> None:
        self._env = os.environ if env is None else env
        self._platform = platform or sys.platform
        self._call = call

    def resolve_command(self) -> list[str]:
        """Return the editor command as an argument list."""
        editor = self._env.get("VISUAL") or self._env.get("EDITOR")
        if not editor:
            if self._platform.startswith("win"):
                return [DEFAULT_WINDOWS_EDITOR]
            return [DEFAULT_POSIX_EDITOR]
        return shlex.split(editor, posix=not self._platform.startswith("win"))

    def open(self, path: Path) -> None:
        """
        Open path in the editor and wait for it to exit.

        Raises:
            EditorError: If the editor cannot be started or exits non-zero
        """
        command = [*self.resolve_command(), str(path)]
        try:
            exit_code = self._call(command)
        except OSError as e:
            raise EditorError(
                f"Cannot start editor '{command[0]}': {e}",
                details={"command": command, "error": str(e)},
            ) from e

        if exit_code != 0:
            raise EditorError(
                f"Editor '{command[0]}' exited with code {exit_code}",
                details={"command": command, "exit_code": exit_code},
            )
