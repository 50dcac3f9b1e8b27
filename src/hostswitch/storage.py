"""
Storage abstraction for hostswitch.

The core components talk to the disk only through the FileSystem protocol,
so tests can substitute an in-memory implementation. LocalFileSystem is the
real adapter over pathlib and shutil.
"""

import errno
import json
import os
import shutil
import tempfile
from abc import abstractmethod
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Protocol defining the file operations the core depends on."""

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        ...

    @abstractmethod
    def read_text(self, path: Path) -> str:
        ...

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        ...

    @abstractmethod
    def copy(self, source: Path, destination: Path) -> None:
        ...

    @abstractmethod
    def replace_contents(self, path: Path, content: bytes) -> None:
        """Overwrite an existing file with new content."""
        ...

    @abstractmethod
    def unlink(self, path: Path) -> None:
        ...

    @abstractmethod
    def exists(self, path: Path) -> bool:
        ...

    @abstractmethod
    def ensure_dir(self, path: Path) -> None:
        ...

    @abstractmethod
    def list_dir(self, path: Path) -> list[str]:
        ...

    @abstractmethod
    def read_json(self, path: Path) -> Any:
        ...

    @abstractmethod
    def write_json(self, path: Path, data: Any) -> None:
        ...


class LocalFileSystem:
    """FileSystem implementation backed by the local disk."""

    def __init__(self, atomic_replace: bool = True) -> None:
        """
        Initialize the adapter.

        Args:
            atomic_replace: Write replacements to a temp file next to the
                target and rename it into place when the directory allows it
        """
        self._atomic_replace = atomic_replace

    def read_bytes(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def read_text(self, path: Path) -> str:
        # newline="" keeps CRLF line endings intact; undecodable bytes
        # survive as surrogate escapes
        with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()

    def write_text(self, path: Path, content: str) -> None:
        with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(content)

    def copy(self, source: Path, destination: Path) -> None:
        shutil.copyfile(source, destination)

    def replace_contents(self, path: Path, content: bytes) -> None:
        """
        Overwrite path with content.

        With atomic replace enabled the content is written to a temporary
        file in the target directory, fsynced and renamed over the target,
        keeping the original mode bits. If the temporary file cannot be
        created there (e.g. /etc is not writable but /etc/hosts is) the
        target is rewritten in place.

        Raises:
            OSError: If the target cannot be written
        """
        path = Path(path)
        if not self._atomic_replace:
            self._write_in_place(path, content)
            return

        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{path.name}.hostswitch-",
            )
        except OSError:
            self._write_in_place(path, content)
            return

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            if path.exists():
                shutil.copymode(path, tmp_path)
            os.replace(tmp_path, path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            # Bind-mounted targets (containers) cannot be renamed over
            if e.errno in (errno.EBUSY, errno.EXDEV):
                self._write_in_place(path, content)
                return
            raise

    def unlink(self, path: Path) -> None:
        Path(path).unlink()

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def ensure_dir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def list_dir(self, path: Path) -> list[str]:
        return [entry.name for entry in Path(path).iterdir()]

    def read_json(self, path: Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def write_json(self, path: Path, data: Any) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")

    @staticmethod
    def _write_in_place(path: Path, content: bytes) -> None:
        with open(path, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
