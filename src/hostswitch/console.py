"""
Console logger for hostswitch.

Provides leveled, coloured console output in human-readable text or JSON,
masking of sensitive values, and an in-memory record of emitted entries.
Errors go to stderr, everything else to stdout.
"""

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, TextIO

from colorama import Fore, Style, just_fix_windows_console

from .enums import LogLevel


@dataclass
class LogEntry:
    """Represents a single emitted message with its metadata."""

    timestamp: str
    level: LogLevel
    message: str
    data: dict = field(default_factory=dict)


class ConsoleLogger:
    """
    Console logger with text/JSON output and optional colour.

    Supports:
    - info, success, warning, error and debug levels
    - colour through colorama (disabled for JSON output or --no-color)
    - debug messages only when verbose
    - automatic masking of sensitive data (tokens, secrets, passwords)
    """

    SENSITIVE_KEYS = frozenset({
        'token', 'secret', 'password', 'api_key', 'auth',
        'authorization', 'credential', 'private_key',
    })

    MASK_VALUE = "***MASKED***"

    COLORS = {
        LogLevel.DEBUG: Style.DIM,
        LogLevel.INFO: "",
        LogLevel.SUCCESS: Fore.GREEN,
        LogLevel.WARN: Fore.YELLOW,
        LogLevel.ERROR: Fore.RED,
    }

    def __init__(
        self,
        output_format: str = "text",
        color: bool = True,
        verbose: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        """
        Initialize the console logger.

        Args:
            output_format: Output format - 'text' or 'json'
            color: Colour text output with ANSI sequences
            verbose: Emit debug messages
            stdout: Stream for non-error output (defaults to sys.stdout)
            stderr: Stream for error output (defaults to sys.stderr)
        """
        if output_format not in ("json", "text"):
            raise ValueError(f"Invalid output_format: {output_format}")

        self._output_format = output_format
        self._color = color and output_format == "text"
        self._verbose = verbose
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self._entries: list[LogEntry] = []

        if self._color:
            just_fix_windows_console()

    @property
    def output_format(self) -> str:
        return self._output_format

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def entries(self) -> list[LogEntry]:
        """Get all emitted entries."""
        return self._entries.copy()

    def info(self, message: str, data: Optional[dict] = None) -> LogEntry:
        return self.log(LogLevel.INFO, message, data)

    def success(self, message: str, data: Optional[dict] = None) -> LogEntry:
        return self.log(LogLevel.SUCCESS, message, data)

    def warning(self, message: str, data: Optional[dict] = None) -> LogEntry:
        return self.log(LogLevel.WARN, message, data)

    def error(self, message: str, data: Optional[dict] = None) -> LogEntry:
        return self.log(LogLevel.ERROR, message, data)

    def debug(self, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        if not self._verbose:
            return None
        return self.log(LogLevel.DEBUG, message, data)

    def plain(self, text: str) -> None:
        """
        Write text verbatim to stdout (profile content, listings).

        Profile bytes that are not valid UTF-8 arrive as surrogate escapes.
        A stream that cannot encode them gets the original bytes written to
        its binary buffer instead.
        """
        if not text.endswith("\n"):
            text += "\n"
        try:
            self._stdout.write(text)
        except UnicodeEncodeError:
            buffer = getattr(self._stdout, "buffer", None)
            if buffer is None:
                raise
            self._stdout.flush()
            buffer.write(text.encode("utf-8", errors="surrogateescape"))
            buffer.flush()
            return
        self._stdout.flush()

    def log(
        self,
        level: LogLevel,
        message: str,
        data: Optional[dict] = None,
    ) -> LogEntry:
        """
        Emit an entry in the configured format.

        Args:
            level: Severity level
            message: Human-readable message
            data: Optional additional data to include

        Returns:
            The created LogEntry object
        """
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            message=message,
            data=self.mask_sensitive_data(data or {}),
        )
        self._entries.append(entry)

        stream = self._stderr if level == LogLevel.ERROR else self._stdout
        if self._output_format == "json":
            stream.write(self._format_json(entry) + "\n")
        else:
            stream.write(self._format_text(entry) + "\n")
        stream.flush()

        return entry

    def mask_sensitive_data(self, data: dict) -> dict:
        """
        Recursively mask sensitive data in a dictionary.

        Args:
            data: Dictionary potentially containing sensitive data

        Returns:
            New dictionary with sensitive values masked
        """
        if not isinstance(data, dict):
            return data

        masked = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if any(sensitive in key_lower for sensitive in self.SENSITIVE_KEYS):
                masked[key] = self.MASK_VALUE
            elif isinstance(value, dict):
                masked[key] = self.mask_sensitive_data(value)
            elif isinstance(value, list):
                masked[key] = [
                    self.mask_sensitive_data(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                masked[key] = value

        return masked

    def _format_json(self, entry: LogEntry) -> str:
        obj = {
            "timestamp": entry.timestamp,
            "level": entry.level.value,
            "message": entry.message,
        }
        if entry.data:
            obj["data"] = entry.data
        return json.dumps(obj, ensure_ascii=False, default=str)

    def _format_text(self, entry: LogEntry) -> str:
        """
        Format an entry as human-readable text.

        Errors are prefixed with 'Error: ' and debug lines with '[DEBUG] '.
        """
        text = entry.message
        if entry.level == LogLevel.ERROR:
            text = f"Error: {text}"
        elif entry.level == LogLevel.DEBUG:
            text = f"[DEBUG] {text}"
            if entry.data:
                text += " " + json.dumps(entry.data, ensure_ascii=False, default=str)

        color = self.COLORS.get(entry.level, "")
        if self._color and color:
            return f"{color}{text}{Style.RESET_ALL}"
        return text

    def clear_entries(self) -> None:
        """Clear all stored entries."""
        self._entries.clear()
