"""
Update notification for hostswitch.

Looks up the latest released version on PyPI at most once per interval and
caches the answer in the config directory. Every failure is silent: an
update check must never interrupt the command the user asked for.
"""

import json
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import httpx

from .console import ConsoleLogger
from .i18n import get_message


PYPI_URL = "https://pypi.org/pypi/hostswitch/json"
CHECK_INTERVAL_SECONDS = 60 * 60 * 24
REQUEST_TIMEOUT_SECONDS = 3.0


@dataclass
class UpdateInfo:
    """Result of an update check."""

    current: str
    latest: Optional[str]
    available: bool


def parse_version(version: str) -> tuple[int, ...]:
    """Parse the numeric release part of a version string ('1.2.3rc1' -> (1, 2, 3))."""
    parts = []
    for piece in version.strip().lstrip("v").split("."):
        match = re.match(r"\d+", piece)
        if not match:
            break
        parts.append(int(match.group()))
    return tuple(parts)


def is_newer(latest: str, current: str) -> bool:
    latest_parts = parse_version(latest)
    return bool(latest_parts) and latest_parts > parse_version(current)


class UpdateChecker:
    """Checks PyPI for a newer hostswitch release."""

    def __init__(
        self,
        current_version: str,
        cache_file: Path,
        url: str = PYPI_URL,
        interval_seconds: float = CHECK_INTERVAL_SECONDS,
        client_factory: Optional[Callable[[], httpx.Client]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the update checker.

        Args:
            current_version: Installed hostswitch version
            cache_file: JSON file holding the last check time and result
            url: PyPI JSON API endpoint
            interval_seconds: Minimum time between network lookups
            client_factory: Builds the httpx client (injectable for tests)
            clock: Returns the current time in seconds
        """
        self._current = current_version
        self._cache_file = Path(cache_file)
        self._url = url
        self._interval = interval_seconds
        self._client_factory = client_factory or (
            lambda: httpx.Client(timeout=httpx.Timeout(REQUEST_TIMEOUT_SECONDS))
        )
        self._clock = clock

    def check(self) -> UpdateInfo:
        """
        Return update information, from cache when it is fresh.

        A failed lookup is cached as well, so an offline machine waits for
        the network at most once per interval.
        """
        cached = self._read_cache()
        if cached is None:
            latest = self._fetch_latest()
            self._write_cache(latest)
        else:
            latest = cached["latest"]

        return UpdateInfo(
            current=self._current,
            latest=latest,
            available=latest is not None and is_newer(latest, self._current),
        )

    def notify(self, logger: ConsoleLogger, language: Optional[str] = None) -> Optional[UpdateInfo]:
        """Print a one-line hint if a newer version exists."""
        info = self.check()
        if info.available:
            logger.warning(get_message(
                "update.available",
                language,
                current=info.current,
                latest=info.latest,
            ))
        return info

    def _fetch_latest(self) -> Optional[str]:
        try:
            with self._client_factory() as client:
                response = client.get(self._url, headers={"Accept": "application/json"})
                response.raise_for_status()
                version = response.json()["info"]["version"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError):
            return None
        return version if isinstance(version, str) else None

    def _read_cache(self) -> Optional[dict]:
        """Return the cached lookup if it is still fresh."""
        try:
            with open(self._cache_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            checked_at = float(data["checked_at"])
            latest = data["latest"]
        except (OSError, ValueError, KeyError, TypeError):
            return None

        if self._clock() - checked_at >= self._interval:
            return None
        if latest is not None and not isinstance(latest, str):
            return None
        return {"checked_at": checked_at, "latest": latest}

    def _write_cache(self, latest: Optional[str]) -> None:
        try:
            self._cache_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._cache_file, "w", encoding="utf-8") as f:
                json.dump({"checked_at": self._clock(), "latest": latest}, f)
        except OSError:
            # Next run simply checks again
            pass
