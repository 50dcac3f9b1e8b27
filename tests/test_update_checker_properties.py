"""
Property-based tests for the update checker.

Network access is replaced by httpx.MockTransport; the cache lives in a
temporary directory.
"""

import json
import tempfile
from io import StringIO
from pathlib import Path

import httpx
from hypothesis import given, settings
from hypothesis import strategies as st

from hostswitch.console import ConsoleLogger
from hostswitch.update_checker import (
    CHECK_INTERVAL_SECONDS,
    PYPI_URL,
    UpdateChecker,
    is_newer,
    parse_version,
)


versions = st.tuples(
    st.integers(min_value=0, max_value=50),
    st.integers(min_value=0, max_value=50),
    st.integers(min_value=0, max_value=50),
)


def pypi_client_factory(latest: str, requests: list):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"info": {"version": latest}})

    return lambda: httpx.Client(transport=httpx.MockTransport(handler))


def failing_client_factory(requests: list, status_code: int = 500, exc: Exception = None):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if exc is not None:
            raise exc
        return httpx.Response(status_code, text="unavailable")

    return lambda: httpx.Client(transport=httpx.MockTransport(handler))


class TestVersionComparisonProperty:
    """Numeric release tuples decide what is newer."""

    @given(current=versions, latest=versions)
    @settings(max_examples=200)
    def test_is_newer_matches_tuple_order(self, current, latest) -> None:
        current_str = ".".join(map(str, current))
        latest_str = ".".join(map(str, latest))

        assert is_newer(latest_str, current_str) == (latest > current)

    def test_parse_ignores_suffixes(self) -> None:
        assert parse_version("1.2.3rc1") == (1, 2, 3)
        assert parse_version("v2.0") == (2, 0)
        assert parse_version("garbage") == ()

    def test_unparseable_latest_is_not_newer(self) -> None:
        assert not is_newer("garbage", "0.1.0")


class TestUpdateCheckProperty:
    """Lookups hit PyPI at most once per interval and failures stay silent."""

    @given(current=versions, latest=versions)
    @settings(max_examples=30)
    def test_check_reports_availability(self, current, latest) -> None:
        current_str = ".".join(map(str, current))
        latest_str = ".".join(map(str, latest))
        with tempfile.TemporaryDirectory() as tmpdir:
            requests = []
            checker = UpdateChecker(
                current_str,
                Path(tmpdir) / "update-check.json",
                client_factory=pypi_client_factory(latest_str, requests),
                clock=lambda: 1000.0,
            )

            info = checker.check()

            assert info.current == current_str
            assert info.latest == latest_str
            assert info.available == (latest > current)
            assert str(requests[0].url) == PYPI_URL

    def test_cache_prevents_second_request(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            cache = Path(tmpdir) / "update-check.json"
            requests = []
            now = [1000.0]
            checker = UpdateChecker(
                "0.1.0",
                cache,
                client_factory=pypi_client_factory("0.2.0", requests),
                clock=lambda: now[0],
            )

            checker.check()
            now[0] += CHECK_INTERVAL_SECONDS - 1
            info = checker.check()

            assert len(requests) == 1
            assert info.latest == "0.2.0"
            assert json.loads(cache.read_text(encoding="utf-8")) == {
                "checked_at": 1000.0,
                "latest": "0.2.0",
            }

            now[0] += 2
            checker.check()
            assert len(requests) == 2

    @given(status_code=st.sampled_from([404, 429, 500, 503]))
    @settings(max_examples=10)
    def test_http_errors_are_silent(self, status_code: int) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            cache = Path(tmpdir) / "update-check.json"
            requests = []
            checker = UpdateChecker(
                "0.1.0",
                cache,
                client_factory=failing_client_factory(requests, status_code=status_code),
            )

            info = checker.check()

            assert info.latest is None
            assert not info.available
            assert json.loads(cache.read_text(encoding="utf-8"))["latest"] is None

    def test_network_errors_are_silent(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            requests = []
            checker = UpdateChecker(
                "0.1.0",
                Path(tmpdir) / "update-check.json",
                client_factory=failing_client_factory(
                    requests, exc=httpx.ConnectError("offline")
                ),
            )

            assert not checker.check().available

    def test_failed_lookup_is_not_retried_within_interval(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            cache = Path(tmpdir) / "update-check.json"
            requests = []
            now = [1000.0]
            checker = UpdateChecker(
                "0.1.0",
                cache,
                client_factory=failing_client_factory(
                    requests, exc=httpx.ConnectError("offline")
                ),
                clock=lambda: now[0],
            )

            checker.check()
            now[0] += CHECK_INTERVAL_SECONDS - 1
            info = checker.check()

            assert len(requests) == 1
            assert info.latest is None
            assert not info.available
            assert json.loads(cache.read_text(encoding="utf-8")) == {
                "checked_at": 1000.0,
                "latest": None,
            }

            now[0] += 2
            checker.check()
            assert len(requests) == 2

    def test_malformed_payload_is_silent(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        with tempfile.TemporaryDirectory() as tmpdir:
            checker = UpdateChecker(
                "0.1.0",
                Path(tmpdir) / "update-check.json",
                client_factory=lambda: httpx.Client(transport=httpx.MockTransport(handler)),
            )

            assert checker.check().latest is None

    def test_corrupt_cache_triggers_lookup(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            cache = Path(tmpdir) / "update-check.json"
            cache.write_text("{not json", encoding="utf-8")
            requests = []
            checker = UpdateChecker(
                "0.1.0",
                cache,
                client_factory=pypi_client_factory("0.3.0", requests),
            )

            assert checker.check().latest == "0.3.0"
            assert len(requests) == 1


class TestNotifyProperty:
    """A hint is printed only when a newer release exists."""

    def test_notify_when_newer(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            stdout = StringIO()
            logger = ConsoleLogger(color=False, stdout=stdout)
            checker = UpdateChecker(
                "0.1.0",
                Path(tmpdir) / "update-check.json",
                client_factory=pypi_client_factory("1.0.0", []),
            )

            checker.notify(logger, "en")

            assert "Update available: 0.1.0 -> 1.0.0" in stdout.getvalue()

    def test_silent_when_current(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            stdout = StringIO()
            logger = ConsoleLogger(color=False, stdout=stdout)
            checker = UpdateChecker(
                "1.0.0",
                Path(tmpdir) / "update-check.json",
                client_factory=pypi_client_factory("1.0.0", []),
            )

            info = checker.notify(logger, "en")

            assert not info.available
            assert stdout.getvalue() == ""
