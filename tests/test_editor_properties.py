"""
Tests for the external editor launcher.
"""

from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hostswitch.editor import DEFAULT_POSIX_EDITOR, DEFAULT_WINDOWS_EDITOR, EditorLauncher
from hostswitch.enums import ErrorCode
from hostswitch.exceptions import EditorError


editor_names = st.from_regex(r"[a-z][a-z0-9]{0,10}", fullmatch=True)


class TestEditorResolutionProperty:
    """$VISUAL wins over $EDITOR, which wins over the platform default."""

    @given(visual=editor_names, editor=editor_names)
    @settings(max_examples=50)
    def test_visual_preferred(self, visual: str, editor: str) -> None:
        launcher = EditorLauncher(env={"VISUAL": visual, "EDITOR": editor}, platform="linux")

        assert launcher.resolve_command() == [visual]

    @given(editor=editor_names, flag=st.sampled_from(["-w", "--wait", "-n"]))
    @settings(max_examples=50)
    def test_editor_with_arguments(self, editor: str, flag: str) -> None:
        launcher = EditorLauncher(env={"EDITOR": f"{editor} {flag}"}, platform="linux")

        assert launcher.resolve_command() == [editor, flag]

    def test_platform_defaults(self) -> None:
        assert EditorLauncher(env={}, platform="linux").resolve_command() == [DEFAULT_POSIX_EDITOR]
        assert EditorLauncher(env={}, platform="win32").resolve_command() == [DEFAULT_WINDOWS_EDITOR]


class TestEditorLaunchProperty:
    """The editor is called with the file path and failures raise EditorError."""

    def test_open_passes_path(self) -> None:
        calls = []
        launcher = EditorLauncher(
            env={"EDITOR": "code --wait"},
            platform="linux",
            call=lambda command: calls.append(command) or 0,
        )

        launcher.open(Path("/tmp/dev.hosts"))

        assert calls == [["code", "--wait", "/tmp/dev.hosts"]]

    @given(exit_code=st.integers(min_value=1, max_value=255))
    @settings(max_examples=30)
    def test_nonzero_exit_raises(self, exit_code: int) -> None:
        launcher = EditorLauncher(env={}, platform="linux", call=lambda command: exit_code)

        with pytest.raises(EditorError) as excinfo:
            launcher.open(Path("/tmp/dev.hosts"))

        assert excinfo.value.code == ErrorCode.EDITOR_FAILED
        assert excinfo.value.details["exit_code"] == exit_code

    def test_missing_editor_raises(self) -> None:
        def call(command):
            raise FileNotFoundError(2, "No such file or directory", command[0])

        launcher = EditorLauncher(env={"EDITOR": "no-such-editor"}, platform="linux", call=call)

        with pytest.raises(EditorError) as excinfo:
            launcher.open(Path("/tmp/dev.hosts"))

        assert "no-such-editor" in excinfo.value.message
