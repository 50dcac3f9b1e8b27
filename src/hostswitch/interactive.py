"""
Interactive menu for hostswitch.

Shown when hostswitch runs without a command. Offers the same operations
as the command line through numbered choices and y/N confirmations.
Listing returns to the menu; every other action ends the session.
"""

from typing import Callable, Optional

from .console import ConsoleLogger
from .editor import EditorLauncher
from .exceptions import InvalidProfileNameError
from .i18n import get_message
from .orchestrator import SwitchOrchestrator
from .output import print_profiles, report_result
from .profile_store import validate_profile_name


MENU_ACTIONS = ("switch", "list", "create", "edit", "show", "delete", "exit")


class InteractiveMenu:
    """Prompt-driven front end over the SwitchOrchestrator."""

    def __init__(
        self,
        orchestrator: SwitchOrchestrator,
        logger: ConsoleLogger,
        launcher: Optional[EditorLauncher] = None,
        input_func: Optional[Callable[[str], str]] = None,
        language: Optional[str] = None,
    ) -> None:
        """
        Initialize the menu.

        Args:
            orchestrator: Service executing the chosen operations
            logger: Console output
            launcher: Editor used by the edit action
            input_func: Reads one line of user input (defaults to input)
            language: Message language (defaults to the orchestrator's)
        """
        self._orchestrator = orchestrator
        self._logger = logger
        self._launcher = launcher or EditorLauncher()
        self._input = input_func or input
        self._language = language or orchestrator.language

    def run(self) -> int:
        """
        Run the menu until an action completes or the user exits.

        Returns:
            Exit code: the action's code, 0 on exit or end of input,
            130 on Ctrl+C
        """
        try:
            while True:
                action = self._main_menu()
                if action == "exit":
                    self._logger.info(self._msg("interactive.goodbye"))
                    return 0

                exit_code = self._execute(action)
                if exit_code is not None:
                    return exit_code
        except KeyboardInterrupt:
            self._logger.plain("")
            self._logger.warning(self._msg("cli.interrupted"))
            return 130
        except EOFError:
            self._logger.plain("")
            return 0

    def _main_menu(self) -> str:
        active = self._orchestrator.get_active_profile()
        if active:
            status = self._msg("menu.status_current", name=active)
        else:
            status = self._msg("menu.status_none")

        labels = [
            self._msg("menu.switch", status=status),
            self._msg("menu.list"),
            self._msg("menu.create"),
            self._msg("menu.edit"),
            self._msg("menu.show"),
            self._msg("menu.delete"),
            self._msg("menu.exit"),
        ]
        return MENU_ACTIONS[self._select(self._msg("menu.prompt"), labels)]

    def _execute(self, action: str) -> Optional[int]:
        """Run one action. None means return to the menu."""
        if action == "list":
            self._list()
            return None
        if action == "switch":
            return self._switch()
        if action == "create":
            return self._create()
        if action == "edit":
            return self._edit()
        if action == "show":
            return self._show()
        if action == "delete":
            return self._delete()
        return None

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _list(self) -> None:
        result = self._orchestrator.list_profiles()
        if not result.success:
            report_result(self._logger, result, self._language)
            return
        profiles = result.data["profiles"]
        if not profiles:
            self._logger.info(self._msg("interactive.no_profiles"))
            return
        print_profiles(self._logger, profiles, self._language)

    def _switch(self) -> int:
        names = self._profile_names()
        if names is None:
            return 1
        if not names:
            self._logger.warning(self._msg("interactive.no_profiles"))
            return 0

        active = self._orchestrator.get_active_profile()
        candidates = [name for name in names if name != active]
        if not candidates:
            self._logger.info(self._msg("interactive.no_other_profiles"))
            return 0

        name = candidates[self._select(self._msg("prompt.select_switch"), candidates)]
        return report_result(
            self._logger,
            self._orchestrator.switch_profile(name),
            self._language,
        )

    def _create(self) -> int:
        name = self._ask_profile_name()
        from_current = self._confirm(self._msg("prompt.from_current"))
        return report_result(
            self._logger,
            self._orchestrator.create_profile(name, from_live_file=from_current),
            self._language,
        )

    def _edit(self) -> int:
        name = self._choose_existing("prompt.select_edit")
        if name is None:
            return 0
        return report_result(
            self._logger,
            self._orchestrator.edit_profile(name, self._launcher),
            self._language,
        )

    def _show(self) -> int:
        name = self._choose_existing("prompt.select_show")
        if name is None:
            return 0

        result = self._orchestrator.get_profile_content(name)
        if not result.success:
            return report_result(self._logger, result, self._language)

        self._logger.info(self._msg("show.header", name=name))
        self._logger.plain(result.data["content"])
        return 0

    def _delete(self) -> int:
        deletable = [profile.name for profile in self._orchestrator.deletable_profiles()]
        if not deletable:
            self._logger.warning(self._msg("interactive.no_deletable"))
            return 0

        name = deletable[self._select(self._msg("prompt.select_delete"), deletable)]
        if not self._confirm(self._msg("prompt.confirm_delete", name=name)):
            self._logger.info(self._msg("interactive.delete_cancelled"))
            return 0

        return report_result(
            self._logger,
            self._orchestrator.delete_profile(name),
            self._language,
        )

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def _profile_names(self) -> Optional[list[str]]:
        result = self._orchestrator.list_profiles()
        if not result.success:
            report_result(self._logger, result, self._language)
            return None
        return [profile.name for profile in result.data["profiles"]]

    def _choose_existing(self, prompt_key: str) -> Optional[str]:
        names = self._profile_names() or []
        if not names:
            self._logger.warning(self._msg("interactive.no_profiles"))
            return None
        return names[self._select(self._msg(prompt_key), names)]

    def _select(self, title: str, options: list[str]) -> int:
        """Show numbered options and return the chosen zero-based index."""
        self._logger.plain(title)
        for number, label in enumerate(options, start=1):
            self._logger.plain(f"  {number}) {label}")

        while True:
            answer = self._input(self._msg("prompt.choice", max=len(options))).strip()
            if answer.isascii() and answer.isdigit() and 1 <= int(answer) <= len(options):
                return int(answer) - 1
            self._logger.warning(self._msg("prompt.invalid_choice", max=len(options)))

    def _confirm(self, question: str) -> bool:
        return self._input(f"{question} (y/N): ").strip().lower() in ("y", "yes")

    def _ask_profile_name(self) -> str:
        while True:
            name = self._input(f"{self._msg('prompt.profile_name')} ").strip()
            try:
                return validate_profile_name(name)
            except InvalidProfileNameError:
                key = "error.invalid_name" if name else "error.invalid_name.empty"
                self._logger.error(self._msg(key, name=name))

    def _msg(self, key: str, **kwargs) -> str:
        return get_message(key, self._language, **kwargs)
