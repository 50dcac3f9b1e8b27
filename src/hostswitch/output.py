"""
Result reporting shared by the command-line and interactive front ends.

Turns orchestrator results into console lines: warnings first, then the
backup location for switches, then exactly one concluding message.
"""

from typing import Optional, Union

from .console import ConsoleLogger
from .i18n import get_message
from .models import CommandResult, ProfileInfo, SwitchResult


def report_result(
    logger: ConsoleLogger,
    result: Union[CommandResult, SwitchResult],
    language: Optional[str] = None,
) -> int:
    """
    Print a result and map it to an exit code.

    A result without a message was already reported by an elevated child;
    only its exit status is passed on.

    Returns:
        The elevated child's exit status if one ran, else 0 on success
        and 1 on failure
    """
    for warning in result.warnings:
        logger.warning(warning)

    exit_code = getattr(result, "exit_code", None)
    if not result.success:
        if result.message:
            logger.error(result.message)
        return exit_code or 1

    backup_path = getattr(result, "backup_path", None)
    if backup_path is not None:
        logger.info(get_message("switch.backup_created", language, path=backup_path))
    if result.message:
        logger.success(result.message)
    return 0


def print_profiles(
    logger: ConsoleLogger,
    profiles: list[ProfileInfo],
    language: Optional[str] = None,
) -> None:
    """Print the profile listing with the active profile marked."""
    if not profiles:
        logger.info(get_message("list.empty", language))
        return

    logger.info(get_message("list.header", language))
    marker = get_message("list.current_marker", language)
    for profile in profiles:
        logger.plain(f"  {profile.name}{marker if profile.is_current else ''}")
