"""
Command-line interface for hostswitch.

This module provides the main CLI entry point with commands for:
- list / create / delete / show / edit: profile management
- switch: replace the live hosts file with a profile
- current / backups: inspect the active profile and existing backups

Running without a command opens the interactive menu.
"""

import argparse
import os
import sys
from dataclasses import dataclass
from typing import Optional

from . import __version__
from .config import LOG_FORMATS, SUPPORTED_LANGUAGES, HostSwitchConfig, load_config
from .console import ConsoleLogger
from .editor import EditorLauncher
from .i18n import get_message
from .interactive import InteractiveMenu
from .orchestrator import SwitchOrchestrator
from .output import print_profiles, report_result
from .privilege import PrivilegeGate
from .update_checker import UpdateChecker


@dataclass
class CliContext:
    """Everything a command handler needs."""

    config: HostSwitchConfig
    logger: ConsoleLogger
    orchestrator: SwitchOrchestrator
    gate: PrivilegeGate
    launcher: EditorLauncher

    @property
    def language(self) -> str:
        return self.config.language


def build_config(args: argparse.Namespace) -> HostSwitchConfig:
    """
    Load configuration and apply command-line overrides.

    Path and language flags are applied through the same environment
    variables the config loader reads, so flags win over both the real
    environment and the .env file.
    """
    env = dict(os.environ)
    if args.config_dir:
        env["HOSTSWITCH_HOME"] = args.config_dir
    if args.hosts_file:
        env["HOSTSWITCH_HOSTS_FILE"] = args.hosts_file
    if args.language:
        env["HOSTSWITCH_LANG"] = args.language
    if args.log_format:
        env["HOSTSWITCH_LOG_FORMAT"] = args.log_format

    config = load_config(env=env)
    if args.no_color:
        config.color = False
    if args.no_update_check:
        config.update_check = False
    if args.verbose:
        config.debug = True
    return config


def cmd_list(args: argparse.Namespace, ctx: CliContext) -> int:
    """Handle the 'list' command."""
    result = ctx.orchestrator.list_profiles()
    if not result.success:
        return report_result(ctx.logger, result, ctx.language)
    print_profiles(ctx.logger, result.data["profiles"], ctx.language)
    return 0


def cmd_create(args: argparse.Namespace, ctx: CliContext) -> int:
    """Handle the 'create' command."""
    result = ctx.orchestrator.create_profile(args.name, from_live_file=args.from_current)
    return report_result(ctx.logger, result, ctx.language)


def cmd_switch(args: argparse.Namespace, ctx: CliContext) -> int:
    """Handle the 'switch' command."""
    result = ctx.orchestrator.switch_profile(args.name)
    return report_result(ctx.logger, result, ctx.language)


def cmd_delete(args: argparse.Namespace, ctx: CliContext) -> int:
    """Handle the 'delete' command."""
    result = ctx.orchestrator.delete_profile(args.name)
    return report_result(ctx.logger, result, ctx.language)


def cmd_show(args: argparse.Namespace, ctx: CliContext) -> int:
    """Handle the 'show' command."""
    result = ctx.orchestrator.get_profile_content(args.name)
    if not result.success:
        return report_result(ctx.logger, result, ctx.language)
    ctx.logger.plain(result.data["content"])
    return 0


def cmd_edit(args: argparse.Namespace, ctx: CliContext) -> int:
    """Handle the 'edit' command."""
    result = ctx.orchestrator.edit_profile(args.name, ctx.launcher)
    return report_result(ctx.logger, result, ctx.language)


def cmd_current(args: argparse.Namespace, ctx: CliContext) -> int:
    """Handle the 'current' command."""
    result = ctx.orchestrator.get_status()
    ctx.logger.info(result.message)
    if result.data["active"] is not None:
        if result.data["drifted"]:
            ctx.logger.warning(get_message("current.drifted", ctx.language))
        else:
            ctx.logger.success(get_message("current.clean", ctx.language))
    return 0


def cmd_backups(args: argparse.Namespace, ctx: CliContext) -> int:
    """Handle the 'backups' command."""
    result = ctx.orchestrator.list_backups()
    if not result.success:
        return report_result(ctx.logger, result, ctx.language)

    backups = result.data["backups"]
    if not backups:
        ctx.logger.info(get_message("backups.empty", ctx.language))
        return 0

    ctx.logger.info(get_message("backups.header", ctx.language))
    for path in backups:
        ctx.logger.plain(f"  {path}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="hostswitch",
        description="Switch between named hosts file profiles",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print debug output",
    )
    parser.add_argument(
        "-l", "--language",
        choices=SUPPORTED_LANGUAGES,
        default=None,
        help="Output language",
    )
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory holding profiles, backups and state (default: ~/.hostswitch)",
    )
    parser.add_argument(
        "--hosts-file",
        default=None,
        help="Hosts file to manage (default: the system hosts file)",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Message format: human-readable text or one JSON object per line",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )
    parser.add_argument(
        "--no-update-check",
        action="store_true",
        help="Do not check PyPI for a newer release",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'list' command
    list_parser = subparsers.add_parser(
        "list",
        aliases=["ls"],
        help="List all profiles",
    )
    list_parser.set_defaults(func=cmd_list)

    # 'create' command
    create_cmd = subparsers.add_parser(
        "create",
        help="Create a new profile",
    )
    create_cmd.add_argument(
        "name",
        help="Profile name (letters, numbers, hyphens, underscores)",
    )
    create_cmd.add_argument(
        "--from-current",
        action="store_true",
        help="Copy the current hosts file instead of the default template",
    )
    create_cmd.set_defaults(func=cmd_create)

    # 'switch' command
    switch_parser = subparsers.add_parser(
        "switch",
        aliases=["use"],
        help="Switch the hosts file to a profile",
    )
    switch_parser.add_argument(
        "name",
        help="Profile to switch to",
    )
    switch_parser.set_defaults(func=cmd_switch)

    # 'delete' command
    delete_parser = subparsers.add_parser(
        "delete",
        aliases=["rm"],
        help="Delete a profile",
    )
    delete_parser.add_argument(
        "name",
        help="Profile to delete",
    )
    delete_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Accepted for compatibility; the command line never prompts",
    )
    delete_parser.set_defaults(func=cmd_delete)

    # 'show' command
    show_parser = subparsers.add_parser(
        "show",
        aliases=["cat"],
        help="Print a profile's content",
    )
    show_parser.add_argument(
        "name",
        help="Profile to show",
    )
    show_parser.set_defaults(func=cmd_show)

    # 'edit' command
    edit_parser = subparsers.add_parser(
        "edit",
        help="Open a profile in $EDITOR",
    )
    edit_parser.add_argument(
        "name",
        help="Profile to edit",
    )
    edit_parser.set_defaults(func=cmd_edit)

    # 'current' command
    current_parser = subparsers.add_parser(
        "current",
        help="Show the active profile and whether the hosts file changed",
    )
    current_parser.set_defaults(func=cmd_current)

    # 'backups' command
    backups_parser = subparsers.add_parser(
        "backups",
        help="List hosts file backups",
    )
    backups_parser.set_defaults(func=cmd_backups)

    return parser


def run_update_check(ctx: CliContext) -> None:
    """Print an update hint unless disabled or running elevated."""
    if not ctx.config.update_check or ctx.gate.is_elevated():
        return
    checker = UpdateChecker(__version__, ctx.config.update_check_file)
    info = checker.notify(ctx.logger, ctx.language)
    ctx.logger.debug("Update check", {"current": info.current, "latest": info.latest})


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 on success, 1 on failure, 130 when interrupted
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config = build_config(args)
    logger = ConsoleLogger(
        output_format=config.log_format,
        color=config.color,
        verbose=config.debug,
    )

    try:
        config.ensure_dirs()
    except OSError as e:
        logger.error(get_message(
            "error.bootstrap_failed",
            config.language,
            path=config.config_dir,
            error=e,
        ))
        return 1

    gate = PrivilegeGate(helper=config.elevation_helper)
    ctx = CliContext(
        config=config,
        logger=logger,
        orchestrator=SwitchOrchestrator(config, logger=logger, privilege_gate=gate),
        gate=gate,
        launcher=EditorLauncher(),
    )
    logger.debug("Configuration loaded", {
        "config_dir": str(config.config_dir),
        "hosts_path": str(config.hosts_path),
        "language": config.language,
    })

    try:
        if args.command is None:
            exit_code = InteractiveMenu(ctx.orchestrator, logger, ctx.launcher).run()
        else:
            exit_code = args.func(args, ctx)
        run_update_check(ctx)
    except KeyboardInterrupt:
        logger.warning(get_message("cli.interrupted", config.language))
        return 130

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
