"""Command-line entry point for gtr"""

import argparse
import sys
from typing import Callable, Dict, List, Optional

from rich.console import Console

from gtr.__version__ import __version__
from gtr.cli.args import Command, build_parser, parse_args
from gtr.config import Config, ConfigFile
from gtr.core.worktree_manager import WorktreeManager
from gtr.exceptions import DirtyWorktreeError, GtrError, NotARepositoryError, UsageError
from gtr.logging_config import get_logger, setup_logging
from gtr.services.display_service import DisplayService
from gtr.services.git.operations import GitOperations

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def _print_error(message: str) -> None:
    err_console.print(f"gtr: {message}", style="red", markup=False, highlight=False, soft_wrap=True)


def _cmd_create(args: argparse.Namespace, manager: WorktreeManager) -> int:
    manager.create(args.name, args.prefix)
    return 0


def _cmd_remove(args: argparse.Namespace, manager: WorktreeManager) -> int:
    manager.remove_many(args.names, force=args.force)
    return 0


def _cmd_cd(args: argparse.Namespace, manager: WorktreeManager) -> int:
    path = manager.switch_to(args.name)
    # Printed so a shell function can `cd "$(gtr cd name)"`
    console.print(path, markup=False, highlight=False, soft_wrap=True)
    return 0


def _cmd_main(args: argparse.Namespace, manager: WorktreeManager) -> int:
    args.name = None
    return _cmd_cd(args, manager)


def _cmd_list(args: argparse.Namespace, manager: WorktreeManager) -> int:
    worktrees, base_path = manager.list_worktrees()
    manager.display_service.display_worktree_table(worktrees, base_path)
    return 0


def _cmd_claude(args: argparse.Namespace, manager: WorktreeManager) -> int:
    return manager.launch_interactive(args.name)


COMMAND_HANDLERS: Dict[Command, Callable[[argparse.Namespace, WorktreeManager], int]] = {
    Command.CREATE: _cmd_create,
    Command.REMOVE: _cmd_remove,
    Command.CD: _cmd_cd,
    Command.MAIN: _cmd_main,
    Command.LIST: _cmd_list,
    Command.CLAUDE: _cmd_claude,
}


def _cmd_version(args: argparse.Namespace, config_file: ConfigFile) -> int:
    console.print(f"gtr {__version__}", highlight=False)
    return 0


def _cmd_help(args: argparse.Namespace, config_file: ConfigFile) -> int:
    console.print(build_parser().format_help(), markup=False, highlight=False, end="")
    return 0


def _cmd_config(args: argparse.Namespace, config_file: ConfigFile) -> int:
    """Show or persist the base path; works outside a repository."""
    if args.path is not None:
        if not args.path.strip():
            raise UsageError("base path cannot be empty", usage="Usage: gtr config [<path>]")
        value = config_file.write(args.path)
        console.print(f"Base path set to {value}", markup=False, highlight=False, soft_wrap=True)
        return 0

    try:
        repo_root: Optional[str] = GitOperations.discover().root
    except NotARepositoryError:
        repo_root = None
    config = Config.load(repo_root=repo_root, config_file=config_file,
                         verbose=args.verbose, debug=args.debug)
    DisplayService(args.verbose, args.debug).display_config(config)
    return 0


# Commands that work outside a git repository
REPO_FREE_HANDLERS: Dict[Command, Callable[[argparse.Namespace, ConfigFile], int]] = {
    Command.VERSION: _cmd_version,
    Command.HELP: _cmd_help,
    Command.CONFIG: _cmd_config,
}


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command."""
    command: Command = args.command

    config_file = ConfigFile()
    if command in REPO_FREE_HANDLERS:
        return REPO_FREE_HANDLERS[command](args, config_file)

    # All other commands require a git repo
    git_ops = GitOperations.discover()
    config = Config.load(repo_root=git_ops.root, config_file=config_file,
                         verbose=args.verbose, debug=args.debug)
    if args.debug:
        for key, value in config.to_dict().items():
            logger.debug(f"config {key}: {value}")

    manager = WorktreeManager(git_ops, config, DisplayService(args.verbose, args.debug))
    return COMMAND_HANDLERS[command](args, manager)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    debug = False
    try:
        args = parse_args(argv)
        debug = args.debug
        log_file = setup_logging(verbose=args.verbose, debug=args.debug)
        if log_file:
            logger.debug(f"Writing debug log to {log_file}")
        return run(args)
    except DirtyWorktreeError as e:
        _print_error(f"{e}:")
        for line in e.status_lines:
            console.print(line, markup=False, highlight=False, soft_wrap=True)
        err_console.print("")
        err_console.print(e.hint, markup=False, highlight=False, soft_wrap=True)
        return 1
    except UsageError as e:
        _print_error(str(e))
        if e.usage:
            err_console.print(e.usage, markup=False, highlight=False, soft_wrap=True)
        err_console.print("Run 'gtr help' for usage.", markup=False)
        return 1
    except GtrError as e:
        _print_error(str(e))
        if debug:
            err_console.print_exception()
        return 1
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
