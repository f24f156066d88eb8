"""Command-line argument parsing for gtr."""

import argparse
from enum import Enum
from typing import List, Optional

from gtr.constants import ENV_BRANCH_PREFIX, ENV_WORKTREE_DIR
from gtr.exceptions import UsageError


class Command(Enum):
    """Every sub-command gtr understands."""

    CREATE = "create"
    REMOVE = "rm"
    CD = "cd"
    MAIN = "main"
    LIST = "list"
    CLAUDE = "claude"
    CONFIG = "config"
    VERSION = "version"
    HELP = "help"


EPILOG = f"""\
Environment variables:
  {ENV_WORKTREE_DIR}    Base directory for worktrees (overrides `gtr config`)
  {ENV_BRANCH_PREFIX}   Branch prefix for new branches (default: feat/)

Base directory lookup: ${ENV_WORKTREE_DIR}, then `gtr config <path>`,
then a `worktrees` directory next to the repository, then ~/code/worktrees.

Examples:
  gtr create my-feature         # creates worktree + branch feat/my-feature
  gtr create bug-42 fix/        # branch fix/bug-42
  gtr cd my-feature             # jump into it
  gtr rm my-feature             # clean remove
  gtr rm -f my-feature          # force remove (dirty worktree)
"""


class GtrArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message, usage=self.format_usage().strip())


def build_parser() -> GtrArgumentParser:
    """Build the gtr argument parser."""
    parser = GtrArgumentParser(
        prog="gtr",
        description="gtr ─ Git worktree helper",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help")
    parser.add_argument("-v", "--version", action="store_true", help="Show version")
    parser.add_argument("--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )

    subparsers = parser.add_subparsers(dest="command_name", metavar="<command>")

    create = subparsers.add_parser(
        "create", help="Create a worktree (checks out an existing branch if there is one)"
    )
    create.add_argument("name", help="Worktree name")
    create.add_argument(
        "prefix", nargs="?", default=None, help="Branch prefix for this call only"
    )
    create.set_defaults(command=Command.CREATE)

    remove = subparsers.add_parser(
        "rm", aliases=["remove"], help="Remove worktree(s) and their branches"
    )
    remove.add_argument(
        "-f", "--force", action="store_true", help="Force-remove even with uncommitted changes"
    )
    remove.add_argument("names", nargs="+", metavar="name", help="Worktree name(s)")
    remove.set_defaults(command=Command.REMOVE)

    cd = subparsers.add_parser("cd", help="Change directory into a worktree (main when omitted)")
    cd.add_argument("name", nargs="?", default=None, help="Worktree name")
    cd.set_defaults(command=Command.CD)

    main = subparsers.add_parser("main", help="Change directory into the main worktree")
    main.set_defaults(command=Command.MAIN)

    list_parser = subparsers.add_parser("list", aliases=["ls"], help="List worktrees")
    list_parser.set_defaults(command=Command.LIST)

    claude = subparsers.add_parser(
        "claude", help="Open claude inside a worktree (creates it if needed)"
    )
    claude.add_argument("name", help="Worktree name")
    claude.set_defaults(command=Command.CLAUDE)

    config = subparsers.add_parser(
        "config", help="Show the base directory, or persist a new one"
    )
    config.add_argument("path", nargs="?", default=None, help="New base directory")
    config.set_defaults(command=Command.CONFIG)

    version = subparsers.add_parser("version", help="Show version")
    version.set_defaults(command=Command.VERSION)

    help_parser = subparsers.add_parser("help", help="Show this help")
    help_parser.set_defaults(command=Command.HELP)

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Raises:
        UsageError: On unknown sub-commands, missing arguments or no command at all
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        args.command = Command.VERSION
    elif args.help:
        args.command = Command.HELP
    elif getattr(args, "command", None) is None:
        raise UsageError("missing command", usage=parser.format_usage().strip())

    return args
