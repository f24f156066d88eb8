"""Display and formatting service for worktree information"""
from typing import List

from rich.console import Console
from rich.table import Table

from gtr.config import Config
from gtr.models.worktree import WorktreeInfo
from gtr.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


class DisplayService:
    def __init__(self, verbose: bool = False, debug: bool = False):
        self.verbose = verbose
        self.debug_mode = debug

    def display_worktree_table(self, worktrees: List[WorktreeInfo], base_path: str) -> None:
        """Display git's worktree listing followed by the base path."""
        if not worktrees:
            console.print(f"No worktrees in {base_path}", markup=False, soft_wrap=True)
            return

        table = Table()
        table.add_column("Path")
        table.add_column("Commit")
        table.add_column("Branch")
        table.add_column("Notes")

        for wt in worktrees:
            notes = []
            if wt.is_main:
                notes.append("main")
            if wt.is_orphaned:
                notes.append("[yellow]orphaned[/yellow]")
            table.add_row(
                wt.path,
                wt.short_sha,
                wt.branch_name or "[dim](detached)[/dim]",
                ", ".join(notes),
            )

        console.print(table)
        console.print(f"Base path: {base_path}", style="dim", markup=False, soft_wrap=True)

    def display_config(self, config: Config) -> None:
        """Show the resolved base path and where it came from."""
        for label, value in (
            ("Base path", config.base_path),
            ("Source", config.base_path_source.value),
            ("Prefix", config.branch_prefix),
        ):
            console.print(f"{label + ':':<11}{value}", markup=False, highlight=False, soft_wrap=True)

    def display_removed(self, name: str, forced: bool) -> None:
        suffix = " (forced)" if forced else ""
        console.print(f"Removed worktree '{name}'{suffix}")

    def display_git_output(self, output: str) -> None:
        """Echo what a git command reported, verbatim."""
        if output:
            console.print(output, markup=False, highlight=False, soft_wrap=True)
