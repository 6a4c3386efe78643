"""Exit command for the Hoopcast CLI."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console

from commands import Command
from commands.matchup_context import MatchupContext


class ExitCommand(Command):
    """Leave the CLI; overrides are already on disk, so this only reports them."""

    def __init__(self, console: Console, matchup_context: Optional[MatchupContext] = None) -> None:
        super().__init__(console)
        self.matchup_context = matchup_context

    @property
    def name(self) -> str:
        return "/exit"

    @property
    def aliases(self) -> Sequence[str]:
        return ("/quit",)

    @property
    def description(self) -> str:
        return "Exit the CLI."

    def execute(self, command: str) -> None:
        if self.should_show_help(command):
            self.show_help()
            return
        if self.matchup_context is None:
            return
        session = self.matchup_context.session
        count = len(session.overrides())
        if count:
            self.console.print(
                f"{count} player override(s) kept in {session.store.path}", style="dim"
            )
