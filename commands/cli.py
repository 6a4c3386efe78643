"""Interactive entry point for the Hoopcast CLI."""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Sequence

from rich.console import Console

from commands import Command
from commands.exit_command import ExitCommand
from commands.help_command import HelpCommand
from commands.matchup_command import MatchupCommand
from commands.matchup_context import MatchupContext
from commands.player_status_command import ClearCommand, DisableCommand, EnableCommand
from hoopcast.utils.cli_common import CommandRegistry, read_command


def build_commands(console: Console, registry: CommandRegistry) -> List[Command]:
    matchup_context = MatchupContext(console)
    commands: List[Command] = [
        MatchupCommand(console, matchup_context),
        EnableCommand(console, matchup_context),
        DisableCommand(console, matchup_context),
        ClearCommand(console, matchup_context),
        ExitCommand(console, matchup_context),
    ]
    commands.insert(0, HelpCommand(console, registry, matchup_context))

    for cmd in commands:
        registry.register(cmd.name, cmd.execute, cmd.description, cmd.aliases)
    return commands


def main(argv: Sequence[str] = ()) -> int:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    console = Console()
    registry = CommandRegistry()
    commands = build_commands(console, registry)
    exit_command = next(cmd for cmd in commands if isinstance(cmd, ExitCommand))
    exit_names = {exit_command.name, *exit_command.aliases}

    argv = list(argv or sys.argv[1:])
    if argv:
        # One-shot mode: hoopcast /matchup week.json
        line = " ".join(argv)
        if not line.startswith("/"):
            line = f"/{line}"
        return _dispatch(console, registry, line)

    console.print("[bold]Hoopcast[/bold] - type /help for commands, /exit to quit")
    while True:
        try:
            line = read_command(registry.names())
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            continue
        if line.split()[0] in exit_names:
            exit_command.execute(line)
            break
        _dispatch(console, registry, line)
    return 0


def _dispatch(console: Console, registry: CommandRegistry, line: str) -> int:
    if not registry.dispatch(line):
        console.print(
            f"Unknown command: {line.split()[0]}. Type /help for commands.", style="yellow"
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
