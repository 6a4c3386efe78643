"""Command modules for the Hoopcast CLI."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from rich.console import Console


class CommandError(Exception):
    """Raised for malformed command arguments; shown to the user in red."""


@dataclass(frozen=True)
class Option:
    """One command-line option.

    ``takes_value`` options read the next token; when that token is missing
    ``implicit`` is used instead, or a CommandError is raised if it is None.
    """

    names: Tuple[str, ...]
    dest: str
    takes_value: bool = False
    metavar: str = "a value"
    implicit: Optional[str] = None


def parse_command(command: str, options: Sequence[Option]) -> Tuple[List[str], Dict[str, object]]:
    """Split a command line into positional arguments and option values.

    Flags default to False and valued options to None.

    Raises:
        CommandError: For unknown options or a missing option value
    """
    lookup = {name: option for option in options for name in option.names}
    values: Dict[str, object] = {
        option.dest: (None if option.takes_value else False) for option in options
    }
    positional: List[str] = []

    parts = command.split()[1:]
    i = 0
    while i < len(parts):
        part = parts[i]
        option = lookup.get(part)
        if option is None:
            if part.startswith("-"):
                raise CommandError(f"Unknown option: {part}")
            positional.append(part)
            i += 1
            continue

        if not option.takes_value:
            values[option.dest] = True
            i += 1
            continue

        if i + 1 < len(parts) and not parts[i + 1].startswith("-"):
            values[option.dest] = parts[i + 1]
            i += 2
        elif option.implicit is not None:
            values[option.dest] = option.implicit
            i += 1
        else:
            raise CommandError(f"{option.names[-1]} requires {option.metavar}")
    return positional, values


class Command(ABC):
    """Base class for CLI commands."""

    def __init__(self, console: Console) -> None:
        self.console = console

    @property
    @abstractmethod
    def name(self) -> str:
        """Primary command name (e.g., '/matchup')."""

    @property
    def aliases(self) -> Sequence[str]:
        """Additional names for this command (e.g., ['/m'] for '/matchup')."""
        return ()

    @property
    @abstractmethod
    def description(self) -> str:
        """One-line description shown by /help."""

    @property
    def arguments(self) -> List[Dict[str, str | bool]]:
        """Argument definitions rendered by ``<command> --help``.

        Each argument is a dict with keys:
        - name: The argument name (e.g., '-d, --day', '<player_id>')
        - required: Boolean indicating if the argument is required
        - description: Human-readable description of the argument
        - default: (optional) Default value if not provided
        """
        return []

    def should_show_help(self, command: str) -> bool:
        parts = command.split()
        return "-h" in parts or "--help" in parts

    def show_help(self) -> None:
        from hoopcast.utils.cli_common import render_command_help

        render_command_help(self.name, self.description, self.arguments, self.console)

    def error(self, message: str) -> None:
        self.console.print(message, style="red")

    @abstractmethod
    def execute(self, command: str) -> None:
        """Execute the command with the full command string."""
