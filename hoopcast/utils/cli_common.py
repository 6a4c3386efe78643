"""Interactive CLI plumbing: command registry, prompt, help tables."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from prompt_toolkit import prompt as pt_prompt
from prompt_toolkit.completion import FuzzyWordCompleter
from prompt_toolkit.history import FileHistory
from prompt_toolkit.key_binding import KeyBindings
from rich.console import Console
from rich.table import Table

from hoopcast.utils.config import get_cache_root

console = Console()


@dataclass(frozen=True)
class RegisteredCommand:
    name: str
    handler: Callable[[str], None]
    description: str
    aliases: Tuple[str, ...] = ()


class CommandRegistry:
    """Maps command names and their aliases to handlers."""

    def __init__(self) -> None:
        self._commands: Dict[str, RegisteredCommand] = {}
        self._lookup: Dict[str, RegisteredCommand] = {}

    def register(
        self,
        command: str,
        handler: Callable[[str], None],
        description: str,
        aliases: Sequence[str] = (),
    ) -> None:
        entry = RegisteredCommand(command, handler, description, tuple(aliases))
        self._commands[command] = entry
        for name in (command, *entry.aliases):
            self._lookup[name] = entry

    def get(self, name: str) -> Optional[RegisteredCommand]:
        return self._lookup.get(name)

    def entries(self) -> Iterable[RegisteredCommand]:
        """Registered commands in registration order, one entry per command."""
        return self._commands.values()

    def names(self) -> Sequence[str]:
        return tuple(sorted(self._lookup))

    def dispatch(self, line: str) -> bool:
        """Run the handler for the first word of ``line``; False if it is unknown."""
        parts = line.split()
        entry = self.get(parts[0]) if parts else None
        if entry is None:
            return False
        entry.handler(line)
        return True


def read_command(names: Sequence[str], prompt_text: str = "hoopcast> ") -> str:
    """Read one command line, with fuzzy completion and history on a terminal.

    Escape clears the line. Piped input falls back to plain ``input``.
    """
    if not sys.stdin.isatty():
        return input(prompt_text).strip()

    bindings = KeyBindings()

    @bindings.add("escape")
    def _clear(event) -> None:  # pragma: no cover - interactive
        event.app.exit(result="")

    return pt_prompt(
        prompt_text,
        completer=FuzzyWordCompleter(list(names)),
        complete_while_typing=True,
        key_bindings=bindings,
        history=FileHistory(str(get_cache_root() / "history")),
    ).strip()


def confirm(question: str) -> bool:
    """Ask a yes/no question until it gets an answer."""
    while True:
        answer = console.input(f"{question} [y/n]: ").strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        console.print("Please answer y or n.", style="yellow")


def show_capabilities(
    registry: CommandRegistry, console_instance: Console, footer: Sequence[str] = ()
) -> None:
    """Print the command table followed by dimmed status lines."""
    table = Table(title="Hoopcast CLI Capabilities")
    table.add_column("Command", justify="left")
    table.add_column("Description", justify="left")
    for entry in registry.entries():
        table.add_row(" , ".join((entry.name, *entry.aliases)), entry.description)
    console_instance.print(table)

    if footer:
        console_instance.print()
    for line in footer:
        console_instance.print(line, style="dim")


def render_command_help(
    command_name: str,
    description: str,
    arguments: Sequence[Mapping[str, str | bool]],
    console_instance: Console,
) -> None:
    """Print a command's description and one row per argument.

    Required arguments are shown in bold; defaults are appended to the
    argument's description.
    """
    console_instance.print(f"[bold cyan]{command_name}[/bold cyan] - {description}")
    if not arguments:
        return

    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Argument", style="cyan", no_wrap=True)
    table.add_column("Description")
    for arg in arguments:
        name = str(arg.get("name", ""))
        if arg.get("required"):
            name = f"[bold]{name}[/bold]"
        text = str(arg.get("description", ""))
        if arg.get("default"):
            text = f"{text} (default: {arg['default']})"
        table.add_row(name, text)
    console_instance.print(table)
