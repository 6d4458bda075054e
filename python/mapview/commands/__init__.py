"""Shell commands and the registry that resolves names and aliases."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from .base import Command, CommandLineError, split_command
from .exit import ExitCommand
from .help import HelpCommand
from .load import LoadCommand
from .settings import ParamsCommand, SetCommand
from .views import VIEW_COMMANDS


class CommandRegistry:
    """Commands in registration order, reachable by name or alias."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._words: Dict[str, str] = {}

    def register(self, command: Command) -> None:
        for word in (command.name, *command.aliases):
            owner = self._words.get(word)
            if owner is not None and owner != command.name:
                raise ValueError(f"{word!r} is already taken by {owner!r}")
        for word in (command.name, *command.aliases):
            self._words[word] = command.name
        self._commands[command.name] = command

    def get(self, word: str) -> Optional[Command]:
        name = self._words.get(word)
        return self._commands[name] if name is not None else None

    def words(self) -> List[str]:
        """Every name and alias, for completion."""
        return sorted(self._words)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    registry.register(LoadCommand())
    for factory in VIEW_COMMANDS:
        registry.register(factory())
    registry.register(SetCommand())
    registry.register(ParamsCommand())
    registry.register(HelpCommand(registry))
    registry.register(ExitCommand())
    return registry


__all__ = ["Command", "CommandLineError", "CommandRegistry", "build_registry", "split_command"]
