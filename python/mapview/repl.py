"""Interactive shell for regrouping a loaded report."""

from __future__ import annotations

import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from .commands import CommandLineError, CommandRegistry, split_command
from .commands.settings import SetCommand
from .context import ViewerContext
from .output import emit_error

LOGGER = logging.getLogger("mapview.repl")


def dispatch_line(ctx: ViewerContext, registry: CommandRegistry, line: str) -> int:
    """Run one command line and return its exit status."""
    try:
        argv = split_command(line)
    except CommandLineError as exc:
        return emit_error(ctx, f"cannot parse command: {exc}")
    if not argv:
        return 0
    cmd_name, *cmd_args = argv
    command = registry.get(cmd_name)
    if command is None:
        return emit_error(ctx, f"unknown command: {cmd_name} (try 'help')")
    try:
        return command.run(ctx, cmd_args)
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive logging
        LOGGER.exception("command failed")
        return emit_error(ctx, f"{cmd_name} failed: {exc}")


class ViewerREPL:
    """prompt_toolkit loop over the command registry."""

    def __init__(self, ctx: ViewerContext, registry: CommandRegistry, *, prompt: str = "mapview> ") -> None:
        self.ctx = ctx
        self.registry = registry
        self.prompt = prompt

    def build_completer(self) -> WordCompleter:
        words = self.registry.words() + SetCommand.option_names() + ["on", "off"]
        return WordCompleter(sorted(set(words)))

    def run(self) -> int:
        session = PromptSession(
            self.prompt,
            history=InMemoryHistory(),
            completer=self.build_completer(),
            complete_while_typing=True,
        )
        while True:
            try:
                with patch_stdout():
                    line = session.prompt()
            except (EOFError, KeyboardInterrupt):
                print()
                return 0
            try:
                dispatch_line(self.ctx, self.registry, line)
            except SystemExit as exc:
                return int(exc.code or 0)
