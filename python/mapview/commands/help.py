"""help [COMMAND]: command overview or one command's usage."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING, List, Optional

from tabulate import tabulate

from .base import Command
from ..context import ViewerContext
from ..output import emit_error, emit_result

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class HelpCommand(Command):
    name = "help"
    summary = "List commands, or show how to call one"
    aliases = ("?",)

    def __init__(self, registry: "CommandRegistry") -> None:
        self.registry = registry
        super().__init__()

    def build_parser(self) -> Optional[argparse.ArgumentParser]:
        parser = self._new_parser()
        parser.add_argument("command", nargs="?", help="Command name or alias")
        return parser

    def run(self, ctx: ViewerContext, argv: List[str]) -> int:
        args = self.parse_args(argv)
        if args is None:
            return 1
        if args.command is None:
            return self._overview(ctx)
        command = self.registry.get(args.command)
        if command is None:
            return emit_error(ctx, f"no command named {args.command!r}")
        result = {
            "name": command.name,
            "usage": command.usage(),
            "summary": command.summary,
            "aliases": list(command.aliases),
        }
        return emit_result(ctx, command.describe(), result)

    def _overview(self, ctx: ViewerContext) -> int:
        entries = [
            {"usage": command.usage(), "summary": command.summary, "aliases": list(command.aliases)}
            for command in self.registry
        ]
        table = tabulate(
            [(entry["usage"], entry["summary"], ", ".join(entry["aliases"])) for entry in entries],
            tablefmt="plain",
            disable_numparse=True,
        )
        return emit_result(ctx, table, {"commands": entries})
