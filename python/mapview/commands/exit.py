"""exit: leave the shell."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import ViewerContext


class ExitCommand(Command):
    name = "exit"
    summary = "Leave the interactive shell"
    aliases = ("quit", "q")

    def run(self, ctx: ViewerContext, argv: List[str]) -> int:
        raise SystemExit(0)
