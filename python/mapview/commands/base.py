"""Shell command plumbing: line tokenising and the command base class."""

from __future__ import annotations

import argparse
import shlex
from typing import List, Optional, Tuple

from ..context import ViewerContext


class CommandLineError(ValueError):
    """A shell line could not be split into words (unbalanced quotes)."""


def split_command(line: str) -> List[str]:
    try:
        return shlex.split(line)
    except ValueError as exc:
        raise CommandLineError(f"{exc}: {line.strip()}") from exc


class Command:
    """One shell verb.

    Subclasses set ``name``, ``summary`` and ``aliases`` and describe their
    arguments by overriding :meth:`build_parser`; the parser doubles as the
    source of ``help COMMAND`` output.
    """

    name: str = ""
    summary: str = ""
    aliases: Tuple[str, ...] = ()

    def __init__(self) -> None:
        self.parser = self.build_parser()

    def build_parser(self) -> Optional[argparse.ArgumentParser]:
        return None

    def _new_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(prog=self.name, description=self.summary, add_help=False)

    def usage(self) -> str:
        if self.parser is None:
            return self.name
        return self.parser.format_usage().split(":", 1)[-1].strip()

    def describe(self) -> str:
        """Long help: usage line, summary, arguments and aliases."""
        if self.parser is None:
            text = f"usage: {self.name}\n\n{self.summary}\n"
        else:
            text = self.parser.format_help()
        if self.aliases:
            text += f"\naliases: {', '.join(self.aliases)}\n"
        return text.rstrip("\n")

    def parse_args(self, argv: List[str]) -> Optional[argparse.Namespace]:
        """Parse ``argv``; argparse prints the usage error and ``None`` is returned."""
        if self.parser is None:
            return argparse.Namespace()
        try:
            return self.parser.parse_args(argv)
        except SystemExit:
            return None

    def run(self, ctx: ViewerContext, argv: List[str]) -> int:
        raise NotImplementedError(f"{type(self).__name__} does not implement run()")
