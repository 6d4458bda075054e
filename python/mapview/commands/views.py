"""Table view commands: files, modules, locations, resources."""

from __future__ import annotations

import argparse
from typing import Callable, List, Optional, Sequence

from .base import Command
from ..context import NoReportLoaded, ViewerContext
from ..output import emit_error, render_rows
from ..views import (
    FILE_COLUMNS,
    LOCATION_COLUMNS,
    MODULE_COLUMNS,
    RESOURCE_COLUMNS,
    Row,
    file_rows,
    location_rows,
    module_rows,
    resource_rows,
    sort_rows,
)


class ViewCommand(Command):
    """Renders one view; ``--sort`` overrides the session sort column."""

    columns: Sequence[str] = ()

    def build_parser(self) -> Optional[argparse.ArgumentParser]:
        parser = self._new_parser()
        parser.add_argument("--sort", choices=list(self.columns), metavar="COLUMN", help=", ".join(self.columns))
        return parser

    def rows(self, ctx: ViewerContext) -> List[Row]:
        raise NotImplementedError

    def run(self, ctx: ViewerContext, argv: List[str]) -> int:
        args = self.parse_args(argv)
        if args is None:
            return 1
        try:
            rows = self.rows(ctx)
        except NoReportLoaded as exc:
            return emit_error(ctx, str(exc))
        # a session-wide sort column only applies to views that have it
        column = args.sort or (ctx.sort_column if ctx.sort_column in self.columns else None)
        return render_rows(ctx, self.name, sort_rows(rows, column, self.columns), self.columns)


class FilesCommand(ViewCommand):
    name = "files"
    summary = "List processed input files"
    columns = FILE_COLUMNS

    def rows(self, ctx: ViewerContext) -> List[Row]:
        return file_rows(ctx.require_map())


class ModulesCommand(ViewCommand):
    name = "modules"
    summary = "Section sizes per module"
    aliases = ("mod",)
    columns = MODULE_COLUMNS

    def rows(self, ctx: ViewerContext) -> List[Row]:
        return module_rows(ctx.stats())


class LocationsCommand(ViewCommand):
    name = "locations"
    summary = "Placed sizes per chip/group/module"
    aliases = ("loc",)
    columns = LOCATION_COLUMNS

    def rows(self, ctx: ViewerContext) -> List[Row]:
        return location_rows(ctx.stats())


class ResourcesCommand(ViewCommand):
    name = "resources"
    summary = "Memory region occupancy and free space"
    aliases = ("res",)
    columns = RESOURCE_COLUMNS

    def rows(self, ctx: ViewerContext) -> List[Row]:
        return resource_rows(ctx.stats())


VIEW_COMMANDS: Sequence[Callable[[], ViewCommand]] = (
    FilesCommand,
    ModulesCommand,
    LocationsCommand,
    ResourcesCommand,
)
