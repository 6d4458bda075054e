"""load PATH: parse a report and make it the current model."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .base import Command
from ..context import ViewerContext
from ..loader import LoadResponse
from ..output import emit_error, emit_result
from ..parser import MalformedReportError

LOGGER = logging.getLogger("mapview.commands.load")


def _log_progress(response: LoadResponse) -> None:
    LOGGER.debug("%s: %d%%", response.path, response.progress)


class LoadCommand(Command):
    name = "load"
    summary = "Parse a map report and make it current"
    aliases = ("open",)

    def build_parser(self) -> Optional[argparse.ArgumentParser]:
        parser = self._new_parser()
        parser.add_argument("path", help="Report file")
        return parser

    def run(self, ctx: ViewerContext, argv: List[str]) -> int:
        args = self.parse_args(argv)
        if args is None:
            return 1
        try:
            loaded = ctx.load(args.path, on_progress=_log_progress)
        except OSError as exc:
            return emit_error(ctx, f"cannot read {args.path}: {exc}")
        except MalformedReportError as exc:
            return emit_error(
                ctx,
                f"malformed report {args.path}: {exc}",
                {"line": exc.line_number, "text": exc.line},
            )
        if not loaded:
            return emit_error(ctx, "load cancelled")
        linker_map = ctx.require_map()
        summary = {
            "path": str(ctx.path),
            "files": len(linker_map.processed_files),
            "linkRecords": len(linker_map.link_result),
            "locations": len(linker_map.locate_result),
            "regions": len(linker_map.used_resources),
        }
        return emit_result(
            ctx,
            f"loaded {ctx.path}: {summary['files']} files, {summary['linkRecords']} link records, "
            f"{summary['locations']} locations, {summary['regions']} memory regions",
            summary,
        )
