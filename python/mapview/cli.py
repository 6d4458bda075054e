"""mapview command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .commands import build_registry
from .config import ConfigError, apply_settings, default_log_level, load_config
from .context import ViewerContext
from .repl import ViewerREPL, dispatch_line
from .views import SORT_COLUMNS

LOG = logging.getLogger("mapview.cli")

DEFAULT_COMMANDS = ("resources", "modules")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Linker map report viewer")
    parser.add_argument("report", nargs="?", type=Path, help="Map report to load")
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    parser.add_argument("--config", type=Path, help="Grouping config file (default ~/.mapview.json)")
    parser.add_argument("--log-level", default=default_log_level(), help="Logging level (default WARNING)")
    parser.add_argument(
        "--show-object-files",
        action="store_true",
        default=None,
        help="List archive members instead of whole archives",
    )
    parser.add_argument(
        "--no-group-by-group",
        dest="group_by_group",
        action="store_false",
        default=None,
        help="Merge all groups of a chip in the location view",
    )
    parser.add_argument(
        "--no-group-by-module",
        dest="group_by_module",
        action="store_false",
        default=None,
        help="Merge all modules of a chip in the location view",
    )
    parser.add_argument("--bss", help="Comma separated bss section names")
    parser.add_argument("--data", help="Comma separated data section names")
    parser.add_argument("--text", help="Comma separated text section names")
    parser.add_argument(
        "--sort",
        choices=SORT_COLUMNS,
        metavar="COLUMN",
        help=f"Sort tables by this column ({', '.join(SORT_COLUMNS)})",
    )
    parser.add_argument(
        "-c",
        "--command",
        action="append",
        help="Run a command non-interactively (repeatable, quote the command string)",
    )
    parser.add_argument("-i", "--interactive", action="store_true", help="Start the interactive shell")
    return parser


def _cli_settings(args: argparse.Namespace) -> dict:
    settings = {}
    if args.show_object_files is not None:
        settings["showObjectFiles"] = args.show_object_files
    if args.group_by_group is not None:
        settings["groupByGroup"] = args.group_by_group
    if args.group_by_module is not None:
        settings["groupByModule"] = args.group_by_module
    for option, key in (("bss", "bssSectionNames"), ("data", "dataSectionNames"), ("text", "textSectionNames")):
        value = getattr(args, option)
        if value is not None:
            settings[key] = value
    return settings


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        params = apply_settings(load_config(args.config), _cli_settings(args))
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    ctx = ViewerContext(params=params, json_output=args.json, sort_column=args.sort)
    registry = build_registry()

    if args.report is not None:
        status = registry.get("load").run(ctx, [str(args.report)])
        if status != 0 and not args.interactive:
            return status

    if args.interactive:
        try:
            return ViewerREPL(ctx, registry).run()
        except KeyboardInterrupt:
            print()
            return 0

    if args.report is None and not args.command:
        parser.print_usage()
        return 2
    status = 0
    for line in args.command or DEFAULT_COMMANDS:
        try:
            result = dispatch_line(ctx, registry, line)
        except SystemExit as exc:
            return int(exc.code or 0) or status
        if result != 0 and status == 0:
            status = result
    return status


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
