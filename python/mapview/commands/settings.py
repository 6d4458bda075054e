"""Grouping parameter commands: set and params."""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Dict, List, Optional

from .base import Command
from ..classify import parse_name_list
from ..config import ConfigError, params_to_settings, parse_bool
from ..context import ViewerContext
from ..output import emit_error, emit_result
from ..views import SORT_COLUMNS

_FLAG_OPTIONS: Dict[str, str] = {
    "show-object-files": "show_object_files",
    "group-by-group": "group_by_group",
    "group-by-module": "group_by_module",
}
_NAME_OPTIONS = ("bss", "data", "text")


class SetCommand(Command):
    name = "set"
    summary = "Change a grouping option; views regroup without reloading"

    @staticmethod
    def option_names() -> List[str]:
        return [*_FLAG_OPTIONS, *_NAME_OPTIONS, "sort", "json"]

    def build_parser(self) -> Optional[argparse.ArgumentParser]:
        parser = self._new_parser()
        options = self.option_names()
        parser.add_argument("option", choices=options, metavar="OPTION", help=", ".join(options))
        parser.add_argument("value", nargs="+", help="on/off, comma separated section names, or a column")
        return parser

    def _apply(self, ctx: ViewerContext, option: str, value: str) -> None:
        if option in _FLAG_OPTIONS:
            ctx.update_params(**{_FLAG_OPTIONS[option]: parse_bool(value, option)})
        elif option in _NAME_OPTIONS:
            names = parse_name_list(value)
            if not names:
                raise ConfigError(f"{option} needs at least one section name")
            ctx.update_params(names=replace(ctx.params.names, **{option: names}))
        elif option == "sort":
            if value.lower() in ("none", "off"):
                ctx.sort_column = None
            elif value in SORT_COLUMNS:
                ctx.sort_column = value
            else:
                raise ConfigError(f"sort: no view has a column named {value!r}")
        else:
            ctx.json_output = parse_bool(value, option)

    def run(self, ctx: ViewerContext, argv: List[str]) -> int:
        args = self.parse_args(argv)
        if args is None:
            return 1
        value = " ".join(args.value)
        try:
            self._apply(ctx, args.option, value)
        except ConfigError as exc:
            return emit_error(ctx, str(exc))
        return emit_result(ctx, f"{args.option} = {value}", {"option": args.option, "value": value})


class ParamsCommand(Command):
    name = "params"
    summary = "Show the current grouping options"

    def run(self, ctx: ViewerContext, argv: List[str]) -> int:
        settings = params_to_settings(ctx.params)
        if ctx.sort_column:
            settings["sort"] = ctx.sort_column
        lines = []
        for key, value in settings.items():
            if isinstance(value, list):
                value = ", ".join(value)
            lines.append(f"  {key:<18}: {value}")
        return emit_result(ctx, "\n".join(lines), settings)
