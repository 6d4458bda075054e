"""Printing command outcomes and table views.

Every command reports through :func:`emit_result` or :func:`emit_error`,
which return the command's exit status.  With ``--json`` each outcome is one
JSON document on stdout (``{"status": "ok", "result": ...}`` or
``{"status": "error", "message": ..., "details": ...}``); in text mode results
go to stdout and errors to stderr so piped tables stay clean.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Mapping, Optional, Sequence

from tabulate import tabulate

from .context import ViewerContext
from .views import Row

_TEXT_COLUMNS = frozenset({"name", "chip", "group", "module", "archive", "symbol"})


def _print_json(payload: Mapping[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def emit_result(ctx: ViewerContext, text: str, result: Optional[Mapping[str, Any]] = None) -> int:
    if ctx.json_output:
        _print_json({"status": "ok", "result": dict(result) if result is not None else {"message": text}})
    else:
        print(text)
    return 0


def emit_error(
    ctx: ViewerContext,
    text: str,
    details: Optional[Mapping[str, Any]] = None,
    *,
    status: int = 1,
) -> int:
    if ctx.json_output:
        payload: Dict[str, Any] = {"status": "error", "message": text}
        if details:
            payload["details"] = dict(details)
        _print_json(payload)
    else:
        print(f"error: {text}", file=sys.stderr)
    return status


def _format_cell(column: str, value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, int):
        return value
    if column in _TEXT_COLUMNS:
        return value
    if value < 0:
        return f"-0x{-value:X}"
    return f"0x{value:X}"


def format_table(rows: Sequence[Row], columns: Sequence[str], *, hex_sizes: bool = True) -> str:
    """Render rows as a github-style table; sizes shown in hex by default."""
    if not rows:
        return "(none)"
    body = [
        [_format_cell(column, row.get(column, "")) if hex_sizes else row.get(column, "") for column in columns]
        for row in rows
    ]
    return tabulate(body, headers=list(columns), tablefmt="github", disable_numparse=True)


def render_rows(ctx: ViewerContext, title: str, rows: Sequence[Row], columns: Sequence[str]) -> int:
    if ctx.json_output:
        return emit_result(ctx, title, {"columns": list(columns), "rows": list(rows)})
    return emit_result(ctx, f"{title}:\n{format_table(rows, columns)}")


__all__ = ["emit_result", "emit_error", "format_table", "render_rows"]
