"""Tabular rows derived from aggregation results.

Every view is a list of plain dicts whose keys follow the matching
``*_COLUMNS`` tuple, ready for table rendering, JSON or CSV export.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .model import LinkerMap
from .stats import StatsResult

Row = Dict[str, Any]

MODULE_COLUMNS = ("name", "bss", "data", "text", "other", "total")
LOCATION_COLUMNS = ("chip", "group", "module", "size", "actualSize")
RESOURCE_COLUMNS = ("name", "code", "data", "reserved", "free", "total", "chipData", "chipFree", "usage")
FILE_COLUMNS = ("name", "archive", "symbol")
SORT_COLUMNS = tuple(dict.fromkeys(MODULE_COLUMNS + LOCATION_COLUMNS + RESOURCE_COLUMNS + FILE_COLUMNS))


def module_rows(result: StatsResult) -> List[Row]:
    return [
        {
            "name": totals.name,
            "bss": totals.bss,
            "data": totals.data,
            "text": totals.text,
            "other": totals.other,
            "total": totals.total,
        }
        for totals in result.module_totals.values()
    ]


def location_rows(result: StatsResult) -> List[Row]:
    return [
        {
            "chip": totals.chip,
            "group": ", ".join(totals.group_names),
            "module": ", ".join(totals.module_names),
            "size": totals.size,
            "actualSize": totals.actual_size,
        }
        for totals in result.location_totals.values()
    ]


def resource_rows(result: StatsResult) -> List[Row]:
    rows: List[Row] = []
    for stats in result.resource_totals:
        region = stats.region
        rows.append(
            {
                "name": region.name,
                "code": region.code,
                "data": region.data,
                "reserved": region.reserved,
                "free": region.free,
                "total": region.total,
                "chipData": stats.chip_data,
                "chipFree": stats.chip_free,
                "usage": round(stats.usage * 100, 1),
            }
        )
    return rows


def file_rows(linker_map: LinkerMap) -> List[Row]:
    return [
        {"name": entry.name, "archive": entry.archive_name or "", "symbol": entry.extract_symbol or ""}
        for entry in linker_map.processed_files
    ]


def sort_rows(rows: List[Row], column: Optional[str], columns: Sequence[str]) -> List[Row]:
    """Sort rows by ``column``: numbers largest first, text alphabetically."""
    if not column:
        return rows
    if column not in columns:
        raise KeyError(column)
    numeric = [row for row in rows if isinstance(row[column], (int, float))]
    if len(numeric) == len(rows):
        return sorted(rows, key=lambda row: row[column], reverse=True)
    return sorted(rows, key=lambda row: str(row[column]).lower())


__all__ = [
    "Row",
    "MODULE_COLUMNS",
    "LOCATION_COLUMNS",
    "RESOURCE_COLUMNS",
    "FILE_COLUMNS",
    "SORT_COLUMNS",
    "module_rows",
    "location_rows",
    "resource_rows",
    "file_rows",
    "sort_rows",
]
