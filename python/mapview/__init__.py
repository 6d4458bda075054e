"""
mapview: linker map report viewer.

Parses the Processed Files / Link Result / Locate Result / Used Resources
parts of a linker/locator map report into a :class:`LinkerMap` and derives
per-module, per-location and per-memory-region size statistics from it.
Use the ``mapview`` console script for the command line front end.
"""

from __future__ import annotations

from .classify import SectionCategory, SectionNames, classify
from .loader import LoadResponse, iter_load, load_report
from .model import File, LinkerMap, LinkRecord, LocateRecord, MemoryRegion, Section
from .parser import MalformedReportError, ReportParser, parse_report, parse_text
from .stats import GroupingParams, StatsResult, aggregate, round_to_alignment

__all__ = [
    "File",
    "GroupingParams",
    "LinkerMap",
    "LinkRecord",
    "LoadResponse",
    "LocateRecord",
    "MalformedReportError",
    "MemoryRegion",
    "ReportParser",
    "Section",
    "SectionCategory",
    "SectionNames",
    "StatsResult",
    "aggregate",
    "classify",
    "iter_load",
    "load_report",
    "parse_report",
    "parse_text",
    "round_to_alignment",
]
__version__ = "0.1.0"
