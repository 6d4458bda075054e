"""Line-oriented parser for linker/locator map reports.

The report is a sequence of parts introduced by ``*``-bracketed titles
(``******** Processed Files ********`` and friends).  Each part holds
``|``-framed tables with a fixed column count; everything else in the report
(banners, blank lines, table borders, parts we do not model) is skipped.

Long cell values wrap onto following rows whose first cell is empty.  Those
continuation rows extend the record produced by the previous content row
until a ``|-----|`` separator row or a new part header resets the context.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .classify import DEFAULT_SECTION_NAMES, SectionNames, classify
from .model import (
    File,
    InputSection,
    LinkerMap,
    LinkRecord,
    LocateRecord,
    MemoryRegion,
    OutputSection,
    Section,
)

LOG = logging.getLogger("mapview.parser")


class ReportPart(enum.Enum):
    UNRECOGNIZED = "unrecognized"
    PROCESSED_FILES = "Processed Files"
    LINK_RESULT = "Link Result"
    LOCATE_RESULT = "Locate Result"
    USED_RESOURCES = "Used Resources"


_PART_HEADER = re.compile(r"^\*+\s*(Processed Files|Link Result|Locate Result|Used Resources)\s*\*+$")
_OTHER_HEADER = re.compile(r"^\*+\s+.*\s+\*+$")
_SEPARATOR_ROW = re.compile(r"^\|[-=+|]*[-=][-=+|]*\|$")
_HEX_VALUE = re.compile(r"^(?:0[xX])?[0-9a-fA-F]+$")

_COLUMN_COUNTS = {
    ReportPart.PROCESSED_FILES: 3,
    ReportPart.LINK_RESULT: 6,
    ReportPart.LOCATE_RESULT: 7,
    ReportPart.USED_RESOURCES: 6,
}


class MalformedReportError(ValueError):
    """A table row had the expected shape but a numeric cell did not parse."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"line {line_number}: {reason}: {line!r}")
        self.line_number = line_number
        self.line = line
        self.reason = reason


@dataclass(frozen=True)
class _ScanState:
    """Active report part plus the arena index of the continuation target."""

    part: ReportPart = ReportPart.UNRECOGNIZED
    last: Optional[int] = None


def _match_header(text: str) -> Optional[ReportPart]:
    match = _PART_HEADER.match(text)
    if match:
        return ReportPart(match.group(1))
    if _OTHER_HEADER.match(text):
        return ReportPart.UNRECOGNIZED
    return None


def _split_row(text: str, count: int) -> Optional[List[str]]:
    if len(text) < 2 or not (text.startswith("|") and text.endswith("|")):
        return None
    cells = text[1:-1].split("|")
    if len(cells) != count:
        return None
    return [cell.strip() for cell in cells]


def _join_fragment(base: str, fragment: str) -> str:
    if not fragment:
        return base
    if fragment.startswith("("):
        return f"{base} {fragment}"
    return base + fragment


def _append_text(base: Optional[str], fragment: str) -> Optional[str]:
    if not fragment:
        return base
    return (base or "") + fragment


class ReportParser:
    """Incremental state machine turning report lines into a :class:`LinkerMap`.

    Feed lines in source order with :meth:`feed` and collect the model with
    :meth:`finish`.  Nothing is observable before ``finish`` returns.
    """

    def __init__(self, names: SectionNames = DEFAULT_SECTION_NAMES) -> None:
        self.names = names
        self._state = _ScanState()
        self._line_number = 0
        self._line = ""
        self._finished = False
        self._files: List[File] = []
        self._links: List[Tuple[str, List[Section]]] = []
        self._link_index: Dict[str, int] = {}
        self._locations: List[LocateRecord] = []
        self._regions: List[MemoryRegion] = []
        self._handlers: Dict[ReportPart, Callable[[_ScanState, Sequence[str]], _ScanState]] = {
            ReportPart.PROCESSED_FILES: self._on_processed_file,
            ReportPart.LINK_RESULT: self._on_link_row,
            ReportPart.LOCATE_RESULT: self._on_locate_row,
            ReportPart.USED_RESOURCES: self._on_resource_row,
        }

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def part(self) -> ReportPart:
        return self._state.part

    def feed(self, line: str) -> None:
        if self._finished:
            raise RuntimeError("parser already finished")
        self._line_number += 1
        self._line = line.rstrip("\r\n")
        text = self._line.strip()
        if text.startswith("*"):
            part = _match_header(text)
            if part is not None:
                if part is not self._state.part:
                    LOG.debug("line %d: entering part %s", self._line_number, part.value)
                self._state = _ScanState(part)
                return
        part = self._state.part
        if part is ReportPart.UNRECOGNIZED:
            return
        if _SEPARATOR_ROW.match(text):
            self._state = replace(self._state, last=None)
            return
        cells = _split_row(text, _COLUMN_COUNTS[part])
        if cells is None:
            return
        self._state = self._handlers[part](self._state, cells)

    def finish(self) -> LinkerMap:
        if self._finished:
            raise RuntimeError("parser already finished")
        self._finished = True
        result = LinkerMap(
            processed_files=tuple(self._files),
            link_result=tuple(LinkRecord(name, tuple(sections)) for name, sections in self._links),
            locate_result=tuple(self._locations),
            used_resources=tuple(self._regions),
        )
        LOG.info(
            "parsed %d lines: %d files, %d link records, %d locations, %d memory regions",
            self._line_number,
            len(result.processed_files),
            len(result.link_result),
            len(result.locate_result),
            len(result.used_resources),
        )
        return result

    # ------------------------------------------------------------------ helpers

    def _hex(self, value: str, column: str) -> int:
        if not _HEX_VALUE.match(value):
            raise MalformedReportError(
                self._line_number,
                self._line,
                f"{column} {value!r} is not a hexadecimal number",
            )
        return int(value, 16)

    # ----------------------------------------------------------- row handlers

    def _on_processed_file(self, state: _ScanState, cells: Sequence[str]) -> _ScanState:
        name, archive, symbol = cells
        if name == "File":
            return state
        if not name:
            if state.last is None:
                return state
            pending = self._files[state.last]
            self._files[state.last] = replace(
                pending,
                archive_name=_append_text(pending.archive_name, archive),
                extract_symbol=_append_text(pending.extract_symbol, symbol),
            )
            return state
        self._files.append(File(name, archive or None, symbol or None))
        return replace(state, last=len(self._files) - 1)

    def _on_link_row(self, state: _ScanState, cells: Sequence[str]) -> _ScanState:
        file_name, in_name, in_size, out_offset, out_name, out_size = cells
        if file_name == "[in] File":
            return state
        if not file_name:
            if state.last is None:
                return state
            sections = self._links[state.last][1]
            last = sections[-1]
            joined_in = _join_fragment(last.input.name, in_name)
            sections[-1] = replace(
                last,
                category=classify(joined_in, self.names),
                input=replace(last.input, name=joined_in),
                output=replace(last.output, name=_join_fragment(last.output.name, out_name)),
            )
            return state
        section = Section(
            category=classify(in_name, self.names),
            input=InputSection(in_name, self._hex(in_size, "[in] Size")),
            output=OutputSection(
                self._hex(out_offset, "[out] Offset"),
                out_name,
                self._hex(out_size, "[out] Size"),
            ),
        )
        index = self._link_index.get(file_name)
        if index is None:
            index = len(self._links)
            self._link_index[file_name] = index
            self._links.append((file_name, []))
        self._links[index][1].append(section)
        return replace(state, last=index)

    def _on_locate_row(self, state: _ScanState, cells: Sequence[str]) -> _ScanState:
        chip, group, section, size, space_addr, chip_addr, alignment = cells
        if chip == "Chip":
            return state
        if not chip:
            if state.last is None:
                return state
            pending = self._locations[state.last]
            self._locations[state.last] = replace(pending, section=_join_fragment(pending.section, section))
            return state
        record = LocateRecord(
            chip=chip,
            group=group,
            section=section,
            size=self._hex(size, "Size"),
            space_addr=self._hex(space_addr, "Space addr"),
            chip_addr=self._hex(chip_addr, "Chip addr"),
            alignment=self._hex(alignment, "Alignment"),
        )
        if record.alignment <= 0:
            raise MalformedReportError(self._line_number, self._line, "Alignment must be positive")
        self._locations.append(record)
        return replace(state, last=len(self._locations) - 1)

    def _on_resource_row(self, state: _ScanState, cells: Sequence[str]) -> _ScanState:
        name, code, data, reserved, free, total = cells
        if not name or name in ("Memory", "Total"):
            return state
        self._regions.append(
            MemoryRegion(
                name=name,
                code=self._hex(code, "Code"),
                data=self._hex(data, "Data"),
                reserved=self._hex(reserved, "Reserved"),
                free=self._hex(free, "Free"),
                total=self._hex(total, "Total"),
            )
        )
        return state


def parse_report(lines: Iterable[str], names: SectionNames = DEFAULT_SECTION_NAMES) -> LinkerMap:
    """Parse an iterable of report lines (an open text file works)."""
    parser = ReportParser(names)
    for line in lines:
        parser.feed(line)
    return parser.finish()


def parse_text(text: str, names: SectionNames = DEFAULT_SECTION_NAMES) -> LinkerMap:
    return parse_report(text.splitlines(), names)


__all__ = [
    "ReportPart",
    "ReportParser",
    "MalformedReportError",
    "parse_report",
    "parse_text",
]
