"""Structured model of a linker/locator map report.

The model mirrors the four report parts the parser understands: processed
files, link result, locate result and used resources.  Every record is a
frozen dataclass so a :class:`LinkerMap` can be shared between views once the
parser hands it over.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .classify import DEFAULT_SECTION_NAMES, SectionCategory, SectionNames, classify


@dataclass(frozen=True)
class File:
    """One input file consumed by the linker."""

    name: str
    archive_name: Optional[str] = None
    extract_symbol: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name}
        if self.archive_name:
            payload["archiveName"] = self.archive_name
        if self.extract_symbol:
            payload["extractSymbol"] = self.extract_symbol
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "File":
        return cls(
            name=str(data["name"]),
            archive_name=data.get("archiveName") or None,
            extract_symbol=data.get("extractSymbol") or None,
        )


@dataclass(frozen=True)
class InputSection:
    name: str
    size: int


@dataclass(frozen=True)
class OutputSection:
    offset: int
    name: str
    size: int


@dataclass(frozen=True)
class Section:
    """An input section and the output section it was merged into."""

    category: SectionCategory
    input: InputSection
    output: OutputSection

    def classify(self, names: SectionNames = DEFAULT_SECTION_NAMES) -> SectionCategory:
        return classify(self.input.name, names)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.category.value,
            "in": {"section": self.input.name, "size": self.input.size},
            "out": {
                "offset": self.output.offset,
                "section": self.output.name,
                "size": self.output.size,
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], names: SectionNames = DEFAULT_SECTION_NAMES) -> "Section":
        raw_in = data["in"]
        raw_out = data["out"]
        in_name = str(raw_in["section"])
        return cls(
            category=classify(in_name, names),
            input=InputSection(in_name, int(raw_in["size"])),
            output=OutputSection(int(raw_out["offset"]), str(raw_out["section"]), int(raw_out["size"])),
        )


@dataclass(frozen=True)
class LinkRecord:
    """All sections contributed by one input file, in report order."""

    file_name: str
    sections: Tuple[Section, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"fileName": self.file_name, "sections": [section.to_dict() for section in self.sections]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], names: SectionNames = DEFAULT_SECTION_NAMES) -> "LinkRecord":
        return cls(
            file_name=str(data["fileName"]),
            sections=tuple(Section.from_dict(entry, names) for entry in data.get("sections", [])),
        )


@dataclass(frozen=True)
class LocateRecord:
    """Final placement of one output section inside a memory region."""

    chip: str
    group: str
    section: str
    size: int
    space_addr: int
    chip_addr: int
    alignment: int

    _KEYS = (
        ("chip", "chip"),
        ("group", "group"),
        ("section", "section"),
        ("size", "size"),
        ("space_addr", "spaceAddr"),
        ("chip_addr", "chipAddr"),
        ("alignment", "alignment"),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {wire: getattr(self, attr) for attr, wire in self._KEYS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LocateRecord":
        return cls(
            chip=str(data["chip"]),
            group=str(data.get("group", "")),
            section=str(data["section"]),
            size=int(data["size"]),
            space_addr=int(data.get("spaceAddr", 0)),
            chip_addr=int(data.get("chipAddr", 0)),
            alignment=int(data["alignment"]),
        )


@dataclass(frozen=True)
class MemoryRegion:
    """Toolchain-reported usage of one memory region."""

    name: str
    code: int
    data: int
    reserved: int
    free: int
    total: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "code": self.code,
            "data": self.data,
            "reserved": self.reserved,
            "free": self.free,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MemoryRegion":
        return cls(
            name=str(data["name"]),
            code=int(data["code"]),
            data=int(data["data"]),
            reserved=int(data["reserved"]),
            free=int(data["free"]),
            total=int(data["total"]),
        )


@dataclass(frozen=True)
class LinkerMap:
    processed_files: Tuple[File, ...] = ()
    link_result: Tuple[LinkRecord, ...] = ()
    locate_result: Tuple[LocateRecord, ...] = ()
    used_resources: Tuple[MemoryRegion, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-safe transport form of the model."""
        return {
            "processedFiles": [entry.to_dict() for entry in self.processed_files],
            "linkResult": [entry.to_dict() for entry in self.link_result],
            "locateResult": [entry.to_dict() for entry in self.locate_result],
            "usedResources": [entry.to_dict() for entry in self.used_resources],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], names: SectionNames = DEFAULT_SECTION_NAMES) -> "LinkerMap":
        return cls(
            processed_files=tuple(File.from_dict(entry) for entry in data.get("processedFiles", [])),
            link_result=tuple(LinkRecord.from_dict(entry, names) for entry in data.get("linkResult", [])),
            locate_result=tuple(LocateRecord.from_dict(entry) for entry in data.get("locateResult", [])),
            used_resources=tuple(MemoryRegion.from_dict(entry) for entry in data.get("usedResources", [])),
        )


__all__ = [
    "File",
    "InputSection",
    "OutputSection",
    "Section",
    "SectionCategory",
    "LinkRecord",
    "LocateRecord",
    "MemoryRegion",
    "LinkerMap",
]
