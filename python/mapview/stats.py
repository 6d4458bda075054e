"""Size roll-ups derived from a parsed :class:`~mapview.model.LinkerMap`.

:func:`aggregate` is a pure function of the model and a :class:`GroupingParams`
value.  It never mutates the model, so a view can re-run it every time the
grouping changes without parsing the report again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from .classify import DEFAULT_SECTION_NAMES, SectionCategory, SectionNames, classify
from .model import LinkerMap, LinkRecord, LocateRecord, MemoryRegion


@dataclass(frozen=True)
class GroupingParams:
    """User-selectable aggregation options."""

    show_object_files: bool = False
    group_by_group: bool = True
    group_by_module: bool = True
    names: SectionNames = DEFAULT_SECTION_NAMES

    @property
    def bss_section_names(self) -> Tuple[str, ...]:
        return self.names.bss

    @property
    def data_section_names(self) -> Tuple[str, ...]:
        return self.names.data

    @property
    def text_section_names(self) -> Tuple[str, ...]:
        return self.names.text


def round_to_alignment(size: int, alignment: int) -> int:
    """Round ``size`` up to whole ``alignment`` slots; never less than one slot."""
    if alignment <= 0:
        raise ValueError(f"alignment must be positive (got {alignment})")
    if size < alignment:
        return alignment
    remainder = size % alignment
    if remainder:
        return size + (alignment - remainder)
    return size


def actual_size(location: LocateRecord) -> int:
    return round_to_alignment(location.size, location.alignment)


def _empty_totals() -> Dict[SectionCategory, int]:
    return {category: 0 for category in SectionCategory}


def section_totals(record: LinkRecord, names: SectionNames = DEFAULT_SECTION_NAMES) -> Dict[SectionCategory, int]:
    """Sum input-section sizes of one link record per category."""
    totals = _empty_totals()
    for section in record.sections:
        totals[classify(section.input.name, names)] += section.input.size
    return totals


@dataclass
class ModuleTotals:
    name: str
    sizes: Dict[SectionCategory, int] = field(default_factory=_empty_totals)

    @property
    def bss(self) -> int:
        return self.sizes[SectionCategory.BSS]

    @property
    def data(self) -> int:
        return self.sizes[SectionCategory.DATA]

    @property
    def text(self) -> int:
        return self.sizes[SectionCategory.TEXT]

    @property
    def other(self) -> int:
        return self.sizes[SectionCategory.OTHER]

    @property
    def total(self) -> int:
        return sum(self.sizes.values())

    def add(self, sizes: Mapping[SectionCategory, int]) -> None:
        for category, value in sizes.items():
            self.sizes[category] += value


class LocationKey(NamedTuple):
    """Roll-up key; ``group``/``module`` are ``None`` when not grouped on."""

    chip: str
    group: Optional[str] = None
    module: Optional[str] = None


@dataclass
class LocationTotals:
    chip: str
    groups: Dict[str, None] = field(default_factory=dict)
    modules: Dict[str, None] = field(default_factory=dict)
    size: int = 0
    actual_size: int = 0

    @property
    def group_names(self) -> List[str]:
        return list(self.groups)

    @property
    def module_names(self) -> List[str]:
        return list(self.modules)


@dataclass(frozen=True)
class ResourceStats:
    """Free-space accounting for one memory region."""

    region: MemoryRegion
    chip_data: int
    chip_free: int

    @property
    def name(self) -> str:
        return self.region.name

    @property
    def usage(self) -> float:
        if self.region.total <= 0:
            return 0.0
        return self.chip_data / self.region.total


@dataclass
class StatsResult:
    module_totals: Dict[str, ModuleTotals]
    location_totals: Dict[LocationKey, LocationTotals]
    resource_totals: List[ResourceStats]


def file_archives(linker_map: LinkerMap) -> Dict[str, str]:
    return {entry.name: entry.archive_name for entry in linker_map.processed_files if entry.archive_name}


def section_locations(locations: Iterable[LocateRecord]) -> Dict[str, LocateRecord]:
    # Later rows for the same output section replace earlier ones.
    return {location.section: location for location in locations}


def module_name(file_name: str, archive: Optional[str], show_object_files: bool) -> str:
    if not archive:
        return file_name
    if show_object_files:
        return f"{archive}({file_name})"
    return archive


def resource_usage(linker_map: LinkerMap) -> List[ResourceStats]:
    """Account the alignment-rounded size of every placement against its region."""
    chip_data: Dict[str, int] = {}
    for location in linker_map.locate_result:
        chip_data[location.chip] = chip_data.get(location.chip, 0) + actual_size(location)
    stats: List[ResourceStats] = []
    for region in linker_map.used_resources:
        used = chip_data.get(region.name, 0)
        stats.append(ResourceStats(region, used, region.total - region.reserved - used))
    return stats


def aggregate(linker_map: LinkerMap, params: GroupingParams = GroupingParams()) -> StatsResult:
    archives = file_archives(linker_map)
    locations = section_locations(linker_map.locate_result)
    modules: Dict[str, ModuleTotals] = {}
    rollup: Dict[LocationKey, LocationTotals] = {}

    for record in linker_map.link_result:
        name = module_name(record.file_name, archives.get(record.file_name), params.show_object_files)
        totals = modules.get(name)
        if totals is None:
            totals = modules[name] = ModuleTotals(name)
        totals.add(section_totals(record, params.names))

        for section in record.sections:
            location = locations.get(section.output.name)
            if location is None:
                continue
            key = LocationKey(
                location.chip,
                location.group if params.group_by_group else None,
                name if params.group_by_module else None,
            )
            entry = rollup.get(key)
            if entry is None:
                entry = rollup[key] = LocationTotals(location.chip)
            entry.size += location.size
            entry.actual_size += actual_size(location)
            entry.groups[location.group] = None
            entry.modules[name] = None

    return StatsResult(modules, rollup, resource_usage(linker_map))


__all__ = [
    "GroupingParams",
    "round_to_alignment",
    "actual_size",
    "section_totals",
    "module_name",
    "section_locations",
    "file_archives",
    "resource_usage",
    "aggregate",
    "ModuleTotals",
    "LocationKey",
    "LocationTotals",
    "ResourceStats",
    "StatsResult",
]
