"""Section-type classification driven by configurable name prefixes."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterable, Tuple

_LIST_SPLIT = re.compile(r"\s*,\s*")


class SectionCategory(str, enum.Enum):
    BSS = "bss"
    DATA = "data"
    TEXT = "text"
    OTHER = "other"


def parse_name_list(value: str | Iterable[str]) -> Tuple[str, ...]:
    """Normalise a comma separated list (or iterable) of section names.

    Empty entries are dropped and the first occurrence of a repeated name wins,
    so ``" .bss , .sbss,.bss"`` becomes ``(".bss", ".sbss")``.
    """
    if isinstance(value, str):
        parts = _LIST_SPLIT.split(value.strip())
    else:
        parts = [str(item).strip() for item in value]
    return tuple(dict.fromkeys(part for part in parts if part))


@dataclass(frozen=True)
class SectionNames:
    """Ordered prefix sets for the bss, data and text categories."""

    bss: Tuple[str, ...] = (".bss",)
    data: Tuple[str, ...] = (".data",)
    text: Tuple[str, ...] = (".text",)

    @classmethod
    def from_lists(
        cls,
        bss: str | Iterable[str] = ".bss",
        data: str | Iterable[str] = ".data",
        text: str | Iterable[str] = ".text",
    ) -> "SectionNames":
        return cls(parse_name_list(bss), parse_name_list(data), parse_name_list(text))


DEFAULT_SECTION_NAMES = SectionNames()


def section_family(name: str) -> str:
    """Return the family prefix of a section name.

    ``.bss.fast`` -> ``.bss``; ``.text (cont)`` -> ``.text``; ``.data`` -> ``.data``.
    """
    parts = name.split(None, 1)
    head = parts[0] if parts else ""
    cut = head.find(".", 1)
    return head if cut < 0 else head[:cut]


def classify(name: str, names: SectionNames = DEFAULT_SECTION_NAMES) -> SectionCategory:
    family = section_family(name)
    if family in names.bss:
        return SectionCategory.BSS
    if family in names.data:
        return SectionCategory.DATA
    if family in names.text:
        return SectionCategory.TEXT
    return SectionCategory.OTHER


__all__ = [
    "SectionCategory",
    "SectionNames",
    "DEFAULT_SECTION_NAMES",
    "parse_name_list",
    "section_family",
    "classify",
]
