"""Load a map report from disk and report progress while parsing."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional

from .classify import DEFAULT_SECTION_NAMES, SectionNames
from .model import LinkerMap
from .parser import ReportParser

LOGGER = logging.getLogger("mapview.loader")


@dataclass(frozen=True)
class LoadResponse:
    """Progress snapshot; ``payload`` is only set once ``progress`` hits 100."""

    path: Path
    progress: int = 0
    payload: Optional[LinkerMap] = None

    @property
    def done(self) -> bool:
        return self.payload is not None

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "progress": self.progress,
            "payload": self.payload.to_dict() if self.payload is not None else None,
        }


def iter_load(
    path: Optional[str | os.PathLike] = None,
    *,
    prompt: Optional[Callable[[], Optional[str | os.PathLike]]] = None,
    names: SectionNames = DEFAULT_SECTION_NAMES,
) -> Iterator[LoadResponse]:
    """Parse ``path`` and yield progress snapshots ending with the model.

    When ``path`` is omitted ``prompt`` is asked for one; an empty answer ends
    the load without yielding anything.
    """
    if path is None:
        if prompt is None:
            raise ValueError("no report path given and no prompt available")
        path = prompt()
        if not path:
            LOGGER.info("load cancelled")
            return
    report = Path(path).expanduser()
    total = report.stat().st_size
    yield LoadResponse(report)

    parser = ReportParser(names)
    consumed = 0
    progress = 0
    with report.open("r", encoding="utf-8", errors="replace", newline="") as handle:
        for line in handle:
            parser.feed(line)
            consumed += len(line.encode("utf-8", errors="replace"))
            if total:
                current = min(99, consumed * 100 // total)
                if current > progress:
                    progress = current
                    yield LoadResponse(report, progress)
    linker_map = parser.finish()
    LOGGER.info("loaded %s", report)
    yield LoadResponse(report, 100, linker_map)


def load_report(path: str | os.PathLike, names: SectionNames = DEFAULT_SECTION_NAMES) -> LinkerMap:
    """Parse ``path`` and return only the finished model."""
    final: Optional[LoadResponse] = None
    for response in iter_load(path, names=names):
        final = response
    if final is None or final.payload is None:
        raise RuntimeError(f"loading {path} produced no report")
    return final.payload


__all__ = ["LoadResponse", "iter_load", "load_report"]
