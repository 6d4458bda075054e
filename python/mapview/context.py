"""Viewer context shared by the CLI and the interactive shell."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Optional

from .loader import LoadResponse, iter_load
from .model import LinkerMap
from .stats import GroupingParams, StatsResult, aggregate

LOGGER = logging.getLogger("mapview.context")


class NoReportLoaded(RuntimeError):
    """A view was requested before any report was loaded."""


@dataclass
class ViewerContext:
    """Holds the loaded model and the current grouping parameters."""

    params: GroupingParams = field(default_factory=GroupingParams)
    json_output: bool = False
    sort_column: Optional[str] = None
    path: Optional[Path] = None
    _linker_map: Optional[LinkerMap] = field(default=None, init=False, repr=False)

    @property
    def linker_map(self) -> Optional[LinkerMap]:
        return self._linker_map

    def require_map(self) -> LinkerMap:
        if self._linker_map is None:
            raise NoReportLoaded("no report loaded (use 'load PATH')")
        return self._linker_map

    def load(
        self,
        path: Optional[str | Path] = None,
        *,
        prompt: Optional[Callable[[], Optional[str]]] = None,
        on_progress: Optional[Callable[[LoadResponse], None]] = None,
    ) -> bool:
        """Parse a report and swap it in; the old model stays on failure."""
        final: Optional[LoadResponse] = None
        for response in iter_load(path, prompt=prompt, names=self.params.names):
            if on_progress is not None:
                on_progress(response)
            final = response
        if final is None or final.payload is None:
            return False
        self._linker_map = final.payload
        self.path = final.path
        LOGGER.debug("report %s now active", final.path)
        return True

    def update_params(self, **changes) -> GroupingParams:
        self.params = replace(self.params, **changes)
        return self.params

    def stats(self) -> StatsResult:
        return aggregate(self.require_map(), self.params)
