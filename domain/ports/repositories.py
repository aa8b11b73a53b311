from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import DayTimelineDocument, TimelinePlan


class DayRecordsRepository(Protocol):
    def load_by_path(self, path: Path) -> DayTimelineDocument: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, DayTimelineDocument]]: ...

    def save_plan(self, plan: TimelinePlan, path: Path) -> None: ...
