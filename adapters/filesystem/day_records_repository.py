from __future__ import annotations

from pathlib import Path
from typing import List

from adapters.filesystem.json_utils import dump_plan_bytes, load_json_object, replace_file_bytes
from domain.models import DayTimelineDocument, TimelinePlan
from domain.ports.repositories import DayRecordsRepository


class FileSystemDayRecordsRepository(DayRecordsRepository):
    def load_by_path(self, path: Path) -> DayTimelineDocument:
        return DayTimelineDocument.model_validate(load_json_object(path))

    def load_all_with_paths(self, directory: Path) -> List[tuple[Path, DayTimelineDocument]]:
        return [(path, self.load_by_path(path)) for path in sorted(directory.glob("*.json"))]

    def save_plan(self, plan: TimelinePlan, path: Path) -> None:
        replace_file_bytes(path, dump_plan_bytes(plan.to_dict()))
