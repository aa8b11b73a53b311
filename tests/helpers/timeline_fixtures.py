from __future__ import annotations

import json
from datetime import date, datetime
from functools import cache, lru_cache
from pathlib import Path
from typing import Any

from domain.models import DayTimelineDocument

DAY = date(2024, 5, 1)
DAY_START = datetime(2024, 5, 1)


@lru_cache(maxsize=1)
def repo_root() -> Path:
    for parent in Path(__file__).resolve().parents:
        if (parent / "pyproject.toml").exists():
            return parent
    raise RuntimeError("Repository root not found")


@cache
def _load_day_payload_cached(name: str) -> str:
    fixture_path = repo_root() / "examples" / "timeline" / name
    return fixture_path.read_text(encoding="utf-8")


def load_day_payload(name: str) -> dict[str, Any]:
    return json.loads(_load_day_payload_cached(name))


def load_day_fixture(name: str) -> DayTimelineDocument:
    return DayTimelineDocument.model_validate(load_day_payload(name))


def at(clock: str, day: date = DAY) -> str:
    return f"{day.isoformat()}T{clock}:00"


def activity(event_id: str, clock: str, minutes: float | None = None) -> dict[str, Any]:
    event: dict[str, Any] = {"id": event_id, "pillar": "activity", "entryDate": at(clock)}
    if minutes is not None:
        event["duration"] = minutes
    return event


def appointment(event_id: str, start: str | None, end: str | None) -> dict[str, Any]:
    event: dict[str, Any] = {"id": event_id, "pillar": "appointment"}
    if start is not None:
        event["start"] = at(start)
    if end is not None:
        event["end"] = at(end)
    return event
