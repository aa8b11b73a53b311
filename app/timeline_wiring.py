from __future__ import annotations

import logging

from rich.logging import RichHandler

from adapters.filesystem.day_records_repository import FileSystemDayRecordsRepository
from adapters.layout.day_timeline import DayTimelineLayoutEngine
from app.config import AppSettings
from domain.models import DayTimelineDocument
from domain.ports.layout import TimelineLayoutEngine
from domain.ports.repositories import DayRecordsRepository


def build_layout_engine(settings: AppSettings) -> TimelineLayoutEngine:
    return DayTimelineLayoutEngine(settings.timeline.to_layout_config())


def build_records_repository(settings: AppSettings) -> DayRecordsRepository:
    return FileSystemDayRecordsRepository()


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.timeline.log_level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def apply_default_surface(
    document: DayTimelineDocument, settings: AppSettings
) -> DayTimelineDocument:
    if "surface" in document.model_fields_set:
        return document
    return document.model_copy(update={"surface": settings.timeline.default_surface})
