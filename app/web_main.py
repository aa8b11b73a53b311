from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError

from app.config import AppSettings, load_settings
from app.timeline_wiring import apply_default_surface, build_layout_engine, build_records_repository
from domain.models import DayTimelineDocument, Surface
from domain.ports.layout import TimelineLayoutEngine
from domain.ports.repositories import DayRecordsRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineContext:
    settings: AppSettings
    engine: TimelineLayoutEngine
    records: DayRecordsRepository


def create_app(settings: AppSettings) -> FastAPI:
    app = FastAPI(title=settings.timeline.title)
    app.state.context = TimelineContext(
        settings=settings,
        engine=build_layout_engine(settings),
        records=build_records_repository(settings),
    )

    @app.get("/api/health")
    def api_health() -> ORJSONResponse:
        return ORJSONResponse({"status": "ok"})

    @app.post("/api/layout")
    def api_layout(
        document: DayTimelineDocument,
        context: TimelineContext = Depends(get_context),
    ) -> ORJSONResponse:
        plan = context.engine.build_plan(apply_default_surface(document, context.settings))
        logger.info(
            "Laid out %s entries of %s for %s",
            len(plan.entries),
            len(document.events),
            plan.day.isoformat(),
        )
        return ORJSONResponse(plan.to_dict())

    @app.get("/api/records/{record_id}/plan")
    def api_record_plan(
        record_id: str,
        surface: Surface | None = Query(default=None),
        context: TimelineContext = Depends(get_context),
    ) -> ORJSONResponse:
        path = resolve_record_path(context.settings.timeline.records_dir, record_id)
        if path is None or not path.exists():
            raise HTTPException(status_code=404, detail="Day records not found")
        try:
            document = context.records.load_by_path(path)
        except (ValidationError, ValueError) as exc:
            logger.warning("Invalid day records file %s: %s", path, exc)
            raise HTTPException(status_code=422, detail="Day records file is invalid") from exc
        document = apply_default_surface(document, context.settings)
        if surface is not None:
            document = document.model_copy(update={"surface": surface})
        return ORJSONResponse(context.engine.build_plan(document).to_dict())

    return app


def get_context(request: Request) -> TimelineContext:
    return cast(TimelineContext, request.app.state.context)


def resolve_record_path(records_dir: Path, record_id: str) -> Path | None:
    name = record_id.strip()
    if not name or "/" in name or "\\" in name or name.startswith("."):
        return None
    return records_dir / f"{name}.json"


app = create_app(load_settings())
