from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from app.config import AppSettings, TimelineSettings


def _clear_dtl_env() -> None:
    for key in list(os.environ):
        if key.startswith("DTL_"):
            os.environ.pop(key, None)


_clear_dtl_env()


@pytest.fixture(autouse=True)
def clear_dtl_env() -> Generator[None, None, None]:
    _clear_dtl_env()
    yield
    _clear_dtl_env()


@pytest.fixture
def timeline_settings(tmp_path: Path) -> TimelineSettings:
    return TimelineSettings(
        title="Test Timeline",
        client_lane_gutter_percent=0.0,
        coach_lane_gutter_percent=0.5,
        default_surface="client",
        records_dir=tmp_path / "records",
        plans_dir=tmp_path / "plans",
        log_level="WARNING",
    )


@pytest.fixture
def timeline_settings_factory(
    timeline_settings: TimelineSettings,
) -> Callable[..., TimelineSettings]:
    def _factory(**overrides: object) -> TimelineSettings:
        return timeline_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(timeline_settings: TimelineSettings) -> AppSettings:
    return AppSettings(timeline=timeline_settings)


@pytest.fixture
def app_settings_factory(
    timeline_settings_factory: Callable[..., TimelineSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(timeline=timeline_settings_factory(**overrides))

    return _factory
