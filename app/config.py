from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.layout.day_timeline import LayoutConfig
from domain.models import MIN_HEIGHT_PERCENT, Surface

DEFAULT_CONFIG_PATH = Path("config/timeline/app.yaml")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class TimelineSettings(BaseModel):
    title: str = "Day Timeline"
    min_height_percent: float = Field(default=MIN_HEIGHT_PERCENT, ge=0, le=100)
    client_lane_gutter_percent: float = Field(default=0.0, ge=0, le=100)
    coach_lane_gutter_percent: float = Field(default=0.5, ge=0, le=100)
    default_surface: Surface = "client"
    records_dir: Path = Path("data/records")
    plans_dir: Path = Path("data/plans")
    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        return str(value).upper() if value else "INFO"

    @field_validator("default_surface", mode="before")
    @classmethod
    def normalize_surface(cls, value: object) -> str:
        return str(value).strip().lower() if value else "client"

    def to_layout_config(self) -> LayoutConfig:
        return LayoutConfig(
            min_height_percent=self.min_height_percent,
            client_lane_gutter_percent=self.client_lane_gutter_percent,
            coach_lane_gutter_percent=self.coach_lane_gutter_percent,
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DTL_", env_nested_delimiter="__")

    timeline: TimelineSettings = TimelineSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("DTL_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
