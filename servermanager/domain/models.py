from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Literal, Mapping

from pydantic import BaseModel, Field


WeatherKey = str
WeatherCatalog = dict[WeatherKey, str]
DeleteResult = Literal["deleted", "not_found", "failed"]


DEFAULT_WEATHER: Mapping[WeatherKey, str] = MappingProxyType(
    {
        "1_heavy_fog": "Heavy Fog",
        "2_light_fog": "Light Fog",
        "3_clear": "Clear",
        "4_mid_clear": "Mid Clear",
        "5_light_clouds": "Light Clouds",
        "6_mid_clouds": "Mid Clouds",
        "7_heavy_clouds": "Heavy Clouds",
    }
)


def default_weather() -> WeatherCatalog:
    return dict(DEFAULT_WEATHER)


class WeatherDeleteOutcome(BaseModel):
    key: WeatherKey
    success: bool
    message: str
    weather: WeatherCatalog = Field(default_factory=dict)


class WeatherDeleteEvent(BaseModel):
    key: WeatherKey
    result: DeleteResult
    path: str | None = None
    error: str | None = None
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
