"""Weather grid: which locations to show and how each cell reads."""

from __future__ import annotations

import math
from collections.abc import Collection, Iterable
from dataclasses import dataclass

from tradingdash.types import WeatherLoc
from tradingdash.util import area_tag

__all__ = [
    "WEATHER_POLL_SECONDS",
    "WEATHER_RETRY_SECONDS",
    "WeatherCell",
    "visible_weather",
    "weather_cell",
]

WEATHER_POLL_SECONDS = 10.0
WEATHER_RETRY_SECONDS = 1.0


@dataclass(frozen=True)
class WeatherCell:
    """Display strings for one weather location."""

    tag: str
    cloud: str
    solar: str
    wind: str
    temp: str
    detail: tuple[str, str, str]


def _round(x: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def visible_weather(
    locs: Iterable[WeatherLoc], active_areas: Collection[str]
) -> list[WeatherLoc]:
    """Locations linked to an active area; the unlinked fallback is hidden."""
    return [
        loc
        for loc in locs
        if loc.area_code is not None and loc.area_code in active_areas
    ]


def weather_cell(loc: WeatherLoc) -> WeatherCell:
    """Format one location's headline and detail lines."""
    tag = area_tag(loc.area_code) if loc.area_code is not None else "—"
    return WeatherCell(
        tag=tag,
        cloud=f"☁ {loc.cloud_cover:.2f}",
        solar=f"{_round(loc.solar_now)} W/m²",
        wind=f"{loc.wind_now:.1f} m/s",
        temp=f"{loc.temp_c_now:.1f} °C",
        detail=(
            f"lat {loc.lat:.1f} · lon {loc.lon:.1f}",
            f"wind direction {_round(loc.wind_direction)}°",
            f"mean wind {loc.mean_wind:.1f} m/s",
        ),
    )