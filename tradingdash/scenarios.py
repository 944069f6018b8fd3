"""Scenarios panel helpers: stage timeline geometry and row labels."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from tradingdash.types import Scenario, Stage

__all__ = [
    "HOURS_PER_DAY",
    "TimelineBlock",
    "active_scenario",
    "fmt_stage_hour",
    "now_percent",
    "stage_row_state",
    "stage_weather",
    "timeline_block",
]

HOURS_PER_DAY = 24.0
KELVIN_OFFSET = 273.15


@dataclass(frozen=True)
class TimelineBlock:
    """Horizontal placement (percent of the day) and hover title of a stage."""

    left: float
    width: float
    title: str


def _round(x: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def fmt_stage_hour(h: float) -> str:
    """Format a fractional sim-local hour as ``HH:MM``."""
    hh = math.floor(h)
    mm = _round((h - hh) * 60.0)
    return f"{hh:02d}:{mm:02d}"


def stage_weather(stage: Stage) -> str:
    """Summary of a stage's weather overrides; empty when it has none."""
    parts = []
    if stage.cloud_cover is not None:
        parts.append(f"☁ {stage.cloud_cover:.2f}")
    if stage.mean_wind is not None:
        parts.append(f"{stage.mean_wind:.1f} m/s")
    if stage.temperature_base is not None:
        parts.append(f"{_round(stage.temperature_base - KELVIN_OFFSET)} °C")
    return " · ".join(parts)


def active_scenario(scenarios: Iterable[Scenario]) -> Scenario | None:
    """The first scenario with a current stage, if any."""
    return next((s for s in scenarios if s.current_stage is not None), None)


def stage_row_state(index: int, current: int) -> tuple[str, str]:
    """Row status (``current``, ``done`` or empty) and its marker glyph."""
    if index == current:
        return "current", "▶"
    if index < current:
        return "done", "✓"
    return "", ""


def timeline_block(stage: Stage) -> TimelineBlock:
    """Where a stage sits on the 24-hour timeline."""
    left = stage.hour_from / HOURS_PER_DAY * 100.0
    width = (stage.hour_to - stage.hour_from) / HOURS_PER_DAY * 100.0
    title = f"{stage.name} — bias {stage.bias_from:.2f} → {stage.bias_to:.2f}"
    return TimelineBlock(left=left, width=width, title=title)


def now_percent(hour: float) -> float:
    """Position of the "now" marker as a percentage of the day."""
    return hour / HOURS_PER_DAY * 100.0