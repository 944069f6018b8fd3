"""Header pulse bar state: sparkbars, tz and density toggles, scenario pill."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from tradingdash.filters import Storage
from tradingdash.types import Scenario
from tradingdash.util import home_areas

__all__ = [
    "BAR_MAX_PX",
    "BUCKETS",
    "BUCKET_MS",
    "COMFORTABLE_MIN_WIDTH",
    "DENSITY_KEY",
    "TZ_KEY",
    "SparkState",
    "TzMode",
    "display_tz",
    "initial_density",
    "load_tz_mode",
    "save_density",
    "save_tz_mode",
    "scenario_indicator",
]

BUCKETS = 12
BUCKET_MS = 5_000
BAR_MAX_PX = 14.0
COMFORTABLE_MIN_WIDTH = 1800.0
DENSITY_KEY = "tradingsim-density"
TZ_KEY = "tradingsim-tz"

_U32_MAX = 2**32 - 1


class TzMode(enum.Enum):
    """Display preference: the sim's home zone or UTC."""

    LOCAL = "local"
    UTC = "utc"


def _empty_buckets() -> dict[str, list[int]]:
    return {area.code: [0] * BUCKETS for area in home_areas()}


@dataclass
class SparkState:
    """Rolling per-home-area print counts; the newest bucket is last."""

    buckets: dict[str, list[int]] = field(default_factory=_empty_buckets)

    def record(self, area: str) -> None:
        """Count one print for ``area``; areas outside the home set are ignored."""
        counts = self.buckets.get(area)
        if counts is not None:
            counts[-1] = min(counts[-1] + 1, _U32_MAX)

    def rotate(self) -> None:
        """Drop the oldest bucket of every area and open a fresh empty one."""
        for code, counts in self.buckets.items():
            self.buckets[code] = counts[1:] + [0]

    def bar_heights(self, code: str) -> list[int]:
        """Bar heights in pixels, scaled to the busiest bucket, at least 1 each."""
        counts = self.buckets.get(code, [0] * BUCKETS)
        peak = max(max(counts, default=1), 1)
        return [max(int(math.floor(n / peak * BAR_MAX_PX + 0.5)), 1) for n in counts]


def load_tz_mode(storage: Storage | None) -> TzMode:
    """Persisted tz preference; anything but ``utc`` means local."""
    raw = storage.get(TZ_KEY) if storage is not None else None
    return TzMode.UTC if raw == TzMode.UTC.value else TzMode.LOCAL


def save_tz_mode(storage: Storage | None, mode: TzMode) -> None:
    """Persist the tz preference."""
    if storage is not None:
        storage.set(TZ_KEY, TzMode(mode).value)


def display_tz(mode: TzMode, sim_tz: str) -> str:
    """Zone every panel formats in: the sim zone when local, else UTC."""
    return sim_tz if mode is TzMode.LOCAL else "UTC"


def initial_density(storage: Storage | None = None, width: float | None = None) -> bool:
    """Whether to start comfortable: the stored choice, else wide screens only."""
    raw = storage.get(DENSITY_KEY) if storage is not None else None
    if raw is not None:
        return raw == "comfortable"
    if width is None:
        return False
    return width >= COMFORTABLE_MIN_WIDTH


def save_density(storage: Storage | None, comfortable: bool) -> None:
    """Persist the density choice."""
    if storage is not None:
        storage.set(DENSITY_KEY, "comfortable" if comfortable else "compact")


def scenario_indicator(scenarios: Iterable[Scenario]) -> tuple[str, str]:
    """CSS class and text for the pulse-bar scenario pill."""
    active = next((s for s in scenarios if s.current_stage is not None), None)
    if active is None:
        return "muted", "—"
    idx = active.current_stage or 0
    stage_name = active.stages[idx].name if idx < len(active.stages) else "?"
    total = len(active.stages)
    return "", f"{active.name} · {stage_name} ({idx + 1}/{total})"