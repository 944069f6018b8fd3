"""Deterministic forecast noise and the bounded forecast history ring."""

from __future__ import annotations

import enum
import math
import struct
from collections import deque
from typing import Any, Iterator

__all__ = [
    "HISTORY_CAP",
    "SOLAR_CONSTANT",
    "ForecastFeature",
    "ForecastHistory",
    "apply_noise",
    "forecast_valid_times",
]

HISTORY_CAP = 100
SOLAR_CONSTANT = 1361.0
FORECAST_HOURS = 24

_MASK = (1 << 64) - 1
_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3


class ForecastFeature(enum.IntEnum):
    """Weather forecast features with their wire numbers."""

    UNSPECIFIED = 0
    TEMPERATURE_2_METRE = 1
    U_WIND_COMPONENT_100_METRE = 2
    V_WIND_COMPONENT_100_METRE = 3
    U_WIND_COMPONENT_10_METRE = 4
    V_WIND_COMPONENT_10_METRE = 5
    SURFACE_SOLAR_RADIATION_DOWNWARDS = 6
    SURFACE_NET_SOLAR_RADIATION = 7


_SIGMA_PER_HOUR = {
    ForecastFeature.SURFACE_SOLAR_RADIATION_DOWNWARDS: 30.0,
    ForecastFeature.U_WIND_COMPONENT_100_METRE: 0.15,
    ForecastFeature.V_WIND_COMPONENT_100_METRE: 0.15,
    ForecastFeature.U_WIND_COMPONENT_10_METRE: 0.15,
    ForecastFeature.V_WIND_COMPONENT_10_METRE: 0.15,
    ForecastFeature.TEMPERATURE_2_METRE: 0.08,
}


def _rotl(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & _MASK


def _splitmix64(state: int) -> Iterator[int]:
    while True:
        state = (state + 0x9E3779B97F4A7C15) & _MASK
        z = state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK
        yield z ^ (z >> 31)


class _Xoshiro256PlusPlus:
    """Small fast generator seeded from a single 64-bit value."""

    def __init__(self, seed: int) -> None:
        gen = _splitmix64(seed & _MASK)
        self._s = [next(gen) for _ in range(4)]

    def next_u64(self) -> int:
        s = self._s
        result = (_rotl((s[0] + s[3]) & _MASK, 23) + s[0]) & _MASK
        t = (s[1] << 17) & _MASK
        s[2] ^= s[0]
        s[3] ^= s[1]
        s[1] ^= s[2]
        s[0] ^= s[3]
        s[2] ^= t
        s[3] = _rotl(s[3], 45)
        return result

    def uniform_inclusive(self, low: float, high: float) -> float:
        """Uniform float in ``[low, high]``."""
        max_rand = _float_from_mantissa(_MASK >> 12) - 1.0
        scale = (high - low) / max_rand
        while low + max_rand * scale > high:
            scale = math.nextafter(scale, -math.inf)
        value0_1 = _float_from_mantissa(self.next_u64() >> 12) - 1.0
        return value0_1 * scale + low


def _float_from_mantissa(mantissa: int) -> float:
    """Float in ``[1, 2)`` built from 52 mantissa bits."""
    bits = (1023 << 52) | mantissa
    return struct.unpack("<d", struct.pack("<Q", bits))[0]


def _seed(create_secs: int, valid_secs: int, feature: ForecastFeature) -> int:
    s = _FNV_OFFSET
    for value in (create_secs, valid_secs, int(feature)):
        s = (s * _FNV_PRIME + (value & _MASK)) & _MASK
    return s


def apply_noise(
    truth: float,
    horizon_h: float,
    feature: ForecastFeature,
    create_secs: int,
    valid_secs: int,
) -> float:
    """Add deterministic, horizon-scaled noise to a forecast value.

    The same (create, valid, feature) triple always yields the same
    offset. Solar noise scales with truth / 1361 and the result is
    clamped to ``[0, 1361]``.
    """
    feature = ForecastFeature(feature)
    sigma = _SIGMA_PER_HOUR.get(feature, 0.0) * horizon_h
    if sigma <= 0.0:
        return truth
    is_solar = feature is ForecastFeature.SURFACE_SOLAR_RADIATION_DOWNWARDS
    truth_scale = min(max(truth / SOLAR_CONSTANT, 0.0), 1.0) if is_solar else 1.0
    rng = _Xoshiro256PlusPlus(_seed(create_secs, valid_secs, feature))
    r = rng.uniform_inclusive(-1.0, 1.0)
    noisy = truth + r * sigma * truth_scale
    if is_solar:
        return min(max(noisy, 0.0), SOLAR_CONSTANT)
    return noisy


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def forecast_valid_times(create_secs: int) -> list[int]:
    """Valid times of the 24 hourly entries, anchored at the next full hour."""
    next_hour = (_trunc_div(create_secs, 3600) + 1) * 3600
    return [next_hour + h * 3600 for h in range(FORECAST_HOURS)]


class ForecastHistory:
    """Bounded ring of past forecast emissions, oldest dropped first.

    Stored forecasts carry a ``create_time`` attribute in epoch
    seconds (or ``None``, in which case they never match a query).
    """

    def __init__(self, cap: int = HISTORY_CAP) -> None:
        if cap < 1:
            raise ValueError("history capacity must be positive")
        self._ring: deque[Any] = deque(maxlen=cap)

    def __len__(self) -> int:
        return len(self._ring)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._ring)

    def push(self, forecast: Any) -> None:
        """Append a forecast, evicting the oldest at capacity."""
        self._ring.append(forecast)

    def between(self, start: int | None = None, end: int | None = None) -> list[Any]:
        """Forecasts whose create time lies in ``[start, end]``; None is unbounded."""
        result = []
        for forecast in self._ring:
            created = getattr(forecast, "create_time", None)
            if created is None:
                continue
            if start is not None and created < start:
                continue
            if end is not None and created > end:
                continue
            result.append(forecast)
        return result