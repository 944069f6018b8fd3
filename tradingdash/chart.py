"""Price tape chart data: the bounded price history and its bucketed line."""

from __future__ import annotations

import math
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from tradingdash.filters import Storage
from tradingdash.intl import parse_iso
from tradingdash.types import PublicTrade
from tradingdash.util import home_areas

__all__ = [
    "DEFAULT_WINDOW_MIN",
    "EMA_ALPHA",
    "KEY_PERIOD",
    "KEY_WINDOW",
    "PERIOD_STEP_MS",
    "PRICE_BUFFER_MS",
    "WINDOW_OPTIONS",
    "Point",
    "PricePoint",
    "axis_range",
    "buckets",
    "distinct_periods",
    "effective_period_ms",
    "format_back",
    "load_chart_period",
    "load_window",
    "pick_x_step",
    "record_trade",
    "save_chart_period",
    "save_window",
    "y_decimals",
]

PRICE_BUFFER_MS = 4.0 * 60.0 * 60.0 * 1000.0
PERIOD_STEP_MS = 15.0 * 60.0 * 1000.0
EMA_ALPHA = 0.4
DEFAULT_WINDOW_MIN = 30

KEY_WINDOW = "tradingsim-chart-window-min"
KEY_PERIOD = "tradingsim-chart-period"

WINDOW_OPTIONS: tuple[tuple[int, str], ...] = (
    (5, "5 min"),
    (10, "10 min"),
    (30, "30 min"),
    (60, "1 hour"),
    (240, "4 hours"),
    (720, "12 hours"),
    (1440, "24 hours"),
)

_MINUTE_MS = 60_000.0
_X_STEP_MINUTES = (1.0, 2.0, 5.0, 10.0, 15.0, 30.0, 60.0, 120.0)
_PLACEHOLDER_RANGE = (70.0, 100.0)
_U32_MAX = 2**32 - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class PricePoint:
    """One print in the chart history: execution and delivery epochs in ms."""

    t: float
    price: float
    period_ms: float


@dataclass(frozen=True)
class Point:
    """One smoothed point on the rendered line."""

    t: float
    price: float


def _now_ms(now_ms: float | None) -> float:
    return time.time() * 1000.0 if now_ms is None else now_ms


def _iso_to_ms(iso: str) -> float | None:
    moment = parse_iso(iso)
    if moment is None:
        return None
    delta = moment - _EPOCH
    return float(
        delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000
    )


def _ms_to_iso(ms: int) -> str:
    moment = _EPOCH + timedelta(milliseconds=ms)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{ms % 1000:03d}Z"


def _round(x: float) -> float:
    """Round half away from zero."""
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _parse_price(text: str) -> float | None:
    if text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def record_trade(
    buf: list[PricePoint], trade: PublicTrade, now_ms: float | None = None
) -> None:
    """Append a print touching a home area; trim history older than four hours.

    Prints whose times or price do not parse are ignored.
    """
    home = {area.code for area in home_areas()}
    if trade.buy_area not in home and trade.sell_area not in home:
        return
    exec_ms = _iso_to_ms(trade.execution_time)
    period_ms = _iso_to_ms(trade.period)
    price = _parse_price(trade.price)
    if price is None or exec_ms is None or period_ms is None:
        return
    buf.append(PricePoint(t=exec_ms, price=price, period_ms=period_ms))
    cutoff = _now_ms(now_ms) - PRICE_BUFFER_MS
    stale = 0
    for point in buf:
        if point.t >= cutoff:
            break
        stale += 1
    del buf[:stale]


def pick_x_step(window_ms: float) -> float:
    """Time-axis label step so the window holds at most eight labels."""
    for minutes in _X_STEP_MINUTES:
        step = minutes * _MINUTE_MS
        if window_ms / step <= 8.0:
            return step
    return window_ms


def format_back(mins: int) -> str:
    """Axis label for a point ``mins`` minutes in the past."""
    if mins == 0:
        return "now"
    if mins < 60:
        return f"-{mins}m"
    hours, rest = divmod(mins, 60)
    return f"-{hours}h" if rest == 0 else f"-{hours}h{rest}m"


def effective_period_ms(pinned: str | None, now_ms: float | None = None) -> float:
    """Delivery period (epoch ms) the chart shows.

    A parseable pinned period wins; otherwise the next 15-minute
    boundary after the current time.
    """
    if pinned is not None:
        ms = _iso_to_ms(pinned)
        if ms is not None:
            return ms
    now = _now_ms(now_ms)
    return math.ceil(now / PERIOD_STEP_MS) * PERIOD_STEP_MS


def buckets(
    prices: Iterable[PricePoint],
    window_ms: float,
    period_ms: float,
    now_ms: float | None = None,
) -> list[Point]:
    """Average prints per bucket within the window, then EMA-smooth them.

    Only prints for ``period_ms`` count. The window holds about 60
    buckets of at least five seconds each.
    """
    tmin = _now_ms(now_ms) - window_ms
    bucket_ms = max(_round(window_ms / 60.0 / 1000.0), 5.0) * 1000.0
    sums: dict[int, list[float]] = {}
    for point in prices:
        if point.t < tmin or point.period_ms != period_ms:
            continue
        slot = sums.setdefault(math.floor(point.t / bucket_ms), [0.0, 0])
        slot[0] += point.price
        slot[1] += 1
    line: list[Point] = []
    smoothed: float | None = None
    for index in sorted(sums):
        total, count = sums[index]
        mean = total / count
        smoothed = (
            mean if smoothed is None else EMA_ALPHA * mean + (1.0 - EMA_ALPHA) * smoothed
        )
        line.append(Point(t=index * bucket_ms + bucket_ms / 2.0, price=smoothed))
    return line


def axis_range(line: Sequence[Point]) -> tuple[float, float]:
    """Padded price-axis bounds for the line; a placeholder range when empty."""
    if line:
        ymin = min(p.price for p in line)
        ymax = max(p.price for p in line)
    else:
        ymin, ymax = _PLACEHOLDER_RANGE
    if ymax - ymin < 1.0:
        ymax = ymin + 1.0
    pad = (ymax - ymin) * 0.1
    return ymin - pad, ymax + pad


def y_decimals(y_range: float) -> int:
    """Decimal places for price-axis labels given the visible range."""
    if y_range >= 10.0:
        return 0
    if y_range >= 2.0:
        return 1
    return 2


def distinct_periods(prices: Iterable[PricePoint]) -> list[str]:
    """Sorted, de-duplicated delivery periods in the history as ISO strings."""
    return [_ms_to_iso(ms) for ms in sorted({int(p.period_ms) for p in prices})]


def _parse_u32(text: str) -> int | None:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    value = int(digits)
    return value if value <= _U32_MAX else None


def load_window(storage: Storage | None) -> int:
    """Persisted chart window in minutes, defaulting to 30."""
    raw = storage.get(KEY_WINDOW) if storage is not None else None
    value = _parse_u32(raw) if raw is not None else None
    return DEFAULT_WINDOW_MIN if value is None else value


def save_window(storage: Storage | None, mins: int) -> None:
    """Persist the chart window in minutes."""
    if storage is not None:
        storage.set(KEY_WINDOW, str(mins))


def load_chart_period(storage: Storage | None) -> str | None:
    """Persisted pinned delivery period, if any."""
    return storage.get(KEY_PERIOD) if storage is not None else None


def save_chart_period(storage: Storage | None, period: str | None) -> None:
    """Persist the pinned period, or forget it when None."""
    if storage is None:
        return
    if period is None:
        storage.remove(KEY_PERIOD)
    else:
        storage.set(KEY_PERIOD, period)