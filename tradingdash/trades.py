"""Public-trade tape: the bounded print ring and its filtered view."""

from __future__ import annotations

from collections import deque
from collections.abc import Collection, Iterator
from itertools import islice

from tradingdash.filters import Storage
from tradingdash.types import PublicTrade

__all__ = [
    "KEY_FILTER",
    "TRADES_BUFFER_CAP",
    "TRADES_DISPLAY_CAP",
    "TradeTape",
    "load_period_filter",
    "save_period_filter",
    "toggle_focus",
]

TRADES_BUFFER_CAP = 500
TRADES_DISPLAY_CAP = 10
KEY_FILTER = "tradingsim-trades-filter"

_ALL = "all"


class TradeTape:
    """Recent public prints, newest first, capped in size."""

    def __init__(self, cap: int = TRADES_BUFFER_CAP) -> None:
        if cap < 1:
            raise ValueError("tape capacity must be positive")
        self._trades: deque[PublicTrade] = deque(maxlen=cap)

    def __len__(self) -> int:
        return len(self._trades)

    def __iter__(self) -> Iterator[PublicTrade]:
        return iter(self._trades)

    def push(self, trade: PublicTrade) -> None:
        """Add a print at the front; the oldest falls off at capacity."""
        self._trades.appendleft(trade)

    def visible(
        self,
        active_areas: Collection[str],
        period_filter: str | None = None,
        focused: str | None = None,
    ) -> list[PublicTrade]:
        """Newest prints matching the period pins and touching an active area.

        At most ``TRADES_DISPLAY_CAP`` prints are returned.
        """
        matching = (
            t
            for t in self._trades
            if (period_filter is None or t.period == period_filter)
            and (focused is None or t.period == focused)
            and (t.buy_area in active_areas or t.sell_area in active_areas)
        )
        return list(islice(matching, TRADES_DISPLAY_CAP))

    def periods(self) -> list[str]:
        """Sorted, de-duplicated delivery periods currently on the tape."""
        return sorted({t.period for t in self._trades})


def load_period_filter(storage: Storage | None) -> str | None:
    """Persisted delivery filter; empty or ``all`` means no filter."""
    if storage is None:
        return None
    raw = storage.get(KEY_FILTER)
    if raw is None or raw == "" or raw == _ALL:
        return None
    return raw


def save_period_filter(storage: Storage | None, period: str | None) -> None:
    """Persist the delivery filter, or forget it when None."""
    if storage is None:
        return
    if period is None:
        storage.remove(KEY_FILTER)
    else:
        storage.set(KEY_FILTER, period)


def toggle_focus(current: str | None, period: str) -> str | None:
    """Pin ``period``; picking the already pinned period clears the pin."""
    return None if current == period else period