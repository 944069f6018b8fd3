"""Gridpool drill-down state: pool list, orders of a pool, fills of an order."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from tradingdash.types import GridpoolOrder, GridpoolResp, GridpoolTrade

__all__ = [
    "GRIDPOOL_POLL_SECONDS",
    "DrilldownState",
    "best_pool",
]

GRIDPOOL_POLL_SECONDS = 3.0


def best_pool(pools: Sequence[GridpoolResp]) -> GridpoolResp | None:
    """The pool with the most trades; the last one wins a tie."""
    return max(reversed(pools), key=lambda p: p.trades, default=None)


@dataclass
class DrilldownState:
    """Selections and fetched lists behind the three-pane drill-down."""

    pools: list[GridpoolResp] = field(default_factory=list)
    selected: int | None = None
    orders: list[GridpoolOrder] = field(default_factory=list)
    period_filter: str | None = None
    selected_order: int | None = None
    trades: list[GridpoolTrade] = field(default_factory=list)
    loaded: bool = False

    def update_pools(self, pools: Iterable[GridpoolResp]) -> None:
        """Take a fresh pool list; the busiest pool is selected if none is."""
        pools = list(pools)
        if self.selected is None:
            best = best_pool(pools)
            if best is not None:
                self.select_pool(best.id)
        self.pools = pools
        self.loaded = True

    def select_pool(self, pool_id: int | None) -> None:
        """Select a pool, resetting everything that hangs off the previous one."""
        self.selected = pool_id
        self.orders = []
        self.period_filter = None
        self.select_order(None)

    def select_order(self, order_id: int | None) -> None:
        """Select an order; its fills are cleared until fetched."""
        self.selected_order = order_id
        self.trades = []

    def set_period_filter(self, period: str | None) -> None:
        """Scope the orders pane to one delivery; empty or None shows all."""
        self.period_filter = period or None

    def update_orders(self, orders: Iterable[GridpoolOrder]) -> None:
        """Take a fresh order list, dropping a stale period or order selection."""
        self.orders = list(orders)
        periods = {o.period for o in self.orders}
        if self.period_filter is not None and self.period_filter not in periods:
            self.period_filter = None
        ids = {o.id for o in self.orders}
        if self.selected_order is not None and self.selected_order not in ids:
            self.select_order(None)

    def visible_orders(self) -> list[GridpoolOrder]:
        """Orders of the selected pool within the period filter."""
        if self.selected is None:
            return []
        return [
            o
            for o in self.orders
            if self.period_filter is None or o.period == self.period_filter
        ]

    def period_options(self) -> list[str]:
        """Sorted, de-duplicated delivery periods of the loaded orders."""
        return sorted({o.period for o in self.orders})