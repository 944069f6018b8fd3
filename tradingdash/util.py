"""EIC area registry and display helpers for proto enum names."""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = [
    "ALL_AREAS",
    "AreaGroup",
    "AreaSpec",
    "area_tag",
    "home_areas",
    "neighbour_areas",
    "short_order_state",
    "short_side",
    "short_trade_state",
]


class AreaGroup(enum.Enum):
    """Home market zones are always shown; neighbours are toggled."""

    HOME = "home"
    NEIGHBOUR = "neighbour"


@dataclass(frozen=True)
class AreaSpec:
    """One configured area: EIC code, short badge tag and group."""

    code: str
    tag: str
    group: AreaGroup


ALL_AREAS: tuple[AreaSpec, ...] = (
    AreaSpec("10YDE-EON------1", "TN", AreaGroup.HOME),
    AreaSpec("10YDE-RWENET---I", "AM", AreaGroup.HOME),
    AreaSpec("10YDE-VE-------2", "HZ", AreaGroup.HOME),
    AreaSpec("10YDE-ENBW-----N", "BW", AreaGroup.HOME),
    AreaSpec("10YFR-RTE------C", "FR", AreaGroup.NEIGHBOUR),
    AreaSpec("10YNL----------L", "NL", AreaGroup.NEIGHBOUR),
    AreaSpec("10YBE----------2", "BE", AreaGroup.NEIGHBOUR),
    AreaSpec("10YAT-APG------L", "AT", AreaGroup.NEIGHBOUR),
)

_TAGS = {area.code: area.tag for area in ALL_AREAS}

_SIDES = {
    "MARKET_SIDE_BUY": "buy",
    "MARKET_SIDE_SELL": "sell",
}

_ORDER_STATES = {
    "ORDER_STATE_PENDING": "pending",
    "ORDER_STATE_ACTIVE": "active",
    "ORDER_STATE_HIBERNATE": "hibernate",
    "ORDER_STATE_FILLED": "filled",
    "ORDER_STATE_CANCELED": "canceled",
    "ORDER_STATE_EXPIRED": "expired",
    "ORDER_STATE_FAILED": "failed",
}

_TRADE_STATES = {
    "TRADE_STATE_ACTIVE": "active",
    "TRADE_STATE_CANCEL_REQUESTED": "cancel?",
    "TRADE_STATE_CANCEL_REJECTED": "cancel✗",
    "TRADE_STATE_CANCELED": "canceled",
    "TRADE_STATE_RECALL_REQUESTED": "recall?",
    "TRADE_STATE_RECALL_REJECTED": "recall✗",
    "TRADE_STATE_RECALLED": "recalled",
    "TRADE_STATE_APPROVAL_REQUESTED": "approval?",
}


def area_tag(code: str) -> str:
    """Short badge tag for an EIC code, or ``?`` when unknown."""
    return _TAGS.get(code, "?")


def home_areas() -> list[AreaSpec]:
    """Home-market areas in registry order."""
    return [a for a in ALL_AREAS if a.group is AreaGroup.HOME]


def neighbour_areas() -> list[AreaSpec]:
    """Neighbouring areas in registry order."""
    return [a for a in ALL_AREAS if a.group is AreaGroup.NEIGHBOUR]


def short_side(s: str) -> str:
    """Display form of a market side; unknown names pass through."""
    return _SIDES.get(s, s)


def short_order_state(s: str) -> str:
    """Display form of an order state; unknown names pass through."""
    return _ORDER_STATES.get(s, s)


def short_trade_state(s: str) -> str:
    """Display form of a trade state; unknown names pass through."""
    return _TRADE_STATES.get(s, s)