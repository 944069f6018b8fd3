"""Area filter state shared by the weather and trade panels."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from tradingdash.util import ALL_AREAS, AreaGroup, AreaSpec, home_areas, neighbour_areas

__all__ = [
    "KEY_ACTIVE",
    "KEY_NEIGHBOURS",
    "FilterState",
    "Storage",
    "load_filter",
    "save_filter",
]

KEY_ACTIVE = "tradingsim-active-areas"
KEY_NEIGHBOURS = "tradingsim-neighbours"

_KNOWN_CODES = {area.code for area in ALL_AREAS}


class Storage:
    """A small string key-value store for persisted UI preferences."""

    def __init__(self, items: Mapping[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def get(self, key: str) -> str | None:
        """Stored value for ``key``, or None."""
        return self._items.get(key)

    def set(self, key: str, value: object) -> None:
        """Store ``value`` under ``key`` as a string."""
        self._items[key] = str(value)

    def remove(self, key: str) -> None:
        """Forget ``key``; missing keys are ignored."""
        self._items.pop(key, None)


def _home_codes() -> set[str]:
    return {area.code for area in home_areas()}


@dataclass
class FilterState:
    """Visible EIC codes plus the neighbour-zone toggle."""

    active_areas: set[str] = field(default_factory=_home_codes)
    show_neighbours: bool = False

    def toggle_area(self, code: str) -> None:
        """Flip one area's visibility."""
        if code not in _KNOWN_CODES:
            raise ValueError(f"unknown area code: {code!r}")
        if code in self.active_areas:
            self.active_areas.remove(code)
        else:
            self.active_areas.add(code)

    def toggle_neighbours(self) -> None:
        """Flip the neighbour toggle, adding or removing every neighbour zone."""
        self.show_neighbours = not self.show_neighbours
        codes = {area.code for area in neighbour_areas()}
        if self.show_neighbours:
            self.active_areas |= codes
        else:
            self.active_areas -= codes

    def visible_areas(self) -> list[AreaSpec]:
        """Areas that get a chip: home zones first, neighbours when shown."""
        return [
            area
            for area in ALL_AREAS
            if area.group is AreaGroup.HOME or self.show_neighbours
        ]


def load_filter(storage: Storage | None = None) -> FilterState:
    """Restore the filter from storage, dropping codes no longer configured."""
    state = FilterState()
    if storage is None:
        return state
    raw = storage.get(KEY_ACTIVE)
    if raw is not None:
        state.active_areas = {
            code for code in raw.split(",") if code and code in _KNOWN_CODES
        }
    raw = storage.get(KEY_NEIGHBOURS)
    if raw is not None:
        state.show_neighbours = raw == "true"
    return state


def save_filter(storage: Storage, state: FilterState) -> None:
    """Persist the filter; codes are written in registry order."""
    codes = [area.code for area in ALL_AREAS if area.code in state.active_areas]
    storage.set(KEY_ACTIVE, ",".join(codes))
    storage.set(KEY_NEIGHBOURS, "true" if state.show_neighbours else "false")