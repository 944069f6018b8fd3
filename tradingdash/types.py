"""Wire types decoded from the simulator's HTTP API responses."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

__all__ = [
    "ClockResp",
    "DecodeError",
    "GridpoolOrder",
    "GridpoolResp",
    "GridpoolTrade",
    "InfoResp",
    "PublicTrade",
    "Scenario",
    "Stage",
    "WeatherLoc",
]

T = TypeVar("T")


class DecodeError(ValueError):
    """A response body does not have the expected shape."""


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"field {name!r}: expected a string")
    return value


def _as_uint(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DecodeError(f"field {name!r}: expected a non-negative integer")
    return value


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"field {name!r}: expected a number")
    return float(value)


def _as_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"field {name!r}: expected a boolean")
    return value


def _as_str_tuple(value: Any, name: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise DecodeError(f"field {name!r}: expected a list")
    return tuple(_as_str(item, name) for item in value)


def _check(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DecodeError("expected a JSON object")
    return data


def _field(data: Mapping[str, Any], name: str, conv: Callable[[Any, str], T]) -> T:
    if name not in data:
        raise DecodeError(f"missing field {name!r}")
    return conv(data[name], name)


def _optional(
    data: Mapping[str, Any], name: str, conv: Callable[[Any, str], T]
) -> T | None:
    value = data.get(name)
    return None if value is None else conv(value, name)


@dataclass(frozen=True)
class InfoResp:
    """Server version and registry counts."""

    version: str
    gridpools: int
    markets: int
    couplings: int

    @classmethod
    def from_dict(cls, data: Any) -> InfoResp:
        data = _check(data)
        return cls(
            version=_field(data, "version", _as_str),
            gridpools=_field(data, "gridpools", _as_uint),
            markets=_field(data, "markets", _as_uint),
            couplings=_field(data, "couplings", _as_uint),
        )


@dataclass(frozen=True)
class ClockResp:
    """The simulator's IANA time zone."""

    tz: str

    @classmethod
    def from_dict(cls, data: Any) -> ClockResp:
        data = _check(data)
        return cls(tz=_field(data, "tz", _as_str))


@dataclass(frozen=True)
class GridpoolResp:
    """One gridpool: id, name, areas and cached order/trade counts."""

    id: int
    name: str
    areas: tuple[str, ...]
    orders: int
    trades: int

    @classmethod
    def from_dict(cls, data: Any) -> GridpoolResp:
        data = _check(data)
        return cls(
            id=_field(data, "id", _as_uint),
            name=_field(data, "name", _as_str),
            areas=_field(data, "areas", _as_str_tuple),
            orders=_field(data, "orders", _as_uint),
            trades=_field(data, "trades", _as_uint),
        )


@dataclass(frozen=True)
class GridpoolOrder:
    """One order in a gridpool's drill-down; enums use proto names."""

    id: int
    side: str
    area: str
    period: str
    order_type: str
    price: str
    quantity: str
    open_quantity: str
    filled_quantity: str
    state: str
    state_reason: str
    state_actor: str
    create_time: str
    modification_time: str
    valid_until: str | None = None
    tag: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> GridpoolOrder:
        data = _check(data)
        text_fields = (
            "side",
            "area",
            "period",
            "order_type",
            "price",
            "quantity",
            "open_quantity",
            "filled_quantity",
            "state",
            "state_reason",
            "state_actor",
            "create_time",
            "modification_time",
        )
        return cls(
            id=_field(data, "id", _as_uint),
            **{name: _field(data, name, _as_str) for name in text_fields},
            valid_until=_optional(data, "valid_until", _as_str),
            tag=_optional(data, "tag", _as_str),
        )


@dataclass(frozen=True)
class GridpoolTrade:
    """One fill against a gridpool order."""

    id: int
    order_id: int
    side: str
    area: str
    period: str
    execution_time: str
    price: str
    quantity: str
    state: str

    @classmethod
    def from_dict(cls, data: Any) -> GridpoolTrade:
        data = _check(data)
        text_fields = (
            "side",
            "area",
            "period",
            "execution_time",
            "price",
            "quantity",
            "state",
        )
        return cls(
            id=_field(data, "id", _as_uint),
            order_id=_field(data, "order_id", _as_uint),
            **{name: _field(data, name, _as_str) for name in text_fields},
        )


@dataclass(frozen=True)
class WeatherLoc:
    """One weather location; ``area_code`` is None for the fallback."""

    name: str
    area_code: str | None
    lat: float
    lon: float
    cloud_cover: float
    mean_wind: float
    wind_direction: float
    solar_now: float
    wind_now: float
    temp_c_now: float

    @classmethod
    def from_dict(cls, data: Any) -> WeatherLoc:
        data = _check(data)
        numbers = (
            "lat",
            "lon",
            "cloud_cover",
            "mean_wind",
            "wind_direction",
            "solar_now",
            "wind_now",
            "temp_c_now",
        )
        return cls(
            name=_field(data, "name", _as_str),
            area_code=_optional(data, "area_code", _as_str),
            **{name: _field(data, name, _as_float) for name in numbers},
        )


@dataclass(frozen=True)
class Stage:
    """One scenario stage; hours are sim-local, overrides may be None."""

    name: str
    hour_from: float
    hour_to: float
    bias_from: float
    bias_to: float
    cloud_cover: float | None = None
    mean_wind: float | None = None
    temperature_base: float | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Stage:
        data = _check(data)
        return cls(
            name=_field(data, "name", _as_str),
            hour_from=_field(data, "hour_from", _as_float),
            hour_to=_field(data, "hour_to", _as_float),
            bias_from=_field(data, "bias_from", _as_float),
            bias_to=_field(data, "bias_to", _as_float),
            cloud_cover=_optional(data, "cloud_cover", _as_float),
            mean_wind=_optional(data, "mean_wind", _as_float),
            temperature_base=_optional(data, "temperature_base", _as_float),
        )


def _as_stages(value: Any, name: str) -> tuple[Stage, ...]:
    if not isinstance(value, list):
        raise DecodeError(f"field {name!r}: expected a list")
    return tuple(Stage.from_dict(item) for item in value)


@dataclass(frozen=True)
class Scenario:
    """A registered scenario and its runtime state."""

    name: str
    description: str
    stages: tuple[Stage, ...]
    current_stage: int | None
    wallclock_stage: int | None
    manual_override: bool
    started_at: str | None = None
    stage_entered_at: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Scenario:
        data = _check(data)
        return cls(
            name=_field(data, "name", _as_str),
            description=_field(data, "description", _as_str),
            stages=_field(data, "stages", _as_stages),
            current_stage=_optional(data, "current_stage", _as_uint),
            wallclock_stage=_optional(data, "wallclock_stage", _as_uint),
            manual_override=_field(data, "manual_override", _as_bool),
            started_at=_optional(data, "started_at", _as_str),
            stage_entered_at=_optional(data, "stage_entered_at", _as_str),
        )


@dataclass(frozen=True)
class PublicTrade:
    """One public print; price and quantity stay as decimal strings."""

    id: int
    buy_area: str
    sell_area: str
    period: str
    price: str
    quantity: str
    execution_time: str

    @classmethod
    def from_dict(cls, data: Any) -> PublicTrade:
        data = _check(data)
        text_fields = (
            "buy_area",
            "sell_area",
            "period",
            "price",
            "quantity",
            "execution_time",
        )
        return cls(
            id=_field(data, "id", _as_uint),
            **{name: _field(data, name, _as_str) for name in text_fields},
        )