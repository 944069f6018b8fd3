# tradingdash

Dashboard logic for an intraday electricity trading simulator. It covers
what a trading desk's status page does with the simulator's data:

- `tradingdash.util`: the EIC area registry (`ALL_AREAS`, `home_areas`,
  `neighbour_areas`), short badge tags (`area_tag`) and display forms of
  proto enum names (`short_side`, `short_order_state`, `short_trade_state`);
- `tradingdash.intl`: ISO-8601 parsing and `HH:MM` / `HH:MM:SS` formatting
  in any IANA time zone, plus the current hour and zone label;
- `tradingdash.types`: dataclasses decoded from JSON objects with
  `from_dict` (`InfoResp`, `ClockResp`, `GridpoolResp`, `GridpoolOrder`,
  `GridpoolTrade`, `WeatherLoc`, `Stage`, `Scenario`, `PublicTrade`);
  a malformed object raises `DecodeError`;
- `tradingdash.filters`: area filter chips (`FilterState`) and a small
  key-value `Storage` to keep them in;
- `tradingdash.trades`: the public-trade tape (`TradeTape`) with
  delivery-period filters and a click-to-focus pin (`toggle_focus`);
- `tradingdash.chart`: the price history (`record_trade`), bucketing with
  EMA smoothing (`buckets`), axis ranges and time labels;
- `tradingdash.pulse`: per-area activity sparkbars (`SparkState`), the
  time-zone and density toggles, and the active-scenario indicator;
- `tradingdash.scenarios`: stage hours, weather overrides, timeline
  placement and row state;
- `tradingdash.gridpools`: the gridpool drill-down (`DrilldownState`):
  pools, orders and the fills of one order;
- `tradingdash.weather_panel`: which weather locations to show and how
  each cell reads;
- `tradingdash.noise`: deterministic, horizon-scaled noise for 24-hour
  weather forecasts and a bounded history of past forecasts.

It needs no third-party packages.

## Install

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Library use

```python
from tradingdash.util import area_tag, short_side
from tradingdash.intl import short_time
from tradingdash.chart import format_back
from tradingdash.scenarios import fmt_stage_hour

area_tag("10YDE-EON------1")                         # "TN"
short_side("MARKET_SIDE_BUY")                        # "buy"
short_time("2026-05-13T12:00:00Z", "Europe/Berlin")  # "14:00"
format_back(90)                                      # "-1h30m"
fmt_stage_hour(6.5)                                  # "06:30"
```

Filter state is kept in any `Storage`, so a selection can be restored
later:

```python
from tradingdash.filters import Storage, load_filter, save_filter

storage = Storage()
state = load_filter(storage)
state.toggle_neighbours()
save_filter(storage, state)
```

Forecast noise is deterministic: the same creation time, valid time and
feature always give the same value, so a replayed forecast matches the one
first produced. Solar irradiance noise scales with the true value, so night
hours stay at zero, and solar results are kept between 0 and 1361 W/m².
`forecast_valid_times` gives the 24 hourly valid times starting at the
next full hour.

```python
from tradingdash.noise import ForecastFeature, apply_noise, forecast_valid_times

apply_noise(0.0, 24.0, ForecastFeature.SURFACE_SOLAR_RADIATION_DOWNWARDS, 1000, 2000)  # 0.0
```

## What it does not do

The package holds state and formatting logic only. It has no command line,
does not talk to the simulator over HTTP or WebSocket, does not poll or
stream anything, and draws no screen: fetching the JSON, feeding it to
`from_dict`, and rendering the results are left to the caller. It does not
compute weather truth values either; `apply_noise` perturbs values the
caller supplies.