from dataclasses import replace

from tradingdash.types import WeatherLoc
from tradingdash.util import area_tag, home_areas, neighbour_areas
from tradingdash.weather_panel import visible_weather, weather_cell

HOME = home_areas()[0].code
OTHER_HOME = home_areas()[1].code
NEIGHBOUR = neighbour_areas()[0].code


def make_loc(name="tn", area_code=HOME, **overrides):
    loc = WeatherLoc(
        name=name,
        area_code=area_code,
        lat=50.4,
        lon=11.6,
        cloud_cover=0.25,
        mean_wind=6.5,
        wind_direction=270.0,
        solar_now=400.0,
        wind_now=5.5,
        temp_c_now=12.5,
    )
    return replace(loc, **overrides)


def test_visible_weather_hides_fallback_and_inactive():
    locs = [
        make_loc("tn", HOME),
        make_loc("fallback", None),
        make_loc("fr", NEIGHBOUR),
        make_loc("am", OTHER_HOME),
    ]
    shown = visible_weather(locs, {HOME, OTHER_HOME})
    assert [l.name for l in shown] == ["tn", "am"]


def test_visible_weather_empty_when_no_active_areas():
    assert visible_weather([make_loc()], set()) == []


def test_cell_tag_uses_area_registry():
    assert weather_cell(make_loc(area_code=HOME)).tag == area_tag(HOME)


def test_cell_tag_for_unlinked_location():
    assert weather_cell(make_loc(area_code=None)).tag == "—"


def test_cell_cloud_and_detail_lines():
    cell = weather_cell(make_loc())
    assert cell.cloud == "☁ 0.25"
    assert cell.detail[0] == "lat 50.4 · lon 11.6"
    assert cell.detail[1] == "wind direction 270°"
    assert cell.detail[2] == "mean wind 6.5 m/s"


def test_cell_solar_rounds_to_whole_watts():
    assert weather_cell(make_loc(solar_now=123.6)).solar == "124 W/m²"


def test_cell_solar_rounds_half_away_from_zero():
    assert weather_cell(make_loc(solar_now=2.5)).solar == "3 W/m²"


def test_cell_wind_and_temp_one_decimal():
    cell = weather_cell(make_loc(wind_now=5.5, temp_c_now=12.5))
    assert cell.wind == "5.5 m/s"
    assert cell.temp == "12.5 °C"


def test_cell_wind_direction_is_integral():
    cell = weather_cell(make_loc(wind_direction=271.2))
    assert cell.detail[1].endswith("°")
    assert "." not in cell.detail[1]