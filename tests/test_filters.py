import pytest

from tradingdash.filters import (
    KEY_ACTIVE,
    KEY_NEIGHBOURS,
    FilterState,
    Storage,
    load_filter,
    save_filter,
)
from tradingdash.util import ALL_AREAS, home_areas, neighbour_areas

HOME_CODES = {a.code for a in home_areas()}
NEIGHBOUR_CODES = {a.code for a in neighbour_areas()}


def test_storage_get_set_remove():
    storage = Storage()
    assert storage.get("k") is None
    storage.set("k", "v")
    assert storage.get("k") == "v"
    storage.remove("k")
    assert storage.get("k") is None
    storage.remove("k")
    assert len(storage) == 0


def test_storage_coerces_to_string():
    storage = Storage()
    storage.set("n", 30)
    assert storage.get("n") == "30"


def test_default_state_shows_home_only():
    state = FilterState()
    assert state.active_areas == HOME_CODES
    assert state.show_neighbours is False


def test_load_without_storage_is_default():
    state = load_filter(None)
    assert state.active_areas == HOME_CODES
    assert state.show_neighbours is False


def test_load_from_empty_storage_is_default():
    state = load_filter(Storage())
    assert state.active_areas == HOME_CODES


def test_save_load_round_trip():
    storage = Storage()
    state = FilterState()
    state.toggle_neighbours()
    state.toggle_area(home_areas()[0].code)
    save_filter(storage, state)
    restored = load_filter(storage)
    assert restored.active_areas == state.active_areas
    assert restored.show_neighbours is True


def test_saved_codes_follow_registry_order():
    storage = Storage()
    state = FilterState(active_areas={a.code for a in ALL_AREAS})
    save_filter(storage, state)
    assert storage.get(KEY_ACTIVE).split(",") == [a.code for a in ALL_AREAS]
    assert storage.get(KEY_NEIGHBOURS) == "false"


def test_load_drops_stale_codes():
    keep = home_areas()[1].code
    storage = Storage({KEY_ACTIVE: f"10YXX-GONE-----0,{keep},,"})
    assert load_filter(storage).active_areas == {keep}


def test_empty_saved_set_round_trips_empty():
    storage = Storage()
    save_filter(storage, FilterState(active_areas=set()))
    assert load_filter(storage).active_areas == set()


def test_neighbours_flag_only_true_string():
    assert load_filter(Storage({KEY_NEIGHBOURS: "yes"})).show_neighbours is False
    assert load_filter(Storage({KEY_NEIGHBOURS: "true"})).show_neighbours is True


def test_toggle_area_twice_restores():
    state = FilterState()
    code = home_areas()[2].code
    state.toggle_area(code)
    assert code not in state.active_areas
    state.toggle_area(code)
    assert state.active_areas == HOME_CODES


def test_toggle_unknown_area_raises():
    with pytest.raises(ValueError):
        FilterState().toggle_area("10YXX-UNKNOWN--0")


def test_toggle_neighbours_adds_and_removes_all():
    state = FilterState()
    state.toggle_neighbours()
    assert state.show_neighbours is True
    assert NEIGHBOUR_CODES <= state.active_areas
    state.toggle_neighbours()
    assert state.show_neighbours is False
    assert state.active_areas == HOME_CODES


def test_visible_areas_follow_toggle():
    state = FilterState()
    assert state.visible_areas() == home_areas()
    state.toggle_neighbours()
    assert state.visible_areas() == list(ALL_AREAS)