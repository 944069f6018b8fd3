from datetime import datetime, timezone

import pytest

from tradingdash.intl import (
    INVALID_TIME,
    INVALID_TIME_SEC,
    now_hms,
    now_hour_in_tz,
    parse_iso,
    short_time,
    short_time_sec,
    zone_label,
)


def test_parse_iso_utc_suffix():
    assert parse_iso("2026-05-13T12:00:00Z") == datetime(
        2026, 5, 13, 12, 0, tzinfo=timezone.utc
    )


def test_parse_iso_offset_is_normalised_to_utc():
    with_offset = parse_iso("2026-05-13T14:00:00+02:00")
    plain = parse_iso("2026-05-13T12:00:00Z")
    assert with_offset == plain
    assert with_offset.utcoffset().total_seconds() == 0


def test_parse_iso_truncates_nanoseconds():
    parsed = parse_iso("2026-05-13T12:00:00.123456789Z")
    assert parsed.microsecond == 123456


@pytest.mark.parametrize("bad", ["", "not-a-date", "2026-13-40T00:00:00Z", "12:00"])
def test_parse_iso_rejects_invalid(bad):
    assert parse_iso(bad) is None


def test_short_time_invalid_placeholder():
    assert short_time("garbage", "UTC") == INVALID_TIME
    assert INVALID_TIME == "--:--"


def test_short_time_sec_invalid_placeholder():
    assert short_time_sec("garbage", "UTC") == INVALID_TIME_SEC
    assert INVALID_TIME_SEC == "--:--:--"


def test_short_time_in_utc():
    assert short_time("2026-05-13T12:00:00Z", "UTC") == "12:00"


def test_short_time_sec_converts_offset():
    assert short_time_sec("2026-05-13T14:30:15+02:00", "UTC") == "12:30:15"


def test_short_time_is_prefix_of_short_time_sec():
    iso = "2026-05-13T09:07:45Z"
    assert short_time_sec(iso, "UTC").startswith(short_time(iso, "UTC"))


def test_short_time_in_berlin_summer():
    assert short_time("2026-05-13T12:00:00Z", "Europe/Berlin") == "14:00"


def test_unknown_zone_raises():
    with pytest.raises(ValueError):
        short_time("2026-05-13T12:00:00Z", "Nowhere/Atlantis")


def test_now_hms_with_fixed_instant():
    now = datetime(2026, 5, 13, 8, 5, 9, tzinfo=timezone.utc)
    assert now_hms("UTC", now) == "08:05:09"


def test_now_hour_in_tz_half_hour():
    now = datetime(2026, 5, 13, 14, 30, 0, tzinfo=timezone.utc)
    assert now_hour_in_tz("UTC", now) == 14.5


def test_now_hour_in_tz_naive_treated_as_utc():
    aware = datetime(2026, 5, 13, 3, 15, 0, tzinfo=timezone.utc)
    naive = datetime(2026, 5, 13, 3, 15, 0)
    assert now_hour_in_tz("UTC", naive) == now_hour_in_tz("UTC", aware)


def test_zone_label_utc():
    assert zone_label("UTC") == "UTC"


def test_zone_label_berlin_summer():
    now = datetime(2026, 7, 1, 12, 0, tzinfo=timezone.utc)
    assert zone_label("Europe/Berlin", now) == "CEST"