from datetime import datetime, timezone

import pytest

from tzchange.catalog import (
    TABLE_COLUMNS,
    _find_dst_transitions,
    build_zone_table,
    candidate_zones,
    city_name,
    find_dst_transitions,
)

PARIS_2019 = (
    3600,
    7200,
    int(datetime(2019, 3, 31, 1, tzinfo=timezone.utc).timestamp()),
    int(datetime(2019, 10, 27, 1, tzinfo=timezone.utc).timestamp()),
)


@pytest.fixture(autouse=True)
def _fresh_cache(monkeypatch):
    monkeypatch.delenv("TZCHANGE_OFFSET_DIFF_THRESHOLD", raising=False)
    _find_dst_transitions.cache_clear()
    yield
    _find_dst_transitions.cache_clear()


def test_find_dst_transitions_paris():
    assert find_dst_transitions("Europe/Paris", 2019) == PARIS_2019


def test_find_dst_transitions_southern_hemisphere():
    std, dst, start, end = find_dst_transitions("Australia/Sydney", 2019)
    assert (std, dst) == (36000, 39600)
    assert start == int(datetime(2019, 10, 5, 16, tzinfo=timezone.utc).timestamp())
    assert end == int(datetime(2019, 4, 6, 16, tzinfo=timezone.utc).timestamp())


def test_find_dst_transitions_without_dst():
    assert find_dst_transitions("Asia/Tokyo", 2019) == (32400, 32400, 0, 0)


def test_find_dst_transitions_unknown_zone():
    assert find_dst_transitions("Not/A_Real_TZ", 2019) == (0, 0, 0, 0)


def test_find_dst_transitions_threshold(monkeypatch):
    monkeypatch.setenv("TZCHANGE_OFFSET_DIFF_THRESHOLD", "7200")
    assert find_dst_transitions("Europe/Paris", 2019) == (3600, 3600, 0, 0)


def test_find_dst_transitions_follows_threshold_changes_between_calls(monkeypatch):
    assert find_dst_transitions("Europe/Paris", 2019) == PARIS_2019
    monkeypatch.setenv("TZCHANGE_OFFSET_DIFF_THRESHOLD", "7200")
    assert find_dst_transitions("Europe/Paris", 2019) == (3600, 3600, 0, 0)
    monkeypatch.delenv("TZCHANGE_OFFSET_DIFF_THRESHOLD")
    assert find_dst_transitions("Europe/Paris", 2019) == PARIS_2019


def test_city_name():
    assert city_name("America/Port_of_Spain") == "Port of Spain"
    assert city_name("America/Argentina/Buenos_Aires") == "Buenos Aires"


def test_candidate_zones_filtering():
    for tz_name in candidate_zones():
        assert "/" in tz_name
        assert not tz_name.startswith("Etc/")
        assert not tz_name.lower().startswith(("right/", "posix/"))


def test_build_zone_table_groups_shared_rules():
    df = build_zone_table(
        2019,
        zones=["Europe/Paris", "Europe/Berlin", "Asia/Tokyo", "US/Eastern", "Not/Atlantis"],
    )
    assert list(df.columns) == TABLE_COLUMNS
    assert len(df) == 2
    # Sorted by standard offset
    assert df.iloc[0]["names"] == ["Berlin", "Paris"]
    assert tuple(int(v) for v in df.iloc[0][TABLE_COLUMNS[:4]]) == PARIS_2019
    assert df.iloc[1]["names"] == ["Tokyo"]
    assert df.iloc[1]["std_offset_s"] == 32400


def test_build_zone_table_empty():
    df = build_zone_table(2019, zones=[])
    assert df.empty
    assert list(df.columns) == TABLE_COLUMNS
