"""Group every tz database zone by its DST rule for a given year."""
from __future__ import annotations

import logging
import zoneinfo  # stdlib >=3.9
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd  # pip install pandas

from . import get
from .config import load_settings

logger = logging.getLogger(__name__)

# Region-level names that don't identify a city
GENERIC_NAMES_TO_EXCLUDE = {
    "Samoa", "Hawaii", "Aleutian", "Alaska", "Pacific", "Arizona", "Yukon",
    "Mountain", "General", "Saskatchewan", "Central", "Knox IN", "EasterIsland",
    "Acre", "Jamaica", "Michigan", "Eastern", "East-Indiana", "Atlantic",
    "Continental", "Newfoundland", "East", "Bahia", "Noronha", "South Georgia",
    "Canary", "Faeroe", "Faroe", "Guernsey", "Isle of Man", "Jersey",
    "Madeira", "Jan Mayen", "West", "North", "South", "ACT", "NSW",
    "Tasmania", "Victoria", "Queensland", "Yap", "South Pole", "Kanton",
}

TABLE_COLUMNS = ["std_offset_s", "dst_offset_s", "start_utc", "end_utc", "names"]


def find_dst_transitions(tz_name: str, year: int) -> Tuple[int, int, int, int]:
    """Return (std_offset_sec, dst_offset_sec, dst_start_utc_ts, dst_end_utc_ts).

    Start/end are the last transition into/out of DST inside the year, 0 if
    there was none. If the zone does not observe DST, std == dst and both
    timestamps are 0. Unknown zones give (0, 0, 0, 0).
    """
    return _find_dst_transitions(
        tz_name, year, load_settings().offset_diff_threshold_seconds
    )


@lru_cache(maxsize=None)
def _find_dst_transitions(
    tz_name: str, year: int, threshold: int
) -> Tuple[int, int, int, int]:
    changes = get(tz_name, year)
    if changes is None:
        return 0, 0, 0, 0

    std_offset_sec: Optional[int] = None
    dst_offset_sec: Optional[int] = None
    start_ts = 0
    end_ts = 0

    for change in changes:
        ts = int(change.time.timestamp())
        in_year = change.time.year == year
        if change.is_dst:
            dst_offset_sec = change.utc_offset_seconds
            if in_year:
                start_ts = ts
        else:
            std_offset_sec = change.utc_offset_seconds
            if in_year:
                end_ts = ts

    # A zone stuck in DST all year still needs a standard offset
    if std_offset_sec is None:
        std_offset_sec = changes[-1].utc_offset_seconds
    if dst_offset_sec is None:
        dst_offset_sec = std_offset_sec

    if abs(std_offset_sec - dst_offset_sec) < threshold:
        start_ts = 0
        end_ts = 0
        dst_offset_sec = std_offset_sec

    return std_offset_sec, dst_offset_sec, start_ts, end_ts


def candidate_zones() -> List[str]:
    """City-level zone names from the system tz database."""
    zones = []
    for tz_name in zoneinfo.available_timezones():
        if tz_name.startswith("Etc/") or "/" not in tz_name:
            continue
        if tz_name in ["Factory", "factory"] or tz_name.lower().startswith(("right/", "posix/")):
            continue
        zones.append(tz_name)
    return sorted(zones)


def city_name(tz_name: str) -> str:
    return tz_name.split("/")[-1].replace("_", " ")


def build_zone_table(year: int, zones: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """One row per distinct (std, dst, start, end) rule with the cities sharing it."""
    if zones is None:
        zones = candidate_zones()

    generic = {name.lower() for name in GENERIC_NAMES_TO_EXCLUDE}
    buckets: Dict[Tuple[int, int, int, int], List[str]] = {}
    for tz_name in zones:
        name = city_name(tz_name)
        if not name or not name[0].isupper() or name.lower() in generic:
            continue
        key = find_dst_transitions(tz_name, year)
        if key == (0, 0, 0, 0) and get(tz_name, year) is None:
            logger.warning("Skipping %s: not in the tz database", tz_name)
            continue
        names = buckets.setdefault(key, [])
        if name not in names:
            names.append(name)

    rows = [(*key, sorted(names)) for key, names in buckets.items()]
    df = pd.DataFrame(rows, columns=TABLE_COLUMNS)
    df = df.sort_values(["std_offset_s", "dst_offset_s", "start_utc", "end_utc"], ignore_index=True)
    logger.info("Generated %d unique offset/DST rule combinations for %d", len(df), year)
    return df
