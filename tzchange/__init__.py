"""Yearly time changes and current local time for a tz database zone.

Usage:
    changes = get("Europe/Paris", 2019)
    # 2019-03-31 01:00 UTC +7200 CEST (dst), 2019-10-27 01:00 UTC +3600 CET
    state = worldtime(changes)
    state.local_now, state.active_abbreviation

    # Or both steps at once, for the current year
    lookup("Europe/Paris")

Dependencies:
    pip install pytz pandas python-dotenv
"""
from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, datetime, timezone
from typing import List, Optional, Sequence

from .config import Settings, load_settings
from .reader import read_zone
from .records import CurrentState, ParsedZone, TransitionRecord, TransitionType
from .resolver import as_utc, resolve
from .selector import select, select_for_zone

__all__ = [
    "CurrentState",
    "ParsedZone",
    "Settings",
    "TransitionRecord",
    "TransitionType",
    "get",
    "load_settings",
    "lookup",
    "read_zone",
    "resolve",
    "select",
    "worldtime",
]


def _utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    return as_utc(now)


def get(
    tz_name: str, year: Optional[int] = None, now: Optional[datetime] = None
) -> Optional[List[TransitionRecord]]:
    """Return the time changes of ``tz_name`` for ``year`` (default: current UTC year).

    None when the zone is unknown to the tz database.
    """
    if year is None:
        year = _utc(now).year
    if not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"Year {year} is outside {MINYEAR}..{MAXYEAR}")

    zone = read_zone(tz_name)
    if zone is None:
        return None
    return select_for_zone(zone, year)


def worldtime(
    transitions: Sequence[TransitionRecord],
    now: Optional[datetime] = None,
    validate_dst_flags: Optional[bool] = None,
) -> Optional[CurrentState]:
    """Return the zone state at ``now`` (default: the system clock).

    None unless ``transitions`` holds one or two records.
    """
    if validate_dst_flags is None:
        validate_dst_flags = load_settings().validate_dst_flags
    return resolve(transitions, _utc(now), validate_dst_flags)


def lookup(
    tz_name: str, year: Optional[int] = None, now: Optional[datetime] = None
) -> Optional[CurrentState]:
    """``get`` followed by ``worldtime`` with a shared ``now``."""
    now = _utc(now)
    transitions = get(tz_name, year, now)
    if transitions is None:
        return None
    return worldtime(transitions, now)
