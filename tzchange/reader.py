"""Timezone database reader backed by pytz's compiled tz database.

pytz keeps, for every zone with history, a list of naive UTC transition
times and a parallel list of ``(utcoffset, dst, tzname)`` tuples. This module
folds that back into the TZif-like shape the selector works on: transition
instants, a parallel type-index array, a type table and an abbreviation pool.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

import pytz  # pip install pytz

from .records import ParsedZone, TransitionType

logger = logging.getLogger(__name__)


def _intern_type(
    utc_offset_seconds: int,
    is_dst: bool,
    abbreviation: str,
    types: Dict[int, TransitionType],
    abbreviations: Dict[int, str],
    seen: Dict[Tuple[int, bool, str], int],
) -> int:
    """Return the type index for an (offset, dst, abbr) triple, adding it if new."""
    key = (utc_offset_seconds, is_dst, abbreviation)
    if key in seen:
        return seen[key]

    abbrev_index = next(
        (i for i, abbr in abbreviations.items() if abbr == abbreviation), None
    )
    if abbrev_index is None:
        abbrev_index = len(abbreviations)
        abbreviations[abbrev_index] = abbreviation

    type_index = len(types)
    types[type_index] = TransitionType(utc_offset_seconds, is_dst, abbrev_index)
    seen[key] = type_index
    return type_index


def read_zone(tz_name: str) -> Optional[ParsedZone]:
    """Return the parsed transition table for ``tz_name`` or None if unknown."""
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        logger.warning("Timezone '%s' not found in the tz database", tz_name)
        return None

    types: Dict[int, TransitionType] = {}
    abbreviations: Dict[int, str] = {}
    seen: Dict[Tuple[int, bool, str], int] = {}

    utc_times = getattr(tz, "_utc_transition_times", None)
    if not utc_times:
        # Fixed-offset zone: no transitions, a single local-time type
        offset = tz.utcoffset(None) or timedelta(0)
        _intern_type(
            int(offset.total_seconds()), False, tz.tzname(None) or "",
            types, abbreviations, seen,
        )
        return ParsedZone(tz_name, (), (), types, abbreviations)

    transition_times: List[datetime] = []
    type_indices: List[int] = []
    for naive_utc, (utcoffset, dst, tzname) in zip(utc_times, tz._transition_info):
        type_index = _intern_type(
            int(utcoffset.total_seconds()), dst != timedelta(0), tzname,
            types, abbreviations, seen,
        )
        # pytz prepends datetime.min; its info is the zone's initial type 0
        if naive_utc == datetime.min:
            continue
        transition_times.append(naive_utc.replace(tzinfo=timezone.utc))
        type_indices.append(type_index)

    logger.debug(
        "Read %d transitions and %d types for %s",
        len(transition_times), len(types), tz_name,
    )
    return ParsedZone(
        tz_name, tuple(transition_times), tuple(type_indices), types, abbreviations
    )
