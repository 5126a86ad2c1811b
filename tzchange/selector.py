"""Pick the transitions that matter for one calendar year of a zone."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import reduce
from typing import List, Mapping, Sequence, Tuple

from .records import ParsedZone, TransitionRecord, TransitionType

logger = logging.getLogger(__name__)


def year_bounds(year: int) -> Tuple[datetime, datetime]:
    """Return (year_start, year_end) in UTC.

    year_end is December 31st 00:00:00, not January 1st of the next year, so a
    transition later on December 31st is never reported as in-year.
    """
    year_start = datetime(year, 1, 1, tzinfo=timezone.utc)
    year_end = datetime(year, 12, 31, tzinfo=timezone.utc)
    return year_start, year_end


def _record(
    time: datetime,
    type_index: int,
    types: Mapping[int, TransitionType],
    abbrevs: Mapping[int, str],
) -> TransitionRecord:
    ttype = types[type_index]
    return TransitionRecord(
        time=time,
        utc_offset_seconds=ttype.utc_offset_seconds,
        is_dst=ttype.is_dst,
        abbreviation=abbrevs[ttype.abbrev_index],
    )


def select(
    transitions: Sequence[Tuple[datetime, int]],
    types: Mapping[int, TransitionType],
    abbrevs: Mapping[int, str],
    year: int,
) -> List[TransitionRecord]:
    """Return the transitions strictly inside ``year``, oldest first.

    When the year has none, a single record for the latest transition before
    the year started is returned instead (the rule in force on January 1st).
    If nothing precedes the year, the first transition of the table stands in.
    """
    year_start, year_end = year_bounds(year)

    in_year = [i for i, (t, _) in enumerate(transitions) if year_start < t < year_end]
    if in_year:
        return [_record(transitions[i][0], transitions[i][1], types, abbrevs) for i in in_year]

    if not transitions:
        # Fixed-offset zone: type 0 is in force for the whole year
        logger.debug("Empty transition table, using type 0 for %d", year)
        return [_record(year_start, 0, types, abbrevs)]

    nearest_before = reduce(
        lambda last, item: item[0] if item[1][0] < year_start else last,
        enumerate(transitions),
        0,
    )
    logger.debug("No transition in %d, falling back to index %d", year, nearest_before)
    time, type_index = transitions[nearest_before]
    return [_record(time, type_index, types, abbrevs)]


def select_for_zone(zone: ParsedZone, year: int) -> List[TransitionRecord]:
    return select(zone.transitions, zone.types, zone.abbreviations, year)
