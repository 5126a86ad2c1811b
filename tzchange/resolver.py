"""Derive local time, active offset and DST window from a year's transitions."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from .records import CurrentState, TransitionRecord

logger = logging.getLogger(__name__)


def as_utc(now: datetime) -> datetime:
    """Naive instants are taken as UTC; aware ones are converted to it."""
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def _fixed_offset(seconds: int) -> timezone:
    return timezone(timedelta(seconds=seconds))


def _single(record: TransitionRecord, now: datetime) -> CurrentState:
    utc_offset = _fixed_offset(record.utc_offset_seconds)
    return CurrentState(
        utc_now=now,
        local_now=now.astimezone(utc_offset),
        dst_window_start=None,
        dst_window_end=None,
        standard_offset_seconds=record.utc_offset_seconds,
        dst_offset_seconds=0,
        active_offset=utc_offset,
        active_abbreviation=record.abbreviation,
    )


def _pair(
    dst_record: TransitionRecord,
    std_record: TransitionRecord,
    dst_active: bool,
    now: datetime,
) -> CurrentState:
    active = dst_record if dst_active else std_record
    utc_offset = _fixed_offset(active.utc_offset_seconds)
    return CurrentState(
        utc_now=now,
        local_now=now.astimezone(utc_offset),
        dst_window_start=dst_record.time,
        dst_window_end=std_record.time,
        standard_offset_seconds=std_record.utc_offset_seconds,
        dst_offset_seconds=dst_record.utc_offset_seconds,
        active_offset=utc_offset,
        active_abbreviation=active.abbreviation,
    )


def resolve(
    transitions: Sequence[TransitionRecord],
    now: datetime,
    validate_dst_flags: bool = False,
) -> Optional[CurrentState]:
    """Return the zone state at ``now`` or None for unsupported transition counts.

    With two transitions the earlier one is taken as the DST start and the
    later one as the DST end, whatever their is_dst flags say. Instants equal
    to either transition are standard time. ``validate_dst_flags`` switches to
    reading the flags instead, which handles years where DST spans New Year.
    """
    now = as_utc(now)
    if len(transitions) == 1:
        return _single(transitions[0], now)

    if len(transitions) != 2:
        logger.debug("Unsupported transition count: %d", len(transitions))
        return None

    t0, t1 = transitions
    if validate_dst_flags and not t0.is_dst and t1.is_dst:
        # Standard time runs t0..t1, DST wraps around the year boundary
        dst_active = now < t0.time or now > t1.time
        return _pair(t1, t0, dst_active, now)
    if validate_dst_flags and t0.is_dst == t1.is_dst:
        logger.debug("Both transitions have is_dst=%s, using positional order", t0.is_dst)

    dst_active = t0.time < now < t1.time
    return _pair(t0, t1, dst_active, now)
