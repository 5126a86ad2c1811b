"""Data shapes shared by the reader, the selector and the resolver."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class TransitionType:
    """One local-time type of a zone (a TZif ttinfo record)."""

    utc_offset_seconds: int
    is_dst: bool
    abbrev_index: int


@dataclass(frozen=True)
class ParsedZone:
    """What the database reader hands to the selector.

    ``transition_times`` is ascending; ``type_indices`` is parallel to it.
    """

    name: str
    transition_times: Tuple[datetime, ...]
    type_indices: Tuple[int, ...]
    types: Dict[int, TransitionType]
    abbreviations: Dict[int, str]

    @property
    def transitions(self) -> List[Tuple[datetime, int]]:
        return list(zip(self.transition_times, self.type_indices))


@dataclass(frozen=True)
class TransitionRecord:
    time: datetime
    utc_offset_seconds: int
    is_dst: bool
    abbreviation: str


@dataclass(frozen=True)
class CurrentState:
    """Local time and DST characteristics of a zone at ``utc_now``."""

    utc_now: datetime
    local_now: datetime
    dst_window_start: Optional[datetime]
    dst_window_end: Optional[datetime]
    standard_offset_seconds: int
    dst_offset_seconds: int
    active_offset: timezone
    active_abbreviation: str
