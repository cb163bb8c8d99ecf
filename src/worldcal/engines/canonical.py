"""
worldcal.engines.canonical
--------------------------
Named periods of the day ("canonical hours"). Ranges with start < end are
same-day and half-open; ranges with start > end wrap past midnight and are
closed at both ends.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.definition import CalendarDefinition, CanonicalHour


def _minutes(hour: int, minute: int, minutes_in_hour: int) -> int:
    return hour * minutes_in_hour + minute


def find_canonical_hour(
    hours: Optional[Sequence[CanonicalHour]],
    hour: int,
    minute: int,
    calendar: Optional[CalendarDefinition] = None,
) -> Optional[CanonicalHour]:
    """First canonical hour covering ``hour:minute``, or None."""
    if not hours:
        return None

    mih = calendar.time.minutes_in_hour if calendar is not None else 60
    t = _minutes(hour, minute, mih)

    for ch in hours:
        start = _minutes(ch.start_hour, ch.start_minute, mih)
        end = _minutes(ch.end_hour, ch.end_minute, mih)
        if start < end:
            if start <= t < end:
                return ch
        elif start > end:
            if t >= start or t <= end:
                return ch
    return None
