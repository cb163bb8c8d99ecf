"""
worldcal.engines.weekday
------------------------
Weekday arithmetic. The running counter advances on every day except those
inside intercalary spans with ``counts_for_weekdays=False``; such days report
no weekday at all.
"""

from __future__ import annotations

from typing import Optional

from .year_table import Segment, YearTable


def weekday_count(table: YearTable, year: int, seg: Segment, offset: int) -> int:
    """Weekday-counting days from the epoch up to (not including) this day."""
    within = offset if seg.counts_for_weekdays else 0
    return table.weekday_days_before_year(year) + seg.weekday_start + within


def weekday_at(table: YearTable, year: int, seg: Segment, offset: int) -> Optional[int]:
    """Weekday index of day ``offset`` (0-based) inside ``seg`` of ``year``."""
    n = len(table.calendar.weekdays)
    if n == 0 or not seg.counts_for_weekdays:
        return None
    return (weekday_count(table, year, seg, offset) + table.calendar.year.start_day) % n


def weekday_name(table: YearTable, weekday: Optional[int], *, abbreviated: bool = False) -> Optional[str]:
    if weekday is None or not table.calendar.weekdays:
        return None
    wd = table.calendar.weekdays[weekday % len(table.calendar.weekdays)]
    if abbreviated and wd.abbreviation:
        return wd.abbreviation
    return wd.name
