"""
worldcal.engines.year_table
---------------------------
Month lengths, intercalary placement and the memoized leap-cycle tables.

A year's shape depends only on whether it is a leap year, so there are at
most two ``YearLayout`` objects per calendar. Under an interval rule the
number of leap years before Y has a closed form, so "days before year Y" is
one multiplication and "which year contains day N" a short search around the
mean-length estimate. The none and gregorian rules repeat with period 1 or
400; one cycle of cumulative day counts, anchored at the epoch year, answers
both queries with a divmod and a ``searchsorted``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..core.definition import CalendarDefinition, Intercalary, IntervalLeap
from ..core.log import OnceLogger
from .leap import is_leap_year, leap_period

logger = logging.getLogger(__name__)

# Year membership of spans hung on the year boundary. A span declared "after"
# the last month closes the year of that month; a span declared "before" the
# first month opens the year of that month. Dates keep ``month`` pointing at
# the attached month in both cases.
BOUNDARY_INTERCALARY_POLICY = "attached-month-year"


@dataclass(frozen=True)
class Segment:
    """A run of consecutive days inside one year: a month or an intercalary span."""
    month: int
    start: int
    length: int
    weekday_start: int
    intercalary: Optional[Intercalary] = None

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def counts_for_weekdays(self) -> bool:
        return self.intercalary is None or self.intercalary.counts_for_weekdays


@dataclass(frozen=True)
class YearLayout:
    is_leap: bool
    month_lengths: Tuple[int, ...]
    segments: Tuple[Segment, ...]
    month_segments: Tuple[int, ...]   # index into segments for month m at [m-1]
    starts: np.ndarray
    length: int
    weekday_length: int

    def month_segment(self, month: int) -> Segment:
        return self.segments[self.month_segments[month - 1]]

    def segment_at(self, offset: int) -> Segment:
        """Segment containing day offset ``0 <= offset < length``."""
        i = int(np.searchsorted(self.starts, offset, side="right")) - 1
        return self.segments[i]

    def intercalary_segments(self, month: int, position: str) -> List[Segment]:
        out = []
        for s in self.segments:
            ic = s.intercalary
            if ic is not None and s.month == month and ic.anchor.position == position:
                out.append(s)
        return out


@dataclass(frozen=True)
class _CycleTable:
    period: int
    prefix: np.ndarray          # prefix[k] = days in years epoch .. epoch+k-1
    weekday_prefix: np.ndarray  # same, counting only weekday days

    @property
    def days(self) -> int:
        return int(self.prefix[self.period])

    @property
    def weekday_days(self) -> int:
        return int(self.weekday_prefix[self.period])


class YearTable:
    """
    Engine-owned memo over one CalendarDefinition. Build a new table when the
    definition changes; nothing here is shared between calendars.
    """

    def __init__(self, calendar: CalendarDefinition, *, log: Optional[OnceLogger] = None):
        self.calendar = calendar
        self.log = log or OnceLogger(logger)
        self.epoch = calendar.year.epoch
        self._layouts: Dict[bool, YearLayout] = {}
        self._cycle: Optional[_CycleTable] = None

        lr = calendar.leap_year
        # Interval rules have two year lengths; their counts are closed-form.
        self._interval = lr if isinstance(lr, IntervalLeap) and lr.interval > 0 else None
        self._leap_month = calendar.month_index(lr.month) if lr.month else None
        if lr.month and self._leap_month is None:
            self.log.warning(
                ("leap-month-unknown", lr.month),
                "Calendar %s: leap month %r not found; leap years keep normal month lengths",
                calendar.id, lr.month,
            )

    # ---------------------------------------------------------
    # Leap years and month lengths
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return is_leap_year(self.calendar.leap_year, year)

    def _month_lengths(self, is_leap: bool) -> Tuple[int, ...]:
        lengths = [m.days for m in self.calendar.months]
        if is_leap and self._leap_month is not None:
            i = self._leap_month - 1
            adjusted = lengths[i] + self.calendar.leap_year.extra_days
            if adjusted < 1:
                self.log.warning(
                    ("leap-month-clamped", i),
                    "Calendar %s: month %r clamped to 1 day (was %d)",
                    self.calendar.id, self.calendar.months[i].name, adjusted,
                )
                adjusted = 1
            lengths[i] = adjusted
        return tuple(lengths)

    def layout(self, year: int) -> YearLayout:
        return self._layout(self.is_leap_year(year))

    def _layout(self, is_leap: bool) -> YearLayout:
        if is_leap not in self._layouts:
            self._layouts[is_leap] = self._build_layout(is_leap)
        return self._layouts[is_leap]

    def _build_layout(self, is_leap: bool) -> YearLayout:
        cal = self.calendar
        lengths = self._month_lengths(is_leap)
        segments: List[Segment] = []
        month_segments: List[int] = []
        pos = 0
        wpos = 0

        def add(month: int, length: int, ic: Optional[Intercalary] = None) -> None:
            nonlocal pos, wpos
            seg = Segment(month=month, start=pos, length=length, weekday_start=wpos, intercalary=ic)
            segments.append(seg)
            pos += length
            if seg.counts_for_weekdays:
                wpos += length

        for m, month in enumerate(cal.months, start=1):
            for ic in cal.intercalary:
                if ic.before == month.name and (is_leap or not ic.leap_year_only):
                    add(m, ic.days, ic)
            month_segments.append(len(segments))
            add(m, lengths[m - 1])
            for ic in cal.intercalary:
                if ic.after == month.name and (is_leap or not ic.leap_year_only):
                    add(m, ic.days, ic)

        return YearLayout(
            is_leap=is_leap,
            month_lengths=lengths,
            segments=tuple(segments),
            month_segments=tuple(month_segments),
            starts=np.array([s.start for s in segments], dtype=np.int64),
            length=pos,
            weekday_length=wpos,
        )

    def month_lengths(self, year: int) -> List[int]:
        return list(self.layout(year).month_lengths)

    def month_length(self, month: int, year: int) -> int:
        if not 1 <= month <= len(self.calendar.months):
            return 0
        return self.layout(year).month_lengths[month - 1]

    def year_length(self, year: int) -> int:
        return self.layout(year).length

    def intercalary_before(self, year: int, month: int) -> List[Intercalary]:
        if not 1 <= month <= len(self.calendar.months):
            return []
        return [s.intercalary for s in self.layout(year).intercalary_segments(month, "before")]

    def intercalary_after(self, year: int, month: int) -> List[Intercalary]:
        if not 1 <= month <= len(self.calendar.months):
            return []
        return [s.intercalary for s in self.layout(year).intercalary_segments(month, "after")]

    # ---------------------------------------------------------
    # Leap-cycle cumulative tables
    # ---------------------------------------------------------

    def cycle(self) -> _CycleTable:
        """Cumulative tables over one leap period; used for the none and gregorian rules."""
        if self._cycle is None:
            period = leap_period(self.calendar.leap_year)
            layouts = [self.layout(self.epoch + k) for k in range(period)]
            prefix = np.zeros(period + 1, dtype=np.int64)
            np.cumsum([lay.length for lay in layouts], out=prefix[1:])
            wprefix = np.zeros(period + 1, dtype=np.int64)
            np.cumsum([lay.weekday_length for lay in layouts], out=wprefix[1:])
            self._cycle = _CycleTable(period=period, prefix=prefix, weekday_prefix=wprefix)
            logger.debug("Calendar %s: leap cycle of %d years, %d days", self.calendar.id, period, self._cycle.days)
        return self._cycle

    def cycle_days(self) -> int:
        """Days in one full leap period."""
        if self._interval is not None:
            common, leap = self._layout(False).length, self._layout(True).length
            return (self._interval.interval - 1) * common + leap
        return self.cycle().days

    def _leaps_before(self, year: int) -> int:
        """Leap years in [epoch, year) under an interval rule; negative before the epoch."""
        rule = self._interval
        n, off = rule.interval, rule.offset
        # -((off - y) // n) counts leap years below y from a fixed origin
        return (off - self.epoch) // n - (off - year) // n

    def days_before_year(self, year: int) -> int:
        """Days from the epoch's first day to the first day of ``year`` (negative before the epoch)."""
        if self._interval is not None:
            common, leap = self._layout(False).length, self._layout(True).length
            return (year - self.epoch) * common + self._leaps_before(year) * (leap - common)
        c = self.cycle()
        q, r = divmod(year - self.epoch, c.period)
        return q * c.days + int(c.prefix[r])

    def weekday_days_before_year(self, year: int) -> int:
        if self._interval is not None:
            common, leap = self._layout(False).weekday_length, self._layout(True).weekday_length
            return (year - self.epoch) * common + self._leaps_before(year) * (leap - common)
        c = self.cycle()
        q, r = divmod(year - self.epoch, c.period)
        return q * c.weekday_days + int(c.weekday_prefix[r])

    def locate_day(self, day_index: int) -> Tuple[int, int]:
        """Inverse of ``days_before_year``: (year, 0-based day offset within that year)."""
        day_index = int(day_index)
        if self._interval is not None:
            # The mean-length estimate is off by less than one leap year's
            # extra days.
            year = self.epoch + (day_index * self._interval.interval) // self.cycle_days()
            while self.days_before_year(year) > day_index:
                year -= 1
            while self.days_before_year(year + 1) <= day_index:
                year += 1
            return year, day_index - self.days_before_year(year)
        c = self.cycle()
        q, rem = divmod(day_index, c.days)
        r = int(np.searchsorted(c.prefix, rem, side="right")) - 1
        return self.epoch + q * c.period + r, rem - int(c.prefix[r])
