"""
worldcal.engines.calendar
-------------------------
The orchestrator. Binds the year table, weekday counter, week grouper,
canonical hours, moons and seasons to one CalendarDefinition, and maps
between world time (integer seconds) and CalendarDate.

Internal coordinates:
    day index  -- whole days since the first day of the epoch year (may be negative)
    offset     -- 0-based day within a year, or within one segment of it
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from ..core.definition import CalendarDefinition, CanonicalHour, Intercalary, WeekInfo
from ..core.log import OnceLogger
from ..core.time import normalize_month, split_seconds, time_to_seconds
from ..core.types import CalendarDate, MoonPhaseInfo, SunTimes, TimeOfDay
from . import seasons as _seasons
from .canonical import find_canonical_hour
from .leap import leap_period
from .moons import moon_phase
from .weekday import weekday_at
from .weeks import week_info, week_of_month
from .year_table import BOUNDARY_INTERCALARY_POLICY, Segment, YearLayout, YearTable

logger = logging.getLogger(__name__)


class CalendarEngine:
    """
    Pure date arithmetic over one calendar. The only state is the memo held
    by ``self.table``, rebuilt by ``update_calendar``.
    """

    boundary_policy = BOUNDARY_INTERCALARY_POLICY

    def __init__(self, calendar: CalendarDefinition):
        self.log = OnceLogger(logger)
        self.calendar = calendar
        self.table = YearTable(calendar, log=self.log)

    def update_calendar(self, calendar: CalendarDefinition) -> None:
        self.calendar = calendar
        self.log.reset()
        self.table = YearTable(calendar, log=self.log)

    def get_calendar(self) -> CalendarDefinition:
        return self.calendar

    # ---------------------------------------------------------
    # Year / month tables
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return self.table.is_leap_year(year)

    def get_month_length(self, month: int, year: int) -> int:
        return self.table.month_length(month, year)

    def get_month_lengths(self, year: int) -> List[int]:
        return self.table.month_lengths(year)

    def get_year_length(self, year: int) -> int:
        return self.table.year_length(year)

    def get_intercalary_days_before_month(self, year: int, month: int) -> List[Intercalary]:
        return self.table.intercalary_before(year, month)

    def get_intercalary_days_after_month(self, year: int, month: int) -> List[Intercalary]:
        return self.table.intercalary_after(year, month)

    # ---------------------------------------------------------
    # Resolving a date to (year, segment, offset)
    # ---------------------------------------------------------

    def _intercalary_segment(self, layout: YearLayout, date: CalendarDate) -> Optional[Segment]:
        found = None
        for seg in layout.segments:
            if seg.intercalary is not None and seg.intercalary.name == date.intercalary:
                if seg.month == date.month:
                    return seg
                if found is None:
                    found = seg
        return found

    def _position(self, date: CalendarDate) -> Tuple[YearLayout, Segment, int]:
        """
        Locate ``date`` inside its year. Dates that do not exist in the
        calendar resolve to the first day of their year.
        """
        layout = self.table.layout(date.year)
        n_months = len(self.calendar.months)

        if date.intercalary is not None:
            seg = self._intercalary_segment(layout, date)
            if seg is None:
                self.log.warning(
                    ("intercalary-missing", date.intercalary, layout.is_leap),
                    "Calendar %s: intercalary %r does not occur in year %d; using start of year",
                    self.calendar.id, date.intercalary, date.year,
                )
                return layout, layout.segments[0], 0
        elif not 1 <= date.month <= n_months:
            self.log.warning(
                ("month-out-of-range", date.month),
                "Calendar %s: month %d outside 1..%d; using start of year",
                self.calendar.id, date.month, n_months,
            )
            return layout, layout.segments[0], 0
        else:
            seg = layout.month_segment(date.month)

        if not 1 <= date.day <= seg.length:
            self.log.warning(
                ("day-out-of-range", date.month, date.intercalary),
                "Calendar %s: day %d outside 1..%d for month %d%s; using start of year",
                self.calendar.id, date.day, seg.length, date.month,
                f" ({date.intercalary})" if date.intercalary else "",
            )
            return layout, layout.segments[0], 0
        return layout, seg, date.day - 1

    def date_to_days(self, date: CalendarDate) -> int:
        """Day index of ``date`` counted from the first day of the epoch year."""
        _, seg, offset = self._position(date)
        return self.table.days_before_year(date.year) + seg.start + offset

    def days_to_date(self, day_index: int, time: Optional[TimeOfDay] = None) -> CalendarDate:
        year, offset = self.table.locate_day(day_index)
        seg = self.table.layout(year).segment_at(offset)
        within = offset - seg.start
        return CalendarDate(
            year=year,
            month=seg.month,
            day=within + 1,
            weekday=weekday_at(self.table, year, seg, within),
            intercalary=seg.intercalary.name if seg.intercalary is not None else None,
            time=time,
        )

    # ---------------------------------------------------------
    # World time
    # ---------------------------------------------------------

    def _interpretation_offset(self) -> int:
        """
        Seconds added to world time before conversion. Non-zero only for
        real-time-based calendars, where world time 0 is the start of
        ``current_year`` rather than ``epoch_year``.
        """
        wt = self.calendar.world_time
        if wt is None or wt.interpretation != "real-time-based":
            return 0
        days = self.table.days_before_year(wt.current_year) - self.table.days_before_year(wt.epoch_year)
        return days * self.calendar.time.seconds_per_day

    def world_time_to_date(self, world_time: float) -> CalendarDate:
        total = math.floor(world_time) + self._interpretation_offset()
        days, tod = split_seconds(total, self.calendar.time)
        return self.days_to_date(days, tod)

    def date_to_world_time(self, date: CalendarDate) -> int:
        spd = self.calendar.time.seconds_per_day
        total = self.date_to_days(date) * spd + time_to_seconds(date.time, self.calendar.time)
        return total - self._interpretation_offset()

    # ---------------------------------------------------------
    # Weekdays and date construction
    # ---------------------------------------------------------

    def calculate_weekday(self, year: int, month: int, day: int) -> Optional[int]:
        _, seg, offset = self._position(CalendarDate(year, month, day))
        return weekday_at(self.table, year, seg, offset)

    def weekday_for(self, date: CalendarDate) -> Optional[int]:
        _, seg, offset = self._position(date)
        return weekday_at(self.table, date.year, seg, offset)

    def make_date(
        self,
        year: int,
        month: int,
        day: int,
        *,
        intercalary: Optional[str] = None,
        time: Optional[TimeOfDay] = None,
    ) -> CalendarDate:
        """Build a CalendarDate with its weekday filled in."""
        d = CalendarDate(year, month, day, intercalary=intercalary, time=time)
        return d.replace(weekday=self.weekday_for(d))

    def day_of_year(self, date: CalendarDate) -> int:
        """1-based position in the year, intercalary days included."""
        _, seg, offset = self._position(date)
        return seg.start + offset + 1

    def days_between(self, a: CalendarDate, b: CalendarDate) -> int:
        return self.date_to_days(b) - self.date_to_days(a)

    def compare_dates(self, a: CalendarDate, b: CalendarDate) -> int:
        ka = (self.date_to_days(a), time_to_seconds(a.time, self.calendar.time))
        kb = (self.date_to_days(b), time_to_seconds(b.time, self.calendar.time))
        return (ka > kb) - (ka < kb)

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def _regular_equivalent(self, date: CalendarDate) -> Tuple[int, int]:
        """
        (month, day) of a regular day standing in for ``date``: an intercalary
        day maps to the last day of the month it follows or the first day of
        the month it precedes.
        """
        if date.intercalary is None:
            return date.month, date.day
        ic = self.calendar.find_intercalary(date.intercalary)
        month = date.month
        if ic is not None:
            month = self.calendar.month_index(ic.anchor.month) or month
            if ic.anchor.position == "after":
                return month, self.get_month_length(month, date.year)
        return month, 1

    def add_days(self, date: CalendarDate, days: int) -> CalendarDate:
        return self.days_to_date(self.date_to_days(date) + days, date.time)

    def add_seconds(self, date: CalendarDate, seconds: int) -> CalendarDate:
        spd = self.calendar.time.seconds_per_day
        total = self.date_to_days(date) * spd + time_to_seconds(date.time, self.calendar.time) + seconds
        days, tod = split_seconds(total, self.calendar.time)
        return self.days_to_date(days, tod)

    def add_minutes(self, date: CalendarDate, minutes: int) -> CalendarDate:
        return self.add_seconds(date, minutes * self.calendar.time.seconds_in_minute)

    def add_hours(self, date: CalendarDate, hours: int) -> CalendarDate:
        return self.add_seconds(date, hours * self.calendar.time.seconds_per_hour)

    def add_months(self, date: CalendarDate, months: int) -> CalendarDate:
        base_month, base_day = self._regular_equivalent(date)
        month, year = normalize_month(base_month + months, date.year, len(self.calendar.months))
        day = max(1, min(base_day, self.get_month_length(month, year)))
        return self.make_date(year, month, day, time=date.time)

    def add_years(self, date: CalendarDate, years: int) -> CalendarDate:
        year = date.year + years

        if date.intercalary is not None:
            seg = self._intercalary_segment(self.table.layout(year), date)
            if seg is not None:
                day = min(date.day, seg.length)
                return self.make_date(year, seg.month, day, intercalary=date.intercalary, time=date.time)
            month, day = self._regular_equivalent(date.replace(year=year))
        else:
            month, day = date.month, date.day

        month = min(max(month, 1), len(self.calendar.months))
        day = max(1, min(day, self.get_month_length(month, year)))
        return self.make_date(year, month, day, time=date.time)

    # ---------------------------------------------------------
    # Weeks, canonical hours
    # ---------------------------------------------------------

    def get_week_of_month(self, date: CalendarDate) -> Optional[int]:
        if date.intercalary is not None or not 1 <= date.month <= len(self.calendar.months):
            return None
        return week_of_month(
            self.calendar.weeks,
            len(self.calendar.weekdays),
            date.day,
            self.get_month_length(date.month, date.year),
        )

    def get_week_info(self, date: CalendarDate) -> Optional[WeekInfo]:
        return week_info(self.calendar.weeks, self.get_week_of_month(date))

    def canonical_hour_for(self, date: CalendarDate) -> Optional[CanonicalHour]:
        t = date.time
        return find_canonical_hour(self.calendar.canonical_hours, t.hour, t.minute, self.calendar)

    # ---------------------------------------------------------
    # Moons and seasons
    # ---------------------------------------------------------

    def get_moon_phase_info(self, date: CalendarDate, moon_name: Optional[str] = None) -> List[MoonPhaseInfo]:
        out = []
        for moon in self.calendar.moons:
            if moon_name is not None and moon.name != moon_name:
                continue
            ref = CalendarDate(*moon.first_new_moon)
            out.append(moon_phase(moon, self.date_to_days(date) - self.date_to_days(ref)))
        return out

    def get_moon_phase_at_world_time(self, world_time: float, moon_name: Optional[str] = None) -> List[MoonPhaseInfo]:
        return self.get_moon_phase_info(self.world_time_to_date(world_time), moon_name)

    def get_season(self, date: CalendarDate):
        month, day = self._regular_equivalent(date)
        i = _seasons.season_index(self.calendar.seasons, month, day, self.calendar.months)
        return None if i is None else self.calendar.seasons[i]

    def get_sun_times(self, date: CalendarDate) -> SunTimes:
        cal = self.calendar
        month, day = self._regular_equivalent(date)
        i = _seasons.season_index(cal.seasons, month, day, cal.months)
        if i is None:
            return _seasons.default_sun_times(cal.time)

        current = cal.seasons[i]
        nxt = cal.seasons[(i + 1) % len(cal.seasons)]
        start = self.day_of_year(CalendarDate(date.year, current.start_month, current.start_day))
        next_start = self.day_of_year(CalendarDate(date.year, nxt.start_month, nxt.start_day))
        progress = _seasons.season_progress(start, next_start, self.day_of_year(date), self.get_year_length(date.year))
        return _seasons.interpolate(
            _seasons.season_sun_times(current, cal.time),
            _seasons.season_sun_times(nxt, cal.time),
            progress,
        )

    # ---------------------------------------------------------
    # Introspection (CLI / diagnostics)
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        cal = self.calendar
        return {
            "id": cal.id,
            "name": cal.name,
            "epoch": cal.year.epoch,
            "months": len(cal.months),
            "weekdays": len(cal.weekdays),
            "intercalary": [ic.name for ic in cal.intercalary],
            "leap_rule": cal.leap_year.kind,
            "leap_period": leap_period(cal.leap_year),
            "cycle_days": self.table.cycle_days(),
            "seconds_per_day": cal.time.seconds_per_day,
            "boundary_policy": self.boundary_policy,
        }

    def explain(self, world_time: float) -> Dict[str, Any]:
        d = self.world_time_to_date(world_time)
        layout, seg, offset = self._position(d)
        return {
            "world_time": world_time,
            "date": d.to_dict(),
            "day_index": self.date_to_days(d),
            "day_of_year": seg.start + offset + 1,
            "year_length": layout.length,
            "is_leap_year": layout.is_leap,
            "segment": {
                "month": seg.month,
                "intercalary": seg.intercalary.name if seg.intercalary else None,
                "start": seg.start,
                "end": seg.end,
                "length": seg.length,
            },
            "week_of_month": self.get_week_of_month(d),
        }
