from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .core.definition import CalendarDefinition, CanonicalHour, Intercalary, WeekInfo
from .core.engine import EngineRegistry
from .core.errors import CalendarLoadError
from .core.types import CalendarDate, MoonPhaseInfo, TimeOfDay
from .engines.calendar import CalendarEngine
from .engines.factory import make_engine, make_preset
from .engines.specs import ALL_SPECS
from .engines.weekday import weekday_name


# ============================================================
# Loading calendars
# ============================================================

def load_calendar(data: Mapping[str, Any]) -> CalendarEngine:
    return make_engine(data)

def load_calendar_file(path: str | Path) -> CalendarEngine:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CalendarLoadError(f"Cannot read calendar file {p}: {e}") from e
    if not isinstance(data, dict):
        raise CalendarLoadError(f"Calendar file {p} must contain a JSON object")
    return make_engine(data)

def preset(name: str) -> CalendarEngine:
    return make_preset(name)

def list_presets() -> List[str]:
    return sorted(ALL_SPECS)

def build_registry(names: Optional[Iterable[str]] = None) -> EngineRegistry:
    """A fresh registry holding the named presets (all of them by default)."""
    reg = EngineRegistry()
    for name in (list_presets() if names is None else names):
        reg.register(name, make_preset(name))
    return reg


# ============================================================
# Conversion
# ============================================================

def world_time_to_date(engine: CalendarEngine, world_time: float) -> CalendarDate:
    return engine.world_time_to_date(world_time)

def date_to_world_time(engine: CalendarEngine, date: CalendarDate) -> int:
    return engine.date_to_world_time(date)

def make_date(
    engine: CalendarEngine,
    year: int,
    month: int,
    day: int,
    *,
    intercalary: Optional[str] = None,
    time: Optional[TimeOfDay] = None,
) -> CalendarDate:
    return engine.make_date(year, month, day, intercalary=intercalary, time=time)


# ============================================================
# Calendar structure
# ============================================================

def get_calendar(engine: CalendarEngine) -> CalendarDefinition:
    return engine.get_calendar()

def is_leap_year(engine: CalendarEngine, year: int) -> bool:
    return engine.is_leap_year(year)

def get_month_length(engine: CalendarEngine, month: int, year: int) -> int:
    return engine.get_month_length(month, year)

def get_month_lengths(engine: CalendarEngine, year: int) -> List[int]:
    return engine.get_month_lengths(year)

def get_year_length(engine: CalendarEngine, year: int) -> int:
    return engine.get_year_length(year)

def get_intercalary_days_before_month(engine: CalendarEngine, year: int, month: int) -> List[Intercalary]:
    return engine.get_intercalary_days_before_month(year, month)

def get_intercalary_days_after_month(engine: CalendarEngine, year: int, month: int) -> List[Intercalary]:
    return engine.get_intercalary_days_after_month(year, month)

def calculate_weekday(engine: CalendarEngine, year: int, month: int, day: int) -> Optional[int]:
    return engine.calculate_weekday(year, month, day)


# ============================================================
# Arithmetic
# ============================================================

def add_months(engine: CalendarEngine, date: CalendarDate, months: int) -> CalendarDate:
    return engine.add_months(date, months)

def add_years(engine: CalendarEngine, date: CalendarDate, years: int) -> CalendarDate:
    return engine.add_years(date, years)

def add_days(engine: CalendarEngine, date: CalendarDate, days: int) -> CalendarDate:
    return engine.add_days(date, days)


# ============================================================
# Weeks, hours, moons
# ============================================================

def get_week_of_month(engine: CalendarEngine, date: CalendarDate) -> Optional[int]:
    return engine.get_week_of_month(date)

def get_week_info(engine: CalendarEngine, date: CalendarDate) -> Optional[WeekInfo]:
    return engine.get_week_info(date)

def find_canonical_hour(engine: CalendarEngine, date: CalendarDate) -> Optional[CanonicalHour]:
    return engine.canonical_hour_for(date)

def get_moon_phase_info(
    engine: CalendarEngine, date: CalendarDate, moon_name: Optional[str] = None
) -> List[MoonPhaseInfo]:
    return engine.get_moon_phase_info(date, moon_name)


# ============================================================
# Display helpers
# ============================================================

def date_label(engine: CalendarEngine, date: CalendarDate) -> str:
    """
    Plain one-line label, e.g. ``Monday, 1 January 2024 00:00:00`` or
    ``Midwinter 1491 DR 00:00:00``. Not a template renderer.
    """
    cal = engine.get_calendar()
    year = f"{cal.year.prefix}{date.year}{cal.year.suffix}"
    if date.intercalary is not None:
        head = date.intercalary if date.day == 1 else f"{date.intercalary} (day {date.day})"
        out = f"{head} {year}"
    else:
        month = cal.months[date.month - 1].name if 1 <= date.month <= len(cal.months) else str(date.month)
        out = f"{date.day} {month} {year}"
    wd = weekday_name(engine.table, date.weekday)
    if wd is not None:
        out = f"{wd}, {out}"
    out += f" {date.time.hour:02d}:{date.time.minute:02d}:{date.time.second:02d}"
    return out

def engine_info(engine: CalendarEngine) -> Dict[str, Any]:
    return engine.info()

def explain(engine: CalendarEngine, world_time: float) -> Dict[str, Any]:
    return engine.explain(world_time)
