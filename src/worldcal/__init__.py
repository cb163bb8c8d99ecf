"""worldcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
No registry is created on import; build one with ``build_registry`` and pass it around.
"""

from .api import (
    load_calendar,
    load_calendar_file,
    preset,
    list_presets,
    build_registry,
    world_time_to_date,
    date_to_world_time,
    make_date,
    get_calendar,
    is_leap_year,
    get_month_length,
    get_month_lengths,
    get_year_length,
    get_intercalary_days_before_month,
    get_intercalary_days_after_month,
    calculate_weekday,
    add_months,
    add_years,
    add_days,
    get_week_of_month,
    get_week_info,
    find_canonical_hour,
    get_moon_phase_info,
    date_label,
    engine_info,
    explain,
)
from .core.definition import CalendarDefinition
from .core.engine import EngineRegistry
from .core.errors import CalendarLoadError, UnknownCalendarError, WorldcalError
from .core.types import CalendarDate, TimeOfDay
from .engines.calendar import CalendarEngine
from .engines.factory import make_engine

__all__ = [
    "load_calendar",
    "load_calendar_file",
    "preset",
    "list_presets",
    "build_registry",
    "world_time_to_date",
    "date_to_world_time",
    "make_date",
    "get_calendar",
    "is_leap_year",
    "get_month_length",
    "get_month_lengths",
    "get_year_length",
    "get_intercalary_days_before_month",
    "get_intercalary_days_after_month",
    "calculate_weekday",
    "add_months",
    "add_years",
    "add_days",
    "get_week_of_month",
    "get_week_info",
    "find_canonical_hour",
    "get_moon_phase_info",
    "date_label",
    "engine_info",
    "explain",
    "make_engine",
    "CalendarDate",
    "TimeOfDay",
    "CalendarDefinition",
    "CalendarEngine",
    "EngineRegistry",
    "WorldcalError",
    "UnknownCalendarError",
    "CalendarLoadError",
]
