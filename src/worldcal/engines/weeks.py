from __future__ import annotations

from typing import Optional

from ..core.definition import WeekConfig, WeekInfo
from ..core.time import ordinal

DEFAULT_DAYS_PER_WEEK = 7


def days_per_week(cfg: WeekConfig, weekday_count: int) -> int:
    if cfg.days_per_week:
        return cfg.days_per_week
    return weekday_count or DEFAULT_DAYS_PER_WEEK


def week_of_month(cfg: Optional[WeekConfig], weekday_count: int, day: int, month_length: int) -> Optional[int]:
    """
    1-based week bucket of ``day`` in a month of ``month_length`` days, or None
    when the calendar has no month-based weeks or the day is an unnumbered
    remainder day.
    """
    if cfg is None or cfg.type != "month-based":
        return None

    dpw = days_per_week(cfg, weekday_count)
    raw_week = (day - 1) // dpw + 1

    if month_length % dpw == 0:
        return raw_week

    expected = cfg.per_month if cfg.per_month is not None else month_length // dpw
    if cfg.remainder_handling == "extend-last" and raw_week > expected:
        return max(expected, 1)
    if cfg.remainder_handling == "none" and raw_week > expected:
        return None
    return raw_week


def week_info(cfg: Optional[WeekConfig], week_number: Optional[int]) -> Optional[WeekInfo]:
    if cfg is None or week_number is None:
        return None

    if 0 < week_number <= len(cfg.names):
        return cfg.names[week_number - 1]

    if cfg.naming_pattern == "ordinal":
        return WeekInfo(name=f"{ordinal(week_number)} Week", abbreviation=str(week_number))
    if cfg.naming_pattern == "numeric":
        return WeekInfo(name=f"Week {week_number}", abbreviation=str(week_number))
    return None
