from __future__ import annotations
from typing import Optional, Tuple

from .definition import TimeConfig
from .types import TimeOfDay


def time_to_seconds(t: Optional[TimeOfDay], cfg: TimeConfig) -> int:
    """Seconds elapsed since the start of the day."""
    if t is None:
        return 0
    return t.hour * cfg.seconds_per_hour + t.minute * cfg.seconds_in_minute + t.second

def split_seconds(total: int, cfg: TimeConfig) -> Tuple[int, TimeOfDay]:
    """Floor-split absolute seconds into (day index, time of day); works for negatives."""
    days, rem = divmod(int(total), cfg.seconds_per_day)
    hour, rem = divmod(rem, cfg.seconds_per_hour)
    minute, second = divmod(rem, cfg.seconds_in_minute)
    return days, TimeOfDay(hour, minute, second)

def normalize_month(month: int, year: int, months_in_year: int) -> Tuple[int, int]:
    """Wrap a possibly out-of-range 1-based month into (month, year)."""
    dy, m0 = divmod(month - 1, months_in_year)
    return m0 + 1, year + dy

def ordinal(n: int) -> str:
    """1 -> '1st', 11 -> '11th', 22 -> '22nd', 113 -> '113th'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"

def hhmm_to_hours(s: str, minutes_in_hour: int = 60) -> float:
    """'06:30' -> 6.5 (with 60 minutes per hour)."""
    parts = s.split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {s!r}. Expected HH:MM")
    h, m = int(parts[0]), int(parts[1])
    return h + m / minutes_in_hour

def hours_to_hhmm(hours: float, minutes_in_hour: int = 60) -> str:
    h = int(hours // 1)
    m = round((hours - h) * minutes_in_hour)
    if m == minutes_in_hour:
        h, m = h + 1, 0
    return f"{h:02d}:{m:02d}"
