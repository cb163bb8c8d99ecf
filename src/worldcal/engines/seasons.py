"""
worldcal.engines.seasons
------------------------
Season lookup and season-interpolated sunrise/sunset.

Sunrise and sunset are decimal hours. A season without explicit times takes
the Gregorian reference values for its name, or else a 25%/75% split of the
day. Between the first day of a season and the first day of the next one,
times are interpolated linearly by day of year.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

from ..core.definition import Month, Season, TimeConfig
from ..core.time import hhmm_to_hours
from ..core.types import SunTimes

GREGORIAN_SUN_TIMES: Dict[str, Tuple[str, str]] = {
    "Winter": ("07:00", "16:45"),
    "Spring": ("06:30", "17:45"),
    "Summer": ("05:45", "20:15"),
    "Autumn": ("06:30", "19:30"),
    "Fall": ("06:30", "19:30"),
}


def in_season(season: Season, month: int, day: int, months: Sequence[Month]) -> bool:
    start_m = season.start_month
    end_m = season.end_month if season.end_month is not None else season.start_month
    start_d = season.start_day
    if season.end_day is not None:
        end_d = season.end_day
    elif 1 <= end_m <= len(months):
        end_d = months[end_m - 1].days
    else:
        end_d = 31

    if start_m > end_m:
        # wraps over the new year
        return (
            (month == start_m and day >= start_d)
            or (month == end_m and day <= end_d)
            or month > start_m
            or month < end_m
        )

    if month < start_m or month > end_m:
        return False
    if month == start_m and day < start_d:
        return False
    if month == end_m and day > end_d:
        return False
    return True


def season_index(seasons: Sequence[Season], month: int, day: int, months: Sequence[Month]) -> Optional[int]:
    for i, s in enumerate(seasons):
        if in_season(s, month, day, months):
            return i
    return None


def default_sun_times(time: TimeConfig) -> SunTimes:
    return SunTimes(sunrise=time.hours_in_day / 4, sunset=time.hours_in_day * 3 / 4)


def season_sun_times(season: Season, time: TimeConfig) -> SunTimes:
    if season.sunrise and season.sunset:
        return SunTimes(hhmm_to_hours(season.sunrise, time.minutes_in_hour),
                        hhmm_to_hours(season.sunset, time.minutes_in_hour))
    ref = GREGORIAN_SUN_TIMES.get(season.name)
    if ref is not None:
        return SunTimes(hhmm_to_hours(ref[0], time.minutes_in_hour),
                        hhmm_to_hours(ref[1], time.minutes_in_hour))
    return default_sun_times(time)


def season_progress(start_doy: int, next_start_doy: int, current_doy: int, year_length: int) -> float:
    """0.0 on the season's first day, approaching 1.0 on its last."""
    if next_start_doy > start_doy:
        total = next_start_doy - start_doy
    else:
        total = year_length - start_doy + next_start_doy

    if current_doy >= start_doy:
        into = current_doy - start_doy
    else:
        into = year_length - start_doy + current_doy

    return into / total if total > 0 else 0.0


def interpolate(a: SunTimes, b: SunTimes, progress: float) -> SunTimes:
    return SunTimes(
        sunrise=a.sunrise + (b.sunrise - a.sunrise) * progress,
        sunset=a.sunset + (b.sunset - a.sunset) * progress,
    )
