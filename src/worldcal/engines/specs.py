"""
worldcal.engines.specs
----------------------
Built-in calendar presets, kept as plain JSON-shaped documents so they go
through exactly the same ``CalendarDefinition.from_dict`` path as user files.
"""

from __future__ import annotations

import copy
from typing import Any, Dict

from ..core.definition import GREGORIAN_DEFAULTS


# ============================================================
# SHARED PIECES
# ============================================================

EIGHT_PHASES = [
    {"name": "New Moon", "length": 1, "singleDay": True, "icon": "new"},
    {"name": "Waxing Crescent", "length": 6.3826475, "singleDay": False, "icon": "waxing-crescent"},
    {"name": "First Quarter", "length": 1, "singleDay": True, "icon": "first-quarter"},
    {"name": "Waxing Gibbous", "length": 6.3826475, "singleDay": False, "icon": "waxing-gibbous"},
    {"name": "Full Moon", "length": 1, "singleDay": True, "icon": "full"},
    {"name": "Waning Gibbous", "length": 6.3826475, "singleDay": False, "icon": "waning-gibbous"},
    {"name": "Last Quarter", "length": 1, "singleDay": True, "icon": "last-quarter"},
    {"name": "Waning Crescent", "length": 6.3826475, "singleDay": False, "icon": "waning-crescent"},
]

EARTH_SEASONS = [
    {"name": "Winter", "startMonth": 12, "startDay": 21, "endMonth": 3, "endDay": 19},
    {"name": "Spring", "startMonth": 3, "startDay": 20, "endMonth": 6, "endDay": 20},
    {"name": "Summer", "startMonth": 6, "startDay": 21, "endMonth": 9, "endDay": 21},
    {"name": "Autumn", "startMonth": 9, "startDay": 22, "endMonth": 12, "endDay": 20},
]


def _phases(cycle: float) -> list:
    """EIGHT_PHASES rescaled so the four multi-day phases fill ``cycle``."""
    span = (cycle - 4) / 4
    return [dict(p, length=1 if p["singleDay"] else span) for p in EIGHT_PHASES]


# ============================================================
# GREGORIAN
# ============================================================

GREGORIAN: Dict[str, Any] = copy.deepcopy(GREGORIAN_DEFAULTS)
GREGORIAN.update(
    label="Gregorian Calendar",
    description="Proleptic Gregorian calendar, astronomical year numbering.",
    moons=[{
        "name": "Luna",
        "cycleLength": 29.530588,
        "firstNewMoon": {"year": 2000, "month": 1, "day": 6},
        "phases": _phases(29.530588),
        "color": "#f4f4f4",
    }],
    seasons=copy.deepcopy(EARTH_SEASONS),
    weeks={"type": "month-based", "remainderHandling": "partial-last", "namingPattern": "ordinal"},
)


# ============================================================
# HARPTOS (Forgotten Realms)
# ============================================================

_HARPTOS_MONTHS = [
    ("Hammer", "Deepwinter"), ("Alturiak", "The Claw of Winter"), ("Ches", "The Claw of the Sunsets"),
    ("Tarsakh", "The Claw of the Storms"), ("Mirtul", "The Melting"), ("Kythorn", "The Time of Flowers"),
    ("Flamerule", "Summertide"), ("Eleasis", "Highsun"), ("Eleint", "The Fading"),
    ("Marpenoth", "Leaffall"), ("Uktar", "The Rotting"), ("Nightal", "The Drawing Down"),
]

HARPTOS: Dict[str, Any] = {
    "id": "harptos",
    "name": "Calendar of Harptos",
    "label": "Forgotten Realms (Harptos)",
    "year": {"epoch": 0, "currentYear": 1491, "prefix": "", "suffix": " DR", "startDay": 0},
    # Shieldmeet is the leap day; no month grows.
    "leapYear": {"rule": "custom", "interval": 4, "offset": 0, "month": "Flamerule", "extraDays": 0},
    "months": [{"name": n, "days": 30, "description": d} for n, d in _HARPTOS_MONTHS],
    "weekdays": [{"name": f"{o} Day", "abbreviation": o[:2]} for o in (
        "First", "Second", "Third", "Fourth", "Fifth", "Sixth", "Seventh", "Eighth", "Ninth", "Tenth")],
    "intercalary": [
        {"name": "Midwinter", "after": "Hammer", "days": 1, "countsForWeekdays": False},
        {"name": "Greengrass", "after": "Tarsakh", "days": 1, "countsForWeekdays": False},
        {"name": "Midsummer", "after": "Flamerule", "days": 1, "countsForWeekdays": False},
        {"name": "Shieldmeet", "after": "Flamerule", "days": 1, "leapYearOnly": True, "countsForWeekdays": False},
        {"name": "Highharvestide", "after": "Eleint", "days": 1, "countsForWeekdays": False},
        {"name": "Feast of the Moon", "after": "Uktar", "days": 1, "countsForWeekdays": False},
    ],
    "time": {"hoursInDay": 24, "minutesInHour": 60, "secondsInMinute": 60},
    "weeks": {
        "type": "month-based",
        "perMonth": 3,
        "daysPerWeek": 10,
        "namingPattern": "ordinal",
        "names": [{"name": "First Tenday"}, {"name": "Second Tenday"}, {"name": "Third Tenday"}],
    },
    "canonicalHours": [
        {"name": "Dawn", "startHour": 5, "endHour": 7},
        {"name": "Morning", "startHour": 7, "endHour": 12},
        {"name": "Highsun", "startHour": 12, "endHour": 13},
        {"name": "Afternoon", "startHour": 13, "endHour": 18},
        {"name": "Dusk", "startHour": 18, "endHour": 20},
        {"name": "Evening", "startHour": 20, "endHour": 23},
        {"name": "Midnight", "startHour": 23, "endHour": 4, "endMinute": 59},
    ],
    "moons": [{
        "name": "Selune",
        "cycleLength": 30.4375,
        "firstNewMoon": {"year": 1372, "month": 1, "day": 1},
        "phases": _phases(30.4375),
        "color": "#e8e8ff",
    }],
    "seasons": [
        {"name": "Winter", "startMonth": 11, "endMonth": 2},
        {"name": "Spring", "startMonth": 3, "endMonth": 5},
        {"name": "Summer", "startMonth": 6, "endMonth": 8},
        {"name": "Autumn", "startMonth": 9, "endMonth": 10},
    ],
}


# ============================================================
# ROSHAR (Stormlight)
# ============================================================

_ROSHAR_STEMS = ("Jes", "Nan", "Chach", "Vev", "Palah", "Shash", "Betab", "Kak", "Tanat", "Ishi")

ROSHAR: Dict[str, Any] = {
    "id": "roshar",
    "name": "Vorin Calendar",
    "label": "Roshar",
    "year": {"epoch": 1, "currentYear": 1174, "prefix": "", "suffix": "", "startDay": 0},
    "leapYear": {"rule": "none"},
    "months": [{"name": f"{s}an", "days": 50} for s in _ROSHAR_STEMS],
    "weekdays": [{"name": f"{s}es"} for s in _ROSHAR_STEMS[:5]],
    "intercalary": [],
    "time": {"hoursInDay": 20, "minutesInHour": 50, "secondsInMinute": 50},
    "weeks": {"type": "month-based", "perMonth": 10, "daysPerWeek": 5, "namingPattern": "numeric"},
}


# ============================================================
# GOLARION (Absalom Reckoning)
# ============================================================

GOLARION: Dict[str, Any] = {
    "id": "golarion",
    "name": "Absalom Reckoning",
    "label": "Golarion (Pathfinder)",
    "year": {"epoch": 2700, "currentYear": 4725, "prefix": "", "suffix": " AR", "startDay": 0},
    "leapYear": {"rule": "gregorian", "month": "Calistril", "extraDays": 1},
    "months": [
        {"name": "Abadius", "days": 31}, {"name": "Calistril", "days": 28},
        {"name": "Pharast", "days": 31}, {"name": "Gozran", "days": 30},
        {"name": "Desnus", "days": 31}, {"name": "Sarenith", "days": 30},
        {"name": "Erastus", "days": 31}, {"name": "Arodus", "days": 31},
        {"name": "Rova", "days": 30}, {"name": "Lamashan", "days": 31},
        {"name": "Neth", "days": 30}, {"name": "Kuthona", "days": 31},
    ],
    "weekdays": [{"name": n} for n in (
        "Moonday", "Toilday", "Wealday", "Oathday", "Fireday", "Starday", "Sunday")],
    "intercalary": [],
    "time": {"hoursInDay": 24, "minutesInHour": 60, "secondsInMinute": 60},
    "worldTime": {"interpretation": "real-time-based", "epochYear": 2700, "currentYear": 4725},
    "seasons": copy.deepcopy(EARTH_SEASONS),
}


ALL_SPECS: Dict[str, Dict[str, Any]] = {
    "gregorian": GREGORIAN,
    "harptos": HARPTOS,
    "roshar": ROSHAR,
    "golarion": GOLARION,
}
