"""
worldcal.core.definition
------------------------
Immutable calendar definitions and the single entry point that builds them
from a JSON-shaped document (``CalendarDefinition.from_dict``).

Documents are expected to be validated upstream. Anything missing or malformed
is replaced here by a deterministic default and reported through logging; the
parser never raises on user-authored content.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


GREGORIAN_DEFAULTS: Dict[str, Any] = {
    "id": "gregorian",
    "name": "Gregorian",
    # 0000-01-01 (proleptic, astronomical numbering) is a Saturday.
    "year": {"epoch": 0, "currentYear": 2024, "prefix": "", "suffix": "", "startDay": 6},
    "leapYear": {"rule": "gregorian", "month": "February", "extraDays": 1},
    "months": [
        {"name": "January", "abbreviation": "Jan", "days": 31},
        {"name": "February", "abbreviation": "Feb", "days": 28},
        {"name": "March", "abbreviation": "Mar", "days": 31},
        {"name": "April", "abbreviation": "Apr", "days": 30},
        {"name": "May", "abbreviation": "May", "days": 31},
        {"name": "June", "abbreviation": "Jun", "days": 30},
        {"name": "July", "abbreviation": "Jul", "days": 31},
        {"name": "August", "abbreviation": "Aug", "days": 31},
        {"name": "September", "abbreviation": "Sep", "days": 30},
        {"name": "October", "abbreviation": "Oct", "days": 31},
        {"name": "November", "abbreviation": "Nov", "days": 30},
        {"name": "December", "abbreviation": "Dec", "days": 31},
    ],
    "weekdays": [
        {"name": "Sunday", "abbreviation": "Sun"},
        {"name": "Monday", "abbreviation": "Mon"},
        {"name": "Tuesday", "abbreviation": "Tue"},
        {"name": "Wednesday", "abbreviation": "Wed"},
        {"name": "Thursday", "abbreviation": "Thu"},
        {"name": "Friday", "abbreviation": "Fri"},
        {"name": "Saturday", "abbreviation": "Sat"},
    ],
    "intercalary": [],
    "time": {"hoursInDay": 24, "minutesInHour": 60, "secondsInMinute": 60},
}

REMAINDER_POLICIES = ("partial-last", "extend-last", "none")
NAMING_PATTERNS = ("ordinal", "numeric", "none")


# ============================================================
# Leaf records
# ============================================================

@dataclass(frozen=True)
class Month:
    name: str
    days: int
    abbreviation: Optional[str] = None
    description: Optional[str] = None

@dataclass(frozen=True)
class Weekday:
    name: str
    abbreviation: Optional[str] = None

@dataclass(frozen=True)
class TimeConfig:
    hours_in_day: int = 24
    minutes_in_hour: int = 60
    seconds_in_minute: int = 60

    @property
    def seconds_per_hour(self) -> int:
        return self.minutes_in_hour * self.seconds_in_minute

    @property
    def seconds_per_day(self) -> int:
        return self.hours_in_day * self.seconds_per_hour

@dataclass(frozen=True)
class YearConfig:
    epoch: int = 0
    current_year: int = 0
    start_day: int = 0
    prefix: str = ""
    suffix: str = ""


# ============================================================
# Leap rules: a tagged union resolved by resolve_leap_rule()
# ============================================================

@dataclass(frozen=True)
class NoLeap:
    kind: Literal["none"] = "none"
    month: Optional[str] = None
    extra_days: int = 1

@dataclass(frozen=True)
class GregorianLeap:
    kind: Literal["gregorian"] = "gregorian"
    month: Optional[str] = None
    extra_days: int = 1

@dataclass(frozen=True)
class IntervalLeap:
    """Leap when ``(year - offset) % interval == 0``."""
    interval: int = 4
    offset: int = 0
    kind: Literal["custom"] = "custom"
    month: Optional[str] = None
    extra_days: int = 1

LeapRule = Union[NoLeap, GregorianLeap, IntervalLeap]


def resolve_leap_rule(raw: Optional[Mapping[str, Any]], *, calendar_id: str = "?") -> LeapRule:
    """Turn a ``leapYear`` section into exactly one LeapRule variant."""
    if not raw:
        return NoLeap()

    rule = raw.get("rule", "none")
    month = raw.get("month")
    extra = raw.get("extraDays")
    extra_days = 1 if extra is None else int(extra)

    if rule == "none":
        return NoLeap(month=month, extra_days=extra_days)
    if rule == "gregorian":
        return GregorianLeap(month=month, extra_days=extra_days)
    if rule == "custom":
        interval = raw.get("interval")
        if not interval or int(interval) <= 0:
            logger.warning("Calendar %s: custom leap rule without a positive interval; no leap years", calendar_id)
            return NoLeap(month=month, extra_days=extra_days)
        return IntervalLeap(interval=int(interval), offset=int(raw.get("offset") or 0), month=month, extra_days=extra_days)

    logger.warning("Calendar %s: unknown leap year rule %r; treating as 'none'", calendar_id, rule)
    return NoLeap(month=month, extra_days=extra_days)


# ============================================================
# Intercalary spans
# ============================================================

@dataclass(frozen=True)
class IntercalaryAnchor:
    position: Literal["before", "after"]
    month: str

def resolve_anchor(raw: Mapping[str, Any]) -> Optional[IntercalaryAnchor]:
    """Exactly one of ``after``/``before`` must be set; anything else yields None."""
    after = raw.get("after")
    before = raw.get("before")
    if after and not before:
        return IntercalaryAnchor("after", after)
    if before and not after:
        return IntercalaryAnchor("before", before)
    return None

@dataclass(frozen=True)
class Intercalary:
    name: str
    anchor: IntercalaryAnchor
    days: int = 1
    leap_year_only: bool = False
    counts_for_weekdays: bool = True
    description: Optional[str] = None

    @property
    def after(self) -> Optional[str]:
        return self.anchor.month if self.anchor.position == "after" else None

    @property
    def before(self) -> Optional[str]:
        return self.anchor.month if self.anchor.position == "before" else None


# ============================================================
# Weeks, canonical hours, moons, seasons, world time
# ============================================================

@dataclass(frozen=True)
class WeekInfo:
    name: str
    abbreviation: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    description: Optional[str] = None

@dataclass(frozen=True)
class WeekConfig:
    type: Literal["month-based", "year-based"] = "month-based"
    per_month: Optional[int] = None
    days_per_week: Optional[int] = None
    remainder_handling: Literal["partial-last", "extend-last", "none"] = "partial-last"
    naming_pattern: Literal["ordinal", "numeric", "none"] = "numeric"
    names: Tuple[WeekInfo, ...] = ()

@dataclass(frozen=True)
class CanonicalHour:
    name: str
    start_hour: int
    end_hour: int
    start_minute: int = 0
    end_minute: int = 0
    description: Optional[str] = None

@dataclass(frozen=True)
class MoonPhase:
    name: str
    length: float
    single_day: bool = False
    icon: Optional[str] = None

@dataclass(frozen=True)
class Moon:
    name: str
    cycle_length: float
    first_new_moon: Tuple[int, int, int]
    phases: Tuple[MoonPhase, ...]
    color: Optional[str] = None

@dataclass(frozen=True)
class Season:
    name: str
    start_month: int
    start_day: int = 1
    end_month: Optional[int] = None
    end_day: Optional[int] = None
    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    description: Optional[str] = None

@dataclass(frozen=True)
class WorldTimeConfig:
    interpretation: Literal["epoch-based", "real-time-based"] = "epoch-based"
    epoch_year: int = 0
    current_year: int = 0


# ============================================================
# The calendar itself
# ============================================================

@dataclass(frozen=True)
class CalendarDefinition:
    id: str
    months: Tuple[Month, ...]
    weekdays: Tuple[Weekday, ...]
    leap_year: LeapRule
    time: TimeConfig
    year: YearConfig
    intercalary: Tuple[Intercalary, ...] = ()
    weeks: Optional[WeekConfig] = None
    canonical_hours: Tuple[CanonicalHour, ...] = ()
    moons: Tuple[Moon, ...] = ()
    seasons: Tuple[Season, ...] = ()
    world_time: Optional[WorldTimeConfig] = None
    name: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def month_index(self, name: str) -> Optional[int]:
        """1-based index of the month called ``name``."""
        for i, m in enumerate(self.months, start=1):
            if m.name == name:
                return i
        return None

    def find_intercalary(self, name: str) -> Optional[Intercalary]:
        for ic in self.intercalary:
            if ic.name == name:
                return ic
        return None

    @classmethod
    def gregorian(cls) -> "CalendarDefinition":
        return cls.from_dict(copy.deepcopy(GREGORIAN_DEFAULTS))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CalendarDefinition":
        cid = str(data.get("id", "custom"))
        d = GREGORIAN_DEFAULTS

        for section in ("year", "leapYear", "months", "weekdays", "intercalary", "time"):
            if data.get(section) is None:
                logger.warning("Calendar %s missing %s data; using Gregorian defaults", cid, section)

        if data.get("months") == []:
            logger.warning("Calendar %s has an empty months list; using Gregorian defaults", cid)
        months = _parse_months(data.get("months") or d["months"], cid)
        weekdays_raw = data.get("weekdays")
        weekdays = tuple(
            Weekday(name=str(w["name"]), abbreviation=w.get("abbreviation"))
            for w in (d["weekdays"] if weekdays_raw is None else weekdays_raw)
        )

        year_raw = _merge_section(data.get("year"), d["year"])
        epoch = int(year_raw.get("epoch", 0))
        year = YearConfig(
            epoch=epoch,
            current_year=int(year_raw.get("currentYear", epoch)),
            start_day=int(year_raw.get("startDay", 0)),
            prefix=str(year_raw.get("prefix", "")),
            suffix=str(year_raw.get("suffix", "")),
        )

        leap_raw = data.get("leapYear")
        if leap_raw is not None and leap_raw.get("rule") == "none":
            leap_raw = {"rule": "none"}
        leap = resolve_leap_rule(_merge_section(leap_raw, d["leapYear"]), calendar_id=cid)

        time = _parse_time(_merge_section(data.get("time"), d["time"]), cid)
        intercalary = _parse_intercalary(data.get("intercalary") or (), months, cid)

        return cls(
            id=cid,
            name=data.get("name"),
            months=months,
            weekdays=weekdays,
            leap_year=leap,
            time=time,
            year=year,
            intercalary=intercalary,
            weeks=_parse_weeks(data.get("weeks"), cid),
            canonical_hours=tuple(_parse_canonical_hours(data.get("canonicalHours") or ())),
            moons=tuple(_parse_moons(data.get("moons") or (), cid)),
            seasons=tuple(_parse_seasons(data.get("seasons") or ())),
            world_time=_parse_world_time(data.get("worldTime"), cid),
            meta={k: v for k, v in data.items() if k in ("label", "description", "sources")},
        )


# ============================================================
# Section parsers
# ============================================================

def _merge_section(raw: Optional[Mapping[str, Any]], default: Mapping[str, Any]) -> Dict[str, Any]:
    """Keys present in ``raw`` win; the rest come from the Gregorian section."""
    if raw is None:
        return dict(default)
    return {**default, **raw}

def _parse_months(raw: List[Mapping[str, Any]], cid: str) -> Tuple[Month, ...]:
    out = []
    for m in raw:
        days = int(m.get("days", 1))
        if days < 1:
            logger.warning("Calendar %s: month %r has %d days; clamped to 1", cid, m.get("name"), days)
            days = 1
        out.append(Month(name=str(m["name"]), days=days,
                         abbreviation=m.get("abbreviation"), description=m.get("description")))
    return tuple(out)

def _parse_time(raw: Mapping[str, Any], cid: str) -> TimeConfig:
    vals = {}
    for key, attr, default in (("hoursInDay", "hours_in_day", 24),
                               ("minutesInHour", "minutes_in_hour", 60),
                               ("secondsInMinute", "seconds_in_minute", 60)):
        v = raw.get(key)
        if v is None or int(v) < 1:
            logger.warning("Calendar %s: time.%s invalid (%r); using %d", cid, key, v, default)
            v = default
        vals[attr] = int(v)
    return TimeConfig(**vals)

def _parse_intercalary(raw, months: Tuple[Month, ...], cid: str) -> Tuple[Intercalary, ...]:
    month_names = {m.name for m in months}
    out = []
    for ic in raw:
        name = ic.get("name")
        anchor = resolve_anchor(ic)
        if anchor is None:
            logger.warning("Calendar %s: intercalary %r needs exactly one of after/before; ignored", cid, name)
            continue
        if anchor.month not in month_names:
            logger.warning("Calendar %s: intercalary %r refers to unknown month %r; ignored", cid, name, anchor.month)
            continue
        days = ic.get("days")
        days = 1 if days is None else int(days)
        if days < 1:
            logger.warning("Calendar %s: intercalary %r has %d days; using 1", cid, name, days)
            days = 1
        counts = ic.get("countsForWeekdays")
        out.append(Intercalary(
            name=str(name),
            anchor=anchor,
            days=days,
            leap_year_only=bool(ic.get("leapYearOnly", False)),
            counts_for_weekdays=True if counts is None else bool(counts),
            description=ic.get("description"),
        ))
    return tuple(out)

def _parse_weeks(raw: Optional[Mapping[str, Any]], cid: str) -> Optional[WeekConfig]:
    if not raw:
        return None
    handling = raw.get("remainderHandling") or "partial-last"
    if handling not in REMAINDER_POLICIES:
        logger.warning("Calendar %s: unknown remainderHandling %r; using 'partial-last'", cid, handling)
        handling = "partial-last"
    pattern = raw.get("namingPattern") or "numeric"
    if pattern not in NAMING_PATTERNS:
        logger.warning("Calendar %s: unknown namingPattern %r; using 'numeric'", cid, pattern)
        pattern = "numeric"
    dpw = raw.get("daysPerWeek")
    if dpw is not None and int(dpw) < 1:
        logger.warning("Calendar %s: weeks.daysPerWeek %r ignored", cid, dpw)
        dpw = None
    names = tuple(
        WeekInfo(name=str(w["name"]), abbreviation=w.get("abbreviation"), prefix=w.get("prefix"),
                 suffix=w.get("suffix"), description=w.get("description"))
        for w in raw.get("names") or ()
    )
    return WeekConfig(
        type="year-based" if raw.get("type") == "year-based" else "month-based",
        per_month=None if raw.get("perMonth") is None else int(raw["perMonth"]),
        days_per_week=None if dpw is None else int(dpw),
        remainder_handling=handling,
        naming_pattern=pattern,
        names=names,
    )

def _parse_canonical_hours(raw):
    for h in raw:
        yield CanonicalHour(
            name=str(h["name"]),
            start_hour=int(h["startHour"]),
            end_hour=int(h["endHour"]),
            start_minute=int(h.get("startMinute") or 0),
            end_minute=int(h.get("endMinute") or 0),
            description=h.get("description"),
        )

def _parse_moons(raw, cid: str):
    for m in raw:
        cycle = float(m.get("cycleLength") or 0)
        phases = tuple(
            MoonPhase(name=str(p["name"]), length=float(p.get("length", 0)),
                      single_day=bool(p.get("singleDay", False)), icon=p.get("icon"))
            for p in m.get("phases") or ()
        )
        if cycle <= 0 or not phases:
            logger.warning("Calendar %s: moon %r has no cycle or phases; ignored", cid, m.get("name"))
            continue
        ref = m.get("firstNewMoon") or {}
        yield Moon(
            name=str(m["name"]),
            cycle_length=cycle,
            first_new_moon=(int(ref.get("year", 0)), int(ref.get("month", 1)), int(ref.get("day", 1))),
            phases=phases,
            color=m.get("color"),
        )

def _parse_seasons(raw):
    for s in raw:
        yield Season(
            name=str(s["name"]),
            start_month=int(s["startMonth"]),
            start_day=int(s.get("startDay") or 1),
            end_month=None if s.get("endMonth") is None else int(s["endMonth"]),
            end_day=None if s.get("endDay") is None else int(s["endDay"]),
            sunrise=s.get("sunrise"),
            sunset=s.get("sunset"),
            description=s.get("description"),
        )

def _parse_world_time(raw: Optional[Mapping[str, Any]], cid: str) -> Optional[WorldTimeConfig]:
    if not raw:
        return None
    interp = raw.get("interpretation", "epoch-based")
    if interp not in ("epoch-based", "real-time-based"):
        logger.warning("Calendar %s: unknown worldTime interpretation %r; using epoch-based", cid, interp)
        interp = "epoch-based"
    return WorldTimeConfig(
        interpretation=interp,
        epoch_year=int(raw.get("epochYear", 0)),
        current_year=int(raw.get("currentYear", 0)),
    )
