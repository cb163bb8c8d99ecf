"""
worldcal.engines.leap
---------------------
Leap-year evaluation over the LeapRule union.

Every rule is periodic in the year number: the leap pattern repeats after
``leap_period(rule)`` years. The year table uses that period to memoize one
full cycle of year lengths.
"""

from __future__ import annotations

from ..core.definition import GregorianLeap, IntervalLeap, LeapRule, NoLeap

GREGORIAN_CYCLE = 400


def is_gregorian_leap(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def is_leap_year(rule: LeapRule, year: int) -> bool:
    if isinstance(rule, GregorianLeap):
        return is_gregorian_leap(year)
    if isinstance(rule, IntervalLeap):
        if rule.interval <= 0:
            return False
        # Python's % already yields a non-negative remainder for negative years.
        return (year - rule.offset) % rule.interval == 0
    return False


def leap_period(rule: LeapRule) -> int:
    """Smallest cycle length (in years) after which ``is_leap_year`` repeats."""
    if isinstance(rule, GregorianLeap):
        return GREGORIAN_CYCLE
    if isinstance(rule, IntervalLeap) and rule.interval > 0:
        return rule.interval
    return 1


__all__ = ["NoLeap", "GregorianLeap", "IntervalLeap", "is_leap_year", "leap_period", "is_gregorian_leap"]
