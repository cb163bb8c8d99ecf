# tests/test_definition.py

import logging

import worldcal
from worldcal import CalendarDate, TimeOfDay
from worldcal.core.definition import CalendarDefinition, IntercalaryAnchor, resolve_anchor


def test_missing_sections_use_gregorian_defaults(caplog):
    caplog.set_level(logging.WARNING)
    cal = CalendarDefinition.from_dict({"id": "bare"})
    assert len(cal.months) == 12
    assert len(cal.weekdays) == 7
    assert cal.leap_year.kind == "gregorian"
    assert cal.time.seconds_per_day == 86400
    for section in ("year", "leapYear", "months", "weekdays", "intercalary", "time"):
        assert f"missing {section} data" in caplog.text


def test_bare_calendar_converts_like_gregorian():
    eng = worldcal.load_calendar({"id": "bare"})
    greg = worldcal.preset("gregorian")
    d = CalendarDate(2024, 1, 1)
    assert eng.date_to_world_time(d) == greg.date_to_world_time(d)


def test_partial_leap_section_takes_gregorian_month():
    eng = worldcal.load_calendar({"id": "p", "leapYear": {"rule": "gregorian"}})
    assert eng.is_leap_year(2024)
    assert eng.get_month_length(2, 2024) == 29
    assert eng.get_year_length(2024) == 366
    assert eng.get_year_length(2023) == 365


def test_leap_rule_none_is_not_merged():
    cal = CalendarDefinition.from_dict({"id": "p", "leapYear": {"rule": "none", "month": "February", "extraDays": 3}})
    assert cal.leap_year.kind == "none"
    assert cal.leap_year.month is None
    assert cal.leap_year.extra_days == 1


def test_partial_year_and_time_sections_are_merged():
    cal = CalendarDefinition.from_dict({
        "id": "p",
        "year": {"suffix": " AE"},
        "time": {"hoursInDay": 20},
    })
    assert cal.year.epoch == 0
    assert cal.year.start_day == 6
    assert cal.year.current_year == 2024
    assert cal.year.suffix == " AE"
    assert cal.time.hours_in_day == 20
    assert cal.time.minutes_in_hour == 60
    assert cal.time.seconds_in_minute == 60


def test_empty_months_fall_back(caplog):
    caplog.set_level(logging.WARNING)
    cal = CalendarDefinition.from_dict({"id": "empty", "months": []})
    assert len(cal.months) == 12
    assert "empty months list" in caplog.text


def test_bad_values_are_clamped(caplog):
    caplog.set_level(logging.WARNING)
    cal = CalendarDefinition.from_dict({
        "id": "bad",
        "months": [{"name": "Zero", "days": 0}],
        "time": {"hoursInDay": 0, "minutesInHour": 60, "secondsInMinute": 60},
    })
    assert cal.months[0].days == 1
    assert cal.time.hours_in_day == 24
    assert "clamped to 1" in caplog.text
    assert "time.hoursInDay invalid" in caplog.text


def test_resolve_anchor():
    assert resolve_anchor({"after": "A"}) == IntercalaryAnchor("after", "A")
    assert resolve_anchor({"before": "B"}) == IntercalaryAnchor("before", "B")
    assert resolve_anchor({"after": "A", "before": "B"}) is None
    assert resolve_anchor({}) is None


def test_invalid_intercalary_entries_are_dropped(tiny_doc, caplog):
    caplog.set_level(logging.WARNING)
    tiny_doc["intercalary"] += [
        {"name": "Nowhere", "after": "Q"},
        {"name": "Both", "after": "A", "before": "B"},
    ]
    cal = CalendarDefinition.from_dict(tiny_doc)
    assert [ic.name for ic in cal.intercalary] == ["Dawnday", "Yule"]
    assert "unknown month 'Q'" in caplog.text
    assert "exactly one of after/before" in caplog.text


def test_intercalary_fields(tiny):
    cal = tiny.get_calendar()
    yule = cal.find_intercalary("Yule")
    assert yule.after == "C" and yule.before is None
    assert yule.days == 2
    assert not yule.counts_for_weekdays
    assert cal.find_intercalary("Dawnday").counts_for_weekdays
    assert cal.find_intercalary("nope") is None
    assert cal.month_index("B") == 2


def test_unknown_week_options_fall_back(tiny_doc, caplog):
    caplog.set_level(logging.WARNING)
    tiny_doc["weeks"] = {"remainderHandling": "spill", "namingPattern": "roman"}
    cal = CalendarDefinition.from_dict(tiny_doc)
    assert cal.weeks.remainder_handling == "partial-last"
    assert cal.weeks.naming_pattern == "numeric"
    assert "spill" in caplog.text


def test_empty_weekdays_are_kept():
    eng = worldcal.load_calendar({"id": "noweek", "weekdays": []})
    assert eng.get_calendar().weekdays == ()
    assert eng.calculate_weekday(2024, 1, 1) is None
    assert eng.get_week_of_month(CalendarDate(2024, 1, 8)) is None


def test_calendar_date_dict_round_trip():
    d = CalendarDate(1372, 7, 1, weekday=None, intercalary="Shieldmeet", time=TimeOfDay(6, 0, 0))
    assert CalendarDate.from_dict(d.to_dict()) == d
    assert d.is_intercalary
    assert not CalendarDate(1, 1, 1).is_intercalary
