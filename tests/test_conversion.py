# tests/test_conversion.py

import random

import pytest

import worldcal
from worldcal import CalendarDate, TimeOfDay

MIDNIGHT = TimeOfDay(0, 0, 0)


def test_gregorian_2024_scenario(greg):
    d = CalendarDate(2024, 1, 1, time=MIDNIGHT)
    w = greg.date_to_world_time(d)
    assert w == 739251 * 86400

    back = greg.world_time_to_date(w)
    assert (back.year, back.month, back.day, back.time) == (2024, 1, 1, MIDNIGHT)
    assert back.weekday == 1  # Monday

    nxt = greg.world_time_to_date(w + 86400)
    assert (nxt.year, nxt.month, nxt.day) == (2024, 1, 2)
    assert nxt.weekday == 2


def test_epoch_and_known_weekdays(greg):
    d = greg.world_time_to_date(0)
    assert (d.year, d.month, d.day, d.weekday) == (0, 1, 1, 6)
    assert greg.calculate_weekday(2000, 1, 1) == 6
    assert greg.calculate_weekday(1969, 7, 20) == 0


def test_negative_world_time(greg):
    d = greg.world_time_to_date(-1)
    assert (d.year, d.month, d.day) == (-1, 12, 31)
    assert d.time == TimeOfDay(23, 59, 59)
    assert greg.date_to_world_time(d) == -1


def test_hundred_years_is_exact(greg):
    start = greg.make_date(1950, 3, 15, time=TimeOfDay(12, 0, 0))
    w = greg.date_to_world_time(start)
    span = sum(greg.get_year_length(y) for y in range(1950, 2050)) * 86400
    assert span != 100 * 365 * 86400

    end = greg.world_time_to_date(w + span)
    assert (end.year, end.month, end.day, end.time) == (2050, 3, 15, TimeOfDay(12, 0, 0))
    assert greg.add_years(start, 100).year == 2050


@pytest.mark.parametrize("name", ["gregorian", "harptos", "roshar", "golarion"])
def test_random_round_trip(name):
    eng = worldcal.preset(name)
    spd = eng.get_calendar().time.seconds_per_day
    rng = random.Random(20240101)
    for _ in range(500):
        wt = rng.randint(-3000 * 400 * spd, 3000 * 400 * spd)
        d = eng.world_time_to_date(wt)
        assert eng.date_to_world_time(d) == wt
        assert eng.world_time_to_date(eng.date_to_world_time(d)) == d


def test_round_trip_tiny_covers_intercalary(tiny):
    spd = tiny.get_calendar().time.seconds_per_day
    seen = set()
    for day in range(-200, 200):
        wt = day * spd + 123
        d = tiny.world_time_to_date(wt)
        seen.add(d.intercalary)
        assert tiny.date_to_world_time(d) == wt
    assert seen == {None, "Dawnday", "Yule"}


def test_round_trip_from_date_without_time(greg, harptos):
    d = greg.make_date(2024, 3, 15)
    assert d.time == TimeOfDay()
    assert greg.world_time_to_date(greg.date_to_world_time(d)) == d

    fest = harptos.make_date(1372, 7, 1, intercalary="Shieldmeet")
    assert harptos.world_time_to_date(harptos.date_to_world_time(fest)) == fest

    assert CalendarDate(2024, 3, 15, time=None) == CalendarDate(2024, 3, 15, time=TimeOfDay(0, 0, 0))


def _year_in_order(eng, year):
    """Every valid date of ``year`` in calendar order."""
    out = []
    for m in range(1, len(eng.get_calendar().months) + 1):
        for ic in eng.get_intercalary_days_before_month(year, m):
            out += [CalendarDate(year, m, k, intercalary=ic.name) for k in range(1, ic.days + 1)]
        out += [CalendarDate(year, m, k) for k in range(1, eng.get_month_length(m, year) + 1)]
        for ic in eng.get_intercalary_days_after_month(year, m):
            out += [CalendarDate(year, m, k, intercalary=ic.name) for k in range(1, ic.days + 1)]
    return out


@pytest.mark.parametrize("year", [1371, 1372])
def test_monotonic_and_gapless_harptos(harptos, year):
    dates = _year_in_order(harptos, year) + _year_in_order(harptos, year + 1)
    times = [harptos.date_to_world_time(d) for d in dates]
    assert all(b - a == 86400 for a, b in zip(times, times[1:]))
    assert len(_year_in_order(harptos, year)) == harptos.get_year_length(year)


def test_intercalary_continuity(tiny):
    spd = tiny.get_calendar().time.seconds_per_day
    # Year 1 starts on day 34 and is 33 days long; C 10 is its day 31.
    seq = [tiny.world_time_to_date(k * spd) for k in range(64, 68)]
    assert [(d.year, d.month, d.day, d.intercalary) for d in seq] == [
        (1, 3, 10, None),
        (1, 3, 1, "Yule"),
        (1, 3, 2, "Yule"),
        (2, 1, 1, "Dawnday"),
    ]
    assert [d.weekday is None for d in seq] == [False, True, True, False]
    assert seq[3].weekday == (seq[0].weekday + 1) % 3


def test_harptos_festival_has_no_weekday(harptos):
    midwinter = harptos.make_date(1372, 1, 1, intercalary="Midwinter")
    assert midwinter.weekday is None
    last = harptos.make_date(1372, 1, 30)
    first = harptos.make_date(1372, 2, 1)
    assert first.weekday == (last.weekday + 1) % 10
    assert harptos.days_between(last, first) == 2


def test_invalid_date_falls_back_to_start_of_year_once(greg, caplog):
    bad = CalendarDate(2024, 13, 1)
    assert greg.day_of_year(bad) == 1
    assert greg.day_of_year(bad) == 1
    assert greg.date_to_world_time(bad) == greg.date_to_world_time(CalendarDate(2024, 1, 1))
    assert caplog.text.count("month 13 outside") == 1


def test_missing_intercalary_falls_back(harptos, caplog):
    d = CalendarDate(1371, 7, 1, intercalary="Shieldmeet")
    assert harptos.day_of_year(d) == 1
    assert "does not occur" in caplog.text


def test_real_time_based_interpretation():
    eng = worldcal.preset("golarion")
    d = eng.world_time_to_date(0)
    assert (d.year, d.month, d.day) == (4725, 1, 1)
    assert eng.date_to_world_time(CalendarDate(4725, 1, 1)) == 0

    before = eng.world_time_to_date(-86400)
    assert (before.year, before.month, before.day) == (4724, 12, 31)


def test_fractional_world_time_is_floored(greg):
    assert greg.world_time_to_date(59.9).time == TimeOfDay(0, 0, 59)
    assert greg.world_time_to_date(-0.5).time == TimeOfDay(23, 59, 59)


def test_update_calendar_rebuilds(greg):
    assert greg.get_year_length(1) == 365
    greg.update_calendar(worldcal.preset("roshar").get_calendar())
    assert greg.get_year_length(1) == 500
    assert greg.get_calendar().id == "roshar"
