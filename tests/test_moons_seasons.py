# tests/test_moons_seasons.py

import pytest

import worldcal
from worldcal import CalendarDate
from worldcal.core.definition import Moon, MoonPhase, Season, TimeConfig
from worldcal.core.time import hhmm_to_hours, hours_to_hhmm
from worldcal.engines.moons import moon_phase
from worldcal.engines.seasons import default_sun_times, season_progress, season_sun_times

SQUARE = Moon(
    name="Square",
    cycle_length=8,
    first_new_moon=(0, 1, 1),
    phases=tuple(MoonPhase(n, 2) for n in ("New", "Waxing", "Full", "Waning")),
)


def test_moon_phase_basic():
    info = moon_phase(SQUARE, 3)
    assert info.phase.name == "Waxing"
    assert info.phase_index == 1
    assert info.day_in_phase == 1
    assert info.days_until_next == 1
    assert info.phase_progress == pytest.approx(0.5)


def test_moon_phase_wraps_both_ways():
    assert moon_phase(SQUARE, 8).phase.name == "New"
    assert moon_phase(SQUARE, 15).phase.name == "Waning"
    assert moon_phase(SQUARE, -1).phase.name == "Waning"
    assert moon_phase(SQUARE, -8).phase_index == 0


def test_luna_reference_and_full_moon(greg):
    new = greg.get_moon_phase_info(CalendarDate(2000, 1, 6))[0]
    assert new.moon.name == "Luna"
    assert new.phase.name == "New Moon"
    assert new.day_in_phase == 0
    assert new.days_until_next == 1

    after = greg.get_moon_phase_info(CalendarDate(2000, 1, 7))[0]
    assert after.phase.name == "Waxing Crescent"
    assert after.day_in_phase_exact == pytest.approx(0.0)

    full = greg.get_moon_phase_info(CalendarDate(2000, 1, 21))[0]
    assert full.phase.name == "Full Moon"

    before = greg.get_moon_phase_info(CalendarDate(2000, 1, 5))[0]
    assert before.phase.name == "Waning Crescent"


def test_moon_filter_and_world_time(greg):
    assert greg.get_moon_phase_info(CalendarDate(2000, 1, 6), "Nope") == []
    wt = greg.date_to_world_time(CalendarDate(2000, 1, 6))
    assert greg.get_moon_phase_at_world_time(wt + 3600, "Luna")[0].phase.name == "New Moon"


def test_moon_phase_across_intercalary_days(harptos):
    # Selune's reference is 1 Hammer 1372; Midwinter sits between Hammer and Alturiak.
    info = harptos.get_moon_phase_info(CalendarDate(1372, 2, 1))[0]
    assert info.phase.name == "New Moon"
    assert info.day_in_phase_exact == pytest.approx(31 - 30.4375)


def test_invalid_moons_are_dropped(caplog):
    cal = worldcal.load_calendar({
        "id": "moonless",
        "year": {"epoch": 0},
        "leapYear": {"rule": "none"},
        "months": [{"name": "A", "days": 30}],
        "weekdays": [{"name": "One"}],
        "intercalary": [],
        "time": {"hoursInDay": 24, "minutesInHour": 60, "secondsInMinute": 60},
        "moons": [{"name": "Broken", "cycleLength": 0, "phases": []}],
    })
    assert cal.get_calendar().moons == ()
    assert "no cycle or phases" in caplog.text


def test_seasons_including_wraparound(greg):
    assert greg.get_season(CalendarDate(2024, 1, 15)).name == "Winter"
    assert greg.get_season(CalendarDate(2024, 12, 25)).name == "Winter"
    assert greg.get_season(CalendarDate(2024, 3, 19)).name == "Winter"
    assert greg.get_season(CalendarDate(2024, 3, 20)).name == "Spring"
    assert greg.get_season(CalendarDate(2024, 7, 4)).name == "Summer"
    assert greg.get_season(CalendarDate(2024, 10, 31)).name == "Autumn"


def test_no_seasons_gives_none_and_default_sun_times():
    eng = worldcal.preset("roshar")
    d = CalendarDate(1174, 3, 3)
    assert eng.get_season(d) is None
    sun = eng.get_sun_times(d)
    assert sun.sunrise == pytest.approx(5.0)
    assert sun.sunset == pytest.approx(15.0)


def test_sun_times_at_season_start(greg):
    sun = greg.get_sun_times(CalendarDate(2024, 6, 21))
    assert sun.sunrise == pytest.approx(5.75)
    assert sun.sunset == pytest.approx(20.25)


def test_sun_times_interpolate_between_seasons(greg):
    mid = greg.get_sun_times(CalendarDate(2024, 8, 6))
    assert 5.75 < mid.sunrise < 6.5
    assert 19.5 < mid.sunset < 20.25


def test_season_sun_time_sources():
    t = TimeConfig()
    assert season_sun_times(Season("Dry", 1, sunrise="06:00", sunset="18:30"), t).sunset == pytest.approx(18.5)
    assert season_sun_times(Season("Fall", 9), t).sunrise == pytest.approx(6.5)
    assert season_sun_times(Season("Ashfall", 9), t) == default_sun_times(t)


def test_season_progress_wraps_year():
    assert season_progress(355, 80, 355, 365) == pytest.approx(0.0)
    assert season_progress(355, 80, 10, 365) == pytest.approx(20 / 90)


def test_hhmm_helpers():
    assert hhmm_to_hours("06:30") == pytest.approx(6.5)
    assert hhmm_to_hours("05:25", 50) == pytest.approx(5.5)
    assert hours_to_hhmm(6.5) == "06:30"
    with pytest.raises(ValueError):
        hhmm_to_hours("0630")
