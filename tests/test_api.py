# tests/test_api.py

import json

import pytest

import worldcal
from worldcal import CalendarDate, CalendarLoadError, EngineRegistry, UnknownCalendarError


def test_presets_listed():
    assert worldcal.list_presets() == ["golarion", "gregorian", "harptos", "roshar"]


def test_unknown_preset():
    with pytest.raises(UnknownCalendarError):
        worldcal.preset("discworld")
    with pytest.raises(KeyError):
        worldcal.preset("discworld")


def test_presets_are_independent():
    a = worldcal.preset("gregorian")
    b = worldcal.preset("gregorian")
    assert a is not b
    assert a.table is not b.table


def test_build_registry():
    reg = worldcal.build_registry(["harptos", "gregorian"])
    assert reg.list() == ["gregorian", "harptos"]
    assert reg.active == "harptos"
    assert reg.get().get_calendar().id == "harptos"
    assert reg.activate("gregorian").get_calendar().id == "gregorian"
    assert reg.get().get_calendar().id == "gregorian"


def test_registry_errors():
    reg = EngineRegistry()
    with pytest.raises(UnknownCalendarError):
        reg.get()
    reg.register("g", worldcal.preset("gregorian"))
    with pytest.raises(KeyError):
        reg.register("g", worldcal.preset("gregorian"))
    reg.register("g", worldcal.preset("roshar"), overwrite=True)
    assert reg.get("g").get_calendar().id == "roshar"
    with pytest.raises(UnknownCalendarError):
        reg.get("nope")


def test_registries_do_not_share_state():
    a = worldcal.build_registry(["gregorian"])
    b = worldcal.build_registry(["roshar"])
    assert a.list() == ["gregorian"]
    assert b.list() == ["roshar"]


def test_functional_wrappers(greg):
    d = worldcal.make_date(greg, 2024, 2, 29)
    w = worldcal.date_to_world_time(greg, d)
    assert worldcal.world_time_to_date(greg, w) == d.replace(time=worldcal.TimeOfDay())
    assert worldcal.is_leap_year(greg, 2024)
    assert worldcal.get_month_length(greg, 2, 2024) == 29
    assert worldcal.get_year_length(greg, 2024) == 366
    assert worldcal.calculate_weekday(greg, 2024, 2, 29) == 4
    assert worldcal.get_week_of_month(greg, d) == 5
    assert worldcal.get_week_info(greg, d).name == "5th Week"
    assert worldcal.add_months(greg, d, 12).day == 28
    assert worldcal.get_calendar(greg).id == "gregorian"


def test_date_label(greg, harptos):
    d = greg.make_date(2024, 1, 1, time=worldcal.TimeOfDay(9, 5, 0))
    assert worldcal.date_label(greg, d) == "Monday, 1 January 2024 09:05:00"
    midwinter = harptos.make_date(1372, 1, 1, intercalary="Midwinter")
    assert worldcal.date_label(harptos, midwinter) == "Midwinter 1372 DR 00:00:00"


def test_engine_info(harptos):
    info = worldcal.engine_info(harptos)
    assert info["leap_rule"] == "custom"
    assert info["leap_period"] == 4
    assert info["cycle_days"] == 4 * 365 + 1
    assert info["boundary_policy"] == "attached-month-year"


def test_explain(greg):
    out = worldcal.explain(greg, 86400 * 31)
    assert out["date"]["month"] == 2
    assert out["day_of_year"] == 32
    assert out["is_leap_year"] is True


def test_load_calendar_file(tmp_path, tiny_doc):
    p = tmp_path / "tiny.json"
    p.write_text(json.dumps(tiny_doc), encoding="utf-8")
    eng = worldcal.load_calendar_file(p)
    assert eng.get_calendar().id == "tiny"

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(CalendarLoadError):
        worldcal.load_calendar_file(bad)
    with pytest.raises(CalendarLoadError):
        worldcal.load_calendar_file(tmp_path / "missing.json")

    arr = tmp_path / "list.json"
    arr.write_text("[]", encoding="utf-8")
    with pytest.raises(CalendarLoadError):
        worldcal.load_calendar_file(arr)


def test_make_engine_accepts_definition(tiny):
    eng = worldcal.make_engine(tiny.get_calendar())
    assert eng.get_calendar() is tiny.get_calendar()
    with pytest.raises(TypeError):
        worldcal.make_engine(42)
