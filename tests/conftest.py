# tests/conftest.py

import copy
import logging

import pytest

import worldcal

# Three 10-day months, a 3-day week, a counting intercalary day opening the
# year and a two-day non-counting span closing it. Leap every 4th year on B.
TINY = {
    "id": "tiny",
    "name": "Tiny",
    "year": {"epoch": 0, "currentYear": 10, "startDay": 0},
    "leapYear": {"rule": "custom", "interval": 4, "offset": 0, "month": "B", "extraDays": 1},
    "months": [{"name": "A", "days": 10}, {"name": "B", "days": 10}, {"name": "C", "days": 10}],
    "weekdays": [{"name": "X"}, {"name": "Y"}, {"name": "Z"}],
    "intercalary": [
        {"name": "Dawnday", "before": "A", "days": 1},
        {"name": "Yule", "after": "C", "days": 2, "countsForWeekdays": False},
    ],
    "time": {"hoursInDay": 10, "minutesInHour": 10, "secondsInMinute": 10},
}


@pytest.fixture
def tiny_doc():
    return copy.deepcopy(TINY)


@pytest.fixture
def tiny(tiny_doc):
    return worldcal.load_calendar(tiny_doc)


@pytest.fixture
def greg():
    return worldcal.preset("gregorian")


@pytest.fixture
def harptos():
    return worldcal.preset("harptos")


@pytest.fixture
def restore_logging():
    """The CLI reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    pkg_level = logging.getLogger("worldcal").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("worldcal").setLevel(pkg_level)
