from __future__ import annotations

import re
from datetime import date, datetime, timedelta

import pytest

from safepermit.core.derivation import (
    format_submit_time,
    generate_application_number,
    hours_between,
    work_start_time,
    work_window,
    working_hours_duration,
)
from safepermit.core.options import WORKING_HOURS


def test_application_number_shape() -> None:
    number = generate_application_number(datetime(2024, 3, 5, 14, 3, 9))
    assert re.fullmatch(r"SA20240305140309[0-9A-F]{8}", number)


def test_application_numbers_differ_within_one_second() -> None:
    moment = datetime(2024, 3, 5, 14, 3, 9)
    numbers = {generate_application_number(moment) for _ in range(50)}
    assert len(numbers) == 50


def test_start_slots() -> None:
    day = date(2024, 3, 5)
    assert work_start_time(day, "morning") == datetime(2024, 3, 5, 8, 0)
    assert work_start_time(day, "afternoon") == datetime(2024, 3, 5, 14, 0)
    assert work_start_time(day, "night") == datetime(2024, 3, 5, 20, 0)


def test_every_duration_code_has_hours() -> None:
    for code in WORKING_HOURS.codes():
        assert working_hours_duration(code) > timedelta(0)
    assert working_hours_duration("one_day") == timedelta(hours=8)
    assert working_hours_duration("three_days") == timedelta(hours=24)


def test_unknown_duration_code_raises() -> None:
    with pytest.raises(ValueError):
        working_hours_duration("forever")


def test_work_window_end_after_start() -> None:
    start, end = work_window(date(2024, 3, 5), "afternoon", "one_half_day")
    assert end > start
    assert hours_between(start, end) == 12


def test_submit_time_format() -> None:
    assert format_submit_time(datetime(2024, 3, 5, 4, 3, 9)) == "2024/03/05 04:03:09"
