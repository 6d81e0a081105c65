from __future__ import annotations

import secrets
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from safepermit.config import get_settings
from safepermit.core.options import DEFAULT_START_CLOCK, START_TIME_CLOCK, WORKING_HOURS_DURATION

APPLICATION_NUMBER_PREFIX = "SA"


def local_now(tz_name: str | None = None) -> datetime:
    return datetime.now(ZoneInfo(tz_name or get_settings().timezone))


def local_today(tz_name: str | None = None) -> date:
    return local_now(tz_name).date()


def generate_application_number(now: datetime | None = None) -> str:
    """``SA`` + submit timestamp + 8 random hex characters.

    The random suffix keeps numbers apart when two submissions share a
    second; the unique constraint and retry in the orchestrator cover the
    remaining case.
    """
    now = now or local_now()
    return f"{APPLICATION_NUMBER_PREFIX}{now:%Y%m%d%H%M%S}{secrets.token_hex(4).upper()}"


def work_start_time(start_date: date, start_time: str) -> datetime:
    clock = START_TIME_CLOCK.get(start_time, DEFAULT_START_CLOCK)
    return datetime.combine(start_date, clock)


def working_hours_duration(working_hours: str) -> timedelta:
    if working_hours not in WORKING_HOURS_DURATION:
        raise ValueError(f"unknown working hours code '{working_hours}'")
    return timedelta(hours=WORKING_HOURS_DURATION[working_hours])


def work_window(start_date: date, start_time: str, working_hours: str) -> tuple[datetime, datetime]:
    start = work_start_time(start_date, start_time)
    return start, start + working_hours_duration(working_hours)


def hours_between(start: datetime, end: datetime) -> int:
    return round((end - start).total_seconds() / 3600)


def format_submit_time(moment: datetime) -> str:
    """zh-CN style local date-time, e.g. ``2024/03/05 14:03:09``."""
    return moment.strftime("%Y/%m/%d %H:%M:%S")
