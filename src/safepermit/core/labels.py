"""Code <-> label conversions used at the submission and query boundaries.

Every function here is total: unknown codes pass through unchanged and
unknown labels resolve to an empty code, so a stale option list never
blocks a write.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import time

from safepermit.core.options import (
    HAZARD_TYPES,
    NO_HAZARD,
    START_TIME_CLOCK,
    START_TIMES,
    WORK_BASES,
    WORK_LOCATIONS,
    WORK_TYPES,
    WORKING_HOURS,
    WORKING_HOURS_DURATION,
    OptionKind,
    work_content_options,
)

# Full-width comma. The enumeration comma cannot be used because one hazard
# label ("配合车辆静、动态调试作业") contains it.
HAZARD_SEPARATOR = "，"
NO_HAZARD_LABEL = HAZARD_TYPES.label_of(NO_HAZARD)


def work_location_label(code: str) -> str:
    return WORK_LOCATIONS.label_of(code or "")


def work_location_code(label: str) -> str:
    return WORK_LOCATIONS.code_of(label or "")


def work_type_label(code: str) -> str:
    return WORK_TYPES.label_of(code or "")


def work_type_code(label: str) -> str:
    return WORK_TYPES.code_of(label or "")


def work_content_label(work_type: str, code: str) -> str:
    return work_content_options(work_type or "").label_of(code or "")


def work_content_code(work_type: str, label: str) -> str:
    return work_content_options(work_type or "").code_of(label or "")


def work_basis_label(code: str) -> str:
    return WORK_BASES.label_of(code or "")


def work_basis_code(label: str) -> str:
    return WORK_BASES.code_of(label or "")


def working_hours_label(code: str) -> str:
    return WORKING_HOURS.label_of(code or "")


def working_hours_code(label: str) -> str:
    return WORKING_HOURS.code_of(label or "")


def working_hours_code_for(hours: int) -> str:
    for code, duration in WORKING_HOURS_DURATION.items():
        if duration == hours:
            return code
    return ""


def start_time_label(code: str) -> str:
    return START_TIMES.label_of(code or "")


def start_time_code(label: str) -> str:
    return START_TIMES.code_of(label or "")


def start_time_label_for(clock: time) -> str:
    """Slot label for a stored start clock time, or ``HH:MM`` for non-slot times."""
    for code, slot_clock in START_TIME_CLOCK.items():
        if (slot_clock.hour, slot_clock.minute) == (clock.hour, clock.minute):
            return START_TIMES.label_of(code)
    return clock.strftime("%H:%M")


def hazard_types_label(codes: Iterable[str] | str | None) -> str:
    if isinstance(codes, str):
        codes = [codes]
    selected = [code for code in (codes or []) if code and code != NO_HAZARD]
    if not selected:
        return NO_HAZARD_LABEL
    return HAZARD_SEPARATOR.join(HAZARD_TYPES.label_of(code) for code in selected)


def hazard_types_codes(text: str | None) -> list[str]:
    if not text or text.strip() == NO_HAZARD_LABEL:
        return []
    codes: list[str] = []
    for token in text.split(HAZARD_SEPARATOR):
        code = HAZARD_TYPES.code_of(token.strip())
        if code and code != NO_HAZARD:
            codes.append(code)
    return codes


_TO_LABEL = {
    "work_location": work_location_label,
    "work_type": work_type_label,
    "work_basis": work_basis_label,
    "working_hours": working_hours_label,
    "start_time": start_time_label,
    "hazard_type": HAZARD_TYPES.label_of,
}

_TO_CODE = {
    "work_location": work_location_code,
    "work_type": work_type_code,
    "work_basis": work_basis_code,
    "working_hours": working_hours_code,
    "start_time": start_time_code,
    "hazard_type": HAZARD_TYPES.code_of,
}


def to_label(kind: OptionKind, code: str, *, work_type: str = "") -> str:
    if kind == "work_content":
        return work_content_label(work_type, code)
    return _TO_LABEL[kind](code)


def to_code(kind: OptionKind, label: str, *, work_type: str = "") -> str:
    if kind == "work_content":
        return work_content_code(work_type, label)
    return _TO_CODE[kind](label)
