"""Field-level validation of a candidate safety-work application.

``validate_form`` accepts any input shape and never raises. Each rule
reports independently so the caller can show every problem at once.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from safepermit.core.derivation import local_today
from safepermit.core.options import QUALITY_REWORK, WORKING_HOURS_DURATION

PHONE_PATTERN = re.compile(r"^1[3-9]\d{9}$")
ID_NUMBER_PATTERN = re.compile(
    r"^[1-9]\d{5}(?P<year>(18|19|20)\d{2})(?P<month>0[1-9]|1[0-2])(?P<day>0[1-9]|[12]\d|3[01])\d{3}[0-9Xx]$"
)
EMPLOYEE_NUMBER_PATTERN = re.compile(r"^\d{12}$")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def validate_phone_number(phone: Any) -> bool:
    return bool(PHONE_PATTERN.match(_text(phone)))


def validate_id_number(id_number: Any) -> bool:
    match = ID_NUMBER_PATTERN.match(_text(id_number))
    if not match:
        return False
    try:
        date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError:
        return False
    return True


def validate_employee_number(employee_number: Any) -> bool:
    return bool(EMPLOYEE_NUMBER_PATTERN.match(_text(employee_number)))


def validate_basis_number(basis_number: Any, work_basis: Any) -> bool:
    number = _text(basis_number)
    if not number:
        return False

    basis = _text(work_basis)
    if basis == "ncr":
        return "ncr" in number.lower()
    if basis == "design_change":
        return "cm" in number.lower()
    if basis == "nonconformity":
        return True
    return len(number) >= 6


def parse_start_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(_text(value)[:10])
    except ValueError:
        return None


def _accompanying_count(value: Any) -> int | None:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        return None
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return count if count >= 0 else None


def _validate_person(errors: dict[str, str], index: int, person: Any) -> None:
    data = person if isinstance(person, Mapping) else {}
    position = index + 1
    prefix = f"accompanyingPerson_{index}"

    if not _text(data.get("name")):
        errors[f"{prefix}_name"] = f"随行人员{position}姓名不能为空"

    id_number = _text(data.get("idNumber"))
    if not id_number:
        errors[f"{prefix}_idNumber"] = f"随行人员{position}身份证号不能为空"
    elif not validate_id_number(id_number):
        errors[f"{prefix}_idNumber"] = f"随行人员{position}身份证号格式不正确"

    phone = _text(data.get("phoneNumber"))
    if not phone:
        errors[f"{prefix}_phoneNumber"] = f"随行人员{position}联系电话不能为空"
    elif not validate_phone_number(phone):
        errors[f"{prefix}_phoneNumber"] = f"随行人员{position}手机号码格式不正确"


def validate_form(candidate: Any, *, today: date | None = None) -> dict[str, str]:
    form: Mapping[str, Any] = candidate if isinstance(candidate, Mapping) else {}
    errors: dict[str, str] = {}

    if not _text(form.get("name")):
        errors["name"] = "姓名不能为空"

    id_number = _text(form.get("idNumber"))
    if not id_number:
        errors["idNumber"] = "身份证号不能为空"
    elif not validate_id_number(id_number):
        errors["idNumber"] = "身份证号格式不正确"

    if not _text(form.get("companyName")):
        errors["companyName"] = "公司名称不能为空"

    phone = _text(form.get("phoneNumber"))
    if not phone:
        errors["phoneNumber"] = "联系电话不能为空"
    elif not validate_phone_number(phone):
        errors["phoneNumber"] = "手机号码格式不正确"

    raw_start_date = form.get("startDate")
    if not _text(raw_start_date):
        errors["startDate"] = "计划开工日期不能为空"
    else:
        start_date = parse_start_date(raw_start_date)
        if start_date is None:
            errors["startDate"] = "计划开工日期格式不正确"
        elif start_date < (today or local_today()):
            errors["startDate"] = "开工日期不能早于今天"

    if not _text(form.get("startTime")):
        errors["startTime"] = "开工开始时间不能为空"

    working_hours = _text(form.get("workingHours"))
    if not working_hours:
        errors["workingHours"] = "工作时长不能为空"
    elif working_hours not in WORKING_HOURS_DURATION:
        errors["workingHours"] = "工作时长选项无效"

    if not _text(form.get("workLocation")):
        errors["workLocation"] = "作业地点不能为空"

    work_type = _text(form.get("workType"))
    if not work_type:
        errors["workType"] = "作业类型不能为空"

    if not _text(form.get("workContent")):
        errors["workContent"] = "作业内容不能为空"

    if work_type == QUALITY_REWORK:
        if not _text(form.get("projectName")):
            errors["projectName"] = "项目名称不能为空"
        if not _text(form.get("vehicleNumber")):
            errors["vehicleNumber"] = "车号不能为空"
        if not _text(form.get("trackPosition")):
            errors["trackPosition"] = "车道/台位不能为空"
        if not _text(form.get("workBasis")):
            errors["workBasis"] = "作业依据不能为空"
        if not _text(form.get("basisNumber")):
            errors["basisNumber"] = "依据编号不能为空"
        elif not validate_basis_number(form.get("basisNumber"), form.get("workBasis")):
            errors["basisNumber"] = "依据编号格式不正确"

    if not _text(form.get("notifierName")):
        errors["notifierName"] = "对接人姓名不能为空"

    notifier_number = _text(form.get("notifierNumber"))
    if not notifier_number:
        errors["notifierNumber"] = "对接人工号不能为空"
    elif not validate_employee_number(notifier_number):
        errors["notifierNumber"] = "对接人工号格式不正确（12位数字）"

    if not _text(form.get("notifierDepartment")):
        errors["notifierDepartment"] = "所属部门不能为空"

    danger_types = form.get("dangerTypes")
    if isinstance(danger_types, str):
        danger_types = [danger_types]
    if not isinstance(danger_types, (list, tuple)) or not [item for item in danger_types if _text(item)]:
        errors["dangerTypes"] = "危险作业类型不能为空，请至少选择一项"

    count = _accompanying_count(form.get("accompanyingCount"))
    if count is None:
        errors["accompanyingCount"] = "随行人数格式不正确"
    elif count > 0:
        persons = form.get("accompanyingPersons")
        if not isinstance(persons, (list, tuple)) or len(persons) != count:
            errors["accompanyingPersons"] = "随行人员信息不完整"
        else:
            for index, person in enumerate(persons):
                _validate_person(errors, index, person)

    return errors
