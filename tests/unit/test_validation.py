from __future__ import annotations

from datetime import date, timedelta

import pytest

from conftest import build_form, build_person
from safepermit.core.validation import (
    validate_basis_number,
    validate_form,
    validate_id_number,
    validate_phone_number,
)

TODAY = date(2024, 3, 5)


def _form(**overrides):
    overrides.setdefault("startDate", (TODAY + timedelta(days=1)).isoformat())
    return build_form(**overrides)


def test_valid_form_has_no_errors() -> None:
    assert validate_form(_form(), today=TODAY) == {}


def test_start_date_today_is_accepted_and_yesterday_rejected() -> None:
    assert validate_form(_form(startDate=TODAY.isoformat()), today=TODAY) == {}
    errors = validate_form(_form(startDate=(TODAY - timedelta(days=1)).isoformat()), today=TODAY)
    assert set(errors) == {"startDate"}


def test_validator_is_total_for_any_input() -> None:
    for candidate in (
        None,
        [],
        "form",
        42,
        {},
        {"accompanyingCount": "many"},
        {"accompanyingCount": float("inf")},
        {"accompanyingCount": float("nan")},
        {"accompanyingCount": 2.5},
    ):
        errors = validate_form(candidate, today=TODAY)
        assert isinstance(errors, dict)
        assert errors


def test_empty_candidate_reports_every_required_field() -> None:
    errors = validate_form({}, today=TODAY)
    for field in (
        "name",
        "idNumber",
        "companyName",
        "phoneNumber",
        "startDate",
        "startTime",
        "workingHours",
        "workLocation",
        "workType",
        "workContent",
        "notifierName",
        "notifierNumber",
        "notifierDepartment",
        "dangerTypes",
    ):
        assert field in errors


@pytest.mark.parametrize(
    "field",
    ["projectName", "vehicleNumber", "trackPosition", "workBasis", "basisNumber"],
)
def test_quality_rework_field_required_independently(field: str) -> None:
    errors = validate_form(_form(**{field: ""}), today=TODAY)
    assert set(errors) == {field}


def test_quality_rework_block_inactive_for_other_work_types() -> None:
    form = _form(
        workType="field_research",
        workContent="visit_research",
        projectName="",
        vehicleNumber="",
        trackPosition="",
        workBasis="",
        basisNumber="",
    )
    assert validate_form(form, today=TODAY) == {}


@pytest.mark.parametrize(
    ("basis", "number", "accepted"),
    [
        ("ncr", "NCR-2024-001", True),
        ("ncr", "myNCRnum", True),
        ("ncr", "REWORK-001", False),
        ("design_change", "CM2024", True),
        ("design_change", "CHANGE2024", False),
        ("nonconformity", "x", True),
        ("other", "ABCDEF", True),
        ("other", "ABC", False),
    ],
)
def test_basis_number_format(basis: str, number: str, accepted: bool) -> None:
    assert validate_basis_number(number, basis) is accepted


def test_basis_number_mismatch_is_reported() -> None:
    errors = validate_form(_form(workBasis="design_change", basisNumber="CHANGE2024"), today=TODAY)
    assert set(errors) == {"basisNumber"}


def test_id_number_rejects_impossible_dates() -> None:
    assert validate_id_number("110101200002291234")
    assert not validate_id_number("110101190002291234")
    assert validate_id_number("110101199602291234")
    assert not validate_id_number("110101199702291234")
    assert not validate_id_number("110101199013011234")
    assert validate_id_number("11010119900101123X")


def test_phone_number_format() -> None:
    assert validate_phone_number("13800138000")
    assert not validate_phone_number("12800138000")
    assert not validate_phone_number("1380013800")


def test_unknown_working_hours_code_rejected() -> None:
    errors = validate_form(_form(workingHours="forever"), today=TODAY)
    assert set(errors) == {"workingHours"}


def test_notifier_number_must_be_twelve_digits() -> None:
    errors = validate_form(_form(notifierNumber="12345"), today=TODAY)
    assert set(errors) == {"notifierNumber"}


def test_person_count_must_match_list() -> None:
    errors = validate_form(_form(accompanyingCount=2, accompanyingPersons=[build_person(0)]), today=TODAY)
    assert set(errors) == {"accompanyingPersons"}


def test_negative_person_count_rejected() -> None:
    errors = validate_form(_form(accompanyingCount=-1), today=TODAY)
    assert set(errors) == {"accompanyingCount"}


def test_person_errors_are_keyed_by_index() -> None:
    persons = [build_person(0), build_person(1, idNumber="bad", phoneNumber="")]
    errors = validate_form(_form(accompanyingCount=2, accompanyingPersons=persons), today=TODAY)
    assert set(errors) == {"accompanyingPerson_1_idNumber", "accompanyingPerson_1_phoneNumber"}


def test_non_whole_or_infinite_person_counts_rejected() -> None:
    for count in (float("inf"), float("-inf"), float("nan"), 2.5, "2.5", 1e400):
        errors = validate_form(_form(accompanyingCount=count), today=TODAY)
        assert set(errors) == {"accompanyingCount"}


def test_whole_float_person_count_accepted() -> None:
    errors = validate_form(
        _form(accompanyingCount=1.0, accompanyingPersons=[build_person(0)]),
        today=TODAY,
    )
    assert errors == {}
