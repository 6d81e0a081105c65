from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class AccompanyingPersonInput(CamelModel):
    name: str
    id_number: str
    phone_number: str
    employee_number: str = ""
    department: str = ""

    @field_validator("name", "id_number", "phone_number", "employee_number", "department", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()


class SafetyWorkForm(CamelModel):
    """A candidate that already passed ``validate_form``."""

    name: str
    id_number: str
    company_name: str
    phone_number: str
    start_date: date
    start_time: str
    working_hours: str
    work_location: str
    work_type: str
    work_content: str
    is_product_work: bool | None = None
    project_name: str = ""
    vehicle_number: str = ""
    track_position: str = ""
    product_quantity: str = ""
    work_basis: str = ""
    basis_number: str = ""
    danger_types: list[str] = Field(default_factory=list)
    notifier_name: str = ""
    notifier_number: str = ""
    notifier_department: str = ""
    notifier_phone: str = ""
    applicant_employee_number: str = ""
    applicant_department: str = ""
    accompanying_count: int = 0
    accompanying_persons: list[AccompanyingPersonInput] = Field(default_factory=list)

    @field_validator(
        "name",
        "id_number",
        "company_name",
        "phone_number",
        "start_time",
        "working_hours",
        "work_location",
        "work_type",
        "work_content",
        "project_name",
        "vehicle_number",
        "track_position",
        "product_quantity",
        "work_basis",
        "basis_number",
        "notifier_name",
        "notifier_number",
        "notifier_department",
        "notifier_phone",
        "applicant_employee_number",
        "applicant_department",
        mode="before",
    )
    @classmethod
    def strip_text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("start_date", mode="before")
    @classmethod
    def date_only(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            return value.strip()[:10]
        return value

    @field_validator("danger_types", mode="before")
    @classmethod
    def listify_danger_types(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [str(item).strip() for item in value if item is not None and str(item).strip()]

    @field_validator("accompanying_persons", mode="before")
    @classmethod
    def default_persons(cls, value: Any) -> Any:
        return [] if value is None else value


class SubmissionResult(BaseModel):
    application_number: str
    attempts: int = 1


class DeletionResult(BaseModel):
    found: bool
    applications_deleted: int = 0
    persons_deleted: int = 0

    @property
    def rows_deleted(self) -> int:
        return self.applications_deleted + self.persons_deleted
