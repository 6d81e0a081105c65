from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from safepermit.config import Settings, get_settings
from safepermit.core import labels
from safepermit.core.derivation import hours_between
from safepermit.core.errors import ApplicationNotFoundError
from safepermit.core.metrics import SubmissionMetrics
from safepermit.db.models import SafeForm
from safepermit.db.repositories import Repository
from safepermit.db.session import transaction_scope
from safepermit.logging_config import mask_phone
from safepermit.types import DeletionResult

logger = logging.getLogger(__name__)


def project_application(form: SafeForm) -> dict[str, Any]:
    """Rebuild the submission shape of a stored application, with display labels."""
    persons = [
        {
            "name": person.name,
            "idNumber": person.id_number,
            "phoneNumber": person.phone,
            "employeeNumber": person.employee_number,
            "department": person.department,
        }
        for person in form.persons
    ]
    return {
        "applicationNumber": form.application_number,
        "userId": form.user_id,
        "name": form.applicant_name,
        "idNumber": form.applicant_id,
        "companyName": form.work_company,
        "phoneNumber": form.applicant_phone,
        "applicantEmployeeNumber": form.applicant_employee_number,
        "applicantDepartment": form.applicant_department,
        "startDate": form.work_start_time.date().isoformat(),
        "startTime": labels.start_time_label_for(form.work_start_time.time()),
        "workingHours": hours_between(form.work_start_time, form.work_end_time),
        "workLocation": labels.work_location_label(form.work_location),
        "workType": labels.work_type_label(form.work_type),
        "workContent": labels.work_content_label(form.work_type, form.work_content),
        "isProductWork": form.is_product_work,
        "projectName": form.work_project,
        "vehicleNumber": form.product_name or "",
        "trackPosition": form.product_specification or "",
        "productQuantity": form.product_quantity or "",
        "workBasis": labels.work_basis_label(form.work_basis or ""),
        "basisNumber": form.basis_number or "",
        "dangerTypes": labels.hazard_types_label(form.danger_types),
        "notifierName": form.notifier_name,
        "notifierNumber": form.notifier_employee_number,
        "notifierDepartment": form.notifier_department,
        "notifierPhone": form.notifier_phone,
        "accompanyingCount": len(persons),
        "accompanyingPersons": persons,
        "submitTime": form.created_at.isoformat() if form.created_at else None,
    }


def prefill_candidate(projection: dict[str, Any]) -> dict[str, Any]:
    """Turn a projection back into form codes for a new submission.

    The application number and start date are left out; a pre-filled form
    always gets a fresh number and a new date from the applicant.
    """
    work_type = labels.work_type_code(projection["workType"])
    hours = projection.get("workingHours")
    return {
        "name": projection["name"],
        "idNumber": projection["idNumber"],
        "companyName": projection["companyName"],
        "phoneNumber": projection["phoneNumber"],
        "applicantEmployeeNumber": projection.get("applicantEmployeeNumber", ""),
        "applicantDepartment": projection.get("applicantDepartment", ""),
        "startTime": labels.start_time_code(projection["startTime"]),
        "workingHours": labels.working_hours_code_for(hours) if isinstance(hours, int) else "",
        "workLocation": labels.work_location_code(projection["workLocation"]),
        "workType": work_type,
        "workContent": labels.work_content_code(work_type, projection["workContent"]),
        "isProductWork": projection["isProductWork"],
        "projectName": projection["projectName"],
        "vehicleNumber": projection["vehicleNumber"],
        "trackPosition": projection["trackPosition"],
        "productQuantity": projection["productQuantity"],
        "workBasis": labels.work_basis_code(projection["workBasis"]),
        "basisNumber": projection["basisNumber"],
        "dangerTypes": labels.hazard_types_codes(projection["dangerTypes"]),
        "notifierName": projection["notifierName"],
        "notifierNumber": projection["notifierNumber"],
        "notifierDepartment": projection["notifierDepartment"],
        "notifierPhone": projection["notifierPhone"],
        "accompanyingCount": projection["accompanyingCount"],
        "accompanyingPersons": [dict(person) for person in projection["accompanyingPersons"]],
    }


class ApplicationQueryService:
    def __init__(
        self,
        session: Session,
        *,
        settings: Settings | None = None,
        metrics: SubmissionMetrics | None = None,
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.repo = Repository(session)
        self.metrics = metrics or SubmissionMetrics()

    def clamp_limit(self, limit: int | None) -> int:
        if limit is None or limit <= 0:
            return self.settings.history_default_limit
        return min(limit, self.settings.history_max_limit)

    def list_for_user(self, phone: str, *, limit: int | None = None, offset: int = 0) -> dict[str, Any]:
        if offset < 0:
            raise ValueError("offset must be >= 0")
        effective_limit = self.clamp_limit(limit)
        forms = self.repo.list_applications_for_user(phone, limit=effective_limit, offset=offset)
        total = self.repo.count_applications_for_user(phone)
        self.metrics.increment("history.viewed")
        logger.info(
            "History viewed phone=%s returned=%s total=%s offset=%s",
            mask_phone(phone),
            len(forms),
            total,
            offset,
        )
        return {
            "total": total,
            "limit": effective_limit,
            "offset": offset,
            "items": [project_application(form) for form in forms],
        }

    def get(self, application_number: str) -> dict[str, Any]:
        form = self.repo.get_application(application_number)
        if form is None:
            raise ApplicationNotFoundError(application_number)
        return project_application(form)

    def prefill(self, application_number: str) -> dict[str, Any]:
        return prefill_candidate(self.get(application_number))

    def delete(self, application_number: str) -> DeletionResult:
        with transaction_scope(self.session):
            forms, persons = self.repo.delete_application(application_number)
        if not forms:
            logger.info("Delete skipped, not found application_number=%s", application_number)
            return DeletionResult(found=False)
        self.metrics.increment("applications.deleted", forms)
        logger.info(
            "Application deleted application_number=%s persons=%s",
            application_number,
            persons,
        )
        return DeletionResult(found=True, applications_deleted=forms, persons_deleted=persons)

    def delete_all_for_user(self, phone: str) -> DeletionResult:
        with transaction_scope(self.session):
            forms, persons = self.repo.delete_applications_for_user(phone)
        if forms:
            self.metrics.increment("applications.deleted", forms)
        logger.info(
            "Applications purged phone=%s applications=%s persons=%s",
            mask_phone(phone),
            forms,
            persons,
        )
        return DeletionResult(found=forms > 0, applications_deleted=forms, persons_deleted=persons)
