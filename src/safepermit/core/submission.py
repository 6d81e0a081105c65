from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import DisconnectionError, IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session
from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt

from safepermit.config import Settings, get_settings
from safepermit.core import labels
from safepermit.core.derivation import (
    format_submit_time,
    generate_application_number,
    local_now,
    work_window,
)
from safepermit.core.errors import (
    ApplicationNumberConflictError,
    FormValidationError,
    SubmissionFailedError,
    TransientStoreError,
)
from safepermit.core.metrics import SubmissionMetrics
from safepermit.core.options import QUALITY_REWORK
from safepermit.core.validation import validate_form
from safepermit.db.repositories import Repository
from safepermit.db.session import transaction_scope
from safepermit.logging_config import mask_id_number, mask_phone
from safepermit.types import AccompanyingPersonInput, SafetyWorkForm, SubmissionResult

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (OperationalError, DisconnectionError, PoolTimeoutError)

# Unique keys whose violation means "try again with a new number". The
# users.phone entry covers two first submissions racing for the same user;
# the retry finds the row the other request committed.
RETRYABLE_UNIQUE_KEYS: dict[str, tuple[str, ...]] = {
    "safe_forms.application_number": ("safe_forms.application_number", "ix_safe_forms_application_number"),
    "safeformhead.applicationNumber": ("safeformhead.applicationNumber", "safeformhead_applicationNumber"),
    "users.phone": ("users.phone", "ix_users_phone"),
}


class UniqueKeyCollision(Exception):
    def __init__(self, key: str, application_number: str):
        self.key = key
        self.application_number = application_number
        super().__init__(f"unique key collision on {key} application_number={application_number}")


def collided_unique_key(exc: IntegrityError) -> str | None:
    """Name of the retryable unique key ``exc`` violated, or None for any other integrity failure."""
    message = str(exc.orig)
    unique_violation = "unique" in message.lower() or "duplicate" in message.lower()
    constraint = getattr(getattr(exc.orig, "diag", None), "constraint_name", None) or ""
    for key, markers in RETRYABLE_UNIQUE_KEYS.items():
        if constraint in markers:
            return key
        if unique_violation and any(marker in message for marker in markers):
            return key
    return None


def build_sync_head(
    form: SafetyWorkForm,
    *,
    application_number: str,
    submitted_at: datetime,
    is_product_work: bool,
    accompanying_count: int,
) -> dict[str, Any]:
    """Human-readable copy of an application for the external sync table."""
    return {
        "application_number": application_number,
        "name": form.name,
        "id_number": form.id_number,
        "company_name": form.company_name,
        "phone_number": form.phone_number,
        "submit_time": format_submit_time(submitted_at),
        "start_date": form.start_date.isoformat(),
        "start_time": labels.start_time_label(form.start_time),
        "working_hours": labels.working_hours_label(form.working_hours),
        "work_location": labels.work_location_label(form.work_location),
        "work_type": labels.work_type_label(form.work_type),
        "is_product_work": is_product_work,
        "project_name": form.project_name,
        "vehicle_number": form.vehicle_number,
        "track_position": form.track_position,
        "work_content": labels.work_content_label(form.work_type, form.work_content),
        "work_basis": labels.work_basis_label(form.work_basis),
        "basis_number": form.basis_number,
        "danger_types": labels.hazard_types_label(form.danger_types),
        "notifier_name": form.notifier_name or form.name,
        "notifier_number": form.notifier_number,
        "notifier_department": form.notifier_department,
        "accompanying_count": accompanying_count,
    }


def _schema_errors(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for item in exc.errors():
        key = "_".join(str(part) for part in item.get("loc", ())) or "form"
        errors.setdefault(key, "字段格式不正确")
    return errors


class SubmissionOrchestrator:
    """The single write path for safety-work applications.

    One attempt writes user, application, persons and both sync tables in
    one transaction. A unique-key collision rolls the attempt back and
    retries with a freshly generated application number.
    """

    def __init__(
        self,
        session: Session,
        *,
        settings: Settings | None = None,
        metrics: SubmissionMetrics | None = None,
        number_factory: Callable[[datetime], str] | None = None,
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.repo = Repository(session)
        self.metrics = metrics or SubmissionMetrics()
        self.number_factory = number_factory or generate_application_number

    def submit(self, candidate: Mapping[str, Any] | Any) -> SubmissionResult:
        started = time.perf_counter()
        today = local_now(self.settings.timezone).date()
        errors = validate_form(candidate, today=today)
        if errors:
            self.metrics.increment("submission.rejected")
            logger.info("Submission rejected fields=%s", ",".join(sorted(errors)))
            raise FormValidationError(errors)

        try:
            form = SafetyWorkForm.model_validate(candidate)
        except ValidationError as exc:
            self.metrics.increment("submission.rejected")
            raise FormValidationError(_schema_errors(exc)) from exc

        max_attempts = self.settings.application_number_retries
        retrying = Retrying(
            stop=stop_after_attempt(max_attempts),
            retry=retry_if_exception_type(UniqueKeyCollision),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    application_number = self._attempt(form)
                    attempts = attempt.retry_state.attempt_number
        except UniqueKeyCollision as exc:
            self.metrics.increment("submission.failed")
            logger.warning("Submission gave up after %s attempts, last collision on %s", max_attempts, exc.key)
            raise ApplicationNumberConflictError(max_attempts) from exc
        except TRANSIENT_ERRORS as exc:
            self.metrics.increment("submission.failed")
            logger.warning("Submission aborted, database unavailable: %s", exc.__class__.__name__)
            raise TransientStoreError("database unavailable") from exc
        except Exception as exc:
            self.metrics.increment("submission.failed")
            logger.exception("Submission failed phone=%s", mask_phone(form.phone_number))
            raise SubmissionFailedError("submission failed") from exc

        elapsed = time.perf_counter() - started
        self.metrics.increment("submission.committed")
        self.metrics.observe("submission", elapsed)
        logger.info(
            "Submission committed application_number=%s phone=%s id=%s work_type=%s persons=%s elapsed_ms=%.1f",
            application_number,
            mask_phone(form.phone_number),
            mask_id_number(form.id_number),
            form.work_type,
            len(self._persons(form)),
            elapsed * 1000,
        )
        return SubmissionResult(application_number=application_number, attempts=attempts)

    def _attempt(self, form: SafetyWorkForm) -> str:
        """One write with a freshly generated number; returns the committed number."""
        submitted_at = local_now(self.settings.timezone)
        application_number = self.number_factory(submitted_at)
        try:
            self._write(form, application_number=application_number, submitted_at=submitted_at)
        except IntegrityError as exc:
            key = collided_unique_key(exc)
            if key is None:
                raise
            self.metrics.increment("submission.conflict")
            raise UniqueKeyCollision(key, application_number) from exc
        return application_number

    @staticmethod
    def _persons(form: SafetyWorkForm) -> list[AccompanyingPersonInput]:
        return list(form.accompanying_persons) if form.accompanying_count > 0 else []

    def _write(self, form: SafetyWorkForm, *, application_number: str, submitted_at: datetime) -> None:
        persons = self._persons(form)
        work_start, work_end = work_window(form.start_date, form.start_time, form.working_hours)
        is_product_work = (
            form.is_product_work if form.is_product_work is not None else form.work_type == QUALITY_REWORK
        )

        with transaction_scope(self.session):
            user = self.repo.get_user_by_phone(form.phone_number)
            if user is None:
                user = self.repo.create_user(form.phone_number, form.name)

            application = self.repo.add_application(
                application_number=application_number,
                user_id=user.id,
                applicant_name=form.name,
                applicant_id=form.id_number,
                applicant_phone=form.phone_number,
                applicant_employee_number=form.applicant_employee_number,
                applicant_department=form.applicant_department,
                work_company=form.company_name,
                work_project=form.project_name,
                work_location=form.work_location,
                work_type=form.work_type,
                work_content=form.work_content,
                work_start_time=work_start,
                work_end_time=work_end,
                is_product_work=is_product_work,
                product_name=form.vehicle_number or None,
                product_specification=form.track_position or None,
                product_quantity=form.product_quantity or None,
                work_basis=form.work_basis or None,
                basis_number=form.basis_number or None,
                danger_types=list(form.danger_types),
                notifier_name=form.notifier_name or form.name,
                notifier_employee_number=form.notifier_number,
                notifier_department=form.notifier_department,
                notifier_phone=form.notifier_phone or form.phone_number,
                created_at=submitted_at.astimezone(UTC),
            )

            for person in persons:
                self.repo.add_accompanying_person(application.id, person)

            self.repo.add_sync_head(
                **build_sync_head(
                    form,
                    application_number=application_number,
                    submitted_at=submitted_at,
                    is_product_work=is_product_work,
                    accompanying_count=len(persons),
                )
            )

            for person in persons:
                self.repo.add_sync_person(application_number, person)
