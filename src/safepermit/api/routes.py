from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from safepermit.api.deps import get_db, get_metrics
from safepermit.api.schemas import (
    DeleteApplicationResponse,
    MetricsResponse,
    PurgeResponse,
    SubmitResponse,
    UserResponse,
)
from safepermit.core.errors import ApplicationNotFoundError
from safepermit.core.history import ApplicationQueryService
from safepermit.core.metrics import SubmissionMetrics
from safepermit.core.options import options_catalog
from safepermit.core.submission import SubmissionOrchestrator
from safepermit.core.users import UserService, require_phone
from safepermit.db.models import User

router = APIRouter(prefix="/api", tags=["api"])


def _user_response(user: User, *, is_new_user: bool = False) -> UserResponse:
    return UserResponse(
        phone_number=user.phone,
        name=user.name,
        created_at=user.created_at,
        last_login_at=user.last_login,
        is_new_user=is_new_user,
    )


@router.post("/safety/submit", response_model=SubmitResponse)
def submit_application(
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    metrics: SubmissionMetrics = Depends(get_metrics),
) -> SubmitResponse:
    orchestrator = SubmissionOrchestrator(db, metrics=metrics)
    result = orchestrator.submit(payload)
    return SubmitResponse(application_number=result.application_number)


@router.get("/safety/user-applications/{phone}")
def list_user_applications(
    phone: str,
    response: Response,
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    metrics: SubmissionMetrics = Depends(get_metrics),
) -> list[dict[str, Any]]:
    phone = require_phone(phone)
    service = ApplicationQueryService(db, metrics=metrics)
    page = service.list_for_user(phone, limit=limit, offset=offset)
    response.headers["X-Total-Count"] = str(page["total"])
    return page["items"]


@router.delete("/safety/user-applications/{phone}", response_model=PurgeResponse)
def delete_user_applications(
    phone: str,
    db: Session = Depends(get_db),
    metrics: SubmissionMetrics = Depends(get_metrics),
) -> PurgeResponse:
    phone = require_phone(phone)
    result = ApplicationQueryService(db, metrics=metrics).delete_all_for_user(phone)
    return PurgeResponse(deleted_count=result.applications_deleted, persons_deleted=result.persons_deleted)


@router.get("/safety/applications/{application_number}")
def get_application(
    application_number: str,
    db: Session = Depends(get_db),
    metrics: SubmissionMetrics = Depends(get_metrics),
) -> dict[str, Any]:
    return ApplicationQueryService(db, metrics=metrics).get(application_number.strip())


@router.get("/safety/applications/{application_number}/prefill")
def prefill_application(
    application_number: str,
    db: Session = Depends(get_db),
    metrics: SubmissionMetrics = Depends(get_metrics),
) -> dict[str, Any]:
    return ApplicationQueryService(db, metrics=metrics).prefill(application_number.strip())


@router.delete("/safety/applications/{application_number}", response_model=DeleteApplicationResponse)
def delete_application(
    application_number: str,
    db: Session = Depends(get_db),
    metrics: SubmissionMetrics = Depends(get_metrics),
) -> DeleteApplicationResponse:
    application_number = application_number.strip()
    if not application_number:
        raise HTTPException(status_code=400, detail="申请编号不能为空")
    result = ApplicationQueryService(db, metrics=metrics).delete(application_number)
    if not result.found:
        raise ApplicationNotFoundError(application_number)
    return DeleteApplicationResponse(
        application_number=application_number,
        deleted_count=result.applications_deleted,
        persons_deleted=result.persons_deleted,
    )


@router.get("/safety/user/{phone}", response_model=UserResponse)
def get_user(phone: str, db: Session = Depends(get_db)) -> UserResponse:
    user, created = UserService(db).get_or_create(phone)
    return _user_response(user, is_new_user=created)


@router.put("/safety/user/{phone}", response_model=UserResponse)
def touch_user(phone: str, db: Session = Depends(get_db)) -> UserResponse:
    user = UserService(db).touch_login(phone)
    return _user_response(user)


@router.get("/options")
def list_options() -> dict[str, Any]:
    return options_catalog()


@router.get("/metrics", response_model=MetricsResponse)
def metrics_snapshot(metrics: SubmissionMetrics = Depends(get_metrics)) -> MetricsResponse:
    return MetricsResponse.model_validate(metrics.snapshot())
