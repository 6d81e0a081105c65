from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from safepermit.core.errors import (
    ApplicationNotFoundError,
    ApplicationNumberConflictError,
    FormValidationError,
    PermitError,
    TransientStoreError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "提交失败，请稍后重试"


def error_response(status_code: int, error: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


async def validation_error_handler(request: Request, exc: FormValidationError) -> JSONResponse:
    return error_response(
        400,
        exc.summary,
        details=exc.errors,
        message="请检查并修正表单中的错误信息后重新提交",
    )


async def permit_error_handler(request: Request, exc: PermitError) -> JSONResponse:
    """Map service failures to status codes; internal details stay in the log."""
    if isinstance(exc, ApplicationNotFoundError):
        return error_response(404, "申请记录不存在")
    if isinstance(exc, UserNotFoundError):
        return error_response(404, "用户不存在")
    if isinstance(exc, ApplicationNumberConflictError):
        return error_response(409, "申请编号冲突，请重新提交")
    if isinstance(exc, TransientStoreError):
        return error_response(503, "服务暂时不可用，请稍后重试")

    logger.error("Request failed path=%s type=%s", request.url.path, type(exc).__name__)
    return error_response(500, GENERIC_FAILURE_MESSAGE)


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FormValidationError, validation_error_handler)
    app.add_exception_handler(PermitError, permit_error_handler)
