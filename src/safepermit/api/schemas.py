from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from safepermit.types import CamelModel


class SubmitResponse(CamelModel):
    success: bool = True
    application_number: str
    message: str = "申请提交成功"


class ErrorResponse(CamelModel):
    error: str
    details: dict[str, str] = Field(default_factory=dict)
    message: str = ""


class DeleteApplicationResponse(CamelModel):
    success: bool = True
    application_number: str
    deleted_count: int
    persons_deleted: int = 0
    message: str = "申请记录已删除"


class PurgeResponse(CamelModel):
    success: bool = True
    deleted_count: int
    persons_deleted: int = 0
    message: str = "所有申请记录已删除"


class UserResponse(CamelModel):
    phone_number: str
    name: str | None = None
    created_at: datetime
    last_login_at: datetime
    is_new_user: bool = False


class MetricsResponse(CamelModel):
    running: bool
    started_at: str | None = None
    counters: dict[str, int] = Field(default_factory=dict)
    durations: dict[str, dict[str, Any]] = Field(default_factory=dict)
