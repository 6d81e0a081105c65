from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from safepermit.core.metrics import SubmissionMetrics
from safepermit.db.session import get_db_session


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


def get_metrics(request: Request) -> SubmissionMetrics:
    metrics = getattr(request.app.state, "metrics", None)
    if metrics is None:
        metrics = SubmissionMetrics()
        request.app.state.metrics = metrics
    return metrics
