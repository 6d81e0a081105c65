from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from safepermit.api.errors import setup_exception_handlers
from safepermit.api.routes import router as api_router
from safepermit.config import get_settings
from safepermit.core.metrics import SubmissionMetrics
from safepermit.db.init import init_database
from safepermit.db.session import SessionLocal

logger = logging.getLogger(__name__)


def create_app(metrics: SubmissionMetrics | None = None) -> FastAPI:
    settings = get_settings()
    metrics = metrics or SubmissionMetrics()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_database()
        metrics.start()
        logger.info("Started %s env=%s", settings.app_name, settings.app_env)
        try:
            yield
        finally:
            metrics.stop()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.metrics = metrics
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)

    @app.get("/health")
    def health() -> JSONResponse:
        try:
            with SessionLocal() as db:
                db.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Health check failed: %s", exc.__class__.__name__)
            return JSONResponse({"status": "degraded", "database": "unreachable"}, status_code=503)
        return JSONResponse({"status": "ok", "database": "ok"})

    app.include_router(api_router)
    return app
