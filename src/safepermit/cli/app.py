from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
import uvicorn

from safepermit.api.app import create_app
from safepermit.config import get_settings
from safepermit.core.errors import FormValidationError, PermitError
from safepermit.core.history import ApplicationQueryService
from safepermit.core.options import options_catalog
from safepermit.core.submission import SubmissionOrchestrator
from safepermit.db.init import init_database
from safepermit.db.session import SessionLocal
from safepermit.logging_config import configure_logging

app = typer.Typer(help="SafePermit CLI")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


def _echo(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _fail(exc: PermitError) -> NoReturn:
    payload: dict[str, Any] = {"ok": False, "error": str(exc)}
    if isinstance(exc, FormValidationError):
        payload["details"] = exc.errors
    _echo(payload)
    raise typer.Exit(code=1)


@app.command("init")
def init_cmd() -> None:
    """Create the data directory and the database schema."""
    configure_logging()
    result = init_database()
    _echo({"ok": True, **result})


@app.command("submit")
def submit_cmd(file: Path = typer.Option(..., "--file", exists=True, readable=True)) -> None:
    """Submit a form read from a JSON file."""
    configure_logging()
    ensure_initialized()
    payload = json.loads(file.read_text(encoding="utf-8"))
    with SessionLocal() as db:
        try:
            result = SubmissionOrchestrator(db).submit(payload)
        except PermitError as exc:
            _fail(exc)
        _echo({"ok": True, "applicationNumber": result.application_number, "attempts": result.attempts})


@app.command("history")
def history_cmd(
    phone: str = typer.Option(..., "--phone"),
    limit: int | None = typer.Option(None, "--limit"),
    offset: int = typer.Option(0, "--offset", min=0),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        _echo(ApplicationQueryService(db).list_for_user(phone, limit=limit, offset=offset))


@app.command("show")
def show_cmd(number: str = typer.Option(..., "--number")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        try:
            _echo(ApplicationQueryService(db).get(number))
        except PermitError as exc:
            _fail(exc)


@app.command("prefill")
def prefill_cmd(number: str = typer.Option(..., "--number")) -> None:
    """Print a stored application as form codes, ready to edit and resubmit."""
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        try:
            _echo(ApplicationQueryService(db).prefill(number))
        except PermitError as exc:
            _fail(exc)


@app.command("delete")
def delete_cmd(number: str = typer.Option(..., "--number")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        result = ApplicationQueryService(db).delete(number)
    _echo({"ok": result.found, **result.model_dump(), "rows_deleted": result.rows_deleted})
    if not result.found:
        raise typer.Exit(code=1)


@app.command("purge")
def purge_cmd(phone: str = typer.Option(..., "--phone")) -> None:
    """Delete every application owned by a phone number."""
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        result = ApplicationQueryService(db).delete_all_for_user(phone)
    _echo({"ok": True, **result.model_dump(), "rows_deleted": result.rows_deleted})


@app.command("options")
def options_cmd() -> None:
    _echo(options_catalog())


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
) -> None:
    configure_logging()
    ensure_initialized()
    settings = get_settings()
    app_instance = create_app()
    uvicorn.run(app_instance, host=host or settings.app_host, port=port or settings.app_port)
