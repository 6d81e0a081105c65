from __future__ import annotations

import logging

from safepermit.config import get_settings


_LOG_CONFIGURED = False


def configure_logging() -> None:
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _LOG_CONFIGURED = True


def mask_phone(value: str | None) -> str:
    """Keep the first three and last four digits of a phone number for log lines."""
    if not value:
        return ""
    if not get_settings().redact_log_pii or len(value) < 8:
        return value
    return f"{value[:3]}****{value[-4:]}"


def mask_id_number(value: str | None) -> str:
    if not value:
        return ""
    if not get_settings().redact_log_pii or len(value) < 10:
        return value
    return f"{value[:6]}********{value[-4:]}"
