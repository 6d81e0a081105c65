from __future__ import annotations

import os
import tempfile
from datetime import timedelta
from pathlib import Path
from typing import Any

import pytest

os.environ.setdefault("DATABASE_URL", f"sqlite:///{Path(tempfile.gettempdir()) / 'safepermit-test.db'}")
os.environ.setdefault("APP_ENV", "test")

from safepermit.core.derivation import local_today  # noqa: E402
from safepermit.db.base import Base  # noqa: E402
from safepermit.db import models  # noqa: E402,F401
from safepermit.db.session import engine  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


def build_form(**overrides: Any) -> dict[str, Any]:
    """A quality-rework application that passes validation as-is."""
    form: dict[str, Any] = {
        "name": "张三",
        "idNumber": "110101199001011234",
        "companyName": "示例公司A",
        "phoneNumber": "13800138000",
        "startDate": (local_today() + timedelta(days=1)).isoformat(),
        "startTime": "morning",
        "workingHours": "half_day",
        "workLocation": "old_debugging",
        "workType": "quality_rework",
        "workContent": "ncr_rework",
        "projectName": "项目Alpha",
        "vehicleNumber": "V001",
        "trackPosition": "T1",
        "workBasis": "ncr",
        "basisNumber": "NCR-001",
        "dangerTypes": ["high_altitude"],
        "notifierName": "李四",
        "notifierNumber": "123456789012",
        "notifierDepartment": "安全部",
        "accompanyingCount": 0,
    }
    form.update(overrides)
    return form


def build_person(index: int = 0, **overrides: Any) -> dict[str, Any]:
    person = {
        "name": f"随行{index + 1}",
        "idNumber": f"11010119850{index % 9 + 1}011234",
        "phoneNumber": f"1390000{index:04d}",
    }
    person.update(overrides)
    return person


@pytest.fixture
def valid_form() -> dict[str, Any]:
    return build_form()
