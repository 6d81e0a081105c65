from __future__ import annotations

import pytest

from safepermit.core.errors import FormValidationError, UserNotFoundError
from safepermit.core.users import UserService
from safepermit.db.session import SessionLocal


def test_get_or_create_creates_once() -> None:
    with SessionLocal() as db:
        service = UserService(db)
        user, created = service.get_or_create("13800138000")
        again, created_again = service.get_or_create("13800138000")

        assert created is True
        assert created_again is False
        assert again.id == user.id


def test_touch_login_updates_last_login() -> None:
    with SessionLocal() as db:
        service = UserService(db)
        user, _ = service.get_or_create("13800138000")
        before = user.last_login

        touched = service.touch_login("13800138000")
        assert touched.last_login >= before


def test_touch_login_unknown_user() -> None:
    with SessionLocal() as db:
        with pytest.raises(UserNotFoundError):
            UserService(db).touch_login("13900139000")


def test_invalid_phone_rejected() -> None:
    with SessionLocal() as db:
        with pytest.raises(FormValidationError) as excinfo:
            UserService(db).get_or_create("12345")
        assert set(excinfo.value.errors) == {"phoneNumber"}
