from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from safepermit.core.errors import FormValidationError, UserNotFoundError
from safepermit.core.validation import validate_phone_number
from safepermit.db.models import User
from safepermit.db.repositories import Repository
from safepermit.db.session import transaction_scope
from safepermit.logging_config import mask_phone

logger = logging.getLogger(__name__)


def require_phone(phone: str) -> str:
    phone = (phone or "").strip()
    if not validate_phone_number(phone):
        raise FormValidationError({"phoneNumber": "请输入正确的手机号码"})
    return phone


class UserService:
    def __init__(self, session: Session):
        self.session = session
        self.repo = Repository(session)

    def get_or_create(self, phone: str) -> tuple[User, bool]:
        """Return the user for ``phone`` and whether it was created by this call."""
        phone = require_phone(phone)
        user = self.repo.get_user_by_phone(phone)
        if user is not None:
            return user, False
        try:
            with transaction_scope(self.session):
                user = self.repo.create_user(phone)
        except IntegrityError:
            # Created concurrently by another request.
            user = self.repo.get_user_by_phone(phone)
            if user is None:
                raise
            return user, False
        logger.info("User created phone=%s", mask_phone(phone))
        return user, True

    def touch_login(self, phone: str) -> User:
        phone = require_phone(phone)
        with transaction_scope(self.session):
            user = self.repo.get_user_by_phone(phone)
            if user is None:
                raise UserNotFoundError(phone)
            self.repo.touch_user_login(user)
        return user
