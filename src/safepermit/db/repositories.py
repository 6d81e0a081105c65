from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, selectinload

from safepermit.db.base import utcnow
from safepermit.db.models import (
    AccompanyingPerson,
    SafeForm,
    SyncAccompanyingPerson,
    SyncFormHead,
    User,
)
from safepermit.types import AccompanyingPersonInput


class Repository:
    """Row-level reads and writes. Callers own the transaction boundary."""

    def __init__(self, session: Session):
        self.session = session

    def get_user_by_phone(self, phone: str) -> User | None:
        return self.session.scalar(select(User).where(User.phone == phone))

    def create_user(self, phone: str, name: str | None = None) -> User:
        user = User(phone=phone, name=name or None)
        self.session.add(user)
        self.session.flush()
        return user

    def touch_user_login(self, user: User) -> User:
        user.last_login = utcnow()
        self.session.flush()
        return user

    def add_application(self, **values: Any) -> SafeForm:
        form = SafeForm(**values)
        self.session.add(form)
        self.session.flush()
        return form

    def add_accompanying_person(self, form_id: int, person: AccompanyingPersonInput) -> AccompanyingPerson:
        row = AccompanyingPerson(
            form_id=form_id,
            name=person.name,
            id_number=person.id_number,
            phone=person.phone_number,
            employee_number=person.employee_number,
            department=person.department,
        )
        self.session.add(row)
        self.session.flush()
        return row

    def add_sync_head(self, **values: Any) -> SyncFormHead:
        row = SyncFormHead(**values)
        self.session.add(row)
        self.session.flush()
        return row

    def add_sync_person(self, application_number: str, person: AccompanyingPersonInput) -> SyncAccompanyingPerson:
        row = SyncAccompanyingPerson(
            form_application_number=application_number,
            name=person.name,
            id_number=person.id_number,
            phone_number=person.phone_number,
        )
        self.session.add(row)
        self.session.flush()
        return row

    def get_application(self, application_number: str) -> SafeForm | None:
        statement = (
            select(SafeForm)
            .options(selectinload(SafeForm.persons))
            .where(SafeForm.application_number == application_number)
        )
        return self.session.scalar(statement)

    def list_applications_for_user(
        self,
        phone: str,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[SafeForm]:
        statement = (
            select(SafeForm)
            .join(User, SafeForm.user_id == User.id)
            .options(selectinload(SafeForm.persons))
            .where(User.phone == phone)
            .order_by(SafeForm.created_at.desc(), SafeForm.id.desc())
            .offset(offset)
        )
        if limit is not None:
            statement = statement.limit(limit)
        return list(self.session.scalars(statement).all())

    def count_applications_for_user(self, phone: str) -> int:
        statement = (
            select(func.count(SafeForm.id))
            .join(User, SafeForm.user_id == User.id)
            .where(User.phone == phone)
        )
        return int(self.session.scalar(statement) or 0)

    def delete_application(self, application_number: str) -> tuple[int, int]:
        """Delete one application and its persons; returns (applications, persons)."""
        form_ids = select(SafeForm.id).where(SafeForm.application_number == application_number)
        return self._delete_forms(form_ids)

    def delete_applications_for_user(self, phone: str) -> tuple[int, int]:
        user_ids = select(User.id).where(User.phone == phone)
        form_ids = select(SafeForm.id).where(SafeForm.user_id.in_(user_ids))
        return self._delete_forms(form_ids)

    def _delete_forms(self, form_ids) -> tuple[int, int]:
        ids = list(self.session.scalars(form_ids).all())
        if not ids:
            return 0, 0

        persons = self.session.execute(
            delete(AccompanyingPerson)
            .where(AccompanyingPerson.form_id.in_(ids))
            .execution_options(synchronize_session="evaluate")
        )
        forms = self.session.execute(
            delete(SafeForm).where(SafeForm.id.in_(ids)).execution_options(synchronize_session="evaluate")
        )
        return forms.rowcount, persons.rowcount
