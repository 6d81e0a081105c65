from __future__ import annotations

from types import SimpleNamespace

from sqlalchemy.exc import IntegrityError

from safepermit.core.submission import collided_unique_key


def _error(orig) -> IntegrityError:
    return IntegrityError("INSERT", {}, orig)


def test_sqlite_unique_messages_name_the_key() -> None:
    assert collided_unique_key(_error(Exception("UNIQUE constraint failed: safe_forms.application_number"))) == (
        "safe_forms.application_number"
    )
    assert collided_unique_key(_error(Exception("UNIQUE constraint failed: safeformhead.applicationNumber"))) == (
        "safeformhead.applicationNumber"
    )
    assert collided_unique_key(_error(Exception("UNIQUE constraint failed: users.phone"))) == "users.phone"


def test_postgres_constraint_name_is_used() -> None:
    orig = Exception('duplicate key value violates unique constraint "ix_safe_forms_application_number"')
    orig.diag = SimpleNamespace(constraint_name="ix_safe_forms_application_number")
    assert collided_unique_key(_error(orig)) == "safe_forms.application_number"


def test_other_integrity_failures_are_not_collisions() -> None:
    assert collided_unique_key(_error(Exception("NOT NULL constraint failed: safeformhead.applicationNumber"))) is None
    assert collided_unique_key(_error(Exception("FOREIGN KEY constraint failed"))) is None
    assert collided_unique_key(_error(Exception("UNIQUE constraint failed: some_table.other_column"))) is None
