from __future__ import annotations

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from fedsync.adapters.sqlalchemy.errors import is_transient, translate_conflicts
from fedsync.domain.federation import TransientConflictError


class _DriverError(Exception):
    def __init__(self, message: str, *, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.mark.parametrize(
    "error",
    [
        StaleDataError("UPDATE statement on table 'video' expected to update 1 row(s)"),
        OperationalError("UPDATE video", {}, _DriverError("database is locked")),
        IntegrityError("INSERT", {}, _DriverError("UNIQUE constraint failed: actor.url")),
        DBAPIError("UPDATE", {}, _DriverError("serialization", sqlstate="40001")),
        DBAPIError("UPDATE", {}, _DriverError("deadlock", sqlstate="40P01")),
        IntegrityError("INSERT", {}, _DriverError("duplicate key", sqlstate="23505")),
    ],
)
def test_conflicts_are_transient(error: Exception) -> None:
    assert is_transient(error)

    with pytest.raises(TransientConflictError), translate_conflicts("save Video"):
        raise error


@pytest.mark.parametrize(
    "error",
    [
        IntegrityError("INSERT", {}, _DriverError("NOT NULL constraint failed: actor.url")),
        OperationalError("SELECT", {}, _DriverError("no such table: actor")),
    ],
)
def test_other_database_errors_pass_through(error: DBAPIError) -> None:
    assert not is_transient(error)

    with pytest.raises(type(error)), translate_conflicts("add Actor"):
        raise error


def test_non_database_errors_are_not_transient() -> None:
    assert not is_transient(ValueError("nope"))
