"""Translate database concurrency failures into domain conflicts."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from fedsync.domain.federation.errors import TransientConflictError

# serialization_failure, deadlock_detected, unique_violation
RETRYABLE_SQLSTATES: Final[frozenset[str]] = frozenset({"40001", "40P01", "23505"})
RETRYABLE_MESSAGES: Final[tuple[str, ...]] = (
    "database is locked",
    "deadlock",
    "could not serialize access",
    "unique constraint failed",
)


def _sqlstate(error: DBAPIError) -> str | None:
    original = error.orig
    for attribute in ("sqlstate", "pgcode"):
        value = getattr(original, attribute, None)
        if isinstance(value, str):
            return value
    return None


def is_transient(error: BaseException) -> bool:
    """Whether re-running the whole transaction may succeed."""

    if isinstance(error, StaleDataError):
        return True
    if not isinstance(error, DBAPIError):
        return False
    if _sqlstate(error) in RETRYABLE_SQLSTATES:
        return True
    message = str(error.orig).lower()
    if isinstance(error, IntegrityError):
        return "unique constraint failed" in message
    return any(fragment in message for fragment in RETRYABLE_MESSAGES)


@contextmanager
def translate_conflicts(operation: str) -> Iterator[None]:
    try:
        yield
    except (StaleDataError, DBAPIError) as exc:
        if is_transient(exc):
            raise TransientConflictError(f"{operation} conflicted: {exc}") from exc
        raise
