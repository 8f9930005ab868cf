"""Run a reconciliation body in a fresh unit of work, retrying on conflicts."""

from __future__ import annotations

import time
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.domain.federation.errors import TransientConflictError

if TYPE_CHECKING:
    from collections.abc import Callable

    from fedsync.domain.ports import FederationUnitOfWorkFactory

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """``max_retries`` counts re-runs: the body executes at most ``max_retries + 1`` times."""

    max_retries: int = 4
    interval_seconds: float = 0.1


def retry_transaction[T](
    fn: Callable[..., T],
    *args: object,
    unit_of_work_factory: FederationUnitOfWorkFactory,
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], None] = time.sleep,
    **kwargs: object,
) -> T:
    """Call ``fn(uow, *args, **kwargs)`` and commit, retrying transient conflicts.

    Only ``TransientConflictError`` triggers a retry. Any other exception leaves the
    loop immediately. After the last attempt the conflict is re-raised.
    """

    resolved = policy or RetryPolicy()
    name = getattr(fn, "__qualname__", repr(fn))
    attempt = 0
    while True:
        try:
            with unit_of_work_factory() as uow:
                result = fn(uow, *args, **kwargs)
                uow.commit()
        except TransientConflictError as exc:
            if attempt >= resolved.max_retries:
                log.warning("Cannot execute %s with many retries.", name)
                raise
            attempt += 1
            log.debug("Retrying %s after conflict (attempt %d): %s", name, attempt, exc)
            sleep(resolved.interval_seconds)
        else:
            return result
