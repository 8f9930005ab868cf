"""SQLAlchemy-backed unit of work for federation reconciliation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from fedsync.adapters.sqlalchemy.errors import translate_conflicts
from fedsync.adapters.sqlalchemy.mappings import start_mappers
from fedsync.adapters.sqlalchemy.migrations import upgrade_head
from fedsync.adapters.sqlalchemy.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyActorFollowRepository,
    SqlAlchemyActorRepository,
    SqlAlchemyDeliveryJobRepository,
    SqlAlchemyVideoChannelRepository,
    SqlAlchemyVideoPlaylistRepository,
    SqlAlchemyVideoRedundancyRepository,
    SqlAlchemyVideoRepository,
    SqlAlchemyVideoShareRepository,
)
from fedsync.config.storage import get_database_config
from fedsync.domain.ports.unit_of_work import FederationRepositories, RepositoryCollection

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call fedsync.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def _create_engine() -> Engine:
    config = get_database_config()
    if config.isolation_level is None:
        return create_engine(config.uri, future=True)
    return create_engine(config.uri, future=True, isolation_level=config.isolation_level)


def startup(
    *,
    engine: Engine | None = None,
    force: bool = False,
    migrate: bool = True,
) -> Engine:
    """Initialise the SQLAlchemy engine, schema and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or _create_engine()
    start_mappers()
    if migrate:
        upgrade_head(engine=resolved_engine)

    _STATE.engine = resolved_engine
    return resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None
        self._rollback_callbacks: list[Callable[[], None]] = []

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        self._rollback_callbacks = []
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self.session = None
        return False

    def commit(self) -> None:
        with translate_conflicts("commit"):
            self.session.commit()
        self._rollback_callbacks.clear()

    def rollback(self) -> None:
        callbacks, self._rollback_callbacks = self._rollback_callbacks, []
        for callback in reversed(callbacks):
            callback()
        self.session.rollback()

    def on_rollback(self, callback: Callable[[], None]) -> None:
        self._rollback_callbacks.append(callback)

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyFederationUnitOfWork(BaseSqlAlchemyUnitOfWork[FederationRepositories]):
    """Unit of work managing SQLAlchemy sessions for Update reconciliation."""

    def _build_repositories(self, session: Session) -> FederationRepositories:
        return FederationRepositories(
            actors=SqlAlchemyActorRepository(session),
            accounts=SqlAlchemyAccountRepository(session),
            channels=SqlAlchemyVideoChannelRepository(session),
            videos=SqlAlchemyVideoRepository(session),
            redundancies=SqlAlchemyVideoRedundancyRepository(session),
            playlists=SqlAlchemyVideoPlaylistRepository(session),
            follows=SqlAlchemyActorFollowRepository(session),
            shares=SqlAlchemyVideoShareRepository(session),
            outbox=SqlAlchemyDeliveryJobRepository(session),
        )


if TYPE_CHECKING:
    from fedsync.domain.ports.unit_of_work import FederationUnitOfWork

    _uow_check: FederationUnitOfWork = SqlAlchemyFederationUnitOfWork()
