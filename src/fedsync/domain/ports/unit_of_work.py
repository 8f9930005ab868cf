"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from fedsync.domain.ports.persistence import (
        AccountRepository,
        ActorFollowRepository,
        ActorRepository,
        DeliveryJobRepository,
        VideoChannelRepository,
        VideoPlaylistRepository,
        VideoRedundancyRepository,
        VideoRepository,
        VideoShareRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def on_rollback(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` if this transaction rolls back, including a failed commit."""
        ...


@dataclass(slots=True)
class FederationRepositories(RepositoryCollection):
    """Repositories touched while reconciling remote Update activities."""

    actors: ActorRepository
    accounts: AccountRepository
    channels: VideoChannelRepository
    videos: VideoRepository
    redundancies: VideoRedundancyRepository
    playlists: VideoPlaylistRepository
    follows: ActorFollowRepository
    shares: VideoShareRepository
    outbox: DeliveryJobRepository


type FederationUnitOfWork = UnitOfWork[FederationRepositories]
type FederationUnitOfWorkFactory = Callable[[], FederationUnitOfWork]
