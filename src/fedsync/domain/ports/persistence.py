"""Ports for persisting replica aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from fedsync.domain.model import (
    Account,
    Actor,
    ActorFollow,
    DeliveryJob,
    Video,
    VideoChannel,
    VideoPlaylist,
    VideoRedundancy,
    VideoShare,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ReplicaRepository[TEntity](Repository[TEntity], Protocol):
    """Replicas can be re-attached after being mutated outside a transaction."""

    def get(self, entity_id: UUID) -> TEntity | None: ...

    def save(self, entity: TEntity) -> None: ...


@runtime_checkable
class UrlAddressedRepository[TEntity](ReplicaRepository[TEntity], Protocol):
    """Replicas identified across the federation by their canonical url."""

    def get_by_url(self, url: str) -> TEntity | None: ...


@runtime_checkable
class ActorRepository(UrlAddressedRepository[Actor], Protocol):
    """Repository contract for actors."""

    def list_local_by_followers_urls(self, urls: Iterable[str]) -> list[Actor]: ...


@runtime_checkable
class AccountRepository(ReplicaRepository[Account], Protocol):
    """Repository contract for accounts."""


@runtime_checkable
class VideoChannelRepository(ReplicaRepository[VideoChannel], Protocol):
    """Repository contract for channels."""


@runtime_checkable
class VideoRepository(UrlAddressedRepository[Video], Protocol):
    """Repository contract for videos."""


@runtime_checkable
class VideoRedundancyRepository(UrlAddressedRepository[VideoRedundancy], Protocol):
    """Repository contract for cache files."""

    def get_by_video_and_actor(self, video: Video, actor: Actor) -> VideoRedundancy | None: ...


@runtime_checkable
class VideoPlaylistRepository(UrlAddressedRepository[VideoPlaylist], Protocol):
    """Repository contract for playlists."""


@runtime_checkable
class ActorFollowRepository(Repository[ActorFollow], Protocol):
    """Repository contract for follow edges."""

    def get(self, follower: Actor, following: Actor) -> ActorFollow | None: ...

    def list_accepted_followers(self, actors: Iterable[Actor]) -> list[Actor]: ...


@runtime_checkable
class VideoShareRepository(Repository[VideoShare], Protocol):
    """Repository contract for shares (announces) of videos."""

    def list_sharers(self, video: Video) -> list[Actor]: ...


@runtime_checkable
class DeliveryJobRepository(Repository[DeliveryJob], Protocol):
    """Outbox of activities waiting for delivery."""

    def list_pending(self) -> list[DeliveryJob]: ...
