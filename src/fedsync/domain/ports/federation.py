"""Collaborator ports used while reconciling Update activities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.model import (
        Account,
        Actor,
        ActorImageType,
        DeliveryJob,
        Video,
        VideoPlaylist,
        VideoRedundancy,
    )
    from fedsync.domain.object_updates import (
        ActorObjectUpdate,
        CacheFileObjectUpdate,
        ImageInfo,
        PlaylistObjectUpdate,
    )
    from fedsync.domain.ports.unit_of_work import FederationUnitOfWork


@dataclass(slots=True, frozen=True)
class VideoResolution:
    """Result of a get-or-create lookup; ``created`` marks a first sighting."""

    video: Video
    created: bool


@runtime_checkable
class SignerResolver(Protocol):
    """Load a fully populated local actor record (account, channel, images).

    Raises ``SignerNotFoundError`` when no such actor is known.
    """

    def resolve(self, uow: FederationUnitOfWork, url: str) -> Actor: ...


@runtime_checkable
class ActorResolver(Protocol):
    def get_or_create(self, uow: FederationUnitOfWork, url: str) -> Actor: ...


@runtime_checkable
class VideoResolver(Protocol):
    def get_or_create(self, uow: FederationUnitOfWork, url: str) -> VideoResolution: ...


@runtime_checkable
class ImageInfoExtractor(Protocol):
    """Callable port resolving the avatar or banner reference of an actor object."""

    def __call__(
        self, actor_object: ActorObjectUpdate, image_type: ActorImageType
    ) -> ImageInfo | None: ...


@runtime_checkable
class RedundancyPolicy(Protocol):
    def is_accepted(
        self, uow: FederationUnitOfWork, activity: UpdateActivity, signer: Actor
    ) -> bool: ...


@runtime_checkable
class CacheFileWriter(Protocol):
    def upsert(
        self,
        uow: FederationUnitOfWork,
        cache_file: CacheFileObjectUpdate,
        video: Video,
        signer: Actor,
    ) -> VideoRedundancy: ...


@runtime_checkable
class PlaylistWriter(Protocol):
    def upsert(
        self,
        uow: FederationUnitOfWork,
        playlist: PlaylistObjectUpdate,
        account: Account,
        audience: Iterable[str],
    ) -> VideoPlaylist: ...


@runtime_checkable
class ActivityForwarder(Protocol):
    """Decide the delivery audience of a video related activity and enqueue it."""

    def forward(
        self,
        uow: FederationUnitOfWork,
        activity: UpdateActivity,
        *,
        video: Video,
        exclude_inboxes: Iterable[str] = (),
        except_actors: Iterable[Actor] = (),
    ) -> DeliveryJob | None: ...
