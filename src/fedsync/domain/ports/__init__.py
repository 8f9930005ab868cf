"""Domain port definitions for adapters."""

from __future__ import annotations

from .federation import (
    ActivityForwarder,
    ActorResolver,
    CacheFileWriter,
    ImageInfoExtractor,
    PlaylistWriter,
    RedundancyPolicy,
    SignerResolver,
    VideoResolution,
    VideoResolver,
)
from .fetching import ObjectReader, RemoteObjectFetcher
from .persistence import (
    AccountRepository,
    ActorFollowRepository,
    ActorRepository,
    DeliveryJobRepository,
    ReplicaRepository,
    Repository,
    UrlAddressedRepository,
    VideoChannelRepository,
    VideoPlaylistRepository,
    VideoRedundancyRepository,
    VideoRepository,
    VideoShareRepository,
)
from .unit_of_work import (
    FederationRepositories,
    FederationUnitOfWork,
    FederationUnitOfWorkFactory,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AccountRepository",
    "ActivityForwarder",
    "ActorFollowRepository",
    "ActorRepository",
    "ActorResolver",
    "CacheFileWriter",
    "DeliveryJobRepository",
    "FederationRepositories",
    "FederationUnitOfWork",
    "FederationUnitOfWorkFactory",
    "ImageInfoExtractor",
    "ObjectReader",
    "PlaylistWriter",
    "RedundancyPolicy",
    "RemoteObjectFetcher",
    "ReplicaRepository",
    "Repository",
    "RepositoryCollection",
    "SignerResolver",
    "UnitOfWork",
    "UrlAddressedRepository",
    "VideoChannelRepository",
    "VideoPlaylistRepository",
    "VideoRedundancyRepository",
    "VideoRepository",
    "VideoResolution",
    "VideoResolver",
    "VideoShareRepository",
]
