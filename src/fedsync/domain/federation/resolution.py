"""Local lookups and first-sighting creation of actors and videos."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final
from urllib.parse import urlparse

from fedsync.domain.activity import privacy_from_audience
from fedsync.domain.federation.errors import RemoteObjectError, SignerNotFoundError
from fedsync.domain.model import Account, ActorType, VideoChannel
from fedsync.domain.object_updates import build_actor, build_video
from fedsync.domain.ports import VideoResolution

if TYPE_CHECKING:
    from fedsync.domain.model import Actor
    from fedsync.domain.object_updates import ActorObjectUpdate
    from fedsync.domain.ports import (
        ActorResolver,
        FederationUnitOfWork,
        ObjectReader,
        RemoteObjectFetcher,
    )

log = getLogger(__name__)

CHANNEL_OWNER_TYPES: Final[frozenset[str]] = frozenset({"Person", "Application"})


def _same_host(left: str, right: str) -> bool:
    return urlparse(left).netloc.lower() == urlparse(right).netloc.lower()


class RepositorySignerResolver:
    """Signers are never fetched: an unknown signer is not trusted here."""

    def resolve(self, uow: FederationUnitOfWork, url: str) -> Actor:
        actor = uow.repositories.actors.get_by_url(url)
        if actor is None:
            raise SignerNotFoundError(url)
        return actor


class RemoteActorResolver:
    def __init__(self, fetcher: RemoteObjectFetcher, reader: ObjectReader) -> None:
        self.fetcher = fetcher
        self.reader = reader

    def get_or_create(self, uow: FederationUnitOfWork, url: str) -> Actor:
        return self._get_or_create(uow, url, allow_channel=True)

    def _get_or_create(self, uow: FederationUnitOfWork, url: str, *, allow_channel: bool) -> Actor:
        actors = uow.repositories.actors
        existing = actors.get_by_url(url)
        if existing is not None:
            return existing

        update = self._fetch_actor(url)
        if update.url != url:
            existing = actors.get_by_url(update.url)
            if existing is not None:
                return existing

        actor = build_actor(update)
        if update.type == ActorType.GROUP:
            if not allow_channel:
                raise RemoteObjectError(f"Channel {url} cannot own another channel")
            owner = self._channel_owner(uow, update)
            actor.channel = VideoChannel(
                name=update.name or update.preferred_username,
                description=update.summary,
                support=update.support,
                actor=actor,
                account=owner,
            )
        else:
            actor.account = Account(
                name=update.name or update.preferred_username,
                description=update.summary,
                actor=actor,
            )

        actors.add(actor)
        log.info("Created remote actor %s.", actor.url)
        return actor

    def _fetch_actor(self, url: str) -> ActorObjectUpdate:
        update = self.reader.read_actor(self.fetcher.fetch(url))
        if update is None:
            raise RemoteObjectError(f"Remote actor {url} is not valid")
        if not _same_host(update.url, url):
            raise RemoteObjectError(f"Actor id {update.url} is not on the host of {url}")
        return update

    def _channel_owner(self, uow: FederationUnitOfWork, update: ActorObjectUpdate) -> Account:
        for ref in update.attributed_to:
            if ref.type in CHANNEL_OWNER_TYPES:
                owner = self._get_or_create(uow, ref.url, allow_channel=False)
                if owner.account is not None:
                    return owner.account
        raise RemoteObjectError(f"Cannot find account attributed to channel {update.url}")


class RemoteVideoResolver:
    def __init__(
        self,
        fetcher: RemoteObjectFetcher,
        reader: ObjectReader,
        actor_resolver: ActorResolver,
    ) -> None:
        self.fetcher = fetcher
        self.reader = reader
        self.actor_resolver = actor_resolver

    def get_or_create(self, uow: FederationUnitOfWork, url: str) -> VideoResolution:
        videos = uow.repositories.videos
        existing = videos.get_by_url(url)
        if existing is not None:
            return VideoResolution(video=existing, created=False)

        update = self.reader.read_video(self.fetcher.fetch(url))
        if update is None:
            raise RemoteObjectError(f"Remote video {url} is not valid")
        if update.channel_url is None:
            raise RemoteObjectError(f"Remote video {url} is not attributed to a channel")

        channel_actor = self.actor_resolver.get_or_create(uow, update.channel_url)
        if channel_actor.channel is None:
            raise RemoteObjectError(f"Actor {channel_actor.url} of video {url} is not a channel")

        video = build_video(
            update,
            channel=channel_actor.channel,
            privacy=privacy_from_audience(update.to),
        )
        videos.add(video)
        log.info("Created remote video %s.", video.url)
        return VideoResolution(video=video, created=True)
