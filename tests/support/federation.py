"""In-memory fakes of the federation ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fedsync.config.federation import RedundancyAcceptFrom
from fedsync.domain.federation import (
    ConfiguredRedundancyPolicy,
    OutboxActivityForwarder,
    RemoteObjectError,
    RepositoryCacheFileWriter,
    RepositoryPlaylistWriter,
    RepositorySignerResolver,
    RetryPolicy,
    TransientConflictError,
    UpdateContext,
)
from fedsync.domain.model import Actor, FollowState, VideoRedundancy
from fedsync.domain.ports import FederationRepositories, VideoResolution

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from types import TracebackType
    from uuid import UUID

    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.model import (
        ActorFollow,
        DeliveryJob,
        Entity,
        Video,
        VideoShare,
    )
    from fedsync.domain.object_updates import (
        ActorObjectUpdate,
        CacheFileObjectUpdate,
        PlaylistObjectUpdate,
        VideoObjectUpdate,
    )
    from fedsync.domain.ports import ActorResolver, FederationUnitOfWork

SERVER_ACTOR_URL = "https://local.example/accounts/peertube"


class InMemoryReplicaRepository[TEntity: Entity]:
    def __init__(self) -> None:
        self.items: dict[UUID, TEntity] = {}
        self.saved: list[TEntity] = []

    def add(self, entity: TEntity) -> None:
        self.items[entity.id] = entity

    def get(self, entity_id: UUID) -> TEntity | None:
        return self.items.get(entity_id)

    def save(self, entity: TEntity) -> None:
        self.items[entity.id] = entity
        self.saved.append(entity)


class InMemoryUrlRepository[TEntity: Entity](InMemoryReplicaRepository[TEntity]):
    def get_by_url(self, url: str) -> TEntity | None:
        for item in self.items.values():
            if getattr(item, "url", None) == url:
                return item
        return None


class InMemoryActorRepository(InMemoryUrlRepository[Actor]):
    def list_local_by_followers_urls(self, urls: Iterable[str]) -> list[Actor]:
        wanted = set(urls)
        return [
            actor
            for actor in self.items.values()
            if actor.is_owned and actor.followers_url in wanted
        ]


class InMemoryRedundancyRepository(InMemoryUrlRepository[VideoRedundancy]):
    def get_by_video_and_actor(self, video: Video, actor: Actor) -> VideoRedundancy | None:
        for item in self.items.values():
            if item.video.id == video.id and item.actor.id == actor.id:
                return item
        return None


class InMemoryFollowRepository:
    def __init__(self) -> None:
        self.items: list[ActorFollow] = []

    def add(self, entity: ActorFollow) -> None:
        self.items.append(entity)

    def get(self, follower: Actor, following: Actor) -> ActorFollow | None:
        for follow in self.items:
            if follow.follower.id == follower.id and follow.following.id == following.id:
                return follow
        return None

    def list_accepted_followers(self, actors: Iterable[Actor]) -> list[Actor]:
        following_ids = {actor.id for actor in actors}
        followers: dict[UUID, Actor] = {}
        for follow in self.items:
            if follow.state == FollowState.ACCEPTED and follow.following.id in following_ids:
                followers[follow.follower.id] = follow.follower
        return sorted(followers.values(), key=lambda actor: actor.url)


class InMemoryShareRepository:
    def __init__(self) -> None:
        self.items: list[VideoShare] = []

    def add(self, entity: VideoShare) -> None:
        self.items.append(entity)

    def list_sharers(self, video: Video) -> list[Actor]:
        return [share.actor for share in self.items if share.video.id == video.id]


class InMemoryOutbox:
    def __init__(self) -> None:
        self.items: list[DeliveryJob] = []

    def add(self, entity: DeliveryJob) -> None:
        self.items.append(entity)

    def list_pending(self) -> list[DeliveryJob]:
        return list(self.items)


def make_repositories() -> FederationRepositories:
    return FederationRepositories(
        actors=InMemoryActorRepository(),
        accounts=InMemoryReplicaRepository(),
        channels=InMemoryReplicaRepository(),
        videos=InMemoryUrlRepository(),
        redundancies=InMemoryRedundancyRepository(),
        playlists=InMemoryUrlRepository(),
        follows=InMemoryFollowRepository(),
        shares=InMemoryShareRepository(),
        outbox=InMemoryOutbox(),
    )


def store_actor(repositories: FederationRepositories, actor: Actor) -> Actor:
    """Register an actor together with its account or channel."""

    repositories.actors.add(actor)
    if actor.account is not None:
        repositories.accounts.add(actor.account)
    if actor.channel is not None:
        repositories.channels.add(actor.channel)
    return actor


class FakeUnitOfWork:
    """Shares one repository collection across every transaction it opens."""

    def __init__(
        self,
        repositories: FederationRepositories | None = None,
        *,
        conflicts_on_commit: int = 0,
    ) -> None:
        self._repositories = repositories or make_repositories()
        self.conflicts_on_commit = conflicts_on_commit
        self.entered = 0
        self.commits = 0
        self.rollbacks = 0
        self.rollback_callbacks: list[Callable[[], None]] = []

    @property
    def repositories(self) -> FederationRepositories:
        return self._repositories

    def __enter__(self) -> FakeUnitOfWork:
        self.entered += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        if self.conflicts_on_commit > 0:
            self.conflicts_on_commit -= 1
            raise TransientConflictError("commit conflicted")
        self.commits += 1
        self.rollback_callbacks.clear()

    def rollback(self) -> None:
        self.rollbacks += 1
        callbacks, self.rollback_callbacks = self.rollback_callbacks, []
        for callback in reversed(callbacks):
            callback()

    def on_rollback(self, callback: Callable[[], None]) -> None:
        self.rollback_callbacks.append(callback)


@dataclass
class FakeObjectReader:
    """Returns preset update DTOs keyed by object id; anything else is invalid."""

    videos: dict[str, VideoObjectUpdate] = field(default_factory=dict[str, "VideoObjectUpdate"])
    actors: dict[str, ActorObjectUpdate] = field(default_factory=dict[str, "ActorObjectUpdate"])
    cache_files: dict[str, CacheFileObjectUpdate] = field(
        default_factory=dict[str, "CacheFileObjectUpdate"]
    )
    playlists: dict[str, PlaylistObjectUpdate] = field(
        default_factory=dict[str, "PlaylistObjectUpdate"]
    )

    def read_video(self, payload: Mapping[str, object]) -> VideoObjectUpdate | None:
        return self.videos.get(str(payload.get("id")))

    def read_actor(self, payload: Mapping[str, object]) -> ActorObjectUpdate | None:
        return self.actors.get(str(payload.get("id")))

    def read_cache_file(self, payload: Mapping[str, object]) -> CacheFileObjectUpdate | None:
        return self.cache_files.get(str(payload.get("id")))

    def read_playlist(self, payload: Mapping[str, object]) -> PlaylistObjectUpdate | None:
        return self.playlists.get(str(payload.get("id")))


class FakeVideoResolver:
    """Known videos come from the repository; ``remote`` videos are created on first sight."""

    def __init__(self, remote: Iterable[Video] = ()) -> None:
        self.remote = {video.url: video for video in remote}
        self.calls: list[str] = []

    def get_or_create(self, uow: FederationUnitOfWork, url: str) -> VideoResolution:
        self.calls.append(url)
        existing = uow.repositories.videos.get_by_url(url)
        if existing is not None:
            return VideoResolution(video=existing, created=False)
        video = self.remote.get(url)
        if video is None:
            raise RemoteObjectError(f"Remote video {url} is not valid")
        uow.repositories.videos.add(video)
        return VideoResolution(video=video, created=True)


class FakeActorResolver:
    def __init__(self, actors: Iterable[Actor] = ()) -> None:
        self.actors = {actor.url: actor for actor in actors}
        self.calls: list[str] = []

    def get_or_create(self, uow: FederationUnitOfWork, url: str) -> Actor:
        self.calls.append(url)
        existing = uow.repositories.actors.get_by_url(url)
        if existing is not None:
            return existing
        actor = self.actors.get(url)
        if actor is None:
            raise RemoteObjectError(f"Remote actor {url} is not valid")
        store_actor(uow.repositories, actor)
        return actor


class FakeFetcher:
    def __init__(self, documents: Mapping[str, Mapping[str, object]] | None = None) -> None:
        self.documents = dict(documents or {})
        self.calls: list[str] = []

    def fetch(self, url: str) -> Mapping[str, object]:
        self.calls.append(url)
        document = self.documents.get(url)
        if document is None:
            raise RemoteObjectError(f"Cannot fetch remote object {url}: 404")
        return document


class RecordingForwarder:
    def __init__(self) -> None:
        self.calls: list[dict[str, object]] = []

    def forward(
        self,
        uow: FederationUnitOfWork,
        activity: UpdateActivity,
        *,
        video: Video,
        exclude_inboxes: Iterable[str] = (),
        except_actors: Iterable[Actor] = (),
    ) -> DeliveryJob | None:
        self.calls.append(
            {
                "activity": activity,
                "video": video,
                "exclude_inboxes": tuple(exclude_inboxes),
                "except_actors": tuple(except_actors),
            }
        )
        return None


def make_context(
    uow: FakeUnitOfWork,
    *,
    reader: FakeObjectReader | None = None,
    video_resolver: FakeVideoResolver | None = None,
    actor_resolver: ActorResolver | None = None,
    accept_from: RedundancyAcceptFrom = RedundancyAcceptFrom.ANYBODY,
    forwarder: RecordingForwarder | OutboxActivityForwarder | None = None,
    max_retries: int = 4,
    sleeps: list[float] | None = None,
) -> UpdateContext:
    recorded = sleeps if sleeps is not None else []
    return UpdateContext(
        unit_of_work_factory=lambda: uow,
        object_reader=reader or FakeObjectReader(),
        signer_resolver=RepositorySignerResolver(),
        video_resolver=video_resolver or FakeVideoResolver(),
        redundancy_policy=ConfiguredRedundancyPolicy(accept_from, SERVER_ACTOR_URL),
        cache_file_writer=RepositoryCacheFileWriter(),
        playlist_writer=RepositoryPlaylistWriter(actor_resolver or FakeActorResolver()),
        forwarder=forwarder or OutboxActivityForwarder(),
        retry_policy=RetryPolicy(max_retries=max_retries, interval_seconds=0.01),
        sleep=recorded.append,
    )
