"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from fedsync.adapters.sqlalchemy.errors import translate_conflicts
from fedsync.adapters.sqlalchemy.mappings import (
    actor_follow_table,
    actor_table,
    delivery_job_table,
    video_playlist_table,
    video_redundancy_table,
    video_share_table,
    video_table,
)
from fedsync.domain.model import (
    Account,
    Actor,
    ActorFollow,
    DeliveryJob,
    Entity,
    FollowState,
    Video,
    VideoChannel,
    VideoPlaylist,
    VideoRedundancy,
    VideoShare,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from sqlalchemy import Table
    from sqlalchemy.orm import Session


class SqlAlchemyReplicaRepository[TEntity: Entity]:
    """Shared persistence for replicas; ``save`` re-attaches detached instances."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)
        self._flush(f"add {self._entity_cls.__name__}")

    def get(self, entity_id: UUID) -> TEntity | None:
        return self.session.get(self._entity_cls, entity_id)

    def save(self, entity: TEntity) -> None:
        with translate_conflicts(f"save {self._entity_cls.__name__}"):
            self.session.merge(entity)
            self.session.flush()

    def _flush(self, operation: str) -> None:
        with translate_conflicts(operation):
            self.session.flush()


class SqlAlchemyUrlRepository[TEntity: Entity](SqlAlchemyReplicaRepository[TEntity]):
    def __init__(self, session: Session, entity_cls: type[TEntity], table: Table) -> None:
        super().__init__(session, entity_cls)
        self._table = table

    def get_by_url(self, url: str) -> TEntity | None:
        stmt = select(self._entity_cls).where(self._table.c.url == url).limit(1)
        return self.session.scalars(stmt).first()


class SqlAlchemyActorRepository(SqlAlchemyUrlRepository[Actor]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Actor, actor_table)

    def list_local_by_followers_urls(self, urls: Iterable[str]) -> list[Actor]:
        candidates = sorted(set(urls))
        if not candidates:
            return []
        stmt = (
            select(Actor)
            .where(actor_table.c.is_owned.is_(True))
            .where(actor_table.c.followers_url.in_(candidates))
        )
        return list(self.session.scalars(stmt))


class SqlAlchemyAccountRepository(SqlAlchemyReplicaRepository[Account]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Account)


class SqlAlchemyVideoChannelRepository(SqlAlchemyReplicaRepository[VideoChannel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, VideoChannel)


class SqlAlchemyVideoRepository(SqlAlchemyUrlRepository[Video]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Video, video_table)


class SqlAlchemyVideoRedundancyRepository(SqlAlchemyUrlRepository[VideoRedundancy]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, VideoRedundancy, video_redundancy_table)

    def get_by_video_and_actor(self, video: Video, actor: Actor) -> VideoRedundancy | None:
        stmt = (
            select(VideoRedundancy)
            .where(video_redundancy_table.c._video_id == video.id)  # noqa: SLF001
            .where(video_redundancy_table.c._actor_id == actor.id)  # noqa: SLF001
            .limit(1)
        )
        return self.session.scalars(stmt).first()


class SqlAlchemyVideoPlaylistRepository(SqlAlchemyUrlRepository[VideoPlaylist]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, VideoPlaylist, video_playlist_table)


class SqlAlchemyActorFollowRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: ActorFollow) -> None:
        self.session.add(entity)
        with translate_conflicts("add ActorFollow"):
            self.session.flush()

    def get(self, follower: Actor, following: Actor) -> ActorFollow | None:
        stmt = (
            select(ActorFollow)
            .where(actor_follow_table.c._follower_id == follower.id)  # noqa: SLF001
            .where(actor_follow_table.c._following_id == following.id)  # noqa: SLF001
            .limit(1)
        )
        return self.session.scalars(stmt).first()

    def list_accepted_followers(self, actors: Iterable[Actor]) -> list[Actor]:
        following_ids = {actor.id for actor in actors}
        if not following_ids:
            return []
        stmt = (
            select(Actor)
            .join(
                actor_follow_table,
                actor_follow_table.c._follower_id == actor_table.c.id,  # noqa: SLF001
            )
            .where(actor_follow_table.c._following_id.in_(following_ids))  # noqa: SLF001
            .where(actor_follow_table.c.state == FollowState.ACCEPTED)
            .order_by(actor_table.c.url)
            .distinct()
        )
        return list(self.session.scalars(stmt))


class SqlAlchemyVideoShareRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: VideoShare) -> None:
        self.session.add(entity)
        with translate_conflicts("add VideoShare"):
            self.session.flush()

    def list_sharers(self, video: Video) -> list[Actor]:
        stmt = (
            select(Actor)
            .join(video_share_table, video_share_table.c._actor_id == actor_table.c.id)  # noqa: SLF001
            .where(video_share_table.c._video_id == video.id)  # noqa: SLF001
            .distinct()
        )
        return list(self.session.scalars(stmt))


class SqlAlchemyDeliveryJobRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: DeliveryJob) -> None:
        self.session.add(entity)

    def list_pending(self) -> list[DeliveryJob]:
        stmt = select(DeliveryJob).order_by(delivery_job_table.c.created_at)
        return list(self.session.scalars(stmt))
