"""SQLAlchemy mapping metadata for the replica store."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from fedsync.domain.model import (
    Account,
    Actor,
    ActorFollow,
    ActorImage,
    ActorImageType,
    ActorType,
    DeliveryJob,
    FollowState,
    Video,
    VideoChannel,
    VideoPlaylist,
    VideoPrivacy,
    VideoRedundancy,
    VideoShare,
    VideoState,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class StringListType(TypeDecorator[list[str]]):
    """Ordered list of strings stored as a JSON array in a text column."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str]:
        _ = dialect
        if value is None:
            return []
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return []
        return [item for item in cast(list[Any], loaded) if isinstance(item, str)]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Actors ----------------------------------------------------------------------

actor_table = Table(
    "actor",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("url", String, nullable=False, unique=True),
    Column("type", Enum(ActorType, native_enum=False), nullable=False),
    Column("preferred_username", String, nullable=False),
    Column("inbox_url", String, nullable=False),
    Column("shared_inbox_url", String, nullable=True),
    Column("outbox_url", String, nullable=True),
    Column("followers_url", String, nullable=True, index=True),
    Column("following_url", String, nullable=True),
    Column("public_key", Text, nullable=True),
    Column("remote_created_at", UTCDateTime(), nullable=True),
    Column("is_owned", Boolean, nullable=False, default=False),
)

actor_image_table = Table(
    "actor_image",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "actor_id",
        UUIDColumnType,
        ForeignKey("actor.id", ondelete="CASCADE"),
        key="_actor_id",
        nullable=False,
    ),
    Column("type", Enum(ActorImageType, native_enum=False), nullable=False),
    Column("file_url", String, nullable=False),
    Column("file_name", String, nullable=True),
    Column("width", Integer, nullable=True),
    Column("height", Integer, nullable=True),
    Column("on_disk", Boolean, nullable=False, default=False),
)

account_table = Table(
    "account",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "actor_id",
        UUIDColumnType,
        ForeignKey("actor.id", ondelete="CASCADE"),
        key="_actor_id",
        nullable=True,
        unique=True,
    ),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
)

video_channel_table = Table(
    "video_channel",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "actor_id",
        UUIDColumnType,
        ForeignKey("actor.id", ondelete="CASCADE"),
        key="_actor_id",
        nullable=True,
        unique=True,
    ),
    Column(
        "account_id",
        UUIDColumnType,
        ForeignKey("account.id", ondelete="CASCADE"),
        key="_account_id",
        nullable=True,
    ),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("support", Text, nullable=True),
)

actor_follow_table = Table(
    "actor_follow",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "follower_id",
        UUIDColumnType,
        ForeignKey("actor.id", ondelete="CASCADE"),
        key="_follower_id",
        nullable=False,
    ),
    Column(
        "following_id",
        UUIDColumnType,
        ForeignKey("actor.id", ondelete="CASCADE"),
        key="_following_id",
        nullable=False,
    ),
    Column("state", Enum(FollowState, native_enum=False), nullable=False),
    UniqueConstraint("_follower_id", "_following_id"),
)

# Videos ----------------------------------------------------------------------

video_table = Table(
    "video",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("url", String, nullable=False, unique=True),
    Column("uuid", String, nullable=False),
    Column("name", String, nullable=False),
    Column("privacy", Enum(VideoPrivacy, native_enum=False), nullable=False),
    Column(
        "channel_id",
        UUIDColumnType,
        ForeignKey("video_channel.id", ondelete="CASCADE"),
        key="_channel_id",
        nullable=True,
    ),
    Column("description", Text, nullable=True),
    Column("support", Text, nullable=True),
    Column("category", Integer, nullable=True),
    Column("licence", Integer, nullable=True),
    Column("language", String, nullable=True),
    Column("nsfw", Boolean, nullable=False, default=False),
    Column("comments_enabled", Boolean, nullable=False, default=True),
    Column("download_enabled", Boolean, nullable=False, default=True),
    Column("wait_transcoding", Boolean, nullable=False, default=False),
    Column("duration", Integer, nullable=False, default=0),
    Column("views", Integer, nullable=False, default=0),
    Column("state", Enum(VideoState, native_enum=False), nullable=False),
    Column("tags", StringListType(), nullable=False, default=list),
    Column("is_live", Boolean, nullable=False, default=False),
    Column("is_owned", Boolean, nullable=False, default=False),
    Column("published_at", UTCDateTime(), nullable=True),
    Column("originally_published_at", UTCDateTime(), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
)

video_redundancy_table = Table(
    "video_redundancy",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("url", String, nullable=False, unique=True),
    Column("file_url", String, nullable=False),
    Column("expires_on", UTCDateTime(), nullable=True),
    Column(
        "video_id",
        UUIDColumnType,
        ForeignKey("video.id", ondelete="CASCADE"),
        key="_video_id",
        nullable=False,
    ),
    Column(
        "actor_id",
        UUIDColumnType,
        ForeignKey("actor.id", ondelete="CASCADE"),
        key="_actor_id",
        nullable=False,
    ),
    UniqueConstraint("_video_id", "_actor_id"),
)

video_share_table = Table(
    "video_share",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("url", String, nullable=False, unique=True),
    Column(
        "video_id",
        UUIDColumnType,
        ForeignKey("video.id", ondelete="CASCADE"),
        key="_video_id",
        nullable=False,
    ),
    Column(
        "actor_id",
        UUIDColumnType,
        ForeignKey("actor.id", ondelete="CASCADE"),
        key="_actor_id",
        nullable=False,
    ),
)

video_playlist_table = Table(
    "video_playlist",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("url", String, nullable=False, unique=True),
    Column("uuid", String, nullable=True),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("privacy", Enum(VideoPrivacy, native_enum=False), nullable=False),
    Column(
        "owner_account_id",
        UUIDColumnType,
        ForeignKey("account.id", ondelete="CASCADE"),
        key="_owner_account_id",
        nullable=False,
    ),
    Column(
        "channel_id",
        UUIDColumnType,
        ForeignKey("video_channel.id", ondelete="SET NULL"),
        key="_channel_id",
        nullable=True,
    ),
    Column("created_at", UTCDateTime(), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
)

# Delivery --------------------------------------------------------------------

delivery_job_table = Table(
    "delivery_job",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("activity", JSON, nullable=False),
    Column("inboxes", JSON, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model.

    Relationships around actors load eagerly (``selectin``) so replicas stay usable
    after their session is closed.
    """

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(ActorImage, actor_image_table)

    mapper_registry.map_imperatively(
        Actor,
        actor_table,
        properties={
            "images": relationship(
                ActorImage,
                cascade="all, delete-orphan",
                lazy="selectin",
            ),
            "account": relationship(
                Account,
                back_populates="actor",
                uselist=False,
                lazy="selectin",
            ),
            "channel": relationship(
                VideoChannel,
                back_populates="actor",
                uselist=False,
                lazy="selectin",
            ),
        },
    )

    mapper_registry.map_imperatively(
        Account,
        account_table,
        properties={
            "actor": relationship(Actor, back_populates="account", lazy="selectin"),
        },
    )

    mapper_registry.map_imperatively(
        VideoChannel,
        video_channel_table,
        properties={
            "actor": relationship(Actor, back_populates="channel", lazy="selectin"),
            "account": relationship(Account, lazy="selectin"),
        },
    )

    mapper_registry.map_imperatively(
        ActorFollow,
        actor_follow_table,
        properties={
            "follower": relationship(
                Actor,
                foreign_keys=[actor_follow_table.c._follower_id],  # noqa: SLF001
                lazy="selectin",
            ),
            "following": relationship(
                Actor,
                foreign_keys=[actor_follow_table.c._following_id],  # noqa: SLF001
                lazy="selectin",
            ),
        },
    )

    mapper_registry.map_imperatively(
        Video,
        video_table,
        properties={
            "channel": relationship(VideoChannel, lazy="selectin"),
        },
    )

    mapper_registry.map_imperatively(
        VideoRedundancy,
        video_redundancy_table,
        properties={
            "video": relationship(Video, lazy="selectin"),
            "actor": relationship(Actor, lazy="selectin"),
        },
    )

    mapper_registry.map_imperatively(
        VideoShare,
        video_share_table,
        properties={
            "video": relationship(Video, lazy="selectin"),
            "actor": relationship(Actor, lazy="selectin"),
        },
    )

    mapper_registry.map_imperatively(
        VideoPlaylist,
        video_playlist_table,
        properties={
            "owner_account": relationship(Account, lazy="selectin"),
            "channel": relationship(VideoChannel, lazy="selectin"),
        },
    )

    mapper_registry.map_imperatively(DeliveryJob, delivery_job_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
