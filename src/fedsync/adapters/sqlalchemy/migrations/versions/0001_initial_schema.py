"""Initial replica store schema.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from fedsync.domain.model import ActorImageType, ActorType, FollowState, VideoPrivacy, VideoState

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _uuid_pk() -> sa.Column[object]:
    return sa.Column("id", sa.Uuid(), nullable=False)


def _utc(name: str, *, nullable: bool = True) -> sa.Column[object]:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        "actor",
        _uuid_pk(),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("type", sa.Enum(ActorType, native_enum=False), nullable=False),
        sa.Column("preferred_username", sa.String(), nullable=False),
        sa.Column("inbox_url", sa.String(), nullable=False),
        sa.Column("shared_inbox_url", sa.String(), nullable=True),
        sa.Column("outbox_url", sa.String(), nullable=True),
        sa.Column("followers_url", sa.String(), nullable=True),
        sa.Column("following_url", sa.String(), nullable=True),
        sa.Column("public_key", sa.Text(), nullable=True),
        _utc("remote_created_at"),
        sa.Column("is_owned", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_actor"),
        sa.UniqueConstraint("url", name="uq_actor_actor_url"),
    )
    op.create_index("ix_actor_followers_url", "actor", ["followers_url"])

    op.create_table(
        "actor_image",
        _uuid_pk(),
        sa.Column("actor_id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.Enum(ActorImageType, native_enum=False), nullable=False),
        sa.Column("file_url", sa.String(), nullable=False),
        sa.Column("file_name", sa.String(), nullable=True),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("on_disk", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["actor_id"],
            ["actor.id"],
            name="fk_actor_image_actor_image_actor_id_actor",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_actor_image"),
    )

    op.create_table(
        "account",
        _uuid_pk(),
        sa.Column("actor_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["actor_id"], ["actor.id"], name="fk_account_account_actor_id_actor", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_account"),
        sa.UniqueConstraint("actor_id", name="uq_account_account_actor_id"),
    )

    op.create_table(
        "video_channel",
        _uuid_pk(),
        sa.Column("actor_id", sa.Uuid(), nullable=True),
        sa.Column("account_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("support", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["actor_id"],
            ["actor.id"],
            name="fk_video_channel_video_channel_actor_id_actor",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["account_id"],
            ["account.id"],
            name="fk_video_channel_video_channel_account_id_account",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_video_channel"),
        sa.UniqueConstraint("actor_id", name="uq_video_channel_video_channel_actor_id"),
    )

    op.create_table(
        "actor_follow",
        _uuid_pk(),
        sa.Column("follower_id", sa.Uuid(), nullable=False),
        sa.Column("following_id", sa.Uuid(), nullable=False),
        sa.Column("state", sa.Enum(FollowState, native_enum=False), nullable=False),
        sa.ForeignKeyConstraint(
            ["follower_id"],
            ["actor.id"],
            name="fk_actor_follow_actor_follow_follower_id_actor",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["following_id"],
            ["actor.id"],
            name="fk_actor_follow_actor_follow_following_id_actor",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_actor_follow"),
        sa.UniqueConstraint(
            "follower_id", "following_id", name="uq_actor_follow_actor_follow_follower_id"
        ),
    )

    op.create_table(
        "video",
        _uuid_pk(),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("uuid", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("privacy", sa.Enum(VideoPrivacy, native_enum=False), nullable=False),
        sa.Column("channel_id", sa.Uuid(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("support", sa.Text(), nullable=True),
        sa.Column("category", sa.Integer(), nullable=True),
        sa.Column("licence", sa.Integer(), nullable=True),
        sa.Column("language", sa.String(), nullable=True),
        sa.Column("nsfw", sa.Boolean(), nullable=False),
        sa.Column("comments_enabled", sa.Boolean(), nullable=False),
        sa.Column("download_enabled", sa.Boolean(), nullable=False),
        sa.Column("wait_transcoding", sa.Boolean(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False),
        sa.Column("state", sa.Enum(VideoState, native_enum=False), nullable=False),
        sa.Column("tags", sa.Text(), nullable=False),
        sa.Column("is_live", sa.Boolean(), nullable=False),
        sa.Column("is_owned", sa.Boolean(), nullable=False),
        _utc("published_at"),
        _utc("originally_published_at"),
        _utc("updated_at"),
        sa.ForeignKeyConstraint(
            ["channel_id"],
            ["video_channel.id"],
            name="fk_video_video_channel_id_video_channel",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_video"),
        sa.UniqueConstraint("url", name="uq_video_video_url"),
    )

    op.create_table(
        "video_redundancy",
        _uuid_pk(),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("file_url", sa.String(), nullable=False),
        _utc("expires_on"),
        sa.Column("video_id", sa.Uuid(), nullable=False),
        sa.Column("actor_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            ["video_id"],
            ["video.id"],
            name="fk_video_redundancy_video_redundancy_video_id_video",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["actor_id"],
            ["actor.id"],
            name="fk_video_redundancy_video_redundancy_actor_id_actor",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_video_redundancy"),
        sa.UniqueConstraint("url", name="uq_video_redundancy_video_redundancy_url"),
        sa.UniqueConstraint(
            "video_id", "actor_id", name="uq_video_redundancy_video_redundancy_video_id"
        ),
    )

    op.create_table(
        "video_share",
        _uuid_pk(),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("video_id", sa.Uuid(), nullable=False),
        sa.Column("actor_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            ["video_id"],
            ["video.id"],
            name="fk_video_share_video_share_video_id_video",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["actor_id"],
            ["actor.id"],
            name="fk_video_share_video_share_actor_id_actor",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_video_share"),
        sa.UniqueConstraint("url", name="uq_video_share_video_share_url"),
    )

    op.create_table(
        "video_playlist",
        _uuid_pk(),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("uuid", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("privacy", sa.Enum(VideoPrivacy, native_enum=False), nullable=False),
        sa.Column("owner_account_id", sa.Uuid(), nullable=False),
        sa.Column("channel_id", sa.Uuid(), nullable=True),
        _utc("created_at"),
        _utc("updated_at"),
        sa.ForeignKeyConstraint(
            ["owner_account_id"],
            ["account.id"],
            name="fk_video_playlist_video_playlist_owner_account_id_account",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["channel_id"],
            ["video_channel.id"],
            name="fk_video_playlist_video_playlist_channel_id_video_channel",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_video_playlist"),
        sa.UniqueConstraint("url", name="uq_video_playlist_video_playlist_url"),
    )

    op.create_table(
        "delivery_job",
        _uuid_pk(),
        sa.Column("activity", sa.JSON(), nullable=False),
        sa.Column("inboxes", sa.JSON(), nullable=False),
        _utc("created_at", nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_delivery_job"),
    )


def downgrade() -> None:
    op.drop_table("delivery_job")
    op.drop_table("video_playlist")
    op.drop_table("video_share")
    op.drop_table("video_redundancy")
    op.drop_table("video")
    op.drop_table("actor_follow")
    op.drop_table("video_channel")
    op.drop_table("account")
    op.drop_table("actor_image")
    op.drop_index("ix_actor_followers_url", table_name="actor")
    op.drop_table("actor")
