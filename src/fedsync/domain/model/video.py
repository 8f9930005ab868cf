"""Video replicas and the records hanging off them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from fedsync.domain.model.entity import Entity
from fedsync.domain.model.enums import VideoPrivacy, VideoState

if TYPE_CHECKING:
    from datetime import datetime

    from fedsync.domain.model.actor import Account, Actor, VideoChannel


@dataclass(eq=False, kw_only=True)
class Video(Entity):
    SNAPSHOT_FIELDS: ClassVar[tuple[str, ...]] = (
        "url",
        "uuid",
        "name",
        "description",
        "support",
        "category",
        "licence",
        "language",
        "nsfw",
        "comments_enabled",
        "download_enabled",
        "wait_transcoding",
        "duration",
        "views",
        "state",
        "privacy",
        "tags",
        "is_live",
        "published_at",
        "originally_published_at",
        "updated_at",
    )

    url: str
    uuid: str
    name: str
    privacy: VideoPrivacy
    channel: VideoChannel | None = field(default=None, repr=False)
    description: str | None = None
    support: str | None = None
    category: int | None = None
    licence: int | None = None
    language: str | None = None
    nsfw: bool = False
    comments_enabled: bool = True
    download_enabled: bool = True
    wait_transcoding: bool = False
    duration: int = 0
    views: int = 0
    state: VideoState = VideoState.PUBLISHED
    tags: list[str] = field(default_factory=list[str])
    is_live: bool = False
    is_owned: bool = False
    published_at: datetime | None = None
    originally_published_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(eq=False, kw_only=True)
class VideoRedundancy(Entity):
    """A peer's announcement that it hosts a cached copy of a video (cache file)."""

    url: str
    file_url: str
    video: Video = field(repr=False)
    actor: Actor = field(repr=False)
    expires_on: datetime | None = None


@dataclass(eq=False, kw_only=True)
class VideoShare(Entity):
    url: str
    video: Video = field(repr=False)
    actor: Actor = field(repr=False)


@dataclass(eq=False, kw_only=True)
class VideoPlaylist(Entity):
    url: str
    name: str
    privacy: VideoPrivacy
    owner_account: Account = field(repr=False)
    uuid: str | None = None
    description: str | None = None
    channel: VideoChannel | None = field(default=None, repr=False)
    created_at: datetime | None = None
    updated_at: datetime | None = None
