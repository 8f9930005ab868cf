"""Object update DTOs (wire-agnostic), produced by the object reader port."""

# switch off type warnings because of default_factory=list
# pyright: reportUnknownVariableType=false

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from fedsync.domain.model import ActorImageType, ActorType, VideoState


@dataclass(slots=True, frozen=True)
class ImageObject:
    """Raw image reference attached to an actor object (``icon`` or ``image``)."""

    type: str
    url: str
    media_type: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass(slots=True, frozen=True)
class ImageInfo:
    """Image reference resolved to a storable file description."""

    type: ActorImageType
    file_url: str
    file_name: str
    width: int | None = None
    height: int | None = None


@dataclass(slots=True, frozen=True)
class ObjectRef:
    url: str
    type: str | None = None


@dataclass(slots=True)
class ActorObjectUpdate:
    url: str
    type: ActorType
    preferred_username: str
    inbox: str
    name: str | None = None
    summary: str | None = None
    support: str | None = None
    public_key: str | None = None
    shared_inbox: str | None = None
    outbox: str | None = None
    followers: str | None = None
    following: str | None = None
    published: datetime | None = None
    icon: ImageObject | None = None
    image: ImageObject | None = None
    attributed_to: list[ObjectRef] = field(default_factory=list)


@dataclass(slots=True)
class VideoObjectUpdate:
    url: str
    uuid: str
    name: str
    duration: int
    channel_url: str | None = None
    account_url: str | None = None
    content: str | None = None
    support: str | None = None
    category: int | None = None
    licence: int | None = None
    language: str | None = None
    sensitive: bool = False
    comments_enabled: bool = True
    download_enabled: bool = True
    wait_transcoding: bool = False
    views: int = 0
    state: VideoState | None = None
    is_live: bool = False
    tags: list[str] = field(default_factory=list)
    published: datetime | None = None
    originally_published_at: datetime | None = None
    updated: datetime | None = None
    to: list[str] = field(default_factory=list)
    cc: list[str] = field(default_factory=list)


@dataclass(slots=True)
class CacheFileObjectUpdate:
    url: str
    video_url: str
    file_url: str
    media_type: str | None = None
    expires: datetime | None = None


@dataclass(slots=True)
class PlaylistObjectUpdate:
    url: str
    name: str
    uuid: str | None = None
    content: str | None = None
    total_items: int | None = None
    published: datetime | None = None
    updated: datetime | None = None
    attributed_to: list[str] = field(default_factory=list)
