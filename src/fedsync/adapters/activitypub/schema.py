"""Pydantic models describing the ActivityPub objects exchanged by video platform peers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime  # noqa: TC003
from typing import Literal, cast
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DURATION_PATTERN = re.compile(r"^PT(\d+)S$")

ActorObjectType = Literal["Person", "Application", "Group", "Service", "Organization"]


def _require_http_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(f"not an http(s) url: {value!r}")
    return value


def _optional_http_url(value: str | None) -> str | None:
    if value is None:
        return None
    return _require_http_url(value)


def _as_list(value: object) -> object:
    if value is None:
        return []
    if isinstance(value, (str, Mapping)):
        return [value]
    return value


def _first_item(value: object) -> object:
    if isinstance(value, list):
        items = cast("list[object]", value)
        return items[0] if items else None
    return value


class ActivityPubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class APObjectRef(ActivityPubBaseModel):
    """``attributedTo`` entry, either a bare url or a typed reference."""

    id: str
    type: str | None = None

    _check_id = field_validator("id")(_require_http_url)


def _coerce_ref(value: object) -> object:
    if isinstance(value, str):
        return {"id": value}
    return value


def _refs(value: object) -> object:
    items = _as_list(value)
    if isinstance(items, list):
        return [_coerce_ref(item) for item in cast("list[object]", items)]
    return items


class APIdentifier(ActivityPubBaseModel):
    identifier: str
    name: str | None = None


class APTag(ActivityPubBaseModel):
    type: str = "Hashtag"
    name: str


class APImage(ActivityPubBaseModel):
    type: str
    url: str
    media_type: str | None = Field(default=None, alias="mediaType")
    width: int | None = None
    height: int | None = None


class APPublicKey(ActivityPubBaseModel):
    id: str | None = None
    owner: str | None = None
    public_key_pem: str = Field(alias="publicKeyPem")


class APEndpoints(ActivityPubBaseModel):
    shared_inbox: str | None = Field(default=None, alias="sharedInbox")


class APVideoObject(ActivityPubBaseModel):
    type: Literal["Video"]
    id: str
    uuid: str
    name: str = Field(min_length=3, max_length=120)
    duration: int = Field(ge=0)
    category: APIdentifier | None = None
    licence: APIdentifier | None = None
    language: APIdentifier | None = None
    views: int = Field(default=0, ge=0)
    sensitive: bool = False
    wait_transcoding: bool = Field(default=False, alias="waitTranscoding")
    state: int | None = None
    comments_enabled: bool = Field(default=True, alias="commentsEnabled")
    download_enabled: bool = Field(default=True, alias="downloadEnabled")
    is_live_broadcast: bool = Field(default=False, alias="isLiveBroadcast")
    published: datetime
    originally_published_at: datetime | None = Field(default=None, alias="originallyPublishedAt")
    updated: datetime | None = None
    content: str | None = None
    support: str | None = None
    tag: list[APTag] = Field(default_factory=list["APTag"])
    attributed_to: list[APObjectRef] = Field(alias="attributedTo", min_length=1)
    to: list[str] = Field(default_factory=list[str])
    cc: list[str] = Field(default_factory=list[str])

    _check_id = field_validator("id")(_require_http_url)
    _normalize_refs = field_validator("attributed_to", mode="before")(_refs)
    _normalize_audience = field_validator("to", "cc", "tag", mode="before")(_as_list)

    @field_validator("duration", mode="before")
    @classmethod
    def _parse_duration(cls, value: object) -> object:
        if isinstance(value, str):
            match = _DURATION_PATTERN.match(value)
            if match is None:
                raise ValueError(f"invalid ISO 8601 duration: {value!r}")
            return int(match.group(1))
        return value


class APActorObject(ActivityPubBaseModel):
    type: ActorObjectType
    id: str
    preferred_username: str = Field(alias="preferredUsername", min_length=1)
    inbox: str
    outbox: str | None = None
    followers: str | None = None
    following: str | None = None
    name: str | None = None
    summary: str | None = None
    support: str | None = None
    endpoints: APEndpoints | None = None
    public_key: APPublicKey | None = Field(default=None, alias="publicKey")
    published: datetime | None = None
    icon: APImage | None = None
    image: APImage | None = None
    attributed_to: list[APObjectRef] = Field(default_factory=list["APObjectRef"], alias="attributedTo")

    _check_urls = field_validator("id", "inbox")(_require_http_url)
    _check_optional_urls = field_validator("outbox", "followers", "following")(_optional_http_url)
    _normalize_refs = field_validator("attributed_to", mode="before")(_refs)
    _normalize_images = field_validator("icon", "image", mode="before")(_first_item)


class APCacheFileLink(ActivityPubBaseModel):
    type: Literal["Link"]
    href: str
    media_type: str | None = Field(default=None, alias="mediaType")
    height: int | None = None

    _check_href = field_validator("href")(_require_http_url)


class APCacheFileObject(ActivityPubBaseModel):
    type: Literal["CacheFile"]
    id: str
    video_url: str = Field(alias="object")
    expires: datetime | None = None
    url: APCacheFileLink

    _check_urls = field_validator("id", "video_url")(_require_http_url)


class APPlaylistObject(ActivityPubBaseModel):
    type: Literal["Playlist"]
    id: str
    name: str = Field(min_length=1, max_length=120)
    uuid: str | None = None
    content: str | None = None
    total_items: int | None = Field(default=None, alias="totalItems")
    published: datetime | None = None
    updated: datetime | None = None
    attributed_to: list[APObjectRef] = Field(default_factory=list["APObjectRef"], alias="attributedTo")

    _check_id = field_validator("id")(_require_http_url)
    _normalize_refs = field_validator("attributed_to", mode="before")(_refs)


class APUpdateActivity(ActivityPubBaseModel):
    type: Literal["Update"]
    id: str
    actor: APObjectRef
    payload: dict[str, object] = Field(alias="object")
    to: list[str] = Field(default_factory=list[str])
    cc: list[str] = Field(default_factory=list[str])

    _normalize_actor = field_validator("actor", mode="before")(_coerce_ref)
    _normalize_audience = field_validator("to", "cc", mode="before")(_as_list)
