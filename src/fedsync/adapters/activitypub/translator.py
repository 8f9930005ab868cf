"""Translate validated ActivityPub payloads into object update DTOs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fedsync.domain.activity import UpdateActivity
from fedsync.domain.model import ActorType, VideoState
from fedsync.domain.object_updates import (
    ActorObjectUpdate,
    CacheFileObjectUpdate,
    ImageObject,
    ObjectRef,
    PlaylistObjectUpdate,
    VideoObjectUpdate,
)

from .schema import APUpdateActivity

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .schema import (
        APActorObject,
        APCacheFileObject,
        APIdentifier,
        APImage,
        APObjectRef,
        APPlaylistObject,
        APVideoObject,
    )

_VIDEO_STATE_MAP: dict[int, VideoState] = {
    1: VideoState.PUBLISHED,
    2: VideoState.TO_TRANSCODE,
    3: VideoState.TO_IMPORT,
    4: VideoState.WAITING_FOR_LIVE,
    5: VideoState.LIVE_ENDED,
}

_CHANNEL_TYPES = frozenset({"Group"})
_ACCOUNT_TYPES = frozenset({"Person", "Application"})


def _numeric_identifier(value: APIdentifier | None) -> int | None:
    if value is None or not value.identifier.isdigit():
        return None
    return int(value.identifier)


def _first_ref_of(refs: list[APObjectRef], types: frozenset[str]) -> str | None:
    for ref in refs:
        if ref.type in types:
            return ref.id
    return None


def _image(image: APImage | None) -> ImageObject | None:
    if image is None:
        return None
    return ImageObject(
        type=image.type,
        url=image.url,
        media_type=image.media_type,
        width=image.width,
        height=image.height,
    )


def translate_video(payload: APVideoObject) -> VideoObjectUpdate:
    return VideoObjectUpdate(
        url=payload.id,
        uuid=payload.uuid,
        name=payload.name,
        duration=payload.duration,
        channel_url=_first_ref_of(payload.attributed_to, _CHANNEL_TYPES),
        account_url=_first_ref_of(payload.attributed_to, _ACCOUNT_TYPES),
        content=payload.content,
        support=payload.support,
        category=_numeric_identifier(payload.category),
        licence=_numeric_identifier(payload.licence),
        language=payload.language.identifier if payload.language else None,
        sensitive=payload.sensitive,
        comments_enabled=payload.comments_enabled,
        download_enabled=payload.download_enabled,
        wait_transcoding=payload.wait_transcoding,
        views=payload.views,
        state=_VIDEO_STATE_MAP.get(payload.state) if payload.state is not None else None,
        is_live=payload.is_live_broadcast,
        tags=[tag.name for tag in payload.tag if tag.type == "Hashtag"],
        published=payload.published,
        originally_published_at=payload.originally_published_at,
        updated=payload.updated,
        to=list(payload.to),
        cc=list(payload.cc),
    )


def translate_actor(payload: APActorObject) -> ActorObjectUpdate:
    return ActorObjectUpdate(
        url=payload.id,
        type=ActorType(payload.type),
        preferred_username=payload.preferred_username,
        inbox=payload.inbox,
        name=payload.name,
        summary=payload.summary,
        support=payload.support,
        public_key=payload.public_key.public_key_pem if payload.public_key else None,
        shared_inbox=payload.endpoints.shared_inbox if payload.endpoints else None,
        outbox=payload.outbox,
        followers=payload.followers,
        following=payload.following,
        published=payload.published,
        icon=_image(payload.icon),
        image=_image(payload.image),
        attributed_to=[ObjectRef(url=ref.id, type=ref.type) for ref in payload.attributed_to],
    )


def translate_cache_file(payload: APCacheFileObject) -> CacheFileObjectUpdate:
    return CacheFileObjectUpdate(
        url=payload.id,
        video_url=payload.video_url,
        file_url=payload.url.href,
        media_type=payload.url.media_type,
        expires=payload.expires,
    )


def translate_playlist(payload: APPlaylistObject) -> PlaylistObjectUpdate:
    return PlaylistObjectUpdate(
        url=payload.id,
        name=payload.name,
        uuid=payload.uuid,
        content=payload.content,
        total_items=payload.total_items,
        published=payload.published,
        updated=payload.updated,
        attributed_to=[ref.id for ref in payload.attributed_to],
    )


def parse_update_activity(payload: Mapping[str, object]) -> UpdateActivity:
    """Validate the envelope of an Update activity. Raises ``pydantic.ValidationError``."""

    activity = APUpdateActivity.model_validate(payload)
    return UpdateActivity(
        id=activity.id,
        actor=activity.actor.id,
        object=activity.payload,
        to=tuple(activity.to),
        cc=tuple(activity.cc),
    )
