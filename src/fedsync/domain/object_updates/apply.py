"""Apply object update DTOs to replica entities."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Final
from urllib.parse import urlparse
from uuid import uuid4

from fedsync.domain.model import Actor, ActorImage, ActorImageType, Video, VideoState

from .dto import ImageInfo

if TYPE_CHECKING:
    from fedsync.domain.model import VideoChannel, VideoPrivacy

    from .dto import ActorObjectUpdate, VideoObjectUpdate

IMAGE_EXTENSION_BY_MIMETYPE: Final[dict[str, str]] = {
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/jpg": ".jpg",
    "image/jpeg": ".jpg",
}
IMAGE_MIMETYPE_BY_EXTENSION: Final[dict[str, str]] = {
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def extract_image_info(
    actor_object: ActorObjectUpdate, image_type: ActorImageType
) -> ImageInfo | None:
    """Resolve the avatar (``icon``) or banner (``image``) of an actor object.

    Returns ``None`` when the reference is absent, is not an ``Image`` or has no
    recognisable image format.
    """

    icon = actor_object.icon if image_type == ActorImageType.AVATAR else actor_object.image
    if icon is None or icon.type != "Image" or not _is_http_url(icon.url):
        return None

    extension: str | None = None
    if icon.media_type:
        extension = IMAGE_EXTENSION_BY_MIMETYPE.get(icon.media_type.lower())
    else:
        candidate = PurePosixPath(urlparse(icon.url).path).suffix.lower()
        if candidate in IMAGE_MIMETYPE_BY_EXTENSION:
            extension = candidate
    if extension is None:
        return None

    return ImageInfo(
        type=image_type,
        file_url=icon.url,
        file_name=f"{uuid4()}{extension}",
        width=icon.width,
        height=icon.height,
    )


def update_actor_instance(actor: Actor, update: ActorObjectUpdate) -> None:
    """Overwrite the identity fields of ``actor`` with the remote object."""

    actor.type = update.type
    actor.preferred_username = update.preferred_username
    actor.url = update.url
    actor.public_key = update.public_key
    actor.inbox_url = update.inbox
    actor.outbox_url = update.outbox
    actor.followers_url = update.followers
    actor.following_url = update.following
    if update.published is not None:
        actor.remote_created_at = update.published
    if update.shared_inbox:
        actor.shared_inbox_url = update.shared_inbox


def update_actor_image(
    actor: Actor, image_type: ActorImageType, info: ImageInfo | None
) -> ActorImage | None:
    """Upsert one image slot of ``actor``.

    An unchanged file url keeps the current image; a missing ``info`` removes it.
    """

    current = actor.image(image_type)
    if current is not None and info is not None and current.file_url == info.file_url:
        return current
    if info is None:
        if current is not None:
            actor.set_image(image_type, None)
        return None

    image = ActorImage(
        type=image_type,
        file_url=info.file_url,
        file_name=info.file_name,
        width=info.width,
        height=info.height,
        on_disk=False,
    )
    actor.set_image(image_type, image)
    return image


def build_actor(update: ActorObjectUpdate) -> Actor:
    actor = Actor(
        url=update.url,
        type=update.type,
        preferred_username=update.preferred_username,
        inbox_url=update.inbox,
    )
    update_actor_instance(actor, update)
    for image_type in ActorImageType:
        update_actor_image(actor, image_type, extract_image_info(update, image_type))
    return actor


def apply_video_update(video: Video, update: VideoObjectUpdate, *, privacy: VideoPrivacy) -> Video:
    """Field-level overwrite: the last notice applied wins."""

    video.name = update.name
    video.uuid = update.uuid
    video.url = update.url
    video.description = update.content
    video.support = update.support
    video.category = update.category
    video.licence = update.licence
    video.language = update.language
    video.nsfw = update.sensitive
    video.comments_enabled = update.comments_enabled
    video.download_enabled = update.download_enabled
    video.wait_transcoding = update.wait_transcoding
    video.duration = update.duration
    video.views = update.views
    video.state = update.state or VideoState.PUBLISHED
    video.is_live = update.is_live
    video.tags = list(update.tags)
    video.privacy = privacy
    video.published_at = update.published
    video.originally_published_at = update.originally_published_at
    video.updated_at = update.updated
    return video


def build_video(
    update: VideoObjectUpdate, *, channel: VideoChannel, privacy: VideoPrivacy
) -> Video:
    video = Video(
        url=update.url,
        uuid=update.uuid,
        name=update.name,
        privacy=privacy,
        channel=channel,
        is_owned=False,
    )
    return apply_video_update(video, update, privacy=privacy)


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)
