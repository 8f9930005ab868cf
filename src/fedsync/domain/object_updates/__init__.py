"""Translation targets for remote objects and the helpers applying them."""

from __future__ import annotations

from .apply import (
    apply_video_update,
    build_actor,
    build_video,
    extract_image_info,
    update_actor_image,
    update_actor_instance,
)
from .dto import (
    ActorObjectUpdate,
    CacheFileObjectUpdate,
    ImageInfo,
    ImageObject,
    ObjectRef,
    PlaylistObjectUpdate,
    VideoObjectUpdate,
)

__all__ = [
    "ActorObjectUpdate",
    "CacheFileObjectUpdate",
    "ImageInfo",
    "ImageObject",
    "ObjectRef",
    "PlaylistObjectUpdate",
    "VideoObjectUpdate",
    "apply_video_update",
    "build_actor",
    "build_video",
    "extract_image_info",
    "update_actor_image",
    "update_actor_instance",
]
