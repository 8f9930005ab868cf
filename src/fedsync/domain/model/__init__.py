"""Public domain model surface."""

from __future__ import annotations

from fedsync.domain.model.actor import Account, Actor, ActorImage, VideoChannel
from fedsync.domain.model.entity import Entity, new_id
from fedsync.domain.model.enums import (
    ActorImageType,
    ActorType,
    FollowState,
    VideoPrivacy,
    VideoState,
)
from fedsync.domain.model.social import ActorFollow, DeliveryJob
from fedsync.domain.model.video import Video, VideoPlaylist, VideoRedundancy, VideoShare

__all__ = [
    "Account",
    "Actor",
    "ActorFollow",
    "ActorImage",
    "ActorImageType",
    "ActorType",
    "DeliveryJob",
    "Entity",
    "FollowState",
    "Video",
    "VideoChannel",
    "VideoPlaylist",
    "VideoPrivacy",
    "VideoRedundancy",
    "VideoShare",
    "VideoState",
    "new_id",
]
