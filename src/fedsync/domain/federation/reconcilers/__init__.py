"""One reconciler per kind of updated object."""

from __future__ import annotations

from .actor import (
    AccountOwned,
    ActorUpdatePlan,
    ChannelOwned,
    OwnedEntity,
    owned_entity_for,
    prepare_actor_update,
    reconcile_actor,
)
from .cache_file import prepare_cache_file, reconcile_cache_file
from .playlist import reconcile_playlist
from .video import VideoUpdater, reconcile_video

__all__ = [
    "AccountOwned",
    "ActorUpdatePlan",
    "ChannelOwned",
    "OwnedEntity",
    "VideoUpdater",
    "owned_entity_for",
    "prepare_actor_update",
    "prepare_cache_file",
    "reconcile_actor",
    "reconcile_cache_file",
    "reconcile_playlist",
    "reconcile_video",
]
