"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ActorType(StrEnum):
    PERSON = "Person"
    APPLICATION = "Application"
    GROUP = "Group"
    SERVICE = "Service"
    ORGANIZATION = "Organization"


class ActorImageType(StrEnum):
    AVATAR = "avatar"
    BANNER = "banner"


class VideoPrivacy(StrEnum):
    PUBLIC = "public"
    UNLISTED = "unlisted"
    PRIVATE = "private"
    INTERNAL = "internal"


class VideoState(StrEnum):
    PUBLISHED = "published"
    TO_TRANSCODE = "to_transcode"
    TO_IMPORT = "to_import"
    WAITING_FOR_LIVE = "waiting_for_live"
    LIVE_ENDED = "live_ended"


class FollowState(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
