from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from fedsync.adapters.activitypub import PydanticObjectReader, parse_update_activity
from fedsync.domain.activity import PUBLIC_AUDIENCE, ObjectKind
from fedsync.domain.model import ActorType, VideoState
from tests.helpers.replicas import (
    REMOTE_HOST,
    actor_object,
    cache_file_object,
    playlist_object,
    video_object,
)


def test_read_video_translates_fields() -> None:
    update = PydanticObjectReader().read_video(video_object())

    assert update is not None
    assert update.channel_url == f"{REMOTE_HOST}/video-channels/alice_channel"
    assert update.account_url == f"{REMOTE_HOST}/accounts/alice"
    assert update.category == 15
    assert update.licence == 1
    assert update.language == "en"
    assert update.state == VideoState.PUBLISHED
    assert update.tags == ["federation"]
    assert update.to == [PUBLIC_AUDIENCE]
    assert update.updated == datetime(2024, 5, 2, 8, 30, tzinfo=UTC)


def test_read_video_ignores_unknown_state_and_identifiers() -> None:
    payload = video_object(state=99, category={"identifier": "music"})

    update = PydanticObjectReader().read_video(payload)

    assert update is not None
    assert update.state is None
    assert update.category is None


def test_read_actor_translates_fields() -> None:
    update = PydanticObjectReader().read_actor(actor_object())

    assert update is not None
    assert update.type == ActorType.PERSON
    assert update.preferred_username == "alice"
    assert update.shared_inbox == f"{REMOTE_HOST}/inbox"
    assert update.public_key is not None
    assert update.icon is not None
    assert update.icon.media_type == "image/png"


def test_read_cache_file_and_playlist() -> None:
    reader = PydanticObjectReader()

    cache_file = reader.read_cache_file(cache_file_object())
    playlist = reader.read_playlist(
        playlist_object(attributed_to=[f"{REMOTE_HOST}/video-channels/alice_channel"])
    )

    assert cache_file is not None
    assert cache_file.file_url.endswith("-720.mp4")
    assert cache_file.media_type == "video/mp4"
    assert playlist is not None
    assert playlist.attributed_to == [f"{REMOTE_HOST}/video-channels/alice_channel"]


def test_invalid_payloads_read_as_none() -> None:
    reader = PydanticObjectReader()

    assert reader.read_video(video_object(name="no")) is None
    assert reader.read_actor({"type": "Person"}) is None
    assert reader.read_cache_file(playlist_object()) is None
    assert reader.read_playlist(cache_file_object()) is None


def test_parse_update_activity() -> None:
    activity = parse_update_activity(
        {
            "type": "Update",
            "id": f"{REMOTE_HOST}/videos/1/updates/2",
            "actor": {"type": "Person", "id": f"{REMOTE_HOST}/accounts/alice"},
            "object": video_object(),
            "to": [PUBLIC_AUDIENCE],
            "cc": [f"{REMOTE_HOST}/accounts/alice/followers"],
        }
    )

    assert activity.actor == f"{REMOTE_HOST}/accounts/alice"
    assert activity.kind == ObjectKind.VIDEO
    assert activity.cc == (f"{REMOTE_HOST}/accounts/alice/followers",)


def test_parse_update_activity_rejects_other_types() -> None:
    with pytest.raises(ValidationError):
        parse_update_activity(
            {
                "type": "Create",
                "id": f"{REMOTE_HOST}/c/1",
                "actor": f"{REMOTE_HOST}/accounts/alice",
                "object": {},
            }
        )
