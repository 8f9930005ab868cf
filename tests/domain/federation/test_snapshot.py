from __future__ import annotations

from dataclasses import fields
from typing import Any

import pytest

from fedsync.domain.federation import Snapshot, restore_all
from fedsync.domain.model import ActorImage, ActorImageType, ActorType, Video, VideoPrivacy
from fedsync.domain.object_updates import apply_video_update
from tests.helpers.replicas import (
    make_account_actor,
    make_channel_actor,
    make_video,
    make_video_update,
)


def test_capture_and_restore_actor_fields() -> None:
    actor = make_account_actor()
    original_key = actor.public_key
    snapshot = Snapshot.capture(actor)

    actor.preferred_username = "mallory"
    actor.public_key = "other"
    actor.type = ActorType.SERVICE

    restored = snapshot.restore()

    assert restored is actor
    assert actor.preferred_username == "alice"
    assert actor.public_key == original_key
    assert actor.type == ActorType.PERSON


def test_restore_brings_back_the_image_list() -> None:
    actor = make_account_actor()
    avatar = ActorImage(type=ActorImageType.AVATAR, file_url="https://remote.example/a.png")
    actor.set_image(ActorImageType.AVATAR, avatar)
    snapshot = Snapshot.capture(actor)

    actor.set_image(ActorImageType.AVATAR, None)
    actor.images.append(ActorImage(type=ActorImageType.BANNER, file_url="https://b.example/b.png"))
    snapshot.restore()

    assert actor.images == [avatar]
    assert actor.avatar is avatar
    assert actor.banner is None


def test_snapshot_holds_its_own_copy_of_collections() -> None:
    actor = make_account_actor()
    snapshot = Snapshot.capture(actor)

    actor.images.append(ActorImage(type=ActorImageType.AVATAR, file_url="https://r.example/a.png"))

    assert snapshot.values["images"] == []


def test_capture_with_explicit_fields() -> None:
    actor = make_account_actor()
    assert actor.account is not None
    snapshot = Snapshot.capture(actor.account, fields=["name"])

    actor.account.name = "Changed"
    actor.account.description = "Changed too"
    snapshot.restore()

    assert actor.account.name == "Alice"
    assert actor.account.description == "Changed too"


def test_capture_requires_declared_fields() -> None:
    with pytest.raises(TypeError):
        Snapshot.capture(object())


def test_restore_all_restores_every_entity() -> None:
    actor = make_account_actor()
    assert actor.account is not None
    snapshots: list[Snapshot[Any]] = [
        Snapshot.capture(actor),
        Snapshot.capture(actor.account),
    ]

    actor.preferred_username = "bob"
    actor.account.name = "Bob"
    actor.account.description = None
    restore_all(snapshots)

    assert actor.preferred_username == "alice"
    assert actor.account.name == "Alice"
    assert actor.account.description == "Original bio"


def _video_state(video: Video) -> dict[str, object]:
    return {item.name: getattr(video, item.name) for item in fields(video)}


def test_video_snapshot_covers_every_applied_field() -> None:
    video = make_video(make_channel_actor(owner=make_account_actor()))
    before = _video_state(video)
    snapshot = Snapshot.capture(video)
    update = make_video_update(video, name="Renamed")
    update.uuid = "ffffffff-0000-0000-0000-000000000000"
    update.url = "https://remote.example/videos/watch/ffffffff-0000-0000-0000-000000000000"

    apply_video_update(video, update, privacy=VideoPrivacy.UNLISTED)
    assert _video_state(video) != before

    snapshot.restore()

    assert _video_state(video) == before
