from __future__ import annotations

import pytest

from fedsync.domain.activity import (
    PUBLIC_AUDIENCE,
    ObjectKind,
    UpdateActivity,
    classify_object_type,
    privacy_from_audience,
)
from fedsync.domain.model import VideoPrivacy


@pytest.mark.parametrize(
    ("object_type", "kind"),
    [
        ("Video", ObjectKind.VIDEO),
        ("Person", ObjectKind.ACTOR),
        ("Application", ObjectKind.ACTOR),
        ("Group", ObjectKind.ACTOR),
        ("CacheFile", ObjectKind.CACHE_FILE),
        ("Playlist", ObjectKind.PLAYLIST),
        ("Note", ObjectKind.UNKNOWN),
        (None, ObjectKind.UNKNOWN),
    ],
)
def test_classify_object_type(object_type: str | None, kind: ObjectKind) -> None:
    assert classify_object_type(object_type) == kind


def test_update_activity_properties() -> None:
    activity = UpdateActivity(
        id="https://remote.example/updates/1",
        actor="https://remote.example/accounts/alice",
        object={"type": "Video", "id": "https://remote.example/videos/1"},
        to=(PUBLIC_AUDIENCE,),
        cc=("https://remote.example/accounts/alice/followers",),
    )

    assert activity.kind == ObjectKind.VIDEO
    assert activity.object_id == "https://remote.example/videos/1"
    assert activity.audience == (
        PUBLIC_AUDIENCE,
        "https://remote.example/accounts/alice/followers",
    )
    payload = activity.to_payload()
    assert payload["type"] == "Update"
    assert payload["to"] == [PUBLIC_AUDIENCE]
    assert payload["object"] == {"type": "Video", "id": "https://remote.example/videos/1"}


def test_non_string_object_type_is_unknown() -> None:
    activity = UpdateActivity(id="u", actor="a", object={"type": ["Video"], "id": 3})

    assert activity.object_type is None
    assert activity.object_id is None
    assert activity.kind == ObjectKind.UNKNOWN


def test_privacy_from_audience() -> None:
    assert privacy_from_audience([PUBLIC_AUDIENCE, "x"]) == VideoPrivacy.PUBLIC
    assert privacy_from_audience(["https://remote.example/followers"]) == VideoPrivacy.UNLISTED
    assert privacy_from_audience([]) == VideoPrivacy.UNLISTED
