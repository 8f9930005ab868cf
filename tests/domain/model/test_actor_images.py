from __future__ import annotations

from fedsync.domain.model import ActorImage, ActorImageType
from tests.helpers.replicas import make_account_actor


def _image(image_type: ActorImageType, name: str) -> ActorImage:
    return ActorImage(type=image_type, file_url=f"https://remote.example/static/{name}.png")


def test_set_image_replaces_only_the_same_type() -> None:
    actor = make_account_actor()
    actor.images = [
        _image(ActorImageType.AVATAR, "old-avatar"),
        _image(ActorImageType.BANNER, "banner"),
    ]

    actor.set_image(ActorImageType.AVATAR, _image(ActorImageType.AVATAR, "new-avatar"))

    assert actor.avatar is not None
    assert actor.avatar.file_url.endswith("new-avatar.png")
    assert actor.banner is not None
    assert len(actor.images) == 2


def test_set_image_none_removes_it() -> None:
    actor = make_account_actor()
    actor.images = [_image(ActorImageType.BANNER, "banner")]

    actor.set_image(ActorImageType.BANNER, None)

    assert actor.banner is None
    assert actor.images == []


def test_shared_inbox_falls_back_to_inbox() -> None:
    actor = make_account_actor()
    assert actor.shared_inbox == "https://remote.example/inbox"

    actor.shared_inbox_url = None

    assert actor.shared_inbox == actor.inbox_url


def test_entities_have_identity_before_persistence() -> None:
    first = make_account_actor()
    second = make_account_actor()

    assert first.id != second.id
    assert first != second
