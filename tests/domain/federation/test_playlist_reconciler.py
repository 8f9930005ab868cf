from __future__ import annotations

import pytest

from fedsync.domain.activity import PUBLIC_AUDIENCE
from fedsync.domain.federation import FatalInconsistencyError, UpdateOutcome
from fedsync.domain.federation.reconcilers import reconcile_playlist
from fedsync.domain.model import VideoPrivacy
from tests.helpers.replicas import (
    make_account_actor,
    make_activity,
    make_channel_actor,
    make_playlist_update,
)
from tests.support.federation import (
    FakeActorResolver,
    FakeObjectReader,
    FakeUnitOfWork,
    make_context,
    store_actor,
)


def test_playlist_is_created_for_signing_account() -> None:
    signer = make_account_actor()
    uow = FakeUnitOfWork()
    store_actor(uow.repositories, signer)
    playlist = make_playlist_update(signer)
    context = make_context(uow, reader=FakeObjectReader(playlists={playlist.url: playlist}))
    activity = make_activity({"type": "Playlist", "id": playlist.url}, actor_url=signer.url)

    outcome = reconcile_playlist(uow, activity, signer, context)

    assert outcome == UpdateOutcome.APPLIED
    stored = uow.repositories.playlists.get_by_url(playlist.url)
    assert stored is not None
    assert stored.owner_account is signer.account
    assert stored.name == "Favourites"
    assert stored.privacy == VideoPrivacy.PUBLIC
    assert stored.channel is None


def test_playlist_update_overwrites_fields() -> None:
    signer = make_account_actor()
    uow = FakeUnitOfWork()
    store_actor(uow.repositories, signer)
    first = make_playlist_update(signer, name="Favourites")
    second = make_playlist_update(signer, name="Best of")
    reader = FakeObjectReader(playlists={first.url: first})
    context = make_context(uow, reader=reader)
    activity = make_activity({"type": "Playlist", "id": first.url}, actor_url=signer.url)

    reconcile_playlist(uow, activity, signer, context)
    reader.playlists[first.url] = second
    unlisted = make_activity(
        {"type": "Playlist", "id": first.url}, actor_url=signer.url, to=(), activity_id="u2"
    )
    reconcile_playlist(uow, unlisted, signer, context)

    assert len(uow.repositories.playlists.items) == 1
    stored = uow.repositories.playlists.get_by_url(first.url)
    assert stored is not None
    assert stored.name == "Best of"
    assert stored.privacy == VideoPrivacy.UNLISTED


def test_playlist_attributed_to_channel() -> None:
    signer = make_account_actor()
    channel = make_channel_actor(owner=signer)
    uow = FakeUnitOfWork()
    store_actor(uow.repositories, signer)
    resolver = FakeActorResolver([channel])
    playlist = make_playlist_update(signer, attributed_to=[channel.url])
    context = make_context(
        uow,
        reader=FakeObjectReader(playlists={playlist.url: playlist}),
        actor_resolver=resolver,
    )
    activity = make_activity({"type": "Playlist", "id": playlist.url}, actor_url=signer.url)

    reconcile_playlist(uow, activity, signer, context)

    stored = uow.repositories.playlists.get_by_url(playlist.url)
    assert stored is not None
    assert stored.channel is channel.channel
    assert resolver.calls == [channel.url]


def test_playlist_attributed_to_non_channel_keeps_no_channel(
    caplog: pytest.LogCaptureFixture,
) -> None:
    signer = make_account_actor()
    uow = FakeUnitOfWork()
    store_actor(uow.repositories, signer)
    playlist = make_playlist_update(signer, attributed_to=[signer.url])
    context = make_context(uow, reader=FakeObjectReader(playlists={playlist.url: playlist}))
    activity = make_activity(
        {"type": "Playlist", "id": playlist.url}, actor_url=signer.url, to=(PUBLIC_AUDIENCE,)
    )

    reconcile_playlist(uow, activity, signer, context)

    stored = uow.repositories.playlists.get_by_url(playlist.url)
    assert stored is not None
    assert stored.channel is None
    assert "is not a video channel" in caplog.text


def test_non_account_signer_is_refused_without_mutation() -> None:
    owner = make_account_actor()
    signer = make_channel_actor(owner=owner)
    uow = FakeUnitOfWork()
    store_actor(uow.repositories, signer)
    playlist = make_playlist_update(owner)
    context = make_context(uow, reader=FakeObjectReader(playlists={playlist.url: playlist}))
    activity = make_activity({"type": "Playlist", "id": playlist.url}, actor_url=signer.url)

    with pytest.raises(FatalInconsistencyError, match="non account actor"):
        reconcile_playlist(uow, activity, signer, context)

    assert uow.repositories.playlists.items == {}


def test_invalid_playlist_is_dropped() -> None:
    signer = make_account_actor()
    uow = FakeUnitOfWork()
    store_actor(uow.repositories, signer)
    context = make_context(uow)
    activity = make_activity(
        {"type": "Playlist", "id": "https://remote.example/video-playlists/x"},
        actor_url=signer.url,
    )

    assert reconcile_playlist(uow, activity, signer, context) == UpdateOutcome.VALIDATION_DROP
    assert uow.repositories.playlists.items == {}
