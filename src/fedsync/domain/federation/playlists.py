"""Upsert of remote playlists."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.domain.activity import privacy_from_audience
from fedsync.domain.federation.errors import FatalInconsistencyError
from fedsync.domain.model import VideoPlaylist

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fedsync.domain.model import Account, VideoChannel
    from fedsync.domain.object_updates import PlaylistObjectUpdate
    from fedsync.domain.ports import ActorResolver, FederationUnitOfWork

log = getLogger(__name__)


class RepositoryPlaylistWriter:
    """Create or overwrite a playlist by url; the signing account becomes its owner."""

    def __init__(self, actor_resolver: ActorResolver) -> None:
        self.actor_resolver = actor_resolver

    def upsert(
        self,
        uow: FederationUnitOfWork,
        playlist: PlaylistObjectUpdate,
        account: Account,
        audience: Iterable[str],
    ) -> VideoPlaylist:
        repositories = uow.repositories
        owner = repositories.accounts.get(account.id)
        if owner is None:
            raise FatalInconsistencyError(f"Account {account.name} is not stored")

        privacy = privacy_from_audience(audience)
        channel = self._attributed_channel(uow, playlist)

        existing = repositories.playlists.get_by_url(playlist.url)
        if existing is None:
            created = VideoPlaylist(
                url=playlist.url,
                name=playlist.name,
                privacy=privacy,
                owner_account=owner,
                uuid=playlist.uuid,
                description=playlist.content,
                channel=channel,
                created_at=playlist.published,
                updated_at=playlist.updated,
            )
            repositories.playlists.add(created)
            return created

        existing.name = playlist.name
        existing.privacy = privacy
        existing.owner_account = owner
        existing.description = playlist.content
        existing.updated_at = playlist.updated
        if playlist.uuid is not None:
            existing.uuid = playlist.uuid
        if channel is not None:
            existing.channel = channel
        repositories.playlists.save(existing)
        return existing

    def _attributed_channel(
        self, uow: FederationUnitOfWork, playlist: PlaylistObjectUpdate
    ) -> VideoChannel | None:
        if len(playlist.attributed_to) != 1:
            return None
        actor = self.actor_resolver.get_or_create(uow, playlist.attributed_to[0])
        if actor.channel is None:
            log.warning('Playlist "attributedTo" %s is not a video channel.', playlist.url)
            return None
        return actor.channel
