"""Upsert of cache file records keyed by video and hosting actor."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.domain.federation.errors import FatalInconsistencyError
from fedsync.domain.model import VideoRedundancy

if TYPE_CHECKING:
    from fedsync.domain.model import Actor, Video
    from fedsync.domain.object_updates import CacheFileObjectUpdate
    from fedsync.domain.ports import FederationUnitOfWork

log = getLogger(__name__)


class RepositoryCacheFileWriter:
    def upsert(
        self,
        uow: FederationUnitOfWork,
        cache_file: CacheFileObjectUpdate,
        video: Video,
        signer: Actor,
    ) -> VideoRedundancy:
        repositories = uow.repositories
        actor = repositories.actors.get(signer.id)
        if actor is None:
            raise FatalInconsistencyError(f"Signer {signer.url} is not stored")

        redundancy = repositories.redundancies.get_by_url(cache_file.url)
        if redundancy is not None and redundancy.actor.id != actor.id:
            raise FatalInconsistencyError(
                f"Cannot update redundancy {redundancy.url} of another actor."
            )
        if redundancy is None:
            redundancy = repositories.redundancies.get_by_video_and_actor(video, actor)

        if redundancy is None:
            redundancy = VideoRedundancy(
                url=cache_file.url,
                file_url=cache_file.file_url,
                expires_on=cache_file.expires,
                video=video,
                actor=actor,
            )
            repositories.redundancies.add(redundancy)
            log.debug("Created cache file %s of %s.", cache_file.url, actor.url)
            return redundancy

        redundancy.url = cache_file.url
        redundancy.file_url = cache_file.file_url
        redundancy.expires_on = cache_file.expires
        repositories.redundancies.save(redundancy)
        log.debug("Updated cache file %s of %s.", cache_file.url, actor.url)
        return redundancy
