"""Merge an Update of a known remote video into its replica."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.domain.activity import privacy_from_audience
from fedsync.domain.federation.contracts import UpdateOutcome
from fedsync.domain.federation.errors import FatalInconsistencyError
from fedsync.domain.federation.snapshot import Snapshot, restore_all
from fedsync.domain.object_updates import apply_video_update

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.federation.contracts import UpdateContext
    from fedsync.domain.model import Actor, Video
    from fedsync.domain.object_updates import VideoObjectUpdate
    from fedsync.domain.ports import FederationUnitOfWork

log = getLogger(__name__)


class VideoUpdater:
    """Overwrite a remote video replica with the attributes of a video object."""

    def __init__(self, uow: FederationUnitOfWork, video: Video, update: VideoObjectUpdate) -> None:
        self.uow = uow
        self.video = video
        self.update = update

    def apply(self, to: Iterable[str]) -> Video:
        log.debug("Updating remote video %s.", self.update.url)
        snapshot = Snapshot.capture(self.video)
        self.uow.on_rollback(lambda: restore_all((snapshot,)))
        try:
            self._check_updatable()
            apply_video_update(self.video, self.update, privacy=privacy_from_audience(to))
            self.uow.repositories.videos.save(self.video)
        except Exception:
            snapshot.restore()
            log.debug("Cannot update the remote video %s.", self.update.url, exc_info=True)
            raise

        log.info("Remote video with uuid %s updated", self.video.uuid)
        return self.video

    def _check_updatable(self) -> None:
        if self.video.is_owned:
            raise FatalInconsistencyError(f"Cannot update owned video {self.video.url} remotely")

        channel_url = self.update.channel_url
        current = self.video.channel.actor if self.video.channel is not None else None
        if channel_url is not None and current is not None and current.url != channel_url:
            raise FatalInconsistencyError(
                f"Cannot change video channel of {self.video.url} to {channel_url}"
            )


def reconcile_video(
    uow: FederationUnitOfWork,
    activity: UpdateActivity,
    signer: Actor,
    context: UpdateContext,
) -> UpdateOutcome:
    """A first sighting is absorbed as creation; the notice is not merged on top of it."""

    update = context.object_reader.read_video(activity.object)
    if update is None:
        log.debug("Video sent by update %s from %s is not valid.", activity.id, signer.url)
        return UpdateOutcome.VALIDATION_DROP

    resolution = context.video_resolver.get_or_create(uow, update.url)
    if resolution.created:
        return UpdateOutcome.CREATED

    VideoUpdater(uow, resolution.video, update).apply(activity.to)
    return UpdateOutcome.APPLIED
