"""Upsert a remote playlist owned by the signer's account."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.domain.federation.contracts import UpdateOutcome
from fedsync.domain.federation.errors import FatalInconsistencyError

if TYPE_CHECKING:
    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.federation.contracts import UpdateContext
    from fedsync.domain.model import Actor
    from fedsync.domain.ports import FederationUnitOfWork

log = getLogger(__name__)


def reconcile_playlist(
    uow: FederationUnitOfWork,
    activity: UpdateActivity,
    signer: Actor,
    context: UpdateContext,
) -> UpdateOutcome:
    account = signer.account
    if account is None:
        raise FatalInconsistencyError(
            f"Cannot update video playlist with the non account actor {signer.url}"
        )

    playlist = context.object_reader.read_playlist(activity.object)
    if playlist is None:
        log.debug("Playlist object sent by update %s is not valid.", activity.id)
        return UpdateOutcome.VALIDATION_DROP

    context.playlist_writer.upsert(uow, playlist, account, activity.to)
    return UpdateOutcome.APPLIED
