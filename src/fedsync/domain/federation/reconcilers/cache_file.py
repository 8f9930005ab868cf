"""Record a peer's cache file (redundancy) for a video."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.domain.federation.contracts import UpdateOutcome
from fedsync.domain.federation.errors import TransientConflictError

if TYPE_CHECKING:
    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.federation.contracts import UpdateContext
    from fedsync.domain.model import Actor
    from fedsync.domain.object_updates import CacheFileObjectUpdate
    from fedsync.domain.ports import FederationUnitOfWork

log = getLogger(__name__)


def prepare_cache_file(
    uow: FederationUnitOfWork,
    activity: UpdateActivity,
    signer: Actor,
    context: UpdateContext,
) -> CacheFileObjectUpdate | UpdateOutcome:
    """Check the redundancy policy and store the cached video, fetching it if unknown.

    Unaccepted redundancies are dropped without error and never fetch anything.
    """

    if not context.redundancy_policy.is_accepted(uow, activity, signer):
        return UpdateOutcome.POLICY_DROP

    cache_file = context.object_reader.read_cache_file(activity.object)
    if cache_file is None:
        log.debug("Cache file object sent by update %s is not valid.", activity.id)
        return UpdateOutcome.VALIDATION_DROP

    context.video_resolver.get_or_create(uow, cache_file.video_url)
    return cache_file


def reconcile_cache_file(
    uow: FederationUnitOfWork,
    activity: UpdateActivity,
    cache_file: CacheFileObjectUpdate,
    signer: Actor,
    context: UpdateContext,
) -> UpdateOutcome:
    """Only the origin node fans the notice out, and never back to the signer."""

    video = uow.repositories.videos.get_by_url(cache_file.video_url)
    if video is None:
        raise TransientConflictError(f"Video {cache_file.video_url} was removed during update")

    context.cache_file_writer.upsert(uow, cache_file, video, signer)

    if video.is_owned:
        context.forwarder.forward(uow, activity, video=video, except_actors=(signer,))
    return UpdateOutcome.APPLIED
