"""Entry point for remote Update activities: route by object kind."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.domain.activity import ObjectKind
from fedsync.domain.federation.contracts import UpdateOutcome
from fedsync.domain.federation.errors import (
    FatalInconsistencyError,
    SignerNotFoundError,
    TransientConflictError,
)
from fedsync.domain.federation.reconcilers import (
    prepare_actor_update,
    prepare_cache_file,
    reconcile_actor,
    reconcile_cache_file,
    reconcile_playlist,
    reconcile_video,
)

if TYPE_CHECKING:
    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.federation.contracts import UpdateContext
    from fedsync.domain.model import Actor

log = getLogger(__name__)


def handle_update(activity: UpdateActivity, signer: Actor, *, context: UpdateContext) -> None:
    """Process one Update activity. Outcomes are only visible through logs and exceptions."""

    outcome = dispatch_update(activity, signer, context=context)
    log.debug("Update %s from %s: %s", activity.id, signer.url, outcome)


def dispatch_update(
    activity: UpdateActivity, signer: Actor, *, context: UpdateContext
) -> UpdateOutcome:
    kind = activity.kind
    if kind == ObjectKind.UNKNOWN:
        log.debug(
            "Ignoring Update %s of unsupported object type %s.", activity.id, activity.object_type
        )
        return UpdateOutcome.UNKNOWN_KIND

    try:
        return _dispatch(kind, activity, signer, context)
    except FatalInconsistencyError as exc:
        log.error("Cannot process Update %s from %s: %s", activity.id, signer.url, exc)
        raise
    except TransientConflictError:
        log.warning(
            "Update %s from %s abandoned after repeated conflicts.", activity.id, signer.url
        )
        raise


def _dispatch(
    kind: ObjectKind, activity: UpdateActivity, signer: Actor, context: UpdateContext
) -> UpdateOutcome:
    if kind == ObjectKind.VIDEO:
        return context.run_in_transaction(reconcile_video, activity, signer, context)

    if kind == ObjectKind.PLAYLIST:
        return context.run_in_transaction(reconcile_playlist, activity, signer, context)

    # actor and cache file updates need the signer's account, channel and images
    full_signer = _load_full_signer(signer, context)
    if full_signer is None:
        return UpdateOutcome.SIGNER_NOT_FOUND

    if kind == ObjectKind.ACTOR:
        plan = prepare_actor_update(activity, context.object_reader, context.image_info_extractor)
        if plan is None:
            log.debug("Actor sent by update %s is not valid.", activity.id)
            return UpdateOutcome.VALIDATION_DROP
        return context.run_in_transaction(reconcile_actor, plan, full_signer)

    # remote video, channel and owner are stored before the redundancy write starts
    prepared = context.run_in_transaction(prepare_cache_file, activity, full_signer, context)
    if isinstance(prepared, UpdateOutcome):
        return prepared
    return context.run_in_transaction(
        reconcile_cache_file, activity, prepared, full_signer, context
    )


def _load_full_signer(signer: Actor, context: UpdateContext) -> Actor | None:
    try:
        with context.unit_of_work_factory() as uow:
            return context.signer_resolver.resolve(uow, signer.url)
    except SignerNotFoundError:
        log.warning("Dropping Update from unknown signer %s.", signer.url)
        return None
