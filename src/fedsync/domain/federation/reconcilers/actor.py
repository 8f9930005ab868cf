"""Apply an Update of a remote actor to the signer's replica."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.domain.federation.contracts import UpdateOutcome
from fedsync.domain.federation.errors import FatalInconsistencyError
from fedsync.domain.federation.snapshot import Snapshot, restore_all
from fedsync.domain.model import ActorImageType, ActorType
from fedsync.domain.object_updates import (
    extract_image_info,
    update_actor_image,
    update_actor_instance,
)

if TYPE_CHECKING:
    from typing import Any

    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.model import Account, Actor, VideoChannel
    from fedsync.domain.object_updates import ActorObjectUpdate, ImageInfo
    from fedsync.domain.ports import FederationUnitOfWork, ImageInfoExtractor, ObjectReader

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class AccountOwned:
    account: Account

    @property
    def entity(self) -> Account:
        return self.account

    def apply(self, update: ActorObjectUpdate) -> None:
        self.account.name = update.name or update.preferred_username
        self.account.description = update.summary

    def save(self, uow: FederationUnitOfWork) -> None:
        uow.repositories.accounts.save(self.account)


@dataclass(slots=True, frozen=True)
class ChannelOwned:
    channel: VideoChannel

    @property
    def entity(self) -> VideoChannel:
        return self.channel

    def apply(self, update: ActorObjectUpdate) -> None:
        self.channel.name = update.name or update.preferred_username
        self.channel.description = update.summary
        self.channel.support = update.support

    def save(self, uow: FederationUnitOfWork) -> None:
        uow.repositories.channels.save(self.channel)


type OwnedEntity = AccountOwned | ChannelOwned


def owned_entity_for(actor: Actor, declared_type: ActorType) -> OwnedEntity:
    """Pick the side entity an actor object of ``declared_type`` describes."""

    if declared_type == ActorType.GROUP:
        if actor.channel is None:
            raise FatalInconsistencyError(f"Group actor {actor.url} has no video channel")
        return ChannelOwned(actor.channel)
    if actor.account is None:
        raise FatalInconsistencyError(f"Actor {actor.url} has no account")
    return AccountOwned(actor.account)


@dataclass(slots=True, frozen=True)
class ActorUpdatePlan:
    """Translated actor object with its images resolved ahead of the transaction."""

    update: ActorObjectUpdate
    avatar: ImageInfo | None
    banner: ImageInfo | None


def prepare_actor_update(
    activity: UpdateActivity,
    reader: ObjectReader,
    image_info_extractor: ImageInfoExtractor = extract_image_info,
) -> ActorUpdatePlan | None:
    update = reader.read_actor(activity.object)
    if update is None:
        return None
    return ActorUpdatePlan(
        update=update,
        avatar=image_info_extractor(update, ActorImageType.AVATAR),
        banner=image_info_extractor(update, ActorImageType.BANNER),
    )


def reconcile_actor(
    uow: FederationUnitOfWork, plan: ActorUpdatePlan, signer: Actor
) -> UpdateOutcome:
    """Mutate ``signer`` and its account or channel.

    Both are restored if anything fails, up to and including the commit of ``uow``.
    """

    update = plan.update
    log.debug('Updating remote account "%s".', update.url)
    if update.url != signer.url:
        raise FatalInconsistencyError(f"Actor {signer.url} cannot update actor {update.url}")

    snapshots: list[Snapshot[Any]] = [Snapshot.capture(signer)]
    uow.on_rollback(lambda: restore_all(snapshots))
    try:
        owned = owned_entity_for(signer, update.type)
        snapshots.append(Snapshot.capture(owned.entity))

        update_actor_instance(signer, update)
        update_actor_image(signer, ActorImageType.AVATAR, plan.avatar)
        update_actor_image(signer, ActorImageType.BANNER, plan.banner)
        uow.repositories.actors.save(signer)

        owned.apply(update)
        owned.save(uow)
    except Exception:
        restore_all(snapshots)
        log.debug("Cannot update the remote account %s.", update.url, exc_info=True)
        raise

    log.info("Remote account %s updated", update.url)
    return UpdateOutcome.APPLIED
