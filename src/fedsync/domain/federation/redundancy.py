"""Instance policy deciding whose cache files (redundancies) are accepted."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.config.federation import RedundancyAcceptFrom
from fedsync.domain.model import FollowState

if TYPE_CHECKING:
    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.model import Actor
    from fedsync.domain.ports import FederationUnitOfWork

log = getLogger(__name__)


class ConfiguredRedundancyPolicy:
    def __init__(self, accept_from: RedundancyAcceptFrom, server_actor_url: str) -> None:
        self.accept_from = accept_from
        self.server_actor_url = server_actor_url

    def is_accepted(
        self, uow: FederationUnitOfWork, activity: UpdateActivity, signer: Actor
    ) -> bool:
        if self.accept_from == RedundancyAcceptFrom.NOBODY:
            log.info("Do not accept remote redundancy %s due instance accept policy.", activity.id)
            return False

        if self.accept_from == RedundancyAcceptFrom.FOLLOWINGS and not self._is_followed(
            uow, signer
        ):
            log.info(
                "Do not accept remote redundancy %s because actor %s is not followed by our "
                "instance.",
                activity.id,
                signer.url,
            )
            return False

        return True

    def _is_followed(self, uow: FederationUnitOfWork, signer: Actor) -> bool:
        server_actor = uow.repositories.actors.get_by_url(self.server_actor_url)
        if server_actor is None:
            return False
        follow = uow.repositories.follows.get(server_actor, signer)
        return follow is not None and follow.state == FollowState.ACCEPTED
