"""Fan-out of video related activities through the transactional outbox."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fedsync.domain.model import DeliveryJob

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.model import Actor, Video
    from fedsync.domain.ports import FederationUnitOfWork

log = getLogger(__name__)


def _unique_actors(actors: Iterable[Actor]) -> list[Actor]:
    seen: set[object] = set()
    result: list[Actor] = []
    for actor in actors:
        if actor.id in seen:
            continue
        seen.add(actor.id)
        result.append(actor)
    return result


def actors_involved_in_video(uow: FederationUnitOfWork, video: Video) -> list[Actor]:
    """Channel actor, owner account actor and every actor that shared the video."""

    involved: list[Actor] = []
    channel = video.channel
    if channel is not None:
        if channel.actor is not None:
            involved.append(channel.actor)
        if channel.account is not None and channel.account.actor is not None:
            involved.append(channel.account.actor)
    involved.extend(uow.repositories.shares.list_sharers(video))
    return _unique_actors(involved)


class OutboxActivityForwarder:
    """Enqueue a broadcast of ``activity`` to the remote followers of everyone involved.

    Followers owned by this node are skipped.
    """

    def forward(
        self,
        uow: FederationUnitOfWork,
        activity: UpdateActivity,
        *,
        video: Video,
        exclude_inboxes: Iterable[str] = (),
        except_actors: Iterable[Actor] = (),
    ) -> DeliveryJob | None:
        repositories = uow.repositories
        addressed = repositories.actors.list_local_by_followers_urls(activity.audience)
        audience_actors = _unique_actors([*actors_involved_in_video(uow, video), *addressed])
        followers = repositories.follows.list_accepted_followers(audience_actors)

        excluded = set(exclude_inboxes)
        excluded.update(actor.shared_inbox for actor in except_actors)
        inboxes = list(
            dict.fromkeys(
                follower.shared_inbox
                for follower in followers
                if not follower.is_owned and follower.shared_inbox not in excluded
            )
        )
        if not inboxes:
            log.debug("No inbox to forward activity %s to.", activity.id)
            return None

        job = DeliveryJob(activity=activity.to_payload(), inboxes=inboxes)
        repositories.outbox.add(job)
        log.debug("Forwarding activity %s to %d inboxes.", activity.id, len(inboxes))
        return job
