"""Social graph and delivery records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fedsync.domain.model.entity import Entity
from fedsync.domain.model.enums import FollowState

if TYPE_CHECKING:
    from fedsync.domain.model.actor import Actor


@dataclass(eq=False, kw_only=True)
class ActorFollow(Entity):
    follower: Actor = field(repr=False)
    following: Actor = field(repr=False)
    state: FollowState = FollowState.PENDING


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class DeliveryJob(Entity):
    """Outbox row: an activity body to broadcast to a set of inboxes."""

    activity: dict[str, object]
    inboxes: list[str]
    created_at: datetime = field(default_factory=_utcnow)
