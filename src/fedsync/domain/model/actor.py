"""Actor replicas and the side entity each actor owns (account or channel)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from fedsync.domain.model.entity import Entity
from fedsync.domain.model.enums import ActorImageType, ActorType

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class ActorImage(Entity):
    type: ActorImageType
    file_url: str
    file_name: str | None = None
    width: int | None = None
    height: int | None = None
    on_disk: bool = False


@dataclass(eq=False, kw_only=True)
class Actor(Entity):
    """Identity record of a local or remote federation actor."""

    SNAPSHOT_FIELDS: ClassVar[tuple[str, ...]] = (
        "type",
        "preferred_username",
        "url",
        "public_key",
        "inbox_url",
        "shared_inbox_url",
        "outbox_url",
        "followers_url",
        "following_url",
        "remote_created_at",
        "images",
    )

    url: str
    type: ActorType
    preferred_username: str
    inbox_url: str
    shared_inbox_url: str | None = None
    outbox_url: str | None = None
    followers_url: str | None = None
    following_url: str | None = None
    public_key: str | None = None
    remote_created_at: datetime | None = None
    is_owned: bool = False

    images: list[ActorImage] = field(default_factory=list["ActorImage"], repr=False)
    account: Account | None = field(default=None, repr=False)
    channel: VideoChannel | None = field(default=None, repr=False)

    @property
    def shared_inbox(self) -> str:
        return self.shared_inbox_url or self.inbox_url

    @property
    def avatar(self) -> ActorImage | None:
        return self.image(ActorImageType.AVATAR)

    @property
    def banner(self) -> ActorImage | None:
        return self.image(ActorImageType.BANNER)

    def image(self, image_type: ActorImageType) -> ActorImage | None:
        for image in self.images:
            if image.type == image_type:
                return image
        return None

    def set_image(self, image_type: ActorImageType, image: ActorImage | None) -> None:
        """Replace the image of ``image_type``; ``None`` removes it."""

        remaining = [existing for existing in self.images if existing.type != image_type]
        if image is not None:
            remaining.append(image)
        self.images = remaining


@dataclass(eq=False, kw_only=True)
class Account(Entity):
    """Individual capability: an actor owning an account can own playlists."""

    SNAPSHOT_FIELDS: ClassVar[tuple[str, ...]] = ("name", "description")

    name: str
    description: str | None = None
    actor: Actor | None = field(default=None, repr=False)


@dataclass(eq=False, kw_only=True)
class VideoChannel(Entity):
    """Group side entity, owned by an account."""

    SNAPSHOT_FIELDS: ClassVar[tuple[str, ...]] = ("name", "description", "support")

    name: str
    description: str | None = None
    support: str | None = None
    actor: Actor | None = field(default=None, repr=False)
    account: Account | None = field(default=None, repr=False)
