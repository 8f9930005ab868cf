"""Inbound Update activities and the tagged kind of their target object."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from fedsync.domain.model import VideoPrivacy

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

PUBLIC_AUDIENCE: Final[str] = "https://www.w3.org/ns/activitystreams#Public"


class ObjectKind(StrEnum):
    """Reconciler selector; ``UNKNOWN`` covers vocabulary this node does not implement."""

    VIDEO = "video"
    ACTOR = "actor"
    CACHE_FILE = "cache_file"
    PLAYLIST = "playlist"
    UNKNOWN = "unknown"


_KIND_BY_OBJECT_TYPE: Final[dict[str, ObjectKind]] = {
    "Video": ObjectKind.VIDEO,
    "Person": ObjectKind.ACTOR,
    "Application": ObjectKind.ACTOR,
    "Group": ObjectKind.ACTOR,
    "CacheFile": ObjectKind.CACHE_FILE,
    "Playlist": ObjectKind.PLAYLIST,
}


def classify_object_type(object_type: str | None) -> ObjectKind:
    if object_type is None:
        return ObjectKind.UNKNOWN
    return _KIND_BY_OBJECT_TYPE.get(object_type, ObjectKind.UNKNOWN)


@dataclass(frozen=True, slots=True)
class UpdateActivity:
    """A received Update notice. Immutable once received."""

    id: str
    actor: str
    object: Mapping[str, object]
    to: tuple[str, ...] = ()
    cc: tuple[str, ...] = ()

    @property
    def object_type(self) -> str | None:
        value = self.object.get("type")
        return value if isinstance(value, str) else None

    @property
    def object_id(self) -> str | None:
        value = self.object.get("id")
        return value if isinstance(value, str) else None

    @property
    def kind(self) -> ObjectKind:
        return classify_object_type(self.object_type)

    @property
    def audience(self) -> tuple[str, ...]:
        return self.to + self.cc

    def to_payload(self) -> dict[str, object]:
        return {
            "type": "Update",
            "id": self.id,
            "actor": self.actor,
            "to": list(self.to),
            "cc": list(self.cc),
            "object": dict(self.object),
        }


def privacy_from_audience(to: Iterable[str]) -> VideoPrivacy:
    """Public when addressed to the public collection, unlisted otherwise."""

    return VideoPrivacy.PUBLIC if PUBLIC_AUDIENCE in set(to) else VideoPrivacy.UNLISTED
