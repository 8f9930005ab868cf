"""Ports for fetching and reading remote federation objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fedsync.domain.object_updates import (
        ActorObjectUpdate,
        CacheFileObjectUpdate,
        PlaylistObjectUpdate,
        VideoObjectUpdate,
    )


@runtime_checkable
class RemoteObjectFetcher(Protocol):
    """Dereference a remote object url into its raw JSON document.

    Implementations raise ``RemoteObjectError`` when the document cannot be fetched.
    """

    def fetch(self, url: str) -> Mapping[str, object]: ...


@runtime_checkable
class ObjectReader(Protocol):
    """Validate raw objects and translate them into update DTOs.

    Each method returns ``None`` when the payload is not a valid object of that kind.
    """

    def read_video(self, payload: Mapping[str, object]) -> VideoObjectUpdate | None: ...

    def read_actor(self, payload: Mapping[str, object]) -> ActorObjectUpdate | None: ...

    def read_cache_file(self, payload: Mapping[str, object]) -> CacheFileObjectUpdate | None: ...

    def read_playlist(self, payload: Mapping[str, object]) -> PlaylistObjectUpdate | None: ...


__all__ = ["ObjectReader", "RemoteObjectFetcher"]
