"""``ObjectReader`` implementation backed by the pydantic schemas."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from .schema import APActorObject, APCacheFileObject, APPlaylistObject, APVideoObject
from .translator import (
    translate_actor,
    translate_cache_file,
    translate_playlist,
    translate_video,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fedsync.domain.object_updates import (
        ActorObjectUpdate,
        CacheFileObjectUpdate,
        PlaylistObjectUpdate,
        VideoObjectUpdate,
    )

log = getLogger(__name__)


def _validate[TModel: BaseModel](
    model: type[TModel], payload: Mapping[str, object]
) -> TModel | None:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        log.debug(
            "Invalid %s %s: %d errors",
            model.__name__,
            payload.get("id"),
            exc.error_count(),
        )
        return None


class PydanticObjectReader:
    def read_video(self, payload: Mapping[str, object]) -> VideoObjectUpdate | None:
        validated = _validate(APVideoObject, payload)
        return translate_video(validated) if validated is not None else None

    def read_actor(self, payload: Mapping[str, object]) -> ActorObjectUpdate | None:
        validated = _validate(APActorObject, payload)
        return translate_actor(validated) if validated is not None else None

    def read_cache_file(self, payload: Mapping[str, object]) -> CacheFileObjectUpdate | None:
        validated = _validate(APCacheFileObject, payload)
        return translate_cache_file(validated) if validated is not None else None

    def read_playlist(self, payload: Mapping[str, object]) -> PlaylistObjectUpdate | None:
        validated = _validate(APPlaylistObject, payload)
        return translate_playlist(validated) if validated is not None else None
