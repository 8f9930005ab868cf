"""Field-level snapshots of replicas, restored when a transaction fails."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from collections.abc import Iterable


def _copy_value(value: object) -> object:
    if isinstance(value, list):
        return list(cast("list[object]", value))
    if isinstance(value, dict):
        return dict(cast("dict[object, object]", value))
    if isinstance(value, set):
        return set(cast("set[object]", value))
    return value


@dataclass(slots=True)
class Snapshot[TEntity]:
    """Copy of selected attributes of one in-memory entity.

    Collections are copied one level deep: the list of images is restored, the image
    objects themselves are shared.
    """

    entity: TEntity
    values: dict[str, object] = field(default_factory=dict[str, object])

    @classmethod
    def capture(cls, entity: TEntity, fields: Iterable[str] | None = None) -> Snapshot[TEntity]:
        names = tuple(fields) if fields is not None else _snapshot_fields(entity)
        return cls(entity, {name: _copy_value(getattr(entity, name)) for name in names})

    def restore(self) -> TEntity:
        for name, value in self.values.items():
            setattr(self.entity, name, _copy_value(value))
        return self.entity


def _snapshot_fields(entity: object) -> tuple[str, ...]:
    names = getattr(type(entity), "SNAPSHOT_FIELDS", None)
    if names is None:
        raise TypeError(f"{type(entity).__name__} declares no SNAPSHOT_FIELDS")
    return tuple(cast("Iterable[str]", names))


def restore_all(snapshots: Iterable[Snapshot[Any]]) -> None:
    """Restore snapshots, newest first."""

    for snapshot in reversed(list(snapshots)):
        snapshot.restore()
