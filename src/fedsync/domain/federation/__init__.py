"""Reconciliation of remote Update activities into the local replica store.

``handle_update`` routes a notice to the reconciler of its object kind. Each
reconciler runs inside ``retry_transaction``: a fresh unit of work per attempt,
committed on success and retried only on ``TransientConflictError``. Replicas that
were mutated in memory are restored from their ``Snapshot`` when an attempt fails.
"""

from __future__ import annotations

from .cache_files import RepositoryCacheFileWriter
from .contracts import UpdateContext, UpdateOutcome
from .dispatcher import dispatch_update, handle_update
from .errors import (
    FatalInconsistencyError,
    RemoteObjectError,
    SignerNotFoundError,
    TransientConflictError,
    UpdateError,
)
from .forwarding import OutboxActivityForwarder, actors_involved_in_video
from .playlists import RepositoryPlaylistWriter
from .redundancy import ConfiguredRedundancyPolicy
from .resolution import RemoteActorResolver, RemoteVideoResolver, RepositorySignerResolver
from .retry import RetryPolicy, retry_transaction
from .snapshot import Snapshot, restore_all

__all__ = [
    "ConfiguredRedundancyPolicy",
    "FatalInconsistencyError",
    "OutboxActivityForwarder",
    "RemoteActorResolver",
    "RemoteObjectError",
    "RemoteVideoResolver",
    "RepositoryCacheFileWriter",
    "RepositoryPlaylistWriter",
    "RepositorySignerResolver",
    "RetryPolicy",
    "SignerNotFoundError",
    "Snapshot",
    "TransientConflictError",
    "UpdateContext",
    "UpdateError",
    "UpdateOutcome",
    "actors_involved_in_video",
    "dispatch_update",
    "handle_update",
    "restore_all",
    "retry_transaction",
]
