"""Failures raised while reconciling remote Update activities.

Policy and validation drops are not errors; they surface as ``UpdateOutcome`` values.
"""

from __future__ import annotations


class UpdateError(RuntimeError):
    """Base class for reconciliation failures."""


class TransientConflictError(UpdateError):
    """Concurrent writers collided; the whole transaction may be retried."""


class FatalInconsistencyError(UpdateError):
    """The notice contradicts the local replica store and must not be retried."""


class SignerNotFoundError(UpdateError):
    """No local actor record exists for the asserted signer."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Unknown signer {url}")
        self.url = url


class RemoteObjectError(UpdateError):
    """A remote object could not be fetched or understood."""
