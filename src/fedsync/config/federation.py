"""Federation behaviour settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum

from .env import optional_float, optional_int, require_env_var
from .errors import ConfigurationError

DEFAULT_TRANSACTION_RETRIES = 4
DEFAULT_RETRY_INTERVAL_SECONDS = 0.1
DEFAULT_INBOX_WORKERS = 4
SERVER_ACTOR_PATH = "/accounts/peertube"


class RedundancyAcceptFrom(StrEnum):
    ANYBODY = "anybody"
    FOLLOWINGS = "followings"
    NOBODY = "nobody"


@dataclass(frozen=True, slots=True)
class FederationConfig:
    instance_url: str
    redundancy_accept_from: RedundancyAcceptFrom = RedundancyAcceptFrom.ANYBODY
    transaction_retries: int = DEFAULT_TRANSACTION_RETRIES
    retry_interval_seconds: float = DEFAULT_RETRY_INTERVAL_SECONDS
    workers: int = DEFAULT_INBOX_WORKERS

    @property
    def server_actor_url(self) -> str:
        return self.instance_url.rstrip("/") + SERVER_ACTOR_PATH


def _parse_accept_from(raw: str | None) -> RedundancyAcceptFrom:
    if raw is None or not raw.strip():
        return RedundancyAcceptFrom.ANYBODY
    try:
        return RedundancyAcceptFrom(raw.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in RedundancyAcceptFrom)
        raise ConfigurationError(
            f"FEDSYNC_REDUNDANCY_ACCEPT_FROM must be one of {allowed}, got {raw!r}"
        ) from exc


def get_federation_config() -> FederationConfig:
    return FederationConfig(
        instance_url=require_env_var("FEDSYNC_INSTANCE_URL"),
        redundancy_accept_from=_parse_accept_from(os.getenv("FEDSYNC_REDUNDANCY_ACCEPT_FROM")),
        transaction_retries=optional_int(
            "FEDSYNC_TRANSACTION_RETRIES", DEFAULT_TRANSACTION_RETRIES
        ),
        retry_interval_seconds=optional_float(
            "FEDSYNC_RETRY_INTERVAL", DEFAULT_RETRY_INTERVAL_SECONDS
        ),
        workers=optional_int("FEDSYNC_WORKERS", DEFAULT_INBOX_WORKERS, minimum=1),
    )
