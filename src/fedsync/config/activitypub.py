"""ActivityPub client configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

ACTIVITYPUB_ACCEPT = 'application/activity+json, application/ld+json; profile="https://www.w3.org/ns/activitystreams"'
ACTIVITYPUB_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "fedsync"


@dataclass(frozen=True, slots=True)
class ActivityPubConfig:
    resilience: ResilienceConfig


def get_activitypub_config(*, resilience: ResilienceConfig | None = None) -> ActivityPubConfig:
    user_agent = os.getenv("FEDSYNC_USER_AGENT") or DEFAULT_USER_AGENT
    return ActivityPubConfig(
        resilience=resilience
        or ResilienceConfig(
            name="activitypub",
            timeout_seconds=ACTIVITYPUB_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            cache=CacheConfig(enabled=True, backend="memory", default_ttl_seconds=60.0),
            default_headers={"Accept": ACTIVITYPUB_ACCEPT, "User-Agent": user_agent},
        )
    )
