"""Dereference remote ActivityPub objects over HTTP."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, cast

import httpx

from fedsync.adapters.http_resilience import ResilientClient
from fedsync.domain.federation.errors import RemoteObjectError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from fedsync.config.activitypub import ActivityPubConfig
    from fedsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


class ActivityPubClient:
    """Synchronous ``RemoteObjectFetcher`` over the async resilient client."""

    def __init__(
        self,
        *,
        config: ActivityPubConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def fetch(self, url: str) -> Mapping[str, object]:
        return asyncio.run(self._fetch_async(url))

    async def _fetch_async(self, url: str) -> Mapping[str, object]:
        log.debug("Fetching remote object %s", url)
        try:
            async with self._client_factory(self._resilience) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            raise RemoteObjectError(f"Cannot fetch remote object {url}: {exc}") from exc
        except ValueError as exc:
            raise RemoteObjectError(f"Remote object {url} is not JSON") from exc

        if not isinstance(payload, dict):
            raise RemoteObjectError(f"Unexpected payload for remote object {url}")
        return cast("dict[str, object]", payload)
