"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from fedsync.adapters.activitypub import (
    ActivityPubClient,
    PydanticObjectReader,
    parse_update_activity,
)
from fedsync.adapters.sqlalchemy.migrations import upgrade_head
from fedsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyFederationUnitOfWork,
    is_started,
    startup,
)
from fedsync.config import get_activitypub_config, get_federation_config
from fedsync.domain.federation import (
    ConfiguredRedundancyPolicy,
    OutboxActivityForwarder,
    RemoteActorResolver,
    RemoteVideoResolver,
    RepositoryCacheFileWriter,
    RepositoryPlaylistWriter,
    RepositorySignerResolver,
    RetryPolicy,
    UpdateContext,
    UpdateError,
    handle_update,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from fedsync.config import FederationConfig
    from fedsync.domain.activity import UpdateActivity
    from fedsync.domain.ports import (
        ActorResolver,
        FederationUnitOfWorkFactory,
        ObjectReader,
        RemoteObjectFetcher,
    )

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class InboxItem:
    """An Update activity as accepted by the transport layer, with its verified signer."""

    activity: UpdateActivity
    signer_url: str


@dataclass(slots=True)
class InboxResult:
    processed: int = 0
    failed: int = 0
    skipped: int = 0


def build_update_context(
    *,
    federation: FederationConfig,
    unit_of_work_factory: FederationUnitOfWorkFactory,
    fetcher: RemoteObjectFetcher,
    reader: ObjectReader | None = None,
) -> tuple[UpdateContext, ActorResolver]:
    """Wire the default collaborators; returns the context and the actor resolver."""

    effective_reader = reader or PydanticObjectReader()
    actor_resolver = RemoteActorResolver(fetcher, effective_reader)
    context = UpdateContext(
        unit_of_work_factory=unit_of_work_factory,
        object_reader=effective_reader,
        signer_resolver=RepositorySignerResolver(),
        video_resolver=RemoteVideoResolver(fetcher, effective_reader, actor_resolver),
        redundancy_policy=ConfiguredRedundancyPolicy(
            federation.redundancy_accept_from, federation.server_actor_url
        ),
        cache_file_writer=RepositoryCacheFileWriter(),
        playlist_writer=RepositoryPlaylistWriter(actor_resolver),
        forwarder=OutboxActivityForwarder(),
        retry_policy=RetryPolicy(
            max_retries=federation.transaction_retries,
            interval_seconds=federation.retry_interval_seconds,
        ),
    )
    return context, actor_resolver


class InboxProcessor:
    """Resolve the signer of each inbox item, then hand the activity to ``handle_update``."""

    def __init__(self, context: UpdateContext, signer_lookup: ActorResolver) -> None:
        self.context = context
        self.signer_lookup = signer_lookup

    def process(self, item: InboxItem) -> bool:
        try:
            signer = self.context.run_in_transaction(
                self.signer_lookup.get_or_create, item.signer_url
            )
            handle_update(item.activity, signer, context=self.context)
        except UpdateError as exc:
            log.warning("Update %s failed: %s", item.activity.id, exc)
            return False
        return True


async def process_inbox(
    items: Iterable[InboxItem],
    processor: InboxProcessor,
    *,
    workers: int,
) -> InboxResult:
    """Process items concurrently, at most ``workers`` at a time, one thread each."""

    semaphore = asyncio.Semaphore(workers)

    async def run(item: InboxItem) -> bool:
        async with semaphore:
            return await asyncio.to_thread(processor.process, item)

    outcomes = await asyncio.gather(*(run(item) for item in items))
    processed = sum(1 for outcome in outcomes if outcome)
    return InboxResult(processed=processed, failed=len(outcomes) - processed)


def read_notice_file(path: Path) -> tuple[list[InboxItem], int]:
    """Parse ``{"activity": ..., "signer": ...}`` JSON lines; returns items and skipped count."""

    items: list[InboxItem] = []
    skipped = 0
    with path.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
                if not isinstance(record, dict):
                    raise TypeError("record is not an object")  # noqa: TRY301
                record_map = cast("dict[str, object]", record)
                signer = record_map.get("signer")
                activity = record_map.get("activity")
                if not isinstance(signer, str) or not isinstance(activity, dict):
                    raise TypeError("record needs an activity object and a signer url")  # noqa: TRY301
                parsed = parse_update_activity(cast("dict[str, object]", activity))
            except (json.JSONDecodeError, TypeError, ValidationError) as exc:
                log.warning("Skipping line %d of %s: %s", line_number, path, exc)
                skipped += 1
                continue
            items.append(InboxItem(activity=parsed, signer_url=signer))
    return items, skipped


def process_notice_file(
    path: Path,
    *,
    federation: FederationConfig | None = None,
    unit_of_work_factory: FederationUnitOfWorkFactory | None = None,
    fetcher: RemoteObjectFetcher | None = None,
) -> InboxResult:
    """Reconcile every Update activity of a JSON lines file into the replica store."""

    effective_federation = federation or get_federation_config()
    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyFederationUnitOfWork
    effective_fetcher = fetcher or ActivityPubClient(config=get_activitypub_config())

    items, skipped = read_notice_file(path)
    log.info("Processing %d Update activities from %s", len(items), path)

    context, actor_resolver = build_update_context(
        federation=effective_federation,
        unit_of_work_factory=unit_of_work_factory,
        fetcher=effective_fetcher,
    )
    processor = InboxProcessor(context, actor_resolver)
    result = asyncio.run(
        process_inbox(items, processor, workers=effective_federation.workers)
    )
    result.skipped = skipped

    log.info(
        "Finished inbox: processed=%s, failed=%s, skipped=%s",
        result.processed,
        result.failed,
        result.skipped,
    )
    return result


def migrate_database(*, database_uri: str | None = None) -> None:
    log.info("Upgrading database schema")
    upgrade_head(database_uri=database_uri)
