"""Outcomes and the collaborator bundle shared by the dispatcher and reconcilers."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from fedsync.domain.federation.retry import RetryPolicy, retry_transaction
from fedsync.domain.object_updates import extract_image_info

if TYPE_CHECKING:
    from collections.abc import Callable

    from fedsync.domain.ports import (
        ActivityForwarder,
        CacheFileWriter,
        FederationUnitOfWorkFactory,
        ImageInfoExtractor,
        ObjectReader,
        PlaylistWriter,
        RedundancyPolicy,
        SignerResolver,
        VideoResolver,
    )


class UpdateOutcome(StrEnum):
    """How a notice was handled. Logged and asserted on, never branched on by callers."""

    APPLIED = "applied"
    CREATED = "created"
    POLICY_DROP = "policy_drop"
    VALIDATION_DROP = "validation_drop"
    UNKNOWN_KIND = "unknown_kind"
    SIGNER_NOT_FOUND = "signer_not_found"


@dataclass(slots=True, kw_only=True)
class UpdateContext:
    """Everything ``handle_update`` needs besides the notice and its signer."""

    unit_of_work_factory: FederationUnitOfWorkFactory
    object_reader: ObjectReader
    signer_resolver: SignerResolver
    video_resolver: VideoResolver
    redundancy_policy: RedundancyPolicy
    cache_file_writer: CacheFileWriter
    playlist_writer: PlaylistWriter
    forwarder: ActivityForwarder
    image_info_extractor: ImageInfoExtractor = field(default=extract_image_info)
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    sleep: Callable[[float], None] = time.sleep

    def run_in_transaction[T](self, fn: Callable[..., T], *args: object) -> T:
        return retry_transaction(
            fn,
            *args,
            unit_of_work_factory=self.unit_of_work_factory,
            policy=self.retry_policy,
            sleep=self.sleep,
        )
