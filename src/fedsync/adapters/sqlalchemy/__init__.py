"""SQLAlchemy adapter package for fedsync."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyActorFollowRepository,
    SqlAlchemyActorRepository,
    SqlAlchemyDeliveryJobRepository,
    SqlAlchemyVideoChannelRepository,
    SqlAlchemyVideoPlaylistRepository,
    SqlAlchemyVideoRedundancyRepository,
    SqlAlchemyVideoRepository,
    SqlAlchemyVideoShareRepository,
)

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyActorFollowRepository",
    "SqlAlchemyActorRepository",
    "SqlAlchemyDeliveryJobRepository",
    "SqlAlchemyVideoChannelRepository",
    "SqlAlchemyVideoPlaylistRepository",
    "SqlAlchemyVideoRedundancyRepository",
    "SqlAlchemyVideoRepository",
    "SqlAlchemyVideoShareRepository",
    "create_all_tables",
    "mapper_registry",
    "start_mappers",
]
