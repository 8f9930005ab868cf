"""ActivityPub adapter: wire schemas, translation and remote object fetching."""

from __future__ import annotations

from .client import ActivityPubClient
from .reader import PydanticObjectReader
from .translator import parse_update_activity

__all__ = ["ActivityPubClient", "PydanticObjectReader", "parse_update_activity"]
