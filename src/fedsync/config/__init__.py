"""Application configuration helpers."""

from __future__ import annotations

from .activitypub import ActivityPubConfig, get_activitypub_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .federation import FederationConfig, RedundancyAcceptFrom, get_federation_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ActivityPubConfig",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "FederationConfig",
    "MissingConfigurationError",
    "RateLimit",
    "RedundancyAcceptFrom",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_activitypub_config",
    "get_database_config",
    "get_federation_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
