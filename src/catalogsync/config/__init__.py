"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .sanity import SanityConfig, get_sanity_config
from .shopify import ShopifyConfig, get_shopify_config
from .storage import DatabaseConfig, get_database_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SanityConfig",
    "ShopifyConfig",
    "SyncConfig",
    "get_database_config",
    "get_sanity_config",
    "get_shopify_config",
    "get_sync_config",
    "optional_env_var",
    "require_env_vars",
]
