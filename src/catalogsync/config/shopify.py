"""Shopify Storefront API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SHOPIFY_API_VERSION = "2024-04"
SHOPIFY_TIMEOUT_SECONDS = 15.0
STOREFRONT_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"


@dataclass(frozen=True, slots=True)
class ShopifyConfig:
    """Holds Storefront API configuration values."""

    shop_domain: str
    storefront_token: str
    api_version: str
    resilience: ResilienceConfig

    @property
    def graphql_url(self) -> str:
        return f"https://{self.shop_domain}/api/{self.api_version}/graphql.json"


def _normalize_shop_domain(value: str) -> str:
    domain = value.removeprefix("https://").removeprefix("http://").rstrip("/")
    if "." not in domain:
        domain = f"{domain}.myshopify.com"
    return domain


def get_shopify_config(*, resilience: ResilienceConfig | None = None) -> ShopifyConfig:
    values = require_env_vars(("SHOPIFY_SHOP_DOMAIN", "SHOPIFY_STOREFRONT_TOKEN"))
    api_version = optional_env_var(
        "SHOPIFY_API_VERSION", DEFAULT_SHOPIFY_API_VERSION, parse=str
    )
    token = values["SHOPIFY_STOREFRONT_TOKEN"]
    return ShopifyConfig(
        shop_domain=_normalize_shop_domain(values["SHOPIFY_SHOP_DOMAIN"]),
        storefront_token=token,
        api_version=api_version,
        resilience=resilience
        or ResilienceConfig(
            name="shopify",
            timeout_seconds=SHOPIFY_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
            # Storefront queries are read-only, so POST is safe to retry here.
            retry=RetryPolicy(allowed_methods=frozenset({"POST"})),
            default_headers={
                STOREFRONT_TOKEN_HEADER: token,
                "Content-Type": "application/json",
            },
        ),
    )
