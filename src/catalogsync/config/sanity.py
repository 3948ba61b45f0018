"""Sanity content lake configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SANITY_API_VERSION = "2021-10-21"
SANITY_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class SanityConfig:
    """Holds Sanity project configuration values."""

    project_id: str
    dataset: str
    token: str
    api_version: str
    resilience: ResilienceConfig

    @property
    def base_url(self) -> str:
        return f"https://{self.project_id}.api.sanity.io/v{self.api_version}"


def get_sanity_config(*, resilience: ResilienceConfig | None = None) -> SanityConfig:
    values = require_env_vars(("SANITY_PROJECT_ID", "SANITY_DATASET", "SANITY_AUTH_TOKEN"))
    api_version = optional_env_var(
        "SANITY_API_VERSION", DEFAULT_SANITY_API_VERSION, parse=lambda value: value.lstrip("v")
    )
    project_id = values["SANITY_PROJECT_ID"]
    token = values["SANITY_AUTH_TOKEN"]
    return SanityConfig(
        project_id=project_id,
        dataset=values["SANITY_DATASET"],
        token=token,
        api_version=api_version,
        resilience=resilience
        or ResilienceConfig(
            name="sanity",
            timeout_seconds=SANITY_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=25, per_seconds=1.0),
            retry=RetryPolicy(),
            default_headers={"Authorization": f"Bearer {token}"},
        ),
    )
