"""Directory service (Microsoft Graph) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_GRAPH_URL = "https://graph.microsoft.com"
DEFAULT_GRAPH_API_VERSION = "v1.0"
GRAPH_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class DirectoryConfig:
    resource_url: str
    access_token: str
    resilience: ResilienceConfig
    api_version: str = DEFAULT_GRAPH_API_VERSION

    @property
    def api_root(self) -> str:
        return f"{self.resource_url}/{self.api_version}"


def build_directory_resilience(access_token: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="graph",
        timeout_seconds=GRAPH_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"Authorization": f"Bearer {access_token}"},
    )


def get_directory_config() -> DirectoryConfig:
    values = require_env_vars(("TENANTCLI_GRAPH_TOKEN",))
    resource_url = optional_env_var("TENANTCLI_GRAPH_URL", DEFAULT_GRAPH_URL) or DEFAULT_GRAPH_URL
    access_token = values["TENANTCLI_GRAPH_TOKEN"]
    return DirectoryConfig(
        resource_url=resource_url.rstrip("/"),
        access_token=access_token,
        resilience=build_directory_resilience(access_token),
    )
