"""Object-path service (SharePoint client.svc) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_APPLICATION_NAME = "tenantcli"
OBJECTPATH_TIMEOUT_SECONDS = 60.0

_TENANT_HOST_LABEL = ".sharepoint."
_ADMIN_HOST_LABEL = "-admin.sharepoint."


@dataclass(frozen=True, slots=True)
class ObjectPathConfig:
    tenant_url: str
    admin_url: str
    access_token: str
    resilience: ResilienceConfig
    application_name: str = DEFAULT_APPLICATION_NAME


def derive_admin_url(tenant_url: str) -> str:
    """Return the tenant admin endpoint for a tenant root URL.

    ``https://contoso.sharepoint.com`` becomes ``https://contoso-admin.sharepoint.com``.
    """

    url = tenant_url.strip().rstrip("/")
    if _ADMIN_HOST_LABEL in url:
        return url
    if _TENANT_HOST_LABEL not in url:
        raise ConfigurationError(f"{tenant_url!r} is not a SharePoint tenant URL")
    return url.replace(_TENANT_HOST_LABEL, _ADMIN_HOST_LABEL, 1)


def build_objectpath_resilience(access_token: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="objectpath",
        timeout_seconds=OBJECTPATH_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        default_headers={"Authorization": f"Bearer {access_token}"},
    )


def get_objectpath_config() -> ObjectPathConfig:
    values = require_env_vars(("TENANTCLI_SPO_URL", "TENANTCLI_SPO_TOKEN"))
    tenant_url = values["TENANTCLI_SPO_URL"].rstrip("/")
    admin_override = optional_env_var("TENANTCLI_SPO_ADMIN_URL")
    admin_url = admin_override.rstrip("/") if admin_override else derive_admin_url(tenant_url)
    application_name = (
        optional_env_var("TENANTCLI_APPLICATION_NAME", DEFAULT_APPLICATION_NAME)
        or DEFAULT_APPLICATION_NAME
    )
    access_token = values["TENANTCLI_SPO_TOKEN"]
    return ObjectPathConfig(
        tenant_url=tenant_url,
        admin_url=admin_url,
        access_token=access_token,
        resilience=build_objectpath_resilience(access_token),
        application_name=application_name,
    )
