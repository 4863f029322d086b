from __future__ import annotations

import pytest

from tenantcli.config import (
    ConfigurationError,
    MissingConfigurationError,
    derive_admin_url,
    get_directory_config,
    get_objectpath_config,
    optional_env_var,
    require_env_vars,
)

ENV_NAMES = (
    "TENANTCLI_GRAPH_TOKEN",
    "TENANTCLI_GRAPH_URL",
    "TENANTCLI_SPO_URL",
    "TENANTCLI_SPO_TOKEN",
    "TENANTCLI_SPO_ADMIN_URL",
    "TENANTCLI_APPLICATION_NAME",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TENANTCLI_SPO_TOKEN", "  token  ")

    assert require_env_vars(["TENANTCLI_SPO_TOKEN"]) == {"TENANTCLI_SPO_TOKEN": "token"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TENANTCLI_SPO_URL", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["TENANTCLI_SPO_URL", "TENANTCLI_GRAPH_TOKEN"])

    assert str(exc.value) == (
        "Missing configuration for: TENANTCLI_GRAPH_TOKEN, TENANTCLI_SPO_URL"
    )


def test_optional_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    assert optional_env_var("TENANTCLI_GRAPH_URL") is None
    assert optional_env_var("TENANTCLI_GRAPH_URL", "fallback") == "fallback"
    monkeypatch.setenv("TENANTCLI_GRAPH_URL", " https://graph.example.test ")
    assert optional_env_var("TENANTCLI_GRAPH_URL") == "https://graph.example.test"


@pytest.mark.parametrize(
    ("tenant_url", "admin_url"),
    [
        ("https://contoso.sharepoint.com", "https://contoso-admin.sharepoint.com"),
        ("https://contoso.sharepoint.com/", "https://contoso-admin.sharepoint.com"),
        ("https://contoso-admin.sharepoint.com", "https://contoso-admin.sharepoint.com"),
        ("https://contoso.sharepoint.us", "https://contoso-admin.sharepoint.us"),
    ],
)
def test_derive_admin_url(tenant_url: str, admin_url: str) -> None:
    assert derive_admin_url(tenant_url) == admin_url


def test_derive_admin_url_rejects_other_hosts() -> None:
    with pytest.raises(ConfigurationError, match="not a SharePoint tenant URL"):
        derive_admin_url("https://intranet.example.test")


def test_directory_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TENANTCLI_GRAPH_TOKEN", "graph-token")

    config = get_directory_config()

    assert config.api_root == "https://graph.microsoft.com/v1.0"
    assert config.resilience.default_headers == {"Authorization": "Bearer graph-token"}
    assert config.resilience.ratelimit is not None


def test_directory_config_custom_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TENANTCLI_GRAPH_TOKEN", "graph-token")
    monkeypatch.setenv("TENANTCLI_GRAPH_URL", "https://graph.microsoft.us/")

    assert get_directory_config().api_root == "https://graph.microsoft.us/v1.0"


def test_directory_config_requires_token() -> None:
    with pytest.raises(MissingConfigurationError, match="TENANTCLI_GRAPH_TOKEN"):
        get_directory_config()


def test_objectpath_config_derives_admin_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TENANTCLI_SPO_URL", "https://contoso.sharepoint.com/")
    monkeypatch.setenv("TENANTCLI_SPO_TOKEN", "spo-token")

    config = get_objectpath_config()

    assert config.tenant_url == "https://contoso.sharepoint.com"
    assert config.admin_url == "https://contoso-admin.sharepoint.com"
    assert config.application_name == "tenantcli"
    assert config.resilience.default_headers == {"Authorization": "Bearer spo-token"}


def test_objectpath_config_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TENANTCLI_SPO_URL", "https://contoso.sharepoint.com")
    monkeypatch.setenv("TENANTCLI_SPO_TOKEN", "spo-token")
    monkeypatch.setenv("TENANTCLI_SPO_ADMIN_URL", "https://admin.contoso.test/")
    monkeypatch.setenv("TENANTCLI_APPLICATION_NAME", "ops-scripts")

    config = get_objectpath_config()

    assert config.admin_url == "https://admin.contoso.test"
    assert config.application_name == "ops-scripts"


def test_objectpath_config_requires_url_and_token() -> None:
    with pytest.raises(MissingConfigurationError) as exc:
        get_objectpath_config()

    assert "TENANTCLI_SPO_TOKEN" in str(exc.value)
    assert "TENANTCLI_SPO_URL" in str(exc.value)
