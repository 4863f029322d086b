from __future__ import annotations

import pytest

from tenantcli.config.directory import DirectoryConfig, build_directory_resilience
from tenantcli.config.objectpath import ObjectPathConfig, build_objectpath_resilience

from tests.support.urls import ADMIN_URL, GRAPH_URL, TENANT_URL


@pytest.fixture
def directory_config() -> DirectoryConfig:
    return DirectoryConfig(
        resource_url=GRAPH_URL,
        access_token="graph-token",
        resilience=build_directory_resilience("graph-token"),
    )


@pytest.fixture
def objectpath_config() -> ObjectPathConfig:
    return ObjectPathConfig(
        tenant_url=TENANT_URL,
        admin_url=ADMIN_URL,
        access_token="spo-token",
        resilience=build_objectpath_resilience("spo-token"),
        application_name="tenantcli-tests",
    )
