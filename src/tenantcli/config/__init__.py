"""Application configuration helpers."""

from __future__ import annotations

from .directory import DirectoryConfig, get_directory_config
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig
from .logging import configure_logging
from .objectpath import ObjectPathConfig, derive_admin_url, get_objectpath_config

__all__ = [
    "ConfigurationError",
    "DirectoryConfig",
    "MissingConfigurationError",
    "ObjectPathConfig",
    "RateLimit",
    "ResilienceConfig",
    "configure_logging",
    "derive_admin_url",
    "get_directory_config",
    "get_objectpath_config",
    "optional_env_var",
    "require_env_vars",
]
