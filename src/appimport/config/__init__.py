"""Application configuration helpers."""

from __future__ import annotations

from appimport.common.logging import configure_logging

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .import_config import DEFAULT_IMPORT_CONFIG_PATH, ImportConfig, load_import_config
from .kubernetes import KubernetesConfig, get_kubernetes_config
from .object_store import S3Config, get_s3_config

__all__ = [
    "DEFAULT_IMPORT_CONFIG_PATH",
    "ConfigurationError",
    "ImportConfig",
    "KubernetesConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "S3Config",
    "configure_logging",
    "env_flag",
    "get_kubernetes_config",
    "get_s3_config",
    "load_import_config",
    "optional_env_var",
    "require_env_vars",
]
