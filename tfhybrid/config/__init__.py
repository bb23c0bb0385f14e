"""
Configuration for terraform-hybrid.

This module holds the typed YAML configuration model, its loader, and the
runtime settings with their defaults.
"""

from .defaults import DEFAULT_SETTINGS
from .loader import ConfigLoader, load_config
from .models import (
    BACKEND_MODELS,
    BackendType,
    BackendVariant,
    CloudStorageBackendConfig,
    GlobalConfig,
    LocalBackendConfig,
    PostgresBackendConfig,
    TerraformHybridConfig,
)
from .settings import Settings

__all__ = [
    "DEFAULT_SETTINGS",
    "ConfigLoader",
    "load_config",
    "BACKEND_MODELS",
    "BackendType",
    "BackendVariant",
    "CloudStorageBackendConfig",
    "GlobalConfig",
    "LocalBackendConfig",
    "PostgresBackendConfig",
    "TerraformHybridConfig",
    "Settings",
]
