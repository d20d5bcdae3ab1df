"""Configuration models and loaders."""

from .config_data import (
    AppConfig,
    CatalogConfig,
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
)
from .config_template import load_templated_yaml, substitute_env_vars
from .settings import EnvironmentVariables

__all__ = [
    "AppConfig",
    "CatalogConfig",
    "ConfigData",
    "DatabaseConfig",
    "EnvironmentVariables",
    "LoggingConfig",
    "load_templated_yaml",
    "substitute_env_vars",
]
