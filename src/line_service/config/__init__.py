"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of the Line Service:
    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - Support for configuration profiles
    - LINE_SERVICE__<SECTION>__<FIELD> environment overrides (pydantic-settings)

Configuration Structure:
    - ServiceConfig: Root configuration object
    - SourceConfig: File producer settings (path, encoding)
    - CacheConfig: Caching layer settings (TTL, progress interval)
    - LoggingConfig: Sink selection and level

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast with ConfigurationError)
    - Support for profiles (e.g. short-lived vs. long-lived caches)
"""

from line_service.config.loader import (
    ConfigLoader,
    EnvironmentOverrides,
    load_config,
)
from line_service.config.models import (
    CacheConfig,
    LoggingConfig,
    ServiceConfig,
    SourceConfig,
)

__all__ = [
    "CacheConfig",
    "ConfigLoader",
    "EnvironmentOverrides",
    "LoggingConfig",
    "ServiceConfig",
    "SourceConfig",
    "load_config",
]
