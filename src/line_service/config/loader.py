"""
Configuration Loader - YAML Loading with Validation.

Builds a ServiceConfig from three layers, later layers winning:
    1. The YAML config file
    2. An optional profile (config/profiles/<name>.yaml)
    3. LINE_SERVICE__<SECTION>__<FIELD> environment variables

Every problem found while loading is reported as ConfigurationError, so a
pipeline is never built from a half-read config.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from line_service.config.models import ServiceConfig
from line_service.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "LINE_SERVICE__"


class EnvironmentOverrides(BaseSettings):
    """
    LINE_SERVICE__<SECTION>__<FIELD> environment variables, per section.

    Values stay strings here; ServiceConfig validation coerces them.
        LINE_SERVICE__CACHE__TTL_SECONDS=600     -> cache.ttl_seconds = 600
        LINE_SERVICE__CACHE__SHARED_STORE=true   -> cache.shared_store = True
        LINE_SERVICE__SOURCE__PATH=/data/in.txt  -> source.path = "/data/in.txt"
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
    )

    version: Optional[str] = None
    source: Dict[str, Any] = {}
    cache: Dict[str, Any] = {}
    logging: Dict[str, Any] = {}

    def as_overlay(self) -> Dict[str, Any]:
        """Only the sections and fields actually set in the environment."""
        return self.model_dump(exclude_defaults=True)


class ConfigLoader:
    """
    Loads and validates service configuration.

    Profiles are looked up next to the config file first
    (<config dir>/profiles/), then under <base_path>/config/profiles/.

    Environment overrides are read through EnvironmentOverrides.
    """

    def __init__(
        self,
        base_path: Optional[Path] = None,
        use_environment: bool = True,
    ) -> None:
        """
        Initialize config loader.

        Args:
            base_path: Base path for relative config paths and profiles
            use_environment: Apply LINE_SERVICE__* environment overrides
        """
        self._base_path = base_path or Path(".")
        self._use_environment = use_environment

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> ServiceConfig:
        """
        Load configuration from a YAML file, a profile and the environment.

        Args:
            config_path: Path to YAML config file
            profile: Optional profile name to merge

        Returns:
            Validated ServiceConfig object

        Raises:
            ConfigurationError: If a file or profile is missing, malformed
                or invalid, or an override does not fit the config shape
        """
        path = self._resolve_path(config_path)
        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")
        config_dict = self._load_yaml(path)

        if profile:
            config_dict = _deep_merge(config_dict, self._load_profile(profile, path.parent))

        if self._use_environment:
            config_dict = self._apply_env_overrides(config_dict)
        return self.load_from_dict(config_dict)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> ServiceConfig:
        """
        Validate a configuration dictionary as-is.

        Raises:
            ConfigurationError: If config is invalid
        """
        try:
            return ServiceConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def available_profiles(self, config_dir: Optional[Path] = None) -> List[str]:
        """List profile names visible from config_dir and base_path."""
        names = set()
        for directory in self._profile_dirs(config_dir):
            if directory.is_dir():
                names.update(p.stem for p in directory.glob("*.yaml"))
        return sorted(names)

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        if p.is_absolute():
            return p
        return self._base_path / p

    def _profile_dirs(self, config_dir: Optional[Path]) -> List[Path]:
        dirs = [self._base_path / "config" / "profiles"]
        if config_dir is not None:
            dirs.insert(0, config_dir / "profiles")
        return dirs

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Malformed YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping at top level of {path}")
        return data

    def _load_profile(self, profile: str, config_dir: Path) -> Dict[str, Any]:
        for directory in self._profile_dirs(config_dir):
            candidate = directory / f"{profile}.yaml"
            if candidate.is_file():
                logger.debug(f"Using profile {profile!r} from {candidate}")
                return self._load_yaml(candidate)

        available = ", ".join(self.available_profiles(config_dir)) or "none"
        raise ConfigurationError(
            f"Profile not found: {profile} (available: {available})"
        )

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        try:
            overlay = EnvironmentOverrides().as_overlay()
        except (ValidationError, SettingsError) as e:
            raise ConfigurationError(f"Invalid environment override: {e}") from e

        if overlay:
            logger.debug(f"Config overrides from environment: {sorted(overlay)}")
        return _deep_merge(config_dict, overlay)


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge overlay into a copy of base."""
    result = dict(base)
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
    base_path: Optional[Path] = None,
) -> ServiceConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to YAML config file
        profile: Optional profile name
        base_path: Base path for resolving relative paths

    Returns:
        Validated ServiceConfig object
    """
    loader = ConfigLoader(base_path=base_path)
    return loader.load(config_path, profile)
