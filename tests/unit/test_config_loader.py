"""
Unit Tests for ConfigLoader.

Test Aspects Covered:
    ✅ Business Logic: Config loading and profile merging
    ✅ Error Handling: Invalid values, malformed YAML, missing files
    ✅ Business Logic: Environment overrides and profile lookup order
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from line_service.config.loader import ConfigLoader, EnvironmentOverrides, load_config
from line_service.config.models import CacheConfig, ServiceConfig
from line_service.domain.errors import ConfigurationError


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """
        SCENARIO: Valid YAML configuration file
        EXPECTED: ServiceConfig object created
        """
        # Arrange
        config_content = """
version: "1.0"
source:
  path: data/orders.txt
cache:
  ttl_seconds: 600
logging:
  sink: stdlib
"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(config_content)

        loader = ConfigLoader(base_path=tmp_path)

        # Act
        config = loader.load("config.yaml")

        # Assert
        assert isinstance(config, ServiceConfig)
        assert config.source.path == "data/orders.txt"
        assert config.cache.ttl == timedelta(minutes=10)
        assert config.logging.sink == "stdlib"

    def test_applies_defaults(self) -> None:
        """
        SCENARIO: Minimal config with only the version
        EXPECTED: Defaults applied for missing fields
        """
        config = ConfigLoader().load_from_dict({"version": "1.0"})

        assert config.cache.enabled is True
        assert config.cache.ttl_seconds == 300
        assert config.cache.progress_interval == 50_000
        assert config.cache.shared_store is False
        assert config.logging.sink == "console"
        assert config.logging.log_calls is True

    def test_loads_sample_fixture(self, sample_config_path: Path) -> None:
        config = load_config(sample_config_path)

        assert config.cache.ttl_seconds == 120
        assert config.cache.progress_interval == 1000
        assert config.logging.level == "WARNING"
        assert config.logging.log_calls is False

    @pytest.mark.parametrize(
        "bad",
        [
            {"cache": {"ttl_seconds": -1}},
            {"cache": {"progress_interval": 0}},
            {"logging": {"sink": "carrier-pigeon"}},
            {"source": {"path": ""}},
        ],
    )
    def test_validates_invalid_config(self, bad) -> None:
        """
        SCENARIO: Config with invalid values
        EXPECTED: ConfigurationError raised
        """
        with pytest.raises(ConfigurationError):
            ConfigLoader().load_from_dict(bad)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("cache: [unclosed\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader(base_path=tmp_path).load("broken.yaml")

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader(base_path=tmp_path).load("list.yaml")

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        config = ConfigLoader(base_path=tmp_path).load("empty.yaml")

        assert config == ServiceConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Config file not found"):
            ConfigLoader(base_path=tmp_path).load("nope.yaml")

    def test_merges_profile(self, tmp_path: Path) -> None:
        """
        SCENARIO: Base config plus a profile overriding nested keys
        EXPECTED: Profile keys win, untouched keys survive
        """
        (tmp_path / "base.yaml").write_text(
            "cache:\n  ttl_seconds: 60\n  progress_interval: 10\n"
        )
        profiles = tmp_path / "config" / "profiles"
        profiles.mkdir(parents=True)
        (profiles / "long_lived.yaml").write_text("cache:\n  ttl_seconds: 600\n")

        config = load_config("base.yaml", profile="long_lived", base_path=tmp_path)

        assert config.cache.ttl_seconds == 600
        assert config.cache.progress_interval == 10

    def test_missing_profile(self, tmp_path: Path) -> None:
        (tmp_path / "base.yaml").write_text("version: '1.0'\n")

        with pytest.raises(ConfigurationError, match="Profile not found: ghost"):
            ConfigLoader(base_path=tmp_path).load("base.yaml", profile="ghost")


class TestProfileLookup:
    """Where profiles are found."""

    def test_profile_next_to_config_file_wins(self, tmp_path: Path) -> None:
        conf_dir = tmp_path / "deploy"
        (conf_dir / "profiles").mkdir(parents=True)
        (conf_dir / "base.yaml").write_text("cache:\n  ttl_seconds: 60\n")
        (conf_dir / "profiles" / "fast.yaml").write_text("cache:\n  ttl_seconds: 5\n")
        fallback = tmp_path / "config" / "profiles"
        fallback.mkdir(parents=True)
        (fallback / "fast.yaml").write_text("cache:\n  ttl_seconds: 500\n")

        loader = ConfigLoader(base_path=tmp_path, use_environment=False)
        config = loader.load("deploy/base.yaml", profile="fast")

        assert config.cache.ttl_seconds == 5

    def test_missing_profile_lists_available(self, tmp_path: Path) -> None:
        profiles = tmp_path / "config" / "profiles"
        profiles.mkdir(parents=True)
        (profiles / "structured.yaml").write_text("logging:\n  sink: structured\n")
        (tmp_path / "base.yaml").write_text("version: '1.0'\n")
        loader = ConfigLoader(base_path=tmp_path, use_environment=False)

        with pytest.raises(ConfigurationError, match=r"available: structured"):
            loader.load("base.yaml", profile="ghost")

    def test_shipped_profiles_are_listed(self) -> None:
        repo_root = Path(__file__).resolve().parents[2]
        loader = ConfigLoader(base_path=repo_root, use_environment=False)

        assert loader.available_profiles() == ["long_lived", "structured"]


class TestEnvironmentOverrides:
    """LINE_SERVICE__<SECTION>__<FIELD> variables."""

    def test_overrides_win_over_file_and_profile(self, tmp_path: Path, monkeypatch) -> None:
        """
        SCENARIO: File sets ttl 60, profile sets 600, environment sets 30
        EXPECTED: Environment value used, strings coerced by the models
        """
        (tmp_path / "base.yaml").write_text("cache:\n  ttl_seconds: 60\n")
        profiles = tmp_path / "config" / "profiles"
        profiles.mkdir(parents=True)
        (profiles / "long_lived.yaml").write_text("cache:\n  ttl_seconds: 600\n")
        monkeypatch.setenv("LINE_SERVICE__CACHE__TTL_SECONDS", "30")
        monkeypatch.setenv("LINE_SERVICE__CACHE__SHARED_STORE", "true")
        monkeypatch.setenv("LINE_SERVICE__SOURCE__PATH", "/srv/data/orders.txt")

        config = ConfigLoader(base_path=tmp_path).load("base.yaml", profile="long_lived")

        assert config.cache.ttl_seconds == 30
        assert config.cache.shared_store is True
        assert config.source.path == "/srv/data/orders.txt"
        assert config.cache.progress_interval == 50_000

    def test_invalid_override_value(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "base.yaml").write_text("")
        monkeypatch.setenv("LINE_SERVICE__CACHE__TTL_SECONDS", "-5")

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigLoader(base_path=tmp_path).load("base.yaml")

    def test_environment_can_be_ignored(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "base.yaml").write_text("cache:\n  ttl_seconds: 60\n")
        monkeypatch.setenv("LINE_SERVICE__CACHE__TTL_SECONDS", "30")

        config = ConfigLoader(base_path=tmp_path, use_environment=False).load("base.yaml")

        assert config.cache.ttl_seconds == 60

    def test_load_from_dict_ignores_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("LINE_SERVICE__CACHE__TTL_SECONDS", "30")

        config = ConfigLoader().load_from_dict({})

        assert config.cache.ttl_seconds == 300

    def test_overlay_only_holds_set_fields(self, monkeypatch) -> None:
        monkeypatch.setenv("LINE_SERVICE__LOGGING__LEVEL", "DEBUG")

        assert EnvironmentOverrides().as_overlay() == {"logging": {"level": "DEBUG"}}


class TestCacheConfig:
    """Tests for CacheConfig helpers."""

    def test_ttl_property(self) -> None:
        assert CacheConfig(ttl_seconds=90).ttl == timedelta(seconds=90)
