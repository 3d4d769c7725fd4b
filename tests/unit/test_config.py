"""
Unit tests for configuration loading.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from chisel.config.config import ChiselConfig, LazyConfig, LoggingConfig, find_config_file, settings
from pydantic import ValidationError


class TestChiselConfig:
    """Test the settings models."""

    def test_defaults(self):
        """Defaults need no file and no environment."""
        config = ChiselConfig()

        assert config.parser.backend == "html.parser"
        assert config.selectors.cache_enabled is True
        assert config.log.log_level == "INFO"
        assert config.log.log_file is None

    def test_invalid_backend(self):
        """Unknown parser backends are rejected."""
        with pytest.raises(ValidationError):
            ChiselConfig.model_validate({"parser": {"backend": "regex"}})

    def test_log_level_is_normalized(self):
        """Levels are case-insensitive and validated."""
        assert LoggingConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            LoggingConfig(log_level="chatty")

    def test_log_file_parent_is_created(self, tmp_path):
        """The log directory is created on validation."""
        log_file = tmp_path / "logs" / "chisel.log"
        config = LoggingConfig(log_file=log_file)

        assert config.log_file == str(log_file)
        assert log_file.parent.is_dir()

    def test_environment_overrides(self):
        """Nested settings can be set through CHISEL_ variables."""
        with patch.dict(os.environ, {"CHISEL_PARSER__BACKEND": "lxml", "CHISEL_SELECTORS__CACHE_ENABLED": "false"}):
            config = ChiselConfig()

        assert config.parser.backend == "lxml"
        assert config.selectors.cache_enabled is False


class TestYamlLoading:
    """Test loading configuration files."""

    def test_from_yaml(self, tmp_path):
        """Values come from the YAML document."""
        path = tmp_path / "chisel.yaml"
        path.write_text("parser:\n  backend: html5lib\nselectors:\n  cache_enabled: false\n", encoding="utf-8")

        config = ChiselConfig.from_yaml(path)

        assert config.parser.backend == "html5lib"
        assert config.selectors.cache_enabled is False

    def test_empty_yaml_uses_defaults(self, tmp_path):
        """An empty file means default settings."""
        path = tmp_path / "chisel.yaml"
        path.write_text("", encoding="utf-8")

        assert ChiselConfig.from_yaml(path).parser.backend == "html.parser"

    def test_missing_file(self, tmp_path):
        """A missing file is an error."""
        with pytest.raises(FileNotFoundError):
            ChiselConfig.from_yaml(tmp_path / "nope.yaml")

    def test_find_config_file(self, tmp_path, monkeypatch):
        """Config files are discovered in the working directory."""
        monkeypatch.chdir(tmp_path)
        assert find_config_file() is None

        (tmp_path / "chisel.yml").write_text("{}", encoding="utf-8")
        found = find_config_file()
        assert isinstance(found, Path)
        assert found.name == "chisel.yml"


class TestLazyConfig:
    """Test the lazily loaded global settings."""

    def test_loads_from_discovered_file(self, tmp_path, monkeypatch):
        """The first attribute access loads the discovered file."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "chisel.yaml").write_text("parser:\n  backend: lxml\n", encoding="utf-8")
        LazyConfig.reset(None)

        assert settings.parser.backend == "lxml"

    def test_invalid_file_falls_back_to_defaults(self, tmp_path, monkeypatch):
        """A broken file never prevents the library from working."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "chisel.yaml").write_text("parser:\n  backend: regex\n", encoding="utf-8")
        LazyConfig.reset(None)

        assert settings.parser.backend == "html.parser"

    def test_reset_installs_config(self):
        """Tests and applications may install their own settings."""
        LazyConfig.reset(ChiselConfig.model_validate({"parser": {"backend": "html5lib"}}))
        assert settings.parser.backend == "html5lib"
