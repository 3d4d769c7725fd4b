"""
Configuration management for chisel using Pydantic.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, ClassVar, Literal, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ("chisel.yaml", "chisel.yml")

# --- Nested Configuration Models ---


class ParserConfig(BaseModel):
    """Configuration for the BeautifulSoup parser backend."""

    backend: Literal["html.parser", "lxml", "html5lib", "lxml-xml"] = Field(
        default="html.parser",
        description="BeautifulSoup tree builder used by parse() and parse_fragment().",
    )


class SelectorConfig(BaseModel):
    """Configuration for selector compilation."""

    cache_enabled: bool = Field(
        default=True,
        description="Memoize compiled textual selector chains in caches that do not set it explicitly.",
    )


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(
        default=None,
        description="Path to log file. If None, logs to console.",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class ChiselConfig(BaseSettings):
    project_name: str = "chisel"
    version: str = "0.1.0"
    parser: ParserConfig = Field(default_factory=ParserConfig)
    selectors: SelectorConfig = Field(default_factory=SelectorConfig)
    log: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(env_prefix="CHISEL_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> ChiselConfig:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for name in CONFIG_FILE_NAMES:
        path = current_dir / name
        if path.exists():
            return path
    return None


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    A proxy for the ChiselConfig object that delays its loading and validation
    until an attribute is first accessed, so importing chisel never fails on a bad
    config file.
    """

    _config: ClassVar[ChiselConfig | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        if self.__class__._config is None:
            with self.__class__._lock:
                if self.__class__._config is None:
                    self.__class__._config = self._load_config_with_fallback()
        return getattr(self.__class__._config, name)

    @classmethod
    def reset(cls, config: ChiselConfig | None = None) -> None:
        """Replace the loaded configuration; ``None`` reloads on next access."""
        with cls._lock:
            cls._config = config

    def _load_config_with_fallback(self) -> ChiselConfig:
        """Load configuration from file or fall back to defaults."""
        config_path = find_config_file()
        if config_path:
            try:
                log.info("Lazy loading configuration from: %s", config_path)
                return ChiselConfig.from_yaml(config_path)
            except (ValidationError, yaml.YAMLError, OSError) as e:
                log.error(
                    "Failed to load or validate configuration from '%s': %s. "
                    "Falling back to default settings. Please check your config file.",
                    config_path,
                    e,
                    exc_info=log.getEffectiveLevel() <= logging.DEBUG,
                )
        else:
            log.debug("No config file found. Using default settings for lazy load.")

        try:
            return ChiselConfig()
        except ValidationError as e:
            log.critical("FATAL: Default configuration is invalid: %s", e, exc_info=True)
            raise RuntimeError(f"Default configuration is invalid, cannot start: {e}") from e


# --- Global Settings Instance ---
settings: "ChiselConfig" = cast("ChiselConfig", LazyConfig())
