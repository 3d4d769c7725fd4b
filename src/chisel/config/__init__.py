"""Configuration for chisel."""

from .config import ChiselConfig, LazyConfig, LoggingConfig, ParserConfig, SelectorConfig, find_config_file, settings

__all__ = [
    "ChiselConfig",
    "LazyConfig",
    "LoggingConfig",
    "ParserConfig",
    "SelectorConfig",
    "find_config_file",
    "settings",
]
