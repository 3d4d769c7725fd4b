"""Structured logging setup."""

from __future__ import annotations

from .logging import configure_logging, describe_node, describe_selection_values

__all__ = ["configure_logging", "describe_node", "describe_selection_values"]
