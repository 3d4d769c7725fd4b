"""
Structured logging for chisel, built on structlog.

Library modules only call ``structlog.get_logger(__name__)`` and pass selectors, locations and
nodes straight into their events. ``configure_logging`` installs the processor chain that turns
those values into short labels before rendering. Nothing is configured on import.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import structlog

from ..selectors.predicates import Selector
from ..tree.cursor import Location
from ..tree.nodes import NODE_TYPES, Element, attribute_of

if TYPE_CHECKING:
    from chisel.config.config import LoggingConfig


def describe_node(node: Any) -> str:
    """Compact label for a node: ``div#main.content`` for elements, the kind otherwise."""
    if isinstance(node, Element):
        label = node.tag
        element_id = attribute_of(node, "id")
        if element_id:
            label += f"#{element_id}"
        classes = attribute_of(node, "class")
        if classes:
            label += "".join(f".{c}" for c in classes.split())
        return label
    return node.type.value


def _describe(value: Any) -> Any:
    if isinstance(value, Selector):
        return value.name
    if isinstance(value, Location):
        return f"{describe_node(value.node)}@{value.depth}"
    if isinstance(value, NODE_TYPES):
        return describe_node(value)
    return value


def describe_selection_values(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Replace selectors, locations and nodes in an event with readable labels."""
    for key, value in event_dict.items():
        if isinstance(value, (list, tuple)) and value and isinstance(value[0], NODE_TYPES):
            event_dict[key] = [_describe(v) for v in value]
        else:
            event_dict[key] = _describe(value)
    return event_dict


def _output(config: LoggingConfig) -> Tuple[logging.Handler, Any]:
    if config.log_file:
        return logging.FileHandler(config.log_file, encoding="utf-8"), structlog.processors.JSONRenderer()
    return logging.StreamHandler(sys.stdout), structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Route chisel's structlog events (and stdlib records) through one handler.

    JSON lines go to ``config.log_file`` when it is set, console lines to stdout otherwise.
    Context bound with ``structlog.contextvars`` (``extract_from`` binds ``record``) is merged
    into every event.

    Args:
        config: Logging settings; defaults to ``settings.log``
    """
    if config is None:
        from chisel.config.config import settings

        config = settings.log

    pre_chain: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        describe_selection_values,
    ]

    handler, renderer = _output(config)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=pre_chain,
        )
    )
    logging.basicConfig(format="%(message)s", level=config.log_level, handlers=[handler], force=True)

    structlog.configure(
        processors=pre_chain
        + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.get_logger(__name__).info(
        "Logging configured", level=config.log_level, output=config.log_file or "stdout"
    )
