"""
Unit tests for structured logging setup.
"""

import json
import logging

import pytest
import structlog
from chisel.config.config import LoggingConfig
from chisel.exceptions import ExtractionError
from chisel.extraction.extractors import attr
from chisel.extraction.pipeline import extract_from
from chisel.observability.logging import configure_logging, describe_node, describe_selection_values
from chisel.selectors.predicates import tag_equals
from chisel.tree.cursor import Location
from chisel.tree.nodes import Document, Element, Text


def _read_events(log_file):
    for handler in logging.getLogger().handlers:
        handler.flush()
    return [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]


class TestConfigureLogging:
    """Test structlog configuration."""

    def teardown_method(self):
        """Restore default logging state."""
        structlog.reset_defaults()
        structlog.contextvars.clear_contextvars()
        logging.getLogger().handlers.clear()

    def test_json_file_output(self, tmp_path):
        """With a log file, events are written as JSON lines."""
        log_file = tmp_path / "logs" / "chisel.log"
        configure_logging(LoggingConfig(log_level="DEBUG", log_file=str(log_file)))

        structlog.get_logger("chisel.test").info("selected", matches=3)

        selected = [e for e in _read_events(log_file) if e["event"] == "selected"]
        assert selected[0]["matches"] == 3
        assert selected[0]["level"] == "info"
        assert "timestamp" in selected[0]

    def test_console_output(self, capsys):
        """Without a log file, events go to stdout."""
        configure_logging(LoggingConfig(log_level="INFO"))

        structlog.get_logger("chisel.test").warning("careful", pair=1)

        assert "careful" in capsys.readouterr().out

    def test_log_level_filters(self, tmp_path):
        """Events below the configured level are dropped."""
        log_file = tmp_path / "chisel.log"
        configure_logging(LoggingConfig(log_level="WARNING", log_file=str(log_file)))

        structlog.get_logger("chisel.test").debug("too quiet")

        assert "too quiet" not in log_file.read_text(encoding="utf-8")

    def test_selection_values_are_labelled(self, tmp_path):
        """Selectors and nodes passed to events are rendered as labels."""
        log_file = tmp_path / "chisel.log"
        configure_logging(LoggingConfig(log_level="DEBUG", log_file=str(log_file)))

        structlog.get_logger("chisel.test").info("hit", selector=tag_equals("li"), node=Element("li", {"class": "item"}))

        hit = [e for e in _read_events(log_file) if e["event"] == "hit"][0]
        assert hit["selector"] == "tag=li"
        assert hit["node"] == "li.item"

    def test_failed_record_is_identified(self, tmp_path, sample_document):
        """A failure inside extract_from names the record and the pair's selector."""
        log_file = tmp_path / "chisel.log"
        configure_logging(LoggingConfig(log_level="DEBUG", log_file=str(log_file)))

        def known_href(node):
            return {"/one": "first"}[attr("href", node)]

        with pytest.raises(ExtractionError):
            extract_from(sample_document, "ul.links li", ["label"], "a", known_href)

        failures = [e for e in _read_events(log_file) if e["event"] == "Extraction pair failed"]
        assert len(failures) == 1
        assert failures[0]["record"] == 1
        assert failures[0]["selector"] == "a"
        assert failures[0]["error_type"] == "KeyError"
        assert "record" not in structlog.contextvars.get_contextvars()


class TestDescribe:
    """Test the label processor."""

    def test_describe_node(self):
        """Elements show tag, id and classes; other kinds show their type."""
        assert describe_node(Element("div", {"id": "main", "class": "content wide"})) == "div#main.content.wide"
        assert describe_node(Element("p")) == "p"
        assert describe_node(Text("x")) == "text"
        assert describe_node(Document()) == "document"

    def test_describe_selection_values(self):
        """Selectors, locations and node lists are replaced; everything else is kept."""
        event = describe_selection_values(
            None,
            "info",
            {
                "event": "x",
                "selector": tag_equals("p"),
                "at": Location.of(Element("p")),
                "nodes": [Element("p"), Text("y")],
                "count": 2,
            },
        )

        assert event == {"event": "x", "selector": "tag=p", "at": "p@0", "nodes": ["p", "text"], "count": 2}
