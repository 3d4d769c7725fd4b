"""
Test configuration for chisel.

Provides sample markup, parsed trees and isolated selector caches/settings so that no test
observes state left behind by another.
"""

from typing import Generator

import pytest
from chisel.config.config import ChiselConfig, LazyConfig
from chisel.selectors.compiler import DEFAULT_CACHE, SelectorCache
from chisel.tree import Comment, Document, Element, Text, parse, parse_fragment

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


# ============================================================================
# Isolation Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_state() -> Generator[None, None, None]:
    """Default settings and an empty process-wide selector cache for every test."""
    LazyConfig.reset(ChiselConfig())
    DEFAULT_CACHE.clear()
    yield
    DEFAULT_CACHE.clear()
    LazyConfig.reset(None)


@pytest.fixture
def selector_cache() -> SelectorCache:
    """Provide a private selector cache."""
    return SelectorCache(enabled=True)


# ============================================================================
# Markup Fixtures
# ============================================================================


@pytest.fixture
def sample_html():
    """Provide a sample HTML document."""
    return (
        "<!DOCTYPE html>"
        "<html>"
        "<head><title>Test Article</title></head>"
        "<body>"
        '<div id="main" class="content wide">'
        "<h1>Test Article Title</h1>"
        '<p class="intro">Hello <a href="https://example.com">World</a><!-- hidden -->!</p>'
        '<ul class="links">'
        '<li class="item"><a href="/one">One</a></li>'
        '<li class="item featured"><a href="/two">Two</a></li>'
        "</ul>"
        "</div>"
        '<div id="footer"><a href="/about">About</a></div>'
        "</body>"
        "</html>"
    )


@pytest.fixture
def sample_document(sample_html) -> Document:
    """Provide the sample document parsed into a tree."""
    return parse(sample_html)


@pytest.fixture
def listing_tree():
    """Provide a fragment with two ``.item`` spans."""
    return parse_fragment('<div><span class="item">1</span><span class="item">2</span></div>')


@pytest.fixture
def small_tree() -> Element:
    """
    Provide a hand-built tree::

        div#root
          p.a         "x"
          <!-- c -->
          section.b
            p.a.b     "y"
          "z"
    """
    return Element(
        tag="div",
        attributes={"id": "root"},
        children=(
            Element(tag="p", attributes={"class": "a"}, children=(Text("x"),)),
            Comment(" c "),
            Element(
                tag="section",
                attributes={"class": "b"},
                children=(Element(tag="p", attributes={"class": "a b"}, children=(Text("y"),)),),
            ),
            Text("z"),
        ),
    )
