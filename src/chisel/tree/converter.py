"""
Projection of BeautifulSoup parse trees onto the canonical node model.

BeautifulSoup is the authority on well-formedness: this module never repairs markup, it only
re-shapes what the parser produced. Each recognized parser kind has its own conversion
registered on ``to_tree``; plain strings and unrecognized string-like kinds (script/style
data, processing instructions, declarations) fall back to ``Text``.
"""

from __future__ import annotations

import re
from functools import singledispatch
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import structlog
from bs4 import BeautifulSoup
from bs4 import element as bs4_element

from ..config.config import settings
from .nodes import Comment, Document, DocumentType, Element, Node, Text

logger = structlog.get_logger(__name__)

# name [PUBLIC "public id"] ["system id"] | name SYSTEM "system id"
_DOCTYPE_PATTERN = re.compile(
    r"""^\s*(?P<name>[^\s"']+)?"""
    r"""(?:\s+(?P<keyword>PUBLIC|SYSTEM))?"""
    r"""(?:\s+(?P<q1>["'])(?P<first>.*?)(?P=q1))?"""
    r"""(?:\s+(?P<q2>["'])(?P<second>.*?)(?P=q2))?""",
    re.IGNORECASE | re.DOTALL,
)


def _lower(name: str) -> str:
    return name.lower()


def to_attribute(key: str, value: Any) -> Tuple[str, str]:
    """Convert one attribute pair.

    BeautifulSoup hands back multi-valued attributes such as ``class`` as lists unless told
    otherwise; those are joined back into their source form.
    """
    if isinstance(value, (list, tuple)):
        value = " ".join(str(v) for v in value)
    elif value is None:
        value = ""
    return _lower(str(key)), str(value)


def to_attributes(attrs: Optional[Mapping[str, Any]]) -> Optional[dict[str, str]]:
    """Convert an attribute set; an empty set becomes ``None``."""
    if not attrs:
        return None
    return dict(to_attribute(key, value) for key, value in attrs.items())


def _doctype_attributes(declaration: str) -> Optional[dict[str, str]]:
    match = _DOCTYPE_PATTERN.match(declaration)
    if not match:
        return None

    keyword = (match.group("keyword") or "").upper()
    first = match.group("first")
    second = match.group("second")

    attributes = {"name": match.group("name")}
    if keyword == "SYSTEM":
        attributes["systemid"] = first
    else:
        attributes["publicid"] = first
        attributes["systemid"] = second

    return to_attributes({key: value for key, value in attributes.items() if value})


def _children(contents: Iterable[Any]) -> Tuple[Node, ...]:
    return tuple(to_tree(child) for child in contents)


@singledispatch
def to_tree(data: Any) -> Any:
    """Transform BeautifulSoup output (or a sequence of it) into canonical nodes."""
    raise TypeError(f"Cannot convert {type(data).__name__} into a tree node")


@to_tree.register(type(None))
def _(data: None) -> None:
    return None


@to_tree.register(str)
def _(data: str) -> Text:
    return Text(str(data))


@to_tree.register(bs4_element.NavigableString)
def _(data: bs4_element.NavigableString) -> Text:
    return Text(str(data))


@to_tree.register(bs4_element.CData)
def _(data: bs4_element.CData) -> Text:
    return Text(str(data))


@to_tree.register(bs4_element.Comment)
def _(data: bs4_element.Comment) -> Comment:
    return Comment(str(data))


@to_tree.register(bs4_element.Doctype)
def _(data: bs4_element.Doctype) -> DocumentType:
    return DocumentType(attributes=_doctype_attributes(str(data)))


@to_tree.register(bs4_element.Tag)
def _(data: bs4_element.Tag) -> Element:
    name = data.name
    if data.prefix:
        name = f"{data.prefix}:{name}"
    return Element(
        tag=_lower(name),
        attributes=to_attributes(data.attrs),
        children=_children(data.contents),
    )


@to_tree.register(BeautifulSoup)
def _(data: BeautifulSoup) -> Document:
    return Document(children=_children(data.contents))


@to_tree.register(list)
@to_tree.register(tuple)
def _(data: Union[list, tuple]) -> Tuple[Node, ...]:
    return _children(data)


def _make_soup(html: str, parser: Optional[str]) -> BeautifulSoup:
    backend = parser or settings.parser.backend
    # Keep attribute values as the source spelled them (no list-valued ``class``).
    return BeautifulSoup(html, backend, multi_valued_attributes=None)


def parse(html: Optional[str], *, parser: Optional[str] = None) -> Optional[Document]:
    """
    Parse a full document into a tree.

    Args:
        html: Markup text; ``None`` yields ``None``
        parser: BeautifulSoup backend, defaults to ``settings.parser.backend``

    Returns:
        Document node, or None when there is no input
    """
    if html is None:
        return None

    soup = _make_soup(html, parser)
    document = to_tree(soup)
    logger.debug("Parsed document", parser=parser or settings.parser.backend, nodes=len(document.children))
    return document


_UNWRAPPED_BACKENDS = ("html.parser", "lxml-xml")
_SECTION_TAGS = ("head", "body")


def _fragment_contents(soup: BeautifulSoup, backend: str) -> List[bs4_element.PageElement]:
    """Top-level nodes of a fragment, with synthesized document wrappers dissolved.

    lxml and html5lib wrap every fragment in ``<html>``, moving metadata content such as
    ``<title>`` or ``<meta>`` into ``<head>`` and the rest into ``<body>``. Both sections are
    spliced back in place, head first.
    """
    if backend in _UNWRAPPED_BACKENDS:
        return list(soup.contents)

    root = soup.find("html", recursive=False)
    contents: List[bs4_element.PageElement] = []
    for child in soup.contents:
        if child is not root:
            contents.append(child)
            continue
        for section in root.contents:
            if isinstance(section, bs4_element.Tag) and section.name in _SECTION_TAGS:
                contents.extend(section.contents)
            else:
                contents.append(section)
    return contents


def parse_fragment(html: Optional[str], *, parser: Optional[str] = None) -> Optional[Tuple[Node, ...]]:
    """
    Parse a markup fragment into its top-level nodes.

    Backends that synthesize ``<html>``/``<head>``/``<body>`` wrappers around fragments have
    them dissolved again, so no node is lost to the head section.
    """
    if html is None:
        return None

    backend = parser or settings.parser.backend
    soup = _make_soup(html, backend)
    return _children(_fragment_contents(soup, backend))


def select_css(markup: Union[str, bs4_element.Tag], css: str, *, parser: Optional[str] = None) -> List[Node]:
    """Select with BeautifulSoup's own CSS engine and convert the hits.

    This is a pass-through for full CSS syntax; the selectors in ``chisel.selectors`` only
    understand the reduced ``tag#id.class`` grammar.
    """
    soup = _make_soup(markup, parser) if isinstance(markup, str) else markup
    return list(to_tree(soup.select(css)))
