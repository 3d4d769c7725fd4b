"""
Canonical, immutable representation of a parsed markup tree.

A tree is made of five node kinds:

- ``Document``      the root container produced for a full document
- ``Element``       a tag with attributes and children
- ``DocumentType``  the doctype declaration (attributes only)
- ``Comment``       comment data (never contributes text)
- ``Text``          character data, the only leaf carrying content

Tag names and attribute keys are lowercase. An element without attributes stores ``None``
rather than an empty mapping, and containers store their children as a tuple so that
edits can share untouched subtrees by reference.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Mapping, Optional, Tuple, Union


class NodeType(Enum):
    """Discriminator for the node variants."""

    DOCUMENT = "document"
    ELEMENT = "element"
    DOCUMENT_TYPE = "document-type"
    COMMENT = "comment"
    TEXT = "text"


@dataclass(slots=True, frozen=True)
class Text:
    """Character data."""

    text: str

    type: ClassVar[NodeType] = NodeType.TEXT


@dataclass(slots=True, frozen=True)
class Comment:
    """Comment data."""

    text: str

    type: ClassVar[NodeType] = NodeType.COMMENT


@dataclass(slots=True, frozen=True)
class DocumentType:
    """Doctype declaration; ``name``, ``publicid`` and ``systemid`` live in ``attributes``."""

    attributes: Optional[Mapping[str, str]] = None

    type: ClassVar[NodeType] = NodeType.DOCUMENT_TYPE


@dataclass(slots=True, frozen=True)
class Element:
    """A tag with its attributes and child nodes."""

    tag: str
    attributes: Optional[Mapping[str, str]] = None
    children: Tuple["Node", ...] = ()

    type: ClassVar[NodeType] = NodeType.ELEMENT

    def __repr__(self) -> str:
        return f"Element(tag={self.tag!r}, attributes={self.attributes!r}, children=<{len(self.children)}>)"


@dataclass(slots=True, frozen=True)
class Document:
    """Root of a fully parsed document."""

    children: Tuple["Node", ...] = ()

    type: ClassVar[NodeType] = NodeType.DOCUMENT

    def __repr__(self) -> str:
        return f"Document(children=<{len(self.children)}>)"


Node = Union[Document, Element, DocumentType, Comment, Text]

BRANCH_TYPES = (Document, Element)
NODE_TYPES = (Document, Element, DocumentType, Comment, Text)


def is_branch(node: object) -> bool:
    """Whether ``node`` is a container that may hold children."""
    return isinstance(node, BRANCH_TYPES)


def children_of(node: object) -> Tuple[Node, ...]:
    """Children of ``node``; leaves have none."""
    if isinstance(node, BRANCH_TYPES):
        return node.children
    return ()


def with_children(node: Node, children: Tuple[Node, ...]) -> Node:
    """Return a copy of a container node holding ``children``.

    Only the container itself is new: every child is reused by reference.
    """
    if isinstance(node, Element):
        return Element(tag=node.tag, attributes=node.attributes, children=tuple(children))
    if isinstance(node, Document):
        return Document(children=tuple(children))
    raise TypeError(f"{type(node).__name__} cannot hold children")


def attribute_of(node: object, name: str) -> Optional[str]:
    """Value of attribute ``name`` on ``node``, or ``None`` when absent."""
    attributes = getattr(node, "attributes", None)
    if not attributes:
        return None
    return attributes.get(name)
