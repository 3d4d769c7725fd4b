"""
Immutable markup trees: the node model, conversion from BeautifulSoup, and the cursor used to
walk them in document order.
"""

from .converter import parse, parse_fragment, select_css, to_attribute, to_attributes, to_tree
from .cursor import Location, iter_document_order
from .nodes import (
    Comment,
    Document,
    DocumentType,
    Element,
    Node,
    NodeType,
    Text,
    attribute_of,
    children_of,
    is_branch,
    with_children,
)

__all__ = [
    "Comment",
    "Document",
    "DocumentType",
    "Element",
    "Node",
    "NodeType",
    "Text",
    "attribute_of",
    "children_of",
    "is_branch",
    "with_children",
    "Location",
    "iter_document_order",
    "parse",
    "parse_fragment",
    "select_css",
    "to_attribute",
    "to_attributes",
    "to_tree",
]
