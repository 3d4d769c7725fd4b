"""
Unit tests for the canonical node model.
"""

import dataclasses

import pytest
from chisel.tree.nodes import (
    Comment,
    Document,
    DocumentType,
    Element,
    NodeType,
    Text,
    attribute_of,
    children_of,
    is_branch,
    with_children,
)


class TestNodeModel:
    """Test the node variants and their helpers."""

    def test_node_types(self):
        """Every variant carries its discriminator."""
        assert Document().type is NodeType.DOCUMENT
        assert Element("div").type is NodeType.ELEMENT
        assert DocumentType().type is NodeType.DOCUMENT_TYPE
        assert Comment("c").type is NodeType.COMMENT
        assert Text("t").type is NodeType.TEXT

    def test_nodes_are_immutable(self):
        """Nodes cannot be modified after construction."""
        element = Element("div", {"id": "a"}, (Text("x"),))
        with pytest.raises(dataclasses.FrozenInstanceError):
            element.tag = "span"

    def test_structural_equality(self):
        """Equal structure means equal nodes."""
        assert Element("p", None, (Text("x"),)) == Element("p", None, (Text("x"),))
        assert Element("p", None, (Text("x"),)) != Element("p", None, (Text("y"),))

    def test_branches_and_leaves(self):
        """Only documents and elements hold children."""
        assert is_branch(Document())
        assert is_branch(Element("div"))
        assert not is_branch(Text("x"))
        assert not is_branch(Comment("x"))
        assert not is_branch(DocumentType())
        assert children_of(Text("x")) == ()
        assert children_of(Element("div", None, (Text("x"),))) == (Text("x"),)

    def test_with_children_shares_structure(self):
        """Rebuilding a container reuses the given children by reference."""
        kept = Element("span")
        original = Element("div", {"id": "a"}, (kept,))
        rebuilt = with_children(original, (kept, Text("new")))

        assert rebuilt.tag == "div"
        assert rebuilt.attributes is original.attributes
        assert rebuilt.children[0] is kept
        assert original.children == (kept,)

    def test_with_children_rejects_leaves(self):
        """Leaves cannot be given children."""
        with pytest.raises(TypeError):
            with_children(Text("x"), ())

    def test_attribute_lookup_treats_missing_and_empty_alike(self):
        """None and an empty mapping both mean no attributes."""
        assert attribute_of(Element("a", None), "href") is None
        assert attribute_of(Element("a", {}), "href") is None
        assert attribute_of(Element("a", {"href": "/x"}), "href") == "/x"
        assert attribute_of(Text("x"), "href") is None
