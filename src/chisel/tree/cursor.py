"""
Cursor over an immutable tree.

A ``Location`` points at one node and remembers how it was reached: the parent node, the
sibling tuple and the index within it, and the parent's own crumb. Moving never copies
siblings, so scanning a tree in document order is linear in its size.

Edits (``replace``/``edit``) only mark the location as changed. The new tree is built lazily
on the way back up: each ``up`` from a changed location rebuilds exactly one ancestor, reusing
every untouched sibling subtree by reference.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Tuple

from .nodes import Node, children_of, is_branch, with_children


@dataclass(slots=True, frozen=True)
class _Crumb:
    """Breadcrumb left behind when moving down into a container."""

    parent: Node
    siblings: Tuple[Node, ...]
    index: int
    up: Optional["_Crumb"]
    parent_changed: bool


@dataclass(slots=True, frozen=True, eq=False)
class Location:
    """A read-only position within a tree."""

    node: Node
    crumb: Optional[_Crumb] = None
    changed: bool = False
    at_end: bool = False

    @classmethod
    def of(cls, root: Node) -> "Location":
        """Root location of the tree ``root``."""
        return cls(node=root)

    def __repr__(self) -> str:
        state = " end" if self.at_end else ""
        return f"<Location depth={self.depth} node={self.node!r}{state}>"

    # --- Inspection -------------------------------------------------------

    @property
    def is_root(self) -> bool:
        return self.crumb is None

    @property
    def is_branch(self) -> bool:
        return is_branch(self.node)

    @property
    def depth(self) -> int:
        depth = 0
        crumb = self.crumb
        while crumb is not None:
            depth += 1
            crumb = crumb.up
        return depth

    @property
    def path(self) -> List[Node]:
        """Ancestor nodes, outermost first."""
        nodes: List[Node] = []
        crumb = self.crumb
        while crumb is not None:
            nodes.append(crumb.parent)
            crumb = crumb.up
        nodes.reverse()
        return nodes

    def children(self) -> Tuple[Node, ...]:
        return children_of(self.node)

    def ancestors(self) -> Iterator["Location"]:
        """Strict ancestors, nearest first."""
        loc = self.up()
        while loc is not None:
            yield loc
            loc = loc.up()

    # --- Movement ---------------------------------------------------------

    def _siblings(self, crumb: _Crumb) -> Tuple[Node, ...]:
        if not self.changed:
            return crumb.siblings
        i = crumb.index
        return crumb.siblings[:i] + (self.node,) + crumb.siblings[i + 1 :]

    def _sibling(self, crumb: _Crumb, index: int) -> "Location":
        siblings = self._siblings(crumb)
        return Location(
            node=siblings[index],
            crumb=_Crumb(crumb.parent, siblings, index, crumb.up, crumb.parent_changed),
            changed=self.changed,
        )

    def down(self) -> Optional["Location"]:
        """First child, or ``None`` when there are no children."""
        children = children_of(self.node)
        if not children:
            return None
        return Location(node=children[0], crumb=_Crumb(self.node, children, 0, self.crumb, self.changed))

    def right(self) -> Optional["Location"]:
        """Next sibling, or ``None`` at the last child or at the root."""
        crumb = self.crumb
        if crumb is None or crumb.index + 1 >= len(crumb.siblings):
            return None
        return self._sibling(crumb, crumb.index + 1)

    def left(self) -> Optional["Location"]:
        """Previous sibling, or ``None`` at the first child or at the root."""
        crumb = self.crumb
        if crumb is None or crumb.index == 0:
            return None
        return self._sibling(crumb, crumb.index - 1)

    def up(self) -> Optional["Location"]:
        """Parent, rebuilt when anything below it changed; ``None`` at the root."""
        crumb = self.crumb
        if crumb is None:
            return None
        if self.changed:
            parent = with_children(crumb.parent, self._siblings(crumb))
            return Location(node=parent, crumb=crumb.up, changed=True)
        return Location(node=crumb.parent, crumb=crumb.up, changed=crumb.parent_changed)

    def next(self) -> "Location":
        """
        Next location in document order (preorder, depth first, left to right).

        Past the last node this returns an end location holding the root; calling ``next``
        on an end location returns it unchanged.
        """
        if self.at_end:
            return self

        if self.is_branch:
            child = self.down()
            if child is not None:
                return child

        sibling = self.right()
        if sibling is not None:
            return sibling

        loc = self
        while True:
            parent = loc.up()
            if parent is None:
                return Location(node=loc.node, changed=loc.changed, at_end=True)
            sibling = parent.right()
            if sibling is not None:
                return sibling
            loc = parent

    # --- Editing ----------------------------------------------------------

    def replace(self, node: Node) -> "Location":
        """Same position holding ``node`` instead."""
        return Location(node=node, crumb=self.crumb, changed=True)

    def edit(self, fn: Callable[..., Node], *args: Any) -> "Location":
        """Same position holding ``fn(node, *args)``."""
        return self.replace(fn(self.node, *args))

    def root(self) -> Node:
        """Walk back to the root, rebuilding edited ancestors, and return the root node."""
        if self.at_end:
            return self.node
        loc = self
        while True:
            parent = loc.up()
            if parent is None:
                return loc.node
            loc = parent


def iter_document_order(root: Node) -> Iterator[Location]:
    """Every location of ``root`` in document order."""
    loc = Location.of(root)
    while not loc.at_end:
        yield loc
        loc = loc.next()
