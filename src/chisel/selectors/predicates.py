"""
Selector algebra: predicates over a ``Location`` and the combinators that build new ones.

Every constructor returns a ``Selector``, a named callable ``Location -> bool``. Selectors are
stateless values; they can be stored, combined and reused across any number of trees.

    >>> links = all_of(tag_equals("a"), has_attr("href"))
    >>> nav_links = ancestor_chain(id_equals("nav"), links)
    >>> external = nav_links & ~class_includes("internal")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..tree.cursor import Location
from ..tree.nodes import NodeType, attribute_of

Predicate = Callable[[Location], bool]


@dataclass(frozen=True, eq=False)
class Selector:
    """A named predicate over a location."""

    predicate: Predicate
    name: str

    def __call__(self, loc: Location) -> bool:
        return bool(self.predicate(loc))

    def __invert__(self) -> "Selector":
        return negate(self)

    def __and__(self, other: Any) -> "Selector":
        return all_of(self, other)

    def __or__(self, other: Any) -> "Selector":
        return any_of(self, other)

    def __repr__(self) -> str:
        return f"Selector({self.name})"


def as_selector(obj: Any) -> Selector:
    """Wrap a plain ``Location -> bool`` callable; selectors pass through untouched."""
    if isinstance(obj, Selector):
        return obj
    if callable(obj):
        return Selector(obj, getattr(obj, "__name__", repr(obj)))
    raise TypeError(f"Expected a selector or callable, got {type(obj).__name__}")


# --- Predicates -----------------------------------------------------------


def any_node() -> Selector:
    """Matches every location."""
    return Selector(lambda loc: True, "any")


def is_root() -> Selector:
    """Matches only the root of the tree being scanned."""
    return Selector(lambda loc: loc.is_root, "root")


def node_type(*types: NodeType) -> Selector:
    """Matches nodes of any of the given kinds."""
    wanted = frozenset(types)
    return Selector(
        lambda loc: getattr(loc.node, "type", None) in wanted,
        f"type({', '.join(t.value for t in types)})",
    )


def tag_equals(name: str) -> Selector:
    """Matches elements whose tag is ``name`` (case-insensitive)."""
    wanted = name.lower()
    return Selector(lambda loc: getattr(loc.node, "tag", None) == wanted, f"tag={wanted}")


def attr_equals(attr: str, value: str) -> Selector:
    """Matches nodes whose attribute ``attr`` is exactly ``value``."""
    key = attr.lower()

    def predicate(loc: Location) -> bool:
        actual = attribute_of(loc.node, key)
        return actual is not None and actual == value

    return Selector(predicate, f"[{key}={value!r}]")


def has_attr(attr: str) -> Selector:
    """Matches nodes carrying attribute ``attr``, whatever its value."""
    key = attr.lower()
    return Selector(lambda loc: attribute_of(loc.node, key) is not None, f"[{key}]")


def id_equals(element_id: str) -> Selector:
    """Matches nodes whose ``id`` is ``element_id``."""
    return Selector(attr_equals("id", element_id).predicate, f"#{element_id}")


def class_includes(*classes: str) -> Selector:
    """Matches nodes whose ``class`` attribute contains every one of ``classes``."""
    wanted = frozenset(classes)

    def predicate(loc: Location) -> bool:
        value = attribute_of(loc.node, "class")
        present = frozenset(value.split()) if value else frozenset()
        return wanted <= present

    return Selector(predicate, "".join(f".{c}" for c in classes) or ".*")


# --- Combinators ----------------------------------------------------------


def negate(selector: Any) -> Selector:
    """Matches where ``selector`` does not."""
    inner = as_selector(selector)
    return Selector(lambda loc: not inner(loc), f"not({inner.name})")


def all_of(*selectors: Any) -> Selector:
    """Matches where every selector matches; stops at the first miss."""
    parts = tuple(as_selector(s) for s in selectors)
    return Selector(
        lambda loc: all(part(loc) for part in parts),
        f"all({', '.join(p.name for p in parts)})",
    )


def any_of(*selectors: Any) -> Selector:
    """Matches where at least one selector matches; stops at the first hit."""
    parts = tuple(as_selector(s) for s in selectors)
    return Selector(
        lambda loc: any(part(loc) for part in parts),
        f"any({', '.join(p.name for p in parts)})",
    )


def ancestor_chain(*selectors: Any) -> Selector:
    """
    Descendant chaining: ``ancestor_chain(a, b, c)`` matches a location satisfying ``c``
    that has an ancestor satisfying ``b``, which in turn has an ancestor satisfying ``a``.

    Each link may be satisfied at any depth, not only by the immediate parent. Links are
    matched against the nearest qualifying ancestor first.
    """
    parts = tuple(as_selector(s) for s in selectors)
    if not parts:
        return any_node()
    if len(parts) == 1:
        return parts[0]

    *outer, last = parts
    outer.reverse()

    def predicate(loc: Location) -> bool:
        if not last(loc):
            return False
        current = loc
        for part in outer:
            current = current.up()
            while current is not None and not part(current):
                current = current.up()
            if current is None:
                return False
        return True

    return Selector(predicate, " ".join(p.name for p in parts))
