"""
Extractors turn a selection into caller-facing values.

A selection has one of three shapes:

- leaf text:     a ``Text`` node (or a plain ``str``)
- element-like:  a ``Document``, ``Element``, ``DocumentType`` or ``Comment``
- sequence:      a ``list``/``tuple`` of the above, e.g. a multi-match selection

Every primitive below has one registration per shape, so the single-versus-many duality
carries through composition: ``text`` applied to one node gives a string, applied to a
sequence gives a list of strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce, singledispatch
from typing import Any, Callable, List, Optional, Sequence, Union

from ..exceptions import SelectionIndexError
from ..tree.nodes import BRANCH_TYPES, Comment, Document, DocumentType, Element, Node, Text, attribute_of

Selection = Union[Node, str, Sequence[Node]]

_MISSING = object()
_ELEMENT_LIKE = (Document, Element, DocumentType, Comment)


def _unsupported(selection: Any) -> TypeError:
    return TypeError(f"Cannot extract from {type(selection).__name__}; expected a node or a sequence of nodes")


def _text_content(root: Node) -> str:
    """Descendant text in document order; comments contribute nothing."""
    parts: List[str] = []
    stack: List[Node] = [root]
    while stack:
        current = stack.pop()
        if isinstance(current, Text):
            parts.append(current.text)
        elif isinstance(current, BRANCH_TYPES):
            stack.extend(reversed(current.children))
    return "".join(parts)


# --- node -----------------------------------------------------------------


@singledispatch
def node_of(selection: Any) -> Any:
    raise _unsupported(selection)


@node_of.register(str)
@node_of.register(Text)
def _(selection: Union[str, Text]) -> Union[str, Text]:
    return selection


@node_of.register(list)
@node_of.register(tuple)
def _(selection: Sequence[Node]) -> List[Any]:
    return [node_of(item) for item in selection]


# --- tag ------------------------------------------------------------------


@singledispatch
def tag_of(selection: Any) -> Any:
    raise _unsupported(selection)


@tag_of.register(str)
@tag_of.register(Text)
def _(selection: Union[str, Text]) -> None:
    return None


@tag_of.register(list)
@tag_of.register(tuple)
def _(selection: Sequence[Node]) -> List[Optional[str]]:
    return [tag_of(item) for item in selection]


# --- attr -----------------------------------------------------------------


@singledispatch
def attr_of(selection: Any, name: str) -> Any:
    raise _unsupported(selection)


@attr_of.register(str)
@attr_of.register(Text)
def _(selection: Union[str, Text], name: str) -> None:
    return None


@attr_of.register(list)
@attr_of.register(tuple)
def _(selection: Sequence[Node], name: str) -> List[Optional[str]]:
    return [attr_of(item, name) for item in selection]


# --- attrs ----------------------------------------------------------------


@singledispatch
def attrs_of(selection: Any) -> Any:
    raise _unsupported(selection)


@attrs_of.register(str)
@attrs_of.register(Text)
def _(selection: Union[str, Text]) -> None:
    return None


@attrs_of.register(list)
@attrs_of.register(tuple)
def _(selection: Sequence[Node]) -> List[Any]:
    return [attrs_of(item) for item in selection]


# --- text -----------------------------------------------------------------


@singledispatch
def text_of(selection: Any) -> Any:
    raise _unsupported(selection)


@text_of.register(str)
def _(selection: str) -> str:
    return selection


@text_of.register(Text)
def _(selection: Text) -> str:
    return selection.text


@text_of.register(list)
@text_of.register(tuple)
def _(selection: Sequence[Node]) -> List[str]:
    return [text_of(item) for item in selection]


# --- nth ------------------------------------------------------------------


@singledispatch
def nth_of(selection: Any, index: int, strict: bool = False) -> Any:
    raise _unsupported(selection)


@nth_of.register(list)
@nth_of.register(tuple)
def _(selection: Sequence[Node], index: int, strict: bool = False) -> Any:
    if not 0 <= index < len(selection):
        raise SelectionIndexError(f"Index {index} is out of range for a selection of {len(selection)}")
    return selection[index]


def _register_element_like() -> None:
    for kind in _ELEMENT_LIKE:
        node_of.register(kind, lambda selection: selection)
        tag_of.register(kind, lambda selection: getattr(selection, "tag", None))
        attr_of.register(kind, lambda selection, name: attribute_of(selection, name.lower()))
        attrs_of.register(kind, lambda selection: getattr(selection, "attributes", None) or None)
        text_of.register(kind, _text_content)


def _single_nth(selection: Any, index: int, strict: bool = False) -> Any:
    if strict:
        raise TypeError(f"nth({index}) needs a sequence, got a single {type(selection).__name__}")
    return selection


_register_element_like()
for _kind in (str, Text) + _ELEMENT_LIKE:
    nth_of.register(_kind, _single_nth)


# --- Extractor values -----------------------------------------------------


@dataclass(frozen=True, eq=False)
class Extractor:
    """A named function from a selection to a value."""

    fn: Callable[[Any], Any]
    name: str

    def __call__(self, selection: Any) -> Any:
        return self.fn(selection)

    def then(self, *fns: Callable[[Any], Any]) -> "Extractor":
        """This extractor followed by ``fns``, left to right."""
        return compose(self, *fns)

    def __repr__(self) -> str:
        return f"Extractor({self.name})"


node = Extractor(node_of, "node")
tag = Extractor(tag_of, "tag")
attrs = Extractor(attrs_of, "attrs")
text = Extractor(text_of, "text")


def attr(name: str, selection: Any = _MISSING) -> Any:
    """Value of attribute ``name``.

    ``attr("href")`` builds an extractor; ``attr("href", selection)`` applies it at once.
    """
    extractor = Extractor(lambda s: attr_of(s, name), f"attr({name!r})")
    return extractor if selection is _MISSING else extractor(selection)


def nth(index: int, selection: Any = _MISSING, *, strict: bool = False) -> Any:
    """Member ``index`` of a multi-match selection.

    A single node is returned unchanged unless ``strict`` is set, in which case it is a
    ``TypeError``. An index outside the sequence raises ``SelectionIndexError``.
    """
    extractor = Extractor(lambda s: nth_of(s, index, strict), f"nth({index})")
    return extractor if selection is _MISSING else extractor(selection)


def compose(*fns: Callable[[Any], Any]) -> Extractor:
    """Apply ``fns`` in the order written: ``compose(f, g)(x) == g(f(x))``."""
    name = "compose(" + ", ".join(getattr(f, "name", getattr(f, "__name__", repr(f))) for f in fns) + ")"
    return Extractor(lambda selection: reduce(lambda value, fn: fn(value), fns, selection), name)
