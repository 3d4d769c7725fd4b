"""
Compiler for the reduced textual selector grammar.

A token is ``[tag][#id][.class]*`` with every part optional and the order fixed::

    div             tag only
    #main           id only
    .item.active    classes only
    div#main.a.b    everything

Names are runs of word characters and hyphens, and a tag must start with a letter (or be
``*``). Other CSS syntax such as ``>``, ``[href]`` or ``:first-child`` is a syntax error.

A chain is either a whitespace separated string (``"ul .item a"``) or a sequence whose elements
are token strings or selector callables. Chains of several tokens compile to descendant
chaining through ``ancestor_chain``, outermost token first.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import structlog

from ..config.config import settings
from ..exceptions import SelectorSyntaxError
from .predicates import Selector, all_of, ancestor_chain, any_node, as_selector, class_includes, id_equals, tag_equals

logger = structlog.get_logger(__name__)

_NAME = r"[\w-]+"
_TOKEN_PATTERN = re.compile(
    rf"(?P<tag>\*|[A-Za-z][\w-]*)?(?:#(?P<id>{_NAME}))?(?P<classes>(?:\.{_NAME})*)"
)

ChainElement = Union[str, Selector, Any]
SelectorLike = Union[str, Selector, Sequence[ChainElement], Any]


def compile_token(token: str) -> Selector:
    """
    Compile one ``tag#id.class`` token.

    Raises:
        SelectorSyntaxError: If the token does not follow the grammar
    """
    match = _TOKEN_PATTERN.fullmatch(token)
    if match is None:
        raise SelectorSyntaxError(
            f"Malformed selector token {token!r}: expected [tag][#id][.class]* in that order",
            token=token,
        )

    tag = match.group("tag")
    element_id = match.group("id")
    classes = [c for c in match.group("classes").split(".") if c]

    compiled = all_of(
        tag_equals(tag) if tag and tag != "*" else any_node(),
        id_equals(element_id) if element_id else any_node(),
        class_includes(*classes) if classes else any_node(),
    )
    return Selector(compiled.predicate, token or "*")


def _normalize(selector: SelectorLike) -> Tuple[ChainElement, ...]:
    """Flatten a selector chain into its elements."""
    if isinstance(selector, str):
        return tuple(selector.split())
    if isinstance(selector, Selector) or callable(selector):
        return (selector,)
    if isinstance(selector, (list, tuple)):
        elements: list[ChainElement] = []
        for element in selector:
            if isinstance(element, str):
                elements.extend(element.split())
            elif callable(element):
                elements.append(element)
            else:
                raise SelectorSyntaxError(f"Unsupported selector chain element: {element!r}")
        return tuple(elements)
    raise SelectorSyntaxError(f"Unsupported selector: {selector!r}")


def compile_chain(selector: SelectorLike) -> Selector:
    """Compile a selector chain without consulting any cache."""
    elements = _normalize(selector)
    compiled = [compile_token(e) if isinstance(e, str) else as_selector(e) for e in elements]

    if not compiled:
        return any_node()
    if len(compiled) == 1:
        return compiled[0]
    return ancestor_chain(*compiled)


class SelectorCache:
    """
    Memo of compiled textual selector chains.

    Keys are the tuple of tokens of a chain, so ``"ul  li"`` and ``["ul", "li"]`` share an
    entry. Chains containing callables are compiled on every call and never stored. Entries
    are never invalidated; a compiled chain means the same thing forever.
    """

    def __init__(self, enabled: Optional[bool] = None) -> None:
        self._enabled = enabled
        self._compiled: Dict[Tuple[str, ...], Selector] = {}
        self._hits = 0
        self._misses = 0

    @property
    def enabled(self) -> bool:
        if self._enabled is None:
            return settings.selectors.cache_enabled
        return self._enabled

    def compile(self, selector: SelectorLike) -> Selector:
        """Compile ``selector``, reusing a previous compilation of the same chain."""
        if isinstance(selector, Selector):
            return selector

        elements = _normalize(selector)
        if not self.enabled or not all(isinstance(e, str) for e in elements):
            return compile_chain(elements)

        key: Tuple[str, ...] = elements
        compiled = self._compiled.get(key)
        if compiled is not None:
            self._hits += 1
            return compiled

        self._misses += 1
        compiled = compile_chain(key)
        self._compiled[key] = compiled
        logger.debug("Compiled selector", chain=" ".join(key), cache_size=len(self._compiled))
        return compiled

    def clear(self) -> None:
        """Drop every compiled chain and reset the statistics."""
        self._compiled.clear()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._compiled)

    def __contains__(self, selector: object) -> bool:
        try:
            key = _normalize(selector)
        except SelectorSyntaxError:
            return False
        return key in self._compiled

    def get_stats(self) -> dict:
        """Get cache statistics."""
        lookups = self._hits + self._misses
        return {
            "size": len(self._compiled),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / max(1, lookups),
            "enabled": self.enabled,
        }


DEFAULT_CACHE = SelectorCache()


def compile_selector(selector: SelectorLike, cache: Optional[SelectorCache] = None) -> Selector:
    """Compile ``selector`` through ``cache`` (the process-wide cache by default)."""
    return (cache if cache is not None else DEFAULT_CACHE).compile(selector)
