"""
Selection: scan trees in document order and collect the nodes a selector matches.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Union

import structlog

from ..tree.cursor import Location, iter_document_order
from ..tree.nodes import NODE_TYPES, Node
from .compiler import SelectorCache, SelectorLike, compile_selector

logger = structlog.get_logger(__name__)

Source = Union[Node, Iterable[Node], None]


def _trees(source: Source) -> Iterator[Node]:
    if source is None:
        return
    if isinstance(source, NODE_TYPES):
        yield source
        return
    for tree in source:
        if tree is not None:
            yield tree


def select_locations(
    selector: SelectorLike, source: Source, *, cache: Optional[SelectorCache] = None
) -> Iterator[Location]:
    """
    Lazily yield every matching location.

    A sequence of trees is scanned member by member, in order; each member is the root of
    its own scan.
    """
    predicate = compile_selector(selector, cache)
    for tree in _trees(source):
        for loc in iter_document_order(tree):
            if predicate(loc):
                yield loc


def iter_select(selector: SelectorLike, source: Source, *, cache: Optional[SelectorCache] = None) -> Iterator[Node]:
    """Lazily yield matching nodes in document order."""
    for loc in select_locations(selector, source, cache=cache):
        yield loc.node


def select(selector: SelectorLike, source: Source, *, cache: Optional[SelectorCache] = None) -> List[Node]:
    """
    Select every node of ``source`` matched by ``selector``.

    Args:
        selector: Textual chain (``"div .item"``), sequence of tokens/callables, or a selector
        source: A tree, a sequence of trees (such as a previous selection), or None
        cache: Compiled-selector cache, defaults to the process-wide one

    Returns:
        Matched nodes in document order; each position appears at most once

    Raises:
        SelectorSyntaxError: If textual selector text is malformed (before any traversal)
    """
    # Raises on malformed text even when the source is empty.
    predicate = compile_selector(selector, cache)
    matches = list(iter_select(predicate, source, cache=cache))
    logger.debug("Selection complete", selector=predicate, matches=len(matches))
    return matches


def select_first(selector: SelectorLike, source: Source, *, cache: Optional[SelectorCache] = None) -> Optional[Node]:
    """First matching node in document order, or ``None``."""
    return next(iter_select(selector, source, cache=cache), None)
