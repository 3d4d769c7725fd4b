"""
Orchestration of selections and extractors.

An *extraction* is a ``(selector, extractor)`` pair. Running one against a source collapses the
selection by size: nothing matched gives ``None``, a single match is handed to the extractor on
its own, and several matches are handed over together as a list. Callers never need to know in
advance whether a selector yields one result or many.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple

import structlog

from ..exceptions import ExtractionError, ExtractionIndexError
from ..selectors.compiler import SelectorCache, SelectorLike, compile_selector
from ..selectors.engine import Source, select

logger = structlog.get_logger(__name__)

Extraction = Tuple[SelectorLike, Callable[[Any], Any]]


def run_on(source: Source, extraction: Extraction, *, cache: Optional[SelectorCache] = None) -> Any:
    """
    Run one extraction against ``source``.

    Returns:
        None for no match, ``extractor(node)`` for one match, ``extractor(nodes)`` otherwise
    """
    selector, extractor = extraction
    selected = select(selector, source, cache=cache)
    if not selected:
        return None
    if len(selected) == 1:
        return extractor(selected[0])
    return extractor(selected)


def _run_each(source: Source, extractions: Sequence[Extraction], cache: Optional[SelectorCache]) -> List[Any]:
    results: List[Any] = []
    failures: List[Tuple[int, BaseException]] = []

    for index, extraction in enumerate(extractions):
        try:
            results.append(run_on(source, extraction, cache=cache))
        except Exception as e:
            logger.warning(
                "Extraction pair failed",
                pair=index,
                selector=extraction[0],
                error=str(e),
                error_type=type(e).__name__,
            )
            failures.append((index, e))
            results.append(None)

    if failures:
        first = failures[0][1]
        index_only = all(isinstance(e, IndexError) for _, e in failures)
        error_class = ExtractionIndexError if index_only else ExtractionError
        raise error_class(
            f"{len(failures)} of {len(extractions)} extraction(s) failed; first: {first!r}",
            failures,
        ) from first
    return results


def run_all_on(source: Source, extractions: Sequence[Extraction], *, cache: Optional[SelectorCache] = None) -> Any:
    """
    Run several extractions, each independently against the same ``source``.

    Returns:
        ``source`` itself when there are no extractions, the bare result for exactly one,
        and a list of results otherwise

    Raises:
        ExtractionError: If any extraction failed; the others still ran. It is an
            ``ExtractionIndexError`` (also an ``IndexError``) when every failure was an
            out-of-range index
    """
    if not extractions:
        return source
    results = _run_each(source, extractions, cache)
    if len(extractions) == 1:
        return results[0]
    return results


def _pairs(raw_extractions: Sequence[Any], cache: Optional[SelectorCache]) -> List[Extraction]:
    """Group flat ``selector, extractor, ...`` arguments and compile every selector."""
    if len(raw_extractions) % 2:
        raise ValueError(
            f"Extractions come in selector/extractor pairs, got {len(raw_extractions)} argument(s)"
        )
    selectors = raw_extractions[0::2]
    extractors = raw_extractions[1::2]
    return [(compile_selector(s, cache), e) for s, e in zip(selectors, extractors)]


def _extract_compiled(
    source: Source, keys: Optional[Sequence[Hashable]], extractions: List[Extraction], cache: Optional[SelectorCache]
) -> Any:
    extracted = run_all_on(source, extractions, cache=cache)
    if not keys:
        return extracted
    if len(extractions) <= 1:
        return {keys[0]: extracted}
    return dict(zip(keys, extracted))


def extract(
    source: Source,
    keys: Optional[Sequence[Hashable]],
    *raw_extractions: Any,
    cache: Optional[SelectorCache] = None,
) -> Any:
    """
    Extract values from ``source``.

    Args:
        source: Tree (or sequence of trees) to extract from
        keys: Record keys; empty for positional results
        *raw_extractions: ``selector, extractor, selector, extractor, ...``
        cache: Compiled-selector cache, defaults to the process-wide one

    Returns:
        With keys, a record mapping keys to results (zipped, shortest wins); without keys,
        the bare result for one extraction or a list of results for several

    Raises:
        ValueError: If the extractions are not in pairs
        SelectorSyntaxError: If a textual selector is malformed (before any traversal)
        ExtractionError: If any extraction failed; ``ExtractionIndexError`` (also an
            ``IndexError``) when every failure was an out-of-range index
    """
    return _extract_compiled(source, keys, _pairs(raw_extractions, cache), cache)


def extract_from(
    source: Source,
    selector: SelectorLike,
    keys: Optional[Sequence[Hashable]],
    *raw_extractions: Any,
    cache: Optional[SelectorCache] = None,
) -> List[Any]:
    """
    Narrow ``source`` with ``selector``, then ``extract`` from every sub-source.

    Useful to pull the same record out of each item of a listing::

        extract_from(tree, ".item", ["title", "link"], "h2", text, "a", attr("href"))

    Returns:
        One result per narrowed sub-source, in document order
    """
    extractions = _pairs(raw_extractions, cache)
    sources = select(selector, source, cache=cache)
    records: List[Any] = []
    for index, sub_source in enumerate(sources):
        with structlog.contextvars.bound_contextvars(record=index):
            records.append(_extract_compiled(sub_source, keys, extractions, cache))
    return records
