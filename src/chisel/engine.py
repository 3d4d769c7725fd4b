"""
Engine: an isolated selection/extraction context.

The module-level functions share one process-wide selector cache. An ``Engine`` owns its
own cache and settings instead, so independent engines (or test cases) never observe each
other's compiled selectors.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

import structlog

from .config.config import ChiselConfig, settings
from .extraction.pipeline import Extraction, extract, extract_from, run_on
from .selectors.compiler import SelectorCache, SelectorLike
from .selectors.engine import Source, select
from .tree.converter import parse, parse_fragment
from .tree.nodes import Document, Node

logger = structlog.get_logger(__name__)


class Engine:
    """
    Selection and extraction bound to one selector cache.

    Features:
    - Private compiled-selector cache (``cache``)
    - Parser backend and cache policy taken from a ``ChiselConfig``
    - Call counters and cache statistics via ``get_metrics()``
    """

    def __init__(self, config: Optional[ChiselConfig] = None, cache: Optional[SelectorCache] = None) -> None:
        """
        Initialize the Engine.

        Args:
            config: Settings to use; defaults to the lazily loaded global settings
            cache: Selector cache to use; a fresh one is created by default
        """
        self.config: ChiselConfig = config if config is not None else settings
        self.cache = cache if cache is not None else SelectorCache(enabled=self.config.selectors.cache_enabled)
        self.logger = logger.bind(component="Engine")

        self._metrics: Dict[str, int] = {
            "parses": 0,
            "selections": 0,
            "matches": 0,
            "extractions": 0,
        }

    def parse(self, html: Optional[str]) -> Optional[Document]:
        """Parse a full document with the configured backend."""
        self._metrics["parses"] += 1
        return parse(html, parser=self.config.parser.backend)

    def parse_fragment(self, html: Optional[str]) -> Optional[Tuple[Node, ...]]:
        """Parse a markup fragment with the configured backend."""
        self._metrics["parses"] += 1
        return parse_fragment(html, parser=self.config.parser.backend)

    def select(self, selector: SelectorLike, source: Source) -> List[Node]:
        """Select nodes from ``source``; see ``chisel.selectors.select``."""
        matches = select(selector, source, cache=self.cache)
        self._metrics["selections"] += 1
        self._metrics["matches"] += len(matches)
        return matches

    def run_on(self, source: Source, extraction: Extraction) -> Any:
        """Run one ``(selector, extractor)`` pair; see ``chisel.extraction.run_on``."""
        self._metrics["extractions"] += 1
        return run_on(source, extraction, cache=self.cache)

    def extract(self, source: Source, keys: Optional[Sequence[Hashable]], *raw_extractions: Any) -> Any:
        """Extract from ``source``; see ``chisel.extraction.extract``."""
        self._metrics["extractions"] += 1
        return extract(source, keys, *raw_extractions, cache=self.cache)

    def extract_from(
        self, source: Source, selector: SelectorLike, keys: Optional[Sequence[Hashable]], *raw_extractions: Any
    ) -> List[Any]:
        """Narrow and extract; see ``chisel.extraction.extract_from``."""
        self._metrics["extractions"] += 1
        results = extract_from(source, selector, keys, *raw_extractions, cache=self.cache)
        self.logger.debug("Extracted records", selector=selector, records=len(results))
        return results

    def reset(self) -> None:
        """Clear the selector cache and the counters."""
        self.cache.clear()
        for name in self._metrics:
            self._metrics[name] = 0

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get engine metrics.

        Returns:
            Call counters plus the selector cache statistics under ``"cache"``
        """
        metrics: Dict[str, Any] = dict(self._metrics)
        metrics["cache"] = self.cache.get_stats()
        return metrics
