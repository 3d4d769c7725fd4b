"""
Exception hierarchy for chisel.

Absent results (no match, missing attribute) are ``None``, never exceptions.
"""

from __future__ import annotations

from typing import List, Tuple


class ChiselError(Exception):
    """Base exception for chisel errors."""

    pass


class SelectorSyntaxError(ChiselError, ValueError):
    """Raised when selector text does not follow the ``tag#id.class`` grammar."""

    def __init__(self, message: str, token: str | None = None) -> None:
        super().__init__(message)
        self.token = token


class SelectionIndexError(ChiselError, IndexError):
    """Raised when ``nth`` addresses a position outside the selection."""

    pass


class ExtractionError(ChiselError):
    """Raised when one or more selector/extractor pairs of an ``extract`` call fail.

    Every pair is still evaluated; ``failures`` lists ``(pair_index, exception)`` for each
    failed pair and the first failure is chained as ``__cause__``.
    """

    def __init__(self, message: str, failures: List[Tuple[int, BaseException]]) -> None:
        super().__init__(message)
        self.failures = failures


class ExtractionIndexError(ExtractionError, IndexError):
    """An ``ExtractionError`` whose failures are all out-of-range ``nth`` indices.

    Callers may catch it either as an extraction failure or as an ``IndexError``.
    """

    pass
