"""
Extraction: extractors over selections and the ``extract``/``extract_from`` entry points.
"""

from .extractors import (
    Extractor,
    attr,
    attr_of,
    attrs,
    attrs_of,
    compose,
    node,
    node_of,
    nth,
    nth_of,
    tag,
    tag_of,
    text,
    text_of,
)
from .pipeline import extract, extract_from, run_all_on, run_on

__all__ = [
    "Extractor",
    "attr",
    "attr_of",
    "attrs",
    "attrs_of",
    "compose",
    "extract",
    "extract_from",
    "node",
    "node_of",
    "nth",
    "nth_of",
    "run_all_on",
    "run_on",
    "tag",
    "tag_of",
    "text",
    "text_of",
]
