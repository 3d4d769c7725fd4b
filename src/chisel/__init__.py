"""
chisel - structured record extraction from parsed HTML.

Pipeline:
1. Parse markup with BeautifulSoup into an immutable node tree
2. Walk the tree in document order with a ``Location`` cursor
3. Match locations with composable selectors (or ``tag#id.class`` chains)
4. Map selections to values with extractors, as scalars, lists or keyed records

    >>> tree = parse_fragment('<ul><li class="item">1</li><li class="item">2</li></ul>')
    >>> extract(tree, [], ".item", text)
    ['1', '2']
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import ChiselConfig, settings
from .engine import Engine
from .exceptions import ChiselError, ExtractionError, ExtractionIndexError, SelectionIndexError, SelectorSyntaxError
from .extraction import (
    Extractor,
    attr,
    attrs,
    compose,
    extract,
    extract_from,
    node,
    nth,
    run_all_on,
    run_on,
    tag,
    text,
)
from .selectors import (
    DEFAULT_CACHE,
    Selector,
    SelectorCache,
    all_of,
    ancestor_chain,
    any_node,
    any_of,
    attr_equals,
    class_includes,
    compile_selector,
    has_attr,
    id_equals,
    is_root,
    iter_select,
    negate,
    node_type,
    select,
    select_first,
    tag_equals,
)
from .tree import (
    Comment,
    Document,
    DocumentType,
    Element,
    Location,
    Node,
    NodeType,
    Text,
    parse,
    parse_fragment,
    select_css,
    to_tree,
)

__all__ = [
    "__version__",
    "ChiselConfig",
    "settings",
    "Engine",
    "ChiselError",
    "ExtractionError",
    "ExtractionIndexError",
    "SelectionIndexError",
    "SelectorSyntaxError",
    "Extractor",
    "attr",
    "attrs",
    "compose",
    "extract",
    "extract_from",
    "node",
    "nth",
    "run_all_on",
    "run_on",
    "tag",
    "text",
    "DEFAULT_CACHE",
    "Selector",
    "SelectorCache",
    "all_of",
    "ancestor_chain",
    "any_node",
    "any_of",
    "attr_equals",
    "class_includes",
    "compile_selector",
    "has_attr",
    "id_equals",
    "is_root",
    "iter_select",
    "negate",
    "node_type",
    "select",
    "select_first",
    "tag_equals",
    "Comment",
    "Document",
    "DocumentType",
    "Element",
    "Location",
    "Node",
    "NodeType",
    "Text",
    "parse",
    "parse_fragment",
    "select_css",
    "to_tree",
]
