"""
Selectors: the predicate algebra, the ``tag#id.class`` compiler and the selection procedure.
"""

from .compiler import DEFAULT_CACHE, SelectorCache, compile_chain, compile_selector, compile_token
from .engine import iter_select, select, select_first, select_locations
from .predicates import (
    Selector,
    all_of,
    ancestor_chain,
    any_node,
    any_of,
    as_selector,
    attr_equals,
    class_includes,
    has_attr,
    id_equals,
    is_root,
    negate,
    node_type,
    tag_equals,
)

__all__ = [
    "DEFAULT_CACHE",
    "Selector",
    "SelectorCache",
    "all_of",
    "ancestor_chain",
    "any_node",
    "any_of",
    "as_selector",
    "attr_equals",
    "class_includes",
    "compile_chain",
    "compile_selector",
    "compile_token",
    "has_attr",
    "id_equals",
    "is_root",
    "iter_select",
    "negate",
    "node_type",
    "select",
    "select_first",
    "select_locations",
    "tag_equals",
]
