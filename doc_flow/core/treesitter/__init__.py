"""
Tree-sitter integration for doc_flow.

Provides language loading, parsing and the generic tree walker.
"""

from .parser import ParsedSource, get_parser, parse_javascript, parse_source
from .languages import get_js_language
from .walker import ParentMap, TreeWalker, Visit, walk

__all__ = [
    "ParsedSource",
    "get_parser",
    "get_js_language",
    "parse_javascript",
    "parse_source",
    "ParentMap",
    "TreeWalker",
    "Visit",
    "walk",
]
