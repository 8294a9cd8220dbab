"""
Tree-sitter language loaders.

These helpers return Tree-sitter Language objects for JavaScript source.
"""

from functools import lru_cache

from tree_sitter import Language

from tree_sitter_javascript import language as js_language


@lru_cache(maxsize=1)
def get_js_language() -> Language:
    return Language(js_language())
