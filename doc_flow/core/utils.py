"""
Shared utility functions for documentation extraction.

This module contains pure string helpers used across the extraction pipeline
for operations like string escaping, splitting, link rewriting and building
display signatures.
"""

import re
from typing import List, Optional, Sequence

from .models import NameInfo, ParameterInfo


# --- String Helpers ---

def escape_js_string(string: str) -> str:
    """
    Escapes a string so it can be embedded in a quoted JavaScript string literal.

    Args:
        string: Raw text, e.g. an example's actual or expected value

    Returns:
        The text with backslashes, quotes and newlines escaped

    >>> escape_js_string("Hell's Kitchen")
    "Hell\\\\'s Kitchen"
    """
    return (
        string.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace('"', '\\"')
        .replace("\n", "\\n")
    )


def divide(string: str, divider: str) -> List[str]:
    """
    Splits a string into two parts on either side of the first ``divider``.

    Returns a 1-element list containing ``string`` when ``divider`` isn't found.

    >>> divide('a->b->c', '->')
    ['a', 'b->c']
    >>> divide('foo', 'xyz')
    ['foo']
    """
    seam = string.find(divider)
    if seam == -1:
        return [string]
    return [string[:seam], string[seam + len(divider):]]


# --- Links and Identifiers ---

_INTERNAL_LINK_RE = re.compile(r"\{@link ([^\}]*)\}")
_SEPARATOR_RE = re.compile(r"[.#]")


def to_identifier(name: str) -> str:
    """``Foo#bar`` and ``Foo.bar`` both become ``Foo-bar``."""
    return _SEPARATOR_RE.sub("-", name)


def process_internal_links(html: str) -> str:
    """
    Replaces ``{@link Foo#bar}`` with an anchor pointing at the member's identifier.

    >>> process_internal_links('{@link MyClass}')
    '<a href="#MyClass">MyClass</a>'
    """
    return _INTERNAL_LINK_RE.sub(
        lambda match: f'<a href="#{to_identifier(match.group(1))}">{match.group(1)}</a>',
        html,
    )


# --- Signatures ---

def get_signature(name: NameInfo, params: Sequence[ParameterInfo]) -> str:
    """
    Produces a display signature for a function.

    Global functions render as ``function f(a, b) { /*...*/ }``; namespaced ones
    as ``Ns.f = function(a, b) { /*...*/ }``.
    """
    formatted_params = "(" + ", ".join(param.name for param in params) + ")"
    if name.name == name.short_name:
        signature = f"function {name.short_name}{formatted_params}"
    else:
        signature = f"{name.namespace}.{name.short_name} = function{formatted_params}"
    return signature + " { /*...*/ }"


def first_segment(name: Optional[str]) -> Optional[str]:
    """Returns the leading segment of a dotted/hashed name (``Foo`` for ``Foo.bar#baz``)."""
    if not name:
        return None
    return _SEPARATOR_RE.split(name, 1)[0] or None
