"""
Name resolution for documented declarations.

``NameResolver`` climbs from a function node through its ancestors (recorded
by the TreeWalker in a ``ParentMap``) to synthesize a qualified name such as
``Lib.Collection#each``. ``parse_name`` then decomposes that name, applying the
``@global``, ``@memberOf`` and ``@instance`` tag overrides.
"""

import logging
import re
from typing import Any, Optional, Set

from .doctags import get_tag_description, has_tag
from .models import Doclet, NameInfo
from .treesitter.node_kinds import FUNCTION_DECLARATION_KINDS, FUNCTION_EXPRESSION_KINDS, IDENTIFIER_KINDS
from .treesitter.parser import node_text
from .treesitter.walker import ParentMap
from .utils import to_identifier

logger = logging.getLogger(__name__)

_SPLIT_RE = re.compile(r"[.#]")

ASSIGNMENT_KINDS = frozenset({"assignment_expression", "augmented_assignment_expression"})
MEMBER_KINDS = frozenset({"member_expression", "subscript_expression"})
STRING_KINDS = frozenset({"string", "template_string"})


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def _join(left: Optional[str], right: Optional[str]) -> Optional[str]:
    if not right:
        return left
    if not left:
        return right
    return f"{left}.{right}"


class NameResolver:
    """
    Resolves the qualified name of a function node.

    Each resolution carries its own visited-node set. Reaching a node twice
    (one node can be reached through more than one structural path) makes the
    resolution return None instead of looping.
    """

    def __init__(self, parents: ParentMap):
        self.parents = parents

    def resolve(self, node: Any, visited: Optional[Set[Any]] = None) -> Optional[str]:
        visited = set() if visited is None else visited
        name = self._climb(node, visited)
        if not name:
            return None
        return name.replace(".prototype.", "#", 1)

    def _climb(self, node: Any, visited: Set[Any]) -> Optional[str]:
        if node is None:
            return None
        if node in visited:
            logger.debug(f"Revisited {node.type} at line {node.start_point[0] + 1} while resolving a name")
            return None
        visited.add(node)

        kind = node.type
        parent = self.parents.get(node)

        if kind in IDENTIFIER_KINDS:
            return node_text(node)
        if kind in FUNCTION_DECLARATION_KINDS or kind == "class_declaration":
            return node_text(node.child_by_field_name("name")) or None
        if kind == "method_definition":
            return self._member_of(parent, node.child_by_field_name("name"), node, visited)
        if kind == "field_definition":
            return self._member_of(parent, node.child_by_field_name("property"), node, visited)
        if kind in FUNCTION_EXPRESSION_KINDS:
            return self._climb(parent, visited)
        if kind in ASSIGNMENT_KINDS:
            return self.qualified(node.child_by_field_name("left"), visited)
        if kind == "variable_declarator":
            return self.qualified(node.child_by_field_name("name"), visited)
        if kind == "pair":
            key = self._key(node.child_by_field_name("key"))
            owner = self._climb(parent, visited)
            return f"{owner}.{key}" if owner and key else None
        if kind in MEMBER_KINDS:
            if parent is None or parent.type not in ASSIGNMENT_KINDS:
                return None
            return self.qualified(node, visited)
        if kind == "expression_statement":
            expressions = [child for child in node.named_children if child.type != "comment"]
            return self._climb(expressions[0] if expressions else None, visited)
        return self._climb(parent, visited)

    def _member_of(self, container: Any, key_node: Any, node: Any, visited: Set[Any]) -> Optional[str]:
        """Names a class or object-literal member: ``Class#m``, ``Class.m`` (static) or ``obj.m``."""
        key = self._key(key_node)
        if container is None or not key:
            return None
        if container.type == "class_body":
            owner = self._climb(self.parents.get(container), visited)
            if not owner:
                return None
            if key == "constructor" and node.type == "method_definition":
                return owner
            static = any(child.type == "static" for child in node.children)
            return f"{owner}{'.' if static else '#'}{key}"
        owner = self._climb(container, visited)
        return f"{owner}.{key}" if owner else None

    def _key(self, key_node: Any) -> Optional[str]:
        if key_node is None:
            return None
        if key_node.type in STRING_KINDS:
            return _strip_quotes(node_text(key_node))
        if key_node.type == "computed_property_name":
            inner = key_node.named_children[0] if key_node.named_children else None
            return self._key(inner) if inner is not None and inner.type in STRING_KINDS else None
        return node_text(key_node)

    def qualified(self, node: Any, visited: Optional[Set[Any]] = None) -> Optional[str]:
        """
        Builds a dotted name downward from an assignment target, e.g.
        ``Foo.prototype.bar`` or ``exports['baz']``. ``this`` contributes nothing.
        """
        if node is None:
            return None
        if visited is not None:
            visited.add(node)
        kind = node.type
        if kind in IDENTIFIER_KINDS:
            return node_text(node)
        if kind == "this":
            return None
        if kind == "member_expression":
            return _join(
                self.qualified(node.child_by_field_name("object"), visited),
                node_text(node.child_by_field_name("property")),
            )
        if kind == "subscript_expression":
            index = node.child_by_field_name("index")
            key = self._key(index) if index is not None and index.type in STRING_KINDS else node_text(index)
            return _join(self.qualified(node.child_by_field_name("object"), visited), key)
        if kind == "parenthesized_expression" and node.named_children:
            return self.qualified(node.named_children[0], visited)
        return None


def resolve_name(node: Any, parents: ParentMap, visited: Optional[Set[Any]] = None) -> Optional[str]:
    """Resolves ``node``'s qualified name; see ``NameResolver``."""
    return NameResolver(parents).resolve(node, visited)


def parse_name(name: str, doc: Optional[Doclet] = None) -> NameInfo:
    """
    Decomposes a qualified name into its parts.

    >>> parse_name('Foo.prototype.bar').name
    'Foo#bar'
    >>> parse_name('Lib.utils.func').namespace
    'Lib.utils'
    >>> parse_name('Foo').namespace is None
    True
    """
    parts = _SPLIT_RE.split(name)
    short_name = parts.pop()
    namespace: Optional[str] = ".".join(part for part in parts if part != "prototype") or None
    # Only the segment right before the short name decides instance vs static.
    instance = name.endswith(f"#{short_name}") or (bool(parts) and parts[-1] == "prototype")
    qualified = f"{namespace}{'#' if instance else '.'}{short_name}" if namespace else short_name
    long_name = name.replace("#", ".prototype.")

    if doc is not None:
        if has_tag(doc, "global"):
            namespace = None
            qualified = short_name
        elif has_tag(doc, "memberOf"):
            namespace = get_tag_description(doc, "memberOf").strip() or None
            separator = "#" if has_tag(doc, "instance") else "."
            qualified = f"{namespace}{separator}{short_name}" if namespace else short_name

    return NameInfo(
        name=qualified,
        short_name=short_name,
        long_name=long_name,
        namespace=namespace,
        identifier=to_identifier(qualified),
    )
