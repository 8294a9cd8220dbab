"""
Generic depth-first traversal over a syntax tree.

The walker never mutates the nodes it visits. Parent references are recorded
in a ``ParentMap`` side table that lives only as long as the caller keeps it,
so the tree itself never holds a back edge.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence

from ..errors import UnknownNodeKindError
from .node_kinds import JAVASCRIPT_CHILDREN


class Visit(Enum):
    CONTINUE = "continue"
    SKIP = "skip"  # do not descend into this node's subtree
    HALT = "halt"  # stop the whole walk


class ParentMap:
    """Non-owning node -> parent association filled in during a walk."""

    def __init__(self) -> None:
        self._parents: Dict[Any, Any] = {}

    def assign(self, child: Any, parent: Any) -> None:
        if child in self._parents:
            return
        self._parents[child] = parent

    def get(self, node: Any) -> Optional[Any]:
        if node is None:
            return None
        return self._parents.get(node)

    def ancestors(self, node: Any) -> Iterator[Any]:
        parent = self.get(node)
        while parent is not None:
            yield parent
            parent = self.get(parent)

    def __contains__(self, node: Any) -> bool:
        return node in self._parents

    def __len__(self) -> int:
        return len(self._parents)


def describe_node(node: Any) -> str:
    """Short ``kind (field:kind, ...)`` description used in error messages."""
    kind = getattr(node, "type", type(node).__name__)
    parts = []
    children = getattr(node, "children", None) or []
    for index, child in enumerate(children):
        if not getattr(child, "is_named", True):
            continue
        field_name = None
        field_for_child = getattr(node, "field_name_for_child", None)
        if callable(field_for_child):
            field_name = field_for_child(index)
        child_kind = getattr(child, "type", "?")
        parts.append(f"{field_name}:{child_kind}" if field_name else child_kind)
    return f"{kind} ({', '.join(parts)})"


class TreeWalker:
    """
    Walks a tree pre-order using a per-kind children lookup table.

    ``table`` maps each node kind to a callable returning that node's ordered
    child slots; ``None`` slots are skipped. Nodes whose kind is absent from
    the table raise ``UnknownNodeKindError``.
    """

    def __init__(self, table: Optional[Mapping[str, Callable[[Any], Sequence[Any]]]] = None):
        self.table = table if table is not None else JAVASCRIPT_CHILDREN

    def children_of(self, node: Any) -> Sequence[Any]:
        slots = self.table.get(node.type)
        if slots is None:
            raise UnknownNodeKindError(node.type, describe_node(node))
        return [child for child in slots(node) if child is not None]

    def walk(
        self,
        root: Any,
        visit: Optional[Callable[[Any], Optional[Visit]]] = None,
        parents: Optional[ParentMap] = None,
    ) -> ParentMap:
        parents = parents if parents is not None else ParentMap()
        stack = [root]
        while stack:
            node = stack.pop()
            children = self.children_of(node)
            action = visit(node) if visit else None
            if action is Visit.HALT:
                break
            if action is Visit.SKIP:
                continue
            for child in children:
                parents.assign(child, node)
            stack.extend(reversed(children))
        return parents


def walk(root: Any, visit: Optional[Callable[[Any], Optional[Visit]]] = None, table=None) -> ParentMap:
    return TreeWalker(table).walk(root, visit)
