"""
Indexes function-like declarations by the source line on which they begin.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .treesitter.node_kinds import FUNCTION_KINDS
from .treesitter.parser import node_line, node_text
from .treesitter.walker import ParentMap, TreeWalker, Visit

logger = logging.getLogger(__name__)


@dataclass
class DeclarationIndex:
    """
    The first function-like node found on each 1-based source line, plus the
    parent table built while walking. When several declarations start on one
    line, the first in pre-order traversal wins.
    """
    by_line: Dict[int, Any] = field(default_factory=dict)
    parents: ParentMap = field(default_factory=ParentMap)
    reference_name: Optional[str] = None  # Identifier assigned to module.exports, if any
    shadowed: List[Any] = field(default_factory=list)  # Later declarations that lost a same-line tie

    def get(self, line: int) -> Optional[Any]:
        return self.by_line.get(line)

    def __len__(self) -> int:
        return len(self.by_line)


def index_declarations(root: Any, walker: Optional[TreeWalker] = None) -> DeclarationIndex:
    """
    Walks the tree once, indexing every function-like node and noting any
    ``module.exports = Name`` assignment.

    Raises:
        UnknownNodeKindError: if the tree contains a node kind the walker's
            children table does not classify.
    """
    walker = walker or TreeWalker()
    index = DeclarationIndex()

    def visit(node: Any) -> Visit:
        if node.type in FUNCTION_KINDS:
            line = node_line(node)
            if line in index.by_line:
                index.shadowed.append(node)
            else:
                index.by_line[line] = node
        elif index.reference_name is None and node.type == "assignment_expression":
            index.reference_name = get_exported_name(node)
        return Visit.CONTINUE

    walker.walk(root, visit, index.parents)
    if index.shadowed:
        logger.debug(f"{len(index.shadowed)} declaration(s) share a line with an earlier one and were not indexed")
    logger.debug(f"Indexed {len(index.by_line)} function declaration(s)")
    return index


def get_exported_name(node: Any) -> Optional[str]:
    """
    If ``node`` assigns an identifier to ``module.exports``, returns that
    identifier's name; otherwise None.
    """
    left = node.child_by_field_name("left")
    right = node.child_by_field_name("right")
    if left is None or right is None or left.type != "member_expression":
        return None
    target = left.child_by_field_name("object")
    prop = left.child_by_field_name("property")
    if target is None or target.type != "identifier" or right.type != "identifier":
        return None
    if node_text(target) != "module" or node_text(prop) != "exports":
        return None
    return node_text(right)
