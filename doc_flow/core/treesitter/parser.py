"""
Tree-sitter parser facade with cached parser instances.

``parse_javascript`` is the syntax-parser collaborator used by the rest of
doc_flow: it returns the tree together with every block comment found in it,
each carrying 1-based line numbers and byte ranges.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from tree_sitter import Node, Parser, Tree

from ..models import CommentRecord
from .languages import get_js_language


@lru_cache(maxsize=2)
def get_parser(language_id: str) -> Parser:
    parser = Parser()
    if language_id == "javascript":
        parser.language = get_js_language()
    else:
        raise ValueError(f"Unsupported language: {language_id}")
    return parser


def parse_source(source: str, language_id: str = "javascript") -> Tree:
    parser = get_parser(language_id)
    return parser.parse(bytes(source, "utf-8"))


@dataclass
class ParsedSource:
    """A parsed source file: the raw text, its tree and its block comments."""
    source: str
    tree: Tree
    comments: List[CommentRecord] = field(default_factory=list)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def source_bytes(self) -> bytes:
        return self.source.encode("utf-8")

    def slice(self, start_byte: int, end_byte: int) -> str:
        return self.source_bytes[start_byte:end_byte].decode("utf-8", errors="replace")


def parse_javascript(source: str, language_id: str = "javascript") -> ParsedSource:
    tree = parse_source(source, language_id)
    parsed = ParsedSource(source=source, tree=tree)
    parsed.comments = _collect_comments(tree.root_node, parsed)
    return parsed


def _collect_comments(root: Node, parsed: ParsedSource) -> List[CommentRecord]:
    comments: List[CommentRecord] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            text = parsed.slice(node.start_byte, node.end_byte)
            if text.startswith("/*"):
                comments.append(
                    CommentRecord(
                        text=text,
                        value=_strip_delimiters(text),
                        start_line=node_line(node),
                        end_line=node.end_point[0] + 1,
                        start_byte=node.start_byte,
                        end_byte=node.end_byte,
                    )
                )
            continue
        stack.extend(reversed(node.children))
    comments.sort(key=lambda c: c.start_byte)
    return comments


def _strip_delimiters(text: str) -> str:
    value = text[2:]
    if value.endswith("*/"):
        value = value[:-2]
    return value


def node_line(node: Node) -> int:
    """1-based line on which the node's text begins."""
    return node.start_point[0] + 1


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def is_valid_program(code: str) -> bool:
    """True when ``code`` parses as a sequence of statements without errors."""
    if not code.strip():
        return False
    return not parse_source(code).root_node.has_error


def is_valid_expression(code: str) -> bool:
    """True when ``code`` parses as a single standalone expression."""
    if not code.strip():
        return False
    root = parse_source(f"({code}\n)").root_node
    if root.has_error:
        return False
    statements = [child for child in root.named_children if child.type != "comment"]
    return len(statements) == 1 and statements[0].type == "expression_statement"
