"""
Children lookup table for tree-sitter-javascript node kinds.

Every named node kind the JavaScript grammar can produce is listed here, each
mapped to a function returning the ordered child slots the TreeWalker should
descend into. Kinds that cannot contain a function anywhere beneath them are
leaves. A kind missing from this table is a fatal error during traversal.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

from tree_sitter import Node

ChildSlots = Callable[[Node], Sequence[Optional[Node]]]


def leaf(node: Node) -> Sequence[Optional[Node]]:
    return ()


def named(node: Node) -> Sequence[Optional[Node]]:
    return [child for child in node.named_children if child.type != "comment"]


def fields(*names: str) -> ChildSlots:
    def children(node: Node) -> Sequence[Optional[Node]]:
        return [node.child_by_field_name(name) for name in names]
    return children


FUNCTION_DECLARATION_KINDS = frozenset({
    "function_declaration",
    "generator_function_declaration",
})

FUNCTION_EXPRESSION_KINDS = frozenset({
    "function_expression",
    "function",  # tree-sitter-javascript < 0.21
    "generator_function",
    "arrow_function",
    "method_definition",
})

FUNCTION_KINDS = FUNCTION_DECLARATION_KINDS | FUNCTION_EXPRESSION_KINDS

IDENTIFIER_KINDS = frozenset({
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "private_property_identifier",
    "statement_identifier",
})


JAVASCRIPT_CHILDREN: Dict[str, ChildSlots] = {
    # Program structure and blocks
    "program": named,
    "statement_block": named,
    "expression_statement": named,
    "export_statement": named,
    "ERROR": named,

    # Functions and classes
    "function_declaration": named,
    "generator_function_declaration": named,
    "function_expression": named,
    "function": named,
    "generator_function": named,
    "arrow_function": named,
    "method_definition": named,
    "formal_parameters": named,
    "class_declaration": named,
    "class": named,
    "class_heritage": named,
    "class_body": named,
    "field_definition": named,
    "class_static_block": named,
    "decorator": named,

    # Declarations
    "variable_declaration": named,
    "lexical_declaration": named,
    "using_declaration": named,
    "variable_declarator": fields("name", "value"),

    # Control flow
    "if_statement": fields("condition", "consequence", "alternative"),
    "else_clause": named,
    "switch_statement": fields("value", "body"),
    "switch_body": named,
    "switch_case": named,
    "switch_default": named,
    "for_statement": named,
    "for_in_statement": fields("left", "right", "body"),
    "while_statement": fields("condition", "body"),
    "do_statement": fields("body", "condition"),
    "labeled_statement": fields("body"),
    "with_statement": fields("object", "body"),
    "try_statement": fields("body", "handler", "finalizer"),
    "catch_clause": fields("parameter", "body"),
    "finally_clause": fields("body"),
    "return_statement": named,
    "throw_statement": named,

    # Expressions
    "parenthesized_expression": named,
    "assignment_expression": fields("left", "right"),
    "augmented_assignment_expression": fields("left", "right"),
    "call_expression": fields("function", "arguments"),
    "new_expression": fields("constructor", "arguments"),
    "arguments": named,
    "member_expression": fields("object", "property"),
    "subscript_expression": fields("object", "index"),
    "ternary_expression": fields("condition", "consequence", "alternative"),
    "binary_expression": fields("left", "right"),
    "unary_expression": fields("argument"),
    "update_expression": fields("argument"),
    "sequence_expression": named,
    "await_expression": named,
    "yield_expression": named,
    "spread_element": named,
    "object": named,
    "pair": fields("key", "value"),
    "computed_property_name": named,
    "array": named,
    "template_string": named,
    "template_substitution": named,

    # Patterns
    "object_pattern": named,
    "array_pattern": named,
    "pair_pattern": named,
    "rest_pattern": named,
    "assignment_pattern": named,
    "object_assignment_pattern": named,

    # JSX
    "jsx_element": named,
    "jsx_self_closing_element": named,
    "jsx_opening_element": named,
    "jsx_attribute": named,
    "jsx_expression": named,
    "jsx_closing_element": leaf,
    "jsx_namespace_name": leaf,
    "jsx_text": leaf,
    "html_character_reference": leaf,

    # Leaves: nothing beneath these can declare a function
    "comment": leaf,
    "hash_bang_line": leaf,
    "html_comment": leaf,
    "import_statement": leaf,
    "import_clause": leaf,
    "import_attribute": leaf,
    "namespace_import": leaf,
    "named_imports": leaf,
    "import_specifier": leaf,
    "export_clause": leaf,
    "export_specifier": leaf,
    "namespace_export": leaf,
    "import": leaf,
    "break_statement": leaf,
    "continue_statement": leaf,
    "debugger_statement": leaf,
    "empty_statement": leaf,
    "identifier": leaf,
    "property_identifier": leaf,
    "shorthand_property_identifier": leaf,
    "shorthand_property_identifier_pattern": leaf,
    "private_property_identifier": leaf,
    "statement_identifier": leaf,
    "nested_identifier": leaf,
    "string": leaf,
    "string_fragment": leaf,
    "escape_sequence": leaf,
    "regex": leaf,
    "regex_pattern": leaf,
    "regex_flags": leaf,
    "number": leaf,
    "this": leaf,
    "super": leaf,
    "true": leaf,
    "false": leaf,
    "null": leaf,
    "undefined": leaf,
    "meta_property": leaf,
    "optional_chain": leaf,
    "glimmer_template": leaf,
    "glimmer_opening_tag": leaf,
    "glimmer_closing_tag": leaf,
}
