"""
Unit tests for type expression parsing and formatting.
"""

import pytest

from doc_flow.core.errors import CommentParseError, UnknownTypeExpressionError
from doc_flow.core.type_expressions import (
    AllLiteral,
    FieldType,
    FunctionType,
    NameExpression,
    NullableType,
    NullLiteral,
    OptionalType,
    RecordType,
    RestType,
    TypeApplication,
    UnionType,
    parse_type,
)
from doc_flow.core.type_formatter import format_type


class TestFormatType:
    """Test cases for rendering each type variant."""

    def test_name(self):
        assert format_type(NameExpression("string")) == "string"

    def test_absent_type(self):
        assert format_type(None) == "*"

    def test_literals(self):
        assert format_type(AllLiteral()) == "*"
        assert format_type(NullLiteral()) == "null"

    def test_modifiers(self):
        assert format_type(NullableType(NameExpression("A"))) == "?A"
        assert format_type(OptionalType(NameExpression("A"))) == "A?"
        assert format_type(RestType(NameExpression("A"))) == "...A"

    def test_union(self):
        assert format_type(UnionType((NameExpression("A"), NameExpression("B")))) == "A|B"

    def test_application(self):
        expr = TypeApplication(NameExpression("Object"), (NameExpression("string"), NameExpression("number")))
        assert format_type(expr) == "Object.<string|number>"

    def test_record_has_no_closing_brace(self):
        expr = RecordType((FieldType("a", NameExpression("number")), FieldType("b", NameExpression("string"))))
        assert format_type(expr) == "{a:number, b:string"

    def test_function(self):
        expr = FunctionType((NameExpression("A"), NameExpression("B")), NameExpression("C"))
        assert format_type(expr) == "function(A, B):C"

    def test_unknown_variant_is_fatal(self):
        with pytest.raises(UnknownTypeExpressionError):
            format_type(object())


class TestParseType:
    """Test cases for the type expression grammar."""

    @pytest.mark.parametrize("text,expected", [
        ("string", "string"),
        ("Array.<string>", "Array.<string>"),
        ("Array<number>", "Array.<number>"),
        ("(string|number)", "string|number"),
        ("string|null", "string|null"),
        ("?Object", "?Object"),
        ("number=", "number?"),
        ("...*", "...*"),
        ("!Foo", "Foo"),
        ("function(string, number): boolean", "function(string, number):boolean"),
        ("function(this:Foo, a)", "function(a):*"),
        ("{x: number, y}", "{x:number, y:*"),
        ("Lib.Collection", "Lib.Collection"),
        ("Object.<string, Array.<number>>", "Object.<string|Array.<number>>"),
        ("string[]", "Array.<string>"),
        ("string|string[]", "string|Array.<string>"),
        ("number[][]", "Array.<Array.<number>>"),
        ("module:foo/bar", "module:foo/bar"),
    ])
    def test_round_trip_display(self, text, expected):
        assert format_type(parse_type(text)) == expected

    def test_bare_question_mark_is_wildcard(self):
        assert parse_type("?") == AllLiteral()

    @pytest.mark.parametrize("text", ["", "Array.<", "(a|b", "a b", "{a:}", "%"])
    def test_malformed_types_raise(self, text):
        with pytest.raises(CommentParseError):
            parse_type(text)
