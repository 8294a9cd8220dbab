"""
Type expressions found in doc comment tags, e.g. ``{Array.<string>|null}``.

The set of variants is closed: the formatter refuses anything else. The
parser accepts the Closure-compiler type grammar used by JSDoc comments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .errors import CommentParseError


@dataclass(frozen=True)
class NameExpression:
    name: str


@dataclass(frozen=True)
class AllLiteral:
    pass


@dataclass(frozen=True)
class NullLiteral:
    pass


@dataclass(frozen=True)
class NullableType:
    expression: Optional["TypeExpr"]


@dataclass(frozen=True)
class OptionalType:
    expression: Optional["TypeExpr"]


@dataclass(frozen=True)
class UnionType:
    elements: Tuple["TypeExpr", ...] = ()


@dataclass(frozen=True)
class RestType:
    expression: Optional["TypeExpr"] = None


@dataclass(frozen=True)
class ArrayType:
    elements: Tuple["TypeExpr", ...] = ()


@dataclass(frozen=True)
class TypeApplication:
    expression: "TypeExpr"
    applications: Tuple["TypeExpr", ...] = ()


@dataclass(frozen=True)
class FieldType:
    key: str
    value: Optional["TypeExpr"] = None


@dataclass(frozen=True)
class RecordType:
    fields: Tuple[FieldType, ...] = ()


@dataclass(frozen=True)
class FunctionType:
    params: Tuple["TypeExpr", ...] = ()
    result: Optional["TypeExpr"] = None
    this: Optional["TypeExpr"] = None
    new: Optional["TypeExpr"] = None


TypeExpr = Union[
    NameExpression,
    AllLiteral,
    NullLiteral,
    NullableType,
    OptionalType,
    UnionType,
    RestType,
    ArrayType,
    TypeApplication,
    RecordType,
    FunctionType,
]


_TOKEN_RE = re.compile(
    r"""\s*(?:
        (?P<rest>\.\.\.)
      | (?P<apply>\.<)
      | (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
      | (?P<name>(?:module:)?[A-Za-z_$][\w$]*(?:[./~-][\w$]+)*|\d+(?:\.\d+)?)
      | (?P<punct>[()\[\]{}<>,|:=?!*])
    )""",
    re.VERBOSE,
)

# Tokens that can follow a type; a bare '?' before one of these is a wildcard.
_TERMINATORS = frozenset({",", ")", "]", "}", ">", "|", "=", None})


def _tokenize(text: str) -> List[str]:
    tokens: List[str] = []
    position = 0
    length = len(text)
    while position < length:
        if text[position:].strip() == "":
            break
        match = _TOKEN_RE.match(text, position)
        if not match or match.end() == position:
            raise CommentParseError(f"Unexpected character {text[position:].strip()[0]!r} in type '{text}'")
        tokens.append(match.group(match.lastgroup))
        position = match.end()
    return tokens


class _TypeParser:
    def __init__(self, text: str):
        self.text = text
        self.tokens = _tokenize(text)
        self.index = 0

    def peek(self, offset: int = 0) -> Optional[str]:
        position = self.index + offset
        return self.tokens[position] if position < len(self.tokens) else None

    def next(self) -> Optional[str]:
        token = self.peek()
        self.index += 1
        return token

    def expect(self, token: str) -> None:
        actual = self.next()
        if actual != token:
            found = "end of input" if actual is None else repr(actual)
            raise CommentParseError(f"Expected {token!r} but found {found} in type '{self.text}'")

    def error(self, message: str) -> CommentParseError:
        return CommentParseError(f"{message} in type '{self.text}'")

    def parse_top(self) -> TypeExpr:
        expression = self.parse_type()
        if self.peek() == "|":
            elements = [expression]
            while self.peek() == "|":
                self.next()
                elements.append(self.parse_type())
            return UnionType(tuple(elements))
        return expression

    def parse_type(self) -> TypeExpr:
        token = self.peek()
        if token == "?":
            self.next()
            if self.peek() in _TERMINATORS:
                return AllLiteral()
            return NullableType(self.parse_type())
        if token == "!":
            self.next()
            return self.parse_type()
        if token == "...":
            self.next()
            if self.peek() in _TERMINATORS:
                return RestType(None)
            return RestType(self.parse_type())

        expression = self.parse_basic()
        while self.peek() in ("=", "?", "!") or (self.peek() == "[" and self.peek(1) == "]"):
            modifier = self.next()
            if modifier == "[":
                # T[] is shorthand for Array.<T>
                self.next()
                expression = TypeApplication(NameExpression("Array"), (expression,))
            elif modifier == "=":
                expression = OptionalType(expression)
            elif modifier == "?":
                expression = NullableType(expression)
        return expression

    def parse_basic(self) -> TypeExpr:
        token = self.next()
        if token is None:
            raise self.error("Unexpected end of input")
        if token == "*":
            return AllLiteral()
        if token == "(":
            return self.parse_union()
        if token == "[":
            return self.parse_array()
        if token == "{":
            return self.parse_record()
        if token == "function" and self.peek() == "(":
            return self.parse_function()
        if token == "null":
            return NullLiteral()
        if token[0] in "\"'" or token[0].isalnum() or token[0] in "_$":
            return self.parse_application(NameExpression(token))
        raise self.error(f"Unexpected token {token!r}")

    def parse_application(self, base: TypeExpr) -> TypeExpr:
        if self.peek() not in (".<", "<"):
            return base
        self.next()
        applications = [self.parse_top()]
        while self.peek() == ",":
            self.next()
            applications.append(self.parse_top())
        self.expect(">")
        return TypeApplication(base, tuple(applications))

    def parse_union(self) -> TypeExpr:
        elements = []
        if self.peek() != ")":
            elements.append(self.parse_type())
            while self.peek() == "|":
                self.next()
                elements.append(self.parse_type())
        self.expect(")")
        return UnionType(tuple(elements))

    def parse_array(self) -> TypeExpr:
        elements = []
        while self.peek() != "]":
            elements.append(self.parse_top())
            if self.peek() == ",":
                self.next()
            elif self.peek() != "]":
                raise self.error(f"Unexpected token {self.peek()!r}")
        self.expect("]")
        return ArrayType(tuple(elements))

    def parse_record(self) -> TypeExpr:
        record_fields = []
        while self.peek() != "}":
            key = self.next()
            if key is None:
                raise self.error("Unterminated record type")
            if key[0] in "\"'":
                key = key[1:-1]
            elif not (key[0].isalnum() or key[0] in "_$"):
                raise self.error(f"Unexpected token {key!r}")
            value = None
            if self.peek() == ":":
                self.next()
                value = self.parse_top()
            record_fields.append(FieldType(key, value))
            if self.peek() == ",":
                self.next()
            elif self.peek() != "}":
                raise self.error(f"Unexpected token {self.peek()!r}")
        self.expect("}")
        return RecordType(tuple(record_fields))

    def parse_function(self) -> TypeExpr:
        self.expect("(")
        params = []
        this_type = new_type = None
        while self.peek() != ")":
            if self.peek() in ("this", "new") and self.peek(1) == ":":
                which = self.next()
                self.next()
                if which == "this":
                    this_type = self.parse_top()
                else:
                    new_type = self.parse_top()
            else:
                params.append(self.parse_top())
            if self.peek() == ",":
                self.next()
            elif self.peek() != ")":
                raise self.error(f"Unexpected token {self.peek()!r}")
        self.expect(")")
        result = None
        if self.peek() == ":":
            self.next()
            result = self.parse_type()
        return FunctionType(tuple(params), result, this_type, new_type)


def parse_type(text: str) -> TypeExpr:
    """Parses the text between a tag's braces into a type expression."""
    parser = _TypeParser(text)
    if not parser.tokens:
        raise CommentParseError("Empty type expression")
    expression = parser.parse_top()
    if parser.peek() is not None:
        raise parser.error(f"Unexpected token {parser.peek()!r}")
    return expression
