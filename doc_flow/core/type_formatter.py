"""
Renders type expressions to the display strings used in parameter and return
documentation.
"""

from typing import Optional

from .errors import UnknownTypeExpressionError
from .type_expressions import (
    AllLiteral,
    ArrayType,
    FunctionType,
    NameExpression,
    NullableType,
    NullLiteral,
    OptionalType,
    RecordType,
    RestType,
    TypeApplication,
    TypeExpr,
    UnionType,
)


def format_type(expression: Optional[TypeExpr]) -> str:
    """
    Recursively renders a type expression.

    An absent type renders as ``*``. Record types render without a closing
    brace (``{a:number, b:string``); existing output depends on that shape.
    """
    if expression is None:
        return "*"
    if isinstance(expression, NameExpression):
        return expression.name
    if isinstance(expression, AllLiteral):
        return "*"
    if isinstance(expression, NullLiteral):
        return "null"
    if isinstance(expression, NullableType):
        return "?" + format_type(expression.expression)
    if isinstance(expression, OptionalType):
        return format_type(expression.expression) + "?"
    if isinstance(expression, RestType):
        return "..." + format_type(expression.expression)
    if isinstance(expression, UnionType):
        return "|".join(format_type(element) for element in expression.elements)
    if isinstance(expression, TypeApplication):
        applications = "|".join(format_type(app) for app in expression.applications)
        return f"{format_type(expression.expression)}.<{applications}>"
    if isinstance(expression, RecordType):
        return "{" + ", ".join(f"{f.key}:{format_type(f.value)}" for f in expression.fields)
    if isinstance(expression, FunctionType):
        params = ", ".join(format_type(param) for param in expression.params)
        return f"function({params}):{format_type(expression.result)}"
    if isinstance(expression, ArrayType):
        return "[" + ", ".join(format_type(element) for element in expression.elements) + "]"
    raise UnknownTypeExpressionError(expression)
