"""
Exceptions raised by doc_flow.

Structural errors (an unknown node kind, an unknown type expression) and
configuration errors abort a parse. ``CommentParseError`` is recoverable: the
session records it and skips the offending comment.
"""


class AutodocError(Exception):
    """Base class for every doc_flow error."""


class UnknownNodeKindError(AutodocError):
    def __init__(self, kind: str, description: str = ""):
        self.kind = kind
        self.description = description
        message = f'Unknown node type "{kind}"'
        if description:
            message += f"\nData: {description}"
        super().__init__(message)


class UnknownTypeExpressionError(AutodocError):
    def __init__(self, expression: object):
        self.expression = expression
        super().__init__(f"Unable to format type {type(expression).__name__}: {expression!r}")


class CommentParseError(AutodocError):
    pass


class ConfigurationError(AutodocError, ValueError):
    pass
