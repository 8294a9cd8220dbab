"""
Documentation extraction for JavaScript libraries.

This module provides a small API for turning annotated source into a
structured model of a library's functions, namespaces, types, examples and
benchmarks, hiding the pipeline (tree walking, comment association, name
resolution, namespace aggregation) underneath.
"""

from pathlib import Path
from typing import Union

from .config import AutodocConfig, load_config
from .errors import (
    AutodocError,
    CommentParseError,
    ConfigurationError,
    UnknownNodeKindError,
    UnknownTypeExpressionError,
)
from .library import Autodoc, parse_library
from .models import FunctionDoc, LibraryInfo, NamespaceInfo

FilePath = Union[str, Path]


def parse_file(file_path: FilePath, config: AutodocConfig = None) -> LibraryInfo:
    """Reads a source file and parses it with a fresh session."""
    source = Path(file_path).read_text(encoding="utf-8")
    return Autodoc(config).parse(source)


__all__ = [
    "Autodoc",
    "AutodocConfig",
    "AutodocError",
    "CommentParseError",
    "ConfigurationError",
    "FunctionDoc",
    "LibraryInfo",
    "NamespaceInfo",
    "UnknownNodeKindError",
    "UnknownTypeExpressionError",
    "load_config",
    "parse_file",
    "parse_library",
]
