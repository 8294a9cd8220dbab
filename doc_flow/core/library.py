"""
The documentation session: parses one library's source into a ``LibraryInfo``.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Union

from .comment_associator import CommentAssociator
from .config import AutodocConfig
from .declarations import index_declarations
from .errors import ConfigurationError
from .example_handlers import build_handlers
from .examples import ExampleBuilder
from .markdown_renderer import get_renderer
from .models import ErrorInfo, FunctionDoc, LibraryInfo, NamespaceInfo
from .namespaces import aggregate_namespaces, apply_grep, elevate_private_members
from .treesitter.parser import parse_javascript
from .treesitter.walker import TreeWalker
from .utils import first_segment

logger = logging.getLogger(__name__)


class Autodoc:
    """
    One documentation session. The session owns its configuration and the
    list of recoverable errors met while parsing; use one session per
    library when parsing several at once.
    """

    def __init__(self, config: Optional[AutodocConfig] = None):
        self.config = config or AutodocConfig()
        self.errors: List[ErrorInfo] = []
        custom = build_handlers(self.config.example_handlers, include_defaults=False)
        self.example_builder = ExampleBuilder(handlers=build_handlers(custom), custom_handlers=custom)
        self.renderer = get_renderer(self.config.render_markdown)
        self.walker = TreeWalker()
        if self.config.grep:
            try:
                re.compile(self.config.grep)
            except re.error as e:
                raise ConfigurationError(f"Invalid grep pattern {self.config.grep!r}: {e}") from e

    def parse(self, source: str) -> LibraryInfo:
        """
        Parses ``source`` into a library model.

        Raises:
            UnknownNodeKindError: the tree holds a node kind the walker does not know.
            UnknownTypeExpressionError: a doc type cannot be rendered.
        """
        self.errors = []
        parsed = parse_javascript(source, self.config.language)
        index = index_declarations(parsed.root, self.walker)
        associator = CommentAssociator(parsed, index, self.example_builder, self.renderer, self.errors)

        summary = associator.get_library_summary()
        docs = associator.associate()

        config = self.resolve_tags(docs)
        self.apply_tags(docs, config.tags)

        namespaces = aggregate_namespaces(docs, config.namespaces)
        private_members = elevate_private_members(namespaces, docs)

        reference_name = index.reference_name or self._guess_reference_name(namespaces)
        if config.grep:
            docs = apply_grep(namespaces, docs, config.grep)

        if self.errors:
            logger.warning(f"Collected {len(self.errors)} recoverable error(s) while parsing")

        return LibraryInfo(
            name=summary.name or reference_name,
            reference_name=reference_name,
            description=summary.description,
            code=source,
            namespaces=namespaces,
            docs=docs,
            private_members=private_members,
            types=associator.get_types(),
            errors=list(self.errors),
        )

    def resolve_tags(self, docs: List[FunctionDoc]) -> AutodocConfig:
        """
        With no tag filter configured, any doc tagged ``@public`` restricts the
        output to public docs. Returns the effective config; ``self.config`` is
        left as it was.
        """
        if not self.config.tags and any(doc.is_public for doc in docs):
            logger.info("Found @public docs; restricting output to public members")
            return self.config.with_tags(["public"])
        return self.config

    @staticmethod
    def apply_tags(docs: List[FunctionDoc], tags: List[str]) -> None:
        if not tags:
            return
        wanted = set(tags)
        for doc in docs:
            if not wanted.intersection(doc.tags):
                doc.exclude_from_docs = True

    @staticmethod
    def _guess_reference_name(namespaces: List[NamespaceInfo]) -> Optional[str]:
        for info in namespaces:
            if info.members:
                return first_segment(info.namespace)
        return None


def parse_library(source: str, options: Union[AutodocConfig, Dict[str, Any], None] = None) -> LibraryInfo:
    """
    Parses a library with a fresh session.

    ``options`` may be an ``AutodocConfig`` or a mapping of its fields
    (``namespaces``, ``tags``, ``grep``, ...).
    """
    if options is None or isinstance(options, AutodocConfig):
        config = options
    else:
        config = AutodocConfig(**options)
    return Autodoc(config).parse(source)
