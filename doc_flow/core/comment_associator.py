"""
Associates doc comments with the declarations they document.

A comment documents the function-like declaration that begins on the line
immediately after the comment ends. Comments that fail to parse are recorded
as errors and skipped; the run carries on.
"""

import logging
from typing import Any, Dict, List, Optional

from .declarations import DeclarationIndex
from .doctags import find_tag, find_tags, get_tag_description, has_tag, parse_comment
from .errors import CommentParseError
from .examples import ExampleBuilder
from .markdown_renderer import PlainTextRenderer
from .models import (
    CommentRecord,
    Doclet,
    ErrorInfo,
    FunctionDoc,
    LibrarySummary,
    ParameterInfo,
    ReturnInfo,
    TypeInfo,
)
from .names import NameResolver, parse_name
from .treesitter.parser import ParsedSource, node_line
from .type_formatter import format_type
from .utils import get_signature

logger = logging.getLogger(__name__)

PARSE_STAGE = "parsing comment"


class CommentAssociator:
    """
    Builds ``FunctionDoc``/``TypeInfo`` models from the comments of one parsed
    source. Recoverable problems are appended to ``errors``.
    """

    def __init__(self,
                 parsed: ParsedSource,
                 index: DeclarationIndex,
                 examples: Optional[ExampleBuilder] = None,
                 renderer=None,
                 errors: Optional[List[ErrorInfo]] = None):
        self.parsed = parsed
        self.index = index
        self.resolver = NameResolver(index.parents)
        self.examples = examples or ExampleBuilder()
        self.renderer = renderer or PlainTextRenderer()
        self.errors = errors if errors is not None else []
        self._doclets: Dict[int, Optional[Doclet]] = {}

    def parse(self, comment: CommentRecord) -> Optional[Doclet]:
        """Parses a comment once; a failure is recorded the first time and yields None."""
        if comment.start_byte in self._doclets:
            return self._doclets[comment.start_byte]
        try:
            doc = parse_comment(comment.value, unwrap=True)
        except CommentParseError as e:
            logger.warning(f"Failed to parse comment on line {comment.start_line}: {e}")
            self.errors.append(ErrorInfo(stage=PARSE_STAGE, line=comment.start_line, message=str(e)))
            doc = None
        self._doclets[comment.start_byte] = doc
        return doc

    # --- Functions ---

    def associate(self) -> List[FunctionDoc]:
        docs = []
        for comment in self.parsed.comments:
            fn = self.index.get(comment.end_line + 1)
            if fn is None:
                continue
            doc = self.parse(comment)
            if doc is None:
                continue
            function_doc = self.create_function_doc(fn, doc, comment)
            if function_doc is not None:
                docs.append(function_doc)
        logger.info(f"Associated {len(docs)} doc comment(s) with declarations")
        return docs

    def create_function_doc(self, fn: Any, doc: Doclet, comment: CommentRecord) -> Optional[FunctionDoc]:
        qualified = self.resolver.resolve(fn)
        if not qualified:
            logger.debug(f"Skipping comment on line {comment.start_line}: {fn.type} has no resolvable name")
            return None

        name = parse_name(qualified, doc)
        params = self.get_params(doc)
        returns = self.get_returns(doc)
        examples = self.examples.build_examples(doc, comment.start_line)
        benchmarks = self.examples.build_benchmarks(doc, comment.start_line)
        parent = self.index.parents.get(fn)

        return FunctionDoc(
            name=name.name,
            short_name=name.short_name,
            long_name=name.long_name,
            namespace=name.namespace,
            identifier=name.identifier,
            description=self.renderer.render(doc.description),
            params=params,
            returns=returns,
            is_constructor=has_tag(doc, "constructor"),
            is_static="#" not in name.name,
            is_public=has_tag(doc, "public"),
            is_private=has_tag(doc, "private"),
            is_global=parent is not None and parent.type == "program",
            has_signature=bool(params) or returns is not None,
            signature=get_signature(name, params),
            examples=examples,
            has_examples=bool(examples.items),
            benchmarks=benchmarks,
            has_benchmarks=bool(benchmarks.items),
            tags=[tag.title for tag in doc.tags],
            source=self.parsed.slice(fn.start_byte, fn.end_byte),
            line_number=node_line(fn),
        )

    def get_params(self, doc: Doclet, title: str = "param") -> List[ParameterInfo]:
        return [
            ParameterInfo(
                name=tag.name or "",
                type=format_type(tag.type),
                description=self.renderer.render(tag.description),
                optional=tag.optional,
                default=tag.default,
            )
            for tag in find_tags(doc, title)
        ]

    def get_returns(self, doc: Doclet) -> Optional[ReturnInfo]:
        tag = find_tag(doc, "returns")
        if tag is None:
            return None
        return ReturnInfo(type=format_type(tag.type), description=self.renderer.render(tag.description))

    # --- Types ---

    def get_types(self) -> List[TypeInfo]:
        """Every ``@typedef`` comment, whether or not a declaration follows it."""
        types = []
        for comment in self.parsed.comments:
            if "@typedef" not in comment.value:
                continue
            doc = self.parse(comment)
            if doc is None or not has_tag(doc, "typedef"):
                continue
            types.append(self.create_type_info(doc))
        return types

    def create_type_info(self, doc: Doclet) -> TypeInfo:
        tag = find_tag(doc, "typedef")
        name = tag.name or tag.description
        return TypeInfo(
            name=name,
            identifier=name,
            description=self.renderer.render(doc.description),
            properties=self.get_params(doc, "property"),
        )

    # --- Library ---

    def get_library_summary(self) -> LibrarySummary:
        """
        Name and description from the first ``@fileOverview`` comment, or the
        first parsable comment's description when there is none.
        """
        docs = [doc for doc in (self.parse(comment) for comment in self.parsed.comments) if doc is not None]
        overview = next((doc for doc in docs if has_tag(doc, "fileOverview")), None)

        summary = LibrarySummary()
        if overview is not None:
            summary.description = get_tag_description(overview, "fileOverview")
            summary.name = get_tag_description(overview, "name")
        elif docs:
            summary.description = docs[0].description
        summary.description = self.renderer.render(summary.description)
        return summary
