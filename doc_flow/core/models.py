"""
Core data models for the documentation model extracted from source comments.

This module contains pure data structures for representing comments, doc
tags, examples, benchmarks, functions, namespaces and whole libraries.
"""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field, asdict

from .type_expressions import TypeExpr


@dataclass
class CommentRecord:
    """A block comment as found in the source."""
    text: str        # Full comment text including the /* */ delimiters
    value: str       # Text between the delimiters
    start_line: int  # 1-based
    end_line: int    # 1-based
    start_byte: int = 0
    end_byte: int = 0


@dataclass
class Tag:
    """A single @tag parsed out of a doc comment."""
    title: str
    name: Optional[str] = None
    type: Optional[TypeExpr] = None
    description: str = ""
    line_number: int = 0       # 0-based line of the @title within the comment body
    description_line: int = 0  # 0-based line on which the description text begins
    optional: bool = False
    default: Optional[str] = None


@dataclass
class Doclet:
    """A parsed doc comment: free text description plus its tags."""
    description: str = ""
    tags: List[Tag] = field(default_factory=list)


@dataclass
class NameInfo:
    name: str
    short_name: str
    long_name: str
    namespace: Optional[str]  # None exactly when the entity is global
    identifier: str


@dataclass
class Pair:
    """One actual/expected (or implementation/label) line of a directive."""
    left: str
    right: str
    line_number: int  # 0-based offset within the tag body
    is_multiline: bool = False


@dataclass
class DirectiveBlock:
    content: str
    preamble: str
    pairs: List[Pair] = field(default_factory=list)


@dataclass
class ParameterInfo:
    name: str
    type: str
    description: str = ""
    optional: bool = False
    default: Optional[str] = None


@dataclass
class ReturnInfo:
    type: str
    description: str = ""


@dataclass
class ExampleInfo:
    id: int
    line_number: int  # Absolute 1-based source line
    actual: str
    actual_escaped: str
    expected: str
    expected_escaped: str
    is_multiline: bool = False
    broken: bool = False
    has_custom_handler: bool = False
    handler_index: Optional[int] = None
    handler_template: Optional[str] = None
    handler_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ExampleBlock:
    """The examples from one @examples tag."""
    code: str
    setup: str
    examples: List[ExampleInfo] = field(default_factory=list)


@dataclass
class ExampleCollection:
    blocks: List[ExampleBlock] = field(default_factory=list)
    items: List[ExampleInfo] = field(default_factory=list)  # All blocks, flattened

    @property
    def code(self) -> str:
        return "\n\n".join(block.code for block in self.blocks)

    @property
    def setup(self) -> str:
        return "\n".join(block.setup for block in self.blocks if block.setup)


@dataclass
class BenchmarkCase:
    case_id: int
    impl: str
    name: str
    label: str = "Ops/second"


@dataclass
class BenchmarkInfo:
    id: int
    name: str
    cases: List[BenchmarkCase] = field(default_factory=list)


@dataclass
class BenchmarkBlock:
    """The benchmarks from one @benchmarks tag."""
    code: str
    setup: str
    benchmarks: List[BenchmarkInfo] = field(default_factory=list)


@dataclass
class BenchmarkCollection:
    blocks: List[BenchmarkBlock] = field(default_factory=list)
    items: List[BenchmarkInfo] = field(default_factory=list)

    @property
    def cases(self) -> List[BenchmarkCase]:
        return self.items[0].cases if self.items else []


@dataclass
class FunctionDoc:
    """A documented function: its identity, signature, examples and benchmarks."""
    name: str
    short_name: str
    long_name: str
    namespace: Optional[str]
    identifier: str
    description: str = ""
    params: List[ParameterInfo] = field(default_factory=list)
    returns: Optional[ReturnInfo] = None
    is_constructor: bool = False
    is_static: bool = False
    is_public: bool = False
    is_private: bool = False
    is_global: bool = False
    has_signature: bool = False
    signature: str = ""
    examples: ExampleCollection = field(default_factory=ExampleCollection)
    has_examples: bool = False
    benchmarks: BenchmarkCollection = field(default_factory=BenchmarkCollection)
    has_benchmarks: bool = False
    tags: List[str] = field(default_factory=list)  # Tag titles, in comment order
    source: str = ""  # Verbatim source text of the declaration
    line_number: int = 0
    exclude_from_docs: bool = False
    section_type: str = "method"  # 'constructor' or 'method'
    methods: List["FunctionDoc"] = field(default_factory=list)  # Members of a private helper class


@dataclass
class TypeInfo:
    """A custom type declared with @typedef."""
    name: str
    identifier: str
    description: str = ""
    properties: List[ParameterInfo] = field(default_factory=list)


@dataclass
class NamespaceInfo:
    namespace: str
    constructor_method: Optional[FunctionDoc] = None
    members: List[FunctionDoc] = field(default_factory=list)
    private_members: List[FunctionDoc] = field(default_factory=list)
    all_members: List[FunctionDoc] = field(default_factory=list)  # constructor, statics, then instance members
    has_examples: bool = False
    has_benchmarks: bool = False
    exclude_from_docs: bool = False


@dataclass
class ErrorInfo:
    """A recoverable problem met while parsing; the run carries on without it."""
    stage: str
    line: int
    message: str


@dataclass
class LibrarySummary:
    name: str = ""
    description: str = ""


@dataclass
class LibraryInfo:
    name: Optional[str]
    reference_name: Optional[str]
    description: str
    code: str
    namespaces: List[NamespaceInfo] = field(default_factory=list)
    docs: List[FunctionDoc] = field(default_factory=list)
    private_members: List[FunctionDoc] = field(default_factory=list)
    types: List[TypeInfo] = field(default_factory=list)
    errors: List[ErrorInfo] = field(default_factory=list)

    def to_dict(self, include_code: bool = False) -> Dict[str, Any]:
        data = asdict(self)
        if not include_code:
            data.pop("code", None)
        return data
