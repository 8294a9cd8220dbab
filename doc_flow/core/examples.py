"""
Builds example and benchmark collections from a doclet's ``@examples`` and
``@benchmarks`` tags.
"""

import logging
from typing import Dict, Sequence

from .directives import DirectiveParser
from .doctags import find_tags
from .example_handlers import ExampleHandler, find_handler
from .models import (
    BenchmarkBlock,
    BenchmarkCase,
    BenchmarkCollection,
    BenchmarkInfo,
    Doclet,
    ExampleBlock,
    ExampleCollection,
    ExampleInfo,
    Tag,
)
from .treesitter.parser import is_valid_expression, is_valid_program
from .utils import divide, escape_js_string

logger = logging.getLogger(__name__)

EXAMPLE_TAGS = ("examples", "example")
BENCHMARK_TAGS = ("benchmarks",)
DEFAULT_BENCHMARK_LABEL = "Ops/second"


class ExampleBuilder:
    """
    Turns directive tags into example/benchmark models.

    ``handlers`` is the full ordered handler list (caller handlers, then the
    defaults) used to classify expected values. Only ``custom_handlers``
    make an arrow-less ``// pattern`` line count as a directive.
    """

    def __init__(self,
                 handlers: Sequence[ExampleHandler] = (),
                 custom_handlers: Sequence[ExampleHandler] = ()):
        self.handlers = list(handlers)
        self.directives = DirectiveParser([handler.pattern for handler in custom_handlers])

    def build_examples(self, doc: Doclet, base_line: int = 1) -> ExampleCollection:
        """
        ``base_line`` is the 1-based source line of the comment's first line;
        example line numbers come out absolute.
        """
        collection = ExampleCollection()
        next_id = 1
        for tag in find_tags(doc, EXAMPLE_TAGS):
            data = self.directives.parse(tag.description)
            block = ExampleBlock(code=data.content, setup=data.preamble)
            for pair in data.pairs:
                example = ExampleInfo(
                    id=next_id,
                    line_number=self._absolute_line(base_line, tag, pair.line_number),
                    actual=pair.left,
                    actual_escaped=escape_js_string(pair.left),
                    expected=pair.right,
                    expected_escaped=escape_js_string(pair.right),
                    is_multiline=pair.is_multiline,
                )
                next_id += 1
                self._classify(example)
                block.examples.append(example)
            collection.blocks.append(block)
            collection.items.extend(block.examples)
        return collection

    def build_benchmarks(self, doc: Doclet, base_line: int = 1) -> BenchmarkCollection:
        collection = BenchmarkCollection()
        next_case_id = 1
        next_benchmark_id = 1
        for tag in find_tags(doc, BENCHMARK_TAGS):
            data = self.directives.parse(tag.description)
            grouped: Dict[str, BenchmarkInfo] = {}
            for pair in data.pairs:
                parts = divide(pair.right, " - ")
                case = BenchmarkCase(
                    case_id=next_case_id,
                    impl=pair.left,
                    name=parts[0],
                    label=(parts[1] if len(parts) > 1 and parts[1] else DEFAULT_BENCHMARK_LABEL),
                )
                next_case_id += 1
                if case.name not in grouped:
                    grouped[case.name] = BenchmarkInfo(id=next_benchmark_id, name=case.name)
                    next_benchmark_id += 1
                grouped[case.name].cases.append(case)
            block = BenchmarkBlock(code=data.content, setup=data.preamble, benchmarks=list(grouped.values()))
            collection.blocks.append(block)
            collection.items.extend(block.benchmarks)
        return collection

    def _absolute_line(self, base_line: int, tag: Tag, offset: int) -> int:
        return base_line + tag.description_line + offset

    def _classify(self, example: ExampleInfo) -> None:
        """Attaches the first matching handler, or flags the example broken if it can't run."""
        found = find_handler(self.handlers, example.expected)
        if found is not None:
            index, handler, match = found
            example.handler_index = index
            if handler.test is not None:
                example.has_custom_handler = True
            else:
                example.handler_template = handler.template
                example.handler_data = handler.build_data(match)
            return

        if not is_valid_program(example.actual) or not is_valid_expression(example.expected):
            example.broken = True
            logger.debug(f"Example on line {example.line_number} does not parse: {example.actual!r} => {example.expected!r}")
