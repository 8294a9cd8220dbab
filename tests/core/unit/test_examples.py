"""
Unit tests for example handlers and example/benchmark collections.
"""

import pytest

from doc_flow.core.doctags import parse_comment
from doc_flow.core.errors import ConfigurationError
from doc_flow.core.example_handlers import (
    DEFAULT_EXAMPLE_HANDLERS,
    ExampleHandler,
    build_handlers,
    find_handler,
    get_count,
)
from doc_flow.core.examples import ExampleBuilder
from doc_flow.core.utils import divide, escape_js_string


def _doc(body: str):
    return parse_comment("*\n" + "\n".join(" * " + line for line in body.split("\n")) + "\n ")


class TestExampleHandlers:
    """Test cases for handler configuration and matching."""

    def test_handler_requires_template_or_test(self):
        with pytest.raises(ConfigurationError, match="test function or a template name"):
            ExampleHandler(r"^x$")

    def test_invalid_pattern_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            ExampleHandler("(", template="t")

    def test_build_from_config_puts_custom_first(self):
        handlers = build_handlers([{"pattern": "^throws$", "template": "my_throws"}])
        assert handlers[0].template == "my_throws"
        assert len(handlers) == len(DEFAULT_EXAMPLE_HANDLERS) + 1
        index, handler, _ = find_handler(handlers, "throws")
        assert index == 0

    def test_entry_without_pattern(self):
        with pytest.raises(ConfigurationError):
            build_handlers([{"template": "x"}])

    @pytest.mark.parametrize("expected,template", [
        ("instanceof Array", "instanceof"),
        ("NaN", "nan"),
        ("throws", "throws"),
        ("calls fn 3 times", "calls"),
        ("calls fn 2 times asynchronously", "calls_async"),
        ("=~ /foo/", "string_proximity"),
        ("=~ [1, 2, ...]", "array_inclusion"),
        ("one of [1, 2]", "array_membership"),
        ("=~ [1, 2]", "array_proximity"),
        ("[1, 2, ...]", "array_head"),
        ("[..., 9]", "array_tail"),
        ("{ a: 1, ... }", "object_proximity"),
    ])
    def test_default_handlers(self, expected, template):
        _, handler, _ = find_handler(DEFAULT_EXAMPLE_HANDLERS, expected)
        assert handler.template == template

    def test_plain_values_match_no_handler(self):
        assert find_handler(DEFAULT_EXAMPLE_HANDLERS, "[1, 2, 3]") is None
        assert find_handler(DEFAULT_EXAMPLE_HANDLERS, "'hello'") is None

    @pytest.mark.parametrize("word,count", [("once", 1), ("twice", 2), ("thrice", 3), ("ten", 10), ("7", 7)])
    def test_get_count(self, word, count):
        assert get_count(word) == count


class TestExampleBuilder:
    """Test cases for building example collections from doclets."""

    def test_ids_and_absolute_lines(self):
        # Line 1 of the source holds '/**'; '@examples' is on body line 1.
        doc = _doc("@examples\nsquare(2) // => 4\nsquare(3) // => 9\n@example\nsquare(0) // => 0")
        builder = ExampleBuilder(build_handlers())
        examples = builder.build_examples(doc, base_line=1)
        assert [e.id for e in examples.items] == [1, 2, 3]
        assert [e.line_number for e in examples.items] == [3, 4, 6]
        assert len(examples.blocks) == 2

    def test_escaping(self):
        doc = _doc("@examples\ngreet('Dan') // => \"Hi, Dan\"")
        example = ExampleBuilder().build_examples(doc).items[0]
        assert example.actual_escaped == escape_js_string("greet('Dan')") == "greet(\\'Dan\\')"
        assert example.expected_escaped == '\\"Hi, Dan\\"'

    def test_broken_examples_are_flagged(self):
        doc = _doc("@examples\nok(1) // => 1\nbad(( // => 1\nfine() // => {{{")
        items = ExampleBuilder().build_examples(doc).items
        assert [e.broken for e in items] == [False, True, True]

    def test_template_handler_is_recorded(self):
        doc = _doc("@examples\nparse('x') // throws")
        builder = ExampleBuilder(build_handlers())
        example = builder.build_examples(doc).items[0]
        assert example.handler_template == "throws"
        assert example.broken is False
        assert example.has_custom_handler is False

    def test_test_handler_marks_custom(self):
        handler = ExampleHandler(r"^even$", test=lambda match, actual: actual % 2 == 0)
        builder = ExampleBuilder([handler], custom_handlers=[handler])
        example = builder.build_examples(_doc("@examples\nvar n = 2;\nn\n// even")).items[0]
        assert example.has_custom_handler is True
        assert example.handler_index == 0
        assert example.actual == "var n = 2;\nn"

    def test_setup_is_preamble(self):
        doc = _doc("@examples\nvar a = [1];\n\nfirst(a) // => 1")
        examples = ExampleBuilder().build_examples(doc)
        assert examples.setup == "var a = [1];"


class TestBenchmarks:
    """Test cases for benchmark collections."""

    def test_divide(self):
        assert divide("a->b->c", "->") == ["a", "b->c"]
        assert divide("foo", "xyz") == ["foo"]
        assert divide("abc", "abc") == ["", ""]

    def test_cases_grouped_by_name(self):
        doc = _doc(
            "@benchmarks\n"
            "var arr = [1, 2, 3];\n"
            "native(arr) // sum - native\n"
            "lazy(arr) // sum - lazy\n"
            "native.max(arr) // max"
        )
        benchmarks = ExampleBuilder().build_benchmarks(doc)
        assert [b.name for b in benchmarks.items] == ["sum", "max"]
        assert [b.id for b in benchmarks.items] == [1, 2]
        sum_cases = benchmarks.items[0].cases
        assert [(c.case_id, c.impl, c.label) for c in sum_cases] == [
            (1, "native(arr)", "native"),
            (2, "lazy(arr)", "lazy"),
        ]
        assert benchmarks.items[1].cases[0].label == "Ops/second"
        assert benchmarks.cases == sum_cases
        assert benchmarks.blocks[0].setup == "var arr = [1, 2, 3];"
