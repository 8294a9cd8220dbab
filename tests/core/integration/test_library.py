"""
End-to-end tests: source text in, library model out.
"""

import json

import pytest

from doc_flow.core import Autodoc, AutodocConfig, parse_file, parse_library
from doc_flow.core.errors import UnknownNodeKindError
from doc_flow.core.treesitter.walker import TreeWalker


class TestParseLibrary:
    """Test cases for the full pipeline on the sample library."""

    def test_summary_and_reference_name(self, sample_library):
        library = parse_library(sample_library)
        assert library.name == "Collections"
        assert library.reference_name == "Collection"
        assert library.description == "Tiny collection helpers."
        assert library.errors == []

    def test_docs_and_names(self, sample_library):
        library = parse_library(sample_library)
        docs = {doc.name: doc for doc in library.docs}
        assert set(docs) == {"Collection", "Collection.clone", "Collection#first", "Collection#count", "slowCount"}

        ctor = docs["Collection"]
        assert ctor.is_constructor and ctor.is_global and ctor.namespace is None
        assert ctor.params[0].type == "Array.<*>"
        assert ctor.signature == "function Collection(source) { /*...*/ }"
        assert ctor.line_number == 12

        clone = docs["Collection.clone"]
        assert clone.is_static and clone.is_public and not clone.is_global
        assert clone.identifier == "Collection-clone"
        assert clone.returns.type == "Array"
        assert clone.signature == "Collection.clone = function(array) { /*...*/ }"
        assert clone.source.startswith("function(array)")

        first = docs["Collection#first"]
        assert first.is_static is False
        assert first.long_name == "Collection.prototype.first"

    def test_examples_have_absolute_lines(self, sample_library):
        library = parse_library(sample_library)
        docs = {doc.name: doc for doc in library.docs}
        clone_examples = docs["Collection.clone"].examples.items
        assert [(e.line_number, e.actual, e.expected) for e in clone_examples] == [
            (24, "Collection.clone([])", "[]"),
            (25, "Collection.clone([1, 2, 3])", "[1, 2, 3]"),
        ]
        assert not any(e.broken for e in clone_examples)
        first = docs["Collection#first"]
        assert first.examples.setup == "var c = new Collection([5, 6]);"
        assert first.examples.items[0].line_number == 39

    def test_benchmarks(self, sample_library):
        library = parse_library(sample_library)
        count = next(doc for doc in library.docs if doc.name == "Collection#count")
        assert count.has_benchmarks
        assert [(b.name, b.cases[0].label) for b in count.benchmarks.items] == [
            ("native", "Ops/second"),
            ("loop", "Ops per second"),
        ]

    def test_public_tag_restricts_output(self, sample_library):
        library = parse_library(sample_library)
        excluded = {doc.name for doc in library.docs if doc.exclude_from_docs}
        assert excluded == {"Collection", "Collection#count", "slowCount"}

    def test_explicit_tags_win(self, sample_library):
        library = parse_library(sample_library, {"tags": ["constructor"]})
        shown = {doc.name for doc in library.docs if not doc.exclude_from_docs}
        assert shown == {"Collection"}

    def test_session_config_is_not_mutated(self, sample_library):
        config = AutodocConfig()
        Autodoc(config).parse(sample_library)
        assert config.tags == []

    def test_namespaces(self, sample_library):
        library = parse_library(sample_library)
        assert [ns.namespace for ns in library.namespaces] == ["Collection", "[private]"]
        collection = library.namespaces[0]
        assert collection.constructor_method.name == "Collection"
        assert [m.name for m in collection.all_members] == [
            "Collection", "Collection.clone", "Collection#count", "Collection#first",
        ]
        assert collection.has_examples and collection.has_benchmarks
        assert not collection.exclude_from_docs
        assert library.namespaces[1].exclude_from_docs
        assert [m.name for m in library.private_members] == ["slowCount"]

    def test_types(self, sample_library):
        library = parse_library(sample_library)
        (options,) = library.types
        assert options.name == "Options"
        assert [(p.name, p.type) for p in options.properties] == [("deep", "boolean"), ("limit", "number?")]

    def test_grep(self, sample_library):
        library = parse_library(sample_library, {"grep": "clone"})
        assert [doc.name for doc in library.docs] == ["Collection.clone"]
        assert [m.name for m in library.namespaces[0].all_members] == ["Collection.clone"]

    def test_markdown_descriptions(self, sample_library):
        library = parse_library(sample_library, {"render_markdown": True})
        clone = next(doc for doc in library.docs if doc.name == "Collection.clone")
        assert clone.description == "<p>Creates a shallow copy of an array.</p>"

    def test_to_dict_is_json_ready(self, sample_library):
        data = parse_library(sample_library).to_dict()
        assert "code" not in data
        assert json.loads(json.dumps(data))["reference_name"] == "Collection"

    def test_parse_file(self, sample_library_file):
        assert parse_file(sample_library_file).reference_name == "Collection"


class TestCommentAssociation:
    """Test cases for positional comment/declaration matching."""

    def test_next_line_associates(self):
        library = parse_library("/** Says hi. */\nfunction hi() {}\n")
        assert [doc.name for doc in library.docs] == ["hi"]
        assert library.docs[0].description == "Says hi."

    def test_blank_line_breaks_association(self):
        library = parse_library("/** Says hi. */\n\nfunction hi() {}\n")
        assert library.docs == []

    def test_line_comments_are_ignored(self):
        library = parse_library("// Says hi.\nfunction hi() {}\n")
        assert library.docs == []

    def test_first_declaration_on_a_line_wins(self):
        library = parse_library("/** Two on one line. */\nvar a = function() {}, b = function() {};\n")
        assert [doc.name for doc in library.docs] == ["a"]

    def test_nameless_declarations_are_dropped(self):
        library = parse_library("/** Callback. */\nrun(function() {});\n")
        assert library.docs == []
        assert library.errors == []

    def test_parse_failure_is_recorded_and_skipped(self):
        source = (
            "/**\n"
            " * @param {Array.<string} broken\n"
            " */\n"
            "function bad(broken) {}\n"
            "\n"
            "/** Fine. */\n"
            "function good() {}\n"
        )
        library = parse_library(source)
        assert [doc.name for doc in library.docs] == ["good"]
        assert len(library.errors) == 1
        error = library.errors[0]
        assert error.stage == "parsing comment"
        assert error.line == 1

    def test_postfix_array_param_types_associate(self):
        source = (
            "/**\n"
            " * Joins.\n"
            " * @param {string[]} parts\n"
            " * @param {module:text/sep} sep\n"
            " */\n"
            "function join(parts, sep) {}\n"
        )
        library = parse_library(source)
        assert library.errors == []
        (doc,) = library.docs
        assert doc.name == "join"
        assert [(p.name, p.type) for p in doc.params] == [("parts", "Array.<string>"), ("sep", "module:text/sep")]

    def test_reference_name_falls_back_to_first_namespace(self):
        library = parse_library("/** A. */\nLib.a = function() {};\n")
        assert library.reference_name == "Lib"
        assert library.name == "Lib"

    def test_unknown_node_kind_aborts(self):
        session = Autodoc()
        session.walker = TreeWalker({})
        with pytest.raises(UnknownNodeKindError, match="program"):
            session.parse("function f() {}\n")
