"""Tests for format/javadoc.py - doc comment parsing and matching."""

import pytest

from javastyle.format.javadoc import (
    DocTag,
    is_unchecked,
    match_declaration,
    parse_doc_comment,
    simple_type_name,
)
from javastyle.syntax.model import Declaration, DeclarationKind

ADD_DOC = """/**
     * Adds two numbers.
     *
     * @param left first operand
     * @param right second operand
     * @return the sum
     */"""


def method(
    name="add",
    parameters=("left", "right"),
    returns_value=True,
    type_parameters=(),
    thrown_types=(),
):
    return Declaration(
        kind=DeclarationKind.METHOD,
        name=name,
        node_type="method_declaration",
        line=1,
        start_byte=0,
        parameters=tuple(parameters),
        type_parameters=tuple(type_parameters),
        returns_value=returns_value,
        thrown_types=tuple(thrown_types),
    )


def field(name="count"):
    return Declaration(
        kind=DeclarationKind.FIELD, name=name, node_type="field_declaration", line=1, start_byte=0
    )


class TestParseDocComment:
    """Test splitting a doc comment into description and tags."""

    def test_description_and_tags(self):
        doc = parse_doc_comment(ADD_DOC)
        assert doc.description == "Adds two numbers."
        assert doc.tags == (
            DocTag("param", "left"),
            DocTag("param", "right"),
            DocTag("return", "the"),
        )
        assert doc.has_return
        assert doc.describes_callable
        assert not doc.inherits_doc

    def test_single_line(self):
        doc = parse_doc_comment("/** Counter of visits. */")
        assert doc.description == "Counter of visits."
        assert doc.tags == ()
        assert not doc.describes_callable

    def test_type_parameter_tag(self):
        doc = parse_doc_comment("/**\n * Box.\n * @param <T> element type\n */")
        tag = doc.tags[0]
        assert tag.is_type_parameter
        assert tag.parameter_name == "T"

    def test_inherit_doc(self):
        doc = parse_doc_comment("/** {@inheritDoc} */")
        assert doc.inherits_doc

    def test_tag_without_argument(self):
        doc = parse_doc_comment("/**\n * @deprecated\n */")
        assert doc.tags == (DocTag("deprecated", ""),)

    def test_inline_tags_stay_in_description(self):
        doc = parse_doc_comment("/** Uses {@link Other} heavily. */")
        assert doc.tags == ()
        assert "{@link Other}" in doc.description


class TestMatchDeclaration:
    """Test matching a doc comment to the declaration after it."""

    def test_full_match(self):
        match = match_declaration(parse_doc_comment(ADD_DOC), method())
        assert match.matches

    def test_nothing_declared(self):
        match = match_declaration(parse_doc_comment("/** Orphan. */"), None)
        assert match.subject_mismatch
        assert not match.matches

    def test_callable_tags_on_field(self):
        """@return on a field means the comment documents something else."""
        doc = parse_doc_comment("/**\n * Count.\n * @return nothing\n */")
        match = match_declaration(doc, field())
        assert match.subject_mismatch

    def test_plain_doc_on_field(self):
        match = match_declaration(parse_doc_comment("/** Count. */"), field())
        assert match.matches

    def test_unknown_parameter(self):
        doc = parse_doc_comment("/**\n * @param other x\n * @return y\n */")
        match = match_declaration(doc, method(parameters=()))
        assert match.unmatched_tags == ("@param other",)

    def test_undocumented_parameters(self):
        doc = parse_doc_comment("/**\n * @param left x\n * @return y\n */")
        match = match_declaration(doc, method())
        assert match.undocumented_parameters == ("right",)
        assert not match.unmatched_tags

    def test_return_missing(self):
        doc = parse_doc_comment("/**\n * @param left x\n * @param right y\n */")
        match = match_declaration(doc, method())
        assert match.return_missing

    def test_return_on_void_method(self):
        doc = parse_doc_comment("/**\n * @return nothing\n */")
        match = match_declaration(doc, method(parameters=(), returns_value=False))
        assert match.unmatched_tags == ("@return",)
        assert not match.return_missing

    def test_type_parameters(self):
        doc = parse_doc_comment("/**\n * @param <T> type\n * @param <U> other\n */")
        match = match_declaration(
            doc, method(parameters=(), returns_value=False, type_parameters=("T",))
        )
        assert match.unmatched_tags == ("@param <U>",)

    def test_inherit_doc_skips_tags(self):
        doc = parse_doc_comment("/** {@inheritDoc} */")
        assert match_declaration(doc, method()).matches

    def test_record_components(self):
        record = Declaration(
            kind=DeclarationKind.TYPE,
            name="Point",
            node_type="record_declaration",
            line=1,
            start_byte=0,
            parameters=("xCoord", "yCoord"),
        )
        doc = parse_doc_comment("/**\n * Point.\n * @param xCoord x\n */")
        match = match_declaration(doc, record)
        assert match.undocumented_parameters == ("yCoord",)

    def test_class_params_are_unmatched(self):
        cls = Declaration(
            kind=DeclarationKind.TYPE,
            name="Sample",
            node_type="class_declaration",
            line=1,
            start_byte=0,
        )
        doc = parse_doc_comment("/**\n * @param value x\n */")
        assert match_declaration(doc, cls).unmatched_tags == ("@param value",)


class TestThrowsTags:
    """Test @throws and @exception against the throws clause."""

    def test_undeclared_checked_exception(self):
        doc = parse_doc_comment("/**\n * @throws java.io.IOException on failure\n */")
        match = match_declaration(doc, method(parameters=(), returns_value=False))
        assert match.unmatched_tags == ("@throws java.io.IOException",)
        assert not match.matches

    def test_declared_exception_matches_by_simple_name(self):
        doc = parse_doc_comment("/**\n * @throws java.io.IOException on failure\n */")
        declaration = method(parameters=(), returns_value=False, thrown_types=("IOException",))
        assert match_declaration(doc, declaration).matches

    def test_unchecked_exception_needs_no_clause(self):
        doc = parse_doc_comment(
            "/**\n * @throws IllegalArgumentException if negative\n"
            " * @throws ParseRuntimeException if garbled\n"
            " * @throws AssertionError never\n */"
        )
        match = match_declaration(doc, method(parameters=(), returns_value=False))
        assert match.matches

    def test_exception_alias(self):
        doc = parse_doc_comment("/**\n * @exception TimeoutException late\n */")
        match = match_declaration(doc, method(parameters=(), returns_value=False))
        assert match.unmatched_tags == ("@exception TimeoutException",)

        declared = method(parameters=(), returns_value=False, thrown_types=("TimeoutException",))
        assert match_declaration(doc, declared).matches

    def test_throws_without_type(self):
        doc = parse_doc_comment("/**\n * @throws\n */")
        match = match_declaration(doc, method(parameters=(), returns_value=False))
        assert match.unmatched_tags == ("@throws",)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("IOException", "IOException"),
            ("java.io.IOException", "IOException"),
            ("@Nonnull java.io.IOException", "IOException"),
            ("Outer.Failure<T>", "Failure"),
            ("", ""),
        ],
    )
    def test_simple_type_name(self, text, expected):
        assert simple_type_name(text) == expected

    def test_is_unchecked(self):
        assert is_unchecked("java.lang.NullPointerException")
        assert is_unchecked("StackOverflowError")
        assert not is_unchecked("IOException")
