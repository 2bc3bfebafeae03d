"""Tests for the tree-sitter Java parser wrapper."""

from pathlib import Path

import pytest

from javastyle.exceptions import AnalysisError, JavaStyleError, ParsingError
from javastyle.scanning.treesitter_parser import JavaParser, describe_error, find_first_error


class TestJavaParser:
    """Test strict parsing of Java source."""

    def test_parse_returns_program(self):
        """parse() returns a tree rooted at a program node."""
        tree = JavaParser().parse(b"class Example { }\n")
        assert tree.root_node.type == "program"
        assert not tree.root_node.has_error

    def test_parse_empty_source(self):
        """An empty file is a valid compilation unit."""
        tree = JavaParser().parse(b"")
        assert tree.root_node.type == "program"
        assert tree.root_node.child_count == 0

    def test_unterminated_string_fails(self):
        """A string literal without closing quote is a parse failure."""
        with pytest.raises(ParsingError):
            JavaParser().parse(b'class Example {\n    String text = "abc;\n}\n')

    def test_missing_brace_fails(self):
        """A class body that is never closed is a parse failure."""
        with pytest.raises(ParsingError) as exc_info:
            JavaParser().parse(b"class Example {\n    int count;\n")
        assert exc_info.value.line is not None
        assert exc_info.value.column is not None

    def test_syntax_error_fails(self):
        """An incomplete expression is a parse failure."""
        with pytest.raises(ParsingError) as exc_info:
            JavaParser().parse(b"class Example {\n    int count = ;\n}\n")
        assert exc_info.value.reason

    def test_error_carries_filepath(self):
        """The file path given to parse() is kept on the error."""
        path = Path("src/Broken.java")
        with pytest.raises(ParsingError) as exc_info:
            JavaParser().parse(b"class Broken {", filepath=path)
        assert exc_info.value.filepath == path
        assert "Broken.java" in str(exc_info.value)

    def test_parsing_error_hierarchy(self):
        """ParsingError is an AnalysisError and a JavaStyleError."""
        error = ParsingError("unexpected ';'", line=3, column=7)
        assert isinstance(error, AnalysisError)
        assert isinstance(error, JavaStyleError)
        assert error.details["line"] == "3"


class TestFindFirstError:
    """Test error node discovery."""

    def test_no_error_in_valid_tree(self):
        """A clean tree has no error node."""
        parser = JavaParser()
        tree = parser._parser.parse(b"class Example { void run() { } }")
        assert find_first_error(tree.root_node) is None

    def test_error_found_in_broken_tree(self):
        """The first ERROR or MISSING node is returned."""
        parser = JavaParser()
        code = b"class Example { int count = ; }"
        tree = parser._parser.parse(code)
        node = find_first_error(tree.root_node)
        assert node is not None
        assert node.type == "ERROR" or node.is_missing
        assert describe_error(node, code)
