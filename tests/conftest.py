"""Shared test fixtures for javastyle tests."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from javastyle.config import DEFAULT_CONFIG, StyleConfig
from javastyle.format.evaluator import FormatEvaluator
from javastyle.format.index import TokenIndex
from javastyle.format.tokens import Token
from javastyle.scanning.lexer import tokenize
from javastyle.scanning.treesitter_parser import JavaParser
from javastyle.syntax.builder import SyntaxScopeBuilder
from javastyle.syntax.model import SyntaxModel

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "java"


@dataclass
class Analysis:
    """Intermediate results of the pipeline for one snippet."""

    code: bytes
    tree: Any
    index: TokenIndex
    model: SyntaxModel

    def token(self, text: str, occurrence: int = 0) -> Token:
        """The ``occurrence``-th token whose text is ``text``."""
        matches = [t for t in self.index if t.text == text]
        assert len(matches) > occurrence, f"no token {text!r} #{occurrence}"
        return matches[occurrence]


def build_analysis(source: str) -> Analysis:
    code = source.encode("utf-8")
    tree = JavaParser().parse(code)
    index = TokenIndex.build(tokenize(tree, code))
    model = SyntaxScopeBuilder(index, code).build(tree.root_node)
    return Analysis(code=code, tree=tree, index=index, model=model)


@pytest.fixture
def analyze_snippet():
    """Parse, index and build the syntax model of a Java snippet."""
    return build_analysis


@pytest.fixture
def evaluate_snippet():
    """Like analyze_snippet, then evaluate every token and line."""

    def _evaluate(source: str, config: StyleConfig = DEFAULT_CONFIG) -> Analysis:
        analysis = build_analysis(source)
        FormatEvaluator(analysis.index, analysis.model, config).evaluate_all()
        return analysis

    return _evaluate


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep user and project config files and JAVASTYLE_* variables out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("JAVASTYLE_"):
            monkeypatch.delenv(key)
