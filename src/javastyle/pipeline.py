"""Analysis pipeline for one Java source file.

Stages, strictly in order:
    1. Parse the source with tree-sitter (any syntax error aborts)
    2. Derive the token stream and build the TokenIndex
    3. Build the SyntaxModel in one tree walk; code tokens get their roles
    4. Evaluate every token, then every line
    5. Summarize per category and finalize the Verdict

Example:
    >>> from javastyle import analyze_source
    >>> verdict = analyze_source("class Example { }")
    >>> verdict.passed
    True
"""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .config import DEFAULT_CONFIG, StyleConfig
from .exceptions import FileAccessError, ParsingError
from .format.evaluator import FormatEvaluator
from .format.index import TokenIndex
from .format.tokens import TokenCategory
from .logging_config import get_logger
from .scanning.lexer import tokenize
from .scanning.treesitter_parser import JavaParser
from .summaries import (
    CategorySummary,
    CodeTokenSummary,
    CommentSummary,
    DocCommentSummary,
    LineSummary,
    WhitespaceSummary,
)
from .syntax.builder import SyntaxScopeBuilder
from .verdict import Verdict

logger = get_logger(__name__)

_SUMMARY_FACTORIES: dict[TokenCategory, Callable[[], CategorySummary[Any]]] = {
    TokenCategory.CODE: CodeTokenSummary,
    TokenCategory.WHITESPACE: WhitespaceSummary,
    TokenCategory.COMMENT: CommentSummary,
    TokenCategory.DOC_COMMENT: DocCommentSummary,
}


def analyze_source(
    source: Union[str, bytes],
    config: Optional[StyleConfig] = None,
    path: Optional[Path] = None,
) -> Verdict:
    """Check Java source code and return its finalized verdict.

    Args:
        source: Java source, as text or UTF-8 bytes
        config: Rule parameters (defaults to DEFAULT_CONFIG)
        path: File the source came from, for reporting only

    Returns:
        Finalized Verdict

    Raises:
        ParsingError: If the source is not valid UTF-8 or has lexical or
            syntax errors
        InvariantViolation: If an internal consistency check fails
    """
    config = config or DEFAULT_CONFIG
    code = source.encode("utf-8") if isinstance(source, str) else source
    if code.startswith(codecs.BOM_UTF8):
        code = code[len(codecs.BOM_UTF8) :]
    check_encoding(code, path)
    label = path or "<source>"

    tree = JavaParser().parse(code, filepath=path)
    index = TokenIndex.build(tokenize(tree, code))
    logger.debug(f"{label}: {index.count()} tokens on {index.num_lines()} lines")

    model = SyntaxScopeBuilder(index, code).build(tree.root_node)
    FormatEvaluator(index, model, config).evaluate_all()

    summaries = {category: factory() for category, factory in _SUMMARY_FACTORIES.items()}
    for token in index:
        summaries[token.category].include(token)
    line_summary = LineSummary(max_line_length=config.max_line_length)
    for line in index.lines:
        line_summary.include(line)

    verdict = Verdict(path=path, allowed_violations=config.allowed_violations)
    for summary in [*summaries.values(), line_summary]:
        summary.summarize()
        verdict.include(summary)
    verdict.finalize()

    logger.debug(f"{label}: {verdict.total_violations} violations")
    return verdict


def check_encoding(code: bytes, path: Optional[Path] = None) -> None:
    """Make sure every later byte-range decode of ``code`` succeeds.

    Raises:
        ParsingError: At the first byte that is not valid UTF-8
    """
    try:
        code.decode("utf-8")
    except UnicodeDecodeError as e:
        line_start = code.rfind(b"\n", 0, e.start) + 1
        raise ParsingError(
            f"Invalid UTF-8 at byte {e.start}: {e.reason}",
            filepath=path,
            line=code.count(b"\n", 0, e.start) + 1,
            column=e.start - line_start + 1,
        ) from e


def analyze_file(path: Union[str, Path], config: Optional[StyleConfig] = None) -> Verdict:
    """Read a Java file and check it.

    A UTF-8 byte order mark is dropped before parsing.

    Raises:
        FileAccessError: If the file cannot be read or is not UTF-8
        ParsingError: If the source has lexical or syntax errors
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(path, str(e)) from e

    try:
        return analyze_source(text, config=config, path=path)
    except ParsingError as e:
        logger.warning(f"Parse failure in {path}: {e.reason}")
        raise
