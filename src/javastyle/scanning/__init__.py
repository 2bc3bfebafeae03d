"""Parsing front-end: tree-sitter parse tree and lexical token stream."""

from .lexer import Channel, RawToken, tokenize
from .treesitter_parser import JavaParser
from .walker import WalkEvent, walk

__all__ = ["Channel", "RawToken", "tokenize", "JavaParser", "WalkEvent", "walk"]
