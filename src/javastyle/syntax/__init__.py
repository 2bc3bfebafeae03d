"""Syntax scope model: scopes, declarations and token contexts of one file."""

from .builder import SyntaxScopeBuilder
from .model import Declaration, DeclarationKind, Scope, SyntaxContext, SyntaxModel

__all__ = [
    "SyntaxScopeBuilder",
    "SyntaxModel",
    "SyntaxContext",
    "Scope",
    "Declaration",
    "DeclarationKind",
]
