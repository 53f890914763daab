"""Syntax-tree parsing for JavaScript and TypeScript sources."""

from .dialects import Dialect, DialectStrategy, FailureKind, ParseAttempt, ParseFailure
from .parser import SourceParser, SyntaxTree, TreeSitterParser, read_source

__all__ = [
    "Dialect",
    "DialectStrategy",
    "FailureKind",
    "ParseAttempt",
    "ParseFailure",
    "SourceParser",
    "SyntaxTree",
    "TreeSitterParser",
    "read_source",
]
