"""Dialect selection and the grammar fallback ladder.

A file is first parsed in the dialect implied by its extension. When that
fails the strategy picks exactly one retry based on how it failed:

    missing plugin    -> enable JSX
    unexpected token  -> TypeScript: enable JSX
                         otherwise:  enable legacy type annotations

Each attempt maps onto one tree-sitter grammar. The JavaScript grammar
already accepts JSX, so only type support decides between it and the
TypeScript grammars.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ..config import ParserConfig


class Dialect(str, Enum):
    PLAIN = "js"
    JSX = "jsx"
    TS = "ts"


class FailureKind(str, Enum):
    MISSING_PLUGIN = "missing plugin"
    UNEXPECTED_TOKEN = "unexpected token"


@dataclass(frozen=True)
class ParseAttempt:
    """One grammar configuration tried on a file."""

    dialect: Dialect
    jsx: bool = False
    legacy_types: bool = False

    @property
    def typed(self) -> bool:
        return self.dialect is Dialect.TS or self.legacy_types

    @property
    def grammar(self) -> str:
        if self.typed:
            return "tsx" if self.jsx else "typescript"
        return "javascript"

    def describe(self) -> str:
        extras = [name for name, on in (("jsx", self.jsx), ("legacy types", self.legacy_types)) if on]
        suffix = f" + {', '.join(extras)}" if extras else ""
        return f"{self.dialect.value}{suffix}"


@dataclass(frozen=True)
class ParseFailure:
    """Why a grammar rejected a file, and where."""

    kind: FailureKind
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.kind.value} at {self.line}:{self.column}"


class DialectStrategy:
    """Chooses the initial attempt for a path and the single retry."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()

    def select(self, path: str) -> Dialect:
        extension = os.path.splitext(path)[1].lstrip(".")
        if extension in self.config.ts_extensions:
            return Dialect.TS
        if extension in self.config.jsx_extensions:
            return Dialect.JSX
        return Dialect.PLAIN

    def initial(self, path: str) -> ParseAttempt:
        dialect = self.select(path)
        return ParseAttempt(dialect=dialect, jsx=dialect is Dialect.JSX)

    def fallback(self, attempt: ParseAttempt, failure: ParseFailure) -> ParseAttempt:
        if failure.kind is FailureKind.MISSING_PLUGIN or attempt.dialect is Dialect.TS:
            return replace(attempt, jsx=True)
        return replace(attempt, legacy_types=True)
