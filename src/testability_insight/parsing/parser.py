"""Tree-sitter parser for JavaScript and TypeScript sources.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code, "src/app.ts")
    tree.root.type   # "program"

Tree-sitter never raises on bad input; it returns a tree with ERROR or
MISSING nodes instead. Such a tree counts as a failed attempt and triggers
the dialect fallback. If the retry fails too, ``ParsingError`` is raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from ..config import ParserConfig
from ..exceptions import FileAccessError, ParsingError
from ..logging_config import get_logger
from .dialects import DialectStrategy, FailureKind, ParseAttempt, ParseFailure

logger = get_logger(__name__)

_GRAMMARS: dict[str, Callable[[], Any]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


@dataclass
class SyntaxTree:
    """A successfully parsed file."""

    path: str
    source: bytes
    tree: Any
    attempt: ParseAttempt

    @property
    def root(self) -> Any:
        return self.tree.root_node

    @property
    def grammar(self) -> str:
        return self.attempt.grammar


class SourceParser(Protocol):
    """Anything that turns source text into a ``SyntaxTree``."""

    def parse(self, code: str, path: str) -> SyntaxTree:
        ...


def read_source(path: str) -> str:
    """Read a source file as UTF-8, replacing undecodable bytes."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(path, str(e)) from e


class TreeSitterParser:
    """``SourceParser`` backed by the tree-sitter JavaScript/TypeScript grammars."""

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        strategy: Optional[DialectStrategy] = None,
    ) -> None:
        self.strategy = strategy or DialectStrategy(config)
        self._parsers: dict[str, tree_sitter.Parser] = {}

    def parse(self, code: str, path: str) -> SyntaxTree:
        """Parse ``code`` with the dialect chosen for ``path``.

        Raises:
            ParsingError: If the initial attempt and its retry both fail
        """
        source = code.encode("utf-8")
        attempt = self.strategy.initial(path)
        tree, failure = self._attempt(source, attempt)
        if failure is None:
            return SyntaxTree(path=path, source=source, tree=tree, attempt=attempt)

        retry = self.strategy.fallback(attempt, failure)
        logger.info(
            f"Parsing {path} failed with {failure}, retrying as {retry.describe()}"
        )
        if retry.grammar != attempt.grammar:
            tree, failure = self._attempt(source, retry)
            if failure is None:
                return SyntaxTree(path=path, source=source, tree=tree, attempt=retry)

        raise ParsingError(path, retry.describe(), str(failure))

    def parse_file(self, path: str) -> SyntaxTree:
        """Read and parse a file from disk."""
        return self.parse(read_source(path), path)

    def _attempt(self, source: bytes, attempt: ParseAttempt) -> tuple[Any, Optional[ParseFailure]]:
        tree = self._parser_for(attempt.grammar).parse(source)
        if not tree.root_node.has_error:
            return tree, None
        return tree, _classify_failure(tree.root_node)

    def _parser_for(self, grammar: str) -> tree_sitter.Parser:
        parser = self._parsers.get(grammar)
        if parser is None:
            language = tree_sitter.Language(_GRAMMARS[grammar]())
            parser = tree_sitter.Parser(language)
            self._parsers[grammar] = parser
        return parser


def _first_error(root: Any) -> Optional[Any]:
    """Pre-order search for the first ERROR or MISSING node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _first_token(node: Any) -> bytes:
    while node.child_count:
        node = node.children[0]
    return node.text or b""


def _classify_failure(root: Any) -> ParseFailure:
    node = _first_error(root) or root
    row, column = node.start_point
    if not node.is_missing and _first_token(node).startswith(b"<"):
        kind = FailureKind.MISSING_PLUGIN
    else:
        kind = FailureKind.UNEXPECTED_TOKEN
    return ParseFailure(kind=kind, line=row + 1, column=column + 1)
