"""Structural metrics read directly off the syntax tree or the raw text."""

from __future__ import annotations

import re
from typing import Any, Callable, TypeVar

from ..parsing.nodes import BLOCK_TYPES, CALL_TYPE, FUNCTION_EXPRESSION_TYPES, iter_nodes, walk

T = TypeVar("T")

# Block comments, and line comments not preceded by ':' (URLs) or '\'
_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/|([^\\:]|^)//.*$", re.MULTILINE)
_LINE_SPLIT_RE = re.compile(r"\r?\n")


def depth(node: Any) -> int:
    """Maximum block nesting depth below ``node``.

    The counter goes up on entering a block or class body and down on
    leaving it; 0 when the subtree holds no block.
    """
    current = 0
    deepest = 0
    for child, entering in walk(node):
        if child.type not in BLOCK_TYPES:
            continue
        if entering:
            current += 1
            deepest = max(deepest, current)
        else:
            current -= 1
    return deepest


def calls(node: Any) -> int:
    """Number of call expressions below ``node``. Tagged templates are not calls."""
    count = 0
    for child in iter_nodes(node):
        if child.type != CALL_TYPE:
            continue
        arguments = child.child_by_field_name("arguments")
        if arguments is not None and arguments.type == "template_string":
            continue
        count += 1
    return count


def each_function(node: Any, method: Callable[[Any], T]) -> list[T]:
    """Apply ``method`` to every function expression, arrow or method, in source order."""
    return [method(child) for child in iter_nodes(node) if child.type in FUNCTION_EXPRESSION_TYPES]


def comments(code: str) -> int:
    """Number of non-empty lines covered by comments.

    Comment markers inside string or regex literals are counted too.
    """
    total = 0
    for match in _COMMENT_RE.finditer(code):
        total += sum(1 for line in _LINE_SPLIT_RE.split(match.group(0)) if line != "")
    return total
