"""Complexity analysis: McCabe, Halstead, SLOC and maintainability index.

The ``ComplexityAnalyzer`` protocol is the seam the metrics collector
depends on; ``TreeComplexityAnalyzer`` implements it over tree-sitter trees.

Halstead figures follow the usual definitions:
    n1, n2  distinct operators / operands
    N1, N2  total operators / operands
    length      N = N1 + N2
    vocabulary  n = n1 + n2
    volume      V = N * log2(n)
    difficulty  D = (n1 / 2) * (N2 / n2)
    effort      E = D * V
    time        T = E / 18
    bugs        B = V / 3000

Maintainability index:
    MI = 171 - 3.42 * ln(E) - 0.23 * CC - 16.2 * ln(LLOC)
computed from per-function averages (file totals when there are no
functions), with each logarithm argument floored at 1.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..parsing.nodes import COMMENT_TYPES, FUNCTION_TYPES, iter_nodes, text
from ..parsing.parser import SyntaxTree

DECISION_TYPES = frozenset(
    {
        "if_statement",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "catch_clause",
        "ternary_expression",
        "switch_case",
    }
)
LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})

_NOT_LOGICAL_LINES = frozenset({"statement_block", "empty_statement"})
_CASE_TYPES = frozenset({"switch_case", "switch_default"})

# Literals counted as a single operand, without looking inside
_ATOMIC_OPERANDS = frozenset(
    {
        "string",
        "template_string",
        "regex",
        "number",
        "true",
        "false",
        "null",
        "undefined",
        "this",
        "super",
    }
)
_IGNORED_TOKENS = frozenset({")", "]", "}", ";", ",", "'", '"', "`"})


@dataclass(frozen=True)
class HalsteadMetrics:
    """Halstead complexity metrics"""

    n1: int = 0
    n2: int = 0
    N1: int = 0
    N2: int = 0

    @property
    def length(self) -> int:
        return self.N1 + self.N2

    @property
    def vocabulary(self) -> int:
        return self.n1 + self.n2

    @property
    def volume(self) -> float:
        if self.vocabulary == 0:
            return 0.0
        return self.length * math.log2(self.vocabulary)

    @property
    def difficulty(self) -> float:
        if self.n2 == 0:
            return 0.0
        return (self.n1 / 2) * (self.N2 / self.n2)

    @property
    def effort(self) -> float:
        return self.difficulty * self.volume

    @property
    def time(self) -> float:
        return self.effort / 18

    @property
    def bugs(self) -> float:
        return self.volume / 3000


@dataclass(frozen=True)
class ComplexityMetrics:
    """Complexity figures for a file or one function."""

    sloc_physical: int
    sloc_logical: int
    cyclomatic: int
    halstead: HalsteadMetrics
    param_count: int
    start_line: int = 1


@dataclass(frozen=True)
class ComplexityReport:
    aggregate: ComplexityMetrics
    functions: list[ComplexityMetrics] = field(default_factory=list)
    maintainability: float = 171.0


class ComplexityAnalyzer(Protocol):
    """Turns a syntax tree into a ``ComplexityReport``."""

    def analyze(self, tree: SyntaxTree) -> ComplexityReport:
        ...


class TreeComplexityAnalyzer:
    """``ComplexityAnalyzer`` for tree-sitter JavaScript/TypeScript trees.

    A function's counts stop at nested functions, which are reported on
    their own; the file aggregate covers the whole tree.
    """

    def analyze(self, tree: SyntaxTree) -> ComplexityReport:
        root = tree.root
        functions = [
            self._measure(node, skip=FUNCTION_TYPES, param_count=_param_count(node))
            for node in iter_nodes(root)
            if node.type in FUNCTION_TYPES
        ]
        aggregate = self._measure(
            root,
            skip=frozenset(),
            param_count=sum(f.param_count for f in functions),
        )
        return ComplexityReport(
            aggregate=aggregate,
            functions=functions,
            maintainability=maintainability_index(aggregate, functions),
        )

    def _measure(self, node: Any, skip: frozenset[str], param_count: int) -> ComplexityMetrics:
        logical = 0
        decisions = 0
        operators: Counter[str] = Counter()
        operands: Counter[str] = Counter()

        stack = [node]
        while stack:
            current = stack.pop()
            kind = current.type

            if _is_logical_line(current):
                logical += 1
            if kind in DECISION_TYPES:
                decisions += 1
            elif kind == "binary_expression":
                operator = current.child_by_field_name("operator")
                if operator is not None and operator.type in LOGICAL_OPERATORS:
                    decisions += 1

            if kind in _ATOMIC_OPERANDS:
                operands[text(current)] += 1
                # Template substitutions still hold operators and decisions
                stack.extend(
                    child
                    for child in reversed(current.named_children)
                    if child.type == "template_substitution"
                )
                continue
            if kind in COMMENT_TYPES:
                continue
            if current.child_count == 0:
                if current.is_named:
                    operands[text(current)] += 1
                elif kind not in _IGNORED_TOKENS:
                    operators[kind] += 1
                continue

            stack.extend(child for child in reversed(current.children) if child.type not in skip)

        halstead = HalsteadMetrics(
            n1=len(operators),
            n2=len(operands),
            N1=sum(operators.values()),
            N2=sum(operands.values()),
        )
        return ComplexityMetrics(
            sloc_physical=node.end_point[0] - node.start_point[0] + 1,
            sloc_logical=logical,
            cyclomatic=1 + decisions,
            halstead=halstead,
            param_count=param_count,
            start_line=node.start_point[0] + 1,
        )


def _is_logical_line(node: Any) -> bool:
    kind = node.type
    if kind in _CASE_TYPES:
        return True
    if kind in _NOT_LOGICAL_LINES:
        return False
    return kind.endswith(("_statement", "_declaration"))


def _param_count(node: Any) -> int:
    parameters = node.child_by_field_name("parameters")
    if parameters is not None:
        return sum(1 for child in parameters.named_children if child.type not in COMMENT_TYPES)
    # Un-parenthesised arrow function: `x => x * 2`
    if node.child_by_field_name("parameter") is not None:
        return 1
    return 0


def maintainability_index(aggregate: ComplexityMetrics, functions: list[ComplexityMetrics]) -> float:
    if functions:
        effort = sum(f.halstead.effort for f in functions) / len(functions)
        cyclomatic = sum(f.cyclomatic for f in functions) / len(functions)
        logical = sum(f.sloc_logical for f in functions) / len(functions)
    else:
        effort = aggregate.halstead.effort
        cyclomatic = aggregate.cyclomatic
        logical = aggregate.sloc_logical
    return (
        171
        - 3.42 * math.log(max(effort, 1))
        - 0.23 * cyclomatic
        - 16.2 * math.log(max(logical, 1))
    )
