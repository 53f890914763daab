"""Node-type vocabulary and traversal helpers for tree-sitter JS/TS trees.

All walks are iterative: long operator chains produce trees far deeper
than Python's recursion limit.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

BLOCK_TYPES = frozenset({"statement_block", "class_body"})

# Function-valued expressions, including class and object methods
FUNCTION_EXPRESSION_TYPES = frozenset(
    {"function_expression", "generator_function", "arrow_function", "method_definition"}
)

# Every construct the complexity analyzer reports as a function
FUNCTION_TYPES = FUNCTION_EXPRESSION_TYPES | {
    "function_declaration",
    "generator_function_declaration",
}

CALL_TYPE = "call_expression"
IMPORT_TYPE = "import_statement"
COMMENT_TYPES = frozenset({"comment", "html_comment", "hash_bang_line"})


def walk(root: Any) -> Iterator[tuple[Any, bool]]:
    """Yield ``(node, True)`` on entering and ``(node, False)`` on leaving."""
    stack: list[tuple[Any, bool]] = [(root, True)]
    while stack:
        node, entering = stack.pop()
        yield node, entering
        if entering:
            stack.append((node, False))
            stack.extend((child, True) for child in reversed(node.children))


def iter_nodes(root: Any, skip: frozenset[str] = frozenset()) -> Iterator[Any]:
    """Pre-order iteration; subtrees rooted at a ``skip`` type (other than
    ``root`` itself) are not entered."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(
            child for child in reversed(node.children) if child.type not in skip
        )


def text(node: Any) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


def string_value(node: Any) -> Optional[str]:
    """Value of a string literal node, None for anything else."""
    if node is None or node.type != "string":
        return None
    return "".join(text(child) for child in node.named_children)


def import_source(node: Any) -> Optional[str]:
    """Module path of an import statement or ``require``/``import`` call.

    Only literal string sources count; ``require(name)`` or template
    literals return None.
    """
    if node.type == IMPORT_TYPE:
        return string_value(node.child_by_field_name("source"))
    if node.type == CALL_TYPE:
        callee = node.child_by_field_name("function")
        if callee is None:
            return None
        if not (callee.type == "import" or (callee.type == "identifier" and text(callee) == "require")):
            return None
        arguments = node.child_by_field_name("arguments")
        if arguments is None or not arguments.named_children:
            return None
        return string_value(arguments.named_children[0])
    return None
