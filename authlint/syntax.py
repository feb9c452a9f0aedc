"""Classify ``ast`` nodes into the handful of shapes the analyzer consults."""

from __future__ import annotations

import ast
from enum import Enum
from typing import Any, Iterator, List, Optional

from .result import Location


class NodeKind(str, Enum):
    """Closed set of node shapes known to the analyzer."""

    CALL = "call"
    MEMBER_ACCESS = "member_access"
    STRING_LITERAL = "string_literal"
    OTHER = "other"


def classify(node: Any) -> NodeKind:
    if isinstance(node, ast.Call):
        return NodeKind.CALL
    if isinstance(node, ast.Attribute):
        return NodeKind.MEMBER_ACCESS
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return NodeKind.STRING_LITERAL
    return NodeKind.OTHER


def is_string_literal(node: Any) -> bool:
    return classify(node) is NodeKind.STRING_LITERAL


def receiver_of(call: ast.Call) -> Optional[ast.Attribute]:
    """Return the member-access callee of ``call`` or ``None`` for bare calls."""

    func = getattr(call, "func", None)
    if classify(func) is NodeKind.MEMBER_ACCESS:
        return func
    return None


def argument_list_of(call: ast.Call) -> Optional[List[ast.expr]]:
    """Return positional argument expressions followed by keyword values.

    ``None`` means the node carries no usable argument list at all.
    """

    args = getattr(call, "args", None)
    keywords = getattr(call, "keywords", None)
    if not isinstance(args, list) or not isinstance(keywords, list):
        return None
    expressions: List[ast.expr] = list(args)
    for item in keywords:
        value = getattr(item, "value", None)
        if value is not None:
            expressions.append(value)
    return expressions


def location_of(node: ast.AST) -> Optional[Location]:
    """Return the 1-based span of ``node``, or ``None`` when it has no position."""

    try:
        line = node.lineno
        column = node.col_offset
    except AttributeError:
        return None
    if not isinstance(line, int) or not isinstance(column, int):
        return None
    end_line = getattr(node, "end_lineno", None)
    end_column = getattr(node, "end_col_offset", None)
    if end_line is None or end_column is None:
        end_line, end_column = line, column
    return Location(line=line, column=column + 1, end_line=end_line, end_column=end_column + 1)


def children(node: ast.AST) -> Iterator[ast.AST]:
    return ast.iter_child_nodes(node)


def iter_nodes(tree: ast.AST) -> Iterator[ast.AST]:
    """Yield every node of ``tree`` in breadth-first order."""

    return ast.walk(tree)
