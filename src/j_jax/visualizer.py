"""Indented outline rendering of parse trees, for debugging output."""

from __future__ import annotations

from .ast import AmbiguousVerb, DyadicVerb, Literal, MonadicVerb, Node, Parenthesized, ResolvedNode
from .values import JArray


def _format_literal(value: JArray) -> str:
    if not value.shape:
        return str(value.item())
    return f"[{' '.join(str(x) for x in value.data)}]"


def _render(node: Node | ResolvedNode, depth: int, lines: list[str]) -> None:
    indent = "  " * depth

    if isinstance(node, Literal):
        lines.append(f"{indent}Literal: {_format_literal(node.value)}")
        return

    if isinstance(node, Parenthesized):
        lines.append(f"{indent}Parenthesized")
        _render(node.inner, depth + 1, lines)
        return

    if isinstance(node, AmbiguousVerb):
        lines.append(f"{indent}AmbiguousVerb: {node.verb!r}")
        if node.left is not None:
            lines.append(f"{indent}Left:")
            _render(node.left, depth + 1, lines)
        lines.append(f"{indent}Right:")
        _render(node.right, depth + 1, lines)
        return

    if isinstance(node, MonadicVerb):
        lines.append(f"{indent}MonadicVerb: {node.verb!r}")
        _render(node.operand, depth + 1, lines)
        return

    if isinstance(node, DyadicVerb):
        lines.append(f"{indent}DyadicVerb: {node.verb!r}")
        _render(node.left, depth + 1, lines)
        _render(node.right, depth + 1, lines)
        return

    raise TypeError(f"Unsupported AST node: {type(node)!r}")


def render_tree(node: Node | ResolvedNode) -> str:
    lines: list[str] = []
    _render(node, 0, lines)
    return "\n".join(lines)
