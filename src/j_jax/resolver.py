"""Semantic pass deciding the valence of every verb node."""

from __future__ import annotations

from .ast import AmbiguousVerb, DyadicVerb, Literal, MonadicVerb, Node, Parenthesized, ResolvedNode
from .config import MAX_DEPTH
from .errors import NoDyadicForm, NoMonadicForm, RecursionLimitExceeded
from .verbs import verb_info


def _resolve(node: Node, *, depth: int, max_depth: int) -> ResolvedNode:
    if depth > max_depth:
        raise RecursionLimitExceeded(max_depth)

    if isinstance(node, Literal):
        return node

    if isinstance(node, Parenthesized):
        return _resolve(node.inner, depth=depth + 1, max_depth=max_depth)

    if isinstance(node, AmbiguousVerb):
        # Children first, so the innermost invalid use is reported.
        right = _resolve(node.right, depth=depth + 1, max_depth=max_depth)
        left = None if node.left is None else _resolve(node.left, depth=depth + 1, max_depth=max_depth)
        info = verb_info(node.verb)
        if left is None:
            if not info.has_monadic:
                raise NoMonadicForm(node.verb)
            return MonadicVerb(verb=node.verb, operand=right)
        if not info.has_dyadic:
            raise NoDyadicForm(node.verb)
        return DyadicVerb(verb=node.verb, left=left, right=right)

    raise TypeError(f"Unsupported AST node: {type(node)!r}")


def resolve(node: Node, *, max_depth: int = MAX_DEPTH) -> ResolvedNode:
    return _resolve(node, depth=1, max_depth=max_depth)
