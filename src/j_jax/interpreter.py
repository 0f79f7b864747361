"""Pipeline entry points: tokenize, parse, resolve, evaluate, format."""

from __future__ import annotations

import logging

from .config import EvaluationLimits
from .errors import JError, RecursionLimitExceeded, render_error
from .evaluator import evaluate_node
from .formatter import format_array
from .lexer import tokenize
from .parser import parse
from .resolver import resolve
from .values import JArray
from .visualizer import render_tree

logger = logging.getLogger(__name__)


def execute_with_debug(source: str, *, limits: EvaluationLimits | None = None) -> tuple[JArray, str]:
    """Run the full pipeline and also return the rendered ambiguous parse tree."""
    limits = limits if limits is not None else EvaluationLimits.from_env()
    tokens = tokenize(source)
    tree = parse(tokens, max_depth=limits.max_depth)
    resolved = resolve(tree, max_depth=limits.max_depth)
    result = evaluate_node(resolved, limits=limits)
    return result, f"Parse Tree:\n{render_tree(tree)}"


def execute(source: str, *, limits: EvaluationLimits | None = None) -> JArray:
    """Evaluate ``source`` to an array, raising a ``JError`` on failure."""
    limits = limits if limits is not None else EvaluationLimits.from_env()
    tree = parse(tokenize(source), max_depth=limits.max_depth)
    return evaluate_node(resolve(tree, max_depth=limits.max_depth), limits=limits)


def evaluate(source: str) -> str:
    """Evaluate ``source`` and return display text; failures become ``Error: ...`` text."""
    limits = EvaluationLimits.from_env()
    try:
        return format_array(execute(source, limits=limits))
    except JError as err:
        logger.debug("evaluation of %r failed: %s", source, err)
        return render_error(err)
    except RecursionError:
        logger.debug("evaluation of %r exhausted the Python stack", source)
        return render_error(RecursionLimitExceeded(limits.max_depth))
