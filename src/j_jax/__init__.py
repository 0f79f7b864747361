"""j-jax public API."""

from .config import EvaluationLimits
from .errors import (
    ArrayTooLarge,
    EvalError,
    IndexOutOfRange,
    InvalidArgument,
    InvalidNumber,
    InvalidShape,
    JError,
    NoDyadicForm,
    NoMonadicForm,
    ParseError,
    RecursionLimitExceeded,
    SemanticError,
    ShapeMismatch,
    TokenizeError,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnmatchedParenthesis,
    UnrecognizedCharacter,
)
from .evaluator import evaluate_node
from .formatter import format_array
from .interpreter import evaluate, execute, execute_with_debug
from .lexer import Token, tokenize
from .parser import parse
from .resolver import resolve
from .values import JArray
from .visualizer import render_tree

__all__ = [
    "evaluate",
    "execute",
    "execute_with_debug",
    "tokenize",
    "parse",
    "resolve",
    "evaluate_node",
    "format_array",
    "render_tree",
    "Token",
    "JArray",
    "EvaluationLimits",
    "JError",
    "TokenizeError",
    "UnrecognizedCharacter",
    "InvalidNumber",
    "ParseError",
    "UnexpectedToken",
    "UnexpectedEndOfInput",
    "UnmatchedParenthesis",
    "SemanticError",
    "NoMonadicForm",
    "NoDyadicForm",
    "EvalError",
    "ShapeMismatch",
    "InvalidShape",
    "IndexOutOfRange",
    "InvalidArgument",
    "RecursionLimitExceeded",
    "ArrayTooLarge",
]
