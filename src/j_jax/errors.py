"""Structured error types for the tokenize/parse/resolve/evaluate stages."""

from __future__ import annotations

from typing import ClassVar


class JError(Exception):
    """Base class for structured j-jax errors."""

    stage: ClassVar[str] = "Interpreter"


class TokenizeError(JError):
    stage: ClassVar[str] = "Tokenize"


class UnrecognizedCharacter(TokenizeError):
    def __init__(self, char: str, pos: int) -> None:
        super().__init__(f"Unrecognized character {char!r} at index {pos}")
        self.char = char
        self.pos = pos


class InvalidNumber(TokenizeError):
    def __init__(self, text: str, pos: int) -> None:
        shown = text if len(text) <= 24 else f"{text[:20]}..."
        super().__init__(f"Invalid number {shown!r} at index {pos}")
        self.text = text
        self.pos = pos


class ParseError(JError):
    stage: ClassVar[str] = "Parse"

    def __init__(
        self,
        message: str,
        start: int,
        end: int,
        expected: tuple[str, ...] = (),
        found: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = end
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        expected_text = ""
        if self.expected:
            expected_text = f"; expected {', '.join(self.expected)}"
        found_text = ""
        if self.found is not None:
            found_text = f"; found {self.found}"
        return f"{self.message} at span [{self.start}, {self.end}){expected_text}{found_text}"


class UnexpectedToken(ParseError):
    pass


class UnexpectedEndOfInput(ParseError):
    pass


class UnmatchedParenthesis(ParseError):
    pass


class SemanticError(JError):
    stage: ClassVar[str] = "Semantic"


class NoMonadicForm(SemanticError):
    def __init__(self, verb: str) -> None:
        super().__init__(f"Verb {verb!r} has no monadic form")
        self.verb = verb


class NoDyadicForm(SemanticError):
    def __init__(self, verb: str) -> None:
        super().__init__(f"Verb {verb!r} has no dyadic form")
        self.verb = verb


class EvalError(JError):
    """Runtime failure after successful parse and resolution."""

    stage: ClassVar[str] = "Evaluation"


class ShapeMismatch(EvalError):
    """Operand shapes do not agree."""


class InvalidShape(EvalError):
    """Reshape target is not a flat vector of non-negative integers."""


class IndexOutOfRange(EvalError):
    pass


class InvalidArgument(EvalError):
    """Operand value is outside the verb's domain."""


class RecursionLimitExceeded(EvalError):
    """Nesting exceeded the configured depth in any recursive stage."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Nesting depth exceeds the limit of {limit}")
        self.limit = limit


class ArrayTooLarge(EvalError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Array of {size} elements exceeds the limit of {limit}")
        self.size = size
        self.limit = limit


def render_error(err: JError) -> str:
    """Render an error as the display text returned by ``evaluate``."""
    return f"Error: {err.stage} error: {err}"
