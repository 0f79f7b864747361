"""Parser producing an AST with valence-ambiguous verb nodes.

Grammar (right-recursive, uniform precedence)::

    expression := term (verb expression)?
    term       := verb term | literal | '(' expression ')'
    literal    := NUMBER | VECTOR

A leading verb takes the next term as its operand, so ``~3+~3`` groups as
``(~3)+(~3)``. A dyadic right operand is a whole expression, so ``2+3+4`` is
``2+(3+4)``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ast import AmbiguousVerb, Literal, Node, Parenthesized
from .config import MAX_DEPTH
from .errors import ParseError, RecursionLimitExceeded, UnexpectedEndOfInput, UnexpectedToken, UnmatchedParenthesis
from .lexer import Token, tokenize
from .values import JArray

_TERM_START = ("VERB", "NUMBER", "VECTOR", "LPAREN")


@dataclass
class _Parser:
    tokens: list[Token]
    max_depth: int = MAX_DEPTH
    index: int = 0
    depth: int = 0
    open_parens: int = 0

    def parse_expression_only(self) -> Node:
        expr = self._parse_expression()
        tok = self._peek()
        if tok.kind == "RPAREN":
            self._error(UnmatchedParenthesis, tok, message="Unmatched closing parenthesis")
        if tok.kind != "EOF":
            self._error(UnexpectedToken, tok, expected=("VERB", "EOF"))
        return expr

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def _error(
        self,
        kind: type[ParseError],
        tok: Token | None = None,
        *,
        message: str | None = None,
        expected: tuple[str, ...] = (),
    ) -> None:
        token = tok if tok is not None else self._peek()
        if token.kind == "EOF":
            found = "EOF"
            detail = message if message is not None else "Unexpected end of input"
        else:
            found = f"{token.kind}({token.text})"
            detail = message if message is not None else "Unexpected token"
        raise kind(detail, token.pos, token.end, expected=tuple(dict.fromkeys(expected)), found=found)

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise RecursionLimitExceeded(self.max_depth)

    def _leave(self) -> None:
        self.depth -= 1

    def _parse_expression(self) -> Node:
        self._enter()
        try:
            term = self._parse_term()
            tok = self._peek()
            if tok.kind != "VERB":
                return term
            self._advance()
            right = self._parse_expression()
            return AmbiguousVerb(verb=tok.text, right=right, left=term, pos=tok.pos)
        finally:
            self._leave()

    def _parse_term(self) -> Node:
        tok = self._peek()

        if tok.kind == "EOF":
            self._error(UnexpectedEndOfInput, tok, expected=_TERM_START)

        if tok.kind in {"NUMBER", "VECTOR"}:
            self._advance()
            if tok.kind == "NUMBER":
                return Literal(JArray.scalar(tok.values[0]))
            return Literal(JArray.vector(tok.values))

        if tok.kind == "VERB":
            self._advance()
            self._enter()
            try:
                operand = self._parse_term()
            finally:
                self._leave()
            return AmbiguousVerb(verb=tok.text, right=operand, left=None, pos=tok.pos)

        if tok.kind == "LPAREN":
            self._advance()
            self.open_parens += 1
            inner = self._parse_expression()
            closing = self._peek()
            if closing.kind == "EOF":
                self._error(UnmatchedParenthesis, tok, message="Unclosed parenthesis", expected=("RPAREN",))
            if closing.kind != "RPAREN":
                self._error(UnexpectedToken, closing, expected=("VERB", "RPAREN"))
            self._advance()
            self.open_parens -= 1
            return Parenthesized(inner)

        if tok.kind == "RPAREN" and self.open_parens == 0:
            self._error(UnmatchedParenthesis, tok, message="Unmatched closing parenthesis")
        self._error(UnexpectedToken, tok, expected=_TERM_START)
        raise AssertionError("unreachable")


def parse(source: str | list[Token], *, max_depth: int = MAX_DEPTH) -> Node:
    """Parse source text (or an already tokenized stream) into an ambiguous AST."""
    tokens = tokenize(source) if isinstance(source, str) else list(source)
    if not tokens or tokens[-1].kind != "EOF":
        end = tokens[-1].end if tokens else 0
        tokens.append(Token("EOF", "", end, end))
    return _Parser(tokens, max_depth=max_depth).parse_expression_only()
