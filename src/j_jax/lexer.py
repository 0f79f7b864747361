"""Tokenization for the J-like expression language."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidNumber, UnrecognizedCharacter
from .values import INT_MAX

VERB_CHARS = frozenset("+-~#{,<")

_SINGLE_TOKENS = {
    "(": "LPAREN",
    ")": "RPAREN",
}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int
    values: tuple[int, ...] = ()


def _scan_digits(source: str, start: int) -> int:
    i = start
    while i < len(source) and source[i].isascii() and source[i].isdigit():
        i += 1
    return i


def _skip_spaces(source: str, start: int) -> int:
    i = start
    while i < len(source) and source[i] == " ":
        i += 1
    return i


_INT_MAX_DIGITS = len(str(INT_MAX))


def _parse_digit_group(source: str, start: int, end: int) -> int:
    text = source[start:end]
    # Length check first: int() refuses very long digit strings.
    significant = text.lstrip("0") or "0"
    if len(significant) > _INT_MAX_DIGITS or int(significant) > INT_MAX:
        raise InvalidNumber(text, start)
    return int(significant)


def _scan_literal(source: str, start: int) -> tuple[Token, int]:
    """Scan a run of space-separated digit groups into one literal token.

    Spaces between groups are consumed as separators. Trailing spaces before a
    verb, a parenthesis or the end of input are left to the main loop.
    """
    values: list[int] = []
    end = _scan_digits(source, start)
    values.append(_parse_digit_group(source, start, end))

    while True:
        after_spaces = _skip_spaces(source, end)
        if after_spaces == end or after_spaces >= len(source):
            break
        if not (source[after_spaces].isascii() and source[after_spaces].isdigit()):
            break
        group_end = _scan_digits(source, after_spaces)
        values.append(_parse_digit_group(source, after_spaces, group_end))
        end = group_end

    kind = "NUMBER" if len(values) == 1 else "VECTOR"
    return Token(kind, source[start:end], start, end, tuple(values)), end


def tokenize(source: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0

    while i < len(source):
        ch = source[i]

        if ch == " ":
            i += 1
            continue

        if ch.isascii() and ch.isdigit():
            token, i = _scan_literal(source, i)
            tokens.append(token)
            continue

        if ch in VERB_CHARS:
            tokens.append(Token("VERB", ch, i, i + 1))
            i += 1
            continue

        if ch in _SINGLE_TOKENS:
            tokens.append(Token(_SINGLE_TOKENS[ch], ch, i, i + 1))
            i += 1
            continue

        raise UnrecognizedCharacter(ch, i)

    tokens.append(Token("EOF", "", len(source), len(source)))
    return tokens
