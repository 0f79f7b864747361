"""AST nodes for the ambiguous (parsed) and resolved stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .values import JArray


@dataclass(frozen=True)
class Literal:
    value: JArray


@dataclass(frozen=True)
class AmbiguousVerb:
    """Verb occurrence whose valence is decided later by the resolver."""

    verb: str
    right: "Node"
    left: "Node | None" = None
    pos: int = 0


@dataclass(frozen=True)
class Parenthesized:
    inner: "Node"


@dataclass(frozen=True)
class MonadicVerb:
    verb: str
    operand: "ResolvedNode"


@dataclass(frozen=True)
class DyadicVerb:
    verb: str
    left: "ResolvedNode"
    right: "ResolvedNode"


Node = Union[Literal, AmbiguousVerb, Parenthesized]
ResolvedNode = Union[Literal, MonadicVerb, DyadicVerb]
