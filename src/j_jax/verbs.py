"""The verb table: which valences each verb supports, and what they are called."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class VerbInfo:
    symbol: str
    monadic: str | None
    dyadic: str | None

    @property
    def has_monadic(self) -> bool:
        return self.monadic is not None

    @property
    def has_dyadic(self) -> bool:
        return self.dyadic is not None


VERBS: Final[dict[str, VerbInfo]] = {
    "+": VerbInfo("+", monadic="identity", dyadic="add"),
    "-": VerbInfo("-", monadic="negate", dyadic="subtract"),
    "~": VerbInfo("~", monadic="iota", dyadic="find"),
    "#": VerbInfo("#", monadic="tally", dyadic="reshape"),
    "{": VerbInfo("{", monadic=None, dyadic="from"),
    ",": VerbInfo(",", monadic="ravel", dyadic="concatenate"),
    "<": VerbInfo("<", monadic="box", dyadic="less than"),
}


def verb_info(symbol: str) -> VerbInfo:
    info = VERBS.get(symbol)
    if info is None:
        raise KeyError(f"Unknown verb {symbol!r}")
    return info
