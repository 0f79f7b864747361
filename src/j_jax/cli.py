"""Command-line front end: evaluate expressions once, or run a line REPL."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from .config import EvaluationLimits
from .errors import JError, RecursionLimitExceeded, render_error
from .formatter import format_array
from .interpreter import evaluate, execute_with_debug

HELP_TEXT = """\
Verbs (monadic form when nothing stands to the left, dyadic otherwise):

  +   identity            add elementwise           1 2 3+4 5 6   ->  5 7 9
  -   negate              subtract elementwise      10-~4         ->  10 9 8 7
  ~   iota 0..n-1         find first index (-1)     2~1 2 3       ->  1
  #   tally               reshape, cycling data     2 3#~6        ->  2x3 table
  {   (none)              from: index first axis    4{~7          ->  4
  ,   ravel               concatenate               1,2,3         ->  1 2 3
  <   box (passthrough)   less than, 1/0            1<0 1 2       ->  0 0 1

A leading verb applies to the term right after it; a verb between terms takes
everything to its right as the right argument, so 1+2+3+4 is 1+(2+(3+4)).
Parentheses group. Commands: )help, )exit
"""

_PROMPT = "   "


def _run_one(source: str, *, show_tree: bool, out: TextIO) -> bool:
    if not show_tree:
        text = evaluate(source)
        print(text, file=out)
        return not text.startswith("Error: ")
    try:
        result, tree = execute_with_debug(source)
    except JError as err:
        print(render_error(err), file=out)
        return False
    except RecursionError:
        print(render_error(RecursionLimitExceeded(EvaluationLimits.from_env().max_depth)), file=out)
        return False
    print(tree, file=out)
    print(format_array(result), file=out)
    return True


def repl(*, show_tree: bool = False, stdin: TextIO | None = None, out: TextIO | None = None) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    out = out if out is not None else sys.stdout
    interactive = stdin.isatty()
    while True:
        if interactive:
            print(_PROMPT, end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            return 0
        source = line.rstrip("\r\n")
        command = source.strip()
        if not command:
            continue
        if command == ")exit":
            return 0
        if command == ")help":
            print(HELP_TEXT, file=out, end="")
            continue
        _run_one(source, show_tree=show_tree, out=out)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="j-jax", description=__doc__)
    parser.add_argument(
        "expressions",
        nargs="*",
        help="expressions to evaluate; starts a REPL on stdin when omitted",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="print the parse tree before each result",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="log evaluation failures at DEBUG level to stderr",
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.expressions:
        return repl(show_tree=args.tree)

    ok = True
    for source in args.expressions:
        ok = _run_one(source, show_tree=args.tree, out=sys.stdout) and ok
    return 0 if ok else 1
