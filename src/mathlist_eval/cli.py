"""Evaluate a LaTeX expression into a symbolic expression."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Final

from .backend import Backend, SympyBackend
from .errors import MathListError
from .roundtrip import evaluate_latex, math_list_from_expression
from .transform import math_list_to_expression
from .tree import TreeBackend

_BACKENDS: Final[dict[str, Callable[[], Backend]]] = {
    "sympy": SympyBackend,
    "tree": TreeBackend,
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="mathlist-eval", description=__doc__)
    parser.add_argument("expression", help="LaTeX source, e.g. '\\sin^{2}(x)+1'")
    parser.add_argument("--backend", choices=sorted(_BACKENDS), default="sympy", help="expression builder to use")
    parser.add_argument("--latex", action="store_true", help="print the result as LaTeX")
    parser.add_argument(
        "--roundtrip",
        action="store_true",
        help="render the result, read it back and transform it again before printing",
    )
    parser.add_argument("--verbose", action="store_true", help="log transform steps")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    backend = _BACKENDS[args.backend]()
    try:
        expression = evaluate_latex(args.expression, backend=backend)
        if args.roundtrip:
            expression = math_list_to_expression(math_list_from_expression(expression, backend=backend), backend=backend)
    except MathListError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    print(backend.to_latex(expression) if args.latex else expression)
    return 0
