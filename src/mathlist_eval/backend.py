"""Algebra backend capability interface and its SymPy implementation."""

from __future__ import annotations

import fractions
import re
from typing import Any, Callable, Final, Protocol

import sympy


Expression = Any

FUNCTION_NAMES: Final[frozenset[str]] = frozenset(
    {
        "sin",
        "cos",
        "tan",
        "cot",
        "sec",
        "csc",
        "arcsin",
        "arccos",
        "arctan",
        "arccot",
        "arcsec",
        "arccsc",
        "ln",
    }
)

_NUMBER_RE = re.compile(r"^(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")


def is_numeric_literal(text: str) -> bool:
    return _NUMBER_RE.match(text) is not None


class Backend(Protocol):
    """What the transform needs from an algebra engine.

    The transform only ever builds expressions through these calls; it never
    looks inside the objects they return.
    """

    def number(self, text: str) -> Expression:
        """Parse a numeric literal; raise ``ValueError`` when ``text`` is not one."""
        ...

    def symbol(self, name: str) -> Expression: ...

    @property
    def e(self) -> Expression: ...

    @property
    def pi(self) -> Expression: ...

    @property
    def imaginary_unit(self) -> Expression: ...

    @property
    def infinity(self) -> Expression: ...

    @property
    def complex_infinity(self) -> Expression:
        """Unsigned infinity, what dividing a non-zero value by zero gives."""
        ...

    @property
    def nan(self) -> Expression: ...

    def add(self, left: Expression, right: Expression) -> Expression: ...

    def subtract(self, left: Expression, right: Expression) -> Expression: ...

    def multiply(self, left: Expression, right: Expression) -> Expression: ...

    def divide(self, left: Expression, right: Expression) -> Expression: ...

    def power(self, base: Expression, exponent: Expression) -> Expression: ...

    def negate(self, operand: Expression) -> Expression: ...

    def positive(self, operand: Expression) -> Expression: ...

    def apply_function(self, name: str, argument: Expression) -> Expression:
        """Apply one of ``FUNCTION_NAMES``."""
        ...

    def log(self, argument: Expression, base: Expression) -> Expression: ...

    def to_latex(self, expression: Expression) -> str: ...

    def equivalent(self, left: Expression, right: Expression) -> bool: ...


_SYMPY_FUNCTIONS: Final[dict[str, Callable[[Expression], Expression]]] = {
    "sin": sympy.sin,
    "cos": sympy.cos,
    "tan": sympy.tan,
    "cot": sympy.cot,
    "sec": sympy.sec,
    "csc": sympy.csc,
    "arcsin": sympy.asin,
    "arccos": sympy.acos,
    "arctan": sympy.atan,
    "arccot": sympy.acot,
    "arcsec": sympy.asec,
    "arccsc": sympy.acsc,
    "ln": sympy.log,
}


class SympyBackend:
    """Builds SymPy expressions with exact rational literals."""

    def number(self, text: str) -> sympy.Expr:
        if not is_numeric_literal(text):
            raise ValueError(f"not a numeric literal: {text!r}")
        value = fractions.Fraction(text)
        return sympy.Rational(value.numerator, value.denominator)

    def symbol(self, name: str) -> sympy.Symbol:
        return sympy.Symbol(name)

    @property
    def e(self) -> sympy.Expr:
        return sympy.E

    @property
    def pi(self) -> sympy.Expr:
        return sympy.pi

    @property
    def imaginary_unit(self) -> sympy.Expr:
        return sympy.I

    @property
    def infinity(self) -> sympy.Expr:
        return sympy.oo

    @property
    def complex_infinity(self) -> sympy.Expr:
        return sympy.zoo

    @property
    def nan(self) -> sympy.Expr:
        return sympy.nan

    def add(self, left, right):
        return left + right

    def subtract(self, left, right):
        return left - right

    def multiply(self, left, right):
        return left * right

    def divide(self, left, right):
        return left / right

    def power(self, base, exponent):
        return sympy.Pow(base, exponent)

    def negate(self, operand):
        return -operand

    def positive(self, operand):
        return +operand

    def apply_function(self, name: str, argument):
        try:
            function = _SYMPY_FUNCTIONS[name]
        except KeyError:
            raise ValueError(f"unknown function {name!r}") from None
        return function(argument)

    def log(self, argument, base):
        return sympy.log(argument, base)

    def to_latex(self, expression) -> str:
        # A bare \log reads back as base 10, so natural logs must print as \ln.
        return sympy.latex(expression, inv_trig_style="full", ln_notation=True)

    def equivalent(self, left, right) -> bool:
        # zoo - zoo and nan - nan are nan, so identical results must match first.
        return left == right or sympy.simplify(left - right) == 0


def default_backend() -> Backend:
    return SympyBackend()
