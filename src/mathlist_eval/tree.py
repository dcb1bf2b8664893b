"""Plain expression tree backend.

Nodes keep exactly the shape the transform builds (no folding, no
reassociation), which makes precedence and association directly observable
in tests without an algebra engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .backend import FUNCTION_NAMES, is_numeric_literal
from .latex import COMMAND_SYMBOLS


@dataclass(frozen=True)
class Num:
    text: str


@dataclass(frozen=True)
class Sym:
    name: str


@dataclass(frozen=True)
class Const:
    name: str


@dataclass(frozen=True)
class Prefix:
    op: str
    operand: "TreeExpr"


@dataclass(frozen=True)
class Infix:
    op: str
    left: "TreeExpr"
    right: "TreeExpr"


@dataclass(frozen=True)
class Apply:
    func: str
    argument: "TreeExpr"


@dataclass(frozen=True)
class Log:
    argument: "TreeExpr"
    base: "TreeExpr"


TreeExpr = Union[Num, Sym, Const, Prefix, Infix, Apply, Log]

E = Const("e")
PI = Const("pi")
I = Const("i")
INFINITY = Const("oo")
COMPLEX_INFINITY = Const("zoo")
NAN = Const("nan")

_CONST_LATEX = {
    "e": "e",
    "pi": "\\pi",
    "i": "i",
    "oo": "\\infty",
    "zoo": "\\tilde{\\infty}",
    "nan": "\\text{NaN}",
}
_INFIX_LATEX = {"+": "+", "−": "-", "×": "\\times"}
_SYMBOL_COMMANDS = frozenset(COMMAND_SYMBOLS.values())


class TreeBackend:
    def number(self, text: str) -> Num:
        if not is_numeric_literal(text):
            raise ValueError(f"not a numeric literal: {text!r}")
        return Num(text)

    def symbol(self, name: str) -> Sym:
        return Sym(name)

    @property
    def e(self) -> Const:
        return E

    @property
    def pi(self) -> Const:
        return PI

    @property
    def imaginary_unit(self) -> Const:
        return I

    @property
    def infinity(self) -> Const:
        return INFINITY

    @property
    def complex_infinity(self) -> Const:
        return COMPLEX_INFINITY

    @property
    def nan(self) -> Const:
        return NAN

    def add(self, left: TreeExpr, right: TreeExpr) -> Infix:
        return Infix("+", left, right)

    def subtract(self, left: TreeExpr, right: TreeExpr) -> Infix:
        return Infix("−", left, right)

    def multiply(self, left: TreeExpr, right: TreeExpr) -> Infix:
        return Infix("×", left, right)

    def divide(self, left: TreeExpr, right: TreeExpr) -> Infix:
        return Infix("÷", left, right)

    def power(self, base: TreeExpr, exponent: TreeExpr) -> Infix:
        return Infix("^", base, exponent)

    def negate(self, operand: TreeExpr) -> Prefix:
        return Prefix("−", operand)

    def positive(self, operand: TreeExpr) -> Prefix:
        return Prefix("+", operand)

    def apply_function(self, name: str, argument: TreeExpr) -> Apply:
        if name not in FUNCTION_NAMES:
            raise ValueError(f"unknown function {name!r}")
        return Apply(name, argument)

    def log(self, argument: TreeExpr, base: TreeExpr) -> Log:
        return Log(argument, base)

    def to_latex(self, expression: TreeExpr) -> str:
        """Fully parenthesized LaTeX that reads back into the same tree."""
        if isinstance(expression, Num):
            return expression.text
        if isinstance(expression, Sym):
            if expression.name in _SYMBOL_COMMANDS:
                return "\\" + expression.name
            return expression.name
        if isinstance(expression, Const):
            return _CONST_LATEX[expression.name]
        if isinstance(expression, Prefix):
            sign = "-" if expression.op == "−" else "+"
            return f"\\left({sign}{{{self.to_latex(expression.operand)}}}\\right)"
        if isinstance(expression, Infix):
            left = self.to_latex(expression.left)
            right = self.to_latex(expression.right)
            if expression.op == "÷":
                return f"\\frac{{{left}}}{{{right}}}"
            if expression.op == "^":
                return f"{{\\left({left}\\right)}}^{{{right}}}"
            return f"\\left({left} {_INFIX_LATEX[expression.op]} {right}\\right)"
        if isinstance(expression, Apply):
            return f"\\{expression.func}\\left({self.to_latex(expression.argument)}\\right)"
        if isinstance(expression, Log):
            base = self.to_latex(expression.base)
            return f"\\log_{{{base}}}\\left({self.to_latex(expression.argument)}\\right)"
        raise TypeError(f"not a tree expression: {expression!r}")

    def equivalent(self, left: TreeExpr, right: TreeExpr) -> bool:
        return left == right
