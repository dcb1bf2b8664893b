"""Precedence-climbing transform from atom trees to backend expressions.

The walk runs directly on the laid-out atom tree. One ``_Transformer`` owns
one sequence and its cursor: nested calls that keep consuming the same
sequence (bracket interiors, operands, bare function arguments) are method
calls on the same walker, while numerators, radicands, scripts, group
interiors and bracketed function arguments get a fresh walker at index 0.

A call returns to its caller when the sequence runs out, when a ``)``
resolves a bracket-level call, or when it meets an operator that binds no
tighter than its own level; in that last case the cursor is stepped back so
the caller's loop sees the operator again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Final

from .atoms import (
    MINUS_SIGN,
    BinaryOperator,
    Close,
    Fraction,
    Inner,
    LargeOperator,
    MathAtom,
    MathList,
    Number,
    Open,
    Ordinary,
    Placeholder,
    Radical,
    UnaryOperator,
    Variable,
    inverse_exponent,
    is_blank,
    nesting_depth,
    times,
)
from .backend import Backend, Expression, default_backend
from .config import TransformSettings
from .errors import TransformError
from .latex import COMPLEX_INFINITY, INFINITY, NOT_A_NUMBER, command_for_nucleus

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    # Order matters: it decides every operator-vs-operator tie.
    LOWEST = 0
    BRACKET = 1
    ADD_SUBTRACT = 2
    MULTIPLY_DIVIDE = 3
    FUNCTION_APPLICATION = 4
    UNARY_PLUS_MINUS = 5
    PERCENT_DEGREE = 6


UnaryRule = Callable[[Backend, Expression], Expression]
BinaryRule = Callable[[Backend, Expression, Expression], Expression]

_UNARY_OPERATORS: Final[dict[str, UnaryRule]] = {
    "+": lambda b, x: b.positive(x),
    MINUS_SIGN: lambda b, x: b.negate(x),
    "-": lambda b, x: b.negate(x),
}

_BINARY_OPERATORS: Final[dict[str, tuple[Precedence, BinaryRule]]] = {
    "+": (Precedence.ADD_SUBTRACT, lambda b, x, y: b.add(x, y)),
    MINUS_SIGN: (Precedence.ADD_SUBTRACT, lambda b, x, y: b.subtract(x, y)),
    "-": (Precedence.ADD_SUBTRACT, lambda b, x, y: b.subtract(x, y)),
    "*": (Precedence.MULTIPLY_DIVIDE, lambda b, x, y: b.multiply(x, y)),
    "×": (Precedence.MULTIPLY_DIVIDE, lambda b, x, y: b.multiply(x, y)),
    "·": (Precedence.MULTIPLY_DIVIDE, lambda b, x, y: b.multiply(x, y)),
    "÷": (Precedence.MULTIPLY_DIVIDE, lambda b, x, y: b.divide(x, y)),
}
_ORDINARY_BINARY_OPERATORS: Final[dict[str, tuple[Precedence, BinaryRule]]] = {
    "/": (Precedence.MULTIPLY_DIVIDE, lambda b, x, y: b.divide(x, y)),
}

_POSTFIX_OPERATORS: Final[dict[str, UnaryRule]] = {
    "%": lambda b, x: b.divide(x, b.number("100")),
    "°": lambda b, x: b.divide(b.multiply(x, b.pi), b.number("180")),
}

# Forward name -> inverse name; log and ln are handled separately.
_FUNCTION_INVERSES: Final[dict[str, str]] = {
    "sin": "arcsin",
    "cos": "arccos",
    "tan": "arctan",
    "cot": "arccot",
    "sec": "arcsec",
    "csc": "arccsc",
    "arcsin": "sin",
    "arccos": "cos",
    "arctan": "tan",
    "arccot": "cot",
    "arcsec": "sec",
    "arccsc": "csc",
}

_INVERSE_EXPONENTS: Final[tuple[MathList, ...]] = (
    inverse_exponent(),
    MathList([UnaryOperator("-"), Number("1")]),
)


def _binary_rule(atom: MathAtom) -> tuple[Precedence, BinaryRule] | None:
    if isinstance(atom, BinaryOperator):
        return _BINARY_OPERATORS.get(atom.nucleus)
    if isinstance(atom, Ordinary):
        return _ORDINARY_BINARY_OPERATORS.get(atom.nucleus)
    return None


def _postfix_rule(atom: MathAtom) -> UnaryRule | None:
    if isinstance(atom, Ordinary):
        return _POSTFIX_OPERATORS.get(atom.nucleus)
    return None


def _as_unary(atom: MathAtom) -> UnaryOperator:
    if isinstance(atom, BinaryOperator):
        return atom.to_unary()
    return UnaryOperator(atom.nucleus, superscript=MathList(atom.superscript), subscript=MathList(atom.subscript))


def _is_parenthesized(atom: Inner) -> bool:
    return atom.left_boundary.nucleus == "(" and atom.right_boundary.nucleus == ")"


def _transform_sequence(atoms: MathList, backend: Backend) -> Expression | None:
    return _Transformer(atoms=atoms, backend=backend).transform(Precedence.LOWEST)


@dataclass
class _Transformer:
    atoms: MathList
    backend: Backend
    index: int = 0

    def transform(self, precedence: Precedence) -> Expression | None:
        previous: Expression | None = None
        while self.index < len(self.atoms):
            atom = self.atoms[self.index]
            if is_blank(atom):
                self.index += 1
                continue
            if isinstance(atom, Close) and atom.nucleus == ")":
                return self._close_bracket(atom, precedence, previous)

            binary = _binary_rule(atom)
            postfix = _postfix_rule(atom) if binary is None else None
            if binary is not None:
                if previous is None:
                    # Nothing on the left, e.g. the later signs of 1---2: reread as unary.
                    logger.debug(f"Reading {atom.nucleus} at {self.index} as a unary operator")
                    self.atoms[self.index] = _as_unary(atom)
                    continue
                operator_precedence, combine = binary
                if precedence >= operator_precedence:
                    return self._defer(previous)
                value = self._apply_binary(atom, operator_precedence, combine, previous)
                previous = None
            elif postfix is not None:
                if previous is None:
                    raise TransformError.missing_left_operand(atom.nucleus)
                if precedence >= Precedence.PERCENT_DEGREE:
                    return self._defer(previous)
                value = postfix(self.backend, previous)
                previous = None
            else:
                value = self._reduce(atom)
            previous = self._finish_atom(atom, value, previous)
            self.index += 1

        if precedence is Precedence.BRACKET:
            raise TransformError.missing_closing_bracket()
        return previous

    def _defer(self, previous: Expression) -> Expression:
        self.index -= 1
        return previous

    def _close_bracket(self, atom: Close, precedence: Precedence, previous: Expression | None) -> Expression:
        if previous is None:
            raise TransformError.missing_operand_before_close()
        if precedence is Precedence.LOWEST:
            raise TransformError.missing_opening_bracket()
        if precedence is not Precedence.BRACKET:
            return self._defer(previous)
        if atom.superscript:
            exponent = _transform_sequence(atom.superscript, self.backend)
            if exponent is not None:
                previous = self.backend.power(previous, exponent)
        return previous

    def _reduce(self, atom: MathAtom) -> Expression:
        if isinstance(atom, Placeholder):
            raise TransformError.unfilled_placeholder()
        if isinstance(atom, Number):
            return self._resolve_number(atom.nucleus)
        if isinstance(atom, Variable):
            return self._resolve_variable(atom.nucleus)
        if isinstance(atom, Fraction):
            numerator = _transform_sequence(atom.numerator, self.backend)
            if numerator is None:
                raise TransformError.missing_numerator()
            denominator = _transform_sequence(atom.denominator, self.backend)
            if denominator is None:
                raise TransformError.missing_denominator()
            return self.backend.divide(numerator, denominator)
        if isinstance(atom, Radical):
            return self._reduce_radical(atom)
        if isinstance(atom, Open) and atom.nucleus == "(":
            self.index += 1
            value = self.transform(Precedence.BRACKET)
            if value is None:
                raise TransformError.missing_closing_bracket()
            return value
        if isinstance(atom, Inner) and _is_parenthesized(atom):
            value = _transform_sequence(atom.inner_list, self.backend)
            if value is None:
                raise TransformError.missing_group_content()
            return value
        if isinstance(atom, UnaryOperator) and atom.nucleus in _UNARY_OPERATORS:
            return self._apply_unary(atom, _UNARY_OPERATORS[atom.nucleus])
        if isinstance(atom, LargeOperator) and (atom.nucleus in _FUNCTION_INVERSES or atom.nucleus in {"log", "ln"}):
            return self._apply_function(atom)
        raise TransformError.unsupported(atom.type_name, atom.nucleus)

    def _resolve_number(self, text: str) -> Expression:
        try:
            return self.backend.number(text)
        except ValueError as err:
            raise TransformError.invalid_number(text) from err

    def _resolve_variable(self, name: str) -> Expression:
        if name == "e":
            return self.backend.e
        if name == "π":
            return self.backend.pi
        if name == "i":
            return self.backend.imaginary_unit
        if name == INFINITY:
            return self.backend.infinity
        if name == COMPLEX_INFINITY:
            return self.backend.complex_infinity
        if name == NOT_A_NUMBER:
            return self.backend.nan
        command = command_for_nucleus(name)
        return self.backend.symbol(command if command is not None else name)

    def _reduce_radical(self, atom: Radical) -> Expression:
        one = self.backend.number("1")
        degree = _transform_sequence(atom.degree, self.backend)
        if degree is None:
            exponent = self.backend.divide(one, self.backend.number("2"))
        else:
            exponent = self.backend.divide(one, degree)
        radicand = _transform_sequence(atom.radicand, self.backend)
        if radicand is None:
            raise TransformError.missing_radicand()
        return self.backend.power(radicand, exponent)

    def _apply_unary(self, atom: MathAtom, apply: UnaryRule) -> Expression:
        self.index += 1
        operand = self.transform(Precedence.UNARY_PLUS_MINUS)
        if operand is None:
            raise TransformError.missing_right_operand(atom.nucleus)
        return apply(self.backend, operand)

    def _apply_binary(
        self,
        atom: MathAtom,
        operator_precedence: Precedence,
        combine: BinaryRule,
        left: Expression,
    ) -> Expression:
        self.index += 1
        right = self.transform(operator_precedence)
        if right is None:
            raise TransformError.missing_right_operand(atom.nucleus)
        return combine(self.backend, left, right)

    def _function_pair(self, atom: LargeOperator) -> tuple[Callable[[Expression], Expression], Callable[[Expression], Expression]]:
        backend = self.backend
        name = atom.nucleus
        if name == "log":
            base = _transform_sequence(atom.subscript, backend)
            if base is None:
                base = backend.number("10")
            return (lambda x: backend.log(x, base)), (lambda x: backend.power(base, x))
        if name == "ln":
            return (lambda x: backend.apply_function("ln", x)), (lambda x: backend.power(backend.e, x))
        inverse = _FUNCTION_INVERSES[name]
        return (lambda x: backend.apply_function(name, x)), (lambda x: backend.apply_function(inverse, x))

    def _apply_function(self, atom: LargeOperator) -> Expression:
        forward, inverse = self._function_pair(atom)
        if atom.superscript in _INVERSE_EXPONENTS:
            logger.debug(f"Reading {atom.nucleus}^-1 as the inverse function")
            atom.superscript.clear()
            forward = inverse
        self.index += 1
        bracketed = self._find_bracketed_argument(atom)
        if bracketed is None:
            argument = self.transform(Precedence.FUNCTION_APPLICATION)
        else:
            argument = _transform_sequence(bracketed, self.backend)
        if argument is None:
            raise TransformError.missing_argument(atom.nucleus)
        return forward(argument)

    def _find_bracketed_argument(self, atom: LargeOperator) -> MathList | None:
        """Locate a bracketed argument and steal its trailing exponent.

        ``sin(x)^2`` becomes ``sin^2(x)`` and ``sin^2(x)^3`` becomes
        ``sin^{(2)×(3)}(x)``, but ``sin x^2`` is left alone: without brackets
        the argument is whatever binds at function-application level.

        Leaves the cursor on the group or closing bracket when one is found,
        or on the first unrelated atom otherwise.
        """
        depth = 0
        opened_at = -1
        while self.index < len(self.atoms):
            candidate = self.atoms[self.index]
            if is_blank(candidate):
                pass
            elif isinstance(candidate, Inner):
                if depth == 0:
                    self._steal_exponent(atom, candidate.superscript)
                    return candidate.inner_list
            elif isinstance(candidate, Open):
                if depth == 0:
                    opened_at = self.index
                depth += 1
            elif isinstance(candidate, Close):
                if depth == 0:
                    raise TransformError.missing_argument(atom.nucleus)
                depth -= 1
                if depth == 0:
                    self._steal_exponent(atom, candidate.superscript)
                    return MathList(self.atoms[opened_at + 1 : self.index])
            elif depth == 0:
                return None
            self.index += 1
        if depth > 0:
            raise TransformError.missing_argument(atom.nucleus)
        return None

    def _steal_exponent(self, atom: LargeOperator, stolen: MathList) -> None:
        if not stolen:
            return
        logger.debug(f"Moving exponent of the {atom.nucleus} argument onto the function")
        if atom.superscript:
            own = Inner(inner_list=MathList(atom.superscript))
            theirs = Inner(inner_list=MathList(stolen))
            atom.superscript.clear()
            stolen.clear()
            atom.superscript.extend([own, times(), theirs])
        else:
            atom.superscript.extend(stolen)
            stolen.clear()

    def _finish_atom(self, atom: MathAtom, value: Expression, previous: Expression | None) -> Expression:
        if atom.superscript:
            exponent = _transform_sequence(atom.superscript, self.backend)
            if exponent is not None:
                value = self.backend.power(value, exponent)
        if previous is None:
            return value
        # Juxtaposition multiplies: 2x, x(y+1).
        return self.backend.multiply(previous, value)


def transform_in_place(math_list: MathList, backend: Backend | None = None) -> Expression | None:
    """Transform without copying; exponent stealing rewrites ``math_list``."""
    return _transform_sequence(math_list, backend if backend is not None else default_backend())


def math_list_to_expression(
    math_list: MathList,
    *,
    backend: Backend | None = None,
    settings: TransformSettings | None = None,
) -> Expression:
    """Turn an atom tree into one backend expression.

    Raises ``TransformError`` for the first structural problem found,
    including an input that yields no expression at all.
    """
    settings = settings if settings is not None else TransformSettings.from_env()
    backend = backend if backend is not None else default_backend()

    if settings.max_depth and nesting_depth(math_list) > settings.max_depth:
        raise TransformError.too_deeply_nested(settings.max_depth)

    if settings.clone_input:
        working = MathList(math_list).clone()
    elif isinstance(math_list, MathList):
        working = math_list
    else:
        working = MathList(math_list)

    logger.debug(f"Transforming {len(working)} atoms with {type(backend).__name__}")
    try:
        expression = transform_in_place(working, backend)
    except TransformError as err:
        logger.debug(f"Transform failed ({err.kind.value}): {err}")
        raise
    if expression is None:
        raise TransformError.nothing_to_evaluate()
    return expression
