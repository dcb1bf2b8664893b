"""Atom tree produced by the notation layer and consumed by the transform."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Final


MINUS_SIGN: Final[str] = "−"


class MathList(list):
    """Ordered atom sequence in source (left-to-right) order."""

    def clone(self) -> "MathList":
        return copy.deepcopy(self)


@dataclass(frozen=True)
class Boundary:
    nucleus: str


@dataclass
class MathAtom:
    nucleus: str = ""
    superscript: MathList = field(default_factory=MathList)
    subscript: MathList = field(default_factory=MathList)

    @property
    def type_name(self) -> str:
        return type(self).__name__

    def child_lists(self) -> tuple[MathList, ...]:
        return (self.superscript, self.subscript)


@dataclass
class Placeholder(MathAtom):
    nucleus: str = "■"


@dataclass
class Number(MathAtom):
    pass


@dataclass
class Variable(MathAtom):
    pass


@dataclass
class Fraction(MathAtom):
    numerator: MathList = field(default_factory=MathList)
    denominator: MathList = field(default_factory=MathList)

    def child_lists(self) -> tuple[MathList, ...]:
        return (*super().child_lists(), self.numerator, self.denominator)


@dataclass
class Radical(MathAtom):
    nucleus: str = "√"
    degree: MathList = field(default_factory=MathList)
    radicand: MathList = field(default_factory=MathList)

    def child_lists(self) -> tuple[MathList, ...]:
        return (*super().child_lists(), self.degree, self.radicand)


@dataclass
class Open(MathAtom):
    pass


@dataclass
class Close(MathAtom):
    pass


@dataclass
class Inner(MathAtom):
    left_boundary: Boundary = field(default_factory=lambda: Boundary("("))
    inner_list: MathList = field(default_factory=MathList)
    right_boundary: Boundary = field(default_factory=lambda: Boundary(")"))

    def child_lists(self) -> tuple[MathList, ...]:
        return (*super().child_lists(), self.inner_list)


@dataclass
class UnaryOperator(MathAtom):
    pass


@dataclass
class BinaryOperator(MathAtom):
    def to_unary(self) -> UnaryOperator:
        return UnaryOperator(
            self.nucleus,
            superscript=MathList(self.superscript),
            subscript=MathList(self.subscript),
        )


@dataclass
class LargeOperator(MathAtom):
    """Named function such as ``sin`` or ``log``; a log base rides in the subscript."""


@dataclass
class Ordinary(MathAtom):
    pass


@dataclass
class Relation(MathAtom):
    pass


@dataclass
class Punctuation(MathAtom):
    pass


@dataclass
class Space(MathAtom):
    pass


def times() -> BinaryOperator:
    return BinaryOperator("×")


def inverse_exponent() -> MathList:
    """The superscript ``-1`` that marks an inverse function, e.g. ``sin^{-1}``."""
    return MathList([UnaryOperator(MINUS_SIGN), Number("1")])


def is_blank(atom: MathAtom) -> bool:
    if isinstance(atom, Space):
        return True
    return isinstance(atom, Ordinary) and not atom.nucleus.strip()


def _leaves_no_left_operand(previous: MathAtom | None) -> bool:
    return previous is None or isinstance(
        previous, (BinaryOperator, UnaryOperator, LargeOperator, Open, Relation, Punctuation)
    )


def _takes_bare_argument(math_list: MathList, position: int) -> bool:
    for atom in math_list[position + 1 :]:
        if not is_blank(atom):
            return not isinstance(atom, (Open, Inner))
    return True


def nesting_depth(math_list: MathList) -> int:
    """Deepest chain of nested evaluation, counting ``math_list`` itself as 1.

    Open brackets and sub-lists each add a level. So does every sign with
    nothing on its left and every function applied to a bare argument, until
    an operator with a left operand or the enclosing bracket ends the run:
    ``---5`` is four levels deep while ``1-2-3`` is one.
    """
    deepest = 0
    pending: list[tuple[MathList, int]] = [(math_list, 0)]
    while pending:
        atoms, base = pending.pop()
        brackets = 0
        prefixes = 0
        outer_prefixes: list[int] = []
        previous: MathAtom | None = None
        for position, atom in enumerate(atoms):
            if not is_blank(atom):
                if isinstance(atom, Open):
                    brackets += 1
                    outer_prefixes.append(prefixes)
                elif isinstance(atom, Close):
                    brackets = max(0, brackets - 1)
                    prefixes = outer_prefixes.pop() if outer_prefixes else 0
                elif isinstance(atom, UnaryOperator) or (
                    isinstance(atom, BinaryOperator) and _leaves_no_left_operand(previous)
                ):
                    prefixes += 1
                elif isinstance(atom, BinaryOperator):
                    prefixes = 0
                elif isinstance(atom, LargeOperator) and _takes_bare_argument(atoms, position):
                    prefixes += 1
                previous = atom
            level = base + brackets + prefixes
            deepest = max(deepest, level)
            for child in atom.child_lists():
                if child:
                    pending.append((child, level + 1))
    return 1 + deepest
