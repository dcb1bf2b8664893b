"""Structured error types for the notation reader and the transform."""

from __future__ import annotations

from enum import Enum


class MathListError(Exception):
    """Base class for structured mathlist-eval errors."""


class ErrorKind(str, Enum):
    UNFILLED_PLACEHOLDER = "unfilled_placeholder"
    INVALID_NUMBER = "invalid_number"
    MISSING_NUMERATOR = "missing_numerator"
    MISSING_DENOMINATOR = "missing_denominator"
    MISSING_RADICAND = "missing_radicand"
    MISSING_CLOSING_BRACKET = "missing_closing_bracket"
    MISSING_OPENING_BRACKET = "missing_opening_bracket"
    MISSING_OPERAND_BEFORE_CLOSE = "missing_operand_before_close"
    MISSING_GROUP_CONTENT = "missing_group_content"
    MISSING_RIGHT_OPERAND = "missing_right_operand"
    MISSING_LEFT_OPERAND = "missing_left_operand"
    MISSING_ARGUMENT = "missing_argument"
    UNSUPPORTED_ATOM = "unsupported_atom"
    NOTHING_TO_EVALUATE = "nothing_to_evaluate"
    TOO_DEEPLY_NESTED = "too_deeply_nested"


class TransformError(MathListError):
    """The first structural problem met while turning atoms into an expression."""

    def __init__(self, kind: ErrorKind, message: str, *, atom_type: str | None = None, nucleus: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.atom_type = atom_type
        self.nucleus = nucleus

    def __str__(self) -> str:
        return self.message

    @classmethod
    def unfilled_placeholder(cls) -> "TransformError":
        return cls(ErrorKind.UNFILLED_PLACEHOLDER, "Placeholders should be filled", atom_type="Placeholder")

    @classmethod
    def invalid_number(cls, text: str) -> "TransformError":
        return cls(ErrorKind.INVALID_NUMBER, f"Invalid number: {text}", atom_type="Number", nucleus=text)

    @classmethod
    def missing_numerator(cls) -> "TransformError":
        return cls(ErrorKind.MISSING_NUMERATOR, "Missing numerator", atom_type="Fraction")

    @classmethod
    def missing_denominator(cls) -> "TransformError":
        return cls(ErrorKind.MISSING_DENOMINATOR, "Missing denominator", atom_type="Fraction")

    @classmethod
    def missing_radicand(cls) -> "TransformError":
        return cls(ErrorKind.MISSING_RADICAND, "Missing radicand", atom_type="Radical")

    @classmethod
    def missing_closing_bracket(cls) -> "TransformError":
        return cls(ErrorKind.MISSING_CLOSING_BRACKET, "Missing )", nucleus=")")

    @classmethod
    def missing_opening_bracket(cls) -> "TransformError":
        return cls(ErrorKind.MISSING_OPENING_BRACKET, "Missing (", nucleus="(")

    @classmethod
    def missing_operand_before_close(cls) -> "TransformError":
        return cls(ErrorKind.MISSING_OPERAND_BEFORE_CLOSE, "Missing math before )", atom_type="Close", nucleus=")")

    @classmethod
    def missing_group_content(cls) -> "TransformError":
        return cls(ErrorKind.MISSING_GROUP_CONTENT, "Missing math between ()", atom_type="Inner")

    @classmethod
    def missing_right_operand(cls, symbol: str) -> "TransformError":
        return cls(ErrorKind.MISSING_RIGHT_OPERAND, f"Missing right operand for {symbol}", nucleus=symbol)

    @classmethod
    def missing_left_operand(cls, symbol: str) -> "TransformError":
        return cls(ErrorKind.MISSING_LEFT_OPERAND, f"Missing left operand for {symbol}", nucleus=symbol)

    @classmethod
    def missing_argument(cls, function_name: str) -> "TransformError":
        return cls(
            ErrorKind.MISSING_ARGUMENT,
            f"Missing argument for {function_name}",
            atom_type="LargeOperator",
            nucleus=function_name,
        )

    @classmethod
    def unsupported(cls, atom_type: str, nucleus: str) -> "TransformError":
        return cls(ErrorKind.UNSUPPORTED_ATOM, f"Unsupported {atom_type} {nucleus}", atom_type=atom_type, nucleus=nucleus)

    @classmethod
    def nothing_to_evaluate(cls) -> "TransformError":
        return cls(ErrorKind.NOTHING_TO_EVALUATE, "There is nothing to evaluate")

    @classmethod
    def too_deeply_nested(cls, limit: int) -> "TransformError":
        return cls(ErrorKind.TOO_DEEPLY_NESTED, f"Math is nested too deeply (limit {limit})")


class LaTeXParseError(MathListError, SyntaxError):
    """Notation text that the reader cannot turn into atoms."""

    def __init__(
        self,
        message: str,
        start: int,
        end: int,
        expected: tuple[str, ...] = (),
        found: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = end
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        expected_text = ""
        if self.expected:
            expected_text = f"; expected {', '.join(self.expected)}"
        found_text = ""
        if self.found is not None:
            found_text = f"; found {self.found}"
        return f"{self.message} at span [{self.start}, {self.end}){expected_text}{found_text}"
