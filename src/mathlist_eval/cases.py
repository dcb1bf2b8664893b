"""Catalog of notation cases with their expected outcome, plus a runner."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Final, Literal

from .backend import Backend, default_backend
from .errors import MathListError
from .roundtrip import evaluate_latex


Outcome = Literal["equivalent", "error"]


@dataclass(frozen=True)
class TransformCase:
    id: str
    latex: str
    expected: str
    outcome: Outcome
    note: str


@dataclass(frozen=True)
class CaseResult:
    id: str
    passed: bool
    got: str
    expected: str


CATALOG: Final[tuple[TransformCase, ...]] = (
    TransformCase(
        id="precedence_add_mul",
        latex="2+3\\times4",
        expected="14",
        outcome="equivalent",
        note="multiplication binds tighter than addition",
    ),
    TransformCase(
        id="precedence_mul_add",
        latex="2\\times3+4",
        expected="10",
        outcome="equivalent",
        note="left operand of + is the finished product",
    ),
    TransformCase(
        id="precedence_bracket",
        latex="(2+3)\\times4",
        expected="20",
        outcome="equivalent",
        note="bracket interior resolves before the outer operator",
    ),
    TransformCase(
        id="subtract_left_assoc",
        latex="10-4-3",
        expected="3",
        outcome="equivalent",
        note="equal precedence associates left",
    ),
    TransformCase(
        id="divide_left_assoc",
        latex="12\\div3\\div2",
        expected="2",
        outcome="equivalent",
        note="÷ associates left",
    ),
    TransformCase(
        id="slash_divide",
        latex="1/4",
        expected="\\frac{1}{4}",
        outcome="equivalent",
        note="textual slash divides",
    ),
    TransformCase(
        id="implicit_number_symbol",
        latex="2x",
        expected="2\\times x",
        outcome="equivalent",
        note="juxtaposition multiplies",
    ),
    TransformCase(
        id="implicit_bracket",
        latex="x(y+1)",
        expected="xy+x",
        outcome="equivalent",
        note="juxtaposition with a bracket multiplies",
    ),
    TransformCase(
        id="triple_minus",
        latex="---5",
        expected="-5",
        outcome="equivalent",
        note="consecutive signs chain as unary negation",
    ),
    TransformCase(
        id="unary_then_binary",
        latex="-2+3",
        expected="1",
        outcome="equivalent",
        note="unary minus binds tighter than +",
    ),
    TransformCase(
        id="percent",
        latex="50\\%",
        expected="\\frac{1}{2}",
        outcome="equivalent",
        note="percent divides by 100",
    ),
    TransformCase(
        id="percent_negated",
        latex="-50\\%",
        expected="-\\frac{1}{2}",
        outcome="equivalent",
        note="postfix binds tighter than unary minus",
    ),
    TransformCase(
        id="degree",
        latex="180°",
        expected="\\pi",
        outcome="equivalent",
        note="degrees convert to radians",
    ),
    TransformCase(
        id="degree_command",
        latex="90\\degree",
        expected="\\frac{\\pi}{2}",
        outcome="equivalent",
        note="\\degree spelling",
    ),
    TransformCase(
        id="fraction_sum",
        latex="\\frac{1}{2}+\\frac{1}{3}",
        expected="\\frac{5}{6}",
        outcome="equivalent",
        note="fractions divide their parts",
    ),
    TransformCase(
        id="square_root",
        latex="\\sqrt{16}",
        expected="4",
        outcome="equivalent",
        note="radical without degree is a square root",
    ),
    TransformCase(
        id="cube_root",
        latex="\\sqrt[3]{8}",
        expected="2",
        outcome="equivalent",
        note="radical degree becomes 1/degree",
    ),
    TransformCase(
        id="power",
        latex="2^{10}",
        expected="1024",
        outcome="equivalent",
        note="superscript raises",
    ),
    TransformCase(
        id="imaginary_square",
        latex="i^{2}",
        expected="-1",
        outcome="equivalent",
        note="i is the imaginary unit",
    ),
    TransformCase(
        id="euler_ln",
        latex="e^{\\ln(2)}",
        expected="2",
        outcome="equivalent",
        note="e is Euler's number",
    ),
    TransformCase(
        id="steal_bracket_exponent",
        latex="\\sin(x)^{2}",
        expected="\\sin^{2}(x)",
        outcome="equivalent",
        note="closing bracket exponent moves onto the function",
    ),
    TransformCase(
        id="steal_combined_exponent",
        latex="\\sin^{2}(x)^{3}",
        expected="\\sin^{6}(x)",
        outcome="equivalent",
        note="own and stolen exponents multiply",
    ),
    TransformCase(
        id="steal_group_exponent",
        latex="\\cos\\left(x\\right)^{2}",
        expected="\\cos^{2}(x)",
        outcome="equivalent",
        note="grouped argument exponent moves onto the function",
    ),
    TransformCase(
        id="no_steal_without_brackets",
        latex="\\sin x^{2}",
        expected="\\sin(x^{2})",
        outcome="equivalent",
        note="bare argument keeps its own exponent",
    ),
    TransformCase(
        id="pythagorean",
        latex="\\sin(x)^{2}+\\cos(x)^{2}",
        expected="1",
        outcome="equivalent",
        note="function applications combine as operands",
    ),
    TransformCase(
        id="inverse_sine",
        latex="\\sin^{-1}(x)",
        expected="\\arcsin(x)",
        outcome="equivalent",
        note="-1 exponent selects the inverse function",
    ),
    TransformCase(
        id="inverse_arccos",
        latex="\\arccos^{-1}(x)",
        expected="\\cos(x)",
        outcome="equivalent",
        note="inverse of an inverse is the forward function",
    ),
    TransformCase(
        id="inverse_ln",
        latex="\\ln^{-1}(2)",
        expected="e^{2}",
        outcome="equivalent",
        note="inverse of ln is exponentiation of e",
    ),
    TransformCase(
        id="log_default_base",
        latex="\\log(1000)",
        expected="3",
        outcome="equivalent",
        note="log without subscript is base 10",
    ),
    TransformCase(
        id="log_subscript_base",
        latex="\\log_{2}(8)",
        expected="3",
        outcome="equivalent",
        note="subscript is the log base",
    ),
    TransformCase(
        id="inverse_log",
        latex="\\log^{-1}(2)",
        expected="100",
        outcome="equivalent",
        note="inverse of log raises its base",
    ),
    TransformCase(
        id="function_then_add",
        latex="\\sin x+1",
        expected="\\sin(x)+1",
        outcome="equivalent",
        note="bare argument stops at +",
    ),
    TransformCase(
        id="greek_symbol",
        latex="\\alpha+\\alpha",
        expected="2\\alpha",
        outcome="equivalent",
        note="registered command spellings name symbols",
    ),
    TransformCase(
        id="nothing",
        latex="\\,",
        expected="There is nothing to evaluate",
        outcome="error",
        note="blank input",
    ),
    TransformCase(
        id="missing_close",
        latex="(1+2",
        expected="Missing )",
        outcome="error",
        note="unmatched open bracket",
    ),
    TransformCase(
        id="missing_open",
        latex="1+2)",
        expected="Missing (",
        outcome="error",
        note="unmatched close bracket",
    ),
    TransformCase(
        id="empty_bracket",
        latex="()",
        expected="Missing math before )",
        outcome="error",
        note="close bracket with nothing before it",
    ),
    TransformCase(
        id="empty_group",
        latex="\\left(\\right)",
        expected="Missing math between ()",
        outcome="error",
        note="empty grouped sequence",
    ),
    TransformCase(
        id="missing_numerator",
        latex="\\frac{}{2}",
        expected="Missing numerator",
        outcome="error",
        note="empty numerator",
    ),
    TransformCase(
        id="missing_denominator",
        latex="\\frac{1}{}",
        expected="Missing denominator",
        outcome="error",
        note="empty denominator",
    ),
    TransformCase(
        id="missing_radicand",
        latex="\\sqrt{}",
        expected="Missing radicand",
        outcome="error",
        note="empty radicand",
    ),
    TransformCase(
        id="missing_right_operand",
        latex="1+",
        expected="Missing right operand for +",
        outcome="error",
        note="binary operator at the end",
    ),
    TransformCase(
        id="missing_left_operand",
        latex="\\%",
        expected="Missing left operand for %",
        outcome="error",
        note="postfix operator with nothing before it",
    ),
    TransformCase(
        id="missing_argument",
        latex="\\sin",
        expected="Missing argument for sin",
        outcome="error",
        note="function at the end",
    ),
    TransformCase(
        id="unclosed_argument",
        latex="\\cos(x",
        expected="Missing argument for cos",
        outcome="error",
        note="function argument bracket never closed",
    ),
    TransformCase(
        id="placeholder",
        latex="\\square+1",
        expected="Placeholders should be filled",
        outcome="error",
        note="placeholders must be filled",
    ),
    TransformCase(
        id="invalid_number",
        latex="1.2.3",
        expected="Invalid number: 1.2.3",
        outcome="error",
        note="literal outside the numeric grammar",
    ),
    TransformCase(
        id="unsupported_relation",
        latex="x=1",
        expected="Unsupported Relation =",
        outcome="error",
        note="relations are not expressions",
    ),
    TransformCase(
        id="unsupported_square_bracket",
        latex="[x]",
        expected="Unsupported Open [",
        outcome="error",
        note="only round brackets group",
    ),
)


def run_case(case: TransformCase, *, backend: Backend | None = None) -> CaseResult:
    backend = backend if backend is not None else default_backend()
    try:
        got = evaluate_latex(case.latex, backend=backend)
    except MathListError as err:
        return CaseResult(id=case.id, passed=case.outcome == "error" and str(err) == case.expected, got=str(err), expected=case.expected)
    rendered = backend.to_latex(got)
    if case.outcome == "error":
        return CaseResult(id=case.id, passed=False, got=rendered, expected=case.expected)
    want = evaluate_latex(case.expected, backend=backend)
    return CaseResult(id=case.id, passed=backend.equivalent(got, want), got=rendered, expected=case.expected)


def run_catalog(*, backend: Backend | None = None) -> list[CaseResult]:
    return [run_case(case, backend=backend) for case in CATALOG]


def write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def results_payload(results: list[CaseResult]) -> list[dict[str, object]]:
    return [asdict(result) for result in results]
