from __future__ import annotations

import unittest

from mathlist_eval.atoms import BinaryOperator, MathList, Number, UnaryOperator
from mathlist_eval.config import TransformSettings
from mathlist_eval.errors import TransformError
from mathlist_eval.latex import read_latex
from mathlist_eval.transform import math_list_to_expression
from mathlist_eval.tree import PI, Infix, Num, Prefix, Sym, TreeBackend


a, b, c, d, x, y = (Sym(name) for name in "abcdxy")


def _tree(source: str):
    return math_list_to_expression(read_latex(source), backend=TreeBackend())


class PrecedenceTests(unittest.TestCase):
    def test_operator_shapes(self) -> None:
        cases = {
            "a+b\\times c": Infix("+", a, Infix("×", b, c)),
            "a\\times b+c": Infix("+", Infix("×", a, b), c),
            "a-b-c": Infix("−", Infix("−", a, b), c),
            "a\\div b\\times c": Infix("×", Infix("÷", a, b), c),
            "a+b\\times c-d": Infix("−", Infix("+", a, Infix("×", b, c)), d),
            "a+(b-c)\\times d": Infix("+", a, Infix("×", Infix("−", b, c), d)),
            "((a))": a,
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(_tree(source), expected)

    def test_operator_pair_boundaries(self) -> None:
        spellings = {
            "+": ("+", 1),
            "-": ("−", 1),
            "\\times ": ("×", 2),
            "\\div ": ("÷", 2),
            "/": ("÷", 2),
            "*": ("×", 2),
            "\\cdot ": ("×", 2),
        }
        for first, (first_op, first_level) in spellings.items():
            for second, (second_op, second_level) in spellings.items():
                source = f"a{first}b{second}c"
                if second_level > first_level:
                    expected = Infix(first_op, a, Infix(second_op, b, c))
                else:
                    expected = Infix(second_op, Infix(first_op, a, b), c)
                with self.subTest(source=source):
                    self.assertEqual(_tree(source), expected)

    def test_postfix_against_binary_boundaries(self) -> None:
        def percent(value):
            return Infix("÷", value, Num("100"))

        degrees = Infix("÷", Infix("×", b, PI), Num("180"))
        cases = {
            "a+b\\%": Infix("+", a, percent(b)),
            "a\\%+b": Infix("+", percent(a), b),
            "a\\times b\\%": Infix("×", a, percent(b)),
            "a\\%\\times b": Infix("×", percent(a), b),
            "a-b°": Infix("−", a, degrees),
            "a\\cdot b\\degree": Infix("×", a, degrees),
            "-a\\%": Prefix("−", percent(a)),
            "a\\%\\%": percent(percent(a)),
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(_tree(source), expected)

    def test_close_bracket_against_operator_boundaries(self) -> None:
        cases = {
            "(a+b)\\times c": Infix("×", Infix("+", a, b), c),
            "(a\\times b)+c": Infix("+", Infix("×", a, b), c),
            "a\\times(b+c)": Infix("×", a, Infix("+", b, c)),
            "a-(b-c)": Infix("−", a, Infix("−", b, c)),
            "(a+b\\times c)d": Infix("×", Infix("+", a, Infix("×", b, c)), d),
            "(-a)\\times b": Infix("×", Prefix("−", a), b),
            "(a+b)\\%": Infix("÷", Infix("+", a, b), Num("100")),
            "(a)-b": Infix("−", a, b),
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(_tree(source), expected)

    def test_implicit_multiplication(self) -> None:
        cases = {
            "2x": Infix("×", Num("2"), x),
            "xy": Infix("×", x, y),
            "x(y+1)": Infix("×", x, Infix("+", y, Num("1"))),
            "(a+b)c": Infix("×", Infix("+", a, b), c),
            "2x^{2}": Infix("×", Num("2"), Infix("^", x, Num("2"))),
            "\\frac{a}{b}c": Infix("×", Infix("÷", a, b), c),
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(_tree(source), expected)

    def test_bracket_exponent_applies_to_group(self) -> None:
        self.assertEqual(_tree("(a+b)^{2}"), Infix("^", Infix("+", a, b), Num("2")))

    def test_radicals(self) -> None:
        self.assertEqual(_tree("\\sqrt{x}"), Infix("^", x, Infix("÷", Num("1"), Num("2"))))
        self.assertEqual(_tree("\\sqrt[3]{x}"), Infix("^", x, Infix("÷", Num("1"), Num("3"))))


class UnaryTests(unittest.TestCase):
    def test_unary_binds_tighter_than_binary(self) -> None:
        cases = {
            "-x^{2}": Prefix("−", Infix("^", x, Num("2"))),
            "-a\\times b": Infix("×", Prefix("−", a), b),
            "-a+b": Infix("+", Prefix("−", a), b),
            "a+-b": Infix("+", a, Prefix("−", b)),
            "+a": Prefix("+", a),
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(_tree(source), expected)

    def test_binary_operators_without_left_operand_are_reread(self) -> None:
        atoms = MathList([BinaryOperator("−"), BinaryOperator("−"), BinaryOperator("−"), Number("5")])
        self.assertEqual(
            math_list_to_expression(atoms, backend=TreeBackend()),
            Prefix("−", Prefix("−", Prefix("−", Num("5")))),
        )

        atoms = MathList([Number("1"), BinaryOperator("−"), BinaryOperator("−"), BinaryOperator("−"), Number("2")])
        self.assertEqual(
            math_list_to_expression(atoms, backend=TreeBackend()),
            Infix("−", Num("1"), Prefix("−", Prefix("−", Num("2")))),
        )

    def test_rereading_keeps_the_superscript(self) -> None:
        atoms = MathList([BinaryOperator("−", superscript=MathList([Number("2")])), Number("3")])
        self.assertEqual(
            math_list_to_expression(atoms, backend=TreeBackend()),
            Infix("^", Prefix("−", Num("3")), Num("2")),
        )

    def test_rereading_only_touches_the_working_copy(self) -> None:
        atoms = MathList([BinaryOperator("−"), Number("5")])
        math_list_to_expression(atoms, backend=TreeBackend())
        self.assertIsInstance(atoms[0], BinaryOperator)

        math_list_to_expression(atoms, backend=TreeBackend(), settings=TransformSettings(clone_input=False))
        self.assertIsInstance(atoms[0], UnaryOperator)

    def test_slash_has_no_unary_form(self) -> None:
        with self.assertRaises(TransformError) as ctx:
            _tree("/2")
        self.assertEqual(str(ctx.exception), "Unsupported UnaryOperator /")


class PostfixTests(unittest.TestCase):
    def test_percent_and_degree(self) -> None:
        cases = {
            "50\\%": Infix("÷", Num("50"), Num("100")),
            "180°": Infix("÷", Infix("×", Num("180"), PI), Num("180")),
            "2\\times50\\%": Infix("×", Num("2"), Infix("÷", Num("50"), Num("100"))),
            "-50\\%": Prefix("−", Infix("÷", Num("50"), Num("100"))),
            "50\\%x": Infix("×", Infix("÷", Num("50"), Num("100")), x),
            "x^{2}\\%": Infix("÷", Infix("^", x, Num("2")), Num("100")),
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(_tree(source), expected)


if __name__ == "__main__":
    unittest.main()
