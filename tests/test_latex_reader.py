from __future__ import annotations

import unittest

from mathlist_eval.atoms import (
    BinaryOperator,
    Close,
    Fraction,
    Inner,
    LargeOperator,
    MathList,
    Number,
    Open,
    Ordinary,
    Placeholder,
    Radical,
    Relation,
    Space,
    UnaryOperator,
    Variable,
    inverse_exponent,
)
from mathlist_eval.errors import LaTeXParseError
from mathlist_eval.latex import COMPLEX_INFINITY, INFINITY, NOT_A_NUMBER, command_for_nucleus, read_latex, tokenize


class TokenizerTests(unittest.TestCase):
    def _tokens(self, source: str):
        return [(tok.kind, tok.text, tok.pos, tok.end) for tok in tokenize(source) if tok.kind != "EOF"]

    def test_token_golden_commands_scripts_and_groups(self) -> None:
        self.assertEqual(
            self._tokens("\\frac{1}{x}^2_\\,"),
            [
                ("COMMAND", "frac", 0, 5),
                ("LBRACE", "{", 5, 6),
                ("DIGIT", "1", 6, 7),
                ("RBRACE", "}", 7, 8),
                ("LBRACE", "{", 8, 9),
                ("CHAR", "x", 9, 10),
                ("RBRACE", "}", 10, 11),
                ("SUP", "^", 11, 12),
                ("DIGIT", "2", 12, 13),
                ("SUB", "_", 13, 14),
                ("COMMAND", ",", 14, 16),
            ],
        )

    def test_whitespace_is_insignificant(self) -> None:
        self.assertEqual(
            [(kind, text) for kind, text, _, _ in self._tokens(" \\sin  x [ 1.5 ] ")],
            [("COMMAND", "sin"), ("CHAR", "x"), ("LBRACK", "["), ("DIGIT", "1"), ("DIGIT", "."), ("DIGIT", "5"), ("RBRACK", "]")],
        )

    def test_eof_token_closes_stream(self) -> None:
        tokens = tokenize("x")
        self.assertEqual(tokens[-1].kind, "EOF")
        self.assertEqual((tokens[-1].pos, tokens[-1].end), (1, 1))

    def test_dangling_backslash(self) -> None:
        with self.assertRaises(LaTeXParseError) as ctx:
            tokenize("x\\")
        self.assertEqual((ctx.exception.start, ctx.exception.end), (1, 2))


class ReaderTests(unittest.TestCase):
    def test_digits_fuse_into_one_number(self) -> None:
        self.assertEqual(read_latex("12.5x"), MathList([Number("12.5"), Variable("x")]))

    def test_leading_minus_becomes_unary(self) -> None:
        self.assertEqual(read_latex("-x"), MathList([UnaryOperator("−"), Variable("x")]))
        self.assertEqual(
            read_latex("a-b"),
            MathList([Variable("a"), BinaryOperator("−"), Variable("b")]),
        )
        self.assertEqual(
            read_latex("a+-b"),
            MathList([Variable("a"), BinaryOperator("+"), UnaryOperator("−"), Variable("b")]),
        )

    def test_minus_after_open_bracket_and_function_is_unary(self) -> None:
        atoms = read_latex("(-1)\\sin-x")
        self.assertIsInstance(atoms[1], UnaryOperator)
        self.assertIsInstance(atoms[5], UnaryOperator)

    def test_inverse_function_superscript(self) -> None:
        atoms = read_latex("\\sin^{-1}(x)")
        self.assertEqual(
            atoms,
            MathList([LargeOperator("sin", superscript=inverse_exponent()), Open("("), Variable("x"), Close(")")]),
        )

    def test_fraction_and_radical(self) -> None:
        self.assertEqual(
            read_latex("\\frac{1}{x}"),
            MathList([Fraction(numerator=MathList([Number("1")]), denominator=MathList([Variable("x")]))]),
        )
        self.assertEqual(
            read_latex("\\sqrt[3]{x}"),
            MathList([Radical(degree=MathList([Number("3")]), radicand=MathList([Variable("x")]))]),
        )
        self.assertEqual(read_latex("\\frac12"), read_latex("\\frac{1}{2}"))

    def test_left_right_builds_inner_with_script(self) -> None:
        atoms = read_latex("\\left(x \\right)^{2}")
        self.assertEqual(len(atoms), 1)
        inner = atoms[0]
        self.assertIsInstance(inner, Inner)
        assert isinstance(inner, Inner)
        self.assertEqual(inner.left_boundary.nucleus, "(")
        self.assertEqual(inner.right_boundary.nucleus, ")")
        self.assertEqual(inner.inner_list, MathList([Variable("x")]))
        self.assertEqual(inner.superscript, MathList([Number("2")]))

    def test_braced_group_splices_and_takes_script(self) -> None:
        self.assertEqual(
            read_latex("{x}^{2}"),
            MathList([Variable("x", superscript=MathList([Number("2")]))]),
        )

    def test_second_superscript_gets_an_empty_carrier(self) -> None:
        atoms = read_latex("x^{2}^{3}")
        self.assertEqual(atoms[0], Variable("x", superscript=MathList([Number("2")])))
        self.assertEqual(atoms[1], Ordinary("", superscript=MathList([Number("3")])))

    def test_single_token_script(self) -> None:
        self.assertEqual(
            read_latex("x^23"),
            MathList([Variable("x", superscript=MathList([Number("2")])), Number("3")]),
        )

    def test_log_subscript_and_operatorname(self) -> None:
        self.assertEqual(read_latex("\\log_{2}"), MathList([LargeOperator("log", subscript=MathList([Number("2")]))]))
        self.assertEqual(read_latex("\\operatorname{arccot}"), MathList([LargeOperator("arccot")]))

    def test_non_finite_values(self) -> None:
        cases = {
            "\\infty": INFINITY,
            "\u221e": INFINITY,
            "\\tilde{\\infty}": COMPLEX_INFINITY,
            "\\text{NaN}": NOT_A_NUMBER,
        }
        for source, nucleus in cases.items():
            with self.subTest(source=source):
                self.assertEqual(read_latex(source), MathList([Variable(nucleus)]))
        self.assertEqual(
            read_latex("-\\infty"),
            MathList([UnaryOperator("−"), Variable(INFINITY)]),
        )

    def test_symbol_commands_and_operators(self) -> None:
        self.assertEqual(
            read_latex("\\alpha\\times\\pi\\div2\\cdot y"),
            MathList(
                [
                    Variable("α"),
                    BinaryOperator("×"),
                    Variable("π"),
                    BinaryOperator("÷"),
                    Number("2"),
                    BinaryOperator("·"),
                    Variable("y"),
                ]
            ),
        )
        self.assertEqual(command_for_nucleus("α"), "alpha")
        self.assertIsNone(command_for_nucleus("x"))

    def test_postfix_space_placeholder_and_relation(self) -> None:
        self.assertEqual(
            read_latex("5\\%\\,7\\degree=\\square"),
            MathList(
                [
                    Number("5"),
                    Ordinary("%"),
                    Space(","),
                    Number("7"),
                    Ordinary("°"),
                    Relation("="),
                    Placeholder(),
                ]
            ),
        )

    def test_reader_errors(self) -> None:
        cases = {
            "\\frac{1}": "Missing argument",
            "\\unknown": "Unknown command \\unknown",
            "\\left(x": "Unexpected end of input",
            "\\right)": "\\right without matching \\left",
            "}": "Unexpected token",
            "{x": "Unexpected end of input",
            "\\tilde{x}": "Only \\tilde{\\infty} is supported",
            "\\text{abc}": "Only \\text{NaN} is supported",
            "\\text{}": "Empty \\text",
        }
        for source, message in cases.items():
            with self.subTest(source=source):
                with self.assertRaises(LaTeXParseError) as ctx:
                    read_latex(source)
                self.assertEqual(ctx.exception.message, message)

    def test_error_rendering_includes_span(self) -> None:
        with self.assertRaises(LaTeXParseError) as ctx:
            read_latex("}")
        self.assertEqual(str(ctx.exception), "Unexpected token at span [0, 1); expected DIGIT, CHAR, COMMAND, LBRACE; found RBRACE(})")


if __name__ == "__main__":
    unittest.main()
