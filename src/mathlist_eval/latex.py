"""Minimal LaTeX reader producing atom trees.

Covers the notation the transform understands plus what ``sympy.latex``
emits for expressions the transform can build, so rendered results can be
read back in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .atoms import (
    MINUS_SIGN,
    BinaryOperator,
    Boundary,
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
    Punctuation,
    Radical,
    Relation,
    Space,
    UnaryOperator,
    Variable,
    is_blank,
)
from .errors import LaTeXParseError


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int


_SINGLE_TOKENS = {
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACK",
    "]": "RBRACK",
    "^": "SUP",
    "_": "SUB",
}

# Registered command spellings for symbol glyphs: glyph -> command name.
COMMAND_SYMBOLS: Final[dict[str, str]] = {
    "α": "alpha",
    "β": "beta",
    "γ": "gamma",
    "δ": "delta",
    "ε": "epsilon",
    "ζ": "zeta",
    "η": "eta",
    "θ": "theta",
    "ι": "iota",
    "κ": "kappa",
    "λ": "lambda",
    "μ": "mu",
    "ν": "nu",
    "ξ": "xi",
    "π": "pi",
    "ρ": "rho",
    "σ": "sigma",
    "τ": "tau",
    "υ": "upsilon",
    "φ": "phi",
    "χ": "chi",
    "ψ": "psi",
    "ω": "omega",
    "Γ": "Gamma",
    "Δ": "Delta",
    "Θ": "Theta",
    "Λ": "Lambda",
    "Ξ": "Xi",
    "Π": "Pi",
    "Σ": "Sigma",
    "Φ": "Phi",
    "Ψ": "Psi",
    "Ω": "Omega",
}
_GLYPH_FOR_COMMAND: Final[dict[str, str]] = {name: glyph for glyph, name in COMMAND_SYMBOLS.items()}

# Nuclei of the non-finite values sympy renders.
INFINITY: Final[str] = "\u221e"
COMPLEX_INFINITY: Final[str] = "\u221e\u0303"
NOT_A_NUMBER: Final[str] = "NaN"

FUNCTION_COMMANDS: Final[frozenset[str]] = frozenset(
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
        "log",
        "ln",
    }
)

_OPERATOR_COMMANDS: Final[dict[str, str]] = {
    "times": "×",
    "div": "÷",
    "cdot": "·",
}
_SPACE_COMMANDS: Final[frozenset[str]] = frozenset({",", ";", ":", "!", " ", "quad", "qquad"})

_CHAR_BINARY: Final[dict[str, str]] = {
    "+": "+",
    "-": MINUS_SIGN,
    MINUS_SIGN: MINUS_SIGN,
    "*": "*",
    "×": "×",
    "÷": "÷",
    "·": "·",
}
_CHAR_RELATIONS: Final[frozenset[str]] = frozenset("=<>≤≥≠")
_CHAR_PUNCTUATION: Final[frozenset[str]] = frozenset(",;")
_DELIMITERS: Final[frozenset[str]] = frozenset("()[]|.")


def command_for_nucleus(nucleus: str) -> str | None:
    """Command name registered for a symbol glyph, e.g. ``"α" -> "alpha"``."""
    return COMMAND_SYMBOLS.get(nucleus)


def glyph_for_command(name: str) -> str | None:
    return _GLYPH_FOR_COMMAND.get(name)


def _scan_while(source: str, start: int, predicate) -> tuple[str, int]:
    i = start
    while i < len(source) and predicate(source[i]):
        i += 1
    return source[start:i], i


def tokenize(source: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0
    while i < len(source):
        ch = source[i]
        if ch.isspace():
            i += 1
            continue
        if ch == "\\":
            if i + 1 >= len(source):
                raise LaTeXParseError("Dangling backslash", i, i + 1, found="EOF")
            if source[i + 1].isalpha():
                name, end = _scan_while(source, i + 1, str.isalpha)
                tokens.append(Token("COMMAND", name, i, end))
                i = end
                continue
            tokens.append(Token("COMMAND", source[i + 1], i, i + 2))
            i += 2
            continue
        kind = _SINGLE_TOKENS.get(ch)
        if kind is None:
            kind = "DIGIT" if ch.isdigit() or ch == "." else "CHAR"
        tokens.append(Token(kind, ch, i, i + 1))
        i += 1
    tokens.append(Token("EOF", "", len(source), len(source)))
    return tokens


def _leaves_no_left_operand(atom: MathAtom | None) -> bool:
    return atom is None or isinstance(
        atom, (BinaryOperator, UnaryOperator, Open, LargeOperator, Relation, Punctuation)
    )


def _finalize(atoms: MathList) -> MathList:
    """Turn binary operators with nothing on their left into unary ones."""
    previous: MathAtom | None = None
    for i, atom in enumerate(atoms):
        if isinstance(atom, BinaryOperator) and _leaves_no_left_operand(previous):
            atoms[i] = atom.to_unary()
        if not is_blank(atom):
            previous = atoms[i]
    return atoms


def _append(atoms: MathList, atom: MathAtom) -> None:
    if (
        isinstance(atom, Number)
        and atoms
        and isinstance(atoms[-1], Number)
        and not atoms[-1].superscript
        and not atoms[-1].subscript
    ):
        atoms[-1] = Number(atoms[-1].nucleus + atom.nucleus, superscript=atom.superscript, subscript=atom.subscript)
        return
    atoms.append(atom)


@dataclass
class _Reader:
    tokens: list[Token]
    index: int = 0

    def read_all(self) -> MathList:
        atoms = self._read_list(stop=("EOF",))
        self._expect("EOF")
        return atoms

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def _expect(self, kind: str, text: str | None = None) -> Token:
        tok = self._peek()
        if tok.kind != kind or (text is not None and tok.text != text):
            self._error(tok, expected=(kind if text is None else f"{kind}({text})",))
        return self._advance()

    def _error(self, tok: Token | None = None, *, message: str | None = None, expected: tuple[str, ...] = ()) -> None:
        token = tok if tok is not None else self._peek()
        detail = message if message is not None else "Unexpected token"
        if token.kind == "EOF":
            found = "EOF"
        else:
            found = f"{token.kind}({token.text})"
        raise LaTeXParseError(detail, token.pos, token.end, expected=tuple(dict.fromkeys(expected)), found=found)

    def _at_stop(self, stop: tuple[str, ...], stop_commands: tuple[str, ...]) -> bool:
        tok = self._peek()
        if tok.kind in stop:
            return True
        if tok.kind == "COMMAND" and tok.text in stop_commands:
            return True
        if tok.kind == "EOF":
            self._error(tok, message="Unexpected end of input", expected=stop + tuple(f"\\{c}" for c in stop_commands))
        return False

    def _read_list(self, stop: tuple[str, ...], stop_commands: tuple[str, ...] = (), *, finalize: bool = True) -> MathList:
        atoms = MathList()
        while not self._at_stop(stop, stop_commands):
            tok = self._peek()
            if tok.kind in {"SUP", "SUB"}:
                self._advance()
                self._attach_script(atoms, tok.kind, self._read_argument())
                continue
            if tok.kind == "LBRACE":
                self._advance()
                group = self._read_list(("RBRACE",), finalize=False)
                self._expect("RBRACE")
                for atom in group:
                    _append(atoms, atom)
                continue
            _append(atoms, self._read_atom())
        return _finalize(atoms) if finalize else atoms

    def _read_argument(self) -> MathList:
        tok = self._peek()
        if tok.kind == "LBRACE":
            self._advance()
            atoms = self._read_list(("RBRACE",))
            self._expect("RBRACE")
            return atoms
        if tok.kind in {"EOF", "RBRACE", "RBRACK", "SUP", "SUB"}:
            self._error(tok, message="Missing argument", expected=("LBRACE", "DIGIT", "CHAR", "COMMAND"))
        return _finalize(MathList([self._read_atom()]))

    def _attach_script(self, atoms: MathList, kind: str, script: MathList) -> None:
        target = atoms[-1] if atoms else None
        if target is not None:
            slot = target.superscript if kind == "SUP" else target.subscript
            if slot:
                target = None
        if target is None:
            target = Ordinary("")
            atoms.append(target)
        slot = target.superscript if kind == "SUP" else target.subscript
        slot.extend(script)

    def _read_atom(self) -> MathAtom:
        tok = self._advance()
        if tok.kind == "DIGIT":
            return Number(tok.text)
        if tok.kind == "LBRACK":
            return Open("[")
        if tok.kind == "RBRACK":
            return Close("]")
        if tok.kind == "CHAR":
            return self._char_atom(tok.text)
        if tok.kind == "COMMAND":
            return self._command_atom(tok)
        self._error(tok, expected=("DIGIT", "CHAR", "COMMAND", "LBRACE"))
        raise AssertionError("unreachable")

    def _char_atom(self, ch: str) -> MathAtom:
        if ch in _CHAR_BINARY:
            return BinaryOperator(_CHAR_BINARY[ch])
        if ch == "(":
            return Open(ch)
        if ch == ")":
            return Close(ch)
        if ch in _CHAR_RELATIONS:
            return Relation(ch)
        if ch in _CHAR_PUNCTUATION:
            return Punctuation(ch)
        if ch.isalpha() or ch == INFINITY:
            return Variable(ch)
        return Ordinary(ch)

    def _command_atom(self, tok: Token) -> MathAtom:
        name = tok.text
        if name == "frac":
            numerator = self._read_argument()
            denominator = self._read_argument()
            return Fraction(numerator=numerator, denominator=denominator)
        if name == "sqrt":
            degree = MathList()
            if self._peek().kind == "LBRACK":
                self._advance()
                degree = self._read_list(("RBRACK",))
                self._expect("RBRACK")
            return Radical(degree=degree, radicand=self._read_argument())
        if name == "left":
            left = self._read_delimiter()
            inner = self._read_list((), ("right",))
            self._expect("COMMAND", "right")
            right = self._read_delimiter()
            return Inner(left_boundary=Boundary(left), inner_list=inner, right_boundary=Boundary(right))
        if name == "right":
            self._error(tok, message="\\right without matching \\left")
        if name in FUNCTION_COMMANDS:
            return LargeOperator(name)
        if name == "operatorname":
            return LargeOperator(self._read_letters(name))
        if name == "infty":
            return Variable(INFINITY)
        if name == "tilde":
            if self._read_argument() != MathList([Variable(INFINITY)]):
                self._error(tok, message="Only \\tilde{\\infty} is supported")
            return Variable(COMPLEX_INFINITY)
        if name == "text":
            if self._read_letters(name) != NOT_A_NUMBER:
                self._error(tok, message="Only \\text{NaN} is supported")
            return Variable(NOT_A_NUMBER)
        if name in _OPERATOR_COMMANDS:
            return BinaryOperator(_OPERATOR_COMMANDS[name])
        if name in _SPACE_COMMANDS:
            return Space(name)
        if name == "%":
            return Ordinary("%")
        if name == "degree":
            return Ordinary("°")
        if name == "square":
            return Placeholder()
        glyph = glyph_for_command(name)
        if glyph is not None:
            return Variable(glyph)
        self._error(tok, message=f"Unknown command \\{name}")
        raise AssertionError("unreachable")

    def _read_delimiter(self) -> str:
        tok = self._advance()
        if tok.kind in {"CHAR", "DIGIT", "LBRACK", "RBRACK"} and tok.text in _DELIMITERS:
            return tok.text
        if tok.kind == "COMMAND" and tok.text in {"{", "}", "|"}:
            return tok.text
        self._error(tok, message="Expected a delimiter", expected=tuple(sorted(_DELIMITERS)))
        raise AssertionError("unreachable")

    def _read_letters(self, command: str) -> str:
        self._expect("LBRACE")
        letters: list[str] = []
        while self._peek().kind == "CHAR" and self._peek().text.isalpha():
            letters.append(self._advance().text)
        self._expect("RBRACE")
        if not letters:
            self._error(message=f"Empty \\{command}")
        return "".join(letters)


def read_latex(source: str) -> MathList:
    """Read LaTeX source into an atom tree."""
    return _Reader(tokens=tokenize(source)).read_all()
