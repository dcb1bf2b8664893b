"""LaTeX in, expression out, and back again."""

from __future__ import annotations

from .atoms import MathList
from .backend import Backend, Expression, default_backend
from .config import TransformSettings
from .latex import read_latex
from .transform import math_list_to_expression


def math_list_from_expression(expression: Expression, *, backend: Backend | None = None) -> MathList:
    """Render ``expression`` to LaTeX and read it back as atoms.

    Everything the transform can build must survive this; a
    ``LaTeXParseError`` here means the renderer and reader disagree.
    """
    backend = backend if backend is not None else default_backend()
    return read_latex(backend.to_latex(expression))


def evaluate_latex(
    source: str,
    *,
    backend: Backend | None = None,
    settings: TransformSettings | None = None,
) -> Expression:
    return math_list_to_expression(read_latex(source), backend=backend, settings=settings)
