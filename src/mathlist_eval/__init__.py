"""mathlist-eval public API."""

from .atoms import MathList
from .backend import Backend, SympyBackend, default_backend
from .config import TransformSettings
from .errors import ErrorKind, LaTeXParseError, MathListError, TransformError
from .latex import read_latex, tokenize
from .roundtrip import evaluate_latex, math_list_from_expression
from .transform import Precedence, math_list_to_expression, transform_in_place
from .tree import TreeBackend

__all__ = [
    "MathList",
    "Backend",
    "SympyBackend",
    "TreeBackend",
    "default_backend",
    "TransformSettings",
    "Precedence",
    "math_list_to_expression",
    "transform_in_place",
    "math_list_from_expression",
    "evaluate_latex",
    "read_latex",
    "tokenize",
    "MathListError",
    "TransformError",
    "LaTeXParseError",
    "ErrorKind",
]
