"""Environment-driven settings for the transform entry points."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final


_DEFAULT_MAX_DEPTH: Final[int] = 100


@dataclass(frozen=True)
class TransformSettings:
    """Caller-side policy around the destructive transform.

    - `max_depth`: refuse atom trees nested deeper than this; 0 disables the check.
    - `clone_input`: transform a deep copy so the caller's tree survives exponent stealing.
    """

    max_depth: int = _DEFAULT_MAX_DEPTH
    clone_input: bool = True

    @classmethod
    def from_env(cls) -> "TransformSettings":
        return cls(
            max_depth=max(0, int(os.environ.get("MATHLIST_EVAL_MAX_DEPTH", str(_DEFAULT_MAX_DEPTH)))),
            clone_input=os.environ.get("MATHLIST_EVAL_CLONE_INPUT", "1") != "0",
        )
