"""Environment-driven resource limits shared by the recursive stages."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

MAX_DEPTH: Final[int] = max(1, int(os.environ.get("J_JAX_MAX_DEPTH", "200")))
MAX_ELEMENTS: Final[int] = max(1, int(os.environ.get("J_JAX_MAX_ELEMENTS", "1000000")))
USE_JITTED_KERNELS: Final[bool] = os.environ.get("J_JAX_DISABLE_JITTED_KERNELS", "0") != "1"


@dataclass(frozen=True)
class EvaluationLimits:
    max_depth: int = MAX_DEPTH
    max_elements: int = MAX_ELEMENTS

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.max_elements < 1:
            raise ValueError("max_elements must be at least 1")

    @classmethod
    def from_env(cls) -> "EvaluationLimits":
        return cls(max_depth=MAX_DEPTH, max_elements=MAX_ELEMENTS)
