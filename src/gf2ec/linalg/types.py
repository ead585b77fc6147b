"""Dataclass definitions for the GF(2) matrix engine."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class EchelonResult:
    """Reduced row echelon form together with its rank and pivot columns."""

    matrix: NDArray[np.uint8]
    rank: int
    pivots: tuple[int, ...]
