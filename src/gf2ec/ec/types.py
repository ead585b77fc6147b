"""Dataclass definitions for the generator searches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gf2ec.ec.field import FACTOR_LIMIT

if TYPE_CHECKING:
    from gf2ec.ec.group import ECPoint


@dataclass
class SearchConfig:
    """Budget and acceptance rules for generator searches."""

    max_attempts: int = 10_000
    exact_order: bool = False  # reject candidates whose order is a proper divisor
    factor_limit: int = FACTOR_LIMIT  # trial division bound when factoring for exact_order


@dataclass
class GeneratorSearchResult:
    """Outcome of a subgroup generator search on the curve."""

    order: int
    attempts: int
    generator: ECPoint | None = None

    @property
    def found(self) -> bool:
        return self.generator is not None


@dataclass
class TwistSearchResult:
    """Outcome of a subgroup generator search on the quadratic twist.

    Only the x-coordinate survives the ladder, so that is all we keep.
    """

    order: int
    attempts: int
    x: int | None = None

    @property
    def found(self) -> bool:
        return self.x is not None
