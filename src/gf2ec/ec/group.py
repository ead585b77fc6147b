"""Elliptic curve group contract and subgroup generator search.

A curve implementation subclasses ECGroup and supplies six primitives:
the field modulus, the group order, the identity, a y-coordinate lookup,
a membership test and a point constructor. Everything else here, the twist
order and both generator searches, is written once on top of them.

The searches are the building block of small-subgroup confinement attacks:
project a random point into the subgroup of the requested order by
multiplying with the cofactor, and retry until the projection is not the
identity. On the twist only x-coordinates are available, so projection uses
the point's x-only ladder.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Protocol

import numpy as np

from gf2ec.ec.field import prime_factors, random_field_element
from gf2ec.ec.types import GeneratorSearchResult, SearchConfig, TwistSearchResult

logger = logging.getLogger(__name__)

# Returned by map_to_y when x lies on the twist rather than on the curve.
NON_RESIDUE = None


class ECPoint(Protocol):
    """What generator searches need from a point value."""

    @property
    def x(self) -> int: ...

    def scale(self, k: int) -> ECPoint: ...

    def ladder(self, k: int) -> int: ...

    def __eq__(self, other: object) -> bool: ...


def twist_order_of(modulus: int, order: int) -> int:
    """Order of the quadratic twist from |E| + |E'| = 2(p + 1).

    Holds for short Weierstrass curves and their quadratic twist over the
    same prime field. Other curve shapes must not assume it.
    """
    return 2 * (modulus + 1) - order


class ECGroup(ABC):
    """An elliptic curve group E(F_p)."""

    @property
    @abstractmethod
    def modulus(self) -> int:
        """Prime p of the base field."""

    @property
    @abstractmethod
    def order(self) -> int:
        """Number of points on the curve, identity included."""

    @property
    @abstractmethod
    def identity(self) -> ECPoint:
        """Neutral element of the group."""

    @abstractmethod
    def map_to_y(self, x: int) -> int | None:
        """y-coordinate of a curve point with this x, or NON_RESIDUE."""

    @abstractmethod
    def contains_point(self, point: ECPoint) -> bool:
        """Whether ``point`` satisfies the curve equation."""

    @abstractmethod
    def create_point(self, x: int, y: int | None) -> ECPoint:
        """Build a point value. ``y`` is NON_RESIDUE for twist x-coordinates."""

    @property
    def twist_order(self) -> int:
        """Order of the quadratic twist.

        Only valid for short Weierstrass curves; subclasses of other shapes
        override this.
        """
        return twist_order_of(self.modulus, self.order)

    @staticmethod
    def _check_subgroup_order(order: int, full_order: int, what: str) -> None:
        if isinstance(order, bool) or not isinstance(order, (int, np.integer)):
            raise ValueError(f"subgroup order must be an integer, got {order!r}")
        if order < 2:
            raise ValueError(f"subgroup order {order} has no non-identity generator")
        if full_order % order != 0:
            raise ValueError(f"subgroup order {order} does not divide {what} order {full_order}")

    @staticmethod
    def _check_config(config: SearchConfig | None) -> SearchConfig:
        if config is None:
            return SearchConfig()
        if config.max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {config.max_attempts}")
        return config

    def find_generator(
        self,
        order: int,
        config: SearchConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> GeneratorSearchResult:
        """Find a point of the curve generating a subgroup of ``order``.

        ``order`` must divide the group order. Random x-coordinates are
        lifted to curve points and multiplied by the cofactor until the
        result is not the identity, or the attempt budget runs out.

        With ``config.exact_order`` the order is factored up front; an order
        that cannot be factored within ``config.factor_limit`` raises
        ValueError before any sampling.
        """
        config = self._check_config(config)
        self._check_subgroup_order(order, self.order, "group")
        if rng is None:
            rng = np.random.default_rng()

        order = int(order)
        cofactor = self.order // order
        identity = self.identity
        factors = prime_factors(order, config.factor_limit) if config.exact_order else []

        for attempt in range(1, config.max_attempts + 1):
            x = random_field_element(self.modulus, rng)
            y = self.map_to_y(x)
            if y is NON_RESIDUE:
                continue
            candidate = self.create_point(x, y).scale(cofactor)
            if candidate == identity:
                continue
            if any(candidate.scale(order // q) == identity for q in factors):
                continue
            logger.debug("generator of order %d found after %d attempts", order, attempt)
            return GeneratorSearchResult(order=order, attempts=attempt, generator=candidate)

        logger.warning(
            "no generator of order %d within %d attempts", order, config.max_attempts
        )
        return GeneratorSearchResult(order=order, attempts=config.max_attempts)

    def find_twist_generator(
        self,
        order: int,
        config: SearchConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> TwistSearchResult:
        """Find the x-coordinate of a twist point generating a subgroup of ``order``.

        ``order`` must divide the twist order. Only x-coordinates for which
        map_to_y reports NON_RESIDUE are used; they are pushed through the
        x-only ladder by the twist cofactor until the result differs from
        the identity's x.
        """
        config = self._check_config(config)
        self._check_subgroup_order(order, self.twist_order, "twist")
        if rng is None:
            rng = np.random.default_rng()

        order = int(order)
        cofactor = self.twist_order // order
        identity_x = self.identity.x
        factors = prime_factors(order, config.factor_limit) if config.exact_order else []

        for attempt in range(1, config.max_attempts + 1):
            x = random_field_element(self.modulus, rng)
            if self.map_to_y(x) is not NON_RESIDUE:
                continue  # on the curve itself
            candidate = self.create_point(x, NON_RESIDUE).ladder(cofactor)
            if candidate == identity_x:
                continue
            point = self.create_point(candidate, NON_RESIDUE)
            if any(point.ladder(order // q) == identity_x for q in factors):
                continue
            logger.debug("twist generator of order %d found after %d attempts", order, attempt)
            return TwistSearchResult(order=order, attempts=attempt, x=candidate)

        logger.warning(
            "no twist generator of order %d within %d attempts", order, config.max_attempts
        )
        return TwistSearchResult(order=order, attempts=config.max_attempts)
