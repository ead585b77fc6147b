"""Shared fixtures: toy short Weierstrass curves satisfying ECGroup."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from gf2ec.ec.field import is_quadratic_residue, modular_sqrt
from gf2ec.ec.group import NON_RESIDUE, ECGroup

Affine = tuple[int, int] | None


def count_curve_points(p: int, a: int, b: int) -> int:
    """Count points on y^2 = x^3 + ax + b over F_p by enumeration."""
    count = 1  # point at infinity
    for x in range(p):
        rhs = (x * x * x + a * x + b) % p
        if rhs == 0:
            count += 1
        elif is_quadratic_residue(rhs, p):
            count += 2
    return count


@dataclass(frozen=True)
class ToyPoint:
    x: int
    y: int | None
    infinity: bool = False
    curve: ToyWeierstrassGroup | None = field(default=None, compare=False, repr=False)

    def _affine(self) -> Affine:
        if self.infinity:
            return None
        assert self.y is not NON_RESIDUE, "twist points only support ladder()"
        return (self.x, self.y)

    def scale(self, k: int) -> ToyPoint:
        assert self.curve is not None
        return self.curve.wrap(self.curve.multiply(self._affine(), k, self.curve.a))

    def ladder(self, k: int) -> int:
        assert self.curve is not None
        if self.infinity:
            return self.x
        return self.curve.x_multiply(self.x, k)


class ToyWeierstrassGroup(ECGroup):
    """y^2 = x^3 + ax + b over a small prime field.

    The identity carries x = p, outside the field, so no finite point on the
    curve or its twist shares its x-coordinate.

    Twist x-coordinates are multiplied on the isomorphic curve
    Y^2 = X^3 + a d^2 X + b d^3 with X = d x, d a fixed non-residue.
    """

    def __init__(self, p: int, a: int, b: int) -> None:
        self.p = p
        self.a = a
        self.b = b
        self._order = count_curve_points(p, a, b)
        self._identity = ToyPoint(p, 1, infinity=True, curve=self)
        d = 2
        while is_quadratic_residue(d, p):
            d += 1
        self.d = d
        self.twist_a = a * d * d % p
        self.twist_b = b * d * d * d % p

    @property
    def modulus(self) -> int:
        return self.p

    @property
    def order(self) -> int:
        return self._order

    @property
    def identity(self) -> ToyPoint:
        return self._identity

    def rhs(self, x: int) -> int:
        return (x * x * x + self.a * x + self.b) % self.p

    def map_to_y(self, x: int) -> int | None:
        return modular_sqrt(self.rhs(x), self.p)

    def contains_point(self, point: ToyPoint) -> bool:
        if point.infinity:
            return True
        if point.y is NON_RESIDUE:
            return False
        return (point.y * point.y - self.rhs(point.x)) % self.p == 0

    def create_point(self, x: int, y: int | None) -> ToyPoint:
        return ToyPoint(x % self.p, y if y is NON_RESIDUE else y % self.p, curve=self)

    def wrap(self, P: Affine) -> ToyPoint:
        if P is None:
            return self._identity
        return ToyPoint(P[0], P[1], curve=self)

    # -- affine arithmetic, curve coefficient a passed explicitly --

    def add(self, P: Affine, Q: Affine, a: int) -> Affine:
        if P is None:
            return Q
        if Q is None:
            return P
        p = self.p
        x1, y1 = P
        x2, y2 = Q
        if x1 == x2 and (y1 + y2) % p == 0:
            return None
        if P == Q:
            lam = (3 * x1 * x1 + a) * pow(2 * y1, p - 2, p) % p
        else:
            lam = (y2 - y1) * pow((x2 - x1) % p, p - 2, p) % p
        x3 = (lam * lam - x1 - x2) % p
        y3 = (lam * (x1 - x3) - y1) % p
        return (x3, y3)

    def multiply(self, P: Affine, k: int, a: int) -> Affine:
        result: Affine = None
        addend = P
        while k and addend is not None:
            if k & 1:
                result = self.add(result, addend, a)
            addend = self.add(addend, addend, a)
            k >>= 1
        return result

    def x_multiply(self, x: int, k: int) -> int:
        """x-coordinate of k * (x, y) for x on the curve or on its twist."""
        p = self.p
        rhs = self.rhs(x)
        if is_quadratic_residue(rhs, p):
            R = self.multiply((x, modular_sqrt(rhs, p)), k, self.a)
            return self._identity.x if R is None else R[0]
        d = self.d
        X = d * x % p
        Y = modular_sqrt(d * d * d * rhs % p, p)
        R = self.multiply((X, Y), k, self.twist_a)
        if R is None:
            return self._identity.x
        return R[0] * pow(d, p - 2, p) % p


@pytest.fixture
def toy_curve() -> ToyWeierstrassGroup:
    """y^2 = x^3 + 7 over F_19: order 12 (Z2 x Z6), twist order 28 (Z2 x Z14)."""
    return ToyWeierstrassGroup(19, 0, 7)


@pytest.fixture
def cyclic_curve() -> ToyWeierstrassGroup:
    """y^2 = x^3 + 2x + 3 over F_19: cyclic of order 20, twist order 20."""
    return ToyWeierstrassGroup(19, 2, 3)


@pytest.fixture
def prime_curve() -> ToyWeierstrassGroup:
    """y^2 = x^3 + 7 over F_13: order 7, cyclic twist of order 21."""
    return ToyWeierstrassGroup(13, 0, 7)


@dataclass(frozen=True)
class ResiduePoint:
    """Element of the additive group Z/nZ, standing in for a curve point."""

    x: int
    n: int

    def scale(self, k: int) -> ResiduePoint:
        return ResiduePoint(self.x * k % self.n, self.n)

    def ladder(self, k: int) -> int:
        return self.x * k % self.n


class ResidueGroup(ECGroup):
    """Cyclic group Z/nZ behind the ECGroup contract.

    Every x is accepted by map_to_y, so only the curve-side search applies.
    Scalar multiplication is a single modular product, which makes
    cryptographic-size orders cheap to exercise.
    """

    def __init__(self, order: int, modulus: int = 2**127 - 1) -> None:
        self._order = order
        self._modulus = modulus

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def order(self) -> int:
        return self._order

    @property
    def identity(self) -> ResiduePoint:
        return ResiduePoint(0, self._order)

    def map_to_y(self, x: int) -> int | None:
        return 0

    def contains_point(self, point: ResiduePoint) -> bool:
        return point.n == self._order and 0 <= point.x < self._order

    def create_point(self, x: int, y: int | None) -> ResiduePoint:
        return ResiduePoint(x % self._order, self._order)


@pytest.fixture
def mersenne_group() -> ResidueGroup:
    """Order 2 * (2^61 - 1) * (2^89 - 1); both odd factors are Mersenne primes."""
    return ResidueGroup(2 * (2**61 - 1) * (2**89 - 1))
