"""Prime-field helpers for curve implementations.

Square roots, residuosity and sampling over F_p, plus trial-division
factoring for small group orders.
"""

from __future__ import annotations

import numpy as np


def is_quadratic_residue(a: int, p: int) -> bool:
    """Euler's criterion. Zero counts as a residue."""
    if a % p == 0:
        return True
    return pow(a, (p - 1) // 2, p) == 1


def modular_sqrt(a: int, p: int) -> int | None:
    """Square root of a mod an odd prime p, or None for a non-residue.

    Uses the (p+1)/4 shortcut when p = 3 mod 4 and Tonelli-Shanks otherwise.
    """
    if p < 3 or p % 2 == 0:
        raise ValueError(f"modulus must be an odd prime, got {p}")
    a %= p
    if a == 0:
        return 0
    if not is_quadratic_residue(a, p):
        return None
    if p % 4 == 3:
        return pow(a, (p + 1) // 4, p)
    q = p - 1
    s = 0
    while q % 2 == 0:
        q //= 2
        s += 1
    z = 2
    while is_quadratic_residue(z, p):
        z += 1
    m = s
    c = pow(z, q, p)
    t = pow(a, q, p)
    r = pow(a, (q + 1) // 2, p)
    while t != 1:
        i = 1
        temp = (t * t) % p
        while temp != 1:
            temp = (temp * temp) % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = (b * b) % p
        t = (t * c) % p
        r = (r * b) % p
    return r


def random_field_element(p: int, rng: np.random.Generator) -> int:
    """Uniform element of [0, p) for moduli of any size.

    Draws p.bit_length() random bits and rejects values >= p.
    """
    n_bits = p.bit_length()
    n_bytes = (n_bits + 7) // 8
    shift = 8 * n_bytes - n_bits
    while True:
        value = int.from_bytes(rng.bytes(n_bytes), "big") >> shift
        if value < p:
            return value


# Trial division bound shared by the CLI and exact-order searches
FACTOR_LIMIT = 10**6

# First 13 primes: Miller-Rabin with these bases is exact below 3.3e24
_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)


def is_probable_prime(n: int) -> bool:
    """Miller-Rabin test with fixed prime witnesses."""
    if n < 2:
        return False
    for q in _WITNESSES:
        if n % q == 0:
            return n == q

    # Write n-1 as 2^r * d
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for a in _WITNESSES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def factorize_small(n: int, limit: int = FACTOR_LIMIT) -> tuple[dict[int, int], int]:
    """Factor n by trial division up to limit.

    Returns (factors, cofactor) where factors maps each prime found to its
    exponent and cofactor is the unfactored remainder (1 if fully factored).
    """
    if n < 1:
        raise ValueError(f"cannot factor {n}")
    factors: dict[int, int] = {}
    d = 2
    while d * d <= n and d <= limit:
        while n % d == 0:
            factors[d] = factors.get(d, 0) + 1
            n //= d
        d += 1 if d == 2 else 2
    if 1 < n and d * d > n:
        # nothing left below sqrt(n), so the remainder is prime
        factors[n] = factors.get(n, 0) + 1
        n = 1
    return factors, n


def prime_factors(n: int, limit: int = FACTOR_LIMIT) -> list[int]:
    """Distinct prime factors of n in increasing order.

    Trial division runs up to ``limit``; a leftover cofactor is accepted only
    if it passes a primality test, otherwise ValueError is raised.
    """
    factors, cofactor = factorize_small(n, limit)
    primes = sorted(factors)
    if cofactor > 1:
        if not is_probable_prime(cofactor):
            raise ValueError(
                f"cannot factor {n}: composite cofactor {cofactor} has no prime below {limit}"
            )
        primes.append(cofactor)
    return primes
