"""Elliptic curve group contract.

Curve implementations subclass ECGroup; generator searches for the curve
and its quadratic twist come for free.
"""

from __future__ import annotations

from gf2ec.ec.group import NON_RESIDUE, ECGroup, ECPoint, twist_order_of
from gf2ec.ec.types import GeneratorSearchResult, SearchConfig, TwistSearchResult

__all__ = [
    "ECGroup",
    "ECPoint",
    "GeneratorSearchResult",
    "NON_RESIDUE",
    "SearchConfig",
    "TwistSearchResult",
    "twist_order_of",
]
