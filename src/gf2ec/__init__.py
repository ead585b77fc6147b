"""GF(2) linear algebra and elliptic-curve subgroup engines for cryptanalysis."""

__version__ = "0.1.0"
