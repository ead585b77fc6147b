"""Dense matrix operations over GF(2).

Matrices are 2-D ``numpy.uint8`` arrays holding 0/1 entries; vectors are
1-D arrays of the same dtype. Addition is XOR and multiplication is AND.

Operations that reduce a matrix come in two flavours:

- a pure function (``gaussian_elimination``) that leaves its argument
  untouched and returns a new matrix, and
- an ``*_inplace`` variant that mutates the caller's array and returns None.

The kernel workflow mirrors the textbook construction: augment the
transposed map with an identity block, reduce, and read the basis off the
rows (or columns) whose leading block vanished.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from gf2ec.linalg.types import EchelonResult

logger = logging.getLogger(__name__)


def as_gf2(obj: ArrayLike) -> NDArray[np.uint8]:
    """Return a fresh uint8 copy of ``obj`` with entries reduced mod 2."""
    arr = np.asarray(obj)
    if arr.dtype == np.bool_:
        return arr.astype(np.uint8)
    return (arr % 2).astype(np.uint8)


def _matrix(obj: ArrayLike) -> NDArray[np.uint8]:
    mat = as_gf2(obj)
    if mat.ndim != 2:
        raise ValueError(f"expected a 2-D matrix, got {mat.ndim}-D input")
    return mat


def _require_mutable(mat: object) -> NDArray[np.uint8]:
    if not isinstance(mat, np.ndarray):
        raise TypeError(
            f"in-place operations need a numpy array, got {type(mat).__name__}"
        )
    if mat.ndim != 2:
        raise ValueError(f"expected a 2-D matrix, got {mat.ndim}-D input")
    if mat.dtype not in (np.uint8, np.bool_):
        raise TypeError(f"in-place operations need a uint8 or bool array, got {mat.dtype}")
    if mat.dtype == np.uint8 and mat.size and mat.max() > 1:
        raise ValueError("in-place operations need entries in {0, 1}")
    return mat


def identity(n: int) -> NDArray[np.uint8]:
    """n x n identity matrix."""
    return np.eye(n, dtype=np.uint8)


def from_bit_strings(rows: Iterable[str]) -> NDArray[np.uint8]:
    """Build a matrix from rows written as bit strings, e.g. ``["110", "011"]``."""
    rows = list(rows)
    if not rows:
        raise ValueError("at least one row is required")
    width = len(rows[0])
    for row in rows:
        if len(row) != width:
            raise ValueError(f"row {row!r} has length {len(row)}, expected {width}")
        if set(row) - {"0", "1"}:
            raise ValueError(f"row {row!r} contains characters other than 0 and 1")
    return np.array([[int(c) for c in row] for row in rows], dtype=np.uint8)


def format_matrix(mat: ArrayLike) -> str:
    """Render a matrix one row per line with space-separated entries."""
    mat = as_gf2(mat)
    if mat.ndim == 1:
        mat = mat.reshape(1, -1)
    return "\n".join(" ".join(str(int(v)) for v in row) for row in mat)


def copy(mat: ArrayLike) -> NDArray[np.uint8]:
    return _matrix(mat)


def transpose(mat: ArrayLike) -> NDArray[np.uint8]:
    return np.ascontiguousarray(_matrix(mat).T)


def transpose_inplace(mat: NDArray[np.uint8]) -> None:
    """Transpose a square matrix in place."""
    mat = _require_mutable(mat)
    m, n = mat.shape
    if m != n:
        raise ValueError(f"in-place transpose needs a square matrix, got {m}x{n}")
    mat[...] = mat.T.copy()


def _eliminate(mat: NDArray[np.uint8], n: int) -> list[int]:
    """Reduce ``mat`` in place, searching pivots in the first n columns.

    Row operations span the full width so any augmented block to the right
    of column n follows along. Returns the pivot columns in order.
    """
    m = mat.shape[0]
    pivots: list[int] = []
    h = k = 0
    while h < m and k < n:
        hits = np.flatnonzero(mat[h:, k])
        if hits.size == 0:
            # No pivot in this column
            k += 1
            continue
        i_max = h + int(hits[0])
        if i_max != h:
            mat[[h, i_max]] = mat[[i_max, h]]
        # Clear column k above and below the pivot for a fully reduced form
        rows = np.flatnonzero(mat[:, k])
        rows = rows[rows != h]
        mat[rows] ^= mat[h]
        pivots.append(k)
        h += 1
        k += 1
    return pivots


def _pivot_width(mat: NDArray[np.uint8], n: int | None) -> int:
    width = mat.shape[1]
    if n is None:
        return width
    if not 0 <= n <= width:
        raise ValueError(f"pivot columns n={n} outside matrix width {width}")
    return n


def gaussian_elimination_inplace(mat: NDArray[np.uint8], n: int | None = None) -> None:
    """Bring ``mat`` to reduced row echelon form in place.

    Pivots are searched in the first ``n`` columns only (all columns when n
    is None); rank-deficient columns are skipped.
    """
    mat = _require_mutable(mat)
    pivots = _eliminate(mat, _pivot_width(mat, n))
    logger.debug("eliminated %dx%d matrix, rank %d", *mat.shape, len(pivots))


def gaussian_elimination(mat: ArrayLike, n: int | None = None) -> NDArray[np.uint8]:
    """Return the reduced row echelon form of ``mat`` without touching it."""
    res = _matrix(mat)
    gaussian_elimination_inplace(res, n)
    return res


def row_reduce(mat: ArrayLike) -> EchelonResult:
    res = _matrix(mat)
    pivots = _eliminate(res, res.shape[1])
    return EchelonResult(matrix=res, rank=len(pivots), pivots=tuple(pivots))


def rank(mat: ArrayLike) -> int:
    return row_reduce(mat).rank


def gaussian_elimination_column_echelon_form_inplace(mat: NDArray[np.uint8]) -> None:
    """Column-oriented elimination used for kernels of ``[B; I]`` matrices.

    For each column j the first row holding a 1 becomes its pivot, and
    column j is XORed into every other column with a 1 in that row.
    """
    mat = _require_mutable(mat)
    n = mat.shape[1]
    for j in range(n):
        hits = np.flatnonzero(mat[:, j])
        if hits.size == 0:
            continue
        cols = np.flatnonzero(mat[hits[0]])
        cols = cols[cols != j]
        mat[:, cols] ^= mat[:, [j]]


def gaussian_elimination_column_echelon_form(mat: ArrayLike) -> NDArray[np.uint8]:
    res = _matrix(mat)
    gaussian_elimination_column_echelon_form_inplace(res)
    return res


def append_identity_matrix(mat: ArrayLike) -> NDArray[np.uint8]:
    """Return ``[mat | I]`` where I has as many rows as ``mat``."""
    mat = _matrix(mat)
    return np.hstack([mat, identity(mat.shape[0])])


def append_identity_matrix_bottom(mat: ArrayLike) -> NDArray[np.uint8]:
    """Return ``[mat ; I]`` where I has as many columns as ``mat``."""
    mat = _matrix(mat)
    return np.vstack([mat, identity(mat.shape[1])])


def extract_basis_matrix(mat: ArrayLike) -> NDArray[np.uint8]:
    """Read a kernel basis off a row-reduced ``[A^T | I]``.

    With m rows and n + m columns, every row whose first n entries are zero
    contributes its trailing m entries, provided they are not all zero.
    Returns a (k, m) array, one basis vector per row.
    """
    mat = _matrix(mat)
    m, width = mat.shape
    n = width - m
    if n < 0:
        raise ValueError(f"augmented matrix {m}x{width} is narrower than its identity block")
    lead_zero = ~mat[:, :n].any(axis=1)
    tail = mat[:, n:]
    keep = lead_zero & tail.any(axis=1)
    return tail[keep].copy()


def extract_basis_matrix_bottom(mat: ArrayLike) -> NDArray[np.uint8]:
    """Read a kernel basis off a column-reduced ``[B ; C]``.

    B holds the top m - n rows and C the bottom n rows. Every column whose
    B segment vanished contributes its C segment unless that is zero too.
    Returns a (k, n) array, one basis vector per row.
    """
    mat = _matrix(mat)
    m, n = mat.shape
    if m <= n:
        raise ValueError(f"augmented matrix {m}x{n} has no room for an identity block")
    bm = m - n
    top, bottom = mat[:bm], mat[bm:]
    keep = ~top.any(axis=0) & bottom.any(axis=0)
    return np.ascontiguousarray(bottom[:, keep].T)


def kernel_basis(mat: ArrayLike) -> NDArray[np.uint8]:
    """Basis of the null space of ``mat`` via row reduction of ``[A^T | I]``."""
    mat = _matrix(mat)
    augmented = append_identity_matrix(transpose(mat))
    gaussian_elimination_inplace(augmented, mat.shape[0])
    return extract_basis_matrix(augmented)


def kernel_basis_bottom(mat: ArrayLike) -> NDArray[np.uint8]:
    """Basis of the null space of ``mat`` via column reduction of ``[A ; I]``."""
    augmented = append_identity_matrix_bottom(mat)
    gaussian_elimination_column_echelon_form_inplace(augmented)
    return extract_basis_matrix_bottom(augmented)


def _product(a: NDArray[np.uint8], b: NDArray[np.uint8]) -> NDArray[np.uint8]:
    # int64 accumulation, parity survives in the low bit
    return ((a.astype(np.int64) @ b.astype(np.int64)) & 1).astype(np.uint8)


def multiply(mat: ArrayLike, other: ArrayLike) -> NDArray[np.uint8]:
    """GF(2) product of a matrix with a vector or with another matrix."""
    a = _matrix(mat)
    b = as_gf2(other)
    if b.ndim not in (1, 2):
        raise ValueError(f"expected a vector or matrix operand, got {b.ndim}-D input")
    if a.shape[1] != b.shape[0]:
        raise ValueError(f"cannot multiply {a.shape} by {b.shape}: inner dimensions differ")
    return _product(a, b)


def scale(mat: ArrayLike, k: int) -> NDArray[np.uint8]:
    """Compute ``mat ** k`` by square-and-multiply; k must be positive."""
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
        raise ValueError(f"exponent must be a positive integer, got {k!r}")
    base = _matrix(mat)
    m, n = base.shape
    if m != n:
        raise ValueError(f"matrix powers need a square matrix, got {m}x{n}")
    result = base.copy()
    k = int(k) - 1
    while k:
        if k & 1:
            result = _product(result, base)
        base = _product(base, base)
        k >>= 1
    return result


def add(mat: ArrayLike, other: ArrayLike) -> NDArray[np.uint8]:
    a = _matrix(mat)
    b = _matrix(other)
    if a.shape != b.shape:
        raise ValueError(f"cannot add {a.shape} and {b.shape}: shapes differ")
    return a ^ b


def equals(mat: ArrayLike, other: ArrayLike) -> bool:
    a = as_gf2(mat)
    b = as_gf2(other)
    return a.shape == b.shape and bool(np.array_equal(a, b))
