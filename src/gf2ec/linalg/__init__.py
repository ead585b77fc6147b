"""GF(2) matrix engine.

Echelon forms, null-space bases, products and powers of dense boolean
matrices held as ``numpy.uint8`` arrays.
"""

from __future__ import annotations

from gf2ec.linalg.matrix import (
    add,
    append_identity_matrix,
    append_identity_matrix_bottom,
    as_gf2,
    copy,
    equals,
    extract_basis_matrix,
    extract_basis_matrix_bottom,
    format_matrix,
    from_bit_strings,
    gaussian_elimination,
    gaussian_elimination_column_echelon_form,
    gaussian_elimination_column_echelon_form_inplace,
    gaussian_elimination_inplace,
    identity,
    kernel_basis,
    kernel_basis_bottom,
    multiply,
    rank,
    row_reduce,
    scale,
    transpose,
    transpose_inplace,
)
from gf2ec.linalg.types import EchelonResult

__all__ = [
    "EchelonResult",
    "add",
    "append_identity_matrix",
    "append_identity_matrix_bottom",
    "as_gf2",
    "copy",
    "equals",
    "extract_basis_matrix",
    "extract_basis_matrix_bottom",
    "format_matrix",
    "from_bit_strings",
    "gaussian_elimination",
    "gaussian_elimination_column_echelon_form",
    "gaussian_elimination_column_echelon_form_inplace",
    "gaussian_elimination_inplace",
    "identity",
    "kernel_basis",
    "kernel_basis_bottom",
    "multiply",
    "rank",
    "row_reduce",
    "scale",
    "transpose",
    "transpose_inplace",
]
