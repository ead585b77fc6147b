"""Main entry point: python -m gf2ec"""

from __future__ import annotations

import argparse
import logging

from gf2ec import __version__
from gf2ec.ec.field import FACTOR_LIMIT, factorize_small, is_probable_prime
from gf2ec.ec.group import twist_order_of
from gf2ec.linalg import matrix


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gf2ec",
        description="GF(2) linear algebra and elliptic-curve subgroup tools",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command")

    # rref
    rref = sub.add_parser("rref", help="Reduced row echelon form of a bit matrix")
    rref.add_argument("rows", nargs="+", help="Matrix rows as bit strings, e.g. 110 011")
    rref.add_argument("--columns", type=int, default=None, help="Pivot only in the first N columns")

    # kernel
    ker = sub.add_parser("kernel", help="Null-space basis of a bit matrix")
    ker.add_argument("rows", nargs="+", help="Matrix rows as bit strings, e.g. 110 011")
    ker.add_argument(
        "--method",
        choices=["row", "column"],
        default="row",
        help="Reduce [A^T | I] by rows or [A ; I] by columns (default row)",
    )

    # power
    pw = sub.add_parser("power", help="Raise a square bit matrix to a power")
    pw.add_argument("rows", nargs="+", help="Matrix rows as bit strings")
    pw.add_argument("--exponent", type=int, required=True, help="Positive exponent")

    # twist-order
    tw = sub.add_parser("twist-order", help="Quadratic twist order of a short Weierstrass curve")
    tw.add_argument("--modulus", type=int, required=True, help="Field prime p")
    tw.add_argument("--order", type=int, required=True, help="Number of points on the curve")
    tw.add_argument(
        "--factor-limit",
        type=int,
        default=FACTOR_LIMIT,
        help=f"Trial division bound for the twist order (default {FACTOR_LIMIT})",
    )

    return parser


def run_rref(args: argparse.Namespace) -> None:
    mat = matrix.from_bit_strings(args.rows)
    if args.columns is None:
        result = matrix.row_reduce(mat)
        print(matrix.format_matrix(result.matrix))
        print()
        print(f"Rank:   {result.rank}")
        print(f"Pivots: {list(result.pivots)}")
    else:
        print(matrix.format_matrix(matrix.gaussian_elimination(mat, args.columns)))


def run_kernel(args: argparse.Namespace) -> None:
    mat = matrix.from_bit_strings(args.rows)
    if args.method == "row":
        basis = matrix.kernel_basis(mat)
    else:
        basis = matrix.kernel_basis_bottom(mat)

    print(f"Matrix: {mat.shape[0]}x{mat.shape[1]}, rank {matrix.rank(mat)}")
    print(f"Kernel dimension: {basis.shape[0]}")
    if basis.shape[0]:
        print(matrix.format_matrix(basis))


def run_power(args: argparse.Namespace) -> None:
    mat = matrix.from_bit_strings(args.rows)
    print(matrix.format_matrix(matrix.scale(mat, args.exponent)))


def run_twist_order(args: argparse.Namespace) -> None:
    twist = twist_order_of(args.modulus, args.order)
    print(f"Curve order: {args.order}")
    print(f"Twist order: {twist}")
    if twist < 1:
        return
    factors, cofactor = factorize_small(twist, args.factor_limit)
    print(f"Small prime factors: {sorted(factors)}")
    if cofactor > 1:
        kind = "probable prime" if is_probable_prime(cofactor) else "composite"
        print(f"Unfactored cofactor: {cofactor} ({kind}, {cofactor.bit_length()} bits)")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "rref":
            run_rref(args)
        elif args.command == "kernel":
            run_kernel(args)
        elif args.command == "power":
            run_power(args)
        elif args.command == "twist-order":
            run_twist_order(args)
        else:
            parser.print_help()
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
