# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import NamedTuple, Optional, Tuple

import numpy as np

from .errors import PreconditionError
from .eigen import wilkinson_shift
from .givens import givens_parameters, rotate_columns, rotate_rows
from .matrix import Matrix
from .utils import is_bidiagonal, is_zero_floating

DEFAULT_SVD_ITERATIONS = 30

logger = logging.getLogger(__name__)


class BidiagonalSVD(NamedTuple):
    """Result of B = U S VT."""

    U: Matrix
    S: Matrix
    VT: Matrix


def _superdiagonal_norm(S) -> float:
    return float(
        np.sqrt(sum(abs(S[i, i + 1]) ** 2 for i in range(S.rows - 1)))
    )


def _active_block(S) -> Optional[Tuple[int, int]]:
    """
    Rows [lo, hi) of the trailing unreduced block of S, or None once the
    super-diagonal has vanished.
    """
    hi = S.rows
    while hi > 1 and is_zero_floating(S[hi - 2, hi - 1]):
        hi -= 1
    if hi < 2:
        return None
    lo = hi - 1
    while lo > 0 and not is_zero_floating(S[lo - 1, lo]):
        lo -= 1
    return lo, hi


def _corner_gram(S) -> Matrix:
    """
    Trailing 2x2 block of S^H S for an upper-bidiagonal S.  The entry
    above the minor contributes to the top-left corner when n >= 3.
    """
    n = S.rows
    a, b, d = S[n - 2, n - 2], S[n - 2, n - 1], S[n - 1, n - 1]
    above = S[n - 3, n - 2] if n >= 3 else 0.0

    BB = Matrix.zeros(2, dtype=S.dtype)
    BB[0, 0] = abs(a) ** 2 + abs(above) ** 2
    BB[0, 1] = np.conj(a) * b
    BB[1, 0] = np.conj(BB[0, 1])
    BB[1, 1] = abs(b) ** 2 + abs(d) ** 2
    return BB


def _sweep(S, U, VT, shift):
    """
    One implicit-shift bulge chase.  The first right rotation aligns V with
    the shifted first column of S^H S; every later one removes the bulge
    left in row i-1.  Each left rotation removes the sub-diagonal S[i+1, i].
    """
    for i in range(S.rows - 1):
        if i == 0:
            f = abs(S[0, 0]) ** 2 - shift
            g = S[0, 0] * np.conj(S[0, 1])
        else:
            f = np.conj(S[i - 1, i])
            g = np.conj(S[i - 1, i + 1])
        c, s = givens_parameters(f, g)
        rotate_rows(VT, i, i + 1, c, s)
        rotate_columns(S, i, i + 1, c, s)

        c, s = givens_parameters(S[i, i], S[i + 1, i])
        rotate_columns(U, i, i + 1, c, s)
        rotate_rows(S, i, i + 1, c, s)


def _chase_row(S, U, k, hi):
    """
    S[k, k] is zero: rotate rows (j, k) against every later diagonal entry
    until row k is empty.  The fill moves one column right per step.
    """
    S[k, k] = 0.0
    for j in range(k + 1, hi):
        c, s = givens_parameters(S[j, j], S[k, j])
        rotate_rows(S, j, k, c, s)
        rotate_columns(U, j, k, c, s)


def _chase_column(S, VT, lo, k):
    """
    The last diagonal entry S[k, k] of a block is zero: rotate columns
    (j, k) upwards until column k is empty.
    """
    S[k, k] = 0.0
    for j in range(k - 1, lo - 1, -1):
        c, s = givens_parameters(np.conj(S[j, j]), np.conj(S[j, k]))
        rotate_columns(S, j, k, c, s)
        rotate_rows(VT, j, k, c, s)


def _step(S, U, VT):
    """
    Advance the trailing unreduced block of S by one deflation or one
    shifted sweep.  Returns False once S is diagonal.
    """
    block = _active_block(S)
    if block is None:
        return False
    lo, hi = block

    zero = next((k for k in range(lo, hi) if is_zero_floating(S[k, k])), None)
    if zero is not None and zero < hi - 1:
        _chase_row(S, U, zero, hi)
    elif zero is not None:
        _chase_column(S, VT, lo, zero)
    else:
        n = S.rows
        S_block = S.get_submatrix(lo, hi, lo, hi)
        shift = wilkinson_shift(_corner_gram(S_block))
        _sweep(
            S_block,
            U.get_submatrix(0, n, lo, hi),
            VT.get_submatrix(lo, hi, 0, n),
            shift,
        )
    S.round_zeroes()
    return True


def _make_non_negative(S, VT):
    # S = (S D^H)(D VT) with D = diag(phase); leaves |s_ii| on the diagonal
    for i in range(S.rows):
        value = S[i, i]
        if is_zero_floating(value):
            continue
        phase = value / abs(value)
        column = S.get_column(i)
        column *= np.conj(phase)
        row = VT.get_row(i)
        row *= phase
        S[i, i] = abs(value)


def _sort_descending(S, U, VT):
    order = np.argsort(-np.abs(np.diag(S.to_numpy())), kind="stable")
    S_values = S.to_numpy()[np.ix_(order, order)]
    return Matrix(U.to_numpy()[:, order]), Matrix(S_values), Matrix(VT.to_numpy()[order, :])


def bidiagonal_svd(
    B,
    it_cnt: int = DEFAULT_SVD_ITERATIONS,
    *,
    tol: Optional[float] = None,
    sort: bool = True,
) -> BidiagonalSVD:
    """
    Singular value decomposition of a square upper-bidiagonal matrix by
    repeated implicit-shift Givens sweeps (Golub–Kahan).

        B = U @ S @ VT

    Algorithm outline
    -----------------
    1.  Start from S = B, U = I, VT = I.
    2.  Per iteration, work on the trailing unreduced block of S (the
        rows between two vanished super-diagonal entries):
        a.  a zero diagonal entry is deflated by chasing its row (or, for
            the last entry of the block, its column) out with rotations;
        b.  otherwise take the Wilkinson shift of the corner of S^H S and
            chase the bulge from the top-left corner of the block to the
            bottom with alternating right (accumulated into VT) and left
            (accumulated into U) rotations.
        Near-zero entries of S are snapped after every iteration, and the
        loop stops early once S is diagonal.
    3.  Move the phase (sign) of every diagonal entry into VT, so the
        singular values come out non-negative.
    4.  Optionally sort them descending with a consistent permutation
        of U, S and VT.

    Parameters
    ----------
    B : Matrix | view
        Square, upper-bidiagonal, at least 2x2.
    it_cnt : int
        Maximum number of iterations (sweeps or deflations).
    tol : float | None
        Optional early exit once the super-diagonal norm is <= tol.
    sort : bool
        Order the singular values descending.

    Returns
    -------
    BidiagonalSVD(U, S, VT)
        U and VT unitary, S diagonal (up to the remaining super-diagonal
        when `it_cnt` runs out) holding the non-negative singular values.
    """
    if B.rows != B.columns or B.rows < 2:
        raise PreconditionError("Bidiagonal QR algorithm for a square matrix of size >= 2.")
    if not is_bidiagonal(B):
        raise PreconditionError("Bidiagonal QR algorithm for bidiagonal matrix.")
    if it_cnt < 0:
        raise PreconditionError("Iteration count must be non-negative.")

    S = B.copy().round_zeroes()
    n = S.rows
    U = Matrix.identity(n, dtype=S.dtype)
    VT = Matrix.identity(n, dtype=S.dtype)
    logger.debug("bidiagonal_svd: n=%d it_cnt=%d", n, it_cnt)

    for it in range(it_cnt):
        if tol is not None and _superdiagonal_norm(S) <= tol:
            logger.debug("bidiagonal_svd: converged after %d sweeps", it)
            break

        if not _step(S, U, VT):
            logger.debug("bidiagonal_svd: diagonal after %d iterations", it)
            break
    else:
        if tol is not None and _superdiagonal_norm(S) > tol:
            logger.warning(
                "bidiagonal_svd: super-diagonal norm %.3e above tol %.3e after %d sweeps",
                _superdiagonal_norm(S),
                tol,
                it_cnt,
            )

    _make_non_negative(S, VT)
    if sort:
        U, S, VT = _sort_descending(S, U, VT)
    return BidiagonalSVD(U, S, VT)
