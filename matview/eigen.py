# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Optional

import numpy as np

from .errors import PreconditionError
from .matrix import Matrix
from .qr import householder_qr
from .utils import is_equal_floating, is_hermitian, is_zero_floating, sign

DEFAULT_SCHUR_ITERATIONS = 50
SHIFT_STRATEGIES = ("zero", "wilkinson")

logger = logging.getLogger(__name__)


def wilkinson_shift(block) -> float:
    """
    Eigenvalue estimate of a symmetric (Hermitian) 2x2 block
    [[a, b], [conj(b), d]] closest to d.

        δ     = (a - d) / 2
        shift = d - sign(δ) |b|² / (|δ| + sqrt(δ² + |b|²))

    sign(0) is 1, so a block with equal diagonal entries gets the exact
    eigenvalue d - |b|.

    Raises
    ------
    PreconditionError
        If the block is not 2x2 or not symmetric / Hermitian.
    """
    if block.rows != 2 or block.columns != 2:
        raise PreconditionError("Wilkinson shift for 2x2 matrix.")
    if not is_equal_floating(block[0, 1], np.conj(block[1, 0])):
        raise PreconditionError("Wilkinson shift for symmetric matrix.")

    a, d = float(np.real(block[0, 0])), float(np.real(block[1, 1]))
    b_sq = float(abs(block[0, 1]) ** 2)

    delta = (a - d) / 2
    coefficient = abs(delta) + np.sqrt(delta * delta + b_sq)
    if is_zero_floating(coefficient):
        # b == 0 and a == d: the block is a multiple of the identity
        return d
    return d - sign(delta) * b_sq / coefficient


def _subdiagonal_norm(A) -> float:
    return float(
        np.sqrt(sum(abs(value) ** 2 for i, j, value in A.items() if i > j))
    )


def schur_decomposition(
    A,
    it_cnt: int = DEFAULT_SCHUR_ITERATIONS,
    *,
    shift: str = "zero",
    tol: Optional[float] = None,
) -> Matrix:
    """
    Shifted QR iteration driving a Hermitian matrix towards diagonal
    (Schur) form.

    Every step factors `current - μI = QR` with Householder QR and
    re-assembles `current = RQ + μI`, then snaps near-zero entries.

    Parameters
    ----------
    A : Matrix | view
        Square Hermitian input; it is copied, never modified.
    it_cnt : int
        Number of QR steps.  Without `tol` exactly this many are run.
    shift : {"zero", "wilkinson"}
        "zero" keeps μ = 0 (unshifted QR).  "wilkinson" recomputes μ from
        the trailing 2x2 block of `current` on every step.
    tol : float | None
        Optional early exit once the norm of the strictly lower triangle
        is <= tol.

    Returns
    -------
    Matrix
        The iterated matrix; eigenvalues appear on its diagonal once
        converged.
    """
    if shift not in SHIFT_STRATEGIES:
        raise PreconditionError(
            f"Unknown shift strategy {shift!r}, expected one of {SHIFT_STRATEGIES}."
        )
    if it_cnt < 0:
        raise PreconditionError("Iteration count must be non-negative.")
    if not is_hermitian(A):
        raise PreconditionError("Schur decomposition for hermitian matrix.")

    current = A.copy()
    n = current.rows
    logger.debug("schur_decomposition: n=%d it_cnt=%d shift=%s", n, it_cnt, shift)
    if n < 2:
        return current

    for it in range(it_cnt):
        if tol is not None and _subdiagonal_norm(current) <= tol:
            logger.debug("schur_decomposition: converged after %d steps", it)
            break

        mu = 0.0
        if shift == "wilkinson":
            mu = wilkinson_shift(current.get_submatrix(n - 2, n, n - 2, n))
        shift_I = Matrix.identity(n, mu)

        Q, R = householder_qr(current - shift_I)
        current = R @ Q + shift_I
        current.round_zeroes()

    return current
