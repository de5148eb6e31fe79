# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Givens plane rotations applied in place on (mutable) views.

For parameters (c, s) the rotation is

    G = [[conj(c), conj(s)],
         [     -s,       c]]

so that G @ [f, g]^T = [r, 0]^T.  Left application multiplies a pair of
rows by G, right application multiplies a pair of columns by G^H.  For
real data both reduce to the textbook rotation [[c, s], [-s, c]].
"""

from typing import Tuple

import numpy as np

from .utils import is_zero_floating


def givens_parameters(f, g) -> Tuple[complex, complex]:
    """
    Return (c, s) with |c|^2 + |s|^2 = 1 that eliminate `g` against `f`.
    A zero pair gives the identity rotation.
    """
    r = np.hypot(abs(f), abs(g))
    if is_zero_floating(r):
        return 1.0, 0.0
    return f / r, g / r


def rotate_rows(A, i: int, k: int, c, s):
    """Rows (i, k) <- G @ rows (i, k), in place."""
    for j in range(A.columns):
        x, y = A[i, j], A[k, j]
        A[i, j] = np.conj(c) * x + np.conj(s) * y
        A[k, j] = -s * x + c * y
    return A


def rotate_columns(A, i: int, k: int, c, s):
    """Columns (i, k) <- columns (i, k) @ G^H, in place."""
    for j in range(A.rows):
        x, y = A[j, i], A[j, k]
        A[j, i] = c * x + s * y
        A[j, k] = -np.conj(s) * x + np.conj(c) * y
    return A


def givens_left_rotation(A, i: int, k: int, f, g):
    """Rotate rows (i, k) so that a column holding (f, g) becomes (r, 0)."""
    c, s = givens_parameters(f, g)
    return rotate_rows(A, i, k, c, s)


def givens_right_rotation(A, i: int, k: int, f, g):
    """Rotate columns (i, k) so that a row holding (f, g) becomes (r, 0)."""
    c, s = givens_parameters(np.conj(f), np.conj(g))
    return rotate_columns(A, i, k, c, s)
