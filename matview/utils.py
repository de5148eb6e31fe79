# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Numeric predicates shared by every module of the package.

All tolerance decisions (equality, zero-rounding, normalisation guard)
go through `EPS` so that they agree with each other.
"""

import numpy as np

EPS: float = 1e-9


def scalar_dtype(values) -> np.dtype:
    """
    Pick the storage dtype for `values`: complex128 if anything is complex,
    float64 otherwise. Integers and booleans are promoted to float64.
    """
    kind = np.asarray(values).dtype.kind
    if kind == "c":
        return np.dtype(np.complex128)
    if kind in "biuf":
        return np.dtype(np.float64)
    raise TypeError(f"Matrix elements must be real or complex numbers, got {kind!r}")


def is_complex(dtype) -> bool:
    return np.dtype(dtype).kind == "c"


def is_zero_floating(x, eps: float = EPS):
    """Return True where |x| is within `eps` of zero (works on arrays)."""
    return np.abs(x) <= eps


def is_equal_floating(x, y, eps: float = EPS):
    """
    Tolerance equality, absolute near zero and relative for large values
    """
    scale = np.maximum(1.0, np.maximum(np.abs(x), np.abs(y)))
    return np.abs(x - y) <= eps * scale


def sign(x) -> float:
    """Sign of a real number, with sign(0) == 1."""
    if x < 0:
        return -1.0
    return 1.0


def is_hermitian(A, eps: float = EPS) -> bool:
    """
    True if A is square and A[i, j] == conj(A[j, i]) within tolerance.
    For real data this is the usual symmetry check.
    """
    if A.rows != A.columns:
        return False
    for i in range(A.rows):
        for j in range(i, A.columns):
            if not is_equal_floating(A[i, j], np.conj(A[j, i]), eps):
                return False
    return True


def is_bidiagonal(A, eps: float = EPS) -> bool:
    """
    True if every entry outside the main diagonal and the first
    super-diagonal is zero (upper bidiagonal).
    """
    return all(
        is_zero_floating(value, eps)
        for i, j, value in A.items()
        if j != i and j != i + 1
    )
