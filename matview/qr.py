# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import NamedTuple

import numpy as np

from .matrix import Matrix
from .utils import is_zero_floating


class QR(NamedTuple):
    """Result of A = QR."""

    Q: Matrix
    R: Matrix


def householder_qr(A) -> QR:
    """
    Compute the QR decomposition of an m-by-n matrix (or view) A using
    Householder reflections.

    A = QR
    H = I - 2 * w * w^H,  ‖w‖ = 1
    w ∝ x + e^{i arg x0} ‖x‖ e1

    Parameters
    ----------
    A : Matrix | view, any shape (real or complex)

    Returns
    -------
    Q : (m, m) Matrix | unitary
    R : (m, n) Matrix | upper-triangular, exact zeros below the diagonal
    """
    R = A.to_numpy()
    m, n = R.shape
    Q = np.eye(m, dtype=R.dtype)

    for j in range(min(m - 1, n)):
        # ---- build the reflector for column j --------------------------------
        x = R[j:, j]
        norm_x = np.linalg.norm(x)
        if is_zero_floating(norm_x):  # already zero
            continue
        # phase of x0 (sign for real data); 1 when x0 == 0
        phase = x[0] / abs(x[0]) if abs(x[0]) != 0 else 1.0
        w = x.copy()
        w[0] += phase * norm_x
        w /= np.linalg.norm(w)  # ‖w‖ = 1
        w = w.reshape(-1, 1)  # column
        tau = 2  # because w is unit-norm

        # ---- apply H = I – τ w wᴴ  to R (from the left) ----------------------
        R[j:, :] -= tau * w @ (w.conj().T @ R[j:, :])
        # ---- accumulate Q = Q H (H is Hermitian) -----------------------------
        Q[:, j:] -= (Q[:, j:] @ w) @ (tau * w).conj().T

    # force exact upper-triangular shape / zero tiny noise
    R[np.tril_indices(m, -1, n)] = 0
    return QR(Matrix(Q), Matrix(R))
