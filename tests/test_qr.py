# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np
import pytest

from matview.matrix import Matrix
from matview.qr import householder_qr

TEST_ITERATIONS = 20
logger = logging.getLogger(__name__)


def test_orthogonality_householder_qr():
    V = np.random.randn(100, 10)
    Q, _ = householder_qr(Matrix(V))
    Qd = Q.to_numpy()
    identity = Qd.T @ Qd
    assert np.allclose(identity, np.eye(100), atol=1e-10)


@pytest.mark.parametrize("m,n", [(5, 5), (8, 5), (5, 8), (1, 4), (4, 1)])
def test_reconstruction(m, n):
    rng = np.random.default_rng(m * 7 + n)
    for _ in range(TEST_ITERATIONS):
        A = Matrix(rng.normal(size=(m, n)))
        Q, R = householder_qr(A)

        assert Q.shape == (m, m)
        assert R.shape == (m, n)
        assert Q @ R == A
        assert Q.view().transposed() @ Q == Matrix.identity(m)


def test_r_is_upper_triangular():
    rng = np.random.default_rng(1)
    A = Matrix(rng.normal(size=(6, 4)))
    _, R = householder_qr(A)
    assert np.all(np.tril(R.to_numpy(), -1) == 0.0)


def test_complex_qr():
    rng = np.random.default_rng(2)
    C = rng.normal(size=(6, 4)) + 1j * rng.normal(size=(6, 4))
    A = Matrix(C)

    Q, R = householder_qr(A)
    logger.debug(f"\nQ:\n{Q}\nR:\n{R}")

    assert Q.dtype == np.complex128
    assert Q @ R == A
    assert Q.view().adjoint() @ Q == Matrix.identity(6)
    assert np.all(np.tril(R.to_numpy(), -1) == 0)


def test_qr_of_transposed_subview():
    rng = np.random.default_rng(3)
    A = rng.normal(size=(6, 5))
    view = Matrix(A).view().transposed().get_submatrix((0, 3), (1, 6))

    Q, R = householder_qr(view)
    np.testing.assert_allclose((Q @ R).to_numpy(), A.T[0:3, 1:6], atol=1e-10)
    assert Q @ R == view


def test_zero_column_is_skipped():
    A = Matrix([[0.0, 1.0, 2.0], [0.0, 3.0, 4.0], [0.0, 5.0, 7.0]])
    Q, R = householder_qr(A)
    assert Q @ R == A
    assert Q.view().transposed() @ Q == Matrix.identity(3)


def test_input_is_not_modified():
    A = Matrix([[2.0, 1.0], [1.0, 3.0]])
    householder_qr(A)
    assert A == Matrix([[2.0, 1.0], [1.0, 3.0]])


def test_empty_input():
    Q, R = householder_qr(Matrix())
    assert Q.shape == (0, 0)
    assert R.shape == (0, 0)
