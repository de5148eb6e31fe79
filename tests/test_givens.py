# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from matview.givens import (
    givens_left_rotation,
    givens_parameters,
    givens_right_rotation,
    rotate_columns,
    rotate_rows,
)
from matview.matrix import Matrix
from matview.utils import EPS


def test_parameters():
    c, s = givens_parameters(3.0, 4.0)
    assert c == pytest.approx(0.6)
    assert s == pytest.approx(0.8)


def test_parameters_of_zero_pair_is_identity():
    assert givens_parameters(0.0, 0.0) == (1.0, 0.0)


def test_left_rotation_zeroes_subdiagonal_and_keeps_norms():
    A = Matrix([[3.0, 1.0], [4.0, 2.0]])
    norms = np.linalg.norm(A.to_numpy(), axis=0)

    givens_left_rotation(A.view(), 0, 1, A[0, 0], A[1, 0])

    assert A[0, 0] == pytest.approx(5.0)
    assert abs(A[1, 0]) <= EPS
    np.testing.assert_allclose(np.linalg.norm(A.to_numpy(), axis=0), norms)


def test_right_rotation_zeroes_row_entry_and_keeps_norms():
    A = Matrix([[3.0, 4.0], [1.0, 2.0]])
    norms = np.linalg.norm(A.to_numpy(), axis=1)

    givens_right_rotation(A, 0, 1, A[0, 0], A[0, 1])

    assert A[0, 0] == pytest.approx(5.0)
    assert abs(A[0, 1]) <= EPS
    np.testing.assert_allclose(np.linalg.norm(A.to_numpy(), axis=1), norms)


def test_complex_rotations():
    f, g = 1 + 1j, 2 - 1j
    r = np.sqrt(7.0)

    column = Matrix([[f], [g]])
    givens_left_rotation(column, 0, 1, f, g)
    np.testing.assert_allclose(column.to_numpy().ravel(), [r, 0], atol=1e-12)

    row = Matrix([[f, g]])
    givens_right_rotation(row, 0, 1, f, g)
    np.testing.assert_allclose(row.to_numpy().ravel(), [r, 0], atol=1e-12)


@pytest.mark.parametrize("dtype", [float, complex])
def test_accumulated_rotations_are_unitary(dtype):
    rng = np.random.default_rng(17)
    Q = Matrix.identity(4, dtype=dtype)
    for _ in range(10):
        i, k = rng.choice(4, size=2, replace=False)
        f, g = rng.normal(size=2)
        if dtype is complex:
            f, g = f + 1j * rng.normal(), g + 1j * rng.normal()
        c, s = givens_parameters(f, g)
        rotate_rows(Q, i, k, c, s)

    Qd = Q.to_numpy()
    np.testing.assert_allclose(Qd.conj().T @ Qd, np.eye(4), atol=1e-12)


def test_row_rotation_of_transposed_view_rotates_storage_columns():
    rng = np.random.default_rng(23)
    A = rng.normal(size=(3, 4))
    c, s = givens_parameters(*rng.normal(size=2))

    m1 = Matrix(A)
    rotate_rows(m1.view().transposed(), 0, 2, c, s)

    m2 = Matrix(A)
    rotate_columns(m2, 0, 2, c, s)

    assert m1 == m2


def test_rotation_on_subview_touches_only_the_window():
    A = np.arange(16, dtype=float).reshape(4, 4)
    m = Matrix(A)
    window = m.get_submatrix(1, 3, 1, 3)

    givens_left_rotation(window, 0, 1, window[0, 0], window[1, 0])

    result = m.to_numpy()
    np.testing.assert_array_equal(result[0], A[0])
    np.testing.assert_array_equal(result[3], A[3])
    np.testing.assert_array_equal(result[:, 0], A[:, 0])
    np.testing.assert_array_equal(result[:, 3], A[:, 3])
    assert abs(result[2, 1]) <= EPS
