# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
matview
=======

Dense linear algebra on an owning row-major matrix and zero-copy views
over it.  Views carry a row / column window and a transposed / conjugated
state that is applied by index remapping, so in-place algorithms (Givens
rotations, transposition) never copy the buffer.

Public API
~~~~~~~~~~
- Storage and views
    - `Matrix`, `MatrixView`, `ConstMatrixView`, `Segment`, `ViewState`
- Primitives
    - `givens_parameters`, `givens_left_rotation`, `givens_right_rotation`,
      `rotate_rows`, `rotate_columns`, `wilkinson_shift`
- Factorizations
    - `householder_qr`
    - `schur_decomposition`
    - `bidiagonal_svd`
- Numeric predicates
    - `is_equal_floating`, `is_zero_floating`, `sign`, `is_hermitian`,
      `is_bidiagonal`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import matview as mv
>>> A = mv.Matrix([[4.0, 1.0], [1.0, 4.0]])
>>> Q, R = mv.householder_qr(A)
>>> Q @ R == A
True
"""

from importlib.metadata import version as _pkg_version

from .eigen import schur_decomposition, wilkinson_shift
from .errors import BoundsError, LinalgError, PreconditionError, ShapeError
from .givens import (
    givens_left_rotation,
    givens_parameters,
    givens_right_rotation,
    rotate_columns,
    rotate_rows,
)
from .matrix import Matrix
from .qr import QR, householder_qr
from .svd import BidiagonalSVD, bidiagonal_svd
from .utils import (
    EPS,
    is_bidiagonal,
    is_equal_floating,
    is_hermitian,
    is_zero_floating,
    sign,
)
from .views import ConstMatrixView, MatrixView, Segment, ViewState

__all__ = [
    "Matrix",
    "MatrixView",
    "ConstMatrixView",
    "Segment",
    "ViewState",
    "givens_parameters",
    "givens_left_rotation",
    "givens_right_rotation",
    "rotate_rows",
    "rotate_columns",
    "householder_qr",
    "QR",
    "wilkinson_shift",
    "schur_decomposition",
    "bidiagonal_svd",
    "BidiagonalSVD",
    "EPS",
    "is_equal_floating",
    "is_zero_floating",
    "sign",
    "is_hermitian",
    "is_bidiagonal",
    "LinalgError",
    "ShapeError",
    "PreconditionError",
    "BoundsError",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show matview”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
