# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
import operator

import numpy as np

from .base import MatrixBase
from .errors import BoundsError, PreconditionError, ShapeError
from .utils import is_complex, is_zero_floating, scalar_dtype
from .views import ConstMatrixView, MatrixView, Segment

logger = logging.getLogger(__name__)


class Matrix(MatrixBase):
    """
    Dense matrix owning a flat, row-major numpy buffer.

    Only the column count is stored; the row count is derived from the
    buffer size, so `rows * columns == buffer.size` always holds and the
    empty matrix has `rows == columns == 0`.

    Parameters
    ----------
    data : None | nested sequences | 2-D ndarray | Matrix | view
        Rows of values (all of the same length), an array, or any matrix /
        view to copy.  `None` gives the empty matrix.
    dtype : optional
        Storage dtype, float64 or complex128.  Inferred when omitted.
    """

    def __init__(self, data=None, dtype=None):
        if data is None:
            grid = np.zeros((0, 0))
        elif isinstance(data, MatrixBase):
            grid = data.to_numpy()
        elif isinstance(data, np.ndarray):
            if data.ndim != 2:
                raise ShapeError(f"Expected a 2-D array, got {data.ndim}-D.")
            grid = data
        else:
            rows = [list(row) for row in data]
            if rows and len(rows[0]) == 0:
                raise ShapeError("Number of matrix columns must be greater than zero.")
            if any(len(row) != len(rows[0]) for row in rows):
                raise ShapeError(
                    "Size of matrix rows must be equal to the number of columns."
                )
            grid = np.array(rows) if rows else np.zeros((0, 0))

        dtype = scalar_dtype(grid) if dtype is None else scalar_dtype(np.zeros(0, dtype))
        self._buffer = np.array(grid, dtype=dtype).reshape(-1)
        self._columns = grid.shape[1] if self._buffer.size else 0

    @classmethod
    def _from_buffer(cls, buffer: np.ndarray, columns: int) -> "Matrix":
        matrix = cls.__new__(cls)
        matrix._buffer = buffer
        matrix._columns = columns if buffer.size else 0
        return matrix

    @classmethod
    def zeros(cls, size: int, dtype=float) -> "Matrix":
        """Square `size` x `size` zero matrix."""
        if size <= 0:
            raise ShapeError("Size of a square matrix must be greater than zero.")
        return cls.full(size, size, 0, dtype=dtype)

    @classmethod
    def full(cls, rows: int, columns: int, value=0.0, dtype=None) -> "Matrix":
        if rows <= 0 or columns <= 0:
            raise ShapeError("Number of matrix rows and columns must be greater than zero.")
        dtype = scalar_dtype(value) if dtype is None else scalar_dtype(np.zeros(0, dtype))
        return cls._from_buffer(np.full(rows * columns, value, dtype=dtype), columns)

    @classmethod
    def diagonal(cls, values, dtype=None) -> "Matrix":
        values = np.asarray(values)
        if values.ndim != 1 or values.size == 0:
            raise ShapeError("List to create a diagonal matrix must not be empty.")
        dtype = scalar_dtype(values) if dtype is None else dtype
        return cls(np.diag(values), dtype=dtype)

    @classmethod
    def identity(cls, size: int, value=1.0, dtype=None) -> "Matrix":
        if size <= 0:
            raise ShapeError("Size of an identity matrix must be greater than zero.")
        return cls.diagonal(np.full(size, value), dtype=dtype)

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._buffer.size // self._columns if self._columns else 0

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def dtype(self):
        return self._buffer.dtype

    def _offset(self, key) -> int:
        row_idx, col_idx = (operator.index(idx) for idx in key)
        if not (0 <= row_idx < self.rows and 0 <= col_idx < self.columns):
            raise BoundsError(
                "Requested indexes are outside the matrix boundaries: "
                f"({row_idx}, {col_idx}) in {self.rows}x{self.columns}."
            )
        return row_idx * self._columns + col_idx

    def __getitem__(self, key):
        return self._buffer[self._offset(key)]

    def __setitem__(self, key, value):
        self._buffer[self._offset(key)] = value

    def items(self):
        for offset, value in enumerate(self._buffer):
            yield offset // self._columns, offset % self._columns, value

    def apply(self, func, indexed: bool = False):
        """Replace every element by `func(value)` / `func(value, row, column)`."""
        for i, j, value in self.items():
            self._buffer[i * self._columns + j] = (
                func(value, i, j) if indexed else func(value)
            )
        return self

    def _grid(self) -> np.ndarray:
        # reshaped alias of the buffer, not a copy
        return self._buffer.reshape(self.rows, self._columns)

    def to_numpy(self) -> np.ndarray:
        return self._grid().copy()

    def copy(self) -> "Matrix":
        return Matrix._from_buffer(self._buffer.copy(), self._columns)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def view(self) -> MatrixView:
        return MatrixView(self)

    def const_view(self) -> ConstMatrixView:
        return ConstMatrixView(self)

    def get_row(self, index: int) -> MatrixView:
        if not 0 <= index < self.rows:
            raise BoundsError("Index must be less than the number of matrix rows.")
        return MatrixView(self, Segment(index, index + 1))

    def get_column(self, index: int) -> MatrixView:
        if not 0 <= index < self.columns:
            raise BoundsError("Index must be less than the number of matrix columns.")
        return MatrixView(self, None, Segment(index, index + 1))

    def get_submatrix(self, r_from: int, r_to: int, c_from: int, c_to: int) -> MatrixView:
        """Strictly checked view onto rows [r_from, r_to) and columns [c_from, c_to)."""
        if not (0 <= r_from < r_to <= self.rows):
            raise BoundsError(
                f"Invalid row range [{r_from}, {r_to}) for {self.rows} rows."
            )
        if not (0 <= c_from < c_to <= self.columns):
            raise BoundsError(
                f"Invalid column range [{c_from}, {c_to}) for {self.columns} columns."
            )
        return MatrixView(self, Segment(r_from, r_to), Segment(c_from, c_to))

    def assign_submatrix(self, sub, row: int, column: int):
        """Copy `sub` into this matrix with its top-left corner at (row, column)."""
        if row < 0 or row + sub.rows > self.rows:
            raise BoundsError("The row indices do not match the number of rows in the matrix.")
        if column < 0 or column + sub.columns > self.columns:
            raise BoundsError(
                "The column indices do not match the number of columns in the matrix."
            )
        values = sub.to_numpy()
        self._promote(values.dtype)
        self._grid()[row : row + sub.rows, column : column + sub.columns] = values
        return self

    # ------------------------------------------------------------------
    # In-place arithmetic
    # ------------------------------------------------------------------
    def _promote(self, dtype):
        if is_complex(dtype) and not is_complex(self.dtype):
            self._buffer = self._buffer.astype(np.complex128)

    def __iadd__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        values = self._operand_values(other)
        self._promote(values.dtype)
        self._buffer += values.reshape(-1)
        return self

    def __isub__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        values = self._operand_values(other)
        self._promote(values.dtype)
        self._buffer -= values.reshape(-1)
        return self

    def __imul__(self, scalar):
        if isinstance(scalar, MatrixBase):
            return NotImplemented
        self._promote(scalar_dtype(scalar))
        self._buffer *= scalar
        return self

    def __itruediv__(self, scalar):
        if isinstance(scalar, MatrixBase):
            return NotImplemented
        self._promote(scalar_dtype(scalar))
        self._buffer /= scalar
        return self

    def __imatmul__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        product = self @ other
        self._buffer, self._columns = product._buffer, product._columns
        return self

    # ------------------------------------------------------------------
    # Structural operations
    # ------------------------------------------------------------------
    def transpose(self):
        """
        Transpose in place by following the permutation cycles of the flat
        buffer.  The element at offset p moves to (rows * p) mod (size - 1);
        the first and last offsets are fixed points.
        """
        rows = self.rows
        size = self._buffer.size
        last = size - 1
        buffer = self._buffer
        visited = np.zeros(size, dtype=bool)

        for i in range(1, last):
            if visited[i]:
                continue

            swap_idx = i
            while True:
                swap_idx = (rows * swap_idx) % last
                buffer[swap_idx], buffer[i] = buffer[i], buffer[swap_idx]
                visited[swap_idx] = True
                if swap_idx == i:
                    break

        self._columns = rows
        return self

    def conjugate(self):
        """Conjugate transpose in place (plain transpose for real data)."""
        self.transpose()
        if is_complex(self.dtype):
            np.conjugate(self._buffer, out=self._buffer)
        return self

    def normalize(self):
        if self.rows != 1 and self.columns != 1:
            raise PreconditionError("Normalize only for vectors.")

        norm = self.euclidean_norm()
        if is_zero_floating(norm):
            logger.debug("normalize(): zero-norm vector left unchanged")
            return self
        self._buffer /= norm
        return self

    def round_zeroes(self):
        """Snap every element within tolerance of zero to an exact 0."""
        self._buffer[is_zero_floating(self._buffer)] = 0
        return self

    def transposed(self) -> "Matrix":
        return self.copy().transpose()

    def conjugated(self) -> "Matrix":
        return self.copy().conjugate()

    def normalized(self) -> "Matrix":
        return self.copy().normalize()
