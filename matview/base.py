# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Behaviour shared by the owning `Matrix` and the views over it.

Subclasses provide `rows`, `columns`, `dtype`, `__getitem__` and
`to_numpy`; everything else (equality, arithmetic, product, norm,
rendering) is written against that small surface.  Binary operators
never mutate an operand: they copy the left side into a new `Matrix`
and compound-assign into the copy.
"""

import numpy as np

from .errors import PreconditionError, ShapeError
from .utils import is_equal_floating


def _matrix_type():
    # matrix.py imports the view classes, which derive from this module
    from .matrix import Matrix

    return Matrix


class MatrixBase:
    _brackets = "[]"

    @property
    def shape(self):
        return self.rows, self.columns

    def is_empty(self) -> bool:
        return self.rows == 0 or self.columns == 0

    def items(self):
        """Yield `(row, column, value)` for every element, row by row."""
        for i in range(self.rows):
            for j in range(self.columns):
                yield i, j, self[i, j]

    def for_each(self, func, indexed: bool = False):
        """
        Call `func(value)` (or `func(value, row, column)` when `indexed`)
        for every element.  The callback must not reshape the traversed object.
        """
        for i, j, value in self.items():
            if indexed:
                func(value, i, j)
            else:
                func(value)
        return self

    def copy(self):
        """Materialize into a new, independent `Matrix`."""
        return _matrix_type()(self)

    def _operand_values(self, other) -> np.ndarray:
        if self.shape != other.shape:
            raise ShapeError(
                f"Matrices must be of the same size, got {self.shape} and {other.shape}."
            )
        return other.to_numpy()

    def __eq__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return all(
            is_equal_floating(value, other[i, j]) for i, j, value in self.items()
        )

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __add__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        result = self.copy()
        result += other
        return result

    def __sub__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        result = self.copy()
        result -= other
        return result

    def __mul__(self, scalar):
        if isinstance(scalar, MatrixBase):
            return NotImplemented
        result = self.copy()
        result *= scalar
        return result

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if isinstance(scalar, MatrixBase):
            return NotImplemented
        result = self.copy()
        result /= scalar
        return result

    def __neg__(self):
        return self * -1.0

    def __matmul__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        if self.columns != other.rows:
            raise ShapeError(
                f"Matrix multiplication mismatch: {self.shape} @ {other.shape}."
            )

        Matrix = _matrix_type()
        if self.is_empty() or other.is_empty():
            return Matrix()

        result = Matrix(self.to_numpy() @ other.to_numpy())
        result.round_zeroes()
        return result

    def euclidean_norm(self) -> float:
        if self.rows != 1 and self.columns != 1:
            raise PreconditionError("Euclidean norm only for vectors.")
        sq_sum = 0.0
        for _, _, value in self.items():
            sq_sum += abs(value) ** 2
        return float(np.sqrt(sq_sum))

    def get_diag(self, to_row: bool = False):
        """Diagonal as a column (or a row with `to_row=True`) matrix."""
        Matrix = _matrix_type()
        diag = [self[i, i] for i in range(min(self.rows, self.columns))]
        if not diag:
            return Matrix()
        return Matrix([diag]) if to_row else Matrix([[value] for value in diag])

    def __array__(self, dtype=None, copy=None):
        values = self.to_numpy()
        return values if dtype is None else values.astype(dtype)

    def __str__(self):
        open_, close = self._brackets
        lines = [
            open_ + " ".join(str(self[i, j]) for j in range(self.columns)) + close
            for i in range(self.rows)
        ]
        return open_ + "\n".join(lines) + close

    def __repr__(self):
        return f"{type(self).__name__}({self.to_numpy().tolist()!r})"
