# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Zero-copy windows onto a `Matrix`.

A view is a reference to the owning matrix, a row `Segment`, a column
`Segment` and a `ViewState`.  Segments live in the view's own (logical)
coordinates, i.e. *after* the transpose has been applied; element
`(i, j)` is first offset by the segment starts and only then swapped
back into storage order.  Composing sub-views is therefore plain offset
arithmetic inside the current view, whatever its transpose state.

Nothing here copies the buffer: writes through a `MatrixView` land in
the owning matrix and are visible through every other view of it.
"""

import operator
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .base import MatrixBase
from .errors import BoundsError
from .utils import is_complex


@dataclass(frozen=True)
class Segment:
    """
    Half-open index range `[begin, end)` along one axis.

    The default `Segment()` means "the whole axis".
    """

    begin: int = -1
    end: int = -1

    @classmethod
    def of(cls, value) -> "Segment":
        if value is None:
            return cls()
        if isinstance(value, Segment):
            return value
        begin, end = value
        return cls(operator.index(begin), operator.index(end))

    def normalized(self, extent: int) -> "Segment":
        """
        Clamp against an axis of length `extent`.

        An end that is <= 0 or past the extent becomes the extent; a begin
        that is negative, past the extent or not before the end becomes 0.
        """
        begin, end = self.begin, self.end
        if end <= 0 or end > extent:
            end = extent
        if begin < 0 or begin >= extent or begin >= end:
            begin = 0
        return Segment(begin, end)

    def __len__(self):
        return max(0, self.end - self.begin)


class ViewState(NamedTuple):
    is_transposed: bool = False
    is_conjugated: bool = False


class ConstMatrixView(MatrixBase):
    """Read-only view."""

    _brackets = "()"

    def __init__(self, matrix, row=None, col=None, state=ViewState()):
        self._matrix = matrix
        self._state = ViewState(*state)

        rows, columns = matrix.rows, matrix.columns
        if self._state.is_transposed:
            rows, columns = columns, rows
        self._row = Segment.of(row).normalized(rows)
        self._col = Segment.of(col).normalized(columns)

    @property
    def matrix(self):
        return self._matrix

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def row_segment(self) -> Segment:
        return self._row

    @property
    def column_segment(self) -> Segment:
        return self._col

    @property
    def rows(self) -> int:
        return len(self._row)

    @property
    def columns(self) -> int:
        return len(self._col)

    @property
    def dtype(self):
        return self._matrix.dtype

    def _conjugates(self) -> bool:
        return self._state.is_conjugated and is_complex(self.dtype)

    def _locate(self, key):
        row_idx, col_idx = (operator.index(idx) for idx in key)
        if not (0 <= row_idx < self.rows and 0 <= col_idx < self.columns):
            raise BoundsError(
                f"Index ({row_idx}, {col_idx}) outside a {self.rows}x{self.columns} view."
            )

        row = self._row.begin + row_idx
        col = self._col.begin + col_idx
        return (col, row) if self._state.is_transposed else (row, col)

    def __getitem__(self, key):
        value = self._matrix[self._locate(key)]
        return np.conj(value) if self._conjugates() else value

    def _derive(self, row: Segment, col: Segment, state: ViewState = None):
        return type(self)(
            self._matrix, row, col, self._state if state is None else state
        )

    def get_row(self, index: int):
        if not 0 <= index < self.rows:
            raise BoundsError("Index must be less than the number of view rows.")
        begin = self._row.begin + index
        return self._derive(Segment(begin, begin + 1), self._col)

    def get_column(self, index: int):
        if not 0 <= index < self.columns:
            raise BoundsError("Index must be less than the number of view columns.")
        begin = self._col.begin + index
        return self._derive(self._row, Segment(begin, begin + 1))

    def get_submatrix(self, row=None, col=None):
        """
        Sub-view relative to this view.  `row` / `col` are `Segment`s or
        `(begin, end)` pairs and are normalized against this view's extents.
        """
        if self.is_empty():
            raise BoundsError("An empty view has no submatrix.")

        row = Segment.of(row).normalized(self.rows)
        col = Segment.of(col).normalized(self.columns)
        return self._derive(
            Segment(self._row.begin + row.begin, self._row.begin + row.end),
            Segment(self._col.begin + col.begin, self._col.begin + col.end),
        )

    def transposed(self):
        state = ViewState(not self._state.is_transposed, self._state.is_conjugated)
        return self._derive(self._col, self._row, state)

    def conjugated(self):
        state = ViewState(self._state.is_transposed, not self._state.is_conjugated)
        return self._derive(self._row, self._col, state)

    def adjoint(self):
        return self.transposed().conjugated()

    def to_numpy(self) -> np.ndarray:
        grid = self._matrix._grid()
        if self._state.is_transposed:
            grid = grid.T
        block = grid[self._row.begin : self._row.end, self._col.begin : self._col.end]
        if self._conjugates():
            block = block.conj()
        return np.array(block)


class MatrixView(ConstMatrixView):
    """Read-write view; every write goes straight to the owning matrix."""

    def __setitem__(self, key, value):
        if self._conjugates():
            value = np.conj(value)
        self._matrix[self._locate(key)] = value

    def const_view(self) -> ConstMatrixView:
        return ConstMatrixView(self._matrix, self._row, self._col, self._state)

    def apply(self, func, indexed: bool = False):
        """Replace every element by `func(value)` / `func(value, row, column)`."""
        for i, j, value in self.items():
            self[i, j] = func(value, i, j) if indexed else func(value)
        return self

    def __iadd__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        values = self._operand_values(other)
        return self.apply(lambda value, i, j: value + values[i, j], indexed=True)

    def __isub__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        values = self._operand_values(other)
        return self.apply(lambda value, i, j: value - values[i, j], indexed=True)

    def __imul__(self, scalar):
        if isinstance(scalar, MatrixBase):
            return NotImplemented
        return self.apply(lambda value: value * scalar)

    def __itruediv__(self, scalar):
        if isinstance(scalar, MatrixBase):
            return NotImplemented
        return self.apply(lambda value: value / scalar)
