# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised on contract violations.

They derive from the builtin ValueError / IndexError so callers that
already catch those keep working.
"""


class LinalgError(Exception):
    """Base class for every error raised by matview."""


class ShapeError(LinalgError, ValueError):
    """Operands have incompatible dimensions."""


class PreconditionError(LinalgError, ValueError):
    """Input does not satisfy the structural requirement of an algorithm."""


class BoundsError(LinalgError, IndexError):
    """Index or index range outside the matrix."""
