# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Post-processing of the fixed-size output buffers of IRBEM-LIB.

Output layout follows the Fortran declarations: vector outputs are axis-first, e.g. (3, ntime),
and trace buffers are (3, max_points, n_columns) with one column per traced field line.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from irbem_bridge.arguments import BatchShape

# IRBEM-LIB's marker for values it could not compute
FORTRAN_BAD_VALUE = np.float64(-1.0e31)

# Marker for unused capacity of ragged trace buffers
TRACE_FILL_VALUE = np.nan


def collapse_batch(value: NDArray[Any], batch: BatchShape) -> Any:  # noqa: ANN401
    """Collapses the batch dimension of an output for calls with a single scalar entry.

    The batch dimension is the last axis. Outputs of shape (1,) become a scalar and outputs of
    shape (k, 1) become a vector of shape (k,). Outputs of calls that passed explicit arrays keep
    their shape, even if they hold a single entry.
    """
    if not batch.is_scalar:
        return value

    if value.ndim == 1:
        return value[0].item()
    return value[..., 0]


def mask_ragged(
    buffer: NDArray[np.float64],
    counts: NDArray[np.integer],
    fill_value: float = TRACE_FILL_VALUE,
) -> NDArray[np.float64]:
    """Marks the unused capacity of a multi-column trace buffer.

    Args:
        buffer (NDArray[np.float64]): Buffer of shape (..., max_points, n_columns), e.g. posit of
            shape (3, 1000, 48) or blocal of shape (1000, 48).
        counts (NDArray[np.integer]): The number of valid points of every column.
        fill_value (float): Value written to every point beyond the count of its column.

    Returns:
        NDArray[np.float64]: A copy of the buffer in which the points at index >= count of each
        column are set to `fill_value`. Valid points are left untouched.
    """
    if buffer.shape[-1] != len(counts):
        msg = f"Got {len(counts)} point counts for a buffer with {buffer.shape[-1]} columns!"
        raise ValueError(msg)

    masked = np.array(buffer, dtype=np.float64, copy=True)
    max_points = masked.shape[-2]
    for column, count in enumerate(counts):
        masked[..., max(int(count), 0) : max_points, column] = fill_value

    return masked


def truncate_trace(buffer: NDArray[np.float64], count: int) -> NDArray[np.float64]:
    """Keeps the valid points of a single-column trace buffer of shape (..., max_points)."""
    return np.array(buffer[..., : max(int(count), 0)], dtype=np.float64, copy=True)
