# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Normalization of the supported position representations into three flat axis arrays."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

import numpy as np
from numpy.typing import NDArray

from irbem_bridge.coordinates.coordinate_vector import CoordinateVector
from irbem_bridge.errors import ShapeMismatch

logger = logging.getLogger(__name__)

AxisKey = Literal["x1", "x2", "x3"]
PositionInput: TypeAlias = (
    CoordinateVector
    | Sequence[CoordinateVector]
    | Mapping[AxisKey, Any]
    | Sequence[float]
    | Sequence[Sequence[float]]
    | NDArray[np.floating]
)


@dataclass(frozen=True)
class NormalizedPosition:
    """Positions as three equal-length float64 arrays, one per axis.

    Attributes:
        x1 (NDArray[np.float64]): First component of every entry.
        x2 (NDArray[np.float64]): Second component of every entry.
        x3 (NDArray[np.float64]): Third component of every entry.
        sysaxes (int | None): Coordinate system code if the input was typed, None otherwise.
        is_scalar (bool): True if the input described a single point and not an array of points.
    """

    x1: NDArray[np.float64]
    x2: NDArray[np.float64]
    x3: NDArray[np.float64]
    sysaxes: int | None = None
    is_scalar: bool = False

    @property
    def npos(self) -> int:
        return len(self.x1)

    def stacked(self) -> NDArray[np.float64]:
        """Returns the positions as a Fortran-ordered (3, N) array."""
        return np.asfortranarray(np.vstack((self.x1, self.x2, self.x3)))

    def repeat(self, npos: int) -> NormalizedPosition:
        """Broadcasts a single point to `npos` entries."""
        if self.npos == npos:
            return self
        return NormalizedPosition(
            x1=np.repeat(self.x1, npos),
            x2=np.repeat(self.x2, npos),
            x3=np.repeat(self.x3, npos),
            sysaxes=self.sysaxes,
            is_scalar=self.is_scalar,
        )


def _as_axis(values: Any) -> NDArray[np.float64]:  # noqa: ANN401
    # no copy for float64 contiguous input, e.g. the rows of a C-ordered (3, N) matrix
    return np.ascontiguousarray(np.atleast_1d(np.asarray(values, dtype=np.float64)))


def _from_vectors(vectors: Sequence[CoordinateVector]) -> NormalizedPosition:
    systems = {vector.system for vector in vectors}
    if len(systems) != 1:
        msg = f"All coordinate vectors of a batch must share one coordinate system, got {sorted(s.value for s in systems)}!"
        raise ShapeMismatch(msg)

    data = np.array([vector.to_array() for vector in vectors], dtype=np.float64)
    return NormalizedPosition(
        x1=data[:, 0].copy(),
        x2=data[:, 1].copy(),
        x3=data[:, 2].copy(),
        sysaxes=systems.pop().sysaxes(),
        is_scalar=False,
    )


def _from_mapping(position: Mapping[AxisKey, Any]) -> NormalizedPosition:
    missing = [key for key in ("x1", "x2", "x3") if key not in position]
    if missing:
        msg = f"Position dictionary is missing the keys {missing}!"
        raise ShapeMismatch(msg)

    is_scalar = all(np.ndim(position[key]) == 0 for key in ("x1", "x2", "x3"))
    x1, x2, x3 = (_as_axis(position[key]) for key in ("x1", "x2", "x3"))

    lengths = {len(x1), len(x2), len(x3)}
    if len(lengths) != 1:
        if 1 not in lengths or len(lengths) > 2:  # noqa: PLR2004
            msg = f"Position components have different lengths: x1: {len(x1)}, x2: {len(x2)}, x3: {len(x3)}!"
            raise ShapeMismatch(msg)
        npos = max(lengths)
        x1, x2, x3 = (np.repeat(x, npos) if len(x) == 1 else x for x in (x1, x2, x3))

    return NormalizedPosition(x1=x1, x2=x2, x3=x3, is_scalar=is_scalar)


def _from_array(position: NDArray[Any]) -> NormalizedPosition:
    if position.ndim == 1:
        if position.shape[0] != 3:  # noqa: PLR2004
            msg = f"A single position must have 3 components, got shape {position.shape}!"
            raise ShapeMismatch(msg)
        x1, x2, x3 = (_as_axis(position[i]) for i in range(3))
        return NormalizedPosition(x1=x1, x2=x2, x3=x3, is_scalar=True)

    if position.ndim == 2:  # noqa: PLR2004
        if position.shape[0] != 3:  # noqa: PLR2004
            msg = f"Position array must be of shape (3, n), got shape {position.shape}!"
            raise ShapeMismatch(msg)
        x1, x2, x3 = (_as_axis(position[i, :]) for i in range(3))
        return NormalizedPosition(x1=x1, x2=x2, x3=x3, is_scalar=False)

    msg = f"Position array must be of shape (3,) or (3, n), got shape {position.shape}!"
    raise ShapeMismatch(msg)


def normalize_position(position: PositionInput) -> NormalizedPosition:
    """Converts any supported position representation into three flat axis arrays.

    Supported inputs are a single 3-element sequence or array, a (3, N) array with one row per
    axis, a sequence of N 3-element sequences, a typed `CoordinateVector`, a sequence of typed
    vectors sharing one coordinate system, and a dictionary with the keys 'x1', 'x2' and 'x3'.

    Args:
        position (PositionInput): The position(s) to normalize.

    Returns:
        NormalizedPosition: The three axis arrays plus the coordinate system of typed input.

    Raises:
        ShapeMismatch: If the input does not have exactly 3 components per point.
    """
    logger.debug("Normalizing position input")

    if isinstance(position, CoordinateVector):
        x1, x2, x3 = (np.array([value], dtype=np.float64) for value in position)
        return NormalizedPosition(x1=x1, x2=x2, x3=x3, sysaxes=position.system.sysaxes(), is_scalar=True)

    if isinstance(position, Mapping):
        return _from_mapping(position)

    if isinstance(position, np.ndarray):
        return _from_array(position)

    if isinstance(position, Sequence) and not isinstance(position, (str, bytes)):
        if len(position) > 0 and all(isinstance(p, CoordinateVector) for p in position):
            return _from_vectors(position)  # type: ignore[reportArgumentType]

        if len(position) > 0 and all(np.ndim(p) == 1 for p in position):
            if any(len(p) != 3 for p in position):  # type: ignore[reportArgumentType] # noqa: PLR2004
                msg = "Every position of an array of positions must have 3 components!"
                raise ShapeMismatch(msg)
            # array of N 3-vectors, transposed into the (3, N) layout
            return _from_array(np.asarray(position, dtype=np.float64).T)

        return _from_array(np.asarray(position, dtype=np.float64))

    msg = f"Unsupported position type {type(position).__name__}!"
    raise ShapeMismatch(msg)
