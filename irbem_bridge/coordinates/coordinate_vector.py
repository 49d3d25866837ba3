# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import overload

import numpy as np
from astropy import units as u
from numpy.typing import NDArray

from irbem_bridge.coordinates.coord_systems import CoordinateSystem


@dataclass(frozen=True)
class CoordinateVector:
    """Three position components tagged with the coordinate system they are expressed in.

    The component order follows the convention of the system, e.g. altitude, latitude and
    east longitude for GDZ or x, y, z for the Cartesian systems. Instances are immutable;
    transformations return new vectors.

    Attributes:
        x1 (float): First component.
        x2 (float): Second component.
        x3 (float): Third component.
        system (CoordinateSystem): The coordinate system of the components.
    """

    x1: float
    x2: float
    x3: float
    system: CoordinateSystem

    def __post_init__(self) -> None:
        object.__setattr__(self, "x1", float(self.x1))
        object.__setattr__(self, "x2", float(self.x2))
        object.__setattr__(self, "x3", float(self.x3))
        object.__setattr__(self, "system", CoordinateSystem(self.system))

    def __iter__(self) -> Iterator[float]:
        return iter((self.x1, self.x2, self.x3))

    def __len__(self) -> int:
        return 3

    @overload
    def __getitem__(self, index: int) -> float: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[float, ...]: ...

    def __getitem__(self, index: int | slice) -> float | tuple[float, ...]:
        return (self.x1, self.x2, self.x3)[index]

    def __repr__(self) -> str:
        return f"{self.system.value}({self.x1!r}, {self.x2!r}, {self.x3!r})"

    def to_array(self) -> NDArray[np.float64]:
        """Returns the components as a float64 array of shape (3,)."""
        return np.array([self.x1, self.x2, self.x3], dtype=np.float64)

    def to_quantity(self) -> list[u.Quantity]:
        """Returns the components as astropy quantities in the units of the coordinate system."""
        return [u.Quantity(value, unit) for value, unit in zip(self, self.system.component_units, strict=True)]
