# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Points of interest on the field line.

https://prbem.github.io/IRBEM/api/magnetic_coordinates.html#points-of-interest-on-the-field-line
"""

from __future__ import annotations

from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray

from irbem_bridge.arguments import prepare_irbem, require_single_point
from irbem_bridge.library import IrbemLibrary, default_library


class FindMirrorPointOutput(NamedTuple):
    """Container for outputs of a magnetic mirror point calculation.

    Attributes:
        blocal (float): The magnetic field magnitude at the input position in nT.
        bmirr (float): The magnetic field magnitude at the mirror point in nT.
        posit (NDArray[np.float64]): GEO coordinates of the mirror point in Re.
    """

    blocal: float
    bmirr: float
    posit: NDArray[np.float64]


class FindFootPointOutput(NamedTuple):
    """Container for outputs of a magnetic field line foot point.

    Attributes:
        xfoot (NDArray[np.float64]): The foot point location in GDZ coordinates.
        bfoot (NDArray[np.float64]): The magnetic field vector at the foot point in GEO coordinates in nT.
        bfootmag (float): The magnetic field magnitude at the foot point in nT.
    """

    xfoot: NDArray[np.float64]
    bfoot: NDArray[np.float64]
    bfootmag: float


class FindMagEquatorOutput(NamedTuple):
    """Container for the magnetic equator's location and field strength.

    Attributes:
        bmin (float): The magnetic field magnitude at the equator in nT.
        xgeo (NDArray[np.float64]): The position of the magnetic equator in GEO coordinates in Re.
    """

    bmin: float
    xgeo: NDArray[np.float64]


def find_mirror_point(
    arg1: Any,  # noqa: ANN401
    arg2: Any,  # noqa: ANN401
    alpha: float,
    *args: Any,  # noqa: ANN401
    lib: IrbemLibrary | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> FindMirrorPointOutput:
    """Finds the magnetic mirror point for a given location and local pitch angle.

    ``find_mirror_point(model, X, alpha, maginput)`` or
    ``find_mirror_point(time, x, alpha, "GDZ", maginput, kext="T89")``.

    Args:
        alpha (float): The local pitch angle in degrees.

    Raises:
        UnsupportedBatch: If more than one entry is passed.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(arg1, arg2, *args, ntime_max=lib.ntime_max, **kwargs)
    require_single_point(batch, "find_mirror_point")

    c_blocal = np.zeros(1, dtype=np.float64)
    c_bmirr = np.zeros(1, dtype=np.float64)
    c_posit = np.zeros(3, dtype=np.float64)

    lib.call("find_mirror_point1_", *irbem_args.single_point(float(alpha)), c_blocal, c_bmirr, c_posit)

    return FindMirrorPointOutput(blocal=float(c_blocal[0]), bmirr=float(c_bmirr[0]), posit=c_posit)


def find_foot_point(
    arg1: Any,  # noqa: ANN401
    arg2: Any,  # noqa: ANN401
    stop_alt: float,
    hemi_flag: int,
    *args: Any,  # noqa: ANN401
    lib: IrbemLibrary | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> FindFootPointOutput:
    """Finds the footprint of the field line through the input location in a given hemisphere.

    Args:
        stop_alt (float): The altitude in km where the field line tracing stops.
        hemi_flag (int): 0 for the hemisphere of the SM z sign of the input, +1 for northern,
            -1 for southern.

    Raises:
        UnsupportedBatch: If more than one entry is passed.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(arg1, arg2, *args, ntime_max=lib.ntime_max, **kwargs)
    require_single_point(batch, "find_foot_point")

    c_xfoot = np.zeros(3, dtype=np.float64)
    c_bfoot = np.zeros(3, dtype=np.float64)
    c_bfootmag = np.zeros(1, dtype=np.float64)

    lib.call(
        "find_foot_point1_",
        *irbem_args.single_point(float(stop_alt), int(hemi_flag)),
        c_xfoot,
        c_bfoot,
        c_bfootmag,
    )

    return FindFootPointOutput(xfoot=c_xfoot, bfoot=c_bfoot, bfootmag=float(c_bfootmag[0]))


def find_magequator(*args: Any, lib: IrbemLibrary | None = None, **kwargs: Any) -> FindMagEquatorOutput:  # noqa: ANN401
    """Finds the magnetic equator by tracing the field line through the input location.

    Raises:
        UnsupportedBatch: If more than one entry is passed.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(*args, ntime_max=lib.ntime_max, **kwargs)
    require_single_point(batch, "find_magequator")

    c_bmin = np.zeros(1, dtype=np.float64)
    c_xgeo = np.zeros(3, dtype=np.float64)

    lib.call("find_magequator1_", *irbem_args.single_point(), c_bmin, c_xgeo)

    return FindMagEquatorOutput(bmin=float(c_bmin[0]), xgeo=c_xgeo)
