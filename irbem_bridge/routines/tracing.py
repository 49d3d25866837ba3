# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Field line, drift shell and drift-bounce orbit tracing.

The trace buffers of IRBEM-LIB have a fixed capacity. Points beyond the count reported for a
traced field line are unused; they are cut off for single field lines and set to NaN for the
multi-column buffers of drift shells and drift-bounce orbits.

https://prbem.github.io/IRBEM/api/magnetic_coordinates.html#field-tracing
"""

from __future__ import annotations

from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray

from irbem_bridge.arguments import prepare_irbem, require_single_point
from irbem_bridge.library import IrbemLibrary, default_library
from irbem_bridge.outputs import mask_ragged, truncate_trace
from irbem_bridge.utils import timed_function

# Capacities of the IRBEM-LIB trace buffers
TRACE_MAX_POINTS = 3000
DRIFT_MAX_POINTS = 1000
DRIFT_SHELL_N_AZIMUTH = 48
DRIFT_BOUNCE_N_AZIMUTH = 25


class TraceFieldLineOutput(NamedTuple):
    """Container for outputs from tracing a magnetic field line.

    Attributes:
        lm (float): The McIlwain L parameter.
        blocal (NDArray[np.float64]): The magnetic field magnitude along the field line in nT, shape (nposit,).
        bmin (float): The magnetic field magnitude at the magnetic equator in nT.
        xj (float): The second adiabatic invariant I, in Re.
        posit (NDArray[np.float64]): GEO coordinates along the field line in Re, shape (3, nposit).
        nposit (int): The number of points along the field line.
    """

    lm: float
    blocal: NDArray[np.float64]
    bmin: float
    xj: float
    posit: NDArray[np.float64]
    nposit: int


class DriftShellOutput(NamedTuple):
    """Container for outputs related to a particle drift shell.

    Attributes:
        lm (float): The McIlwain L parameter.
        lstar (float): The L* value (or Phi, depending on the options).
        blocal (NDArray[np.float64]): The magnetic field magnitude along the traced field lines in nT,
            shape (1000, 48), NaN beyond `nposit` of each field line.
        bmin (float): The magnetic field magnitude at the magnetic equator in nT.
        xj (float): The second adiabatic invariant I, in Re.
        posit (NDArray[np.float64]): GEO coordinates along the drift shell in Re, shape (3, 1000, 48),
            NaN beyond `nposit` of each field line.
        nposit (NDArray[np.int32]): The number of points of each of the 48 traced field lines.
    """

    lm: float
    lstar: float
    blocal: NDArray[np.float64]
    bmin: float
    xj: float
    posit: NDArray[np.float64]
    nposit: NDArray[np.int32]


class DriftBounceOrbitOutput(NamedTuple):
    """Container for outputs of a drift-bounce orbit trace.

    Attributes:
        lm (float): The McIlwain L parameter.
        lstar (float): The L* value (or Phi, depending on the options).
        blocal (NDArray[np.float64]): The magnetic field magnitude along the orbit in nT,
            shape (1000, 25), NaN beyond `nposit` of each field line.
        bmin (float): The magnetic field magnitude at the magnetic equator in nT.
        bmirr (float): The magnetic field magnitude at the mirror point in nT.
        xj (float): The second adiabatic invariant I, in Re.
        posit (NDArray[np.float64]): GEO coordinates between the mirror points in Re, shape (3, 1000, 25),
            NaN beyond `nposit` of each field line.
        nposit (NDArray[np.int32]): The number of points of each of the 25 traced field lines.
        hmin (float): The lowest altitude along the orbit in km.
        hmin_lon (float): The GEO longitude of `hmin` in degrees.
    """

    lm: float
    lstar: float
    blocal: NDArray[np.float64]
    bmin: float
    bmirr: float
    xj: float
    posit: NDArray[np.float64]
    nposit: NDArray[np.int32]
    hmin: float
    hmin_lon: float


def _scalars(n: int) -> list[NDArray[np.float64]]:
    return [np.zeros(1, dtype=np.float64) for _ in range(n)]


@timed_function("trace_field_line")
def trace_field_line(
    *args: Any,  # noqa: ANN401
    r0: float = 1.0,
    lib: IrbemLibrary | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> TraceFieldLineOutput:
    """Traces the full field line crossing the input position.

    Args:
        *args, **kwargs: Time, position and model arguments as for `prepare_irbem`.
        r0 (float): Radial distance in Re at which the tracing stops. Defaults to 1.

    Raises:
        UnsupportedBatch: If more than one entry is passed.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(*args, ntime_max=lib.ntime_max, **kwargs)
    require_single_point(batch, "trace_field_line")

    c_lm, c_bmin, c_xj = _scalars(3)
    c_blocal = np.zeros(TRACE_MAX_POINTS, dtype=np.float64)
    c_posit = np.zeros((3, TRACE_MAX_POINTS), dtype=np.float64, order="F")
    c_nposit = np.zeros(1, dtype=np.int32)

    lib.call(
        "trace_field_line2_1_",
        *irbem_args.single_point(),
        float(r0),
        c_lm,
        c_blocal,
        c_bmin,
        c_xj,
        c_posit,
        c_nposit,
    )

    nposit = int(c_nposit[0])

    return TraceFieldLineOutput(
        lm=float(c_lm[0]),
        blocal=truncate_trace(c_blocal, nposit),
        bmin=float(c_bmin[0]),
        xj=float(c_xj[0]),
        posit=truncate_trace(c_posit, nposit),
        nposit=nposit,
    )


@timed_function("drift_shell")
def drift_shell(*args: Any, lib: IrbemLibrary | None = None, **kwargs: Any) -> DriftShellOutput:  # noqa: ANN401
    """Traces the full drift shell of particles mirroring at the input position.

    Raises:
        UnsupportedBatch: If more than one entry is passed.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(*args, ntime_max=lib.ntime_max, **kwargs)
    require_single_point(batch, "drift_shell")

    c_lm, c_lstar, c_bmin, c_xj = _scalars(4)
    c_blocal = np.zeros((DRIFT_MAX_POINTS, DRIFT_SHELL_N_AZIMUTH), dtype=np.float64, order="F")
    c_posit = np.zeros((3, DRIFT_MAX_POINTS, DRIFT_SHELL_N_AZIMUTH), dtype=np.float64, order="F")
    c_nposit = np.zeros(DRIFT_SHELL_N_AZIMUTH, dtype=np.int32)

    lib.call(
        "drift_shell1_",
        *irbem_args.single_point(),
        c_lm,
        c_lstar,
        c_blocal,
        c_bmin,
        c_xj,
        c_posit,
        c_nposit,
    )

    return DriftShellOutput(
        lm=float(c_lm[0]),
        lstar=float(c_lstar[0]),
        blocal=mask_ragged(c_blocal, c_nposit),
        bmin=float(c_bmin[0]),
        xj=float(c_xj[0]),
        posit=mask_ragged(c_posit, c_nposit),
        nposit=c_nposit,
    )


@timed_function("drift_bounce_orbit")
def drift_bounce_orbit(
    *args: Any,  # noqa: ANN401
    alpha: float = 90.0,
    r0: float = 1.0,
    lib: IrbemLibrary | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> DriftBounceOrbitOutput:
    """Traces the full drift-bounce orbit of particles with a given local pitch angle at the input position.

    Only the positions between the mirror points are returned, for 25 azimuths.

    Args:
        *args, **kwargs: Time, position and model arguments as for `prepare_irbem`.
        alpha (float): Local pitch angle in degrees. Defaults to 90.
        r0 (float): Minimum radial distance in Re allowed along the drift path. Defaults to 1.

    Raises:
        UnsupportedBatch: If more than one entry is passed.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(*args, ntime_max=lib.ntime_max, **kwargs)
    require_single_point(batch, "drift_bounce_orbit")

    c_lm, c_lstar, c_bmin, c_bmirr, c_xj, c_hmin, c_hmin_lon = _scalars(7)
    c_blocal = np.zeros((DRIFT_MAX_POINTS, DRIFT_BOUNCE_N_AZIMUTH), dtype=np.float64, order="F")
    c_posit = np.zeros((3, DRIFT_MAX_POINTS, DRIFT_BOUNCE_N_AZIMUTH), dtype=np.float64, order="F")
    c_nposit = np.zeros(DRIFT_BOUNCE_N_AZIMUTH, dtype=np.int32)

    lib.call(
        "drift_bounce_orbit2_1_",
        *irbem_args.single_point(float(alpha)),
        float(r0),
        c_lm,
        c_lstar,
        c_blocal,
        c_bmin,
        c_bmirr,
        c_xj,
        c_posit,
        c_nposit,
        c_hmin,
        c_hmin_lon,
    )

    return DriftBounceOrbitOutput(
        lm=float(c_lm[0]),
        lstar=float(c_lstar[0]),
        blocal=mask_ragged(c_blocal, c_nposit),
        bmin=float(c_bmin[0]),
        bmirr=float(c_bmirr[0]),
        xj=float(c_xj[0]),
        posit=mask_ragged(c_posit, c_nposit),
        nposit=c_nposit,
        hmin=float(c_hmin[0]),
        hmin_lon=float(c_hmin_lon[0]),
    )
