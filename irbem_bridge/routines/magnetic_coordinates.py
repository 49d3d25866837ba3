# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Magnetic coordinates: L*, McIlwain L, MLT.

https://prbem.github.io/IRBEM/api/magnetic_coordinates.html
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray

from irbem_bridge.arguments import IrbemArgs, prepare_irbem
from irbem_bridge.coordinates.coord_systems import CoordinateSystem
from irbem_bridge.library import IrbemLibrary, default_library
from irbem_bridge.outputs import collapse_batch

logger = logging.getLogger(__name__)

# Maximum number of pitch angles of make_lstar_shell_splitting
NALPHA_MAX = 25


class MakeLstarOutput(NamedTuple):
    """Container for outputs of L* calculations.

    Fields are scalars for a single (time, position) entry and arrays of shape (ntime,) otherwise.

    Attributes:
        lm: The McIlwain L parameter.
        lstar: The L* value (or Phi, depending on the options).
        blocal: The local magnetic field magnitude in nT.
        bmin: The minimum magnetic field magnitude along the field line in nT.
        xj: The second adiabatic invariant I, in Re.
        mlt: Magnetic Local Time (MLT) in hours.
    """

    lm: Any
    lstar: Any
    blocal: Any
    bmin: Any
    xj: Any
    mlt: Any


class MakeLstarShellSplittingOutput(NamedTuple):
    """Container for L* and related parameters for multiple pitch angles.

    `lm`, `lstar`, `blocal` and `xj` have shape (n_alpha, ntime), `bmin` and `mlt` shape (ntime,).
    The time dimension is dropped for a single scalar entry.
    """

    lm: Any
    lstar: Any
    blocal: Any
    bmin: Any
    xj: Any
    mlt: Any


def make_lstar(*args: Any, lib: IrbemLibrary | None = None, **kwargs: Any) -> MakeLstarOutput:  # noqa: ANN401
    """Computes magnetic coordinates at a series of times and positions.

    Wraps `make_lstar1_`. Accepts both calling conventions of `prepare_irbem`:
    ``make_lstar(model, X, maginput)`` and ``make_lstar(time, x, "GDZ", maginput, kext="T89")``.

    Returns:
        MakeLstarOutput: Scalars for a single entry, arrays of shape (ntime,) for arrays of entries.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(*args, ntime_max=lib.ntime_max, **kwargs)

    c_lm, c_lstar, c_blocal, c_bmin, c_xj, c_mlt = [np.zeros(batch.ntime, dtype=np.float64) for _ in range(6)]

    lib.call("make_lstar1_", *irbem_args, c_lm, c_lstar, c_blocal, c_bmin, c_xj, c_mlt)

    return MakeLstarOutput(
        lm=collapse_batch(c_lm, batch),
        lstar=collapse_batch(c_lstar, batch),
        blocal=collapse_batch(c_blocal, batch),
        bmin=collapse_batch(c_bmin, batch),
        xj=collapse_batch(c_xj, batch),
        mlt=collapse_batch(c_mlt, batch),
    )


def make_lstar_shell_splitting(
    arg1: Any,  # noqa: ANN401
    arg2: Any,  # noqa: ANN401
    alpha: float | Sequence[float] | NDArray[np.floating],
    *args: Any,  # noqa: ANN401
    lib: IrbemLibrary | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> MakeLstarShellSplittingOutput:
    """Computes L* and related parameters for several local pitch angles.

    Args:
        arg1, arg2, *args, **kwargs: Time, position and model arguments as for `make_lstar`.
        alpha: A single local pitch angle or a sequence of up to 25 local pitch angles in degrees.
        lib (IrbemLibrary | None): The IRBEM library, the process-wide one if None.
    """
    if lib is None:
        lib = default_library()

    c_alpha = np.atleast_1d(np.asarray(alpha, dtype=np.float64)).ravel()
    n_alpha = len(c_alpha)
    if not 0 < n_alpha <= NALPHA_MAX:
        msg = f"make_lstar_shell_splitting supports 1 to {NALPHA_MAX} pitch angles, got {n_alpha}!"
        raise ValueError(msg)

    irbem_args, batch = prepare_irbem(arg1, arg2, *args, ntime_max=lib.ntime_max, **kwargs)

    # output buffers are declared with NTIME_MAX rows by IRBEM-LIB
    shape_2d = (lib.ntime_max, NALPHA_MAX)
    c_lm, c_lstar, c_blocal, c_xj = [np.zeros(shape_2d, dtype=np.float64, order="F") for _ in range(4)]
    c_bmin, c_mlt = [np.zeros(lib.ntime_max, dtype=np.float64) for _ in range(2)]

    lib.call(
        "make_lstar_shell_splitting1_",
        irbem_args.ntime,
        n_alpha,
        *tuple(irbem_args)[1:-1],
        c_alpha,
        irbem_args.maginput,
        c_lm,
        c_lstar,
        c_blocal,
        c_bmin,
        c_xj,
        c_mlt,
    )

    def per_alpha(buffer: NDArray[np.float64]) -> Any:  # noqa: ANN401
        return collapse_batch(np.ascontiguousarray(buffer[: batch.ntime, :n_alpha].T), batch)

    return MakeLstarShellSplittingOutput(
        lm=per_alpha(c_lm),
        lstar=per_alpha(c_lstar),
        blocal=per_alpha(c_blocal),
        bmin=collapse_batch(c_bmin[: batch.ntime].copy(), batch),
        xj=per_alpha(c_xj),
        mlt=collapse_batch(c_mlt[: batch.ntime].copy(), batch),
    )


def _positions_in_geo(irbem_args: IrbemArgs, lib: IrbemLibrary) -> NDArray[np.float64]:
    pos_in = np.asfortranarray(np.vstack((irbem_args.x1, irbem_args.x2, irbem_args.x3)))
    if irbem_args.sysaxes == CoordinateSystem.GEO.sysaxes():
        return pos_in

    pos_out = np.zeros_like(pos_in, order="F")
    lib.call(
        "coord_trans_vec1_",
        irbem_args.ntime,
        irbem_args.sysaxes,
        CoordinateSystem.GEO.sysaxes(),
        irbem_args.iyear,
        irbem_args.idoy,
        irbem_args.ut,
        pos_in,
        pos_out,
    )
    return pos_out


def get_mlt(*args: Any, lib: IrbemLibrary | None = None, **kwargs: Any) -> Any:  # noqa: ANN401
    """Calculates the Magnetic Local Time (MLT) in hours.

    Positions given in another system than GEO are converted to GEO first. IRBEM-LIB computes
    MLT for one entry at a time, so arrays of entries are processed in a loop.

    Returns:
        A float for a single entry, an array of shape (ntime,) for arrays of entries.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(*args, ntime_max=lib.ntime_max, **kwargs)
    x_geo = _positions_in_geo(irbem_args, lib)

    logger.debug("Running IRBEM-LIB get_mlt in a time loop")

    mlt = np.zeros(batch.ntime, dtype=np.float64)
    for it in range(batch.ntime):
        c_mlt = np.zeros(1, dtype=np.float64)
        lib.call(
            "get_mlt1_",
            int(irbem_args.iyear[it]),
            int(irbem_args.idoy[it]),
            float(irbem_args.ut[it]),
            np.ascontiguousarray(x_geo[:, it]),
            c_mlt,
        )
        mlt[it] = c_mlt[0]

    return collapse_batch(mlt, batch)
