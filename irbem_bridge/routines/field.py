# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Magnetic field computation.

https://prbem.github.io/IRBEM/api/magnetic_fields.html
"""

from __future__ import annotations

from typing import Any, NamedTuple

import numpy as np

from irbem_bridge.arguments import prepare_irbem
from irbem_bridge.library import IrbemLibrary, default_library
from irbem_bridge.outputs import collapse_batch


class GetFieldMultiOutput(NamedTuple):
    """Container for vectorized magnetic field data.

    Attributes:
        bgeo: The magnetic field vector in GEO coordinates in nT, shape (3, ntime) or (3,).
        bmag: The magnetic field magnitude in nT, shape (ntime,) or a float.
    """

    bgeo: Any
    bmag: Any


class GetBDerivsOutput(NamedTuple):
    """Container for the magnetic field and its first order derivatives.

    Attributes:
        bgeo: The magnetic field vector in GEO coordinates in nT, shape (3, ntime).
        bmag: The magnetic field magnitude in nT, shape (ntime,).
        grad_bmag: The gradient of the field magnitude in GEO, nT/Re, shape (3, ntime).
        diff_b: The derivatives dB_i/dx_j in GEO, nT/Re, shape (3, 3, ntime).
    """

    bgeo: Any
    bmag: Any
    grad_bmag: Any
    diff_b: Any


def get_field_multi(*args: Any, lib: IrbemLibrary | None = None, **kwargs: Any) -> GetFieldMultiOutput:  # noqa: ANN401
    """Computes the GEO magnetic field vector and magnitude at the input locations.

    Wraps `get_field_multi_`; accepts the calling conventions of `prepare_irbem`.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(*args, ntime_max=lib.ntime_max, **kwargs)

    c_bgeo = np.zeros((3, batch.ntime), dtype=np.float64, order="F")
    c_bmag = np.zeros(batch.ntime, dtype=np.float64)

    lib.call("get_field_multi_", *irbem_args, c_bgeo, c_bmag)

    return GetFieldMultiOutput(bgeo=collapse_batch(c_bgeo, batch), bmag=collapse_batch(c_bmag, batch))


def get_bderivs(
    arg1: Any,  # noqa: ANN401
    arg2: Any,  # noqa: ANN401
    dx: float,
    *args: Any,  # noqa: ANN401
    lib: IrbemLibrary | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> GetBDerivsOutput:
    """Computes the magnetic field and its first order derivatives at the input locations.

    Args:
        arg1, arg2, *args, **kwargs: Time, position and model arguments as for `get_field_multi`.
        dx (float): Step size of the finite differences in Re.
        lib (IrbemLibrary | None): The IRBEM library, the process-wide one if None.
    """
    if lib is None:
        lib = default_library()

    irbem_args, batch = prepare_irbem(arg1, arg2, *args, ntime_max=lib.ntime_max, **kwargs)

    c_bgeo = np.zeros((3, batch.ntime), dtype=np.float64, order="F")
    c_bmag = np.zeros(batch.ntime, dtype=np.float64)
    c_grad_bmag = np.zeros((3, batch.ntime), dtype=np.float64, order="F")
    c_diff_b = np.zeros((3, 3, batch.ntime), dtype=np.float64, order="F")

    lib.call(
        "get_bderivs_",
        irbem_args.ntime,
        irbem_args.kext,
        irbem_args.options,
        irbem_args.sysaxes,
        float(dx),
        irbem_args.iyear,
        irbem_args.idoy,
        irbem_args.ut,
        irbem_args.x1,
        irbem_args.x2,
        irbem_args.x3,
        irbem_args.maginput,
        c_bgeo,
        c_bmag,
        c_grad_bmag,
        c_diff_b,
    )

    return GetBDerivsOutput(
        bgeo=collapse_batch(c_bgeo, batch),
        bmag=collapse_batch(c_bmag, batch),
        grad_bmag=collapse_batch(c_grad_bmag, batch),
        diff_b=collapse_batch(c_diff_b, batch),
    )
