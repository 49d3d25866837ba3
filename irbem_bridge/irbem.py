# SPDX-FileCopyrightText: 2022 Mykhaylo Shumko
# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
#
# SPDX-License-Identifier: LGPL-3.0-only

"""Object interface to the IRBEM-LIB routines.

`MagFields` binds a field model configuration and a library handle, so that every method only
takes the time and position dictionary `X` and the driver parameters `maginput`:

    >>> model = MagFields(kext="T89", sysaxes="GDZ")
    >>> X = {"dateTime": "2015-02-02T06:12:43", "x1": 600, "x2": 60, "x3": 50}
    >>> model.make_lstar(X, {"Kp": 40})
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import NDArray

from irbem_bridge import routines
from irbem_bridge.coordinates import CoordinateVector, transform
from irbem_bridge.field_model import FieldModelConfig, MagneticField
from irbem_bridge.library import IrbemLibrary, default_library
from irbem_bridge.position import PositionInput
from irbem_bridge.time_decomposition import TimeInput

XInput = Mapping[str, Any]
MagInput = Mapping[Any, Any] | None


def _library(lib_path: str | Path | None, lib: IrbemLibrary | None) -> IrbemLibrary:
    if lib is not None:
        if lib_path is not None:
            msg = "Pass either lib_path or lib, not both!"
            raise TypeError(msg)
        return lib
    if lib_path is not None:
        return IrbemLibrary(lib_path)
    return default_library()


class MagFields:
    """Wrappers for IRBEM's magnetic field functions with a fixed field model.

    Attributes:
        config (FieldModelConfig): External field model, option flags and input coordinate system.
        lib (IrbemLibrary): The loaded IRBEM library.
    """

    def __init__(
        self,
        lib_path: str | Path | None = None,
        *,
        kext: int | str | MagneticField = "OPQ77",
        options: Sequence[int] | None = None,
        sysaxes: int | str = "GDZ",
        lib: IrbemLibrary | None = None,
    ) -> None:
        """Initialize the MagFields class.

        Args:
            lib_path (str | Path | None): Path to the IRBEM shared object. If None, the process-wide
                library is used.
            kext (int | str | MagneticField): The external magnetic field model, defaults to OPQ77.
            options (Sequence[int] | None): The 5 option flags of IRBEM-LIB, all 0 if None.
            sysaxes (int | str): The coordinate system of the input positions, defaults to GDZ.
            lib (IrbemLibrary | None): An already loaded library. Cannot be combined with `lib_path`.
        """
        self.config = FieldModelConfig.create(kext=kext, options=options, sysaxes=sysaxes)
        self.lib = _library(lib_path, lib)

    @property
    def ntime_max(self) -> int:
        return self.lib.ntime_max

    def __repr__(self) -> str:
        return f"MagFields(kext={self.config.model_name!r}, options={self.config.options}, sysaxes={self.config.sysaxes})"

    def make_lstar(self, X: XInput, maginput: MagInput = None) -> routines.MakeLstarOutput:  # noqa: N803
        return routines.make_lstar(self.config, X, maginput, lib=self.lib)

    def make_lstar_shell_splitting(
        self,
        X: XInput,  # noqa: N803
        alpha: float | Sequence[float] | NDArray[np.floating],
        maginput: MagInput = None,
    ) -> routines.MakeLstarShellSplittingOutput:
        return routines.make_lstar_shell_splitting(self.config, X, alpha, maginput, lib=self.lib)

    def get_field_multi(self, X: XInput, maginput: MagInput = None) -> routines.GetFieldMultiOutput:  # noqa: N803
        return routines.get_field_multi(self.config, X, maginput, lib=self.lib)

    def get_bderivs(self, X: XInput, dx: float, maginput: MagInput = None) -> routines.GetBDerivsOutput:  # noqa: N803
        return routines.get_bderivs(self.config, X, dx, maginput, lib=self.lib)

    def get_mlt(self, X: XInput) -> Any:  # noqa: ANN401, N803
        """Magnetic local time in hours. MLT does not depend on the external field model."""
        return routines.get_mlt(self.config, X, lib=self.lib)

    def find_mirror_point(self, X: XInput, alpha: float, maginput: MagInput = None) -> routines.FindMirrorPointOutput:  # noqa: N803
        return routines.find_mirror_point(self.config, X, alpha, maginput, lib=self.lib)

    def find_foot_point(
        self,
        X: XInput,  # noqa: N803
        stop_alt: float,
        hemi_flag: int,
        maginput: MagInput = None,
    ) -> routines.FindFootPointOutput:
        return routines.find_foot_point(self.config, X, stop_alt, hemi_flag, maginput, lib=self.lib)

    def find_magequator(self, X: XInput, maginput: MagInput = None) -> routines.FindMagEquatorOutput:  # noqa: N803
        return routines.find_magequator(self.config, X, maginput, lib=self.lib)

    def trace_field_line(self, X: XInput, maginput: MagInput = None, r0: float = 1.0) -> routines.TraceFieldLineOutput:  # noqa: N803
        return routines.trace_field_line(self.config, X, maginput, r0=r0, lib=self.lib)

    def drift_shell(self, X: XInput, maginput: MagInput = None) -> routines.DriftShellOutput:  # noqa: N803
        return routines.drift_shell(self.config, X, maginput, lib=self.lib)

    def drift_bounce_orbit(
        self,
        X: XInput,  # noqa: N803
        maginput: MagInput = None,
        alpha: float = 90.0,
        r0: float = 1.0,
    ) -> routines.DriftBounceOrbitOutput:
        return routines.drift_bounce_orbit(self.config, X, maginput, alpha=alpha, r0=r0, lib=self.lib)


class Coords:
    """Wrapper for IRBEM's coordinate transformation function."""

    def __init__(self, lib_path: str | Path | None = None, *, lib: IrbemLibrary | None = None) -> None:
        self.lib = _library(lib_path, lib)

    def transform(
        self,
        time: TimeInput,
        pos: PositionInput,
        *systems: Any,  # noqa: ANN401
    ) -> NDArray[np.float64] | CoordinateVector | list[CoordinateVector]:
        """Transforms positions between coordinate systems, see `irbem_bridge.transform`."""
        return transform(time, pos, *systems, lib=self.lib)
