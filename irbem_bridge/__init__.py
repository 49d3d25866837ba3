# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

# ruff: noqa: E402, I001

# useful custom IRBEM aliases
IRBEM_SYSAXIS_GDZ = 0
IRBEM_SYSAXIS_GEO = 1
IRBEM_SYSAXIS_GSM = 2
IRBEM_SYSAXIS_GSE = 3
IRBEM_SYSAXIS_SM  = 4
IRBEM_SYSAXIS_GEI = 5
IRBEM_SYSAXIS_MAG = 6
IRBEM_SYSAXIS_SPH = 7
IRBEM_SYSAXIS_RLL = 8

# coordinates has to be imported before the modules consuming typed positions
from irbem_bridge import coordinates
from irbem_bridge.coordinates import (
    GDZ,
    GEI,
    GEO,
    GSE,
    GSM,
    MAG,
    RLL,
    SM,
    SPH,
    CoordinateSystem,
    CoordinateVector,
    transform,
)
from irbem_bridge import errors, physics, routines, units
from irbem_bridge.errors import (
    BatchLengthMismatch,
    BatchTooLarge,
    InvalidTimeFormat,
    IrbemInputError,
    ShapeMismatch,
    TimeBatchMismatch,
    UnknownCoordinateSystem,
    UnknownFieldModel,
    UnparsableTransformSpec,
    UnsupportedBatch,
)
from irbem_bridge.field_model import DEFAULT_FIELD_MODEL, POSITIONAL_FIELD_MODEL, FieldModelConfig, MagneticField
from irbem_bridge.library import IrbemLibrary, default_library
from irbem_bridge.arguments import prepare_irbem
from irbem_bridge.outputs import FORTRAN_BAD_VALUE
from irbem_bridge.routines import (
    drift_bounce_orbit,
    drift_shell,
    find_foot_point,
    find_magequator,
    find_mirror_point,
    get_bderivs,
    get_field_multi,
    get_igrf_version,
    get_mlt,
    irbem_fortran_release,
    irbem_fortran_version,
    make_lstar,
    make_lstar_shell_splitting,
    trace_field_line,
)
from irbem_bridge.irbem import Coords, MagFields

__all__ = [
    # Public constants
    "DEFAULT_FIELD_MODEL",
    "FORTRAN_BAD_VALUE",
    "GDZ",
    "GEI",
    "GEO",
    "GSE",
    "GSM",
    "IRBEM_SYSAXIS_GDZ",
    "IRBEM_SYSAXIS_GEI",
    "IRBEM_SYSAXIS_GEO",
    "IRBEM_SYSAXIS_GSE",
    "IRBEM_SYSAXIS_GSM",
    "IRBEM_SYSAXIS_MAG",
    "IRBEM_SYSAXIS_RLL",
    "IRBEM_SYSAXIS_SM",
    "IRBEM_SYSAXIS_SPH",
    "MAG",
    "POSITIONAL_FIELD_MODEL",
    "RLL",
    "SM",
    "SPH",
    "BatchLengthMismatch",
    "BatchTooLarge",
    "CoordinateSystem",
    "CoordinateVector",
    "Coords",
    "FieldModelConfig",
    "InvalidTimeFormat",
    "IrbemInputError",
    "IrbemLibrary",
    "MagFields",
    "MagneticField",
    "ShapeMismatch",
    "TimeBatchMismatch",
    "UnknownCoordinateSystem",
    "UnknownFieldModel",
    "UnparsableTransformSpec",
    "UnsupportedBatch",
    "coordinates",
    "default_library",
    "drift_bounce_orbit",
    "drift_shell",
    "errors",
    "find_foot_point",
    "find_magequator",
    "find_mirror_point",
    "get_bderivs",
    "get_field_multi",
    "get_igrf_version",
    "get_mlt",
    "irbem_fortran_release",
    "irbem_fortran_version",
    "make_lstar",
    "make_lstar_shell_splitting",
    "physics",
    "prepare_irbem",
    "routines",
    "trace_field_line",
    "transform",
    "units",
]
