# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

from irbem_bridge.routines.field import GetBDerivsOutput, GetFieldMultiOutput, get_bderivs, get_field_multi
from irbem_bridge.routines.find_points import (
    FindFootPointOutput,
    FindMagEquatorOutput,
    FindMirrorPointOutput,
    find_foot_point,
    find_magequator,
    find_mirror_point,
)
from irbem_bridge.routines.info import get_igrf_version, irbem_fortran_release, irbem_fortran_version
from irbem_bridge.routines.magnetic_coordinates import (
    MakeLstarOutput,
    MakeLstarShellSplittingOutput,
    get_mlt,
    make_lstar,
    make_lstar_shell_splitting,
)
from irbem_bridge.routines.tracing import (
    DriftBounceOrbitOutput,
    DriftShellOutput,
    TraceFieldLineOutput,
    drift_bounce_orbit,
    drift_shell,
    trace_field_line,
)

__all__ = [
    "DriftBounceOrbitOutput",
    "DriftShellOutput",
    "FindFootPointOutput",
    "FindMagEquatorOutput",
    "FindMirrorPointOutput",
    "GetBDerivsOutput",
    "GetFieldMultiOutput",
    "MakeLstarOutput",
    "MakeLstarShellSplittingOutput",
    "TraceFieldLineOutput",
    "drift_bounce_orbit",
    "drift_shell",
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
    "trace_field_line",
]
