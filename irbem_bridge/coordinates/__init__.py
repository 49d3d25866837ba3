# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

from irbem_bridge.coordinates.coord_systems import (
    SYSAXES_STR_TO_INT,
    CoordinateSystem,
    CoordinateSystemLiteral,
    code_of,
    name_of,
    parse_transform_spec,
    system_of,
)
from irbem_bridge.coordinates.coordinate_vector import CoordinateVector
from irbem_bridge.coordinates.transform import (
    GDZ,
    GEI,
    GEO,
    GSE,
    GSM,
    MAG,
    RLL,
    SM,
    SPH,
    CoordinateFactory,
    transform,
)

__all__ = [
    "GDZ",
    "GEI",
    "GEO",
    "GSE",
    "GSM",
    "MAG",
    "RLL",
    "SM",
    "SPH",
    "SYSAXES_STR_TO_INT",
    "CoordinateFactory",
    "CoordinateSystem",
    "CoordinateSystemLiteral",
    "CoordinateVector",
    "code_of",
    "name_of",
    "parse_transform_spec",
    "system_of",
    "transform",
]
