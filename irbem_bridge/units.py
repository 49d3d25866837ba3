# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from astropy import units as u
from astropy.constants import R_earth  # type:ignore [reportAttributeAccessIssue]

# -----------------------------------------------------------------------------
# Position units
# -----------------------------------------------------------------------------

RE = u.def_unit("RE", R_earth)

# Component units of the Cartesian, geodetic and spherical IRBEM coordinate systems
CARTESIAN_UNITS: tuple[u.UnitBase, u.UnitBase, u.UnitBase] = (RE, RE, RE)
GEODETIC_UNITS: tuple[u.UnitBase, u.UnitBase, u.UnitBase] = (u.km, u.deg, u.deg)  # type: ignore[reportAttributeAccessIssue]
SPHERICAL_UNITS: tuple[u.UnitBase, u.UnitBase, u.UnitBase] = (RE, u.deg, u.deg)  # type: ignore[reportAttributeAccessIssue]
