# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Literal, NewType

import numpy as np

from irbem_bridge import units
from irbem_bridge.errors import UnknownCoordinateSystem, UnparsableTransformSpec

if TYPE_CHECKING:
    from astropy import units as u

sysaxes = NewType("sysaxes", int)

CoordinateSystemLiteral = Literal["GDZ", "GEO", "GSM", "GSE", "SM", "GEI", "MAG", "SPH", "RLL"]

SYSAXES_STR_TO_INT: dict[str, int] = {
    "GDZ": 0,
    "GEO": 1,
    "GSM": 2,
    "GSE": 3,
    "SM": 4,
    "GEI": 5,
    "MAG": 6,
    "SPH": 7,
    "RLL": 8,
}

_DESCRIPTIONS = {
    "GDZ": "geodetic (altitude, latitude, east longitude - km, deg, deg)",
    "GEO": "Cartesian GEO - Re",
    "GSM": "Cartesian GSM - Re",
    "GSE": "Cartesian GSE - Re",
    "SM": "Cartesian SM - Re",
    "GEI": "Cartesian GEI - Re",
    "MAG": "Cartesian MAG - Re",
    "SPH": "spherical GEO (radial distance, latitude, east longitude - Re, deg, deg)",
    "RLL": "spherical GEO (radial distance, geodetic latitude, east longitude - Re, deg, deg)",
}


class CoordinateSystem(Enum):
    """Enum for the coordinate systems understood by IRBEM-LIB."""

    GDZ = "GDZ"
    GEO = "GEO"
    GSM = "GSM"
    GSE = "GSE"
    SM = "SM"
    GEI = "GEI"
    MAG = "MAG"
    SPH = "SPH"
    RLL = "RLL"

    def sysaxes(self) -> sysaxes:
        """Returns the IRBEM integer code of the coordinate system."""
        return sysaxes(SYSAXES_STR_TO_INT[self.value])

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self.value]

    @property
    def component_units(self) -> tuple[u.UnitBase, u.UnitBase, u.UnitBase]:
        """Units of the three components, in component order."""
        if self is CoordinateSystem.GDZ:
            return units.GEODETIC_UNITS
        if self in (CoordinateSystem.SPH, CoordinateSystem.RLL):
            return units.SPHERICAL_UNITS
        return units.CARTESIAN_UNITS

    @classmethod
    def _missing_(cls, value: object) -> CoordinateSystem:
        if isinstance(value, str) and value.upper() in SYSAXES_STR_TO_INT:
            return cls(value.upper())

        msg = "{!r} is not a valid {}.  Valid types: {}".format(
            value,
            cls.__name__,
            ", ".join([repr(m.value) for m in cls]),
        )
        raise UnknownCoordinateSystem(msg)


_CODE_TO_SYSTEM = {system.sysaxes(): system for system in CoordinateSystem}


def _unknown(value: object) -> UnknownCoordinateSystem:
    return UnknownCoordinateSystem(
        f"Unknown coordinate system: {value!r}. Choose from GDZ, GEO, GSM, GSE, SM, GEI, MAG, SPH, RLL."
    )


def code_of(value: object) -> sysaxes:
    """Looks up the IRBEM sysaxes code of a coordinate system.

    Args:
        value: A case-insensitive name ('geo', 'GSM'), a `CoordinateSystem` member, an integer code
            (passed through after validation), a typed `CoordinateVector` or a coordinate factory
            such as `GEO`. Anything carrying a `system` attribute is resolved through it.

    Returns:
        sysaxes: The integer code in 0..8.

    Raises:
        UnknownCoordinateSystem: If the value does not name one of the supported systems.
    """
    if isinstance(value, CoordinateSystem):
        return value.sysaxes()

    if isinstance(value, str):
        try:
            return CoordinateSystem(value).sysaxes()
        except UnknownCoordinateSystem:
            raise _unknown(value) from None

    if isinstance(value, (bool, np.bool_)):
        raise _unknown(value)

    if isinstance(value, (int, np.integer)):
        if int(value) not in _CODE_TO_SYSTEM:
            raise _unknown(value)
        return sysaxes(int(value))

    system = getattr(value, "system", None)
    if isinstance(system, CoordinateSystem):
        return system.sysaxes()

    raise _unknown(value)


def name_of(code: int) -> CoordinateSystem:
    """Returns the coordinate system for an IRBEM sysaxes code."""
    if isinstance(code, (bool, np.bool_)) or not isinstance(code, (int, np.integer)):
        raise _unknown(code)
    try:
        return _CODE_TO_SYSTEM[sysaxes(int(code))]
    except KeyError:
        raise _unknown(code) from None


def system_of(value: object) -> CoordinateSystem:
    """Resolves any accepted coordinate system designation to its enum member."""
    return name_of(code_of(value))


_TRANSFORM_SEPARATOR = re.compile(r"_to_|2", flags=re.IGNORECASE)


def parse_transform_spec(spec: str | Sequence[object]) -> tuple[CoordinateSystem, CoordinateSystem]:
    """Parses a coordinate transformation designation into a (source, destination) pair.

    Accepted are strings like 'geo2gsm', 'GEO2GSM', 'geo_to_gsm' and pairs like ('GEO', 'GSM').

    Raises:
        UnparsableTransformSpec: If a string does not split into exactly two parts or a
            sequence does not hold exactly two entries.
        UnknownCoordinateSystem: If one of the parts is not a known coordinate system.
    """
    if isinstance(spec, str):
        parts = _TRANSFORM_SEPARATOR.split(spec)
        if len(parts) != 2 or not all(parts):  # noqa: PLR2004
            msg = f"Could not parse coordinate system conversion string: {spec!r}. Expected format like 'geo2gsm'."
            raise UnparsableTransformSpec(msg)
        return system_of(parts[0]), system_of(parts[1])

    if isinstance(spec, Sequence) and len(spec) == 2:  # noqa: PLR2004
        return system_of(spec[0]), system_of(spec[1])

    msg = f"Could not parse coordinate system conversion: {spec!r}. Expected a string or a (source, destination) pair."
    raise UnparsableTransformSpec(msg)
