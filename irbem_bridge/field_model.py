# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, NewType

import numpy as np
from numpy.typing import NDArray

from irbem_bridge.coordinates.coord_systems import code_of
from irbem_bridge.errors import UnknownFieldModel

kext = NewType("kext", int)

N_OPTIONS = 5

# External magnetic field model look up table, indexed by kext.
EXT_MODELS = [
    "None",
    "MF75",
    "TS87",
    "TL87",
    "T89",
    "OPQ77",
    "OPD88",
    "T96",
    "OM97",
    "T01",
    "T01S",
    "T04",
    "A00",
    "T07",
    "MT",
]


def _magnetic_field_str_to_kext(magnetic_field_str: str) -> kext:
    match magnetic_field_str:
        case "T89":
            mag_kext = kext(4)
        case "T01":
            mag_kext = kext(9)
        case "T01s":
            mag_kext = kext(10)
        case "TS04" | "TS05" | "T04s":
            mag_kext = kext(11)
        case "T96":
            mag_kext = kext(7)
        case "OP77Q":
            mag_kext = kext(5)
        case "OP77":
            mag_kext = kext(5)
        case _:
            msg = "Invalid magnetic field model!"
            raise UnknownFieldModel(msg)

    return mag_kext


MagneticFieldLiteral = Literal["T89", "T01", "T01s", "TS04", "TS05", "T04s", "T96", "OP77Q", "OP77"]


class MagneticField(Enum):
    """Enum for the commonly used external magnetic field models."""

    T89 = "T89"
    T01 = "T01"
    T01s = "T01s"
    TS04 = "TS04"
    TS05 = "TS05"
    T04s = "T04s"
    T96 = "T96"
    OP77Q = "OP77Q"
    OP77 = "OP77"

    def kext(self) -> kext:
        """Returns the kext value for the magnetic field model."""
        return _magnetic_field_str_to_kext(self.value)

    @classmethod
    def _missing_(cls, value: object) -> None:
        msg = "{!r} is not a valid {}.  Valid types: {}".format(
            value,
            cls.__name__,
            ", ".join([repr(m.value) for m in cls]),
        )
        raise UnknownFieldModel(msg)


def parse_kext(model: int | str | MagneticField) -> kext:
    """Resolves an external magnetic field model designation to its IRBEM kext code.

    Args:
        model (int | str | MagneticField): An integer code in 0..14, a name from `EXT_MODELS`
            (case-insensitive, e.g. 'T89' or 'OPQ77') or one of the `MagneticField` aliases
            (e.g. 'TS05', 'OP77Q').

    Raises:
        UnknownFieldModel: If the designation is not in the IRBEM catalog.
    """
    if isinstance(model, MagneticField):
        return model.kext()

    if isinstance(model, (int, np.integer)) and not isinstance(model, bool):
        if not 0 <= int(model) < len(EXT_MODELS):
            msg = f"Unknown external field model: {model}. Valid codes are 0..{len(EXT_MODELS) - 1}."
            raise UnknownFieldModel(msg)
        return kext(int(model))

    if isinstance(model, str):
        upper_names = [name.upper() for name in EXT_MODELS]
        if model.upper() in upper_names:
            return kext(upper_names.index(model.upper()))
        if model in {member.value for member in MagneticField}:
            return MagneticField(model).kext()

    msg = f"Unknown external field model: {model!r}. Valid models are {EXT_MODELS}"
    raise UnknownFieldModel(msg)


def parse_options(options: Sequence[int] | NDArray[np.integer] | None) -> tuple[int, ...]:
    """Validates the IRBEM option flags, defaulting to all zeros."""
    if options is None:
        return (0,) * N_OPTIONS

    options = tuple(int(option) for option in options)
    if len(options) != N_OPTIONS:
        msg = f"IRBEM expects exactly {N_OPTIONS} option flags, got {len(options)}!"
        raise ValueError(msg)

    return options


@dataclass(frozen=True)
class FieldModelConfig:
    """Selection of the external magnetic field model, the option flags and the input coordinate system.

    Instances are created once by the caller and shared by many calls; they are never mutated.
    Use `FieldModelConfig.create` to build one from names.

    Attributes:
        kext (int): The IRBEM code of the external magnetic field model (0..14).
        options (tuple[int, ...]): The five IRBEM option flags.
        sysaxes (int): The IRBEM code of the coordinate system of unqualified position input.
    """

    kext: int = 5
    options: tuple[int, ...] = field(default=(0,) * N_OPTIONS)
    sysaxes: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "kext", parse_kext(self.kext))
        object.__setattr__(self, "options", parse_options(self.options))
        object.__setattr__(self, "sysaxes", code_of(self.sysaxes))

    @classmethod
    def create(
        cls,
        *,
        kext: int | str | MagneticField = "OPQ77",
        options: Sequence[int] | None = None,
        sysaxes: object = "GDZ",
    ) -> FieldModelConfig:
        """Creates a configuration from model and coordinate system names or codes."""
        return cls(kext=parse_kext(kext), options=parse_options(options), sysaxes=code_of(sysaxes))

    @property
    def model_name(self) -> str:
        return EXT_MODELS[self.kext]

    def options_array(self) -> NDArray[np.int32]:
        """Returns the option flags as the int32 buffer passed to IRBEM-LIB."""
        return np.array(self.options, dtype=np.int32)


DEFAULT_FIELD_MODEL = FieldModelConfig()
# Used when time and position are passed without a FieldModelConfig
POSITIONAL_FIELD_MODEL = FieldModelConfig(kext=MagneticField.T89.kext())
