# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Assembly of the 25-slot magnetic field model input vector (maginput) of IRBEM-LIB."""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray

from irbem_bridge.field_model import MagneticField, kext

logger = logging.getLogger(__name__)

N_MAGINPUT = 25

MagInputKeys = Literal["Kp", "Dst", "dens", "velo", "Pdyn", "ByIMF", "BzIMF", "G1", "G2",
                       "G3", "W1", "W2", "W3", "W4", "W5", "W6", "AL"]

# Slot order of maginput as read by IRBEM-LIB. Slots 17 to 24 are not used.
# https://prbem.github.io/IRBEM/api/general_information.html#magnetic-field-inputs
MAGINPUT_KEYS: tuple[MagInputKeys, ...] = (
    "Kp",  # Kp*10, as in OMNI2 files (0 to 90)
    "Dst",  # nT
    "dens",  # solar wind density, cm-3
    "velo",  # solar wind velocity, km/s
    "Pdyn",  # solar wind dynamic pressure, nPa
    "ByIMF",  # GSM y component of the IMF, nT
    "BzIMF",  # GSM z component of the IMF, nT
    "G1",
    "G2",
    "G3",
    "W1",
    "W2",
    "W3",
    "W4",
    "W5",
    "W6",
    "AL",  # auroral index
)

# Solar wind and index names used by data loaders, mapped onto the IRBEM slots
MAGINPUT_ALIASES: dict[str, MagInputKeys | tuple[MagInputKeys, ...]] = {
    "SW_density": "dens",
    "SW_speed": "velo",
    "IMF_By": "ByIMF",
    "IMF_Bz": "BzIMF",
    "W_params": ("W1", "W2", "W3", "W4", "W5", "W6"),
}

MAGINPUT_TO_INDEX: dict[MagInputKeys, int] = {key: i for i, key in enumerate(MAGINPUT_KEYS)}

MAGINPUT_REQUIRED_INPUTS: dict[kext, list[MagInputKeys]] = {
    MagneticField.T89.kext(): ["Kp"],
    MagneticField.T96.kext(): ["Kp", "Dst", "Pdyn", "ByIMF", "BzIMF"],
    MagneticField.T01.kext(): ["Kp", "Dst", "Pdyn", "ByIMF", "BzIMF", "velo", "dens", "G1", "G2"],
    MagneticField.T01s.kext(): ["Kp", "Dst", "Pdyn", "ByIMF", "BzIMF", "velo", "dens", "G2", "G3"],
    MagneticField.T04s.kext(): ["Kp", "Dst", "Pdyn", "ByIMF", "BzIMF", "W1", "W2", "W3", "W4", "W5", "W6"],
    MagneticField.OP77Q.kext(): [],
}

MAGINPUT_CLIP_RANGES: dict[kext, dict[MagInputKeys, tuple[float, float]]] = {
    MagneticField.T01.kext(): {
        "Dst": (-50, 20),
        "Pdyn": (0.5, 5),
        "ByIMF": (-5, 5),
        "BzIMF": (-5, 5),
        "G1": (0, 10),
        "G2": (0, 10),
    },
    MagneticField.T96.kext(): {
        "Dst": (-100, 20),
        "Pdyn": (0.5, 10),
        "ByIMF": (-10, 10),
        "BzIMF": (-10, 10),
    },
}

_UPPER_TO_KEY = {key.upper(): key for key in (*MAGINPUT_KEYS, *MAGINPUT_ALIASES)}


def _resolve_key(key: object) -> tuple[MagInputKeys, ...]:
    if isinstance(key, Enum):
        key = key.value if isinstance(key.value, str) else key.name
    if not isinstance(key, str):
        return ()

    name = key if key in MAGINPUT_TO_INDEX or key in MAGINPUT_ALIASES else _UPPER_TO_KEY.get(key.upper())
    if name is None:
        return ()
    if name in MAGINPUT_ALIASES:
        target = MAGINPUT_ALIASES[name]
        return target if isinstance(target, tuple) else (target,)
    return (name,)  # type: ignore[reportReturnType]


def _first_values(value: Any, n_slots: int) -> NDArray[np.float64]:  # noqa: ANN401
    data = np.asarray(value, dtype=np.float64)
    if n_slots == 1:
        return data.ravel()[:1]
    # several slots filled from one parameter, e.g. W_params of shape (6,) or (ntime, 6)
    return np.atleast_2d(data)[0, :n_slots]


def assemble_maginput(
    maginput: Mapping[Any, Any] | None = None,
    magnetic_field: int | None = None,
    *,
    clip: bool = False,
) -> NDArray[np.float64]:
    """Assembles the 25-slot maginput vector from a sparse mapping of driver parameters.

    Only the first value is used if a parameter is given as an array; all entries of a batch share
    the same drivers. Parameters missing from the mapping are set to 0.0. Unknown names are
    ignored, so that mappings holding additional entries can be passed unchanged.

    Args:
        maginput (Mapping | None): Driver parameters keyed by name ('Kp', 'Dst', 'dens', ...), by one
            of the aliases in `MAGINPUT_ALIASES` or by enum members with such names.
        magnetic_field (int | None): kext of the external model. If given, missing required drivers
            of that model are reported in the log.
        clip (bool): Clip the drivers to the validity ranges of the model (T96, T01).

    Returns:
        NDArray[np.float64]: The maginput vector of shape (25,).
    """
    logger.debug("Prepping magnetic field inputs.")

    vector = np.zeros(N_MAGINPUT, dtype=np.float64)
    supplied: set[MagInputKeys] = set()

    for key, value in (maginput or {}).items():
        names = _resolve_key(key)
        if not names:
            logger.debug(f"Ignoring unknown magnetic field input {key!r}.")
            continue

        values = _first_values(value, len(names))
        if values.size < len(names):
            logger.debug(f"Magnetic field input {key!r} holds no values, keeping default.")
            continue

        for name, val in zip(names, values, strict=True):
            vector[MAGINPUT_TO_INDEX[name]] = val
            supplied.add(name)

    if magnetic_field is not None:
        for req_input in MAGINPUT_REQUIRED_INPUTS.get(kext(magnetic_field), []):
            if req_input not in supplied:
                logger.debug(f"Required input '{req_input}' not found in maginput, using 0.0!")

        if clip:
            for name, (low, high) in MAGINPUT_CLIP_RANGES.get(kext(magnetic_field), {}).items():
                idx = MAGINPUT_TO_INDEX[name]
                vector[idx] = np.clip(vector[idx], low, high)

    logger.debug("Done prepping magnetic field inputs.")

    return vector


def to_native_maginput(vector: NDArray[np.float64], ntime: int) -> NDArray[np.float64]:
    """Repeats one maginput vector for every entry of a batch.

    Returns:
        NDArray[np.float64]: A Fortran-ordered array of shape (25, ntime).
    """
    if vector.shape != (N_MAGINPUT,):
        msg = f"maginput must have shape ({N_MAGINPUT},), got {vector.shape}!"
        raise ValueError(msg)
    return np.asfortranarray(np.repeat(vector[:, np.newaxis], max(ntime, 1), axis=1))
