# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Relativistic helpers for particles moving along the traced field lines.

Kinetic and rest energies only need to share the same unit.
"""

from typing import Literal, overload

import numpy as np
from astropy import constants as const
from numpy.typing import NDArray

ParticleLiteral = Literal["electron", "proton", "helium", "oxygen"]

# Rest energy in MeV
REST_ENERGIES = {
    "electron": 0.511,
    "proton": 938.272,
    "helium": 3727.379,  # Helium-4 nucleus
    "oxygen": 14958.9,  # Oxygen-16 nucleus
}

ELECTRON_REST_ENERGY = REST_ENERGIES["electron"]


def rest_energy(species: ParticleLiteral) -> float:
    """Return the rest energy for the input species.

    Args:
        species (str): The species of particle ('electron', 'proton', 'helium', 'oxygen').

    Returns:
        float: The rest energy of the species in MeV.

    Raises:
        ValueError: If an unknown species is provided.
    """
    if species.lower() not in REST_ENERGIES:
        msg = f"Unknown species '{species}'. Valid options are 'electron', 'proton', 'helium', 'oxygen'."
        raise ValueError(msg)

    return REST_ENERGIES[species.lower()]


@overload
def en2pc(energy: float, species: ParticleLiteral = "electron") -> float: ...


@overload
def en2pc(energy: NDArray[np.number], species: ParticleLiteral = "electron") -> NDArray[np.number]: ...


def en2pc(energy: float | NDArray[np.number], species: ParticleLiteral = "electron") -> float | NDArray[np.number]:
    r"""Calculate the relativistic momentum (p*c) for a given kinetic energy.

    $$
    pc = \sqrt{(E/m_0c^2 + 1)^2 - 1} \cdot m_0c^2
    $$

    Args:
        energy (np.ndarray or float): The kinetic energy in MeV.
        species (str): The species of particle ('electron', 'proton', 'helium', 'oxygen').

    Returns:
        np.ndarray or float: The relativistic momentum times c (p*c) in MeV.
    """
    mc2 = rest_energy(species)

    return np.sqrt((energy / mc2 + 1) ** 2 - 1) * mc2


def beta(ek: float | NDArray[np.number], erest: float = ELECTRON_REST_ENERGY) -> float | NDArray[np.number]:
    """Relativistic beta (v/c) of a particle with kinetic energy `ek`."""
    return np.sqrt(1 - (ek / erest + 1) ** (-2))


def gamma(ek: float | NDArray[np.number], erest: float = ELECTRON_REST_ENERGY) -> float | NDArray[np.number]:
    """Relativistic gamma factor of a particle with kinetic energy `ek`."""
    return 1 / np.sqrt(1 - beta(ek, erest) ** 2)


def vparallel(
    ek: float | NDArray[np.number],
    bm: float | NDArray[np.number],
    b: float | NDArray[np.number],
    erest: float = ELECTRON_REST_ENERGY,
) -> float | NDArray[np.number]:
    """Velocity parallel to the field line in m/s.

    Args:
        ek: Kinetic energy of the particle.
        bm: Magnetic field magnitude at the mirror point.
        b: Magnetic field magnitude at the particle location, in the unit of `bm`.
        erest: Rest energy of the particle, in the unit of `ek`. Defaults to the electron in MeV.
    """
    return const.c.to_value("m/s") * beta(ek, erest) * np.sqrt(1 - np.abs(b / bm))
