# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Library information.

https://prbem.github.io/IRBEM/api/library_infos.html
"""

import numpy as np

from irbem_bridge.library import IrbemLibrary, default_library

RELEASE_STR_LEN = 80


def get_igrf_version(lib: IrbemLibrary | None = None) -> int:
    """Returns the version number of the IGRF model."""
    lib = lib or default_library()
    version = np.zeros(1, dtype=np.int32)
    lib.call("get_igrf_version_", version)
    return int(version[0])


def irbem_fortran_version(lib: IrbemLibrary | None = None) -> int:
    """Returns the repository version number of the Fortran source code."""
    lib = lib or default_library()
    version = np.zeros(1, dtype=np.int32)
    lib.call("irbem_fortran_version1_", version)
    return int(version[0])


def irbem_fortran_release(lib: IrbemLibrary | None = None) -> str:
    """Returns the repository release tag of the Fortran source code."""
    lib = lib or default_library()
    release = np.zeros(RELEASE_STR_LEN, dtype=np.uint8)
    lib.call("irbem_fortran_release1_", release)
    return release.tobytes().decode("ascii", errors="replace").strip("\x00 ")
