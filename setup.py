# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Sahil Jhawar
#
# SPDX-License-Identifier: Apache-2.0


"""Setup of the irbem_bridge package.

The IRBEM Fortran library is not built here. Point IRBEM_LIB_PATH to a compiled libirbem.so
(or libirbem.dll) or place it next to the package.
"""

from setuptools import find_packages, setup

setup(
    name="irbem_bridge",
    version="0.1.0",
    packages=find_packages(include=["irbem_bridge", "irbem_bridge.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "numpy",
        "pandas",
        "python-dateutil",
        "astropy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
