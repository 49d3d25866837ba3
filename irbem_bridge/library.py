# SPDX-FileCopyrightText: 2022 Mykhaylo Shumko
# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
#
# SPDX-License-Identifier: LGPL-3.0-only

"""Loading of the IRBEM-LIB shared object and the raw call boundary.

Every argument is passed by reference, as Fortran expects. Scalars are wrapped into
ctypes objects, buffers are passed as pointers to the memory of Fortran-ordered
numpy arrays. The buffers are allocated and zeroed by the callers.
"""

import ctypes
import logging
import os
import pathlib
import shutil
import sys
from functools import cache
from pathlib import Path
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

IRBEM_LIB_PATH_ENV = "IRBEM_LIB_PATH"

_BUFFER_DTYPES = (np.dtype(np.float64), np.dtype(np.int32), np.dtype(np.uint8))


def _as_c_argument(arg: Any) -> Any:  # noqa: ANN401
    if isinstance(arg, np.ndarray):
        if arg.dtype not in _BUFFER_DTYPES:
            msg = f"IRBEM buffers must be float64, int32 or uint8, got {arg.dtype}!"
            raise TypeError(msg)
        if not arg.flags.f_contiguous:
            msg = "IRBEM buffers must be Fortran-contiguous!"
            raise TypeError(msg)
        return arg.ctypes.data_as(ctypes.c_void_p)

    if isinstance(arg, (bool, np.bool_)):
        msg = "Boolean arguments are not supported by IRBEM-LIB!"
        raise TypeError(msg)

    if isinstance(arg, (int, np.integer)):
        return ctypes.byref(ctypes.c_int(int(arg)))

    if isinstance(arg, (float, np.floating)):
        return ctypes.byref(ctypes.c_double(float(arg)))

    msg = f"Unsupported argument type for IRBEM-LIB: {type(arg).__name__}"
    raise TypeError(msg)


class IrbemLibrary:
    """A handle to the IRBEM shared library.

    The maximum number of entries a batch routine accepts (NTIME_MAX) is queried once when the
    library is loaded and is read-only afterwards.

    Attributes:
        irbem_obj_path (Path): The path to the IRBEM shared library object.
        ntime_max (int): The maximum number of time steps IRBEM can process in a single call.
    """

    def __init__(self, lib_path: str | Path | None = None) -> None:
        """Loads the IRBEM shared library.

        Args:
            lib_path (str | Path | None, optional): The path to the IRBEM shared library file.
                If None, the path is read from the IRBEM_LIB_PATH environment variable and if that
                is not set either, the library is searched for next to the package.
        """
        if lib_path is None and os.environ.get(IRBEM_LIB_PATH_ENV):
            lib_path = os.environ[IRBEM_LIB_PATH_ENV]
        if isinstance(lib_path, str):
            lib_path = Path(lib_path)

        self.irbem_obj_path, self._irbem_obj = _load_shared_object(lib_path)

        c_ntime_max = ctypes.c_int(-1)
        self._irbem_obj.get_irbem_ntime_max1_(ctypes.byref(c_ntime_max))
        self.ntime_max = c_ntime_max.value

        logger.debug(f"Loaded IRBEM-LIB from {self.irbem_obj_path} with NTIME_MAX = {self.ntime_max}")

    def call(self, routine: str, *args: Any) -> None:  # noqa: ANN401
        """Calls a routine of the shared object, passing every argument by reference.

        Args:
            routine (str): The exported symbol, e.g. 'make_lstar1_'.
            *args: Python ints (passed as int32), floats (passed as float64) and Fortran-contiguous
                numpy buffers, in the order of the Fortran signature.
        """
        logger.debug(f"Running IRBEM-LIB {routine}")
        getattr(self._irbem_obj, routine)(*(_as_c_argument(arg) for arg in args))


@cache
def default_library() -> IrbemLibrary:
    """Returns the process-wide IRBEM library, loading it on first use."""
    return IrbemLibrary()


def _load_shared_object(path: Path | None = None) -> tuple[Path, ctypes.CDLL]:
    """Searches for and loads a shared object (.so or .dll file).

    If path is specified it doesn't search for the file.
    """
    if path is None:
        if (sys.platform == "win32") or (sys.platform == "cygwin"):
            obj_name = "libirbem.dll"
        else:
            obj_name = "libirbem.so"
        matched_object_files = list(Path(__file__).parents[1].rglob(obj_name))
        if len(matched_object_files) != 1:
            msg = (
                f"{len(matched_object_files)} .so or .dll shared object files found in "
                f"{Path(__file__).parents[1]} folder: {matched_object_files}. "
                f"Pass lib_path or set {IRBEM_LIB_PATH_ENV}."
            )
            raise ValueError(msg)

        path = matched_object_files[0]

    # Open the shared object file.
    try:
        if (sys.platform == "win32") or (sys.platform == "cygwin"):
            # Some versions of ctypes (Python) need to know where msys64 binary
            # files are located, or ctypes is unable to load the IREBM dll.
            gfortran = shutil.which("gfortran.exe")
            if gfortran is not None:
                os.add_dll_directory(str(pathlib.Path(gfortran).parent))  # e.g. C:\msys64\mingw64\bin
            irbem_obj = ctypes.WinDLL(str(path))
        else:
            irbem_obj = ctypes.CDLL(str(path))
    except OSError as err:
        msg = f"Could not load the IRBEM shared object file in {path}"
        raise OSError(msg) from err

    return path, irbem_obj
