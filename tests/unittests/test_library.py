# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

import ctypes

import numpy as np
import pytest

from irbem_bridge.library import IrbemLibrary, _as_c_argument


@pytest.mark.basic
def test_buffers_are_passed_as_pointers():
    buffer = np.zeros((3, 4), dtype=np.float64, order="F")
    pointer = _as_c_argument(buffer)

    assert isinstance(pointer, ctypes.c_void_p)
    assert pointer.value == buffer.ctypes.data


@pytest.mark.basic
@pytest.mark.parametrize(
    "buffer",
    [
        np.zeros((3, 4), dtype=np.float64, order="C"),
        np.zeros(3, dtype=np.float32),
        np.zeros(3, dtype=np.int64),
    ],
)
def test_invalid_buffers(buffer):
    with pytest.raises(TypeError):
        _as_c_argument(buffer)


@pytest.mark.basic
def test_scalars_are_passed_by_reference():
    int_ref = _as_c_argument(np.int32(4))
    float_ref = _as_c_argument(1.5)

    assert int_ref._obj.value == 4  # noqa: SLF001
    assert isinstance(int_ref._obj, ctypes.c_int)  # noqa: SLF001
    assert float_ref._obj.value == 1.5  # noqa: SLF001
    assert isinstance(float_ref._obj, ctypes.c_double)  # noqa: SLF001


@pytest.mark.basic
@pytest.mark.parametrize("value", [True, "GEO", None])
def test_invalid_scalars(value):
    with pytest.raises(TypeError):
        _as_c_argument(value)


@pytest.mark.basic
def test_load_missing_library(tmp_path):
    with pytest.raises(OSError, match="Could not load the IRBEM shared object"):
        IrbemLibrary(tmp_path / "libirbem.so")


@pytest.mark.basic
def test_library_path_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("IRBEM_LIB_PATH", str(tmp_path / "from_env.so"))
    with pytest.raises(OSError, match="from_env.so"):
        IrbemLibrary()
