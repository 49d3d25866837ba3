# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures.

`FakeIrbemLibrary` stands in for the compiled IRBEM-LIB. It records every call and writes
deterministic values into the output buffers, derived from the inputs where that makes the
marshaling observable (e.g. get_field_multi returns the input position as field vector).
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from irbem_bridge.library import _as_c_argument


def _make_lstar(args: tuple[Any, ...]) -> None:
    ntime, x1 = args[0], args[7]
    for k, out in enumerate(args[11:17]):
        out[:ntime] = x1[:ntime] + k


def _make_lstar_shell_splitting(args: tuple[Any, ...]) -> None:
    ntime, n_alpha, x1, alpha = args[0], args[1], args[8], args[11]
    lm, lstar, blocal, bmin, xj, mlt = args[13:19]
    for k, out in enumerate((lm, lstar, blocal, xj)):
        out[:ntime, :n_alpha] = x1[:ntime, np.newaxis] + alpha[np.newaxis, :n_alpha] + 1000 * k
    bmin[:ntime] = x1[:ntime]
    mlt[:ntime] = 12.0


def _get_field_multi(args: tuple[Any, ...]) -> None:
    ntime, x1, x2, x3, bgeo, bmag = args[0], args[7], args[8], args[9], args[11], args[12]
    bgeo[0, :ntime], bgeo[1, :ntime], bgeo[2, :ntime] = x1, x2, x3
    bmag[:ntime] = np.sqrt(x1**2 + x2**2 + x3**2)


def _get_bderivs(args: tuple[Any, ...]) -> None:
    ntime, dx, x1, x2, x3 = args[0], args[4], args[8], args[9], args[10]
    bgeo, bmag, grad_bmag, diff_b = args[12:16]
    bgeo[0, :ntime], bgeo[1, :ntime], bgeo[2, :ntime] = x1, x2, x3
    bmag[:ntime] = np.sqrt(x1**2 + x2**2 + x3**2)
    grad_bmag[:, :ntime] = bgeo[:, :ntime] * dx
    for i in range(3):
        for j in range(3):
            diff_b[i, j, :ntime] = 3 * i + j


def _coord_trans_vec(args: tuple[Any, ...]) -> None:
    ntime, sys_in, sys_out, pos_in, pos_out = args[0], args[1], args[2], args[6], args[7]
    pos_out[:, :ntime] = pos_in[:, :ntime] + (sys_out - sys_in)


def _get_mlt(args: tuple[Any, ...]) -> None:
    ut, mlt = args[2], args[4]
    mlt[0] = ut / 3600


def _find_mirror_point(args: tuple[Any, ...]) -> None:
    x1, x2, x3, alpha = args[6], args[7], args[8], args[9]
    blocal, bmirr, posit = args[11], args[12], args[13]
    blocal[0] = 100.0
    bmirr[0] = 100.0 / np.sin(np.deg2rad(alpha)) ** 2
    posit[:] = (x1[0], x2[0], x3[0])


def _find_foot_point(args: tuple[Any, ...]) -> None:
    stop_alt, hemi_flag = args[9], args[10]
    xfoot, bfoot, bfootmag = args[12], args[13], args[14]
    xfoot[:] = (stop_alt, 60.0 * hemi_flag, 0.0)
    bfoot[:] = (1.0, 2.0, 3.0)
    bfootmag[0] = np.sqrt(14.0)


def _find_magequator(args: tuple[Any, ...]) -> None:
    x1, bmin, xgeo = args[6], args[10], args[11]
    bmin[0] = 50.0
    xgeo[:] = (x1[0], 0.0, 0.0)


TRACE_NPOSIT = 5


def _trace_field_line(args: tuple[Any, ...]) -> None:
    r0 = args[10]
    lm, blocal, bmin, xj, posit, nposit = args[11:17]
    lm[0], bmin[0], xj[0] = 4.0, 50.0, r0
    blocal[:] = -1.0e31
    posit[:] = -1.0e31
    blocal[:TRACE_NPOSIT] = np.arange(TRACE_NPOSIT)
    posit[:, :TRACE_NPOSIT] = np.arange(3 * TRACE_NPOSIT).reshape(3, TRACE_NPOSIT)
    nposit[0] = TRACE_NPOSIT


def _fill_drift(blocal: np.ndarray, posit: np.ndarray, nposit: np.ndarray) -> None:
    # the full capacity is filled, only the first nposit points of every column are valid
    blocal[:] = 1.0
    posit[:] = 2.0
    nposit[:] = 10 + np.arange(len(nposit)) % 5


def _drift_shell(args: tuple[Any, ...]) -> None:
    lm, lstar, blocal, bmin, xj, posit, nposit = args[10:17]
    lm[0], lstar[0], bmin[0], xj[0] = 4.0, 3.5, 50.0, 0.1
    _fill_drift(blocal, posit, nposit)


def _drift_bounce_orbit(args: tuple[Any, ...]) -> None:
    alpha, r0 = args[9], args[11]
    lm, lstar, blocal, bmin, bmirr, xj, posit, nposit, hmin, hmin_lon = args[12:22]
    lm[0], lstar[0], bmin[0], xj[0] = 4.0, 3.5, 50.0, 0.1
    bmirr[0] = 50.0 / np.sin(np.deg2rad(alpha)) ** 2
    hmin[0], hmin_lon[0] = 100.0 * r0, 270.0
    _fill_drift(blocal, posit, nposit)


def _get_igrf_version(args: tuple[Any, ...]) -> None:
    args[0][0] = 13


def _irbem_fortran_version(args: tuple[Any, ...]) -> None:
    args[0][0] = 620


def _irbem_fortran_release(args: tuple[Any, ...]) -> None:
    release = b"v5.0.0"
    args[0][:] = 0
    args[0][: len(release)] = np.frombuffer(release, dtype=np.uint8)


_HANDLERS = {
    "make_lstar1_": _make_lstar,
    "make_lstar_shell_splitting1_": _make_lstar_shell_splitting,
    "get_field_multi_": _get_field_multi,
    "get_bderivs_": _get_bderivs,
    "coord_trans_vec1_": _coord_trans_vec,
    "get_mlt1_": _get_mlt,
    "find_mirror_point1_": _find_mirror_point,
    "find_foot_point1_": _find_foot_point,
    "find_magequator1_": _find_magequator,
    "trace_field_line2_1_": _trace_field_line,
    "drift_shell1_": _drift_shell,
    "drift_bounce_orbit2_1_": _drift_bounce_orbit,
    "get_igrf_version_": _get_igrf_version,
    "irbem_fortran_version1_": _irbem_fortran_version,
    "irbem_fortran_release1_": _irbem_fortran_release,
}


class FakeIrbemLibrary:
    """Drop-in replacement of `IrbemLibrary` for tests without the compiled library."""

    def __init__(self, ntime_max: int = 100) -> None:
        self.ntime_max = ntime_max
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def call(self, routine: str, *args: Any) -> None:  # noqa: ANN401
        # same argument checks as the ctypes boundary
        for arg in args:
            _as_c_argument(arg)

        self.calls.append((routine, args))
        _HANDLERS[routine](args)

    @property
    def routines_called(self) -> list[str]:
        return [routine for routine, _ in self.calls]


@pytest.fixture
def fake_lib() -> FakeIrbemLibrary:
    return FakeIrbemLibrary()


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "basic: fast tests without external resources")
