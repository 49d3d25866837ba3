# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

import numpy as np
import pytest

import irbem_bridge as ib

X = {"dateTime": "2015-02-02T06:12:43", "x1": 600, "x2": 60, "x3": 50}
MAGINPUT = {"Kp": 40}


@pytest.fixture
def model(fake_lib) -> ib.MagFields:
    return ib.MagFields(kext="T89", sysaxes="GDZ", lib=fake_lib)


@pytest.mark.basic
def test_mag_fields_config(model):
    assert model.config == ib.FieldModelConfig(kext=4, sysaxes=0)
    assert model.ntime_max == 100
    assert repr(model) == "MagFields(kext='T89', options=(0, 0, 0, 0, 0), sysaxes=0)"


@pytest.mark.basic
def test_mag_fields_defaults(fake_lib):
    model = ib.MagFields(lib=fake_lib)
    assert model.config == ib.DEFAULT_FIELD_MODEL


@pytest.mark.basic
def test_mag_fields_rejects_lib_and_path(fake_lib):
    with pytest.raises(TypeError):
        ib.MagFields("libirbem.so", lib=fake_lib)


@pytest.mark.basic
def test_mag_fields_methods_match_routines(model, fake_lib):
    from_method = model.make_lstar(X, MAGINPUT)
    from_routine = ib.make_lstar(model.config, X, MAGINPUT, lib=fake_lib)
    assert from_method == from_routine

    args_method = fake_lib.calls[0][1]
    args_routine = fake_lib.calls[1][1]
    for a, b in zip(args_method[:11], args_routine[:11], strict=True):
        np.testing.assert_array_equal(a, b)


@pytest.mark.basic
def test_mag_fields_delegation(model, fake_lib):
    model.get_field_multi(X, MAGINPUT)
    model.get_bderivs(X, 0.1, MAGINPUT)
    model.make_lstar_shell_splitting(X, [45.0, 90.0], MAGINPUT)
    model.get_mlt(X)
    model.find_mirror_point(X, 45.0, MAGINPUT)
    model.find_foot_point(X, 100.0, 1, MAGINPUT)
    model.find_magequator(X, MAGINPUT)
    model.trace_field_line(X, MAGINPUT)
    model.drift_shell(X, MAGINPUT)
    model.drift_bounce_orbit(X, MAGINPUT, alpha=45.0)

    assert fake_lib.routines_called == [
        "get_field_multi_",
        "get_bderivs_",
        "make_lstar_shell_splitting1_",
        "coord_trans_vec1_",
        "get_mlt1_",
        "find_mirror_point1_",
        "find_foot_point1_",
        "find_magequator1_",
        "trace_field_line2_1_",
        "drift_shell1_",
        "drift_bounce_orbit2_1_",
    ]
    # every routine runs with the model of the instance
    assert all(args[1] == 4 for routine, args in fake_lib.calls if routine.startswith(("get_field", "get_b")))
