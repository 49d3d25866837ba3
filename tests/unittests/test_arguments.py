# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime, timedelta

import numpy as np
import pytest

import irbem_bridge as ib
from irbem_bridge.arguments import BatchShape, prepare_irbem, require_single_point, resolve_call

TIME = datetime(2015, 2, 2, 6, 12, 43)
MAGINPUT = {"Kp": 40}


def _assert_args_equal(left: tuple, right: tuple):
    assert len(left) == len(right)
    for a, b in zip(left, right, strict=True):
        np.testing.assert_array_equal(a, b)


@pytest.mark.basic
def test_calling_conventions_are_equivalent():
    model = ib.FieldModelConfig.create(kext="T89", sysaxes="GDZ")
    X = {"dateTime": TIME, "x1": 600, "x2": 60, "x3": 50}

    from_model, batch_model = prepare_irbem(model, X, MAGINPUT)
    from_time, batch_time = prepare_irbem(TIME, [600, 60, 50], "GDZ", MAGINPUT, kext="T89")
    from_keyword, _ = prepare_irbem(TIME, [600, 60, 50], maginput=MAGINPUT, kext=4)

    _assert_args_equal(from_model, from_time)
    _assert_args_equal(from_model, from_keyword)
    assert batch_model == batch_time == BatchShape(ntime=1, is_scalar=True)


@pytest.mark.basic
def test_typed_position_sets_coordinate_system():
    args, _ = prepare_irbem(TIME, ib.GEO(2, 0, 0), MAGINPUT, kext="T89")
    assert args.sysaxes == ib.IRBEM_SYSAXIS_GEO

    args, _ = prepare_irbem(TIME, ib.GEO(2, 0, 0), "geo", MAGINPUT)
    assert args.sysaxes == ib.IRBEM_SYSAXIS_GEO

    with pytest.raises(ib.IrbemInputError):
        prepare_irbem(TIME, ib.GEO(2, 0, 0), "GSM", MAGINPUT)


@pytest.mark.basic
def test_prepared_args_layout():
    times = [TIME + timedelta(minutes=i) for i in range(3)]
    args, batch = prepare_irbem(times, np.array([[600.0] * 3, [60.0] * 3, [50.0] * 3]), "GDZ", MAGINPUT, options=[0, 1, 0, 0, 0])

    assert batch == BatchShape(ntime=3, is_scalar=False)
    assert args.ntime == 3
    assert args.kext == ib.POSITIONAL_FIELD_MODEL.kext == 4
    np.testing.assert_array_equal(args.options, [0, 1, 0, 0, 0])
    np.testing.assert_array_equal(args.ut, [22363.0, 22423.0, 22483.0])
    assert args.maginput.shape == (25, 3)
    np.testing.assert_array_equal(args.maginput[0], [40, 40, 40])


@pytest.mark.basic
def test_broadcast_single_time_and_single_position():
    times = [TIME, TIME + timedelta(hours=1)]
    args, batch = prepare_irbem(times, [600, 60, 50])
    assert batch == BatchShape(ntime=2, is_scalar=False)
    np.testing.assert_array_equal(args.x1, [600, 600])

    args, batch = prepare_irbem(TIME, np.ones((3, 4)))
    assert batch == BatchShape(ntime=4, is_scalar=False)
    np.testing.assert_array_equal(args.idoy, [33] * 4)


@pytest.mark.basic
def test_single_entry_arrays_are_not_scalar():
    _, batch = prepare_irbem([TIME], {"x1": [600], "x2": [60], "x3": [50]})
    assert batch == BatchShape(ntime=1, is_scalar=False)


@pytest.mark.basic
def test_batch_length_mismatch():
    times = [TIME, TIME + timedelta(hours=1)]
    with pytest.raises(ib.BatchLengthMismatch):
        prepare_irbem(times, np.ones((3, 3)))

    with pytest.raises(ib.BatchLengthMismatch):
        prepare_irbem([], [1, 2, 3])


@pytest.mark.basic
def test_batch_too_large():
    times = [TIME] * 11
    with pytest.raises(ib.BatchTooLarge, match="Use a for loop"):
        prepare_irbem(times, np.ones((3, 11)), ntime_max=10)


@pytest.mark.basic
def test_resolve_call_errors():
    model = ib.FieldModelConfig()
    X = {"Time": TIME, "x1": 600, "x2": 60, "x3": 50}

    with pytest.raises(TypeError):
        resolve_call(model, X, kext="T89")
    with pytest.raises(TypeError):
        resolve_call(model, [600, 60, 50])
    with pytest.raises(TypeError):
        resolve_call(model, X, MAGINPUT, maginput=MAGINPUT)
    with pytest.raises(TypeError):
        resolve_call(TIME, [600, 60, 50], "GDZ", MAGINPUT, "extra")
    with pytest.raises(ib.UnknownCoordinateSystem):
        resolve_call(TIME, [600, 60, 50], "XYZ")
    with pytest.raises(ib.InvalidTimeFormat):
        resolve_call(model, {"x1": 600, "x2": 60, "x3": 50})


@pytest.mark.basic
def test_require_single_point():
    require_single_point(BatchShape(1, False), "find_foot_point")

    with pytest.raises(ib.UnsupportedBatch, match="find_foot_point"):
        require_single_point(BatchShape(2, False), "find_foot_point")


@pytest.mark.basic
def test_single_point_scenario():
    args, batch = prepare_irbem("2015-02-02T06:12:43", ib.GDZ(600, 60, 50), {"Kp": 40.0}, kext="T89")

    assert batch == BatchShape(ntime=1, is_scalar=True)
    assert args.maginput[0, 0] == 40.0
    assert np.count_nonzero(args.maginput) == 1
    assert (args.iyear[0], args.idoy[0], args.ut[0]) == (2015, 33, 22363.0)


@pytest.mark.basic
def test_maginput_directly_after_position():
    args, _ = prepare_irbem(TIME, [600, 60, 50], MAGINPUT)

    assert args.sysaxes == ib.IRBEM_SYSAXIS_GDZ
    assert args.maginput[0, 0] == 40


@pytest.mark.basic
def test_coord_keyword():
    positional, _ = prepare_irbem(TIME, [2, 0, 0], "GEO", MAGINPUT)
    keyword, _ = prepare_irbem(TIME, [2, 0, 0], MAGINPUT, coord="GEO")

    assert keyword.sysaxes == ib.IRBEM_SYSAXIS_GEO
    _assert_args_equal(positional, keyword)

    with pytest.raises(TypeError):
        resolve_call(TIME, [2, 0, 0], "GEO", MAGINPUT, coord="GEO")
    with pytest.raises(TypeError):
        resolve_call(ib.FieldModelConfig(), {"Time": TIME, "x1": 600, "x2": 60, "x3": 50}, coord="GEO")
    with pytest.raises(ib.IrbemInputError):
        resolve_call(TIME, ib.GEO(2, 0, 0), coord="GSM")


@pytest.mark.basic
def test_positional_convention_defaults_to_t89():
    args, _ = prepare_irbem(TIME, [600, 60, 50], "GDZ", {"Kp": 40})

    assert args.kext == 4
    assert ib.POSITIONAL_FIELD_MODEL.model_name == "T89"
    assert ib.DEFAULT_FIELD_MODEL.kext == 5


@pytest.mark.basic
def test_model_convention_missing_position_key():
    model = ib.FieldModelConfig()

    with pytest.raises(ib.ShapeMismatch, match="x3"):
        resolve_call(model, {"Time": TIME, "x1": 600, "x2": 60})
