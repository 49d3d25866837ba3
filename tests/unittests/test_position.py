# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

import numpy as np
import pytest

import irbem_bridge as ib
from irbem_bridge.position import normalize_position


@pytest.mark.basic
@pytest.mark.parametrize(
    "position",
    [
        [600, 60, 50],
        (600.0, 60.0, 50.0),
        np.array([600, 60, 50]),
        {"x1": 600, "x2": 60, "x3": 50},
    ],
)
def test_single_point(position: object):
    normalized = normalize_position(position)  # type: ignore[reportArgumentType]

    assert normalized.is_scalar
    assert normalized.npos == 1
    assert normalized.sysaxes is None
    np.testing.assert_array_equal(normalized.stacked(), [[600], [60], [50]])


@pytest.mark.basic
def test_matrix_rows_are_axes():
    matrix = np.array([[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0], [9.0, 10.0, 11.0, 12.0]])
    normalized = normalize_position(matrix)

    assert not normalized.is_scalar
    assert normalized.npos == 4
    np.testing.assert_array_equal(normalized.x1, [1, 2, 3, 4])
    np.testing.assert_array_equal(normalized.x3, [9, 10, 11, 12])
    assert normalized.stacked().flags.f_contiguous


@pytest.mark.basic
def test_matrix_axes_are_not_copied():
    matrix = np.arange(12, dtype=np.float64).reshape(3, 4)
    normalized = normalize_position(matrix)
    assert np.shares_memory(normalized.x2, matrix)


@pytest.mark.basic
def test_array_of_vectors():
    normalized = normalize_position([[1, 2, 3], [4, 5, 6]])

    assert normalized.npos == 2
    np.testing.assert_array_equal(normalized.x1, [1, 4])
    np.testing.assert_array_equal(normalized.x2, [2, 5])


@pytest.mark.basic
def test_single_column_matrix_is_not_scalar():
    normalized = normalize_position(np.array([[1.0], [2.0], [3.0]]))
    assert not normalized.is_scalar
    assert normalized.npos == 1


@pytest.mark.basic
def test_mapping_with_arrays_and_broadcast():
    normalized = normalize_position({"x1": [600, 700, 800], "x2": 60, "x3": [50]})

    assert not normalized.is_scalar
    np.testing.assert_array_equal(normalized.x2, [60, 60, 60])
    np.testing.assert_array_equal(normalized.x3, [50, 50, 50])


@pytest.mark.basic
def test_typed_positions():
    normalized = normalize_position(ib.GSM(1, 2, 3))
    assert normalized.is_scalar
    assert normalized.sysaxes == ib.IRBEM_SYSAXIS_GSM

    batch = normalize_position([ib.GEO(1, 0, 0), ib.GEO(0, 1, 0)])
    assert not batch.is_scalar
    assert batch.sysaxes == ib.IRBEM_SYSAXIS_GEO
    np.testing.assert_array_equal(batch.x2, [0, 1])


@pytest.mark.basic
@pytest.mark.parametrize(
    "position",
    [
        [1, 2],
        [1, 2, 3, 4],
        np.zeros((2, 5)),
        np.zeros((3, 2, 2)),
        [[1, 2, 3], [4, 5]],
        {"x1": 1, "x2": 2},
        {"x1": [1, 2], "x2": [1, 2, 3], "x3": 1},
        [ib.GEO(1, 0, 0), ib.GSM(1, 0, 0)],
        "GEO",
    ],
)
def test_shape_mismatch(position: object):
    with pytest.raises(ib.ShapeMismatch):
        normalize_position(position)  # type: ignore[reportArgumentType]


@pytest.mark.basic
def test_repeat():
    normalized = normalize_position([1, 2, 3]).repeat(4)
    assert normalized.npos == 4
    np.testing.assert_array_equal(normalized.x3, [3, 3, 3, 3])


@pytest.mark.basic
def test_representations_of_same_points_agree():
    matrix = normalize_position(np.array([[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]]))
    vectors = normalize_position([[1, 2, 3], [4, 5, 6]])
    typed = normalize_position([ib.GEO(1, 2, 3), ib.GEO(4, 5, 6)])
    mapping = normalize_position({"x1": [1, 4], "x2": [2, 5], "x3": [3, 6]})

    for other in (vectors, typed, mapping):
        np.testing.assert_array_equal(other.stacked(), matrix.stacked())
