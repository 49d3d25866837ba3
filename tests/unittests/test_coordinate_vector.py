# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

import dataclasses

import numpy as np
import pytest
from astropy import units as u

import irbem_bridge as ib
from irbem_bridge.coordinates import CoordinateSystem, CoordinateVector


@pytest.mark.basic
def test_factory_constructs_typed_vector():
    vector = ib.GDZ(600, 60, 50)

    assert isinstance(vector, CoordinateVector)
    assert vector.system is CoordinateSystem.GDZ
    assert tuple(vector) == (600.0, 60.0, 50.0)
    assert len(vector) == 3
    assert vector[0] == 600.0
    assert vector[1:] == (60.0, 50.0)
    assert repr(vector) == "GDZ(600.0, 60.0, 50.0)"


@pytest.mark.basic
def test_factory_from_sequence():
    vector = ib.GEO([1, 2, 3])
    np.testing.assert_array_equal(vector.to_array(), [1.0, 2.0, 3.0])  # type: ignore[reportAttributeAccessIssue]

    with pytest.raises(TypeError):
        ib.GEO([1, 2])


@pytest.mark.basic
def test_factory_returns_vector_of_own_system():
    vector = ib.GSM(1, 2, 3)
    assert ib.GSM(vector) is vector

    with pytest.raises(TypeError):
        ib.GEO(vector)


@pytest.mark.basic
def test_vector_is_immutable():
    vector = ib.GEO(1, 2, 3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        vector.x1 = 5.0  # type: ignore[reportAttributeAccessIssue]


@pytest.mark.basic
def test_vector_system_from_string():
    vector = CoordinateVector(1, 2, 3, system="sm")  # type: ignore[reportArgumentType]
    assert vector.system is CoordinateSystem.SM

    with pytest.raises(ib.UnknownCoordinateSystem):
        CoordinateVector(1, 2, 3, system="XYZ")  # type: ignore[reportArgumentType]


@pytest.mark.basic
def test_vector_to_quantity():
    alt, lat, lon = ib.GDZ(600, 60, 50).to_quantity()  # type: ignore[reportAttributeAccessIssue]
    assert alt.to_value(u.m) == pytest.approx(600_000)
    assert lat.unit == u.deg
    assert lon.value == 50

    x, _, _ = ib.GEO(2, 0, 0).to_quantity()  # type: ignore[reportAttributeAccessIssue]
    assert x.to_value(u.km) == pytest.approx(2 * 6378.1, rel=1e-3)
