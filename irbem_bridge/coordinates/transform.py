# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from irbem_bridge.coordinates.coord_systems import (
    SYSAXES_STR_TO_INT,
    CoordinateSystem,
    name_of,
    parse_transform_spec,
    system_of,
)
from irbem_bridge.coordinates.coordinate_vector import CoordinateVector
from irbem_bridge.errors import BatchTooLarge, IrbemInputError, TimeBatchMismatch, UnparsableTransformSpec
from irbem_bridge.library import IrbemLibrary, default_library
from irbem_bridge.position import NormalizedPosition, PositionInput, normalize_position
from irbem_bridge.time_decomposition import TimeArrays, TimeInput, decompose_times

logger = logging.getLogger(__name__)


def _is_single_system(value: object) -> bool:
    if isinstance(value, (CoordinateSystem, CoordinateFactory)):
        return True
    return isinstance(value, str) and value.upper() in SYSAXES_STR_TO_INT


def _resolve_systems(
    typed_system: CoordinateSystem | None,
    systems: tuple[Any, ...],
) -> tuple[CoordinateSystem, CoordinateSystem]:
    if len(systems) == 2:  # noqa: PLR2004
        src, dst = system_of(systems[0]), system_of(systems[1])
    elif len(systems) == 1 and typed_system is not None and _is_single_system(systems[0]):
        src, dst = typed_system, system_of(systems[0])
    elif len(systems) == 1:
        src, dst = parse_transform_spec(systems[0])
    else:
        msg = f"Expected a source and a destination coordinate system, got {systems!r}!"
        raise UnparsableTransformSpec(msg)

    if typed_system is not None and src is not typed_system:
        msg = f"Source system {src.value} does not match the system of the typed position {typed_system.value}!"
        raise IrbemInputError(msg)

    return src, dst


def _check_time_batch(times: TimeArrays, position: NormalizedPosition) -> int:
    if position.is_scalar:
        if times.ntime != 1:
            msg = f"A single position must be paired with exactly one time, got {times.ntime} times!"
            raise TimeBatchMismatch(msg)
        return 1

    npos = position.npos
    if times.is_scalar and npos != 1:
        msg = f"Got a single time for {npos} positions. Pass a sequence of times of length 1 or {npos}!"
        raise TimeBatchMismatch(msg)
    if times.ntime not in (1, npos):
        msg = f"Time dimension mismatch: {times.ntime} times for {npos} positions!"
        raise TimeBatchMismatch(msg)
    return npos


def _is_typed(pos: object) -> bool:
    if isinstance(pos, CoordinateVector):
        return True
    return (
        isinstance(pos, Sequence)
        and len(pos) > 0
        and all(isinstance(p, CoordinateVector) for p in pos)
    )


def transform(
    time: TimeInput,
    pos: PositionInput,
    *systems: Any,  # noqa: ANN401
    lib: IrbemLibrary | None = None,
) -> NDArray[np.float64] | CoordinateVector | list[CoordinateVector]:
    """Transforms positions from one coordinate system to another.

    The coordinate systems can be given as two arguments ('GEO', 'GSM'), as one pair
    (('GEO', 'GSM')) or as one string ('geo2gsm', 'geo_to_gsm'). For typed positions the source
    system is the system of the position and it is sufficient to pass the destination.

    A single position (3 components or a typed vector) must be paired with a single time. N
    positions ((3, N) array, sequence of N 3-vectors or typed vectors) must be paired with a
    sequence of 1 or N times.

    Args:
        time (TimeInput): Time or sequence of times.
        pos (PositionInput): The position(s) to transform.
        *systems: The source and destination coordinate systems.
        lib (IrbemLibrary | None): The IRBEM library, the process-wide one if None.

    Returns:
        The transformed position(s) in the layout of the input: an array of shape (3,) for a
        single point, (3, N) for N points, and typed vectors for typed input.

    Raises:
        TimeBatchMismatch: If times and positions do not pair up.
        UnparsableTransformSpec: If the coordinate systems cannot be parsed.
    """
    typed = _is_typed(pos)
    position = normalize_position(pos)
    typed_system = name_of(position.sysaxes) if position.sysaxes is not None else None

    sys_in, sys_out = _resolve_systems(typed_system, systems)

    times = decompose_times(time)
    ntime = _check_time_batch(times, position)

    if typed and sys_in is sys_out:
        # identical systems, the typed input is returned as is
        return pos  # type: ignore[reportReturnType]

    pos_in = position.repeat(ntime).stacked()

    if sys_in is sys_out:
        pos_out = pos_in.copy()
    else:
        if lib is None:
            lib = default_library()
        if ntime > lib.ntime_max:
            msg = f"Input array length {ntime} is longer than IRBEM's NTIME_MAX = {lib.ntime_max}. Use a for loop."
            raise BatchTooLarge(msg)

        times = times.repeat(ntime)
        pos_out = np.zeros((3, ntime), dtype=np.float64, order="F")

        lib.call(
            "coord_trans_vec1_",
            ntime,
            sys_in.sysaxes(),
            sys_out.sysaxes(),
            times.iyear,
            times.idoy,
            times.ut,
            pos_in,
            pos_out,
        )

    if typed:
        vectors = [CoordinateVector(*pos_out[:, it], system=sys_out) for it in range(ntime)]
        return vectors[0] if isinstance(pos, CoordinateVector) else vectors

    return pos_out[:, 0].copy() if position.is_scalar else pos_out


class CoordinateFactory:
    """Constructor and converter for typed vectors of one coordinate system.

    ``GEO(x, y, z)`` creates a vector in GEO, ``GSM(time, vector)`` converts a typed vector to GSM.
    Converting a vector to its own coordinate system returns the vector unchanged without calling
    IRBEM-LIB.
    """

    def __init__(self, system: CoordinateSystem) -> None:
        self.system = system

    def __call__(self, *args: Any, lib: IrbemLibrary | None = None) -> CoordinateVector | list[CoordinateVector]:  # noqa: ANN401
        if len(args) == 3:  # noqa: PLR2004
            return CoordinateVector(*args, system=self.system)

        if len(args) == 1:
            if isinstance(args[0], CoordinateVector):
                if args[0].system is not self.system:
                    msg = f"Pass a time to convert a {args[0].system.value} vector to {self.system.value}!"
                    raise TypeError(msg)
                return args[0]
            components = np.asarray(args[0], dtype=np.float64)
            if components.shape != (3,):
                msg = f"Expected 3 components, got shape {components.shape}!"
                raise TypeError(msg)
            return CoordinateVector(*components, system=self.system)

        if len(args) == 2:  # noqa: PLR2004
            time, vector = args
            return transform(time, vector, self.system, lib=lib)  # type: ignore[reportReturnType]

        msg = f"{self.system.value}() takes 3 components, a 3-element sequence or a time and a typed vector."
        raise TypeError(msg)

    def __repr__(self) -> str:
        return f"CoordinateFactory({self.system.value})"


GDZ = CoordinateFactory(CoordinateSystem.GDZ)
GEO = CoordinateFactory(CoordinateSystem.GEO)
GSM = CoordinateFactory(CoordinateSystem.GSM)
GSE = CoordinateFactory(CoordinateSystem.GSE)
SM = CoordinateFactory(CoordinateSystem.SM)
GEI = CoordinateFactory(CoordinateSystem.GEI)
MAG = CoordinateFactory(CoordinateSystem.MAG)
SPH = CoordinateFactory(CoordinateSystem.SPH)
RLL = CoordinateFactory(CoordinateSystem.RLL)
