# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Preparation of the ordered argument tuple of the IRBEM-LIB routines.

Two calling conventions are supported and produce identical arguments for equivalent inputs:

* ``prepare_irbem(model, X, maginput)`` with a `FieldModelConfig` and a dictionary holding
  'dateTime' (or 'Time') and 'x1', 'x2', 'x3' in the coordinate system of the model.
* ``prepare_irbem(time, x, coord="GDZ", maginput, kext="T89", options=...)`` with the time and
  position given separately. `coord` is passed positionally or as keyword and can be left out,
  in which case a maginput mapping may directly follow the position. If `x` is a typed
  `CoordinateVector`, its coordinate system is used: ``prepare_irbem(time, vector, maginput)``.
  The field model defaults to T89 (`POSITIONAL_FIELD_MODEL`).

The calling convention is resolved once into a `CallRequest`; everything downstream works on the
normalized representation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray

from irbem_bridge.coordinates.coord_systems import code_of
from irbem_bridge.errors import BatchLengthMismatch, BatchTooLarge, IrbemInputError, UnsupportedBatch
from irbem_bridge.field_model import POSITIONAL_FIELD_MODEL, FieldModelConfig, MagneticField, parse_kext, parse_options
from irbem_bridge.maginput import assemble_maginput, to_native_maginput
from irbem_bridge.position import NormalizedPosition, PositionInput, normalize_position
from irbem_bridge.time_decomposition import TimeArrays, TimeInput, decompose_times, get_datetime

logger = logging.getLogger(__name__)


class BatchShape(NamedTuple):
    """Number of entries of a call and whether the caller passed a single entry.

    Attributes:
        ntime (int): Number of (time, position) entries passed to IRBEM-LIB.
        is_scalar (bool): True if both time and position were single values and not arrays. Outputs
            of such calls are collapsed to scalars and plain vectors.
    """

    ntime: int
    is_scalar: bool


class IrbemArgs(NamedTuple):
    """The arguments shared by the IRBEM-LIB routines, in the order of their Fortran signatures."""

    ntime: int
    kext: int
    options: NDArray[np.int32]
    sysaxes: int
    iyear: NDArray[np.int32]
    idoy: NDArray[np.int32]
    ut: NDArray[np.float64]
    x1: NDArray[np.float64]
    x2: NDArray[np.float64]
    x3: NDArray[np.float64]
    maginput: NDArray[np.float64]

    def single_point(self, *extra: Any) -> tuple[Any, ...]:  # noqa: ANN401
        """Returns the arguments of the single-point routines, which take no ntime.

        Routine specific scalars such as the pitch angle are placed in `extra` and passed
        between the position and maginput.
        """
        return (*tuple(self)[1:-1], *extra, self.maginput)


class PreparedCall(NamedTuple):
    args: IrbemArgs
    batch: BatchShape


@dataclass(frozen=True)
class CallRequest:
    """A call resolved from one of the calling conventions.

    Attributes:
        time (TimeInput): The time(s) as passed by the caller.
        position (NormalizedPosition): The normalized position(s).
        config (FieldModelConfig): Field model, option flags and coordinate system of the position.
        maginput (Mapping | None): The driver parameters as passed by the caller.
    """

    time: TimeInput
    position: NormalizedPosition
    config: FieldModelConfig
    maginput: Mapping[Any, Any] | None = None


def _is_maginput(value: object) -> bool:
    return value is None or isinstance(value, Mapping)


def resolve_call(
    arg1: FieldModelConfig | TimeInput,
    arg2: Mapping[str, Any] | PositionInput,
    *args: Any,  # noqa: ANN401
    coord: object = None,
    maginput: Mapping[Any, Any] | None = None,
    kext: int | str | MagneticField | None = None,
    options: Sequence[int] | None = None,
) -> CallRequest:
    """Resolves the calling convention of a routine call into a `CallRequest`.

    Raises:
        TypeError: If the arguments do not match any calling convention.
    """
    rest = list(args)

    if isinstance(arg1, FieldModelConfig):
        if kext is not None or options is not None or coord is not None:
            msg = "kext, options and coord are taken from the FieldModelConfig and cannot be passed separately!"
            raise TypeError(msg)
        if not isinstance(arg2, Mapping):
            msg = f"Expected a dictionary with time and position when passing a FieldModelConfig, got {type(arg2)}!"
            raise TypeError(msg)
        x_dict: Mapping[str, Any] = arg2  # type: ignore[reportAssignmentType]
        time = get_datetime(x_dict)
        position = normalize_position({key: x_dict[key] for key in ("x1", "x2", "x3") if key in x_dict})  # type: ignore[reportArgumentType]
        config = arg1
    else:
        time = arg1
        position = normalize_position(arg2)  # type: ignore[reportArgumentType]

        if rest and not _is_maginput(rest[0]):
            if coord is not None:
                msg = "coord was passed both as positional and as keyword argument!"
                raise TypeError(msg)
            coord = rest.pop(0)

        if position.sysaxes is not None:
            if coord is not None and code_of(coord) != position.sysaxes:
                msg = f"Coordinate system {coord!r} does not match the coordinate system of the typed position!"
                raise IrbemInputError(msg)
            sysaxes = position.sysaxes
        else:
            sysaxes = code_of("GDZ" if coord is None else coord)

        config = FieldModelConfig(
            kext=POSITIONAL_FIELD_MODEL.kext if kext is None else parse_kext(kext),
            options=parse_options(options) if options is not None else POSITIONAL_FIELD_MODEL.options,
            sysaxes=sysaxes,
        )

    if rest:
        if maginput is not None:
            msg = "maginput was passed both as positional and as keyword argument!"
            raise TypeError(msg)
        maginput = rest.pop(0)
    if rest:
        msg = f"Too many positional arguments: {rest}"
        raise TypeError(msg)
    if not _is_maginput(maginput):
        msg = f"maginput must be a mapping of driver parameters, got {type(maginput)}!"
        raise TypeError(msg)

    return CallRequest(time=time, position=position, config=config, maginput=maginput)


def resolve_batch_shape(times: TimeArrays, position: NormalizedPosition) -> BatchShape:
    """Derives the batch size from the time and position inputs.

    A time or position of length one is broadcast over the other input.

    Raises:
        BatchLengthMismatch: If both have more than one entry and the lengths differ, or if one of
            them is empty.
    """
    ntime, npos = times.ntime, position.npos

    if ntime == 0 or npos == 0:
        msg = f"Encountered empty input: {ntime} times, {npos} positions!"
        raise BatchLengthMismatch(msg)

    if ntime != npos and 1 not in (ntime, npos):
        msg = f"Encountered size mismatch: {ntime} times but {npos} positions!"
        raise BatchLengthMismatch(msg)

    return BatchShape(ntime=max(ntime, npos), is_scalar=times.is_scalar and position.is_scalar)


def prepare_request(request: CallRequest, ntime_max: int | None = None) -> PreparedCall:
    """Builds the IRBEM-LIB arguments of a resolved call.

    Args:
        request (CallRequest): The resolved call.
        ntime_max (int | None): Maximum batch length supported by the loaded library.

    Raises:
        BatchLengthMismatch: If time and position lengths disagree.
        BatchTooLarge: If the batch is longer than `ntime_max`.
    """
    logger.debug("Prepping time and space input variables")

    times = decompose_times(request.time)
    batch = resolve_batch_shape(times, request.position)

    if ntime_max is not None and batch.ntime > ntime_max:
        msg = (
            f"Input array length {batch.ntime} is longer "
            f"than IRBEM's NTIME_MAX = {ntime_max}. "
            f"Use a for loop."
        )
        raise BatchTooLarge(msg)

    times = times.repeat(batch.ntime)
    position = request.position.repeat(batch.ntime)

    maginput = assemble_maginput(request.maginput, request.config.kext)

    logger.debug("Done prepping time and space input variables")

    args = IrbemArgs(
        ntime=batch.ntime,
        kext=request.config.kext,
        options=request.config.options_array(),
        sysaxes=request.config.sysaxes,
        iyear=times.iyear,
        idoy=times.idoy,
        ut=times.ut,
        x1=position.x1,
        x2=position.x2,
        x3=position.x3,
        maginput=to_native_maginput(maginput, batch.ntime),
    )
    return PreparedCall(args=args, batch=batch)


def prepare_irbem(*args: Any, ntime_max: int | None = None, **kwargs: Any) -> PreparedCall:  # noqa: ANN401
    """Resolves the calling convention and builds the IRBEM-LIB arguments in one step.

    See the module documentation for the accepted calling conventions.
    """
    return prepare_request(resolve_call(*args, **kwargs), ntime_max)


def require_single_point(batch: BatchShape, routine: str) -> None:
    """Rejects batches for routines which handle a single (time, position) entry only.

    Raises:
        UnsupportedBatch: If the batch holds more than one entry.
    """
    if batch.ntime > 1:
        msg = f"{routine} supports a single time and position only, got {batch.ntime} entries. Use a for loop."
        raise UnsupportedBatch(msg)
