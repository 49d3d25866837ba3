# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Conversion of timestamps into the year, day-of-year and seconds-of-day fields of IRBEM-LIB."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, TypeAlias, overload

import dateutil.parser
import numpy as np
import pandas as pd
from numpy.typing import NDArray

from irbem_bridge.errors import InvalidTimeFormat
from irbem_bridge.utils import enforce_utc_timezone

logger = logging.getLogger(__name__)

TimeScalar: TypeAlias = datetime | date | str | pd.Timestamp | np.datetime64
TimeInput: TypeAlias = TimeScalar | Sequence[TimeScalar] | NDArray[Any] | pd.DatetimeIndex | pd.Series

SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


@dataclass(frozen=True)
class TimeArrays:
    """Parallel time arrays in the layout IRBEM-LIB expects.

    Attributes:
        iyear (NDArray[np.int32]): Year of each entry.
        idoy (NDArray[np.int32]): Day of year of each entry (1 = January 1st).
        ut (NDArray[np.float64]): Seconds of day of each entry, including fractions of a second.
        is_scalar (bool): True if the input was a single timestamp and not a sequence.
    """

    iyear: NDArray[np.int32]
    idoy: NDArray[np.int32]
    ut: NDArray[np.float64]
    is_scalar: bool

    @property
    def ntime(self) -> int:
        return len(self.iyear)

    def repeat(self, ntime: int) -> TimeArrays:
        """Broadcasts a single entry to `ntime` entries."""
        if self.ntime == ntime:
            return self
        return TimeArrays(
            iyear=np.repeat(self.iyear, ntime),
            idoy=np.repeat(self.idoy, ntime),
            ut=np.repeat(self.ut, ntime),
            is_scalar=self.is_scalar,
        )


def is_time_sequence(time: object) -> bool:
    """Returns True if `time` holds several timestamps rather than one."""
    if isinstance(time, (str, bytes, datetime, date, np.datetime64)):
        return False
    if isinstance(time, np.ndarray):
        return time.ndim > 0
    return isinstance(time, (Sequence, pd.Index, pd.Series))


def to_datetime(time: TimeScalar) -> datetime:
    """Converts a single timestamp into a UTC datetime object.

    Strings are parsed with `dateutil`. Naive timestamps are taken as UTC, aware ones
    are converted to UTC.

    Raises:
        InvalidTimeFormat: If a string cannot be parsed or the type is not supported.
    """
    if isinstance(time, np.ndarray) and time.ndim == 0:
        time = time[()]

    if time is pd.NaT:
        msg = "Encountered NaT where a timestamp was expected!"
        raise InvalidTimeFormat(msg)

    if isinstance(time, pd.Timestamp):
        time_dt = time.to_pydatetime()
    elif isinstance(time, datetime):
        time_dt = time
    elif isinstance(time, date):
        time_dt = datetime(time.year, time.month, time.day)
    elif isinstance(time, np.datetime64):
        if np.isnat(time):
            msg = "Encountered NaT where a timestamp was expected!"
            raise InvalidTimeFormat(msg)
        time_dt = pd.Timestamp(time).to_pydatetime()
    elif isinstance(time, str):
        try:
            time_dt = dateutil.parser.parse(time)
        except (dateutil.parser.ParserError, ValueError, OverflowError) as err:
            msg = f"Could not parse time string {time!r}!"
            raise InvalidTimeFormat(msg) from err
    else:
        msg = f"Unsupported time type {type(time).__name__}: {time!r}"
        raise InvalidTimeFormat(msg)

    return enforce_utc_timezone(time_dt)


def to_datetimes(time: TimeInput) -> list[datetime]:
    """Converts a timestamp or a sequence of timestamps into a list of UTC datetime objects."""
    if is_time_sequence(time):
        return [to_datetime(t) for t in time]  # type: ignore[reportGeneralTypeIssues]
    return [to_datetime(time)]  # type: ignore[reportArgumentType]


def _decompose(time_dt: datetime) -> tuple[int, int, float]:
    ut = (
        SECONDS_PER_HOUR * time_dt.hour
        + SECONDS_PER_MINUTE * time_dt.minute
        + time_dt.second
        + time_dt.microsecond / 1e6
    )
    return time_dt.year, time_dt.timetuple().tm_yday, float(ut)


@overload
def decompose_time(time: TimeScalar) -> tuple[int, int, float]: ...


@overload
def decompose_time(
    time: Sequence[TimeScalar] | NDArray[Any] | pd.DatetimeIndex | pd.Series,
) -> tuple[NDArray[np.int32], NDArray[np.int32], NDArray[np.float64]]: ...


def decompose_time(
    time: TimeInput,
) -> tuple[int, int, float] | tuple[NDArray[np.int32], NDArray[np.int32], NDArray[np.float64]]:
    """Splits a time into year, day of year and seconds of day.

    Args:
        time (TimeInput): A single timestamp (datetime, pandas Timestamp, numpy datetime64 or an
            ISO-8601-like string) or a sequence of those.

    Returns:
        For a single timestamp a tuple (year, day_of_year, seconds_of_day); for a sequence a tuple
        of three parallel arrays.
    """
    if not is_time_sequence(time):
        return _decompose(to_datetime(time))  # type: ignore[reportArgumentType]

    arrays = decompose_times(time)
    return arrays.iyear, arrays.idoy, arrays.ut


def decompose_times(time: TimeInput) -> TimeArrays:
    """Splits a time or a sequence of times into the parallel arrays passed to IRBEM-LIB."""
    is_scalar = not is_time_sequence(time)
    time_dt = to_datetimes(time)

    iyear = np.empty(len(time_dt), dtype=np.int32)
    idoy = np.empty(len(time_dt), dtype=np.int32)
    ut = np.empty(len(time_dt), dtype=np.float64)

    for it, t in enumerate(time_dt):
        iyear[it], idoy[it], ut[it] = _decompose(t)

    return TimeArrays(iyear=iyear, idoy=idoy, ut=ut, is_scalar=is_scalar)


def get_datetime(x_dict: Mapping[str, Any]) -> TimeInput:
    """Extracts the time information from a dictionary input.

    The keys 'dateTime' and 'Time' are supported, in this order.

    Raises:
        InvalidTimeFormat: If neither key is present.
    """
    for key in ("dateTime", "Time"):
        if key in x_dict:
            return x_dict[key]

    msg = "No date/time information found in input dictionary. Expected 'dateTime' or 'Time' key."
    raise InvalidTimeFormat(msg)
