# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import timeit
from collections.abc import Callable
from datetime import datetime, timezone
from functools import wraps
from typing import ParamSpec, TypeVar

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def timed_function(func_name: str | None = None) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """A decorator that logs the execution time of a function.

    This decorator measures the time it takes for a decorated function to execute
    and logs the result to a logger at the INFO level. The log message can be
    prefixed with an optional function name.

    Parameters:
        func_name (str | None): An optional name to use in the log message. If `None`,
                                a generic message is used.

    Returns:
        Callable: A decorator that wraps the target function with timing logic.
    """
    def timed_function_(f: Callable[P, R]) -> Callable[P, R]:
        @wraps(f)
        def wrap(*args: P.args, **kwargs: P.kwargs) -> R:
            tic = timeit.default_timer()
            result = f(*args, **kwargs)
            toc = timeit.default_timer()
            if func_name:
                logger.info(f"\t\t{func_name} finished in {toc-tic:0.3f} seconds")
            else:
                logger.info(f"\t\tFinished in {toc-tic:0.3f} seconds")

            return result
        return wrap
    return timed_function_


def enforce_utc_timezone(time: datetime) -> datetime:
    """Ensures a datetime object is expressed in UTC.

    Naive datetime objects are assigned the UTC timezone. Timezone-aware objects are
    converted to UTC, so that the wall-clock fields (hour, minute, ...) refer to UTC.

    Parameters:
        time (datetime): The datetime object to process.

    Returns:
        datetime: The datetime object in `timezone.utc`.
    """
    if time.tzinfo is None:
        return time.replace(tzinfo=timezone.utc)
    return time.astimezone(timezone.utc)
