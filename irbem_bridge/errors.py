# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised while preparing arguments for IRBEM-LIB.

All of them are raised before the shared library is called. None of them is
retried.
"""


class IrbemInputError(ValueError):
    """Base class for malformed inputs to an IRBEM-LIB routine."""


class UnknownCoordinateSystem(IrbemInputError):
    """The coordinate system name, tag or code is not in the IRBEM catalog."""


class UnknownFieldModel(IrbemInputError):
    """The external magnetic field model is not in the IRBEM catalog."""


class InvalidTimeFormat(IrbemInputError):
    """A timestamp could not be parsed."""


class ShapeMismatch(IrbemInputError):
    """A position input does not have three components per point."""


class BatchLengthMismatch(IrbemInputError):
    """Time and position batches have different lengths and neither has length one."""


class TimeBatchMismatch(BatchLengthMismatch, AssertionError):
    """Time and position batches of a coordinate transformation do not pair up."""


class UnsupportedBatch(IrbemInputError):
    """More than one entry was passed to a single-point routine."""


class UnparsableTransformSpec(IrbemInputError):
    """A coordinate transformation string such as 'geo2gsm' could not be parsed."""


class BatchTooLarge(IrbemInputError):
    """The batch is longer than IRBEM's NTIME_MAX."""
