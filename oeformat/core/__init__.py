"""
:mod:`oeformat.core` holds the error classes shared by all decoders.

Classes:

.. autoclass:: OEFormatError
.. autoclass:: UnsupportedFormatError
.. autoclass:: HeaderFormatError
.. autoclass:: UnexpectedEof
.. autoclass:: CorruptRecord
.. autoclass:: InvalidSpikeSampleCount
.. autoclass:: SpikeShapeMismatch
"""

from oeformat.core.errors import (
    OEFormatError,
    UnsupportedFormatError,
    HeaderFormatError,
    UnexpectedEof,
    CorruptRecord,
    InvalidSpikeSampleCount,
    SpikeShapeMismatch,
)

__all__ = [
    "OEFormatError",
    "UnsupportedFormatError",
    "HeaderFormatError",
    "UnexpectedEof",
    "CorruptRecord",
    "InvalidSpikeSampleCount",
    "SpikeShapeMismatch",
]
