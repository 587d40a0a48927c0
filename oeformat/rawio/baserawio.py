"""
baserawio
=========

Classes
-------

BaseDecoder
abstract class which should be overridden to write a decoder for one of the
Open Ephys file variants.

A decoder is built with a filename and decodes the whole file on ``decode()``.
The result is a tuple ``(data, timestamps, info)``:
  * data: numpy array with the primary content of the records
  * timestamps: numpy array parallel to data
  * info: dict with at least the parsed ``header`` and the ``diagnostics``
    list where recoverable corruption is recorded

Each call of ``decode()`` opens the file, reads it from the start and closes it
whatever happens, so a decoder does not hold any state between calls.
"""

from __future__ import annotations

import logging
from pathlib import Path

from packaging.version import Version, InvalidVersion

from oeformat import logging_handler

from .bytecursor import ByteCursor
from .header import read_header


# records layout of .spikes and .events files changed before this version
MIN_FORMAT_VERSION = Version("0.4")


class BaseDecoder:
    """
    Generic class to handle one Open Ephys file.

    """

    extensions = []

    def __init__(self, filename: str | Path = ""):
        # create a logger for the decoder class
        fullname = self.__class__.__module__ + "." + self.__class__.__name__
        self.logger = logging.getLogger(fullname)
        # Create a logger for 'oeformat' and add a handler to it if it doesn't have one already.
        # (it will also not add one if the root logger has a handler)
        corename = self.__class__.__module__.split(".")[0]
        corelogger = logging.getLogger(corename)
        rootlogger = logging.getLogger()
        if not corelogger.handlers and not rootlogger.handlers:
            corelogger.addHandler(logging_handler)

        self.filename = Path(filename)

    def source_name(self):
        return str(self.filename)

    def __repr__(self):
        return f"{self.__class__.__name__}: {self.source_name()}"

    def decode(self):
        """
        Decode the file.

        Returns
        -------
        data, timestamps, info
        """
        self.logger.info(f"Loading {self.source_name()}")
        with open(self.filename, mode="rb") as fid:
            cursor = ByteCursor(fid)
            header = read_header(cursor)
            self._check_version(header)
            info = {"header": header, "diagnostics": []}
            data, timestamps = self._decode_records(cursor, header, info)
        return data, timestamps, info

    def _decode_records(self, cursor, header, info):
        raise NotImplementedError

    def _check_version(self, header):
        # best effort: an old or odd version is reported but never rejected
        if "version" not in header:
            return
        try:
            version = Version(str(header["version"]))
        except InvalidVersion:
            self.logger.warning(f"Unknown format version {header['version']!r} in {self.source_name()}")
            return
        if version < MIN_FORMAT_VERSION:
            self.logger.warning(
                f"{self.source_name()} has format version {version}, "
                f"records written before {MIN_FORMAT_VERSION} may be decoded wrongly"
            )

    def _record_diagnostic(self, info, error):
        self.logger.warning(str(error))
        info["diagnostics"].append(error)
