"""
:mod:`oeformat.io` is the entry point to load Open Ephys files.

Functions:

.. autofunction:: oeformat.io.decode

.. autofunction:: oeformat.io.get_decoder

.. autofunction:: oeformat.io.decode_folder

.. autofunction:: oeformat.io.get_number_of_records

Usage::

    import oeformat
    data, timestamps, info = oeformat.decode("100_CH1.continuous")

"""

import logging
import os
import re
import time
from pathlib import Path

from oeformat.rawio import get_decoder_class
from oeformat.rawio.continuousrawio import continuous_record_size, header_block_length
from oeformat.rawio.header import HEADER_SIZE, read_file_header


logger = logging.getLogger(__name__)

_channel_pat = re.compile(r"(?P<type>[A-Za-z]+)(?P<number>\d+)")


def get_decoder(filename, **kwargs):
    """
    Return a decoder instance, guessing the type based on the filename suffix.

    Raises UnsupportedFormatError for an unknown suffix, without opening the file.
    """
    decoder_class = get_decoder_class(filename)
    return decoder_class(filename, **kwargs)


def decode(filename, **kwargs):
    """
    Load a .continuous, .spikes or .events file.

    Parameters
    ----------
    filename: str | Path
        path to file
    **kwargs:
        passed to the decoder class (``block_length``, ``with_recording_number``)

    Returns
    -------
    data:
        continuous samples, spike waveforms (spike, sample, channel) or event channels
    timestamps:
        sample numbers
    info: dict
        header and other information
    """
    return get_decoder(filename, **kwargs).decode()


def _channel_sort_key(filename):
    # "100_CH1.continuous", "100_RhythmData-A_CH1.continuous", "100_CH1_2.continuous"
    for part in filename.stem.split("_"):
        m = _channel_pat.fullmatch(part)
        if m is not None:
            chan_type = m.group("type")
            # CH channels come first
            return (0 if chan_type.upper() == "CH" else 1, chan_type, int(m.group("number")), filename.name)
    return (2, "", 0, filename.name)


def decode_folder(dirname, channels=None, **kwargs):
    """
    Load all continuous files in a folder.

    Parameters
    ----------
    dirname: str | Path
        folder containing the .continuous files
    channels: list of str | None
        keep only these file stems (e.g. ["100_CH1", "100_CH2"]), by default all

    Returns
    -------
    dict: file stem -> (data, timestamps, info), ordered "CH" first then by number
    """
    filenames = [f for f in Path(dirname).glob("*.continuous") if f.is_file()]
    if channels is not None:
        filenames = [f for f in filenames if f.stem in channels]
    filenames.sort(key=_channel_sort_key)

    t0 = time.time()
    results = {}
    for filename in filenames:
        results[filename.stem] = decode(filename, **kwargs)

    if len(filenames) > 0:
        total = time.time() - t0
        logger.info(f"Avg. Load Time: {total / len(filenames):0.3f} sec")
        logger.info(f"Total Load Time: {total:0.3f} sec")
    return results


def get_number_of_records(filename, block_length=None, with_recording_number=False):
    """
    Number of full records a continuous file can hold given its size.

    Corrupted records are not detected here, only the file size is used.
    """
    header = read_file_header(filename)
    if block_length is None:
        block_length = header_block_length(header, logger)
    record_size = continuous_record_size(block_length, with_recording_number)
    file_size = os.stat(filename).st_size
    return max(file_size - HEADER_SIZE, 0) // record_size
