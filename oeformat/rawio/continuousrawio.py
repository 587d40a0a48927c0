"""
Decoder for Open Ephys ``.continuous`` files.

Each record contains one 64-bit timestamp, one 16-bit sample count (N),
optionally one uint16 recordingNumber, N 16-bit samples, and one 10-byte
record marker (0 1 2 3 4 5 6 7 8 255).
Scalars are little-endian, samples are big-endian.

When a record declares a sample count different from the block length the
record boundaries are lost. The decoder then reads byte per byte looking for
the record marker, for at most the length of 5 records. If the marker is found
the next byte starts a fresh record, otherwise decoding stops and all the
records decoded so far are returned.
"""

from collections import deque

import numpy as np

from oeformat.core import CorruptRecord

from .baserawio import BaseDecoder
from .timestamps import interpolate_timestamps


BLOCK_LENGTH = 1024
RECORD_MARKER = np.array([0, 1, 2, 3, 4, 5, 6, 7, 8, 255], dtype="uint8")
MAX_RESYNC_RECORDS = 5

timestamp_dtype = np.dtype("<i8")
nb_sample_dtype = np.dtype("<u2")
recording_number_dtype = np.dtype(">u2")
sample_dtype = np.dtype(">i2")


def continuous_record_size(block_length=BLOCK_LENGTH, with_recording_number=False):
    size = timestamp_dtype.itemsize + nb_sample_dtype.itemsize
    if with_recording_number:
        size += recording_number_dtype.itemsize
    return size + block_length * sample_dtype.itemsize + RECORD_MARKER.size


CONTINUOUS_RECORD_SIZE = continuous_record_size()


def header_block_length(header, logger):
    """
    Number of samples per record declared by the ``blockLength`` header field.

    The header grammar accepts any literal for this field, so a value which is
    not a positive integer (an integral float like 1024.0 is fine) is logged
    as a warning and the default block length of 1024 is used instead.
    """
    value = header.get("blockLength", BLOCK_LENGTH)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        logger.warning(f"Invalid blockLength in header ({value!r}), using {BLOCK_LENGTH}")
        return BLOCK_LENGTH
    return value

# decoder states
READING_RECORD = "ReadingRecord"
RESYNCING = "Resyncing"
STOPPED = "Stopped"


class ContinuousDecoder(BaseDecoder):
    """
    Class for reading one ``.continuous`` file (one channel).

    Parameters
    ----------
    filename: str | Path
        The .continuous file.
    block_length: int | None
        Expected number of samples per record. When None the ``blockLength``
        field of the header is used, or 1024 when it is missing.
    with_recording_number: bool
        Files written by recent GUI versions store a big-endian uint16
        recording number after the sample count. Default False.

    Returns of ``decode()``
    -----------------------
    data: int16 array of all samples
    timestamps: masked float64 array, one per sample, last block masked
    info: dict with "header", "block_timestamps", "block_sample_counts",
        "recording_number", "diagnostics"
    """

    extensions = ["continuous"]

    def __init__(self, filename="", block_length=None, with_recording_number=False):
        BaseDecoder.__init__(self, filename)
        self.block_length = block_length
        self.with_recording_number = with_recording_number

    def _get_block_length(self, header):
        if self.block_length is not None:
            return int(self.block_length)
        return header_block_length(header, self.logger)

    def _decode_records(self, cursor, header, info):
        block_length = self._get_block_length(header)
        record_size = continuous_record_size(block_length, self.with_recording_number)
        marker = bytes(RECORD_MARKER)

        samples = []
        block_timestamps = []
        block_sample_counts = []
        recording_numbers = []

        state = READING_RECORD
        block_index = 0
        corrupted_at = None
        while state != STOPPED:
            if state == READING_RECORD:
                if cursor.remaining() < record_size:
                    state = STOPPED
                    continue
                record_offset = cursor.tell()
                timestamp = cursor.read_scalar(timestamp_dtype)
                nb_sample = cursor.read_scalar(nb_sample_dtype)
                if nb_sample != block_length:
                    self.logger.info(
                        f"Found corrupted record at block {block_index} ({nb_sample} samples), "
                        "searching for record marker"
                    )
                    corrupted_at = (block_index, record_offset, nb_sample)
                    state = RESYNCING
                    continue
                if self.with_recording_number:
                    recording_numbers.append(cursor.read_scalar(recording_number_dtype))
                samples.append(cursor.read_array(sample_dtype, nb_sample))
                # record marker is read and discarded
                cursor.skip(RECORD_MARKER.size)
                block_timestamps.append(timestamp)
                block_sample_counts.append(nb_sample)
                block_index += 1

            elif state == RESYNCING:
                nb_byte = self._search_record_marker(cursor, marker, MAX_RESYNC_RECORDS * record_size)
                self._record_diagnostic(info, CorruptRecord(*corrupted_at, recovered=nb_byte is not None))
                if nb_byte is None:
                    state = STOPPED
                else:
                    self.logger.info(f"Found a record marker after {nb_byte} bytes")
                    state = READING_RECORD
                corrupted_at = None

        if len(samples) > 0:
            data = np.concatenate(samples).astype("int16")
        else:
            data = np.array([], dtype="int16")

        info["block_timestamps"] = np.array(block_timestamps, dtype="int64")
        info["block_sample_counts"] = np.array(block_sample_counts, dtype="int64")
        if self.with_recording_number:
            info["recording_number"] = np.array(recording_numbers, dtype="uint16")

        timestamps = interpolate_timestamps(info["block_timestamps"], info["block_sample_counts"])
        return data, timestamps

    @staticmethod
    def _search_record_marker(cursor, marker, max_bytes):
        """
        Read byte per byte until the last bytes read are the record marker.

        Return the number of bytes read, or None when the marker was not found
        within max_bytes or before the end of the file.
        """
        last_bytes = deque(maxlen=len(marker))
        for nb_byte in range(1, max_bytes + 1):
            if cursor.remaining() == 0:
                return None
            byte = cursor.read(1)[0]
            last_bytes.append(byte)
            if byte == marker[-1] and bytes(last_bytes) == marker:
                return nb_byte
        return None
