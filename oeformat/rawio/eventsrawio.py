"""
Decoder for Open Ephys ``.events`` files.

Records have a fixed width so they are all read at once with a structured
dtype. A truncated record at the end of the file is ignored.
"""

import numpy as np

from .baserawio import BaseDecoder


events_dtype = [
    ("timestamp", "<i8"),
    ("sample_number", "<i2"),
    ("event_type", "u1"),
    ("node_id", "u1"),
    ("event_id", "u1"),
    ("channel", "u1"),
]

# written by GUI versions storing the recording number
events_with_recording_number_dtype = events_dtype + [("recording_number", "<u2")]


class EventDecoder(BaseDecoder):
    """
    Class for reading one ``.events`` file.

    Parameters
    ----------
    filename: str | Path
        The .events file.
    with_recording_number: bool
        Whether each record ends with a uint16 recording number. Default False.

    ``decode()`` returns:
        * data: uint8 array, the event channel of each event
        * timestamps: int64 array
        * info: dict with "header", "sample_number", "event_type", "node_id",
          "event_id" (and "recording_number") plus "diagnostics"
    """

    extensions = ["events"]

    def __init__(self, filename="", with_recording_number=False):
        BaseDecoder.__init__(self, filename)
        self.with_recording_number = with_recording_number

    def record_dtype(self):
        if self.with_recording_number:
            return np.dtype(events_with_recording_number_dtype)
        return np.dtype(events_dtype)

    def _decode_records(self, cursor, header, info):
        dtype = self.record_dtype()
        nb_event = cursor.remaining() // dtype.itemsize
        if cursor.remaining() % dtype.itemsize:
            self.logger.info(f"Ignoring {cursor.remaining() % dtype.itemsize} trailing bytes in {self.source_name()}")
        records = cursor.read_array(dtype, nb_event)

        info["sample_number"] = records["sample_number"].astype("int16")
        info["event_type"] = records["event_type"].copy()
        info["node_id"] = records["node_id"].copy()
        info["event_id"] = records["event_id"].copy()
        if self.with_recording_number:
            info["recording_number"] = records["recording_number"].astype("uint16")

        data = records["channel"].copy()
        timestamps = records["timestamp"].astype("int64")
        return data, timestamps
