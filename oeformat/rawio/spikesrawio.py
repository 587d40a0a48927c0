"""
Decoder for Open Ephys ``.spikes`` files.

Each record holds one spike on N channels with M samples:
  * uint8 event type (always 4, ignored)
  * int64 timestamp
  * uint16 source id (the electrode)
  * uint16 N, number of channels
  * uint16 M, number of samples
  * N*M uint16 samples, channel after channel
  * N uint16 gains (gain*1000)
  * N uint16 thresholds
All fields are little-endian.

There is no record marker in this format so a record with an impossible
sample count stops the decoding: the rest of the file is not read.
Decoding also stops when less than 512 bytes are left, so a file made of
records smaller than that (e.g. one channel with 40 samples, 99 bytes) is
only partly read. The number of bytes left unread is logged.
"""

import numpy as np

from oeformat.core import InvalidSpikeSampleCount, SpikeShapeMismatch, UnexpectedEof

from .baserawio import BaseDecoder


# a smaller tail of the file is not considered as a spike record
MIN_SPIKE_RECORD_SIZE = 512
MIN_SPIKE_SAMPLES = 1
MAX_SPIKE_SAMPLES = 10000
WAVEFORM_OFFSET = 32768

event_type_dtype = np.dtype("u1")
timestamp_dtype = np.dtype("<i8")
source_dtype = np.dtype("<u2")
nb_channel_dtype = np.dtype("<u2")
nb_sample_dtype = np.dtype("<u2")
waveform_dtype = np.dtype("<u2")
gain_dtype = np.dtype("<u2")
threshold_dtype = np.dtype("<u2")


def rescale_waveforms(raw, gains):
    """
    Convert raw unsigned samples to physical values.

    Parameters
    ----------
    raw: uint16 array of shape (nb_sample, nb_channel)
    gains: uint16 array of shape (nb_channel,), gain * 1000 as stored on disk
    """
    gain = gains.astype("float64") / 1000.0
    with np.errstate(divide="ignore", invalid="ignore"):
        return (raw.astype("float64") - WAVEFORM_OFFSET) / gain[np.newaxis, :]


class SpikeDecoder(BaseDecoder):
    """
    Class for reading one ``.spikes`` file.

    ``decode()`` returns:
        * data: float64 array (nb_spike, nb_sample, nb_channel)
        * timestamps: int64 array (nb_spike,)
        * info: dict with "header", "source", "gain" and "diagnostics"
    """

    extensions = ["spikes"]

    def _decode_records(self, cursor, header, info):
        waveforms = []
        timestamps = []
        sources = []
        gains = []
        shape = None

        spike_index = 0
        while cursor.remaining() >= MIN_SPIKE_RECORD_SIZE:
            record_offset = cursor.tell()
            # always equal to 4
            cursor.read_scalar(event_type_dtype)
            timestamp = cursor.read_scalar(timestamp_dtype)
            source = cursor.read_scalar(source_dtype)
            nb_channel = cursor.read_scalar(nb_channel_dtype)
            nb_sample = cursor.read_scalar(nb_sample_dtype)

            if nb_sample < MIN_SPIKE_SAMPLES or nb_sample > MAX_SPIKE_SAMPLES:
                self._record_diagnostic(info, InvalidSpikeSampleCount(spike_index, record_offset, nb_sample))
                break
            if shape is not None and (nb_sample, nb_channel) != shape:
                self._record_diagnostic(
                    info, SpikeShapeMismatch(spike_index, record_offset, nb_sample, nb_channel, shape)
                )
                break
            shape = (nb_sample, nb_channel)

            body_size = nb_channel * nb_sample * waveform_dtype.itemsize
            body_size += nb_channel * (gain_dtype.itemsize + threshold_dtype.itemsize)
            if body_size > cursor.remaining():
                # last record truncated when the acquisition stopped
                self._record_diagnostic(info, UnexpectedEof(body_size, cursor.remaining(), cursor.tell()))
                break

            raw = cursor.read_array(waveform_dtype, nb_channel * nb_sample)
            # on disk channels are the slow dimension
            raw = raw.reshape(nb_channel, nb_sample).T
            channel_gains = cursor.read_array(gain_dtype, nb_channel)
            # thresholds are not returned but must be consumed
            cursor.read_array(threshold_dtype, nb_channel)

            waveforms.append(rescale_waveforms(raw, channel_gains))
            timestamps.append(timestamp)
            sources.append(source)
            gains.append(channel_gains.astype("float64") / 1000.0)
            spike_index += 1

        if len(waveforms) > 0:
            data = np.stack(waveforms, axis=0)
            info["gain"] = np.stack(gains, axis=0)
        else:
            data = np.zeros((0, 0, 0), dtype="float64")
            info["gain"] = np.zeros((0, 0), dtype="float64")
        info["source"] = np.array(sources, dtype="uint16")
        if len(info["diagnostics"]) == 0 and cursor.remaining() > 0:
            self.logger.info(f"{cursor.remaining()} bytes left unread at the end of {self.source_name()}")
        self.logger.info(f"Loaded {spike_index} spikes from {self.source_name()}")

        return data, np.array(timestamps, dtype="int64")
