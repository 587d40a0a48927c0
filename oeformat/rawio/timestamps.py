"""
Per sample timestamps of continuous files.

A continuous record only stores the timestamp of its first sample. The
timestamps of the other samples are linearly interpolated between the record
timestamp and the timestamp of the next record. The samples of the last
record have no successor to interpolate against: they stay unresolved and are
masked in the returned array.
"""

import numpy as np


def interpolate_timestamps(block_timestamps, block_sample_counts):
    """
    Expand block timestamps to one timestamp per sample.

    Parameters
    ----------
    block_timestamps: array of int
        timestamp of the first sample of each block
    block_sample_counts: array of int
        number of samples of each block

    Returns
    -------
    timestamps: numpy.ma.MaskedArray of float64
        one entry per sample, the samples of the last block are masked
    """
    block_timestamps = np.asarray(block_timestamps, dtype="int64")
    block_sample_counts = np.asarray(block_sample_counts, dtype="int64")
    if block_timestamps.shape != block_sample_counts.shape:
        raise ValueError("block_timestamps and block_sample_counts must have the same length")

    total = int(np.sum(block_sample_counts))
    values = np.full(total, np.nan, dtype="float64")
    mask = np.ones(total, dtype=bool)

    pos = 0
    for i in range(block_timestamps.size - 1):
        n = int(block_sample_counts[i])
        ts_interp = np.linspace(block_timestamps[i], block_timestamps[i + 1], n + 1)
        values[pos : pos + n] = ts_interp[:-1]
        mask[pos : pos + n] = False
        pos += n

    # NOTE: the timestamps of the last block are not interpolated
    return np.ma.MaskedArray(values, mask=mask, fill_value=np.nan)
