"""
Conversion of decoded arrays to :mod:`quantities` arrays.

Continuous samples are int16 counts: the header field ``bitVolts`` gives the
microvolts per bit. Spike waveforms are already rescaled by the channel gains
and are in microvolts.
"""

import numpy as np
import quantities as pq


def continuous_to_quantity(data, header, units="uV"):
    """
    Rescale int16 continuous samples to a Quantity.

    Parameters
    ----------
    data: int16 array
        as returned by ContinuousDecoder
    header: dict
        the parsed header, must contain "bitVolts"
    units: str
        units of the returned Quantity, default "uV"
    """
    if "bitVolts" not in header:
        raise KeyError("The header has no 'bitVolts' field, samples can not be rescaled")
    values = np.asarray(data, dtype="float64") * float(header["bitVolts"])
    return pq.Quantity(values, units="uV").rescale(units)


def spikes_to_quantity(data, units="uV"):
    return pq.Quantity(np.asarray(data, dtype="float64"), units="uV").rescale(units)
