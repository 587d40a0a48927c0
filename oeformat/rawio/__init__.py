"""
:mod:`oeformat.rawio` provides the decoders of the legacy Open Ephys format,
one class per file variant.

:attr:`oeformat.rawio.decoderlist` provides the list of decoder classes.

Functions:

.. autofunction:: oeformat.rawio.get_decoder_class


Classes:

* :attr:`ContinuousDecoder`
* :attr:`SpikeDecoder`
* :attr:`EventDecoder`


.. autoclass:: oeformat.rawio.ContinuousDecoder

    .. autoattribute:: extensions

.. autoclass:: oeformat.rawio.SpikeDecoder

    .. autoattribute:: extensions

.. autoclass:: oeformat.rawio.EventDecoder

    .. autoattribute:: extensions

"""

from pathlib import Path

from oeformat.core import UnsupportedFormatError
from oeformat.rawio.continuousrawio import ContinuousDecoder
from oeformat.rawio.spikesrawio import SpikeDecoder
from oeformat.rawio.eventsrawio import EventDecoder

decoderlist = [
    ContinuousDecoder,
    SpikeDecoder,
    EventDecoder,
]

decoder_by_extension = {}
for decoder in decoderlist:
    for ext in decoder.extensions:
        decoder_by_extension[ext] = decoder


def get_decoder_class(filename):
    """
    Return the decoder class guessed from the file extension.

    The file is not opened so it does not need to exist.
    """
    ext = Path(filename).suffix[1:].lower()
    if ext not in decoder_by_extension:
        raise UnsupportedFormatError(
            f"File extension not recognized ({Path(filename).name}). "
            "Please use a '.continuous', '.spikes', or '.events' file."
        )
    return decoder_by_extension[ext]
