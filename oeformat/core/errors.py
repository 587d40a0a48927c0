"""
Errors raised (or recorded) while decoding Open Ephys files.

Fatal errors are raised out of ``decode``. Recoverable corruption is not
raised: an instance is created, logged and appended to
``info["diagnostics"]`` so the caller can see where decoding went wrong.
"""


class OEFormatError(Exception):
    """Base class of all oeformat errors."""


class UnsupportedFormatError(OEFormatError, ValueError):
    """The file extension is not one of .continuous, .spikes or .events."""


class HeaderFormatError(OEFormatError, ValueError):
    """The 1024 bytes header is not a sequence of ``name = literal;`` statements."""

    def __init__(self, message, offset=None):
        if offset is not None:
            message = f"{message} (header byte {offset})"
        super().__init__(message)
        self.offset = offset


class UnexpectedEof(OEFormatError, EOFError):
    """A read went past the end of the file inside a record."""

    def __init__(self, requested, available, offset):
        super().__init__(f"Requested {requested} bytes at offset {offset} but only {available} are left")
        self.requested = requested
        self.available = available
        self.offset = offset


class CorruptRecord(OEFormatError):
    """
    A continuous record declared a sample count different from the block length.

    ``recovered`` tells whether a record marker was found afterwards and decoding
    went on.
    """

    def __init__(self, block_index, offset, nb_sample, recovered=False):
        self.block_index = block_index
        self.offset = offset
        self.nb_sample = nb_sample
        self.recovered = recovered
        super().__init__(self._message())

    def _message(self):
        txt = f"Corrupted record at block {self.block_index} (byte {self.offset}): found {self.nb_sample} samples"
        if self.recovered:
            txt += ", record marker found, decoding resumed"
        else:
            txt += ", no record marker found, decoding stopped"
        return txt


class InvalidSpikeSampleCount(OEFormatError):
    """A spike record declared a sample count outside [1, 10000]; decoding stops."""

    def __init__(self, spike_index, offset, nb_sample, message=None):
        self.spike_index = spike_index
        self.offset = offset
        self.nb_sample = nb_sample
        if message is None:
            message = f"Loading failed at spike {spike_index} (byte {offset}). Found {nb_sample} samples."
        super().__init__(message)


class SpikeShapeMismatch(InvalidSpikeSampleCount):
    """A spike record has a (samples, channels) shape different from the first spike."""

    def __init__(self, spike_index, offset, nb_sample, nb_channel, expected_shape):
        self.nb_channel = nb_channel
        self.expected_shape = expected_shape
        message = (
            f"Loading failed at spike {spike_index} (byte {offset}). Found shape ({nb_sample}, {nb_channel}), "
            f"expected {expected_shape}."
        )
        super().__init__(spike_index, offset, nb_sample, message=message)
