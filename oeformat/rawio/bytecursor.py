"""
Forward only reader over an opened binary file.

All decoders check ``remaining()`` before starting a record so a short read
inside a record means the file lies about its own layout.
"""

import os

import numpy as np

from oeformat.core import UnexpectedEof


class ByteCursor:
    """
    Sequential reader keeping track of the offset and the file size.

    Parameters
    ----------
    fid: file object
        A file opened in binary mode. The cursor does not own it: whoever opened
        it is in charge of closing it.
    """

    def __init__(self, fid):
        self._fid = fid
        self.size = os.fstat(fid.fileno()).st_size
        self.offset = fid.tell()

    def tell(self):
        return self.offset

    def remaining(self):
        return self.size - self.offset

    def read(self, n):
        """Return exactly ``n`` bytes or raise :class:`UnexpectedEof`."""
        available = self.remaining()
        if n > available:
            raise UnexpectedEof(n, available, self.offset)
        buffer = self._fid.read(n)
        if len(buffer) != n:
            # file shrunk under our feet
            raise UnexpectedEof(n, len(buffer), self.offset)
        self.offset += n
        return buffer

    def skip(self, n):
        self.read(n)

    def read_array(self, dtype, count):
        """
        Read ``count`` values of ``dtype``.

        The byte order must be explicit in ``dtype`` ("<u2", ">i2", ...) because the
        format mixes both orders.
        """
        dtype = np.dtype(dtype)
        if count == 0:
            return np.zeros(0, dtype=dtype)
        buffer = self.read(dtype.itemsize * int(count))
        return np.frombuffer(buffer, dtype=dtype, count=int(count))

    def read_scalar(self, dtype):
        return self.read_array(dtype, 1)[0].item()
