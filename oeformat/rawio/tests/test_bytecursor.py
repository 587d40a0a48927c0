"""
Tests of oeformat.rawio.bytecursor
"""

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

import numpy as np

from oeformat.core import UnexpectedEof
from oeformat.rawio.bytecursor import ByteCursor


class TestByteCursor(unittest.TestCase):
    def setUp(self):
        self._tmpdir = TemporaryDirectory(prefix="oeformat_cursor_")
        self.filename = Path(self._tmpdir.name) / "data.bin"
        self.filename.write_bytes(bytes(range(10)) + b"\x01\x02" * 3)

    def tearDown(self):
        self._tmpdir.cleanup()

    def test_read_and_remaining(self):
        with open(self.filename, mode="rb") as fid:
            cursor = ByteCursor(fid)
            self.assertEqual(cursor.size, 16)
            self.assertEqual(cursor.remaining(), 16)
            self.assertEqual(cursor.read(3), b"\x00\x01\x02")
            self.assertEqual(cursor.tell(), 3)
            self.assertEqual(cursor.remaining(), 13)
            cursor.skip(7)
            self.assertEqual(cursor.tell(), 10)

    def test_read_past_end(self):
        with open(self.filename, mode="rb") as fid:
            cursor = ByteCursor(fid)
            cursor.read(12)
            with self.assertRaises(UnexpectedEof) as cm:
                cursor.read(5)
            self.assertEqual(cm.exception.requested, 5)
            self.assertEqual(cm.exception.available, 4)
            self.assertEqual(cm.exception.offset, 12)
            # nothing consumed by the failed read
            self.assertEqual(cursor.remaining(), 4)

    def test_byte_order(self):
        with open(self.filename, mode="rb") as fid:
            cursor = ByteCursor(fid)
            cursor.skip(10)
            little = cursor.read_array("<i2", 1)
            big = cursor.read_array(">i2", 1)
            self.assertEqual(little[0], 0x0201)
            self.assertEqual(big[0], 0x0102)
            self.assertEqual(cursor.read_scalar("<u2"), 0x0201)
            self.assertEqual(cursor.read_array("<u2", 0).size, 0)
            self.assertEqual(cursor.remaining(), 0)

    def test_read_array_values(self):
        with open(self.filename, mode="rb") as fid:
            cursor = ByteCursor(fid)
            values = cursor.read_array("u1", 10)
            np.testing.assert_array_equal(values, np.arange(10))


if __name__ == "__main__":
    unittest.main()
