"""
Binary File Utilities

Checked cursors for reading and writing the little-endian level format.
Every read is bounds checked so truncated files fail with
UnexpectedEndOfData instead of returning garbage.
"""

import struct

import numpy as np

from ..errors import EncodeError, UnexpectedEndOfData
from .strings import pad_string, trim_string


class BinaryReader:
    """
    Forward-only cursor over an immutable byte buffer.

    Usage:
        reader = BinaryReader(data)
        tag = reader.read(5)
        link = reader.read_u32()
        points = reader.read_points(vertex_count)
    """

    def __init__(self, data: bytes, offset: int = 0):
        self.data = bytes(data)
        self.offset = offset

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def _require(self, size: int):
        if size > self.remaining:
            raise UnexpectedEndOfData(self.offset, size, max(self.remaining, 0))

    def read(self, size: int) -> bytes:
        """Read raw bytes."""
        self._require(size)
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def skip(self, size: int):
        self._require(size)
        self.offset += size

    def seek(self, offset: int):
        self.offset = offset

    def _unpack(self, fmt: str, size: int):
        self._require(size)
        value = struct.unpack_from(fmt, self.data, self.offset)[0]
        self.offset += size
        return value

    def read_u32(self) -> int:
        return self._unpack('<I', 4)

    def read_i32(self) -> int:
        return self._unpack('<i', 4)

    def read_f64(self) -> float:
        return self._unpack('<d', 8)

    def read_string(self, width: int) -> str:
        """Read a fixed-width string slot and trim its padding."""
        return trim_string(self.read(width))

    def read_points(self, count: int) -> np.ndarray:
        """
        Read `count` (x, y) double pairs.

        Returns:
            float64 array of shape (count, 2)
        """
        if count == 0:
            return np.empty((0, 2), dtype=np.float64)
        size = count * 16
        self._require(size)
        points = np.frombuffer(self.data, dtype='<f8', count=count * 2, offset=self.offset)
        self.offset += size
        return points.reshape(count, 2)


class BinaryWriter:
    """
    Cursor over a preallocated, zero-filled buffer of known size.

    Usage:
        writer = BinaryWriter(size)
        writer.write(b'POT14')
        writer.write_u32(link)
        data = writer.getvalue()
    """

    def __init__(self, size: int):
        self.buffer = bytearray(size)
        self.offset = 0

    def _pack(self, fmt: str, size: int, value):
        if self.offset + size > len(self.buffer):
            raise EncodeError(f"Write of {size} bytes at offset {self.offset} overflows buffer of {len(self.buffer)}")
        try:
            struct.pack_into(fmt, self.buffer, self.offset, value)
        except struct.error as e:
            raise EncodeError(f"Cannot write {value!r} at offset {self.offset}: {e}") from e
        self.offset += size

    def seek(self, offset: int):
        self.offset = offset

    def write(self, data: bytes):
        end = self.offset + len(data)
        if end > len(self.buffer):
            raise EncodeError(f"Write of {len(data)} bytes at offset {self.offset} overflows buffer of {len(self.buffer)}")
        self.buffer[self.offset:end] = data
        self.offset = end

    def write_u16(self, value: int):
        self._pack('<H', 2, value)

    def write_u32(self, value: int):
        self._pack('<I', 4, value)

    def write_i32(self, value: int):
        self._pack('<i', 4, value)

    def write_f64(self, value: float):
        self._pack('<d', 8, value)

    def write_string(self, text: str, width: int):
        """Write a NUL-padded fixed-width string slot."""
        self.write(pad_string(text, width))

    def getvalue(self) -> bytes:
        return bytes(self.buffer)
