"""
This module contains the `ByteCursor` class, a bounds-checked reader over an in-memory buffer that extracts the
little-endian ints and byte spans the binary lockfile is made of.

Every span it hands out is a `memoryview` slice of the original buffer, so no data is copied until a decoder turns it
into a string.
"""

import struct
from typing import Optional, Union

from ..exceptions import EnvelopeMismatchError, RangeViolationError, TruncatedInputError

BufferLike = Union[bytes, bytearray, memoryview]


class ByteCursor:
    """
    A cursor over a byte buffer. Reads advance the position; `seek` moves it explicitly.

    The cursor can be narrowed with `limit` so that reads past a structural boundary (e.g. the lockfile's declared
    `end`) fail even when the underlying buffer is longer.
    """

    _data: memoryview
    _position: int
    _limit: int

    def __init__(self, data: BufferLike, limit: Optional[int] = None):
        self._data = as_memoryview(data)
        self._position = 0
        self._limit = len(self._data) if limit is None else min(limit, len(self._data))

    @property
    def limit(self) -> int:
        return self._limit

    def with_limit(self, limit: int) -> "ByteCursor":
        """Returns a new cursor over the same data, positioned here, that cannot read past `limit`."""
        cursor = ByteCursor(self._data, limit)
        cursor._position = self._position
        return cursor

    def seek(self, position: int, meaning: Optional[str] = None) -> "ByteCursor":
        if position < 0 or position > self._limit:
            raise RangeViolationError(
                f"Cannot seek to {position}{f' for {meaning}' if meaning else ''}, "
                f"valid range is 0..{self._limit}"
            )

        self._position = position
        return self

    def bytes_remaining(self) -> int:
        return self._limit - self._position

    def read_amount(self, n_bytes: int, meaning: Optional[str] = None) -> memoryview:
        """
        Reads exactly `n_bytes` from the current position.

        Args:
            n_bytes: The amount of bytes to read.
            meaning: An indication as to the meaning of the data being read (e.g. "package count"). It is used in the
                text of any exceptions that may be thrown.

        Returns:
            A `memoryview` slice of the underlying buffer, `n_bytes` in length.

        Raises:
            TruncatedInputError: If fewer than `n_bytes` are available before the cursor's limit.
        """

        if n_bytes < 0:
            raise ValueError("The number of bytes to read cannot be negative")

        available = self.bytes_remaining()
        if available < n_bytes:
            raise TruncatedInputError(self._position, n_bytes, max(available, 0), meaning)

        start = self._position
        self._position += n_bytes

        return self._data[start:self._position]

    def expect_magic(self, magic: bytes, meaning: Optional[str] = None):
        """
        Verifies that a specific bytes sequence ("magic") follows.

        Raises:
            EnvelopeMismatchError: If the read sequence does not match the expected one.
            TruncatedInputError: If the data ends before the full length of the magic.
        """

        meaning = meaning or "magic"

        data = self.read_amount(len(magic), meaning)

        if data != magic:
            raise EnvelopeMismatchError(
                f"At position {self._position - len(magic)}, expected {meaning} 0x{magic.hex()}, but found "
                f"0x{data.hex()}"
            )

    def read_u32(self, meaning: Optional[str] = None) -> int:
        return struct.unpack("<I", self.read_amount(4, meaning or "u32"))[0]

    def read_u64(self, meaning: Optional[str] = None) -> int:
        return struct.unpack("<Q", self.read_amount(8, meaning or "u64"))[0]


def as_memoryview(data: BufferLike) -> memoryview:
    if isinstance(data, memoryview):
        return data.cast("B") if data.format != "B" or data.ndim != 1 else data
    if isinstance(data, (bytes, bytearray)):
        return memoryview(data)

    raise TypeError("Lockfile data must be bytes, bytearray or memoryview")


def read_u32_pair(span: memoryview) -> tuple:
    """Decodes the first 8 bytes of `span` as two little-endian u32 values."""
    return struct.unpack_from("<II", span)


def read_u32_array(span: memoryview) -> list:
    """Decodes `span` as an array of little-endian u32 values, ignoring any trailing partial element."""
    count = len(span) // 4
    return list(struct.unpack_from(f"<{count}I", span))
