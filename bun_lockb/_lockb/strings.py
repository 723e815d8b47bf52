"""Decoding of 8-byte string slots."""

from ..exceptions import RangeViolationError, UndersizedRecordError
from .constants import STRING_SLOT_SIZE
from .reader import read_u32_pair

EXTERNAL_FLAG = 0x80
LENGTH_MASK = 0x7FFFFFFF


class StringResolver:
    """Turns string slots into text, looking up interned strings in `string_bytes`.

    A slot whose last byte has the high bit clear holds up to 8 bytes of
    inline, NUL-terminated text. Otherwise it holds a little-endian
    `(offset, length)` pair into `string_bytes`, with the flag bit stored in
    the top bit of the length.
    """

    def __init__(self, string_bytes: memoryview):
        self._string_bytes = string_bytes

    def __call__(self, slot: memoryview) -> str:
        if len(slot) < STRING_SLOT_SIZE:
            raise UndersizedRecordError(f"String slot is {len(slot)} bytes, expected {STRING_SLOT_SIZE}")

        if not slot[7] & EXTERNAL_FLAG:
            data = bytes(slot[:STRING_SLOT_SIZE])
            nul = data.find(b"\x00")
            if nul >= 0:
                data = data[:nul]
            return data.decode("utf-8", errors="replace")

        offset, length = read_u32_pair(slot)
        length &= LENGTH_MASK

        if offset + length > len(self._string_bytes):
            raise RangeViolationError(
                f"Interned string {offset}..{offset + length} lies outside string_bytes "
                f"({len(self._string_bytes)} bytes)"
            )

        return bytes(self._string_bytes[offset:offset + length]).decode("utf-8", errors="replace")
