"""
Low-level wire helpers shared by every keytab structure.

Decoding goes through a ByteReader: a cursor over an immutable buffer that
owns all bounds checks. Nested structures read from the same reader, so the
parent's offset advances by exactly what each child consumed. A record can
restrict decoding to its declared size with ``window()``.

All integers on the wire are unsigned big-endian.
"""

from typing import Optional

from .types import FieldRangeError, TruncatedInputError


class ByteReader:
    """Cursor over a bytes buffer with centralised bounds checking."""

    def __init__(self, data: bytes, start: int = 0, end: Optional[int] = None) -> None:
        self._data = bytes(data)
        self._offset = start
        self._end = len(self._data) if end is None else end

    @property
    def offset(self) -> int:
        """Absolute position of the cursor in the underlying buffer."""
        return self._offset

    @property
    def remaining(self) -> int:
        """Number of bytes left before the end of this reader."""
        return self._end - self._offset

    def read(self, size: int) -> bytes:
        """
        Read exactly ``size`` bytes and advance.

        Raises:
            TruncatedInputError: If fewer than ``size`` bytes remain
        """
        if size > self.remaining:
            raise TruncatedInputError(size, self.remaining, self._offset)

        chunk = self._data[self._offset : self._offset + size]
        self._offset += size
        return chunk

    def read_uint(self, size: int) -> int:
        """Read an unsigned big-endian integer of ``size`` bytes."""
        return int.from_bytes(self.read(size), byteorder="big")

    def read_uint8(self) -> int:
        return self.read_uint(1)

    def read_uint16(self) -> int:
        return self.read_uint(2)

    def read_uint32(self) -> int:
        return self.read_uint(4)

    def window(self, size: int) -> "ByteReader":
        """
        Split off a reader limited to the next ``size`` bytes.

        The parent cursor skips the whole window immediately, whatever the
        child ends up consuming.

        Raises:
            TruncatedInputError: If fewer than ``size`` bytes remain
        """
        if size > self.remaining:
            raise TruncatedInputError(size, self.remaining, self._offset)

        child = ByteReader(self._data, self._offset, self._offset + size)
        self._offset += size
        return child


def pack_uint(value: int, size: int, field: str) -> bytes:
    """
    Encode an unsigned big-endian integer of ``size`` bytes.

    Raises:
        FieldRangeError: If value is negative or too wide
    """
    if value < 0 or value >= 1 << (size * 8):
        raise FieldRangeError(field, value, size)

    return value.to_bytes(size, byteorder="big")
