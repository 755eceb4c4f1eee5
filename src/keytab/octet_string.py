"""Counted octet string: the 2-byte length + raw bytes idiom of keytab files."""

from dataclasses import dataclass

from .types import OCTET_STRING_LENGTH_SIZE, LengthMismatchError
from .wire import ByteReader, pack_uint


@dataclass
class CountedOctetString:
    """
    Length-prefixed byte field.

    Used for realms, principal name components and key material. ``length``
    is stored separately from ``data`` and must agree with it at encode time.
    """
    length: int
    data: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> "CountedOctetString":
        """Wrap raw bytes, deriving the length."""
        return cls(length=len(data), data=bytes(data))

    @classmethod
    def from_string(cls, text: str) -> "CountedOctetString":
        """Wrap a text value encoded as UTF-8."""
        return cls.from_bytes(text.encode("utf-8"))

    @property
    def consumed_size(self) -> int:
        """Bytes this field occupies on the wire."""
        return OCTET_STRING_LENGTH_SIZE + self.length

    def to_string(self) -> str:
        """Decode the payload as UTF-8, replacing invalid sequences."""
        return self.data.decode("utf-8", errors="replace")


def read_octet_string(reader: ByteReader) -> CountedOctetString:
    """Read a counted octet string at the reader's cursor."""
    length = reader.read_uint16()
    data = reader.read(length)
    return CountedOctetString(length=length, data=data)


def write_octet_string(field: CountedOctetString, name: str = "octet string") -> bytes:
    """
    Serialise a counted octet string.

    Raises:
        LengthMismatchError: If ``length`` differs from ``len(data)``
    """
    if field.length != len(field.data):
        raise LengthMismatchError(name, field.length, len(field.data))

    return pack_uint(field.length, OCTET_STRING_LENGTH_SIZE, f"{name} length") + field.data


def decode_octet_string(data: bytes) -> CountedOctetString:
    """
    Decode a counted octet string from the start of ``data``.

    Bytes after the field are left for the caller; use ``consumed_size``
    to skip past it.

    Args:
        data: Encoded bytes

    Returns:
        Decoded CountedOctetString

    Raises:
        TruncatedInputError: If the length or payload is cut short
    """
    return read_octet_string(ByteReader(data))


def encode_octet_string(field: CountedOctetString) -> bytes:
    """
    Encode a counted octet string to bytes.

    Format:
        [0..1]  length (big-endian uint16)
        [2..]   data (length bytes, no padding or terminator)

    Raises:
        LengthMismatchError: If ``length`` differs from ``len(data)``
    """
    return write_octet_string(field)
