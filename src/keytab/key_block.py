"""Key block encoding and decoding."""

from dataclasses import dataclass
from typing import Optional

from .enctypes import encryption_type_name
from .octet_string import CountedOctetString, read_octet_string, write_octet_string
from .types import ENCRYPTION_TYPE_SIZE
from .wire import ByteReader, pack_uint


@dataclass
class KeyBlock:
    """Encryption type tag plus the raw key bytes."""
    encryption_type: int
    key: CountedOctetString

    @classmethod
    def from_key(cls, encryption_type: int, key: bytes) -> "KeyBlock":
        """Build a key block from raw key bytes."""
        return cls(encryption_type=int(encryption_type), key=CountedOctetString.from_bytes(key))

    @property
    def consumed_size(self) -> int:
        """Bytes this block occupies on the wire."""
        return ENCRYPTION_TYPE_SIZE + self.key.consumed_size

    @property
    def encryption_type_name(self) -> Optional[str]:
        """Display name of the encryption type, if known."""
        return encryption_type_name(self.encryption_type)


def read_key_block(reader: ByteReader) -> KeyBlock:
    """Read a key block at the reader's cursor."""
    encryption_type = reader.read_uint16()
    key = read_octet_string(reader)
    return KeyBlock(encryption_type=encryption_type, key=key)


def write_key_block(block: KeyBlock) -> bytes:
    """Serialise a key block."""
    return (
        pack_uint(block.encryption_type, ENCRYPTION_TYPE_SIZE, "encryption type")
        + write_octet_string(block.key, "key")
    )


def decode_key_block(data: bytes) -> KeyBlock:
    """
    Decode a key block from the start of ``data``.

    Args:
        data: Encoded bytes

    Returns:
        Decoded KeyBlock

    Raises:
        TruncatedInputError: If the tag or the nested key is cut short
    """
    return read_key_block(ByteReader(data))


def encode_key_block(block: KeyBlock) -> bytes:
    """
    Encode a key block to bytes.

    Format:
        [0..1]  encryption type (big-endian uint16)
        [2..3]  key length (big-endian uint16)
        [4..]   key bytes

    No check is made that the key length suits the encryption type.

    Raises:
        LengthMismatchError: If the key's declared length is wrong
    """
    return write_key_block(block)
