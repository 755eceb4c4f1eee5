"""
Keytab entry encoding and decoding.

An entry binds one principal to one key. On the wire it is prefixed by a
32-bit size covering everything after the size field itself:

    [0..3]   size (big-endian uint32)
    [4..5]   num_components (big-endian uint16)
    [..]     realm (counted octet string)
    [..]     components (num_components counted octet strings)
    [..]     name_type (big-endian uint32)
    [..]     timestamp (big-endian uint32)
    [..]     vno8 (uint8)
    [..]     key block
    [..]     vno (big-endian uint32, optional)

The trailing 32-bit vno is a legacy quirk of the MIT format: there is no
presence flag, it exists only if at least 4 bytes of the entry remain after
the key block. Entries without it decode with ``vno == 0``. Encoding always
writes it, so such an entry grows by 4 bytes when re-encoded.
"""

from dataclasses import dataclass
from typing import List

from .key_block import KeyBlock, read_key_block, write_key_block
from .octet_string import CountedOctetString, read_octet_string, write_octet_string
from .types import (
    ENTRY_SIZE_SIZE,
    NAME_TYPE_SIZE,
    NUM_COMPONENTS_SIZE,
    TIMESTAMP_SIZE,
    VNO8_SIZE,
    VNO_SIZE,
    LengthMismatchError,
)
from .wire import ByteReader, pack_uint


@dataclass
class KeytabEntry:
    """A single principal/key record of a keytab."""
    size: int
    num_components: int
    realm: CountedOctetString
    components: List[CountedOctetString]
    name_type: int
    timestamp: int
    vno8: int
    key: KeyBlock
    vno: int = 0

    @classmethod
    def from_principal(
        cls,
        principal: str,
        key: KeyBlock,
        name_type: int = 1,
        timestamp: int = 0,
        vno: int = 0,
    ) -> "KeytabEntry":
        """
        Build an entry from a ``service/instance@REALM`` principal string.

        Component count and size are filled in; ``vno8`` is the low byte
        of ``vno``.

        Args:
            principal: Principal name with realm
            key: Key material for the principal
            name_type: Principal name type (1 is KRB5_NT_PRINCIPAL)
            timestamp: POSIX time the key was created
            vno: Key version number

        Raises:
            ValueError: If the principal has no realm or no name
        """
        name, sep, realm = principal.rpartition("@")
        if not sep or not name or not realm:
            raise ValueError(f"Principal must look like name@REALM: {principal!r}")

        components = [CountedOctetString.from_string(part) for part in name.split("/")]
        entry = cls(
            size=0,
            num_components=len(components),
            realm=CountedOctetString.from_string(realm),
            components=components,
            name_type=name_type,
            timestamp=timestamp,
            vno8=vno & 0xFF,
            key=key,
            vno=vno,
        )
        recompute_size(entry)
        return entry

    @property
    def consumed_size(self) -> int:
        """Bytes this entry occupies on the wire, size field included."""
        return ENTRY_SIZE_SIZE + self.size

    @property
    def principal(self) -> str:
        """Principal as ``comp1/comp2@REALM``."""
        name = "/".join(component.to_string() for component in self.components)
        return f"{name}@{self.realm.to_string()}"

    @property
    def key_version(self) -> int:
        """Effective key version: the 32-bit vno when set, otherwise vno8."""
        return self.vno if self.vno else self.vno8


def read_entry(reader: ByteReader) -> KeytabEntry:
    """Read one entry at the reader's cursor, advancing past its full size."""
    size = reader.read_uint32()
    body = reader.window(size)

    num_components = body.read_uint16()
    realm = read_octet_string(body)

    components = []
    for _ in range(num_components):
        components.append(read_octet_string(body))

    name_type = body.read_uint32()
    timestamp = body.read_uint32()
    vno8 = body.read_uint8()
    key = read_key_block(body)

    vno = body.read_uint32() if body.remaining >= VNO_SIZE else 0

    return KeytabEntry(
        size=size,
        num_components=num_components,
        realm=realm,
        components=components,
        name_type=name_type,
        timestamp=timestamp,
        vno8=vno8,
        key=key,
        vno=vno,
    )


def _encode_body(entry: KeytabEntry) -> bytes:
    if entry.num_components != len(entry.components):
        raise LengthMismatchError("num_components", entry.num_components, len(entry.components))

    parts = [
        pack_uint(entry.num_components, NUM_COMPONENTS_SIZE, "num_components"),
        write_octet_string(entry.realm, "realm"),
    ]
    for index, component in enumerate(entry.components):
        parts.append(write_octet_string(component, f"component {index}"))

    parts.extend([
        pack_uint(entry.name_type, NAME_TYPE_SIZE, "name_type"),
        pack_uint(entry.timestamp, TIMESTAMP_SIZE, "timestamp"),
        pack_uint(entry.vno8, VNO8_SIZE, "vno8"),
        write_key_block(entry.key),
        pack_uint(entry.vno, VNO_SIZE, "vno"),
    ])
    return b"".join(parts)


def write_entry(entry: KeytabEntry) -> bytes:
    """Serialise an entry, prefixing the freshly computed body size."""
    body = _encode_body(entry)
    return pack_uint(len(body), ENTRY_SIZE_SIZE, "size") + body


def decode_entry(data: bytes) -> KeytabEntry:
    """
    Decode one keytab entry from the start of ``data``.

    Decoding never reads past the entry's declared size. Bytes after the
    entry are left for the caller.

    Args:
        data: Encoded bytes

    Returns:
        Decoded KeytabEntry

    Raises:
        TruncatedInputError: If the size field, the declared body, or any
            nested field is cut short
    """
    return read_entry(ByteReader(data))


def encode_entry(entry: KeytabEntry) -> bytes:
    """
    Encode a keytab entry to bytes.

    The size prefix is computed from the serialised body; the stored
    ``size`` is not used. The 32-bit vno is always written.

    Raises:
        LengthMismatchError: If num_components or a nested length is wrong
        FieldRangeError: If an integer field does not fit its width
    """
    return write_entry(entry)


def recompute_size(entry: KeytabEntry) -> None:
    """
    Store the entry's current body length in ``entry.size``.

    Call after mutating any field so the in-memory entry matches what
    decoding its encoded bytes would produce. Safe to call repeatedly.

    Raises:
        LengthMismatchError: If num_components or a nested length is wrong
        FieldRangeError: If an integer field does not fit its width
    """
    entry.size = len(_encode_body(entry))
