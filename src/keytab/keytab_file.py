"""
Keytab file encoding, decoding and file I/O.

A keytab file is a 16-bit format version followed by entries back to back
until the end of the data:

    [0..1]  format version (big-endian uint16, 0x0502 in practice)
    [2..]   entries (each self-sized, see entry.py)

Entries are kept in file order; there is no index. Editing a keytab means
decoding it whole, changing the entry list, calling recompute_all_sizes()
and encoding it again.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .entry import KeytabEntry, read_entry, recompute_size, write_entry
from .types import (
    DEFAULT_FORMAT_VERSION,
    FORMAT_VERSION_SIZE,
    KeytabFileConfig,
    KeytabIOError,
)
from .wire import ByteReader, pack_uint

logger = logging.getLogger(__name__)


@dataclass
class Keytab:
    """An in-memory keytab: format version plus ordered entries."""
    format_version: int = DEFAULT_FORMAT_VERSION
    entries: List[KeytabEntry] = field(default_factory=list)

    @property
    def consumed_size(self) -> int:
        """Bytes this keytab occupies on the wire."""
        return FORMAT_VERSION_SIZE + sum(entry.consumed_size for entry in self.entries)

    def add_entry(self, entry: KeytabEntry) -> None:
        """Append an entry at the end of the keytab."""
        self.entries.append(entry)

    def remove_entry(self, index: int) -> KeytabEntry:
        """Remove and return the entry at ``index``."""
        return self.entries.pop(index)

    def find_entries(self, principal: str) -> List[KeytabEntry]:
        """Return every entry for ``principal``, in file order."""
        return [entry for entry in self.entries if entry.principal == principal]


def decode_keytab(data: bytes) -> Keytab:
    """
    Decode a whole keytab.

    Entries are read until no bytes remain. Leftover bytes that do not
    form a complete entry are an error, never silently dropped.

    Args:
        data: Full keytab file contents

    Returns:
        Decoded Keytab

    Raises:
        TruncatedInputError: If the version or any entry is cut short
    """
    reader = ByteReader(data)
    format_version = reader.read_uint16()

    entries = []
    while reader.remaining > 0:
        entries.append(read_entry(reader))

    return Keytab(format_version=format_version, entries=entries)


def encode_keytab(keytab: Keytab) -> bytes:
    """
    Encode a keytab to bytes.

    Raises:
        LengthMismatchError: If any entry holds an inconsistent length
        FieldRangeError: If any integer field does not fit its width
    """
    parts = [pack_uint(keytab.format_version, FORMAT_VERSION_SIZE, "format_version")]
    for entry in keytab.entries:
        parts.append(write_entry(entry))
    return b"".join(parts)


def recompute_all_sizes(keytab: Keytab) -> None:
    """
    Recompute the stored size of every entry.

    Stops at the first entry that cannot be serialised. Entries before it
    are already updated; discard the keytab rather than retrying.
    """
    for entry in keytab.entries:
        recompute_size(entry)


def load_keytab(path: Union[str, Path]) -> Keytab:
    """
    Read and decode a keytab file.

    Args:
        path: Path to the keytab file

    Returns:
        Decoded Keytab

    Raises:
        KeytabIOError: If the file cannot be read
        TruncatedInputError: If the contents are malformed
    """
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise KeytabIOError(str(file_path), str(e)) from e

    logger.debug("Read %d bytes from %s", len(data), file_path)
    return decode_keytab(data)


def save_keytab(
    path: Union[str, Path],
    keytab: Keytab,
    config: Optional[KeytabFileConfig] = None,
) -> None:
    """
    Encode a keytab and write it to ``path``.

    The write is not atomic. Size prefixes on disk are always computed from
    the encoded bodies; the in-memory ``size`` fields are left untouched.

    Args:
        path: Destination file
        keytab: Keytab to write
        config: File options (permissions)

    Raises:
        KeytabIOError: If the file cannot be written
        LengthMismatchError: If encoding fails
    """
    config = config or KeytabFileConfig()
    file_path = Path(path)
    data = encode_keytab(keytab)

    try:
        file_path.write_bytes(data)
        if config.restrict_permissions:
            file_path.chmod(config.file_mode)
    except OSError as e:
        raise KeytabIOError(str(file_path), str(e)) from e

    logger.debug("Wrote %d bytes (%d entries) to %s", len(data), len(keytab.entries), file_path)
