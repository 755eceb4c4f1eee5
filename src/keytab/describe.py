"""
Human-readable descriptions of keytab structures.

Everything here returns text; nothing prints. Key material is hidden
behind a fingerprint unless explicitly requested.
"""

from datetime import datetime, timezone

from cryptography.hazmat.primitives import hashes

from .entry import KeytabEntry
from .key_block import KeyBlock
from .keytab_file import Keytab
from .octet_string import CountedOctetString

BRANCH = " │ "
CLOSE = " └─"


def bytes_to_printable(data: bytes) -> str:
    """
    Render bytes as text, keeping printable ASCII.

    Any byte outside 0x20-0x7E is shown as ``\\xNN``.
    """
    return "".join(
        chr(b) if 32 <= b <= 126 else f"\\x{b:02x}"
        for b in data
    )


def key_fingerprint(key: bytes) -> str:
    """
    Generate a short fingerprint for key material.

    The fingerprint is a truncated SHA-256 hash formatted for easy comparison.

    Args:
        key: Raw key bytes

    Returns:
        A fingerprint string like "A7B3C9D1 E5F28A4B"
    """
    digest = hashes.Hash(hashes.SHA256())
    digest.update(key)
    hash_bytes = digest.finalize()

    hex_bytes = [f"{b:02X}" for b in hash_bytes[:8]]
    groups = ["".join(hex_bytes[i : i + 4]) for i in range(0, 8, 4)]
    return " ".join(groups)


def _format_timestamp(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat().replace("+00:00", "Z")


def describe_octet_string(
    value: CountedOctetString,
    indent: int = 0,
    index: int = 0,
    hide_data: bool = False,
) -> str:
    """Describe a counted octet string as an indented tree."""
    prefix = BRANCH * indent
    lines = [
        f"{prefix}<CountedOctetString #{index}>",
        f"{prefix}{BRANCH}Length : 0x{value.length:04x} ({value.length})",
    ]
    if hide_data:
        lines.append(f"{prefix}{BRANCH}Fingerprint : {key_fingerprint(value.data)}")
    else:
        lines.extend([
            f"{prefix}{BRANCH}Data:",
            f"{prefix}{BRANCH}{BRANCH}Hex : {value.data.hex()}",
            f"{prefix}{BRANCH}{BRANCH}Raw : {bytes_to_printable(value.data)}",
            f"{prefix}{BRANCH}{CLOSE}",
        ])
    lines.append(f"{prefix}{CLOSE}")
    return "\n".join(lines)


def describe_key_block(block: KeyBlock, indent: int = 0, show_keys: bool = False) -> str:
    """Describe a key block; key bytes appear only with ``show_keys``."""
    prefix = BRANCH * indent
    name = block.encryption_type_name or "unknown"
    lines = [
        f"{prefix}<KeyBlock>",
        f"{prefix}{BRANCH}Type : 0x{block.encryption_type:04x} ({name}) ({block.encryption_type})",
        f"{prefix}{BRANCH}Key  :",
        describe_octet_string(block.key, indent + 2, hide_data=not show_keys),
        f"{prefix}{CLOSE}",
    ]
    return "\n".join(lines)


def describe_entry(
    entry: KeytabEntry,
    indent: int = 0,
    index: int = 0,
    show_keys: bool = False,
) -> str:
    """Describe one keytab entry as an indented tree."""
    prefix = BRANCH * indent
    lines = [
        f"{prefix}<KeytabEntry #{index}>",
        f"{prefix}{BRANCH}Principal     : {entry.principal}",
        f"{prefix}{BRANCH}Size          : 0x{entry.size:08x} ({entry.size})",
        f"{prefix}{BRANCH}NumComponents : 0x{entry.num_components:04x} ({entry.num_components})",
        f"{prefix}{BRANCH}Realm         : {bytes_to_printable(entry.realm.data)}",
        f"{prefix}{BRANCH}Components    :",
    ]
    for i, component in enumerate(entry.components):
        lines.append(describe_octet_string(component, indent + 2, i))
    lines.extend([
        f"{prefix}{BRANCH}NameType      : 0x{entry.name_type:08x} ({entry.name_type})",
        f"{prefix}{BRANCH}Timestamp     : 0x{entry.timestamp:08x} ({_format_timestamp(entry.timestamp)})",
        f"{prefix}{BRANCH}Vno8          : 0x{entry.vno8:02x} ({entry.vno8})",
        f"{prefix}{BRANCH}Key           :",
        describe_key_block(entry.key, indent + 2, show_keys),
        f"{prefix}{BRANCH}Vno           : 0x{entry.vno:08x} ({entry.vno})",
        f"{prefix}{CLOSE}",
    ])
    return "\n".join(lines)


def describe_keytab(keytab: Keytab, indent: int = 0, show_keys: bool = False) -> str:
    """
    Describe a whole keytab as an indented tree.

    Args:
        keytab: Keytab to describe
        indent: Starting indentation level
        show_keys: Include raw key bytes instead of fingerprints

    Returns:
        Multi-line description text
    """
    prefix = BRANCH * indent
    lines = [
        f"{prefix}<Keytab>",
        f"{prefix}{BRANCH}FileFormatVersion : 0x{keytab.format_version:04x} ({keytab.format_version})",
        f"{prefix}{BRANCH}Entries           : {len(keytab.entries)}",
    ]
    for i, entry in enumerate(keytab.entries):
        lines.append(describe_entry(entry, indent + 1, i, show_keys))
    lines.append(f"{prefix}{CLOSE}")
    return "\n".join(lines)
