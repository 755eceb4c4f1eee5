"""
py-keytab - MIT Kerberos keytab codec

Decode keytab files into plain Python objects and encode them back to
format-legal bytes.
"""

from .types import (
    DEFAULT_FORMAT_VERSION,
    DEFAULT_FILE_MODE,
    KeytabFileConfig,
    KeytabError,
    TruncatedInputError,
    LengthMismatchError,
    FieldRangeError,
    KeytabIOError,
)
from .enctypes import EncryptionType, encryption_type_name
from .wire import ByteReader
from .octet_string import CountedOctetString, encode_octet_string, decode_octet_string
from .key_block import KeyBlock, encode_key_block, decode_key_block
from .entry import KeytabEntry, encode_entry, decode_entry, recompute_size
from .keytab_file import (
    Keytab,
    encode_keytab,
    decode_keytab,
    recompute_all_sizes,
    load_keytab,
    save_keytab,
)
from .describe import (
    bytes_to_printable,
    key_fingerprint,
    describe_octet_string,
    describe_key_block,
    describe_entry,
    describe_keytab,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "DEFAULT_FORMAT_VERSION",
    "DEFAULT_FILE_MODE",
    "KeytabFileConfig",
    # Errors
    "KeytabError",
    "TruncatedInputError",
    "LengthMismatchError",
    "FieldRangeError",
    "KeytabIOError",
    # Encryption types
    "EncryptionType",
    "encryption_type_name",
    # Wire
    "ByteReader",
    # Counted octet string
    "CountedOctetString",
    "encode_octet_string",
    "decode_octet_string",
    # Key block
    "KeyBlock",
    "encode_key_block",
    "decode_key_block",
    # Entry
    "KeytabEntry",
    "encode_entry",
    "decode_entry",
    "recompute_size",
    # Keytab file
    "Keytab",
    "encode_keytab",
    "decode_keytab",
    "recompute_all_sizes",
    "load_keytab",
    "save_keytab",
    # Describe
    "bytes_to_printable",
    "key_fingerprint",
    "describe_octet_string",
    "describe_key_block",
    "describe_entry",
    "describe_keytab",
]
