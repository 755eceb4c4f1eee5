"""Type definitions for the keytab codec."""

from dataclasses import dataclass


# Format constants
DEFAULT_FORMAT_VERSION = 0x0502
FORMAT_VERSION_SIZE = 2
ENTRY_SIZE_SIZE = 4
OCTET_STRING_LENGTH_SIZE = 2
ENCRYPTION_TYPE_SIZE = 2
NUM_COMPONENTS_SIZE = 2
NAME_TYPE_SIZE = 4
TIMESTAMP_SIZE = 4
VNO8_SIZE = 1
VNO_SIZE = 4

# File constants
DEFAULT_FILE_MODE = 0o600


@dataclass
class KeytabFileConfig:
    """Configuration for writing keytab files."""

    file_mode: int = DEFAULT_FILE_MODE
    """Permission bits applied to saved files."""

    restrict_permissions: bool = True
    """Whether to chmod the file after writing."""


# Exception types
class KeytabError(Exception):
    """Base exception for keytab codec errors."""
    pass


class TruncatedInputError(KeytabError):
    """Input is shorter than a length or size field promises."""

    def __init__(self, needed: int, available: int, offset: int) -> None:
        self.needed = needed
        self.available = available
        self.offset = offset
        super().__init__(
            f"Truncated input at offset {offset}: "
            f"needed {needed} bytes, {available} available"
        )


class LengthMismatchError(KeytabError):
    """Declared length disagrees with the actual data size."""

    def __init__(self, field: str, declared: int, actual: int) -> None:
        self.field = field
        self.declared = declared
        self.actual = actual
        super().__init__(
            f"{field} declares length {declared} but holds {actual}"
        )


class FieldRangeError(KeytabError):
    """Integer value does not fit its wire width."""

    def __init__(self, field: str, value: int, size: int) -> None:
        self.field = field
        self.value = value
        self.size = size
        super().__init__(
            f"{field} value {value} does not fit in {size * 8} unsigned bits"
        )


class KeytabIOError(KeytabError):
    """Reading or writing a keytab file failed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Keytab I/O failed for {path}: {reason}")
