"""Kerberos encryption type codes carried in key blocks."""

from enum import IntEnum
from typing import Optional


class EncryptionType(IntEnum):
    """Encryption type tags (RFC 3961 / RFC 8009 assignments)."""
    NULL = 0x0000
    DES_CBC_CRC = 0x0001
    DES_CBC_MD4 = 0x0002
    DES_CBC_MD5 = 0x0003
    RESERVED_OLD_RC4_HMAC = 0x0004  # old RC4-HMAC
    DES3_CBC_MD5 = 0x0005
    DES3_CBC_SHA1 = 0x0010
    DES3_HMAC_SHA1_KD = 0x0010
    AES128_CTS_HMAC_SHA1_96 = 0x0011
    AES256_CTS_HMAC_SHA1_96 = 0x0012
    AES128_CTS_HMAC_SHA256_128 = 0x0013
    AES256_CTS_HMAC_SHA384_192 = 0x0014
    RC4_HMAC = 0x0017
    RC4_HMAC_EXP = 0x0018
    CAMELLIA128_CTS_CMAC = 0x0019
    CAMELLIA256_CTS_CMAC = 0x001A

    @property
    def display_name(self) -> str:
        """Hyphenated name as printed by Kerberos tooling."""
        return self.name.replace("_", "-")


def encryption_type_name(code: int) -> Optional[str]:
    """
    Look up the display name for an encryption type code.

    Unknown codes are valid keytab data, they just have no name.

    Args:
        code: Raw 16-bit encryption type

    Returns:
        Name such as "AES256-CTS-HMAC-SHA1-96", or None if unrecognised
    """
    try:
        return EncryptionType(code).display_name
    except ValueError:
        return None
