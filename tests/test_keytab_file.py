"""Tests for whole keytab files."""

import logging
import stat

import pytest
from keytab.entry import KeytabEntry
from keytab.enctypes import EncryptionType
from keytab.key_block import KeyBlock
from keytab.keytab_file import (
    Keytab,
    decode_keytab,
    encode_keytab,
    load_keytab,
    recompute_all_sizes,
    save_keytab,
)
from keytab.types import (
    DEFAULT_FORMAT_VERSION,
    KeytabFileConfig,
    KeytabIOError,
    LengthMismatchError,
    TruncatedInputError,
)
from .test_vectors import (
    ENTRY_HEX,
    FORMAT_VERSION_HEX,
    LEGACY_ENTRY_HEX,
    SERVICE_ENTRY_HEX,
)


def make_keytab(count: int) -> Keytab:
    """Keytab with ``count`` distinct entries, sizes not yet computed."""
    keytab = Keytab(format_version=0x0502)
    for i in range(count):
        entry = KeytabEntry.from_principal(
            f"host/node{i}.example.com@EXAMPLE.COM",
            KeyBlock.from_key(EncryptionType.AES128_CTS_HMAC_SHA1_96, bytes([i]) * 16),
            timestamp=1700000000 + i,
            vno=i + 1,
        )
        entry.size = 0
        keytab.add_entry(entry)
    return keytab


@pytest.fixture
def keytab_bytes() -> bytes:
    """Version header plus the two reference entries."""
    return bytes.fromhex(FORMAT_VERSION_HEX + ENTRY_HEX + SERVICE_ENTRY_HEX)


class TestKeytabEncodeDecode:
    """Test keytab encode/decode."""

    def test_decode(self, keytab_bytes) -> None:
        """Entries are decoded in file order."""
        keytab = decode_keytab(keytab_bytes)

        assert keytab.format_version == DEFAULT_FORMAT_VERSION
        assert [e.principal for e in keytab.entries] == [
            "krbtgt@TESTSEGMENT.local",
            "HTTP/web.example.com@EXAMPLE.COM",
        ]
        assert keytab.consumed_size == len(keytab_bytes)

    def test_reencode_is_byte_identical(self, keytab_bytes) -> None:
        """Entries carrying a vno re-encode unchanged."""
        assert encode_keytab(decode_keytab(keytab_bytes)) == keytab_bytes

    def test_sequence_integrity(self) -> None:
        """N entries come back as N equal entries in the same order."""
        original = make_keytab(5)
        recompute_all_sizes(original)

        decoded = decode_keytab(encode_keytab(original))

        assert len(decoded.entries) == 5
        for source, result in zip(original.entries, decoded.entries):
            assert result == source
        assert decoded == original

    def test_empty_keytab(self) -> None:
        """A version header alone is a valid, empty keytab."""
        keytab = decode_keytab(b"\x05\x02")

        assert keytab == Keytab()
        assert encode_keytab(Keytab()) == b"\x05\x02"

    def test_legacy_entries_grow(self) -> None:
        """Each entry without a trailing vno grows by 4 bytes on re-encode."""
        data = bytes.fromhex(FORMAT_VERSION_HEX + LEGACY_ENTRY_HEX + LEGACY_ENTRY_HEX)

        reencoded = encode_keytab(decode_keytab(data))

        assert len(reencoded) == len(data) + 8
        assert reencoded == bytes.fromhex(FORMAT_VERSION_HEX + ENTRY_HEX + ENTRY_HEX)

    def test_equality(self, keytab_bytes) -> None:
        """Version, count and order all take part in equality."""
        a = decode_keytab(keytab_bytes)
        b = decode_keytab(keytab_bytes)
        assert a == b

        b.entries.reverse()
        assert a != b

        c = decode_keytab(keytab_bytes)
        c.format_version = 0x0501
        assert a != c


class TestKeytabEditing:
    """Test in-memory edits followed by re-encoding."""

    def test_add_and_remove(self, keytab_bytes) -> None:
        """Entries can be appended and removed before re-encoding."""
        keytab = decode_keytab(keytab_bytes)
        removed = keytab.remove_entry(0)
        keytab.add_entry(removed)

        decoded = decode_keytab(encode_keytab(keytab))

        assert [e.principal for e in decoded.entries] == [
            "HTTP/web.example.com@EXAMPLE.COM",
            "krbtgt@TESTSEGMENT.local",
        ]

    def test_find_entries(self, keytab_bytes) -> None:
        """Lookup by principal scans in file order."""
        keytab = decode_keytab(keytab_bytes + bytes.fromhex(ENTRY_HEX))

        found = keytab.find_entries("krbtgt@TESTSEGMENT.local")

        assert len(found) == 2
        assert keytab.find_entries("nobody@EXAMPLE.COM") == []

    def test_mutation_needs_recompute(self, keytab_bytes) -> None:
        """After a mutation only recompute_all_sizes restores equality."""
        keytab = decode_keytab(keytab_bytes)
        keytab.entries[0].key = KeyBlock.from_key(EncryptionType.AES256_CTS_HMAC_SHA1_96, bytes(32))

        decoded = decode_keytab(encode_keytab(keytab))
        assert decoded != keytab

        recompute_all_sizes(keytab)
        assert decoded == keytab
        assert keytab.entries[0].size == 62 + 16

    def test_recompute_stops_at_first_failure(self) -> None:
        """Entries before a bad one are updated; later ones are not."""
        keytab = make_keytab(3)
        keytab.entries[1].realm.length = 99

        with pytest.raises(LengthMismatchError):
            recompute_all_sizes(keytab)

        assert keytab.entries[0].size != 0
        assert keytab.entries[2].size == 0

    def test_encode_propagates_first_error(self) -> None:
        """A bad entry fails the whole encode."""
        keytab = make_keytab(2)
        keytab.entries[1].key.key.length = 1

        with pytest.raises(LengthMismatchError):
            encode_keytab(keytab)


class TestKeytabTruncation:
    """Test truncated keytab input."""

    def test_missing_version(self) -> None:
        """Fewer than 2 bytes is truncation."""
        with pytest.raises(TruncatedInputError):
            decode_keytab(b"")
        with pytest.raises(TruncatedInputError):
            decode_keytab(b"\x05")

    def test_cut_inside_entry(self, keytab_bytes) -> None:
        """Any cut that leaves a partial entry fails."""
        boundaries = {2, 2 + len(bytes.fromhex(ENTRY_HEX)), len(keytab_bytes)}

        for cut in range(len(keytab_bytes)):
            if cut in boundaries:
                continue
            with pytest.raises(TruncatedInputError):
                decode_keytab(keytab_bytes[:cut])

    def test_cut_at_entry_boundary(self, keytab_bytes) -> None:
        """A cut between entries is simply a shorter keytab."""
        cut = 2 + len(bytes.fromhex(ENTRY_HEX))

        keytab = decode_keytab(keytab_bytes[:cut])

        assert len(keytab.entries) == 1

    def test_trailing_partial_entry(self, keytab_bytes) -> None:
        """Leftover bytes too short for an entry are an error."""
        with pytest.raises(TruncatedInputError):
            decode_keytab(keytab_bytes + b"\x00\x00")


class TestKeytabFiles:
    """Test loading and saving keytab files."""

    def test_save_and_load(self, tmp_path) -> None:
        """A saved keytab loads back equal."""
        keytab = make_keytab(3)
        recompute_all_sizes(keytab)
        path = tmp_path / "test.keytab"

        save_keytab(path, keytab)
        loaded = load_keytab(path)

        assert loaded == keytab
        assert path.read_bytes() == encode_keytab(keytab)

    def test_load_reference_bytes(self, tmp_path, keytab_bytes) -> None:
        """Loading accepts str paths."""
        path = tmp_path / "krb5.keytab"
        path.write_bytes(keytab_bytes)

        keytab = load_keytab(str(path))

        assert len(keytab.entries) == 2

    def test_saved_file_is_private(self, tmp_path) -> None:
        """Saved files default to owner read/write only."""
        path = tmp_path / "private.keytab"

        save_keytab(path, Keytab())

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_custom_file_mode(self, tmp_path) -> None:
        """The file mode comes from the config."""
        path = tmp_path / "shared.keytab"

        save_keytab(path, Keytab(), KeytabFileConfig(file_mode=0o640))

        assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_load_missing_file(self, tmp_path) -> None:
        """A missing file raises KeytabIOError chained to the OSError."""
        path = tmp_path / "missing.keytab"

        with pytest.raises(KeytabIOError) as exc_info:
            load_keytab(path)

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.path == str(path)

    def test_save_into_missing_directory(self, tmp_path) -> None:
        """An unwritable path raises KeytabIOError."""
        with pytest.raises(KeytabIOError):
            save_keytab(tmp_path / "nope" / "x.keytab", Keytab())

    def test_load_truncated_file(self, tmp_path) -> None:
        """Malformed contents surface as TruncatedInputError."""
        path = tmp_path / "bad.keytab"
        path.write_bytes(bytes.fromhex(FORMAT_VERSION_HEX + ENTRY_HEX)[:-1])

        with pytest.raises(TruncatedInputError):
            load_keytab(path)

    def test_save_logs_debug(self, tmp_path, caplog) -> None:
        """File I/O emits debug records."""
        path = tmp_path / "logged.keytab"

        with caplog.at_level(logging.DEBUG, logger="keytab.keytab_file"):
            save_keytab(path, Keytab())
            load_keytab(path)

        assert "Wrote 2 bytes" in caplog.text
        assert "Read 2 bytes" in caplog.text
