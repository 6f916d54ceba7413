"""Unit tests for little-endian reads and UTF-16LE text decoding."""

from __future__ import annotations

import io

import pytest

from scel_pipeline.io.byte_cursor import (
    ByteCursor,
    ScelFormatError,
    TruncatedInputError,
    decode_fixed,
    decode_text,
)


def test_integer_reads_are_little_endian() -> None:
    payload = bytes.fromhex("7f" "3412" "78563412" "feffffff" "0807060504030201")
    cursor = ByteCursor(io.BytesIO(payload))

    assert cursor.read_u8() == 0x7F
    assert cursor.read_u16() == 0x1234
    assert cursor.read_u32() == 0x12345678
    assert cursor.read_i32() == -2
    assert cursor.read_u64() == 0x0102030405060708


def test_seek_is_absolute() -> None:
    cursor = ByteCursor(io.BytesIO(b"\x00\x01\x02\x03"))
    cursor.read_u16()
    cursor.seek(1)

    assert cursor.tell() == 1
    assert cursor.read_u8() == 1


def test_short_read_raises_truncated_input_with_position() -> None:
    cursor = ByteCursor(io.BytesIO(b"\x01\x02\x03"))
    cursor.seek(2)

    with pytest.raises(TruncatedInputError, match="offset 0x2") as excinfo:
        cursor.read_u32()

    assert excinfo.value.wanted == 4
    assert excinfo.value.available == 1
    assert isinstance(excinfo.value, ScelFormatError)


def test_read_past_end_after_seek_is_truncated() -> None:
    cursor = ByteCursor(io.BytesIO(b"\x00" * 8))
    cursor.seek(100)

    with pytest.raises(TruncatedInputError):
        cursor.read_i32()


def test_read_string_is_exact_and_keeps_nuls() -> None:
    raw = "中\x00".encode("utf-16-le")
    cursor = ByteCursor(io.BytesIO(len(raw).to_bytes(2, "little") + raw + b"\xff"))

    assert cursor.read_string() == "中\x00"
    assert cursor.read_u8() == 0xFF


def test_read_string_with_missing_payload_is_truncated() -> None:
    cursor = ByteCursor(io.BytesIO(b"\x06\x00" + "ab".encode("utf-16-le")))

    with pytest.raises(TruncatedInputError):
        cursor.read_string()


def test_read_u16_array_handles_empty_and_values() -> None:
    cursor = ByteCursor(io.BytesIO(b"\x01\x00\x02\x01"))

    assert cursor.read_u16_array(0) == ()
    assert cursor.read_u16_array(2) == (1, 0x0102)


def test_decode_text_replaces_malformed_units() -> None:
    # Lone high surrogate followed by "A".
    decoded = decode_text(b"\x00\xd8A\x00")

    assert decoded.endswith("A")
    assert "\ufffd" in decoded


def test_decode_text_replaces_odd_trailing_byte() -> None:
    assert decode_text("你".encode("utf-16-le") + b"\x41") == "你\ufffd"


def test_decode_fixed_trims_trailing_nul_padding_only() -> None:
    raw = "网络\x00流行".encode("utf-16-le").ljust(32, b"\x00")

    assert decode_fixed(raw) == "网络\x00流行"


def test_read_fixed_string_reads_window_at_offset() -> None:
    data = b"\xaa" * 4 + "词库".encode("utf-16-le").ljust(16, b"\x00")
    cursor = ByteCursor(io.BytesIO(data))

    assert cursor.read_fixed_string(4, 16) == "词库"
