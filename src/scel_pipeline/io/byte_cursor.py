"""Little-endian binary reads over a seekable byte stream."""

from __future__ import annotations

import struct
from typing import BinaryIO

TEXT_ENCODING = "utf-16-le"

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_U64 = struct.Struct("<Q")


class ScelFormatError(ValueError):
    """Raised when a cell dictionary container cannot be decoded."""


class TruncatedInputError(ScelFormatError):
    """Raised when fewer bytes remain than a read requires."""

    def __init__(self, offset: int, wanted: int, available: int) -> None:
        super().__init__(
            f"truncated input at offset {offset:#x}: wanted {wanted} bytes, got {available}"
        )
        self.offset = offset
        self.wanted = wanted
        self.available = available


def decode_text(raw: bytes) -> str:
    """Decode UTF-16LE bytes, replacing malformed code units instead of failing.

    Args:
        raw: Exact byte payload; no byte-order mark is expected.

    Returns:
        Decoded text with any undecodable unit replaced by U+FFFD.
    """

    return raw.decode(TEXT_ENCODING, errors="replace")


def decode_fixed(raw: bytes) -> str:
    """Decode a fixed-width header window and drop its trailing NUL padding."""

    return decode_text(raw).rstrip("\x00")


class ByteCursor:
    """Sequential reader over any seekable binary stream.

    The cursor never buffers; every read goes straight to the wrapped stream so
    callers can mix absolute seeks and sequential reads freely. Tests pass an
    ``io.BytesIO`` holding a synthetic container.
    """

    def __init__(self, source: BinaryIO) -> None:
        self._source = source

    def tell(self) -> int:
        return self._source.tell()

    def seek(self, offset: int) -> None:
        """Move to an absolute offset. Bounds are checked lazily by the next read."""

        self._source.seek(offset)

    def read_bytes(self, size: int) -> bytes:
        """Read exactly ``size`` bytes.

        Raises:
            TruncatedInputError: If the stream ends first.
        """

        offset = self._source.tell()
        data = self._source.read(size)
        if len(data) != size:
            raise TruncatedInputError(offset, size, len(data))
        return data

    def read_u8(self) -> int:
        return _U8.unpack(self.read_bytes(_U8.size))[0]

    def read_u16(self) -> int:
        return _U16.unpack(self.read_bytes(_U16.size))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self.read_bytes(_U32.size))[0]

    def read_i32(self) -> int:
        return _I32.unpack(self.read_bytes(_I32.size))[0]

    def read_u64(self) -> int:
        return _U64.unpack(self.read_bytes(_U64.size))[0]

    def read_u16_array(self, count: int) -> tuple[int, ...]:
        """Read ``count`` consecutive little-endian ``u16`` values."""

        if count <= 0:
            return ()
        return struct.unpack(f"<{count}H", self.read_bytes(count * _U16.size))

    def read_string(self) -> str:
        """Read a ``u16`` byte length followed by that many UTF-16LE bytes.

        The payload is decoded exactly; NULs are kept.
        """

        length = self.read_u16()
        return decode_text(self.read_bytes(length))

    def read_fixed_string(self, offset: int, width: int) -> str:
        """Read and NUL-trim a fixed-width text window at an absolute offset."""

        self.seek(offset)
        return decode_fixed(self.read_bytes(width))
