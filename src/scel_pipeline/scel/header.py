"""Fixed-offset header parsing for cell dictionary containers."""

from __future__ import annotations

import logging

from scel_pipeline.io.byte_cursor import ByteCursor, TruncatedInputError
from scel_pipeline.models import HanziTableOffset, ScelHeader

logger = logging.getLogger(__name__)

PINYIN_TABLE_OFFSET_AT = 0x00
FORMAT_VERSION_AT = 0x04
WORD_ENTRY_COUNT_AT = 0x124

# (field, offset, window width in bytes)
METADATA_WINDOWS = (
    ("name", 0x130, 0x200),
    ("category", 0x338, 0x200),
    ("description", 0x540, 0x800),
    ("samples", 0xD40, 0x800),
)


def _read_metadata(cursor: ByteCursor) -> dict[str, str]:
    """Read descriptive text windows, leaving unreadable ones empty."""

    values: dict[str, str] = {}
    for name, offset, width in METADATA_WINDOWS:
        try:
            values[name] = cursor.read_fixed_string(offset, width)
        except TruncatedInputError as exc:
            logger.debug("Header field %s unreadable: %s", name, exc)
            values[name] = ""
    return values


def parse_header(cursor: ByteCursor) -> ScelHeader:
    """Parse the container header.

    The pinyin-table offset, version byte and word entry count are required;
    a short read on any of them propagates. Descriptive fields are optional
    metadata and decode to ``""`` when their window cannot be read.

    Args:
        cursor: Cursor over the whole container.

    Returns:
        Parsed header with the hanzi table offset already resolved.

    Raises:
        TruncatedInputError: If a required field lies beyond the end of input.
    """

    cursor.seek(PINYIN_TABLE_OFFSET_AT)
    pinyin_table_offset = cursor.read_u32()
    cursor.seek(FORMAT_VERSION_AT)
    format_version = cursor.read_u8()
    cursor.seek(WORD_ENTRY_COUNT_AT)
    word_entry_count = cursor.read_i32()

    return ScelHeader(
        format_version=format_version,
        hanzi_table_offset=HanziTableOffset.for_version(format_version),
        pinyin_table_offset=pinyin_table_offset,
        word_entry_count=word_entry_count,
        **_read_metadata(cursor),
    )
