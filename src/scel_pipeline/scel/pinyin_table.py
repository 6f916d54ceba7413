"""Pinyin syllable table loader."""

from __future__ import annotations

import logging

from scel_pipeline.io.byte_cursor import ByteCursor, TruncatedInputError

logger = logging.getLogger(__name__)


def load_pinyin_table(cursor: ByteCursor) -> dict[int, str]:
    """Load the ``index -> syllable`` table at the cursor position.

    The table is an ``i32`` entry count followed by ``(u16 index, string)``
    pairs. Duplicate indexes overwrite earlier ones. The count is not checked
    against the remaining input; a short read inside the entries ends the
    table with what was read so far.

    Args:
        cursor: Cursor positioned at the pinyin table.

    Returns:
        Mapping of syllable index to syllable text such as ``"zhong"``.

    Raises:
        TruncatedInputError: If the entry count itself cannot be read.
    """

    count = cursor.read_i32()
    table: dict[int, str] = {}
    for position in range(count):
        try:
            index = cursor.read_u16()
            table[index] = cursor.read_string()
        except TruncatedInputError as exc:
            logger.warning(
                "Pinyin table ended after %d of %d entries: %s", position, count, exc
            )
            break
    return table
