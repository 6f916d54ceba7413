"""Streaming decoder for the grouped word list (hanzi table).

The word list is a sequence of groups. Each group carries the pinyin index
sequence shared by its entries, and every entry's hanzi string is expected to
contain one character per pinyin syllable. The header's word entry count is
spent one tick per group, not per entry.
"""

from __future__ import annotations

import logging
from typing import Iterator, Mapping, Sequence

from scel_pipeline.io.byte_cursor import ByteCursor, TruncatedInputError
from scel_pipeline.models import (
    DecodeStats,
    LengthMismatch,
    OutputRecord,
    ScelHeader,
    WordEntry,
    WordGroup,
)

logger = logging.getLogger(__name__)

PINYIN_SEPARATOR = "'"
ENTRY_TRAILER_SIZE = 2


def resolve_pinyin(indexes: Sequence[int], pinyin_table: Mapping[int, str]) -> str:
    """Join the syllables for ``indexes`` with apostrophes.

    Indexes missing from the table resolve to an empty syllable, so the
    separator count always matches the index count.
    """

    return PINYIN_SEPARATOR.join(pinyin_table.get(index, "") for index in indexes)


def read_word_group(cursor: ByteCursor) -> WordGroup:
    """Read a group header: entry count, pinyin byte length, pinyin indexes."""

    entry_count = cursor.read_u16()
    byte_length = cursor.read_u16()
    indexes = cursor.read_u16_array(byte_length // 2)
    return WordGroup(pinyin_indexes=tuple(indexes), entry_count=entry_count)


def read_word_entry(cursor: ByteCursor, hanzi: str) -> WordEntry:
    """Read the fields that follow an accepted hanzi string.

    Layout is ``u16`` reserved length, ``u64`` weight and two ignored bytes.
    """

    reserved_length = cursor.read_u16()
    weight = cursor.read_u64()
    cursor.read_bytes(ENTRY_TRAILER_SIZE)
    return WordEntry(hanzi=hanzi, weight=weight, reserved_length=reserved_length)


def iter_word_records(
    cursor: ByteCursor,
    header: ScelHeader,
    pinyin_table: Mapping[int, str],
    stats: DecodeStats | None = None,
) -> Iterator[OutputRecord]:
    """Yield output records from the word list, one per accepted entry.

    When an entry's hanzi length differs from the group's syllable count the
    rest of that group is abandoned and decoding resumes at the current stream
    position with the next group. This recovers the files known to contain such
    entries but does not guarantee resynchronization; later groups may decode
    as garbage or end the list early.

    A short read anywhere in the list is treated as the end of data.

    Args:
        cursor: Cursor over the whole container.
        header: Parsed header supplying the table offset and group budget.
        pinyin_table: Syllable lookup loaded from the same container.
        stats: Optional counters updated while iterating.

    Yields:
        ``OutputRecord`` values in file order.
    """

    if stats is None:
        stats = DecodeStats()

    cursor.seek(header.hanzi_table_offset)
    try:
        for group_number in range(1, header.word_entry_count + 1):
            stats.groups_attempted += 1
            group = read_word_group(cursor)
            pinyin = resolve_pinyin(group.pinyin_indexes, pinyin_table)

            for entry_number in range(1, group.entry_count + 1):
                hanzi = cursor.read_string()
                if len(hanzi) != group.expected_length:
                    stats.mismatches.append(
                        LengthMismatch(
                            group_number=group_number,
                            entry_number=entry_number,
                            hanzi=hanzi,
                            expected_length=group.expected_length,
                        )
                    )
                    logger.debug(
                        "Group %d entry %d: %r has %d chars, expected %d; skipping rest of group",
                        group_number,
                        entry_number,
                        hanzi,
                        len(hanzi),
                        group.expected_length,
                    )
                    break

                entry = read_word_entry(cursor, hanzi)
                stats.records_emitted += 1
                yield OutputRecord(hanzi=entry.hanzi, pinyin=pinyin)
    except TruncatedInputError as exc:
        stats.ended_early = True
        logger.debug("Word list ended after %d groups: %s", stats.groups_attempted, exc)
