"""Validation helpers for decoded headers and pinyin tables."""

from __future__ import annotations

import functools
from typing import Mapping
import unicodedata

from pypinyin import constants as pypinyin_constants

from scel_pipeline.io.byte_cursor import ScelFormatError
from scel_pipeline.models import ScelHeader

# Combining grave, acute, macron and caron: the four Mandarin tone marks.
TONE_COMBINING_MARKS = {"\u0300", "\u0301", "\u0304", "\u030c"}
EXTRA_VALID_SYLLABLES = {"m", "n", "ng", "hm", "hng", "r"}


def validate_header(header: ScelHeader, file_size: int | None = None) -> None:
    """Validate header fields before any table is read.

    Args:
        header: Parsed header.
        file_size: Total container size in bytes, when known.

    Raises:
        ScelFormatError: If the header cannot describe a decodable container.
    """

    errors: list[str] = []
    if header.word_entry_count < 0:
        errors.append(
            f"negative word entry count {header.word_entry_count} "
            "(the group loop would run zero times and yield an empty word list)"
        )
    if file_size is not None and header.pinyin_table_offset >= file_size:
        errors.append(
            f"pinyin table offset {header.pinyin_table_offset:#x} is beyond end of file "
            f"({file_size:#x} bytes)"
        )

    if errors:
        raise ScelFormatError("Header validation failed: " + "; ".join(errors))


def _strip_tone_marks(syllable: str) -> str:
    """Return lowercase toneless pinyin with ``ü`` spelled ``v`` as scel tables do."""

    decomposed = unicodedata.normalize("NFD", syllable.strip().lower())
    toneless = "".join(ch for ch in decomposed if ch not in TONE_COMBINING_MARKS)
    return unicodedata.normalize("NFC", toneless).replace("ü", "v")


@functools.lru_cache(maxsize=1)
def valid_syllables() -> frozenset[str]:
    """Collect toneless Mandarin syllables from pypinyin's character dictionary."""

    syllables: set[str] = set()
    for value in pypinyin_constants.PINYIN_DICT.values():
        for item in str(value).split(","):
            base = _strip_tone_marks(item)
            if base:
                syllables.add(base)
    syllables.update(EXTRA_VALID_SYLLABLES)
    return frozenset(syllables)


def find_unknown_syllables(pinyin_table: Mapping[int, str]) -> tuple[str, ...]:
    """List table syllables that are not recognizable Mandarin pinyin.

    Args:
        pinyin_table: Decoded ``index -> syllable`` table.

    Returns:
        Sorted distinct syllables missing from the known syllable set.
    """

    known = valid_syllables()
    return tuple(
        sorted({value for value in pinyin_table.values() if _strip_tone_marks(value) not in known})
    )
