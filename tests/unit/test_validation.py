"""Unit tests for header validation and pinyin syllable checks."""

from __future__ import annotations

import pytest

from scel_pipeline.io.byte_cursor import ScelFormatError
from scel_pipeline.models import HanziTableOffset, ScelHeader
from scel_pipeline.validation import find_unknown_syllables, validate_header


def _header(*, word_entry_count: int = 1, pinyin_table_offset: int = 0x1540) -> ScelHeader:
    return ScelHeader(
        format_version=0,
        hanzi_table_offset=HanziTableOffset.DEFAULT,
        pinyin_table_offset=pinyin_table_offset,
        word_entry_count=word_entry_count,
    )


def test_validate_header_accepts_offsets_inside_file() -> None:
    validate_header(_header(), file_size=0x3000)
    validate_header(_header(), file_size=None)


def test_validate_header_rejects_negative_word_count() -> None:
    with pytest.raises(ScelFormatError, match="negative word entry count -1") as excinfo:
        validate_header(_header(word_entry_count=-1))

    assert "yield an empty word list" in str(excinfo.value)


def test_validate_header_rejects_pinyin_table_past_end_of_file() -> None:
    with pytest.raises(ScelFormatError, match="beyond end of file"):
        validate_header(_header(pinyin_table_offset=0x9000), file_size=0x3000)


def test_validate_header_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        validate_header(_header(word_entry_count=-5, pinyin_table_offset=10), file_size=10)


def test_find_unknown_syllables_accepts_mandarin_and_v_spelling() -> None:
    table = {0: "a", 1: "zhong", 2: "lv", 3: "nve", 4: "ng", 5: "er"}

    assert find_unknown_syllables(table) == ()


def test_find_unknown_syllables_lists_sorted_distinct_unknowns() -> None:
    table = {0: "ni", 1: "xyz", 2: "qqq", 3: "xyz"}

    assert find_unknown_syllables(table) == ("qqq", "xyz")
