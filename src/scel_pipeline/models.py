"""Data models shared by the scel decoding pipeline.

Records are immutable contracts between the header parser, the pinyin table
loader, the word-list decoder and the converter, so each piece can be tested
in isolation with synthetic in-memory containers. ``DecodeStats`` is the one
mutable record: the word-list decoder fills it while streaming.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

VERSION_SENTINEL = 0x45


class HanziTableOffset(IntEnum):
    """Absolute start of the word-list (hanzi) table.

    The container carries no pointer to this table; its position depends only
    on the format version byte.
    """

    DEFAULT = 0x2628
    EXTENDED = 0x26C4

    @classmethod
    def for_version(cls, version: int) -> HanziTableOffset:
        return cls.EXTENDED if version == VERSION_SENTINEL else cls.DEFAULT


@dataclass(frozen=True)
class ScelHeader:
    """Fixed-offset metadata at the start of a cell dictionary file."""

    format_version: int
    hanzi_table_offset: HanziTableOffset
    pinyin_table_offset: int
    word_entry_count: int
    name: str = ""
    category: str = ""
    description: str = ""
    samples: str = ""


@dataclass(frozen=True)
class WordGroup:
    """Group header shared by a run of homophone word entries."""

    pinyin_indexes: tuple[int, ...]
    entry_count: int

    @property
    def expected_length(self) -> int:
        """Number of hanzi every entry of this group should contain."""

        return len(self.pinyin_indexes)


@dataclass(frozen=True)
class WordEntry:
    """One decoded word inside a group."""

    hanzi: str
    weight: int
    reserved_length: int = 0


@dataclass(frozen=True)
class OutputRecord:
    """One output line worth of data."""

    hanzi: str
    pinyin: str


@dataclass(frozen=True)
class LengthMismatch:
    """A hanzi string whose length disagreed with its group's pinyin count.

    Numbers are 1-based positions: the group within the word list and the
    entry within the group.
    """

    group_number: int
    entry_number: int
    hanzi: str
    expected_length: int


@dataclass
class DecodeStats:
    """Counters collected while streaming one word list."""

    groups_attempted: int = 0
    records_emitted: int = 0
    mismatches: list[LengthMismatch] = field(default_factory=list)
    ended_early: bool = False

    @property
    def groups_abandoned(self) -> int:
        return len(self.mismatches)


@dataclass(frozen=True)
class ConvertOptions:
    """Process-wide conversion settings, fixed at startup."""

    with_pinyin: bool = False


@dataclass(frozen=True)
class ConversionOutcome:
    """Result of converting one input file.

    Attributes:
        input_path: Source ``.scel`` path.
        output_path: Text file written (possibly partially on failure).
        header: Parsed header, or ``None`` when parsing never completed.
        stats: Word-list decoding counters.
        unknown_syllables: Pinyin table syllables not recognized as Mandarin.
        error: Failure message when the conversion aborted.
    """

    input_path: Path
    output_path: Path
    header: ScelHeader | None = None
    stats: DecodeStats = field(default_factory=DecodeStats)
    unknown_syllables: tuple[str, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
