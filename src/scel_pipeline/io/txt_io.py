"""Plain-text serialization of decoded word records."""

from __future__ import annotations

from typing import Iterable, TextIO

from scel_pipeline.models import OutputRecord


def format_record(record: OutputRecord, with_pinyin: bool) -> str:
    """Render one record as an output line including its newline."""

    if with_pinyin:
        return f"{record.hanzi}\t{record.pinyin}\n"
    return f"{record.hanzi}\n"


def write_records(records: Iterable[OutputRecord], handle: TextIO, with_pinyin: bool) -> int:
    """Stream records to an open text handle as they are produced.

    Args:
        records: Records to write, typically a live decoder generator.
        handle: Destination opened for text writing.
        with_pinyin: Whether to append the tab-separated pinyin reading.

    Returns:
        Number of lines written.
    """

    written = 0
    for record in records:
        handle.write(format_record(record, with_pinyin))
        written += 1
    return written
