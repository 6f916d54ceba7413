"""Top-level orchestration for converting cell dictionaries to text."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Iterable

from scel_pipeline.io.byte_cursor import ByteCursor
from scel_pipeline.io.txt_io import write_records
from scel_pipeline.models import ConversionOutcome, ConvertOptions, DecodeStats, ScelHeader
from scel_pipeline.scel.header import parse_header
from scel_pipeline.scel.pinyin_table import load_pinyin_table
from scel_pipeline.scel.word_list import iter_word_records
from scel_pipeline.validation import find_unknown_syllables, validate_header

logger = logging.getLogger(__name__)

SCEL_SUFFIX = ".scel"
OUTPUT_SUFFIX = ".txt"
OUTPUT_ENCODING = "utf-8"


@dataclass(frozen=True)
class BatchResult:
    """Result bundle returned by :func:`convert_batch`.

    Attributes:
        outcomes: One outcome per input, in processing order.
    """

    outcomes: tuple[ConversionOutcome, ...]

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.succeeded


def discover_inputs(path: Path) -> list[Path]:
    """Resolve the CLI input path to the list of containers to convert.

    Args:
        path: A single container file, or a directory scanned non-recursively
            for ``*.scel`` files.

    Returns:
        Sorted container paths; empty for a directory without containers.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """

    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")
    if path.is_dir():
        return sorted(item for item in path.glob(f"*{SCEL_SUFFIX}") if item.is_file())
    return [path]


def output_path_for(input_path: Path) -> Path:
    """Return the text path written next to ``input_path``."""

    return input_path.with_suffix(OUTPUT_SUFFIX)


def convert(input_path: Path, options: ConvertOptions) -> ConversionOutcome:
    """Convert one container into a text word list.

    The output file is created (or truncated) before the container is read,
    so a container that fails early still leaves an empty text file. Records
    are written as they are decoded. Any I/O or format failure is logged and
    reported on the outcome instead of propagating; output already written
    stays on disk.

    Args:
        input_path: Container to read.
        options: Output settings.

    Returns:
        ``ConversionOutcome`` describing what was decoded and whether it failed.
    """

    output_path = output_path_for(input_path)
    stats = DecodeStats()
    header: ScelHeader | None = None
    unknown_syllables: tuple[str, ...] = ()

    try:
        with output_path.open(
            "w", encoding=OUTPUT_ENCODING, newline="\n"
        ) as handle, input_path.open("rb") as source:
            cursor = ByteCursor(source)
            header = parse_header(cursor)
            validate_header(header, file_size=os.fstat(source.fileno()).st_size)

            cursor.seek(header.pinyin_table_offset)
            pinyin_table = load_pinyin_table(cursor)
            unknown_syllables = find_unknown_syllables(pinyin_table)

            records = iter_word_records(cursor, header, pinyin_table, stats)
            write_records(records, handle, with_pinyin=options.with_pinyin)
    except (OSError, ValueError) as exc:
        logger.error("Failed to convert %s: %s", input_path, exc)
        return ConversionOutcome(
            input_path=input_path,
            output_path=output_path,
            header=header,
            stats=stats,
            unknown_syllables=unknown_syllables,
            error=str(exc),
        )

    if stats.mismatches:
        logger.info(
            "%s: abandoned %d groups after hanzi/pinyin length mismatches",
            input_path,
            stats.groups_abandoned,
        )
    return ConversionOutcome(
        input_path=input_path,
        output_path=output_path,
        header=header,
        stats=stats,
        unknown_syllables=unknown_syllables,
    )


def convert_batch(paths: Iterable[Path], options: ConvertOptions) -> BatchResult:
    """Convert each container in turn; one failing file never stops the batch."""

    outcomes: list[ConversionOutcome] = []
    for path in paths:
        logger.info("Converting %s", path)
        outcomes.append(convert(path, options))
    return BatchResult(outcomes=tuple(outcomes))
