"""Unit tests for markdown report generation."""

from __future__ import annotations

from pathlib import Path

from scel_pipeline.models import (
    ConversionOutcome,
    DecodeStats,
    HanziTableOffset,
    LengthMismatch,
    ScelHeader,
)
from scel_pipeline.reporting.report_md import build_report_md


def test_build_report_md_contains_required_sections() -> None:
    """Report output should include all summary sections and per-file rows."""

    header = ScelHeader(
        format_version=0x45,
        hanzi_table_offset=HanziTableOffset.EXTENDED,
        pinyin_table_offset=0x1540,
        word_entry_count=2,
        name="城市信息",
        category="地名",
        description="全国城市|区县\n名称",
        samples="北京 上海",
    )
    stats = DecodeStats(
        groups_attempted=2,
        records_emitted=3,
        mismatches=[LengthMismatch(2, 1, "重庆市", 2)],
    )
    outcomes = [
        ConversionOutcome(
            input_path=Path("city.scel"),
            output_path=Path("city.txt"),
            header=header,
            stats=stats,
            unknown_syllables=("xyz",),
        ),
        ConversionOutcome(
            input_path=Path("broken.scel"),
            output_path=Path("broken.txt"),
            error="truncated input",
        ),
    ]

    markdown = build_report_md(outcomes)

    assert "## Files" in markdown
    assert "## Hanzi/pinyin length mismatches" in markdown
    assert "## Unrecognized pinyin syllables" in markdown
    assert "## Dictionary metadata" in markdown
    assert "| city.scel | 城市信息 | 地名 | 0x45 | 2 | 3 | 1 | ok |" in markdown
    assert "| broken.scel |  |  |  | 0 | 0 | 0 | failed: truncated input |" in markdown
    assert "| city.scel | 2 | 1 | 重庆市 | 2 |" in markdown
    assert "| city.scel | xyz |" in markdown
    assert "全国城市\\|区县 名称" in markdown


def test_build_report_md_with_no_outcomes_renders_empty_tables() -> None:
    markdown = build_report_md([])

    assert markdown.startswith("# Conversion Report\n")
    assert "| file | name | category | version | groups | words | mismatches | status |" in markdown
