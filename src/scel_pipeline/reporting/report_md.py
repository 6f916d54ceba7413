"""Markdown report generation for batch conversion summaries."""

from __future__ import annotations

from typing import Iterable, Sequence

from scel_pipeline.models import ConversionOutcome


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(_cell(value) for value in row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def _cell(value: str) -> str:
    """Escape table delimiters and flatten line breaks from dictionary metadata."""

    return " ".join(value.replace("|", "\\|").split())


def _status(outcome: ConversionOutcome) -> str:
    return "ok" if outcome.ok else f"failed: {outcome.error}"


def build_report_md(outcomes: Sequence[ConversionOutcome]) -> str:
    """Build the markdown report for one batch run.

    Args:
        outcomes: Conversion outcomes in processing order.

    Returns:
        Full markdown content with summary tables.
    """

    file_rows = [
        (
            outcome.input_path.name,
            outcome.header.name if outcome.header else "",
            outcome.header.category if outcome.header else "",
            f"{outcome.header.format_version:#04x}" if outcome.header else "",
            str(outcome.stats.groups_attempted),
            str(outcome.stats.records_emitted),
            str(len(outcome.stats.mismatches)),
            _status(outcome),
        )
        for outcome in outcomes
    ]

    mismatch_rows = [
        (
            outcome.input_path.name,
            str(item.group_number),
            str(item.entry_number),
            item.hanzi,
            str(item.expected_length),
        )
        for outcome in outcomes
        for item in outcome.stats.mismatches
    ]

    syllable_rows = [
        (outcome.input_path.name, ", ".join(outcome.unknown_syllables))
        for outcome in outcomes
        if outcome.unknown_syllables
    ]

    metadata_rows = [
        (outcome.input_path.name, outcome.header.description, outcome.header.samples)
        for outcome in outcomes
        if outcome.header is not None
    ]

    sections = [
        "# Conversion Report",
        "",
        "## Files",
        _markdown_table(
            [
                "file",
                "name",
                "category",
                "version",
                "groups",
                "words",
                "mismatches",
                "status",
            ],
            file_rows,
        ),
        "",
        "## Hanzi/pinyin length mismatches",
        _markdown_table(
            ["file", "group", "entry", "hanzi", "expected_length"],
            mismatch_rows,
        ),
        "",
        "## Unrecognized pinyin syllables",
        _markdown_table(["file", "syllables"], syllable_rows),
        "",
        "## Dictionary metadata",
        _markdown_table(["file", "description", "samples"], metadata_rows),
    ]

    return "\n".join(sections) + "\n"
