"""CLI entrypoint for converting cell dictionaries to text word lists."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from scel_pipeline.models import ConversionOutcome, ConvertOptions
from scel_pipeline.pipeline import convert_batch, discover_inputs
from scel_pipeline.reporting.report_md import build_report_md


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the conversion command.
    """

    parser = argparse.ArgumentParser(
        description="Convert Sogou cell dictionaries (.scel) into plain-text word lists."
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=Path("."),
        help="A .scel file, or a directory whose .scel files are converted (default: .).",
    )
    parser.add_argument(
        "--with-pinyin",
        action="store_true",
        help="Append the apostrophe-separated pinyin reading after a tab.",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional markdown report output path.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log decoding details.")
    return parser


def _print_summary(outcomes: Sequence[ConversionOutcome]) -> None:
    """Print a per-file summary table."""

    if not outcomes:
        print("No .scel files found; nothing converted.")
        return

    rows = [
        [
            str(outcome.output_path if outcome.ok else outcome.input_path),
            str(outcome.stats.records_emitted),
            str(outcome.stats.groups_attempted),
            str(len(outcome.stats.mismatches)),
            "ok" if outcome.ok else "failed",
        ]
        for outcome in outcomes
    ]
    print(_format_table(["file", "words", "groups", "mismatches", "status"], rows))


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through text output.

    Returns:
        Zero when every file converted, one when any file failed.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        inputs = discover_inputs(args.input)
    except FileNotFoundError as exc:
        raise SystemExit(str(exc)) from exc

    options = ConvertOptions(with_pinyin=args.with_pinyin)
    result = convert_batch(inputs, options)

    if args.report is not None:
        args.report.write_text(build_report_md(result.outcomes), encoding="utf-8")
        print(f"Wrote report to {args.report}")

    _print_summary(result.outcomes)
    print(f"\nConverted {result.succeeded} of {len(result.outcomes)} files.")
    return 0 if result.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
