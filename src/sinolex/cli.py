"""CLI entrypoint for the lexical source readers and the syllable audit."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from sinolex.io.tsv_io import write_coct_tsv, write_gloss_tsv, write_tocfl_tsv
from sinolex.pinyin.inventory import audit_inventory
from sinolex.pipeline import run_cedict, run_coct, run_tocfl


def _resolve_default_cedict_path() -> Path:
    """Resolve default CC-CEDICT path from project layout.

    Returns:
        Preferred dictionary path, favoring ``data/cedict_ts.u8`` when present
        and falling back to the working directory's ``cedict_ts.u8``.
    """

    cwd_data = Path("data") / "cedict_ts.u8"
    if cwd_data.exists():
        return cwd_data
    return Path("cedict_ts.u8")


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


def _count_rows(counts: dict) -> list[list[str]]:
    return [[str(key), str(counts[key])] for key in sorted(counts)]


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Parser with ``tocfl``, ``coct``, ``cedict`` and ``audit-syllables``
        sub-commands.
    """

    parser = argparse.ArgumentParser(
        description="Normalize Pinyin, match headwords and annotate glosses in lexical sources."
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    tocfl = subparsers.add_parser("tocfl", help="Read graded word list level files.")
    tocfl.add_argument(
        "levels", nargs="+", type=Path, help="Level CSV files, in level order."
    )
    tocfl.add_argument("--output", type=Path, default=None, help="Destination TSV path.")
    tocfl.add_argument("--no-header", action="store_true", help="Do not write TSV header.")

    coct = subparsers.add_parser("coct", help="Read the supplementary frequency list.")
    coct.add_argument("path", type=Path, help="Frequency list CSV file.")
    coct.add_argument("--output", type=Path, default=None, help="Destination TSV path.")
    coct.add_argument("--no-header", action="store_true", help="Do not write TSV header.")

    cedict = subparsers.add_parser("cedict", help="Parse and annotate a CC-CEDICT file.")
    cedict.add_argument(
        "--cedict",
        type=Path,
        default=_resolve_default_cedict_path(),
        help="Path to CC-CEDICT .u8 file.",
    )
    cedict.add_argument("--output", type=Path, default=None, help="Destination TSV path.")
    cedict.add_argument("--no-header", action="store_true", help="Do not write TSV header.")

    subparsers.add_parser(
        "audit-syllables", help="Check the syllable table against pypinyin's readings."
    )
    return parser


def _run_tocfl(args: argparse.Namespace) -> int:
    result = run_tocfl(args.levels)
    if args.output is not None:
        write_tocfl_tsv(result.records, output_path=args.output, include_header=not args.no_header)
        print(f"Wrote {len(result.records)} records to {args.output}")
    print("\nRecords by matcher tier:")
    print(_format_table(["tier", "records"], _count_rows(result.tier_counts)))
    print("\nRecords by level:")
    print(_format_table(["level", "records"], _count_rows(result.level_counts)))
    return 0


def _run_coct(args: argparse.Namespace) -> int:
    result = run_coct(args.path)
    if args.output is not None:
        write_coct_tsv(result.records, output_path=args.output, include_header=not args.no_header)
        print(f"Wrote {len(result.records)} records to {args.output}")
    print("\nRecords by level:")
    print(_format_table(["level", "records"], _count_rows(result.level_counts)))
    return 0


def _run_cedict(args: argparse.Namespace) -> int:
    if not args.cedict.exists():
        raise SystemExit(f"CC-CEDICT file not found: {args.cedict}")
    result = run_cedict(args.cedict)
    if args.output is not None:
        write_gloss_tsv(result.records, output_path=args.output, include_header=not args.no_header)
        print(f"Wrote {len(result.records)} records to {args.output}")
    print("\nAnnotation summary:")
    print(_format_table(["annotation", "count"], _count_rows(result.annotation_counts)))
    return 0


def _run_audit(args: argparse.Namespace) -> int:
    audit = audit_inventory()
    print(
        f"pypinyin readings: total={audit.total}, accepted={len(audit.accepted)}, "
        f"rejected={len(audit.rejected)}"
    )
    if audit.rejected:
        rows = [
            [reading, "expected" if reading not in audit.unexpected else "UNEXPECTED"]
            for reading in audit.rejected
        ]
        print("\nRejected readings:")
        print(_format_table(["reading", "status"], rows))
    return 1 if audit.unexpected else 0


COMMANDS = {
    "tocfl": _run_tocfl,
    "coct": _run_coct,
    "cedict": _run_cedict,
    "audit-syllables": _run_audit,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the selected sub-command.

    Returns:
        Zero exit status on success; the syllable audit returns one when it
        finds unexpected rejections.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
