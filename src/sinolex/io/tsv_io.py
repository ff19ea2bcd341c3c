"""TSV writers for parsed source records."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from sinolex.models import (
    AlternatePronunciation,
    CedictRecord,
    CitationScan,
    CoctRecord,
    CrossReference,
    MeasureWord,
    TocflRecord,
)

TOCFL_HEADER = ["level", "line", "headword", "pinyin", "word_classes", "tier"]
COCT_HEADER = ["level", "line", "headwords"]
GLOSS_HEADER = [
    "traditional",
    "simplified",
    "pinyin",
    "sense",
    "gloss",
    "citations",
    "measures",
    "pronunciations",
    "xrefs",
]


def _write_rows(
    rows: Sequence[Sequence[str]],
    header: Sequence[str],
    output_path: Path,
    include_header: bool,
) -> None:
    with output_path.open("w", encoding="utf-8") as handle:
        if include_header:
            handle.write("\t".join(header))
            handle.write("\n")
        for row in rows:
            handle.write("\t".join(row))
            handle.write("\n")


def _format_han(trad: str, simp: str, pinyin: str | None) -> str:
    han = trad if trad == simp else f"{trad}|{simp}"
    return f"{han}[{pinyin}]" if pinyin else han


def _format_citations(scan: CitationScan) -> str:
    return " ".join(
        f"{citation.offset}:{_format_han(citation.trad, citation.simp, citation.pinyin)}"
        for citation in scan.citations
    )


def write_tocfl_tsv(
    records: Sequence[TocflRecord], output_path: Path, include_header: bool = True
) -> None:
    """Write one row per headword with the pronunciations assigned to it.

    Args:
        records: Matched graded-list records.
        output_path: Destination TSV file path.
        include_header: Whether to include a header row.
    """

    rows = [
        [
            str(record.level),
            str(record.line_number),
            pair.headword,
            "/".join(pair.pinyins),
            "/".join(record.word_classes),
            record.assignment.tier,
        ]
        for record in records
        for pair in record.assignment.pairs
    ]
    _write_rows(rows, TOCFL_HEADER, output_path, include_header)


def write_coct_tsv(
    records: Sequence[CoctRecord], output_path: Path, include_header: bool = True
) -> None:
    rows = [
        [str(record.level), str(record.line_number), "/".join(record.headwords)]
        for record in records
    ]
    _write_rows(rows, COCT_HEADER, output_path, include_header)


def _format_annotations(
    measures: Sequence[MeasureWord],
    pronunciations: Sequence[AlternatePronunciation],
    xrefs: Sequence[CrossReference],
) -> list[str]:
    return [
        " ".join(_format_han(m.trad, m.simp, m.pinyin) for m in measures),
        " ".join(f"{p.context}:{'|'.join(p.pinyins)}" for p in pronunciations),
        " ".join(
            f"{x.relation}:" + ",".join(_format_han(t.trad, t.simp, t.pinyin) for t in x.targets)
            for x in xrefs
        ),
    ]


def write_gloss_tsv(
    records: Sequence[CedictRecord], output_path: Path, include_header: bool = True
) -> None:
    """Write one row per gloss entry of each dictionary record.

    Record-level annotations go on a row with an empty sense and gloss so
    they are kept when a record has no prose glosses.

    Args:
        records: Parsed dictionary records.
        output_path: Destination TSV file path.
        include_header: Whether to include a header row.
    """

    rows: list[list[str]] = []
    for record in records:
        head = [record.trad, record.simp, record.pinyin or ""]
        if record.measures or record.pronunciations or record.xrefs:
            rows.append(
                head
                + ["", "", ""]
                + _format_annotations(record.measures, record.pronunciations, record.xrefs)
            )
        for entry in record.entries:
            rows.append(
                head
                + [str(entry.sense), entry.text, _format_citations(entry.citations)]
                + _format_annotations(entry.measures, entry.pronunciations, entry.xrefs)
            )
    _write_rows(rows, GLOSS_HEADER, output_path, include_header)
