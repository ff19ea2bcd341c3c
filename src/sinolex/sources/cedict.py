"""Parse CC-CEDICT dictionary lines into annotated records."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
import logging
import re
from pathlib import Path
from typing import Iterable

from sinolex.errors import RecordFormatError
from sinolex.gloss.analysis import analyze_gloss, split_definition
from sinolex.models import (
    AlternatePronunciation,
    CedictRecord,
    CrossReference,
    GlossEntry,
    MeasureWord,
)
from sinolex.pinyin.cedict import cedict_pinyin
from sinolex.sources.multifile import iter_lines

logger = logging.getLogger(__name__)

CEDICT_ENTRY_RE = re.compile(r"^\s*(\S+)\s+(\S+)\s*\[([^\[\]]*)\]\s*/(.*)/\s*$")
COMMENT_RE = re.compile(r"^\s*#")


def parse_cedict_line(text: str, line_number: int) -> CedictRecord | None:
    """Parse one dictionary line.

    The bracketed pronunciation is normalized with :func:`cedict_pinyin`;
    when that fails the record keeps ``pinyin=None``. Each gloss is analyzed;
    glosses consumed entirely by an annotation contribute that annotation to
    the record, the others become ``GlossEntry`` values. A sense number is
    allocated only for senses that yield at least one entry.

    Args:
        text: Raw line without its line break.
        line_number: 1-based line number for the record and messages.

    Returns:
        The parsed record, or ``None`` for blank and comment lines.

    Raises:
        RecordFormatError: If the line is not ``Trad Simp [Pinyin] /.../`` or
            its definition is empty.
    """

    if not text.strip() or COMMENT_RE.match(text):
        return None
    where = f"Dictionary line {line_number}"

    match = CEDICT_ENTRY_RE.match(text)
    if not match:
        raise RecordFormatError(f"{where}: Invalid record format.")
    trad, simp, raw_pinyin, definition = match.groups()

    pinyin = cedict_pinyin(raw_pinyin)
    if pinyin is None:
        logger.debug("%s: pronunciation '%s' not normalized", where, raw_pinyin)

    try:
        senses = split_definition(definition)
    except RecordFormatError as exc:
        raise RecordFormatError(f"{where}: {exc}") from exc

    measures: list[MeasureWord] = []
    pronunciations: list[AlternatePronunciation] = []
    xrefs: list[CrossReference] = []
    entries: list[GlossEntry] = []
    sense_number = 0

    for glosses in senses:
        first_gloss = True
        for gloss in glosses:
            analysis = analyze_gloss(gloss)
            gloss_measures = analysis.measures.measures if analysis.measures else ()
            gloss_pronunciations = (analysis.pronunciation,) if analysis.pronunciation else ()
            gloss_xrefs = (analysis.xref,) if analysis.xref else ()

            if not analysis.residual:
                measures.extend(gloss_measures)
                pronunciations.extend(gloss_pronunciations)
                xrefs.extend(gloss_xrefs)
                continue

            if first_gloss:
                sense_number += 1
                first_gloss = False
            entries.append(
                GlossEntry(
                    sense=sense_number,
                    text=analysis.residual,
                    citations=analysis.citations,
                    measures=gloss_measures,
                    pronunciations=gloss_pronunciations,
                    xrefs=gloss_xrefs,
                )
            )

    return CedictRecord(
        line_number=line_number,
        trad=trad,
        simp=simp,
        raw_pinyin=raw_pinyin,
        pinyin=pinyin,
        entries=tuple(entries),
        measures=tuple(measures),
        pronunciations=tuple(pronunciations),
        xrefs=tuple(xrefs),
    )


def parse_cedict_lines(lines: Iterable[str]) -> list[CedictRecord]:
    """Parse dictionary lines, numbering them from 1."""

    records: list[CedictRecord] = []
    for line_number, line in enumerate(lines, start=1):
        record = parse_cedict_line(line.rstrip("\r\n"), line_number)
        if record is not None:
            records.append(record)
    return records


@dataclass(frozen=True)
class CedictDictionary:
    """Read-only dictionary loaded lazily from a CC-CEDICT ``.u8`` file.

    Records are parsed once, on first access.
    """

    path: Path

    @cached_property
    def records(self) -> tuple[CedictRecord, ...]:
        """Load and cache parsed records.

        Raises:
            FileNotFoundError: If the dictionary file does not exist.
            RecordFormatError: If a line is malformed.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"CC-CEDICT file not found: {self.path}")
        records: list[CedictRecord] = []
        for line in iter_lines([self.path]):
            record = parse_cedict_line(line.text, line.line_number)
            if record is not None:
                records.append(record)
        logger.info("Read %d dictionary records from %s", len(records), self.path)
        return tuple(records)
