"""Read the supplementary frequency list (COCT).

Lines are ``level,headwords`` where the headword field uses the same
alternative notation as the graded list and may carry sense numbers such
as ``會1``.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from sinolex.errors import RecordFormatError, SinolexError
from sinolex.matching.multifield import parse_multifield
from sinolex.models import CoctRecord
from sinolex.sources.multifile import iter_lines

logger = logging.getLogger(__name__)

COCT_LINE_RE = re.compile(r"^([^,]+),([^,]+)$")
LEVEL_RE = re.compile(r"^[0-9]+$")
SENSE_NUMBER_RE = re.compile(r"^([^0-9\s]+)\s*[0-9]+$")
HEADWORD_RE = re.compile(r"^[\u4e00-\u9fff]+$")


def parse_coct_line(text: str, line_number: int) -> CoctRecord | None:
    """Parse one frequency-list line.

    Args:
        text: Raw line without its line break.
        line_number: 1-based line number for the record and messages.

    Returns:
        The parsed record, or ``None`` for a blank line.

    Raises:
        RecordFormatError: If the line, level or a headword is invalid.
        MultifieldError: If the headword notation is malformed.
    """

    if not text.strip():
        return None
    where = f"COCT line {line_number}"

    match = COCT_LINE_RE.match(text)
    if not match:
        raise RecordFormatError(f"{where}: Invalid record format.")
    level_text, values = match.groups()
    level_text = level_text.strip()
    if not LEVEL_RE.match(level_text):
        raise RecordFormatError(f"{where}: Invalid word level '{level_text}'.")

    try:
        headwords = parse_multifield(values)
    except SinolexError as exc:
        raise type(exc)(f"{where} headwords: {exc}") from exc

    headwords = list(dict.fromkeys(SENSE_NUMBER_RE.sub(r"\1", headword) for headword in headwords))
    for headword in headwords:
        if not HEADWORD_RE.match(headword):
            raise RecordFormatError(f"{where}: Invalid headword '{headword}'.")

    return CoctRecord(level=int(level_text), line_number=line_number, headwords=tuple(headwords))


def read_coct(path: Path) -> list[CoctRecord]:
    records: list[CoctRecord] = []
    for line in iter_lines([path]):
        record = parse_coct_line(line.text, line.line_number)
        if record is not None:
            records.append(record)
    logger.info("Read %d COCT records from %s", len(records), path)
    return records
