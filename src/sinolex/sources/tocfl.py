"""Read graded-vocabulary (TOCFL) word list lines.

Each level of the list is a separate comma-separated file whose lines hold
an optional topic, a headword field, a Pinyin field and a word-class field.
The three value fields use slash/parenthesis alternative notation.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Sequence

from sinolex.errors import RecordFormatError, SinolexError
from sinolex.matching.matcher import match_pinyin
from sinolex.matching.multifield import parse_multifield
from sinolex.models import TocflRecord
from sinolex.pinyin.tocfl import tocfl_pinyin
from sinolex.sources.multifile import iter_lines

logger = logging.getLogger(__name__)

LINE_REPLACEMENTS = (
    ("\uff08", "("),
    ("\uff09", ")"),
    ("\u200b", ""),
)
PLACEHOLDER = "?"
TRAILING_COMMA_RE = re.compile(r",[ \t]*$")
PLACEHOLDER_FIELD_RE = re.compile(r"^[ \t]*\?[ \t]*$")
LEADING_QUOTE_RE = re.compile(r"^[ \t]*(?:[\"'][ \t]*)?")
TRAILING_QUOTE_RE = re.compile(r"(?:[ \t]*[\"'])?[ \t]*$")
BOPOMOFO_PAREN_RE = re.compile(r"\([ \t\u02ca-\u02d9\u3100-\u3129]*\)")
HEADWORD_RE = re.compile(r"^[\u4e00-\u9fff]+$")
WORD_CLASS_RE = re.compile(r"^([A-Za-z])([A-Za-z\-]*)$")


def _prefixed(exc: SinolexError, where: str) -> SinolexError:
    return type(exc)(f"{where}: {exc}")


def _check_unique(values: Sequence[str], label: str, where: str) -> None:
    if len(set(values)) != len(values):
        raise RecordFormatError(f"{where}: Duplicate {label} values.")


def parse_tocfl_line(text: str, level: int, line_number: int) -> TocflRecord | None:
    """Parse one graded-list line into a matched record.

    Args:
        text: Raw line without its line break.
        level: Level number, used for the record and for messages.
        line_number: 1-based line number, used for the record and for messages.

    Returns:
        The parsed record, or ``None`` for a blank line.

    Raises:
        RecordFormatError: If the line shape or a field is invalid.
        MultifieldError: If a field's alternative notation is malformed.
        InvalidPinyin: If a Pinyin value does not normalize.
        MatchError: If headwords and Pinyin cannot be paired.
    """

    if not text.strip():
        return None
    where = f"TOCFL {level} line {line_number}"

    for src, dst in LINE_REPLACEMENTS:
        text = text.replace(src, dst)
    if PLACEHOLDER in text:
        raise RecordFormatError(f"{where}: Invalid ? character.")
    text = TRAILING_COMMA_RE.sub("," + PLACEHOLDER, text)

    fields = text.split(",")
    if len(fields) not in (3, 4):
        raise RecordFormatError(f"{where}: Wrong number of fields.")
    if len(fields) == 4:
        fields = fields[1:]
    fields[2] = PLACEHOLDER_FIELD_RE.sub("", fields[2])
    fields = [TRAILING_QUOTE_RE.sub("", LEADING_QUOTE_RE.sub("", value)) for value in fields]

    headword_field = BOPOMOFO_PAREN_RE.sub("", fields[0]).strip()
    pinyin_field, class_field = fields[1], fields[2]
    if "(" in class_field or ")" in class_field:
        raise RecordFormatError(f"{where}: Parenthetical word class.")

    try:
        headwords = parse_multifield(headword_field)
    except SinolexError as exc:
        raise _prefixed(exc, f"{where} headwords") from exc
    try:
        raw_pinyins = parse_multifield(pinyin_field)
    except SinolexError as exc:
        raise _prefixed(exc, f"{where} pinyins") from exc
    word_classes: list[str] = []
    if class_field.strip():
        try:
            word_classes = parse_multifield(class_field)
        except SinolexError as exc:
            raise _prefixed(exc, f"{where} word classes") from exc

    for headword in headwords:
        if not HEADWORD_RE.match(headword):
            raise RecordFormatError(f"{where}: Invalid headword '{headword}'.")

    pinyins: list[str] = []
    for raw in raw_pinyins:
        try:
            pinyins.append(tocfl_pinyin(raw))
        except SinolexError as exc:
            raise _prefixed(exc, f"{where} pinyin") from exc

    normalized_classes: list[str] = []
    for word_class in word_classes:
        match = WORD_CLASS_RE.match(word_class)
        if not match:
            raise RecordFormatError(f"{where}: Invalid word class '{word_class}'.")
        normalized_classes.append(match.group(1).upper() + match.group(2).lower())

    for values, label in (
        (headwords, "headword"),
        (pinyins, "pinyin"),
        (normalized_classes, "word class"),
    ):
        _check_unique(values, label, where)

    try:
        assignment = match_pinyin(headwords, pinyins)
    except SinolexError as exc:
        raise _prefixed(exc, where) from exc

    return TocflRecord(
        level=level,
        line_number=line_number,
        headwords=tuple(headwords),
        pinyins=tuple(pinyins),
        word_classes=tuple(normalized_classes),
        assignment=assignment,
    )


def read_tocfl(paths: Sequence[Path]) -> list[TocflRecord]:
    """Read every level file; the n-th path is level n.

    Args:
        paths: Level files in level order.

    Returns:
        Parsed records in file and line order.
    """

    records: list[TocflRecord] = []
    for line in iter_lines(paths):
        record = parse_tocfl_line(line.text, level=line.file_index, line_number=line.line_number)
        if record is not None:
            records.append(record)
    logger.info("Read %d TOCFL records from %d files", len(records), len(paths))
    return records
