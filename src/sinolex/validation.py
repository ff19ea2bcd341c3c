"""Aggregate invariant checks over parsed records."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from sinolex.errors import InvalidPinyin
from sinolex.models import CedictRecord, CoctRecord, TocflRecord
from sinolex.pinyin.segmenter import canonical

MAX_REPORTED_ERRORS = 25


def _raise_if_errors(label: str, errors: Sequence[str]) -> None:
    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:MAX_REPORTED_ERRORS])
        rest = len(errors) - min(MAX_REPORTED_ERRORS, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise ValueError(f"{label} validation failed with {len(errors)} errors:\n{preview}{more}")


def _is_canonical(pinyin: str) -> bool:
    try:
        return canonical(pinyin) == pinyin
    except InvalidPinyin:
        return False


def validate_tocfl_records(records: Sequence[TocflRecord]) -> None:
    """Check that every assignment covers its record completely.

    Args:
        records: Parsed graded-list records.

    Raises:
        ValueError: If a headword is assigned zero or several times, a
            pronunciation is never assigned, or a pronunciation is not
            canonical.
    """

    errors: list[str] = []
    for record in records:
        where = f"Level {record.level} line {record.line_number}"
        assigned = Counter(pair.headword for pair in record.assignment.pairs)
        for headword in record.headwords:
            if assigned[headword] != 1:
                errors.append(f"{where}: headword '{headword}' assigned {assigned[headword]} times")
        used = {pinyin for pair in record.assignment.pairs for pinyin in pair.pinyins}
        for pinyin in record.pinyins:
            if pinyin not in used:
                errors.append(f"{where}: pinyin '{pinyin}' not assigned")
            if not _is_canonical(pinyin):
                errors.append(f"{where}: pinyin '{pinyin}' is not canonical")
    _raise_if_errors("TOCFL", errors)


def validate_coct_records(records: Sequence[CoctRecord]) -> None:
    errors: list[str] = []
    for record in records:
        if not record.headwords:
            errors.append(f"Line {record.line_number}: no headwords")
    _raise_if_errors("COCT", errors)


def validate_cedict_records(records: Sequence[CedictRecord]) -> None:
    """Check pronunciation canonicity and citation coverage.

    Args:
        records: Parsed dictionary records.

    Raises:
        ValueError: If a normalized pronunciation is not canonical, a
            citation scan does not reproduce its gloss, or sense numbers are
            not consecutive from 1.
    """

    errors: list[str] = []
    for record in records:
        where = f"Line {record.line_number}"
        if record.pinyin is not None and not _is_canonical(record.pinyin):
            errors.append(f"{where}: pinyin '{record.pinyin}' is not canonical")
        previous_sense = 0
        for entry in record.entries:
            if entry.citations.text != entry.text:
                errors.append(f"{where}: citation scan does not cover '{entry.text}'")
            if entry.sense < 1 or entry.sense not in (previous_sense, previous_sense + 1):
                errors.append(f"{where}: unexpected sense number {entry.sense}")
            previous_sense = entry.sense
    _raise_if_errors("CC-CEDICT", errors)


def collect_tier_counts(records: Sequence[TocflRecord]) -> dict[str, int]:
    """Count records by the matcher tier that paired them."""

    counter: Counter[str] = Counter()
    for record in records:
        counter[record.assignment.tier] += 1
    return dict(counter)


def collect_level_counts(records: Sequence[TocflRecord | CoctRecord]) -> dict[int, int]:
    """Count records by level."""

    counter: Counter[int] = Counter()
    for record in records:
        counter[record.level] += 1
    return dict(counter)


def collect_annotation_counts(records: Sequence[CedictRecord]) -> dict[str, int]:
    """Count annotations across records and their gloss entries.

    Returns:
        Counts for ``measures``, ``pronunciations``, ``xrefs``,
        ``citations`` and ``unnormalized_pinyin``.
    """

    counter: Counter[str] = Counter()
    for record in records:
        counter["measures"] += len(record.measures)
        counter["pronunciations"] += len(record.pronunciations)
        counter["xrefs"] += len(record.xrefs)
        if record.pinyin is None:
            counter["unnormalized_pinyin"] += 1
        for entry in record.entries:
            counter["measures"] += len(entry.measures)
            counter["pronunciations"] += len(entry.pronunciations)
            counter["xrefs"] += len(entry.xrefs)
            counter["citations"] += len(entry.citations.citations)
    return {
        key: counter[key]
        for key in ("measures", "pronunciations", "xrefs", "citations", "unnormalized_pinyin")
    }
