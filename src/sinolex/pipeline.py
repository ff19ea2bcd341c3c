"""Top-level orchestration for reading and validating the three sources."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Sequence

from sinolex.models import CedictRecord, CoctRecord, TocflRecord
from sinolex.sources.cedict import CedictDictionary
from sinolex.sources.coct import read_coct
from sinolex.sources.tocfl import read_tocfl
from sinolex.validation import (
    collect_annotation_counts,
    collect_level_counts,
    collect_tier_counts,
    validate_cedict_records,
    validate_coct_records,
    validate_tocfl_records,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TocflResult:
    """Result bundle returned by :func:`run_tocfl`.

    Attributes:
        records: Matched graded-list records.
        tier_counts: Number of records paired by each matcher tier.
        level_counts: Number of records per level.
    """

    records: tuple[TocflRecord, ...]
    tier_counts: dict[str, int]
    level_counts: dict[int, int]


@dataclass(frozen=True)
class CoctResult:
    records: tuple[CoctRecord, ...]
    level_counts: dict[int, int]


@dataclass(frozen=True)
class CedictResult:
    """Result bundle returned by :func:`run_cedict`.

    Attributes:
        records: Parsed dictionary records.
        annotation_counts: Totals from ``collect_annotation_counts``.
    """

    records: tuple[CedictRecord, ...]
    annotation_counts: dict[str, int]


def run_tocfl(paths: Sequence[Path]) -> TocflResult:
    """Read, match and validate every graded-list level file.

    Args:
        paths: Level files in level order.

    Returns:
        ``TocflResult`` with records and tier diagnostics.
    """

    records = read_tocfl(paths)
    validate_tocfl_records(records)
    tier_counts = collect_tier_counts(records)
    logger.info("TOCFL matcher tiers: %s", tier_counts)
    return TocflResult(
        records=tuple(records),
        tier_counts=tier_counts,
        level_counts=collect_level_counts(records),
    )


def run_coct(path: Path) -> CoctResult:
    records = read_coct(path)
    validate_coct_records(records)
    return CoctResult(records=tuple(records), level_counts=collect_level_counts(records))


def run_cedict(path: Path) -> CedictResult:
    """Parse, annotate and validate a CC-CEDICT file.

    Args:
        path: Dictionary ``.u8`` path.

    Returns:
        ``CedictResult`` with records and annotation totals.
    """

    records = CedictDictionary(path).records
    validate_cedict_records(records)
    counts = collect_annotation_counts(records)
    if counts["unnormalized_pinyin"]:
        logger.warning(
            "%d dictionary records kept without normalized pinyin",
            counts["unnormalized_pinyin"],
        )
    return CedictResult(records=records, annotation_counts=counts)
