"""Pair headword spellings with the pronunciations of one lexical entry.

Graded-list entries frequently give several Han spellings and several
readings without saying which reading goes with which spelling. The
matcher resolves this with three tiers, tried in order:

* ``positional``: equal counts and matching lengths index by index.
* ``exception``: every headword is in a small hand-curated table.
* ``general``: headwords are bucketed by adjusted Han length and each
  pronunciation is routed to the bucket with its syllable count.
"""

from __future__ import annotations

import logging
from collections import Counter
from types import MappingProxyType
from typing import Sequence

from sinolex.errors import AmbiguousMatch, MatchError, Unmatched
from sinolex.models import Assignment, HeadwordReading
from sinolex.pinyin.segmenter import pinyin_count

logger = logging.getLogger(__name__)

TIER_POSITIONAL = "positional"
TIER_EXCEPTION = "exception"
TIER_GENERAL = "general"

# Final characters read with the rhotic ``er`` syllable, which counts double.
RHOTIC_FINALS = frozenset({"二", "而", "爾"})

HAN_EX = MappingProxyType(
    {
        "嬰兒": "yīng'ér",
        "女兒": "nǚ'ér",
        "孤兒": "gū'ér",
        "這裡": "zhèlǐ",
        "這裏": "zhèlǐ",
        "這兒": "zhèr",
        "那裡": "nàlǐ",
        "那裏": "nàlǐ",
        "那兒": "nàr",
        "哪裡": "nǎlǐ",
        "哪裏": "nǎlǐ",
        "哪兒": "nǎr",
    }
)


def han_count(han: str) -> int:
    """Return the adjusted length of a Han spelling.

    Args:
        han: Headword such as ``女兒``.

    Returns:
        Codepoint count, plus one when the final character is read ``er``.
    """

    count = len(han)
    if han and han[-1] in RHOTIC_FINALS:
        count += 1
    return count


def han_exmap(han: str) -> str | None:
    """Return the hand-curated pronunciation of ``han`` if it has one."""

    return HAN_EX.get(han)


def _check_inputs(headwords: Sequence[str], pronunciations: Sequence[str]) -> None:
    if not headwords:
        raise MatchError("No headwords to match.")
    if not pronunciations:
        raise MatchError("No pronunciations to match.")
    for label, values in (("headword", headwords), ("pronunciation", pronunciations)):
        duplicates = sorted(value for value, seen in Counter(values).items() if seen > 1)
        if duplicates:
            raise MatchError(f"Duplicate {label} values: {', '.join(duplicates)}.")


def _positional(headwords: Sequence[str], pronunciations: Sequence[str]) -> Assignment | None:
    if len(headwords) != len(pronunciations):
        return None
    for han, pinyin in zip(headwords, pronunciations):
        if han_count(han) != pinyin_count(pinyin):
            return None
    pairs = tuple(
        HeadwordReading(headword=han, pinyins=(pinyin,))
        for han, pinyin in zip(headwords, pronunciations)
    )
    return Assignment(pairs=pairs, tier=TIER_POSITIONAL)


def _exception(headwords: Sequence[str], pronunciations: Sequence[str]) -> Assignment | None:
    mapped = [han_exmap(han) for han in headwords]
    if any(value is None for value in mapped):
        return None
    if set(mapped) != set(pronunciations):
        return None
    pairs = tuple(
        HeadwordReading(headword=han, pinyins=(pinyin,)) for han, pinyin in zip(headwords, mapped)
    )
    return Assignment(pairs=pairs, tier=TIER_EXCEPTION)


def _general(headwords: Sequence[str], pronunciations: Sequence[str]) -> Assignment:
    buckets: dict[int, list[str]] = {}
    for han in headwords:
        buckets.setdefault(han_count(han), []).append(han)

    claimed: dict[int, list[str]] = {length: [] for length in buckets}
    for pinyin in pronunciations:
        length = pinyin_count(pinyin)
        if length not in buckets:
            raise Unmatched(f"Pronunciation '{pinyin}' has no headword of length {length}.")
        if len(buckets[length]) > 1 and claimed[length]:
            raise AmbiguousMatch(
                f"Pronunciations '{claimed[length][0]}' and '{pinyin}' both target headwords "
                f"{', '.join(buckets[length])}."
            )
        claimed[length].append(pinyin)

    unclaimed = [han for length, group in buckets.items() if not claimed[length] for han in group]
    if unclaimed:
        raise Unmatched(f"No pronunciation for headwords {', '.join(unclaimed)}.")

    pairs = tuple(
        HeadwordReading(headword=han, pinyins=tuple(claimed[han_count(han)])) for han in headwords
    )
    return Assignment(pairs=pairs, tier=TIER_GENERAL)


def match_pinyin(headwords: Sequence[str], pronunciations: Sequence[str]) -> Assignment:
    """Assign every headword the pronunciations that belong to it.

    Args:
        headwords: Distinct Han spellings.
        pronunciations: Distinct canonical Pinyin readings.

    Returns:
        ``Assignment`` covering every headword once and every pronunciation
        at least once, tagged with the tier that produced it.

    Raises:
        MatchError: If either input is empty or holds duplicates.
        Unmatched: If a pronunciation or headword is left without a partner.
        AmbiguousMatch: If two readings of one length compete for a group of
            same-length headwords.
    """

    _check_inputs(headwords, pronunciations)
    for tier in (_positional, _exception):
        assignment = tier(headwords, pronunciations)
        if assignment is not None:
            logger.debug("Matched %s via %s tier", "/".join(headwords), assignment.tier)
            return assignment
    assignment = _general(headwords, pronunciations)
    logger.debug("Matched %s via %s tier", "/".join(headwords), assignment.tier)
    return assignment
