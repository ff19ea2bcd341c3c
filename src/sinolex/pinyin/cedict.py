"""Normalize CC-CEDICT tone-number Pinyin into canonical Pinyin.

Dictionary pronunciations are whitespace-separated tokens such as ``Bei3 jing1``
or ``lu:4``. Anything that cannot be represented as canonical Pinyin (Latin
abbreviations, punctuation, syllabic nasals, crossed-out ``xx`` markers) is a
soft failure and yields ``None``.
"""

from __future__ import annotations

import logging
import re

from sinolex.errors import InvalidPinyin
from sinolex.models import Syllable
from sinolex.pinyin.segmenter import ERHUA, render, segment

logger = logging.getLogger(__name__)

CEDICT_TOKEN_RE = re.compile(r"[A-Za-z][a-z:]*[1-5]")
TONELESS_LETTERS_RE = re.compile(r"[a-zü]+")
SYLLABIC_NASALS = frozenset({"m", "n", "ng", "hm", "hng"})
CROSSED_OUT = "xx"


def normalize_cedict_syllable(token: str) -> tuple[str, int] | None:
    """Split one dictionary token into toneless letters and a tone number.

    ``u:`` and ``v`` are read as ``ü`` and a leading capital is lowered.

    Args:
        token: Raw token such as ``Lu:4``.

    Returns:
        ``(letters, tone)`` such as ``("lü", 4)``, or ``None`` when the token is
        malformed.
    """

    if not CEDICT_TOKEN_RE.fullmatch(token):
        return None
    letters = token[:-1].lower().replace("u:", "ü").replace("v", "ü")
    if not TONELESS_LETTERS_RE.fullmatch(letters):
        return None
    return letters, int(token[-1])


def _token_syllables(letters: str, tone: int) -> list[Syllable] | None:
    """Parse toneless letters as one syllable, optionally with folded erhua."""

    try:
        parsed = segment(letters)
    except InvalidPinyin:
        return None
    head = parsed[0]
    if head.erhua or any(not syllable.erhua for syllable in parsed[1:]) or len(parsed) > 2:
        return None
    syllables = [
        Syllable(initial=head.initial, nucleus=head.nucleus, coda=head.coda, tone=tone)
    ]
    syllables.extend(parsed[1:])
    return syllables


def cedict_syllables(raw: str) -> tuple[Syllable, ...] | None:
    """Parse a dictionary pronunciation into syllables.

    Args:
        raw: Bracket payload from a dictionary line, e.g. ``wan2 r5``.

    Returns:
        Syllable tuple, or ``None`` when the pronunciation is not representable.
    """

    syllables: list[Syllable] = []
    tokens = raw.split()
    if not tokens:
        return None
    for token in tokens:
        parsed = normalize_cedict_syllable(token)
        if parsed is None:
            return None
        letters, tone = parsed
        if letters == CROSSED_OUT or letters in SYLLABIC_NASALS:
            return None
        if letters == "r" and tone == 5:
            if not syllables or syllables[-1].erhua:
                return None
            syllables.append(ERHUA)
            continue
        token_syllables = _token_syllables(letters, tone)
        if token_syllables is None:
            return None
        syllables.extend(token_syllables)
    return tuple(syllables)


def cedict_pinyin(raw: str) -> str | None:
    """Normalize a dictionary pronunciation to canonical Pinyin.

    Args:
        raw: Tone-number Pinyin such as ``Zhong1 guo2`` or ``nu:3 er2``.

    Returns:
        Canonical Pinyin such as ``zhōngguó`` or ``nǚ'ér``; ``None`` for
        abbreviations, punctuation, syllabic nasals, ``xx`` markers, a leading
        ``r5``, or any token that is not exactly one legal syllable.

    Raises:
        InvalidPinyin: If the rendered text does not segment; this indicates
            an inconsistency between the renderer and the segmenter.
    """

    syllables = cedict_syllables(raw)
    if syllables is None:
        return None
    text = render(syllables)
    if segment(text) != syllables:
        logger.debug("Pronunciation '%s' renders ambiguously as '%s'", raw, text)
        return None
    return text
