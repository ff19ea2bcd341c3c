"""Normalize graded-list (TOCFL) tone-mark Pinyin into canonical Pinyin.

The list spells Pinyin with diacritics but is inconsistent about apostrophes
and carries typing artifacts. Normalization runs in explicit stages whose
types enforce the order:

1. ``clean_tocfl_text`` removes artifacts and returns ``CleanedPinyin``.
2. ``resolve_boundaries`` settles the ``ng``/``n``/``r`` ambiguities by
   inserting apostrophes and returns ``ResolvedPinyin``.
3. ``segment`` and ``render`` produce the canonical text.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
import re
import unicodedata

from sinolex.errors import InvalidPinyin
from sinolex.pinyin.segmenter import render, segment
from sinolex.pinyin.tables import ALLOWED_CHARS, TONE_MARKS, VOWEL_CHARS

INVISIBLE_CHARS = ("\u200b", "\u200c", "\u200d", "\ufeff")
ARTIFACT_REPLACEMENTS = MappingProxyType(
    {
        "ă": "ǎ",
        "ĭ": "ǐ",
        "ŏ": "ǒ",
        "ŭ": "ǔ",
        "ɑ": "a",
        "’": "'",
        "‘": "'",
    }
)

# Whole-string repairs for known typos in the source list.
MISSPELLINGS = MappingProxyType(
    {
        "shéme": "shénme",
        "yìdiǎr": "yìdiǎnr",
    }
)

# Words where ``ng`` between vowels is a coda rather than ``n`` + ``g``.
NG_FINAL_EXCEPTIONS = frozenset(
    {
        "chángān",
        "dàngàn",
        "fāngàn",
        "gōngān",
        "píngān",
        "yīngér",
    }
)

# Words where ``n`` between vowels is a coda rather than an onset.
N_FINAL_EXCEPTIONS = frozenset(
    {
        "ēnài",
        "jīné",
        "miánǎo",
        "tiānānmén",
        "wǎnān",
    }
)

_V = f"[{VOWEL_CHARS}]"
NG_BETWEEN_VOWELS_RE = re.compile(rf"(?<={_V})ng(?={_V})")
N_BETWEEN_VOWELS_RE = re.compile(rf"(?<={_V})n(?={_V})")
R_BETWEEN_VOWELS_RE = re.compile(rf"(?<!{_V})({_V}+)r(?={_V})")


@dataclass(frozen=True)
class CleanedPinyin:
    """Artifact-free lowercase Pinyin whose syllable boundaries are unresolved."""

    raw: str
    text: str


@dataclass(frozen=True)
class ResolvedPinyin:
    """Cleaned Pinyin with apostrophes at every ambiguous boundary."""

    raw: str
    text: str


def clean_tocfl_text(raw: str) -> CleanedPinyin:
    """Remove typing artifacts from one source Pinyin string.

    Args:
        raw: Pinyin exactly as it appears in the source list.

    Returns:
        Cleaned, NFC, lowercase Pinyin.

    Raises:
        InvalidPinyin: If characters outside the Pinyin alphabet remain.
    """

    text = raw.strip()
    for ch in INVISIBLE_CHARS:
        text = text.replace(ch, "")
    for src, dst in ARTIFACT_REPLACEMENTS.items():
        text = text.replace(src, dst)
    text = unicodedata.normalize("NFC", text)
    if text[:1].isupper() and text[1:] == text[1:].lower():
        text = text.lower()
    text = MISSPELLINGS.get(text, text)

    unexpected = sorted({ch for ch in text if ch not in ALLOWED_CHARS})
    if not text or unexpected:
        shown = " ".join(repr(ch) for ch in unexpected) or "nothing"
        raise InvalidPinyin(f"Unexpected characters {shown} in pinyin '{raw}'.")
    return CleanedPinyin(raw=raw, text=text)


def _resolve_rhotic(text: str) -> str:
    """Put an apostrophe after ``r`` when it closes a bare ``er`` syllable.

    Any other ``r`` between vowels is left alone and becomes the onset of the
    following syllable.
    """

    def replace(match: re.Match[str]) -> str:
        run = match.group(1)
        start = match.start()
        unmarked = TONE_MARKS.get(run, (run, 0))[0]
        if unmarked == "e" and (start == 0 or text[start - 1] == "'"):
            return f"{run}r'"
        return match.group(0)

    return R_BETWEEN_VOWELS_RE.sub(replace, text)


def resolve_boundaries(cleaned: CleanedPinyin) -> ResolvedPinyin:
    """Make every ambiguous syllable boundary explicit.

    Args:
        cleaned: Output of :func:`clean_tocfl_text`.

    Returns:
        Pinyin where the segmenter's default reading is the intended one.
    """

    text = cleaned.text
    if text in NG_FINAL_EXCEPTIONS:
        text = NG_BETWEEN_VOWELS_RE.sub("ng'", text)
    if text in N_FINAL_EXCEPTIONS:
        text = N_BETWEEN_VOWELS_RE.sub("n'", text)
    text = _resolve_rhotic(text)
    return ResolvedPinyin(raw=cleaned.raw, text=text)


def tocfl_pinyin(raw: str) -> str:
    """Normalize one graded-list Pinyin string.

    Args:
        raw: Source Pinyin such as ``Fāngàn`` or ``yìdiǎnr``.

    Returns:
        Canonical Pinyin such as ``fāng'àn``.

    Raises:
        InvalidPinyin: If the string cannot be cleaned or segmented.
    """

    resolved = resolve_boundaries(clean_tocfl_text(raw))
    return render(segment(resolved.text))
