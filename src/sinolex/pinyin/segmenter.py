"""Canonical Pinyin segmentation, validation and rendering.

Canonical Pinyin is lowercase NFC text with tone diacritics, ``ü`` spelled
out, no mark on neutral-tone syllables, and an apostrophe in front of every
non-first syllable that starts with a vowel. ``segment`` accepts slightly
looser input (missing apostrophes, misplaced diacritics inside a vowel
group) and ``render`` always produces the canonical form, so
``render(segment(text))`` is the normalizer for already-clean Pinyin.
"""

from __future__ import annotations

import unicodedata
from typing import Sequence

from sinolex.errors import InvalidPinyin
from sinolex.models import Syllable
from sinolex.pinyin.tables import (
    ALLOWED_CHARS,
    DIGRAPH_ONSETS,
    LEGAL_CONTEXTS,
    MAX_MULTIGRAPH,
    MAX_SEGMENT_ITERATIONS,
    MULTIGRAPHS,
    PALATALS,
    SEMIVOWELS,
    SINGLE_ONSETS,
    TONE_MARKS,
    VOWELS,
    ZERO_INITIAL_FORBIDDEN,
)

ERHUA = Syllable(initial="", nucleus="", coda="r", tone=5, erhua=True)


def _decompose(text: str) -> tuple[str, list[int]]:
    """Split text into toneless letters and a parallel list of tone marks.

    Args:
        text: NFC Pinyin restricted to ``ALLOWED_CHARS``.

    Returns:
        ``(base, tones)`` where ``tones[i]`` is 1-4 for a marked vowel and 0
        otherwise.
    """

    base_chars: list[str] = []
    tones: list[int] = []
    for ch in text:
        if ch in TONE_MARKS:
            base_char, tone = TONE_MARKS[ch]
            base_chars.append(base_char)
            tones.append(tone)
        else:
            base_chars.append(ch)
            tones.append(0)
    return "".join(base_chars), tones


def _closes(base: str, idx: int) -> bool:
    """Return whether position ``idx`` ends a syllable (end, apostrophe or consonant)."""

    return idx == len(base) or base[idx] == "'" or base[idx] not in VOWELS


def _take_onset(base: str, pos: int) -> str:
    for digraph in DIGRAPH_ONSETS:
        if base.startswith(digraph, pos):
            return digraph
    if base[pos] in SINGLE_ONSETS:
        return base[pos]
    return ""


def _take_nucleus(base: str, tones: Sequence[int], pos: int, run_end: int) -> tuple[str, int]:
    """Pick the longest legal vowel multigraph carrying at most one tone mark.

    Args:
        base: Toneless letters.
        tones: Tone marks parallel to ``base``.
        pos: Start of the vowel run.
        run_end: End (exclusive) of the vowel run.

    Returns:
        ``(nucleus, tone)`` with tone 5 when the multigraph is unmarked.
    """

    for length in range(min(MAX_MULTIGRAPH, run_end - pos), 1, -1):
        letters = base[pos : pos + length]
        marks = [tone for tone in tones[pos : pos + length] if tone]
        if letters in MULTIGRAPHS and len(marks) <= 1:
            return letters, marks[0] if marks else 5
    return base[pos], tones[pos] or 5


def _check_legal(syllable: Syllable, text: str) -> None:
    initial = syllable.initial
    nucleus = syllable.nucleus
    context = (initial if initial in SEMIVOWELS else "") + nucleus + syllable.coda
    if context not in LEGAL_CONTEXTS[nucleus]:
        raise InvalidPinyin(f"Illegal syllable '{syllable.text}' in pinyin '{text}'.")
    if not initial and nucleus[0] in ZERO_INITIAL_FORBIDDEN:
        raise InvalidPinyin(
            f"Syllable '{syllable.text}' needs a y/w spelling in pinyin '{text}'."
        )
    if context == "ue" and initial not in PALATALS:
        raise InvalidPinyin(f"Illegal syllable '{syllable.text}' in pinyin '{text}'.")


def _read_syllable(base: str, tones: Sequence[int], pos: int, text: str) -> tuple[Syllable, int]:
    initial = _take_onset(base, pos)
    pos += len(initial)

    run_end = pos
    while run_end < len(base) and base[run_end] in VOWELS:
        run_end += 1
    if run_end == pos:
        raise InvalidPinyin(f"Expected a vowel at offset {pos} in pinyin '{text}'.")

    nucleus, tone = _take_nucleus(base, tones, pos, run_end)
    pos += len(nucleus)
    # j/q/x are always followed by a written u.
    if initial in PALATALS and nucleus.startswith("ü"):
        nucleus = "u" + nucleus[1:]

    coda = ""
    if pos == run_end:
        if base.startswith("ng", pos) and _closes(base, pos + 2):
            coda = "ng"
        elif base.startswith("n", pos) and _closes(base, pos + 1):
            coda = "n"
        elif base.startswith("r", pos) and not initial and nucleus == "e" and _closes(base, pos + 1):
            coda = "r"
        pos += len(coda)

    syllable = Syllable(initial=initial, nucleus=nucleus, coda=coda, tone=tone)
    _check_legal(syllable, text)
    return syllable, pos


def segment(text: str) -> tuple[Syllable, ...]:
    """Segment Pinyin text into legal syllables.

    Args:
        text: Lowercase tone-marked Pinyin, optionally with apostrophes.

    Returns:
        Non-empty tuple of syllables; a trailing ``r`` after a complete
        syllable becomes the standalone erhua token.

    Raises:
        InvalidPinyin: If the text contains unexpected characters, a
            misplaced apostrophe, or any syllable outside the legality table.
    """

    normalized = unicodedata.normalize("NFC", text)
    if not normalized:
        raise InvalidPinyin("Empty pinyin.")
    unexpected = sorted({ch for ch in normalized if ch not in ALLOWED_CHARS})
    if unexpected:
        raise InvalidPinyin(
            f"Unexpected characters {' '.join(repr(ch) for ch in unexpected)} in pinyin '{text}'."
        )

    base, tones = _decompose(normalized)
    syllables: list[Syllable] = []
    pos = 0
    after_boundary = False

    for _ in range(MAX_SEGMENT_ITERATIONS):
        if pos == len(base):
            break
        if base[pos] == "'":
            if not syllables or after_boundary:
                raise InvalidPinyin(f"Misplaced apostrophe in pinyin '{text}'.")
            after_boundary = True
            pos += 1
            continue
        if (
            base[pos] == "r"
            and syllables
            and not after_boundary
            and not syllables[-1].erhua
            and not syllables[-1].is_rhotic
            and _closes(base, pos + 1)
        ):
            syllables.append(ERHUA)
            pos += 1
            continue
        syllable, pos = _read_syllable(base, tones, pos, text)
        syllables.append(syllable)
        after_boundary = False
    else:
        raise InvalidPinyin(f"Segmentation did not terminate for pinyin '{text}'.")

    if after_boundary:
        raise InvalidPinyin(f"Trailing apostrophe in pinyin '{text}'.")
    return tuple(syllables)


def render(syllables: Sequence[Syllable]) -> str:
    """Render syllables as canonical Pinyin text.

    Raises:
        InvalidPinyin: If ``syllables`` is empty.
    """

    if not syllables:
        raise InvalidPinyin("Cannot render an empty syllable sequence.")
    parts: list[str] = []
    for idx, syllable in enumerate(syllables):
        if idx and not syllable.erhua and not syllable.initial:
            parts.append("'")
        parts.append(syllable.text)
    return "".join(parts)


def canonical(text: str) -> str:
    """Return the canonical rendering of already-clean Pinyin text."""

    return render(segment(text))


def pinyin_count(text: str) -> int:
    """Count syllables for headword matching.

    A final rhotic ``er`` counts twice so that its count lines up with the
    adjusted Han length of characters such as 二.
    """

    syllables = segment(text)
    count = len(syllables)
    if syllables[-1].is_rhotic:
        count += 1
    return count


def is_valid_pinyin(text: str) -> bool:
    try:
        segment(text)
    except InvalidPinyin:
        return False
    return True
