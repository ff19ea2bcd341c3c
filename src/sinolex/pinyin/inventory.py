"""Audit the syllable legality table against the pypinyin reading inventory."""

from __future__ import annotations

from dataclasses import dataclass
import unicodedata

from pypinyin import constants as pypinyin_constants

from sinolex.errors import InvalidPinyin
from sinolex.pinyin.segmenter import segment

# Readings pypinyin lists that the engine rejects on purpose.
EXPECTED_REJECTIONS = frozenset({"m", "n", "ng", "hm", "hng", "r"})
DIAERESIS = "\u0308"


@dataclass(frozen=True)
class InventoryAudit:
    """Comparison between pypinyin readings and the engine's legality table.

    Attributes:
        total: Number of distinct toneless readings collected from pypinyin.
        accepted: Readings that segment as exactly one syllable.
        rejected: Readings the engine refuses, sorted.
        unexpected: Rejected readings outside ``EXPECTED_REJECTIONS``.
    """

    total: int
    accepted: tuple[str, ...]
    rejected: tuple[str, ...]

    @property
    def unexpected(self) -> tuple[str, ...]:
        return tuple(item for item in self.rejected if item not in EXPECTED_REJECTIONS)


def _strip_tone_marks(syllable: str) -> str:
    """Remove tone marks from one pypinyin reading and lowercase it.

    Precomposed and combining diacritics are both dropped; the diaeresis of
    ``ü`` is kept.

    Args:
        syllable: Reading that may contain tone-marked vowels.

    Returns:
        Tone-free lowercase reading where ``v`` is normalized to ``ü``.
    """

    decomposed = unicodedata.normalize("NFD", syllable.strip().lower())
    kept = "".join(
        ch for ch in decomposed if not unicodedata.combining(ch) or ch == DIAERESIS
    )
    return unicodedata.normalize("NFC", kept).replace("v", "ü")


def collect_pypinyin_syllables() -> frozenset[str]:
    """Collect distinct toneless syllables from pypinyin's dictionaries."""

    syllables: set[str] = set()

    for value in pypinyin_constants.PINYIN_DICT.values():
        for item in str(value).split(","):
            base = _strip_tone_marks(item)
            if base:
                syllables.add(base)

    for phrase in pypinyin_constants.PHRASES_DICT.values():
        for syllable_group in phrase:
            for item in syllable_group:
                base = _strip_tone_marks(item)
                if base:
                    syllables.add(base)

    return frozenset(syllables)


def is_single_syllable(text: str) -> bool:
    try:
        syllables = segment(text)
    except InvalidPinyin:
        return False
    return len(syllables) == 1


def audit_inventory(syllables: frozenset[str] | None = None) -> InventoryAudit:
    """Check which known readings the segmenter accepts as one syllable.

    Args:
        syllables: Toneless readings to audit; defaults to the pypinyin set.

    Returns:
        ``InventoryAudit`` with sorted accepted and rejected readings.
    """

    if syllables is None:
        syllables = collect_pypinyin_syllables()
    accepted: list[str] = []
    rejected: list[str] = []
    for syllable in sorted(syllables):
        (accepted if is_single_syllable(syllable) else rejected).append(syllable)
    return InventoryAudit(total=len(syllables), accepted=tuple(accepted), rejected=tuple(rejected))
