"""Pinyin normalization, headword matching and gloss annotation package."""

from .errors import (
    AmbiguousMatch,
    InvalidPinyin,
    MatchError,
    MultifieldError,
    RecordFormatError,
    SinolexError,
    Unmatched,
)
from .models import Assignment, HeadwordReading, Syllable

__all__ = [
    "Syllable",
    "Assignment",
    "HeadwordReading",
    "SinolexError",
    "InvalidPinyin",
    "MultifieldError",
    "RecordFormatError",
    "MatchError",
    "AmbiguousMatch",
    "Unmatched",
]
