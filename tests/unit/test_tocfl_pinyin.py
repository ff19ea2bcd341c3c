"""Unit tests for graded-list Pinyin cleanup and boundary resolution."""

from __future__ import annotations

import pytest

from sinolex.errors import InvalidPinyin
from sinolex.pinyin.tocfl import clean_tocfl_text, resolve_boundaries, tocfl_pinyin


def test_ng_exception_words_split_after_ng() -> None:
    """Listed words read ``ng`` as a coda even though a vowel follows."""

    assert tocfl_pinyin("fāngàn") == "fāng'àn"
    assert tocfl_pinyin("yīngér") == "yīng'ér"


def test_n_exception_words_split_after_n() -> None:
    assert tocfl_pinyin("Tiānānmén") == "tiān'ānmén"
    assert tocfl_pinyin("wǎnān") == "wǎn'ān"


def test_r_between_vowels_is_onset_unless_it_closes_bare_er() -> None:
    assert tocfl_pinyin("gèrén") == "gèrén"
    assert tocfl_pinyin("ěrēr") == "ěr'ēr"


def test_resolve_boundaries_only_marks_the_ambiguous_positions() -> None:
    resolved = resolve_boundaries(clean_tocfl_text("ěrēr"))

    assert resolved.raw == "ěrēr"
    assert resolved.text == "ěr'ēr"


def test_missing_apostrophe_before_vowel_syllable_is_restored() -> None:
    assert tocfl_pinyin("nǚér") == "nǚ'ér"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("nĭhăo", "nǐhǎo"),
        ("Nǐhǎo", "nǐhǎo"),
        ("xī’ān", "xī'ān"),
        ("\u200bnǐhǎo\ufeff", "nǐhǎo"),
        ("  bàba ", "bàba"),
        ("k\u0251fēi", "kafēi"),
    ],
)
def test_typing_artifacts_are_cleaned(raw: str, expected: str) -> None:
    assert tocfl_pinyin(raw) == expected


def test_known_misspellings_are_repaired() -> None:
    assert tocfl_pinyin("shéme") == "shénme"
    assert tocfl_pinyin("yìdiǎr") == "yìdiǎnr"


def test_mixed_case_is_not_lowered() -> None:
    with pytest.raises(InvalidPinyin):
        clean_tocfl_text("NǏhǎo")


@pytest.mark.parametrize("raw", ["", "   ", "ni3hao3", "nǐ hǎo", "nǐ/hǎo"])
def test_unexpected_characters_raise(raw: str) -> None:
    with pytest.raises(InvalidPinyin):
        tocfl_pinyin(raw)


def test_illegal_syllable_raises() -> None:
    with pytest.raises(InvalidPinyin):
        tocfl_pinyin("wī")
