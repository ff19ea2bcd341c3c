"""Unit tests for pairing headwords with pronunciations."""

from __future__ import annotations

import pytest

from sinolex.errors import AmbiguousMatch, MatchError, Unmatched
from sinolex.matching.matcher import (
    TIER_EXCEPTION,
    TIER_GENERAL,
    TIER_POSITIONAL,
    han_count,
    match_pinyin,
)


def test_han_count_doubles_rhotic_final_characters() -> None:
    assert han_count("老師") == 2
    assert han_count("二") == 2
    assert han_count("而且") == 2
    assert han_count("女兒") == 2


def test_positional_tier_pairs_equal_lengths_index_by_index() -> None:
    assignment = match_pinyin(["大", "小"], ["dà", "xiǎo"])

    assert assignment.tier == TIER_POSITIONAL
    assert assignment.as_dict() == {"大": ("dà",), "小": ("xiǎo",)}


def test_rhotic_final_lines_up_with_adjusted_length() -> None:
    assignment = match_pinyin(["二"], ["èr"])

    assert assignment.tier == TIER_POSITIONAL


def test_one_reading_shared_by_same_length_headwords() -> None:
    """A single reading for a length bucket goes to every headword in it."""

    assignment = match_pinyin(["的", "地", "得"], ["de"])

    assert assignment.tier == TIER_GENERAL
    assert assignment.as_dict() == {"的": ("de",), "地": ("de",), "得": ("de",)}


def test_several_readings_for_single_headword_are_kept_together() -> None:
    assignment = match_pinyin(["誰"], ["shéi", "shuí"])

    assert assignment.tier == TIER_GENERAL
    assert assignment.as_dict() == {"誰": ("shéi", "shuí")}


def test_general_tier_routes_by_length() -> None:
    assignment = match_pinyin(["這", "這兒"], ["zhè", "zhèi", "zhèr"])

    assert assignment.tier == TIER_GENERAL
    assert assignment.as_dict() == {"這": ("zhè", "zhèi"), "這兒": ("zhèr",)}


def test_competing_readings_for_shared_bucket_are_ambiguous() -> None:
    with pytest.raises(AmbiguousMatch):
        match_pinyin(["的", "地", "得"], ["de", "dí"])


def test_reading_without_headword_of_its_length_is_unmatched() -> None:
    with pytest.raises(Unmatched):
        match_pinyin(["老師"], ["lǎo"])


def test_headword_without_reading_is_unmatched() -> None:
    with pytest.raises(Unmatched):
        match_pinyin(["老師", "老"], ["lǎoshī"])


def test_exception_tier_handles_listed_spellings() -> None:
    assignment = match_pinyin(["這裡", "這裏", "這兒"], ["zhèlǐ", "zhèr"])

    assert assignment.tier == TIER_EXCEPTION
    assert assignment.as_dict() == {
        "這裡": ("zhèlǐ",),
        "這裏": ("zhèlǐ",),
        "這兒": ("zhèr",),
    }


def test_exception_tier_covers_er_after_vowel_syllable() -> None:
    assignment = match_pinyin(["女兒"], ["nǚ'ér"])

    assert assignment.tier == TIER_EXCEPTION
    assert assignment.as_dict() == {"女兒": ("nǚ'ér",)}


@pytest.mark.parametrize(
    ("headwords", "pronunciations"),
    [([], ["dà"]), (["大"], []), (["大", "大"], ["dà"]), (["大"], ["dà", "dà"])],
)
def test_empty_or_duplicate_inputs_raise(headwords: list[str], pronunciations: list[str]) -> None:
    with pytest.raises(MatchError):
        match_pinyin(headwords, pronunciations)
