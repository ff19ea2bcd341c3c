"""Unit tests for canonical Pinyin segmentation and rendering."""

from __future__ import annotations

import pytest

from sinolex.errors import InvalidPinyin
from sinolex.models import Syllable
from sinolex.pinyin.segmenter import (
    ERHUA,
    canonical,
    is_valid_pinyin,
    pinyin_count,
    render,
    segment,
)


@pytest.mark.parametrize(
    "text",
    ["zhōngguó", "nǚ'ér", "tiān'ānmén", "xiānsheng", "yìdiǎnr", "lǜsè", "xuéxiào", "èr"],
)
def test_canonical_text_is_a_fixed_point(text: str) -> None:
    assert render(segment(text)) == text


def test_trailing_r_after_complete_syllable_is_erhua() -> None:
    syllables = segment("nàr")

    assert syllables == (Syllable("n", "a", "", 4), ERHUA)
    assert render(syllables) == "nàr"


def test_bare_er_keeps_rhotic_coda() -> None:
    (syllable,) = segment("èr")

    assert syllable == Syllable("", "e", "r", 4)
    assert syllable.is_rhotic
    assert not syllable.erhua


def test_r_before_vowel_starts_next_syllable() -> None:
    assert [syllable.text for syllable in segment("gèrén")] == ["gè", "rén"]


def test_segment_uses_longest_vowel_multigraph() -> None:
    (syllable,) = segment("xiǎo")

    assert syllable.initial == "x"
    assert syllable.nucleus == "iao"
    assert syllable.tone == 3


def test_misplaced_tone_mark_is_moved_to_canonical_vowel() -> None:
    assert canonical("haǒ") == "hǎo"
    assert canonical("gúo") == "guó"


def test_missing_apostrophe_is_restored_by_render() -> None:
    assert canonical("nǚér") == "nǚ'ér"
    assert canonical("xī'ān") == "xī'ān"
    assert canonical("píng'ān") == "píng'ān"
    assert len(segment("xian")) == 1
    assert len(segment("xi'an")) == 2


@pytest.mark.parametrize("text", ["wi", "ui", "lue", "xyz", "bā1", "Zhōng", ""])
def test_illegal_pinyin_is_rejected(text: str) -> None:
    with pytest.raises(InvalidPinyin):
        segment(text)
    assert not is_valid_pinyin(text)


def test_ue_needs_palatal_or_y_onset() -> None:
    assert is_valid_pinyin("xué")
    assert is_valid_pinyin("yuè")
    assert is_valid_pinyin("lüè")
    assert not is_valid_pinyin("lue")


def test_umlaut_after_palatal_is_written_as_u() -> None:
    assert segment("jǘ") == segment("jú")
    assert canonical("qǘ") == "qú"
    assert canonical("xüé") == "xué"
    assert canonical("lǘ") == "lǘ"


@pytest.mark.parametrize("text", ["'ān", "xī''ān", "xī'"])
def test_misplaced_apostrophes_are_rejected(text: str) -> None:
    with pytest.raises(InvalidPinyin):
        segment(text)


def test_render_rejects_empty_sequence() -> None:
    with pytest.raises(InvalidPinyin):
        render(())


def test_render_places_apostrophe_before_vowel_initial_syllables_only() -> None:
    syllables = (
        Syllable("", "e", "r", 2),
        Syllable("", "a", "", 5),
        Syllable("m", "e", "n", 2),
        ERHUA,
    )

    assert render(syllables) == "ér'aménr"


def test_pinyin_count_counts_final_rhotic_twice() -> None:
    assert pinyin_count("yìdiǎnr") == 3
    assert pinyin_count("èr") == 2
    assert pinyin_count("nǚ'ér") == 3
    assert pinyin_count("ěrduo") == 2
