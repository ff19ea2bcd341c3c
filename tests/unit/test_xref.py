"""Unit tests for cross-reference extraction."""

from __future__ import annotations

import pytest

from sinolex.gloss.xref import XREF_REWRITES, extract_xref
from sinolex.models import XrefTarget


def test_variant_of_single_target() -> None:
    xref = extract_xref("variant of 個|个[ge4]")

    assert xref is not None
    assert xref.descriptor is None
    assert xref.relation == "variant of"
    assert xref.targets == (XrefTarget("個", "个", "gè"),)
    assert xref.suffix is None
    assert xref.residual == ""


def test_descriptor_and_connective_are_lowercased() -> None:
    xref = extract_xref("Old variant of 為|为[wei4]")

    assert xref is not None
    assert xref.descriptor == "old"
    assert xref.relation == "variant of"


def test_see_also_relation() -> None:
    xref = extract_xref("see also 東西|东西[dong1 xi5]")

    assert xref is not None
    assert xref.relation == "see also"
    assert xref.targets == (XrefTarget("東西", "东西", "dōngxi"),)


def test_suffix_after_target_is_kept() -> None:
    xref = extract_xref("abbr. for 北京[Bei3 jing1], capital of China")

    assert xref is not None
    assert xref.relation == "abbr. for"
    assert xref.suffix == "capital of China"


def test_two_target_phrasings_are_rewritten() -> None:
    either = extract_xref("equivalent to either 甲[jia3] or 乙[yi3]")
    pair = extract_xref("see 甲[jia3], 乙[yi3]")

    assert either is not None
    assert either.relation == "equivalent to"
    assert [target.trad for target in either.targets] == ["甲", "乙"]
    assert pair is not None
    assert pair.relation == "see"
    assert len(pair.targets) == 2


def test_taiwan_marker_becomes_descriptor() -> None:
    xref = extract_xref("(Tw) abbr. for 臺灣|台湾[Tai2 wan1]")

    assert xref is not None
    assert xref.descriptor == "Taiwan"
    assert xref.relation == "abbr. for"
    assert xref.targets == (XrefTarget("臺灣", "台湾", "táiwān"),)


def test_described_abbreviation_moves_description_to_suffix() -> None:
    xref = extract_xref("abbr. for Peking University 北京大學|北京大学[Bei3 jing1 Da4 xue2]")

    assert xref is not None
    assert xref.relation == "abbr. for"
    assert xref.suffix == "Peking University"
    assert xref.targets[0].pinyin == "běijīngdàxué"


def test_parenthesized_xref_leaves_residual() -> None:
    xref = extract_xref("to eat (see 吃[chi1]) quickly")

    assert xref is not None
    assert xref.relation == "see"
    assert xref.targets == (XrefTarget("吃", "吃", "chī"),)
    assert xref.residual == "to eat quickly"


@pytest.mark.parametrize(
    "gloss",
    [
        "to eat",
        "to give to 老師|老师[lao3 shi1]",
        "variant of 個|个[xx5]",
        "variant of 甲, 乙 and 丙",
        "see 甲 or 乙",
    ],
)
def test_non_xref_glosses_yield_none(gloss: str) -> None:
    assert extract_xref(gloss) is None


def test_rewrite_rules_have_unique_names() -> None:
    names = [rule.name for rule in XREF_REWRITES]

    assert len(names) == len(set(names))
