"""Unit tests for definition splitting and per-gloss analysis."""

from __future__ import annotations

import pytest

from sinolex.errors import RecordFormatError
from sinolex.gloss.analysis import analyze_gloss, split_definition


def test_split_definition_groups_glosses_by_sense() -> None:
    assert split_definition("to eat; to consume/to live on") == [
        ["to eat", "to consume"],
        ["to live on"],
    ]


def test_split_definition_drops_empty_senses_and_separators() -> None:
    assert split_definition("/a;; b //; c ;/") == [["a", "b"], ["c"]]


@pytest.mark.parametrize("definition", ["", " / / ", "/"])
def test_split_definition_rejects_empty_definition(definition: str) -> None:
    with pytest.raises(RecordFormatError):
        split_definition(definition)


def test_measure_annotation_wins_first() -> None:
    analysis = analyze_gloss("CL:個|个[ge4]")

    assert analysis.measures is not None
    assert analysis.pronunciation is None
    assert analysis.xref is None
    assert analysis.residual == ""
    assert analysis.citations.segments == ()


def test_pronunciation_annotation_keeps_prose() -> None:
    analysis = analyze_gloss("flimsy (Taiwan pr. [bo2])")

    assert analysis.pronunciation is not None
    assert analysis.pronunciation.pinyins == ("bó",)
    assert analysis.residual == "flimsy"


def test_xref_annotation() -> None:
    analysis = analyze_gloss("variant of 個|个[ge4]")

    assert analysis.xref is not None
    assert analysis.residual == ""


def test_plain_gloss_is_scanned_for_citations() -> None:
    analysis = analyze_gloss("to give to 老師|老师[lao3 shi1]")

    assert analysis.measures is None
    assert analysis.pronunciation is None
    assert analysis.xref is None
    assert analysis.residual == "to give to 老師|老师[lao3 shi1]"
    assert [citation.pinyin for citation in analysis.citations.citations] == ["lǎoshī"]
