"""Unit tests for the source line readers."""

from __future__ import annotations

from pathlib import Path

import pytest

from sinolex.errors import AmbiguousMatch, InvalidPinyin, MultifieldError, RecordFormatError
from sinolex.matching.matcher import TIER_GENERAL, TIER_POSITIONAL
from sinolex.sources.cedict import CedictDictionary, parse_cedict_line, parse_cedict_lines
from sinolex.sources.coct import parse_coct_line, read_coct
from sinolex.sources.multifile import iter_lines
from sinolex.sources.tocfl import parse_tocfl_line, read_tocfl


def _write(path: Path, lines: list[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_iter_lines_numbers_files_and_lines_and_drops_bom(tmp_path: Path) -> None:
    first = tmp_path / "a.csv"
    first.write_text("\ufeffone\r\ntwo\n", encoding="utf-8")
    second = _write(tmp_path / "b.csv", ["three"])

    lines = list(iter_lines([first, second]))

    assert [(line.file_index, line.line_number, line.text) for line in lines] == [
        (1, 1, "one"),
        (1, 2, "two"),
        (2, 1, "three"),
    ]


def test_iter_lines_rejects_missing_or_empty_inputs(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        list(iter_lines([]))
    with pytest.raises(FileNotFoundError):
        list(iter_lines([tmp_path / "missing.csv"]))


def test_parse_tocfl_line_shared_reading() -> None:
    record = parse_tocfl_line("老師/老师,lǎoshī,N", level=1, line_number=3)

    assert record is not None
    assert record.level == 1
    assert record.line_number == 3
    assert record.headwords == ("老師", "老师")
    assert record.pinyins == ("lǎoshī",)
    assert record.word_classes == ("N",)
    assert record.assignment.tier == TIER_GENERAL


def test_parse_tocfl_line_with_topic_and_optional_part() -> None:
    record = parse_tocfl_line("Places,這\uff08兒\uff09,zhè/zhèr,det", level=2, line_number=1)

    assert record is not None
    assert record.headwords == ("這", "這兒")
    assert record.word_classes == ("Det",)
    assert record.assignment.tier == TIER_POSITIONAL
    assert record.assignment.as_dict() == {"這": ("zhè",), "這兒": ("zhèr",)}


def test_parse_tocfl_line_cleans_quotes_bopomofo_and_missing_class() -> None:
    record = parse_tocfl_line("\"吃(\u3114)\",\"Chī\",", level=1, line_number=1)

    assert record is not None
    assert record.headwords == ("吃",)
    assert record.pinyins == ("chī",)
    assert record.word_classes == ()


def test_parse_tocfl_line_normalizes_ambiguous_boundaries() -> None:
    record = parse_tocfl_line("方案,fāngàn,N", level=4, line_number=9)

    assert record is not None
    assert record.pinyins == ("fāng'àn",)


def test_parse_tocfl_line_skips_blank_lines() -> None:
    assert parse_tocfl_line("   ", level=1, line_number=1) is None


@pytest.mark.parametrize(
    ("line", "error"),
    [
        ("吃?,chī,V", RecordFormatError),
        ("吃,chī", RecordFormatError),
        ("a,b,c,d,e", RecordFormatError),
        ("chi,chī,V", RecordFormatError),
        ("吃,chī,V(t)", RecordFormatError),
        ("吃,chī,V1", RecordFormatError),
        ("吃,nǐhǎo/Nǐhǎo,V", RecordFormatError),
        ("吃//喝,chī,V", MultifieldError),
        ("老師/老師,lǎoshī/lǎoshī,N/N", MultifieldError),
        ("吃,chī,V/V", MultifieldError),
        ("吃,chi1,V", InvalidPinyin),
        ("的/地/得,de/dí,Ptc", AmbiguousMatch),
    ],
)
def test_parse_tocfl_line_errors_keep_type_and_location(line: str, error: type) -> None:
    with pytest.raises(error, match="TOCFL 1 line 7"):
        parse_tocfl_line(line, level=1, line_number=7)


def test_read_tocfl_assigns_levels_by_file_order(tmp_path: Path) -> None:
    level1 = _write(tmp_path / "level1.csv", ["大,dà,Vs", "", "小,xiǎo,Vs"])
    level2 = _write(tmp_path / "level2.csv", ["老師,lǎoshī,N"])

    records = read_tocfl([level1, level2])

    assert [(record.level, record.line_number) for record in records] == [(1, 1), (1, 3), (2, 1)]


def test_parse_coct_line_strips_sense_numbers() -> None:
    record = parse_coct_line("3,會1/會2/這(兒)", line_number=5)

    assert record is not None
    assert record.level == 3
    assert record.headwords == ("會", "這", "這兒")


@pytest.mark.parametrize("line", ["x,我", "1,我,你", "1,abc", "我"])
def test_parse_coct_line_rejects_malformed_lines(line: str) -> None:
    with pytest.raises(RecordFormatError, match="COCT line 2"):
        parse_coct_line(line, line_number=2)


def test_read_coct(tmp_path: Path) -> None:
    path = _write(tmp_path / "coct.csv", ["1,我", "", "2,你/妳"])

    records = read_coct(path)

    assert [record.headwords for record in records] == [("我",), ("你", "妳")]


def test_parse_cedict_line_moves_consumed_glosses_to_record() -> None:
    record = parse_cedict_line(
        "個 个 [ge4] /individual/measure word for people or objects/CL:個|个[ge4]/", 4
    )

    assert record is not None
    assert record.pinyin == "gè"
    assert [(entry.sense, entry.text) for entry in record.entries] == [
        (1, "individual"),
        (2, "measure word for people or objects"),
    ]
    assert [measure.pinyin for measure in record.measures] == ["gè"]


def test_parse_cedict_line_numbers_only_senses_with_prose() -> None:
    record = parse_cedict_line("薄 薄 [bao2] /also pr. [bo2]/thin; flimsy (Taiwan pr. [bo2])/", 1)

    assert record is not None
    assert [(entry.sense, entry.text) for entry in record.entries] == [(1, "thin"), (1, "flimsy")]
    assert record.pronunciations[0].context == "also"
    assert record.entries[1].pronunciations[0].context == "Taiwan"


def test_parse_cedict_line_keeps_unnormalized_pinyin() -> None:
    record = parse_cedict_line("A型 A型 [A xing2] /type A/", 1)

    assert record is not None
    assert record.raw_pinyin == "A xing2"
    assert record.pinyin is None
    assert record.entries[0].text == "type A"


def test_parse_cedict_line_skips_comments_and_blank_lines() -> None:
    assert parse_cedict_line("# CC-CEDICT", 1) is None
    assert parse_cedict_line("", 2) is None


@pytest.mark.parametrize("line", ["not a record", "字 字 [zi4] //", "字 字 zi4 /word/"])
def test_parse_cedict_line_rejects_malformed_lines(line: str) -> None:
    with pytest.raises(RecordFormatError, match="Dictionary line 8"):
        parse_cedict_line(line, 8)


def test_parse_cedict_lines_numbers_from_one() -> None:
    records = parse_cedict_lines(["# header\n", "愛 爱 [ai4] /to love/\n"])

    assert [record.line_number for record in records] == [2]


def test_cedict_dictionary_loads_records_once(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "cedict.u8",
        ["# comment", "愛 爱 [ai4] /to love/", "人 人 [ren2] /person/"],
    )
    dictionary = CedictDictionary(path)

    assert [record.trad for record in dictionary.records] == ["愛", "人"]
    assert dictionary.records[1].pinyin == "rén"
    assert dictionary.records is dictionary.records


def test_cedict_dictionary_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _ = CedictDictionary(tmp_path / "missing.u8").records
