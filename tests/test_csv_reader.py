# tests/test_csv_reader.py

from __future__ import annotations

import logging

import pytest

from region_index.core.exceptions import RecordFormatError
from region_index.loader import Region, parse_row, read_regions
from region_index.utils import mock_file_path


def test_parse_row_minimal_columns() -> None:
    rec = parse_row(["110000000000", "北京市", "1", "0", "0"], lineno=2)
    assert rec.code == "110000000000"
    assert rec.name == "北京市"
    assert rec.level == 1
    assert rec.parent_code == "0"
    assert rec.type == 0
    assert rec.avg_house_price is None
    assert rec.employment_rate is None
    assert rec.is_top_level


def test_parse_row_with_price() -> None:
    rec = parse_row(["110101000000", "东城区", "3", "110100000000", "111", "98000.5"])
    assert rec.avg_house_price == pytest.approx(98000.5)
    assert rec.extension == pytest.approx(98000.5)


def test_parse_row_zero_price_is_not_absent() -> None:
    rec = parse_row(["110101000000", "东城区", "3", "110100000000", "111", "0"])
    assert rec.avg_house_price == 0.0
    assert rec.extension is not None


def test_parse_row_with_rate_only() -> None:
    rec = parse_row(["110102000000", "西城区", "3", "110100000000", "111", "", "0.95"])
    assert rec.avg_house_price is None
    assert rec.employment_rate == "0.95"


def test_parse_row_na_means_absent() -> None:
    rec = parse_row(["140105000000", "小店区", "3", "140100000000", "111", "N/A", "N/A"])
    assert rec.extension is None


@pytest.mark.parametrize(
    "fields",
    [
        ["110000000000", "北京市", "1", "0"],  # too few columns
        ["11A000000000", "北京市", "1", "0", "0"],  # non-digit code
        ["000000000000", "Root", "0", "0", "0"],  # reserved root code
        ["110000000000", "   ", "1", "0", "0"],  # blank name
        ["110000000000", "北京市", "9", "0", "0"],  # level out of range
        ["110000000000", "北京市", "x", "0", "0"],  # level not an int
        ["110100000000", "市辖区", "2", "11-00", "0"],  # bad parent code
        ["110101000000", "东城区", "3", "110100000000", "111", "cheap"],
        ["110101000000", "东城区", "3", "110100000000", "111", "100", "0.9"],
    ],
)
def test_parse_row_rejects_malformed(fields) -> None:
    with pytest.raises(RecordFormatError):
        parse_row(fields, lineno=7)


def test_region_rejects_both_extension_values() -> None:
    with pytest.raises(RecordFormatError):
        Region("1", "A", 1, "0", 0, avg_house_price=1.0, employment_rate="x")


def test_read_regions_sample_file() -> None:
    load = read_regions(mock_file_path("regions_sample.csv"))

    assert load.header_skipped is True
    assert len(load.records) == 14
    assert load.records[0].code == "110000000000"
    # The trailing "bad,broken row" line is rejected, not fatal.
    assert len(load.rejected) == 1
    assert load.rejected[0][0] == 16


def test_read_regions_strict_raises(tmp_path) -> None:
    path = tmp_path / "regions.csv"
    path.write_text("11,Beijing,1,0,0\nnot,a,valid,row,at-all\n", encoding="utf-8")

    with pytest.raises(RecordFormatError):
        read_regions(path, strict=True)


def test_read_regions_first_row_data_is_kept(tmp_path) -> None:
    path = tmp_path / "regions.csv"
    path.write_text("11,Beijing,1,0,0\n1101,Dongcheng,2,11,0\n", encoding="utf-8")

    load = read_regions(path)
    assert load.header_skipped is False
    assert [r.code for r in load.records] == ["11", "1101"]


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__(logging.WARNING)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.fixture
def reader_warnings():
    handler = _Collect()
    reader_log = logging.getLogger("region_index.loader.csv_reader")
    reader_log.addHandler(handler)
    yield handler.messages
    reader_log.removeHandler(handler)


def test_malformed_first_record_is_rejected_not_a_header(tmp_path, reader_warnings) -> None:
    path = tmp_path / "regions.csv"
    path.write_text("11,Beijing,one,0,0\n12,Tianjin,1,0,0\n", encoding="utf-8")

    load = read_regions(path)

    assert load.header_skipped is False
    assert [r.code for r in load.records] == ["12"]
    assert [lineno for lineno, _ in load.rejected] == [1]
    assert any("First row is a malformed record" in m for m in reader_warnings)


def test_malformed_first_record_raises_in_strict_mode(tmp_path) -> None:
    path = tmp_path / "regions.csv"
    path.write_text("11,Beijing,one,0,0\n12,Tianjin,1,0,0\n", encoding="utf-8")

    with pytest.raises(RecordFormatError):
        read_regions(path, strict=True)


def test_textual_header_is_skipped_quietly(tmp_path, reader_warnings) -> None:
    path = tmp_path / "regions.csv"
    path.write_text("code,name,level,parent_code,type\n12,Tianjin,1,0,0\n", encoding="utf-8")

    load = read_regions(path)

    assert load.header_skipped is True
    assert load.rejected == []
    assert reader_warnings == []


def test_read_regions_quoted_name_with_comma(tmp_path) -> None:
    path = tmp_path / "regions.csv"
    path.write_text('11,"Beijing, Capital",1,0,0\n', encoding="utf-8")

    load = read_regions(path)
    assert load.records[0].name == "Beijing, Capital"


def test_read_regions_respects_max_records(tmp_path) -> None:
    path = tmp_path / "regions.csv"
    path.write_text("11,A,1,0,0\n12,B,1,0,0\n13,C,1,0,0\n", encoding="utf-8")

    load = read_regions(path, max_records=2)
    assert [r.code for r in load.records] == ["11", "12"]


def test_read_regions_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        read_regions(tmp_path / "missing.csv")
