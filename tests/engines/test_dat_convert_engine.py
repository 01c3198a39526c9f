#!filepath: tests/engines/test_dat_convert_engine.py
from pathlib import Path

import pytest

from rm_preprocessor.engines.dat_convert_engine import DatConvertEngine
from rm_preprocessor.utils.errors import AmbiguousMarkerError


def read_csv_lines(p: Path) -> list[str]:
    return p.read_text(encoding="utf-8").splitlines()


def test_convert_builds_header_and_keeps_data_rows(make_dataset, regression_lines):
    """`@inputs a, b` + `@outputs c` → header `a, b, c`, then the data rows"""
    src = make_dataset("All-regression", regression_lines)

    result = DatConvertEngine(encoding="utf-8").convert(src)

    assert result.target == src.parent / "All-regression.csv"
    assert result.header == "a, b, c"
    assert result.rows == 2
    assert read_csv_lines(result.target) == ["a, b, c", "1,2,3", "4,5,6"]


def test_convert_without_markers_emits_body_only(make_dataset):
    src = make_dataset("plain", ["@relation plain", "@data", "1,2", "3,4"])

    result = DatConvertEngine(encoding="utf-8").convert(src)

    assert result.header is None
    assert read_csv_lines(result.target) == ["1,2", "3,4"]


@pytest.mark.parametrize("marker_line", ["@inputs a, b", "@outputs c"])
def test_convert_with_single_marker_adds_no_header(make_dataset, marker_line):
    src = make_dataset("half", [marker_line, "1,2,3"])

    result = DatConvertEngine(encoding="utf-8").convert(src)

    assert result.header is None
    assert read_csv_lines(result.target) == ["1,2,3"]


def test_marker_text_is_trimmed(make_dataset):
    src = make_dataset("trim", ["   @inputs   x1, x2   ", "\t@outputs y \t", "0,0,1"])

    result = DatConvertEngine(encoding="utf-8").convert(src)

    assert read_csv_lines(result.target)[0] == "x1, x2, y"


@pytest.mark.parametrize("marker", ["@inputs", "@outputs"])
def test_duplicate_marker_raises_and_writes_nothing(make_dataset, marker):
    lines = ["@inputs a", "@outputs b", f"{marker} again", "1,2"]
    src = make_dataset("dup", lines)

    with pytest.raises(AmbiguousMarkerError) as exc:
        DatConvertEngine(encoding="utf-8").convert(src)

    assert exc.value.marker == marker
    assert len(exc.value.line_numbers) == 2
    assert not src.with_suffix(".csv").exists()


def test_find_marker_zero_one_many():
    p = Path("x.dat")
    find = DatConvertEngine.find_marker

    assert find(p, ["1,2", "@data"], "@inputs") is None
    assert find(p, ["@inputs a", "1,2"], "@inputs") == "a"
    with pytest.raises(AmbiguousMarkerError):
        find(p, ["@inputs a", "@inputs b"], "@inputs")


def test_body_drops_every_line_containing_at_sign(make_dataset):
    src = make_dataset("at", ["1,2", "mail@example.com,3", "4,5"])

    result = DatConvertEngine(encoding="utf-8").convert(src)

    assert read_csv_lines(result.target) == ["1,2", "4,5"]


def test_crlf_input_is_split_into_lines(tmp_path):
    d = tmp_path / "win"
    d.mkdir()
    src = d / "win.dat"
    src.write_bytes(b"@inputs a\r\n@outputs b\r\n1,2\r\n")

    result = DatConvertEngine(encoding="utf-8").convert(src)

    assert read_csv_lines(result.target) == ["a, b", "1,2"]


@pytest.mark.parametrize("encoding", ["utf-8", "UTF8"])
def test_utf8_byte_order_mark_is_dropped(tmp_path, encoding):
    d = tmp_path / "bom"
    d.mkdir()
    src = d / "bom.dat"
    src.write_bytes(b"\xef\xbb\xbf@inputs a\n@outputs b\n1,2\n")

    result = DatConvertEngine(encoding=encoding).convert(src)

    assert result.header == "a, b"
    assert result.target.read_bytes().startswith(b"a, b")


def test_existing_csv_is_overwritten(make_dataset, regression_lines):
    src = make_dataset("All-regression", regression_lines)
    stale = src.with_suffix(".csv")
    stale.write_text("stale\n", encoding="utf-8")

    DatConvertEngine(encoding="utf-8").convert(src)

    assert read_csv_lines(stale) == ["a, b, c", "1,2,3", "4,5,6"]
    assert not list(src.parent.glob("*.tmp"))


def test_missing_file_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        DatConvertEngine().convert(tmp_path / "nope" / "nope.dat")
