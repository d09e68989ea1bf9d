from __future__ import annotations

import pytest

from magento_shopify.io import (
    detect_delimiter,
    escape_csv_field,
    parse_csv_line,
    read_text,
    rows_to_csv,
    split_lines,
    write_text,
)


def test_detect_delimiter_prefers_semicolon_only_when_strictly_more():
    assert detect_delimiter("a;b;c;d,e") == ";"
    assert detect_delimiter("a;b,c") == ","
    assert detect_delimiter("abc") == ","
    assert detect_delimiter("") == ","


def test_parse_simple_line_trims_fields():
    assert parse_csv_line(" a , b,c ") == ["a", "b", "c"]


def test_parse_quoted_delimiter_stays_in_field():
    assert parse_csv_line('"a,b",c') == ["a,b", "c"]


def test_parse_doubled_quote_is_literal():
    assert parse_csv_line('"say ""hi""",x') == ['say "hi"', "x"]


def test_parse_semicolon_delimiter_leaves_commas_alone():
    assert parse_csv_line("1,5;name;x", ";") == ["1,5", "name", "x"]


def test_parse_flushes_trailing_empty_field():
    assert parse_csv_line("a,b,") == ["a", "b", ""]
    assert parse_csv_line("") == [""]


def test_parse_unterminated_quote_runs_to_end_of_line():
    assert parse_csv_line('a,"b,c') == ["a", "b,c"]


@pytest.mark.parametrize("value,expected", [
    ("plain", "plain"),
    ("a,b", '"a,b"'),
    ('say "hi"', '"say ""hi"""'),
    ("two\nlines", '"two\nlines"'),
    (None, ""),
    (10, "10"),
    ("carriage\rreturn", "carriage\rreturn"),
])
def test_escape_csv_field(value, expected):
    assert escape_csv_field(value) == expected


def test_emit_then_tokenize_roundtrip():
    fields = ["Handle", "Widget", "10", "", "Title"]
    line = rows_to_csv(fields, []).split("\n")[0]
    assert parse_csv_line(line) == fields


def test_quoted_field_roundtrip():
    fields = ['Jane, "JJ"', "O'Connor"]
    line = rows_to_csv(fields, [])
    assert parse_csv_line(line) == fields


def test_rows_to_csv_has_no_trailing_newline():
    out = rows_to_csv(["A", "B"], [["1", "2"], ["3", "4"]])
    assert out == "A,B\n1,2\n3,4"


def test_split_lines_handles_crlf_and_outer_whitespace():
    assert split_lines("\n\na,b\r\n1,2\r\n\n") == ["a,b", "1,2"]
    assert split_lines("   ") == []


def test_read_write_text(tmp_path):
    p = tmp_path / "out" / "file.csv"
    write_text(p, "A,B\n1,2")
    assert read_text(p) == "A,B\n1,2"
