import pytest

from import_engine.csv_parser import parse_csv
from import_engine.errors import MalformedFileError


def test_quoted_comma_is_one_field():
    parsed = parse_csv('Name,Email\n"Doe, John",john@example.com\n')
    assert parsed.headers == ["Name", "Email"]
    assert parsed.rows[0].values == {"Name": "Doe, John", "Email": "john@example.com"}


def test_quoted_newline_and_escaped_quote():
    parsed = parse_csv('Name,Notes\nPantry,"line one\nline ""two"""\n')
    assert len(parsed.rows) == 1
    assert parsed.rows[0].values["Notes"] == 'line one\nline "two"'


def test_whitespace_trimmed_around_values_and_headers():
    parsed = parse_csv(" Name , Email \n  Jane  ,  jane@example.com \n")
    assert parsed.headers == ["Name", "Email"]
    assert parsed.rows[0].values == {"Name": "Jane", "Email": "jane@example.com"}


def test_blank_lines_skipped_and_not_numbered():
    parsed = parse_csv("\nName\n\nA\n   \nB\n\n")
    assert [r.number for r in parsed.rows] == [1, 2]
    assert [r.values["Name"] for r in parsed.rows] == ["A", "B"]


def test_field_count_mismatch_is_row_error():
    parsed = parse_csv("A,B\n1,2,3\n4,5\n6\n")
    assert parsed.rows[0].error == "expected 2 fields, found 3"
    assert parsed.rows[1].values == {"A": "4", "B": "5"}
    assert parsed.rows[2].error == "expected 2 fields, found 1"


def test_crlf_line_endings():
    parsed = parse_csv(b"Name,Zip\r\nA,1\r\nB,2\r\n")
    assert [r.values["Zip"] for r in parsed.rows] == ["1", "2"]


def test_header_only_has_no_rows():
    parsed = parse_csv("Name,Email\n")
    assert parsed.rows == []


@pytest.mark.parametrize("content", ["", "   \n\n", b""])
def test_empty_file_is_malformed(content):
    with pytest.raises(MalformedFileError):
        parse_csv(content)


def test_duplicate_header_is_malformed():
    with pytest.raises(MalformedFileError, match="duplicate column"):
        parse_csv("Email,email\na@b.co,c@d.co\n")


def test_bom_stripped_from_bytes_and_str():
    assert parse_csv(b"\xef\xbb\xbfName\nA\n").headers == ["Name"]
    assert parse_csv("\ufeffName\nA\n").headers == ["Name"]


def test_latin1_fallback():
    parsed = parse_csv("Name\nCafé\n".encode("latin-1"))
    assert parsed.rows[0].values["Name"] == "Café"


def test_non_text_input_is_malformed():
    with pytest.raises(MalformedFileError):
        parse_csv(12345)


@pytest.mark.parametrize("content", [",,,,\nJohn,john@example.com,100,one-time,General\n",
                                     "\n  \n , ,\nA,B\n"])
def test_blank_header_cells_are_malformed(content):
    with pytest.raises(MalformedFileError, match="CSV header is empty"):
        parse_csv(content)


def test_empty_lines_before_header_skipped():
    parsed = parse_csv("\n   \nName,Email\nA,a@b.co\n")
    assert parsed.headers == ["Name", "Email"]
    assert parsed.rows[0].number == 1
