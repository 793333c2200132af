import io

import pytest

from csv_parser import CsvParser, parse_csv
from errors import BrokenCharacterError, CapacityError


def _rows(data: bytes, **kwargs):
    store, _ = parse_csv(io.BytesIO(data), **kwargs)
    return [row.fields for row in store]


def test_quoted_separator_stays_in_field():
    assert _rows(b'a,"b,c",d', separator=",") == [(b"a", b"b,c", b"d")]


def test_doubled_quote_is_literal():
    assert _rows(b'a,"b""c",d', separator=",") == [(b"a", b'b"c', b"d")]


def test_separator_auto_detection_first_match_wins():
    parser = CsvParser()
    store = parser.parse(io.BytesIO(b"x;y;z\n1,2;3\n"))
    assert parser.detected_separator == ord(";")
    assert [r.fields for r in store] == [(b"x", b"y", b"z"), (b"1,2", b"3")]


def test_configured_separator_ignores_other_candidates():
    assert _rows(b"a,b|c", separator="|") == [(b"a,b", b"c")]


def test_tab_separator():
    assert _rows(b"a\tb\n", separator="\t") == [(b"a", b"b")]


def test_unquoted_spaces_are_trimmed():
    assert _rows(b"  a  , b") == [(b"a", b"b")]


def test_quoted_spaces_are_kept():
    assert _rows(b'" a ",b') == [(b" a ", b"b")]


def test_empty_and_trailing_fields():
    assert _rows(b"a,,c\na,\n") == [(b"a", b"", b"c"), (b"a", b"")]


def test_blank_lines_are_skipped():
    assert _rows(b"a,b\n\n   \n c,d\n") == [(b"a", b"b"), (b"c", b"d")]


def test_crlf_line_endings():
    assert _rows(b"a,b\r\nc,d\r\n") == [(b"a", b"b"), (b"c", b"d")]


def test_embedded_newline_makes_multiline_row():
    store, stats = parse_csv(io.BytesIO(b'a,"x\nlonger"\nb,c\n'))
    rows = list(store)
    assert rows[0].fields == (b"a", b"x\nlonger")
    assert rows[0].multiline is True
    assert rows[1].multiline is False
    assert stats.column_multilines() == [False, True]
    assert stats.column_widths() == [1, 6]


def test_multibyte_characters_pass_through():
    data = "č,漢字\nž,x\n".encode("utf-8")
    store, stats = parse_csv(io.BytesIO(data))
    assert [r.fields for r in store][0] == ("č".encode(), "漢字".encode())
    assert stats.column_widths() == [1, 4]


def test_single_byte_mode_measures_bytes():
    data = "č,x\n".encode("utf-8")
    _, stats = parse_csv(io.BytesIO(data), force8bit=True)
    assert stats.column_widths() == [2, 1]


def test_truncated_multibyte_character_is_fatal():
    with pytest.raises(BrokenCharacterError):
        parse_csv(io.BytesIO(b"a,\xc4"))


def test_column_ceiling_is_fatal():
    with pytest.raises(CapacityError):
        parse_csv(io.BytesIO(b"a,b,c,d"), max_columns=3)
    assert _rows(b"a,b,c", max_columns=3) == [(b"a", b"b", b"c")]


def test_statistics_skip_first_record():
    _, stats = parse_csv(io.BytesIO(b"name,age\nbob,30\nann,41\n"))
    assert stats.maxfields == 2
    # three records plus the empty one closed by end of stream
    assert stats.processed == 4
    assert stats.digits[1] == 4
    assert stats.tsizes[1] == 0
    assert stats.firstdigit[1] == 2
    assert stats.tsizes[0] == 6
    assert stats.column_widths() == [4, 3]


def test_ragged_rows_track_max_fields():
    _, stats = parse_csv(io.BytesIO(b"a\nb,c,d\ne,f\n"))
    assert stats.maxfields == 3
