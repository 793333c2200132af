import io

import pandas as pd

from dataframe_source import rows_from_dataframe
from formatter import read_and_format
from options import Options

PEOPLE = b"name,age\nbob,30\nalice,5\n"


def test_read_and_format_success():
    result = read_and_format(io.BytesIO(PEOPLE), Options(border_type=2, force_ascii_art=True))
    assert result.ok
    assert result.error is None
    assert result.lines == [
        b"+-------+-----+",
        b"| name  | age |",
        b"+-------+-----+",
        b"| bob   |  30 |",
        b"| alice |   5 |",
        b"+-------+-----+",
        b"(2 rows)",
    ]
    assert result.desc.linestyle == "a"
    assert result.desc.border_type == 2


def test_force8bit_implies_ascii_borders():
    result = read_and_format(io.BytesIO(b"1,2\n"), Options(force8bit=True))
    assert result.ok
    assert result.lines[0] == b" 1 | 2 "


def test_data_line_count_matches_accepted_rows():
    data = b"a,b\n\n1,2\n\n3,4\n5,6\n"
    result = read_and_format(io.BytesIO(data), Options(border_type=0))
    desc = result.desc
    assert desc.last_data_row - desc.first_data_row + 1 == 3
    assert result.lines[-1] == b"(3 rows)"


def test_broken_character_fails_without_output():
    result = read_and_format(io.BytesIO(b"a,\xe2\x94"), Options())
    assert not result.ok
    assert result.desc is None
    assert result.lines == []
    assert "broken unicode char" in result.error


def test_too_many_columns_fails():
    result = read_and_format(io.BytesIO(b"a,b,c\n"), Options(max_columns=2))
    assert not result.ok
    assert "too many columns" in result.error


def test_configured_separator():
    result = read_and_format(io.BytesIO(b"a;b,c\n"), Options(separator=","))
    assert result.lines[0] == " a;b │ c ".encode("utf-8")


def test_prebuilt_source_bypasses_parser():
    df = pd.DataFrame({"name": ["bob", "alice"], "age": [30, 5]})
    from_frame = read_and_format(None, Options(), source=rows_from_dataframe(df))
    from_csv = read_and_format(io.BytesIO(PEOPLE), Options())
    assert from_frame.ok
    assert from_frame.lines == from_csv.lines


def test_out_of_memory_fails_without_output(monkeypatch):
    import csv_parser

    def exhausted(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr(csv_parser, "measure_field", exhausted)
    result = read_and_format(io.BytesIO(PEOPLE), Options())
    assert not result.ok
    assert result.error == "out of memory while formatting table"
    assert result.desc is None
    assert result.lines == []


def test_unknown_border_style_fails():
    result = read_and_format(io.BytesIO(PEOPLE), Options(border_type=3))
    assert not result.ok
    assert "unknown border style" in result.error
    assert result.lines == []
