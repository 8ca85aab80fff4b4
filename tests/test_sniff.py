import io

import pytest

from csvprep.models import EncodingMarker
from csvprep.sniff import count_delimiters, detect_delimiter, detect_encoding, sniff


@pytest.mark.parametrize(
    "first_line, expected",
    [
        (b"a,b,c\n", ","),
        (b"a\tb,c,d,e\n", "\t"),
        (b"a;b;c,d\n", ";"),
        (b"a|b|c,d\n", "|"),
        (b"a,b|c\n", ","),
        (b"a;b|c\n", "|"),
        (b'"x;y;z",a\n', ","),
    ],
)
def test_detect_delimiter_priority(first_line, expected):
    stream = io.BytesIO(first_line + b"1;2;3|4|5|6\n")
    assert detect_delimiter(stream) == expected
    assert stream.tell() == 0


def test_quoted_spans_are_not_counted():
    counts = count_delimiters('"a;b;c",d')
    assert counts[";"] == 0
    assert counts[","] == 1


def test_empty_stream_defaults_to_comma():
    assert detect_delimiter(io.BytesIO(b"")) == ","


def test_bom_is_consumed():
    stream = io.BytesIO(b"\xef\xbb\xbftext;label\n")
    assert detect_encoding(stream) is EncodingMarker.UTF8
    assert stream.tell() == 3


def test_no_bom_leaves_position():
    stream = io.BytesIO(b"ab")
    assert detect_encoding(stream) is EncodingMarker.AUTO
    assert stream.tell() == 0


def test_sniff_reads_bom_before_delimiter():
    stream = io.BytesIO(b"\xef\xbb\xbftext;label\nhello;world\n")
    result = sniff(stream)
    assert result.encoding is EncodingMarker.UTF8
    assert result.delimiter == ";"
    assert result.charset_hint is None
    assert stream.read() == b"text;label\nhello;world\n"


def test_sniff_respects_configured_values():
    stream = io.BytesIO(b"\xef\xbb\xbfa;b\n")
    result = sniff(stream, EncodingMarker.LATIN1, "|")
    assert result.encoding is EncodingMarker.LATIN1
    assert result.delimiter == "|"
    assert stream.tell() == 0


def test_sniff_reports_charset_hint_without_consuming():
    stream = io.BytesIO(b"text,label\nplain ascii content,yes\n")
    result = sniff(stream)
    assert result.encoding is EncodingMarker.AUTO
    assert isinstance(result.charset_hint, str)
    assert stream.tell() == 0


def test_delimiter_sample_stops_at_4095_bytes():
    # semicolons fill the sample; the commas past it are never counted
    line = b"a;" * 2000 + b"," * 3000 + b"\n"
    assert detect_delimiter(io.BytesIO(line)) == ";"
    assert count_delimiters(line.decode("latin-1"))[","] == 3000
