"""
Stream sniffing: delimiter and byte-order marker detection.

Every probe restores the stream position, except that a UTF-8 BOM is
consumed for good so later reads start at the first real byte.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Optional

from charset_normalizer import from_bytes

from .models import EncodingMarker, SniffResult
from .rules import (
    CANDIDATE_DELIMITERS,
    DEFAULT_DELIMITER,
    PASSTHROUGH_CODEC,
    SNIFF_SAMPLE_BYTES,
    UTF8_BOM,
)

logger = logging.getLogger(__name__)


def detect_encoding(stream: BinaryIO) -> EncodingMarker:
    pos = stream.tell()
    head = stream.read(len(UTF8_BOM))
    if head == UTF8_BOM:
        stream.seek(pos + len(UTF8_BOM))
        return EncodingMarker.UTF8
    stream.seek(pos)
    return EncodingMarker.AUTO


def count_delimiters(sample: str) -> dict[str, int]:
    """Count candidate delimiters outside double-quoted spans."""
    counts = {d: 0 for d in CANDIDATE_DELIMITERS}
    in_quotes = False
    for ch in sample:
        if ch == '"':
            in_quotes = not in_quotes
        elif not in_quotes and ch in counts:
            counts[ch] += 1
    return counts


def choose_delimiter(counts: dict[str, int]) -> str:
    comma, semicolon, tab, pipe = counts[","], counts[";"], counts["\t"], counts["|"]
    if tab > 0:
        return "\t"
    if semicolon > comma and semicolon > pipe:
        return ";"
    if pipe > comma:
        return "|"
    return DEFAULT_DELIMITER


def detect_delimiter(stream: BinaryIO) -> str:
    pos = stream.tell()
    # sample at most 4095 bytes of the first line
    sample = stream.readline(SNIFF_SAMPLE_BYTES - 1)
    stream.seek(pos)
    if not sample:
        return DEFAULT_DELIMITER
    return choose_delimiter(count_delimiters(sample.decode(PASSTHROUGH_CODEC)))


def guess_charset(stream: BinaryIO) -> Optional[str]:
    """Best-effort charset name for reporting only; the bytes are never transcoded."""
    pos = stream.tell()
    sample = stream.read(SNIFF_SAMPLE_BYTES)
    stream.seek(pos)
    if not sample:
        return None
    match = from_bytes(sample).best()
    return match.encoding if match is not None else None


def sniff(
    stream: BinaryIO,
    encoding: EncodingMarker = EncodingMarker.AUTO,
    delimiter: Optional[str] = None,
) -> SniffResult:
    """Resolve whatever the configuration left undecided.

    Encoding is probed only when marked auto, and before the delimiter so a
    BOM never lands in the delimiter sample.
    """
    charset_hint = None
    if encoding is EncodingMarker.AUTO:
        encoding = detect_encoding(stream)
        if encoding is EncodingMarker.AUTO:
            charset_hint = guess_charset(stream)
    if delimiter is None:
        delimiter = detect_delimiter(stream)

    logger.debug("sniffed delimiter=%r encoding=%s charset_hint=%s", delimiter, encoding.value, charset_hint)
    return SniffResult(delimiter=delimiter, encoding=encoding, charset_hint=charset_hint)
