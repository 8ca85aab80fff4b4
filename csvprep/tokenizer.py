"""Quote-aware splitting of a single line into fields."""

from __future__ import annotations

from typing import List

from .rules import MAX_FIELD_LENGTH, MAX_FIELDS


def pick_quote_char(line: str) -> str:
    if "'" in line and '"' not in line:
        return "'"
    return '"'


def tokenize_line(
    line: str,
    delimiter: str,
    max_fields: int = MAX_FIELDS,
    max_field_length: int = MAX_FIELD_LENGTH,
) -> List[str]:
    """
    Split `line` (without its terminator) on `delimiter`.

    Two states, unquoted and quoted. A doubled quote inside a quoted span is a
    literal quote; an unterminated quote is not an error. Fields beyond
    `max_fields` and characters beyond `max_field_length` are dropped.
    """
    quote = pick_quote_char(line)
    fields: List[str] = []
    buf: List[str] = []
    in_quotes = False
    i = 0
    n = len(line)

    def push(ch: str) -> None:
        if len(buf) < max_field_length:
            buf.append(ch)

    while i < n and len(fields) < max_fields:
        ch = line[i]
        if ch == quote:
            if in_quotes and i + 1 < n and line[i + 1] == quote:
                push(quote)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            fields.append("".join(buf))
            buf = []
        else:
            push(ch)
        i += 1

    if len(fields) < max_fields:
        fields.append("".join(buf))

    return fields
