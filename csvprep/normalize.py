"""
Field normalization.

One pure function per cleanup step, applied by `normalize_field` in a fixed order:
- null-marker canonicalization
- trimming
- HTML entity decoding
- tag stripping (after entity decoding, so `&lt;b&gt;` is stripped too)
- control-character removal and whitespace collapsing
- punctuation run limiting (strict mode only)
- minimum length gate and truncation
"""

from __future__ import annotations

from typing import List

from .rules import (
    HTML_ENTITIES,
    KEPT_CONTROL_CHARS,
    MAX_FIELD_LENGTH,
    MAX_PUNCTUATION_RUN,
    MIN_TEXT_LENGTH,
    NULL_MARKERS,
    PUNCTUATION,
    WHITESPACE,
)


def is_null_marker(text: str) -> bool:
    return text.lower() in NULL_MARKERS


def decode_entities(text: str) -> str:
    """Decode the fixed entity table, exhausting each entity before the next."""
    for entity, replacement in HTML_ENTITIES:
        while entity in text:
            text = text.replace(entity, replacement)
    return text


def strip_tags(text: str) -> str:
    """Remove `<...>` spans; an unclosed `<` cuts the rest of the string."""
    while True:
        start = text.find("<")
        if start < 0:
            return text
        end = text.find(">", start)
        if end < 0:
            return text[:start]
        text = text[:start] + text[end + 1 :]


def collapse_whitespace(text: str) -> str:
    out: List[str] = []
    last_space = False
    for ch in text:
        if ord(ch) < 0x20 and ch not in KEPT_CONTROL_CHARS:
            continue
        if ch in WHITESPACE:
            if not last_space and out:
                out.append(" ")
                last_space = True
        else:
            out.append(ch)
            last_space = False
    return "".join(out)


def limit_punctuation(text: str, max_run: int = MAX_PUNCTUATION_RUN) -> str:
    """Keep at most the first `max_run` characters of every punctuation run."""
    out: List[str] = []
    run = 0
    for ch in text:
        if ch in PUNCTUATION:
            run += 1
            if run <= max_run:
                out.append(ch)
        else:
            run = 0
            out.append(ch)
    return "".join(out)


def normalize_field(text: str, strict: bool = False, max_length: int = MAX_FIELD_LENGTH) -> str:
    if not text or is_null_marker(text):
        return ""

    text = text.strip(WHITESPACE)
    text = decode_entities(text)
    text = strip_tags(text)
    text = collapse_whitespace(text)
    if strict:
        text = limit_punctuation(text)

    if len(text) < MIN_TEXT_LENGTH:
        return ""
    if len(text) > max_length:
        text = text[:max_length]
    return text
