"""
Deterministic processing rules.

This file exists to make the fixed limits and tables explicit and enforceable.
"""

import string

# Bytes are mapped 1:1 onto str and back; nothing is ever transcoded.
PASSTHROUGH_CODEC = "latin-1"

UTF8_BOM = b"\xef\xbb\xbf"

SNIFF_SAMPLE_BYTES = 4096
CANDIDATE_DELIMITERS = (",", ";", "\t", "|")
DEFAULT_DELIMITER = ","

MAX_FIELDS = 32
MAX_FIELD_LENGTH = 8192
MAX_SCHEMA_FIELDS = 16
MIN_TEXT_LENGTH = 5

NULL_MARKERS = ("nan", "null", "n/a")

# Order is significant: entities are decoded one after another.
HTML_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&nbsp;", " "),
    ("&#39;", "'"),
    ("&#34;", '"'),
    ("&hellip;", "..."),
    ("&mdash;", "--"),
    ("&ndash;", "-"),
    ("&lsquo;", "'"),
    ("&rsquo;", "'"),
    ("&ldquo;", '"'),
    ("&rdquo;", '"'),
)

# ASCII classes only, so high bytes are never whitespace or punctuation.
WHITESPACE = " \t\n\r\v\f"
PUNCTUATION = frozenset(string.punctuation)
KEPT_CONTROL_CHARS = "\t\n\r"
MAX_PUNCTUATION_RUN = 3

DEFAULT_DEDUP_CAPACITY = 100_000
MAX_CLASS_BUCKETS = 32
PROGRESS_INTERVAL = 1000

RECORD_TERMINATOR = "---"
