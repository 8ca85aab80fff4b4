"""
Record pipeline: drives the per-line loop over one input stream.

Init -> skip preamble lines -> consume header -> stream records -> done.
The only fatal condition is failing to open a stream (`process_files`);
everything that goes wrong on a single line is counted, never raised.
"""

from __future__ import annotations

import logging
import os
import re
from typing import BinaryIO, List, Optional, Tuple, Union

from .config import PipelineSettings, get_settings
from .dedup import DedupFilter
from .exceptions import StreamOpenError
from .models import ProcessingConfig, ProcessingStats
from .normalize import normalize_field
from .render import get_renderer
from .rules import PASSTHROUGH_CODEC
from .sniff import sniff
from .tokenizer import tokenize_line
from .validate import validate_record

logger = logging.getLogger(__name__)

_LINE_END = re.compile(r"[\r\n]")

PathLike = Union[str, "os.PathLike[str]"]


def clean_record(line: str, config: ProcessingConfig, delimiter: str) -> Tuple[List[str], str, bool]:
    """Tokenize, normalize and validate one line.

    Returns one value per declared field (missing ones as ""), the cleaned
    primary field (field 0 of the line, declared or not) and whether the
    record is valid. The field-count check always applies; per-field schema
    checks only when `validate_data` is set.
    """
    tokens = tokenize_line(line, delimiter)
    found = len(tokens)
    values = [
        normalize_field(tokens[i], config.strict_mode) if i < found else ""
        for i in range(config.field_count)
    ]
    if config.validate_data:
        valid = validate_record(values, config.fields, found)
    else:
        valid = found >= config.field_count
    primary = values[0] if values else normalize_field(tokens[0], config.strict_mode)
    return values, primary, valid


def _decode_line(raw: bytes) -> str:
    return _LINE_END.split(raw.decode(PASSTHROUGH_CODEC), 1)[0]


def process_stream(
    config: ProcessingConfig,
    inp: BinaryIO,
    out: BinaryIO,
    settings: Optional[PipelineSettings] = None,
) -> ProcessingStats:
    """Run one configuration over an open, seekable input and a writable output."""
    settings = settings or get_settings()

    sniffed = sniff(inp, config.encoding, config.delimiter)
    delimiter = sniffed.delimiter
    stats = ProcessingStats(
        delimiter=delimiter,
        encoding=sniffed.encoding,
        charset_hint=sniffed.charset_hint,
    )

    renderer = get_renderer(config.output_format, config.dataset_type)
    dedup = None
    if config.remove_duplicates:
        dedup = DedupFilter(config.max_lines or settings.dedup_capacity)
    label_pos = config.label_position
    length_total = 0

    for _ in range(config.skip_lines):
        if not inp.readline():
            break
        stats.skipped_lines += 1

    if config.has_header:
        header = inp.readline()
        if header:
            stats.total_lines += 1
            logger.info("Header: %s", _decode_line(header))

    for raw in iter(inp.readline, b""):
        if config.max_lines and stats.processed_lines >= config.max_lines:
            break
        stats.total_lines += 1

        line = _decode_line(raw)
        if not line:
            continue

        values, primary, valid = clean_record(line, config, delimiter)
        if not valid:
            stats.error_lines += 1
            if config.strict_mode:
                continue

        if dedup is not None and dedup.seen(primary):
            stats.duplicate_lines += 1
            continue

        renderer.write(out, values, config.fields)
        stats.processed_lines += 1
        length_total += len(primary)
        if label_pos is not None:
            stats.record_class(values[label_pos])

        if stats.processed_lines % settings.progress_interval == 0:
            logger.info(
                "Processed %d/%d lines (%.1f%%)...",
                stats.processed_lines,
                stats.total_lines,
                stats.success_rate(),
            )

    stats.avg_text_length = length_total / max(stats.processed_lines, 1)
    logger.info(
        "done: total=%d processed=%d skipped=%d errors=%d duplicates=%d avg_len=%.1f",
        stats.total_lines,
        stats.processed_lines,
        stats.skipped_lines,
        stats.error_lines,
        stats.duplicate_lines,
        stats.avg_text_length,
    )
    return stats


def _open(path: PathLike, mode: str) -> BinaryIO:
    try:
        return open(path, mode)
    except OSError as exc:
        logger.error("Error opening file '%s': %s", path, exc.strerror or exc)
        raise StreamOpenError(os.fspath(path), exc.strerror or str(exc)) from exc


def process_files(
    input_path: PathLike,
    output_path: PathLike,
    config: ProcessingConfig,
    settings: Optional[PipelineSettings] = None,
) -> ProcessingStats:
    """Open both files and run the pipeline; raises StreamOpenError before any processing."""
    inp = _open(input_path, "rb")
    try:
        out = _open(output_path, "wb")
    except StreamOpenError:
        inp.close()
        raise
    with inp, out:
        return process_stream(config, inp, out, settings)
