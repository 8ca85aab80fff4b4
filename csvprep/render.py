"""
Output rendering.

One renderer per output variant behind a single `render` method; the
pipeline picks one with `get_renderer` and never switches on the type again.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Dict, Sequence, Tuple

from .models import DatasetType, FieldSchema, OutputFormat
from .rules import PASSTHROUGH_CODEC, RECORD_TERMINATOR


class RecordRenderer(ABC):
    @abstractmethod
    def render(self, values: Sequence[str], schema: Sequence[FieldSchema]) -> str:
        """Return one self-delimited output unit."""

    def write(self, out: BinaryIO, values: Sequence[str], schema: Sequence[FieldSchema]) -> None:
        out.write(self.render(values, schema).encode(PASSTHROUGH_CODEC))


class JsonLineRenderer(RecordRenderer):
    """One object per line. Values are written verbatim, without any escaping."""

    def render(self, values: Sequence[str], schema: Sequence[FieldSchema]) -> str:
        pairs = ",".join(f'"{field.name}":"{value}"' for field, value in zip(schema, values))
        return "{" + pairs + "}\n"


class LabeledBlockRenderer(RecordRenderer):
    def __init__(self, labels: Tuple[str, ...]) -> None:
        self.labels = labels

    def render(self, values: Sequence[str], schema: Sequence[FieldSchema]) -> str:
        lines = [
            f"{label}: {values[i] if i < len(values) else ''}"
            for i, label in enumerate(self.labels)
        ]
        lines.append(RECORD_TERMINATOR)
        return "\n".join(lines) + "\n"


class SchemaBlockRenderer(RecordRenderer):
    """Fallback block: one `<name>: <value>` line per declared field."""

    def render(self, values: Sequence[str], schema: Sequence[FieldSchema]) -> str:
        lines = [f"{field.name}: {value}" for field, value in zip(schema, values)]
        lines.append(RECORD_TERMINATOR)
        return "\n".join(lines) + "\n"


TEXT_LABELS: Dict[DatasetType, Tuple[str, ...]] = {
    DatasetType.SENTIMENT: ("Text", "Sentiment"),
    DatasetType.LEETCODE: ("Problem", "Difficulty", "Description"),
    DatasetType.QA: ("Question", "Answer"),
    DatasetType.CLASSIFICATION: ("Text", "Category"),
}


def get_renderer(output_format: OutputFormat, dataset_type: DatasetType) -> RecordRenderer:
    if output_format is OutputFormat.JSON:
        return JsonLineRenderer()
    labels = TEXT_LABELS.get(dataset_type)
    if labels is None:
        return SchemaBlockRenderer()
    return LabeledBlockRenderer(labels)
