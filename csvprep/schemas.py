"""Field schema presets per dataset type."""

from __future__ import annotations

from typing import Any, List

from .models import DatasetType, FieldSchema, ProcessingConfig
from .rules import MIN_TEXT_LENGTH


def preset_fields(dataset_type: DatasetType) -> List[FieldSchema]:
    if dataset_type is DatasetType.SENTIMENT:
        return [
            FieldSchema(name="text", index=0, required=True, min_length=MIN_TEXT_LENGTH),
            FieldSchema(name="sentiment", index=1, required=True, is_label=True),
        ]
    if dataset_type is DatasetType.LEETCODE:
        return [
            FieldSchema(name="title", index=0, required=True),
            FieldSchema(name="difficulty", index=1, required=True),
            FieldSchema(name="description", index=2, required=True, min_length=50),
        ]
    if dataset_type is DatasetType.QA:
        return [
            FieldSchema(name="question", index=0, required=True),
            FieldSchema(name="answer", index=1, required=True),
        ]
    if dataset_type is DatasetType.CLASSIFICATION:
        return [
            FieldSchema(name="text", index=0, required=True),
            FieldSchema(name="category", index=1, required=True, is_label=True),
        ]
    return [FieldSchema(name="field_0", index=0), FieldSchema(name="field_1", index=1)]


def build_config(dataset_type: DatasetType | str, **overrides: Any) -> ProcessingConfig:
    """Configuration for `dataset_type` with its preset fields unless `fields` is overridden."""
    if isinstance(dataset_type, str) and not isinstance(dataset_type, DatasetType):
        dataset_type = DatasetType.from_name(dataset_type)
    overrides.setdefault("fields", preset_fields(dataset_type))
    return ProcessingConfig(dataset_type=dataset_type, **overrides)
