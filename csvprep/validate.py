"""Per-field schema checks."""

from __future__ import annotations

from typing import Sequence

from .models import FieldSchema


def validate_field(value: str, schema: FieldSchema) -> bool:
    length = len(value)
    if schema.required and length == 0:
        return False
    if length < schema.min_length:
        return False
    if schema.max_length > 0 and length > schema.max_length:
        return False
    return True


def validate_record(values: Sequence[str], schema: Sequence[FieldSchema], found: int) -> bool:
    """A record is valid when the line had every declared field and each one passes."""
    if found < len(schema):
        return False
    return all(validate_field(value, field) for value, field in zip(values, schema))
