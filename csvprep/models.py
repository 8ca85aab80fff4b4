from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import UnknownDatasetTypeError
from .rules import MAX_CLASS_BUCKETS, MAX_SCHEMA_FIELDS, PASSTHROUGH_CODEC


class DatasetType(str, Enum):
    SENTIMENT = "sentiment"
    LEETCODE = "leetcode"
    CUSTOM = "custom"
    CLASSIFICATION = "classification"
    QA = "qa"

    @classmethod
    def from_name(cls, name: str) -> "DatasetType":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnknownDatasetTypeError(name) from None


class EncodingMarker(str, Enum):
    UTF8 = "utf8"
    LATIN1 = "latin1"
    AUTO = "auto"


class OutputFormat(str, Enum):
    TXT = "txt"
    JSON = "json"


class FieldSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    index: int = Field(ge=0)
    required: bool = False
    is_label: bool = False
    min_length: int = Field(default=0, ge=0)
    max_length: int = Field(default=0, ge=0)  # 0 = unbounded


class ProcessingConfig(BaseModel):
    """Everything one run needs; never mutated once the run starts."""

    model_config = ConfigDict(frozen=True)

    dataset_type: DatasetType
    encoding: EncodingMarker = EncodingMarker.AUTO
    delimiter: Optional[str] = None  # None = sniff it
    has_header: bool = True
    strict_mode: bool = False
    remove_duplicates: bool = False
    validate_data: bool = False
    max_lines: int = Field(default=0, ge=0)  # 0 = unbounded
    skip_lines: int = Field(default=0, ge=0)
    train_split: float = Field(default=0.8, ge=0.0, le=1.0)
    fields: List[FieldSchema] = Field(default_factory=list, max_length=MAX_SCHEMA_FIELDS)
    output_format: OutputFormat = OutputFormat.TXT

    @field_validator("delimiter", mode="before")
    @classmethod
    def _single_char_delimiter(cls, value):
        if value is None or value == "" or value == "\0":
            return None
        if value == "\\t":
            return "\t"
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError("delimiter must be a single character")
        return value

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def label_position(self) -> Optional[int]:
        """Position of the first label field, if any."""
        return next((i for i, f in enumerate(self.fields) if f.is_label), None)


class SniffResult(BaseModel):
    delimiter: str
    encoding: EncodingMarker
    charset_hint: Optional[str] = None


class ProcessingStats(BaseModel):
    total_lines: int = 0
    processed_lines: int = 0
    skipped_lines: int = 0
    error_lines: int = 0
    duplicate_lines: int = 0
    avg_text_length: float = 0.0
    class_distribution: Dict[str, int] = Field(default_factory=dict)
    unique_classes: int = 0
    delimiter: Optional[str] = None
    encoding: Optional[EncodingMarker] = None
    charset_hint: Optional[str] = None

    def record_class(self, label: str) -> bool:
        """Count one occurrence of `label`; returns False once the bucket table is full.

        Keys are reported as UTF-8 text, not as the pass-through byte view.
        """
        label = label.encode(PASSTHROUGH_CODEC).decode("utf-8", "replace")
        if label in self.class_distribution:
            self.class_distribution[label] += 1
            return True
        if len(self.class_distribution) >= MAX_CLASS_BUCKETS:
            return False
        self.class_distribution[label] = 1
        self.unique_classes = len(self.class_distribution)
        return True

    def success_rate(self) -> float:
        if self.total_lines == 0:
            return 0.0
        return 100.0 * self.processed_lines / self.total_lines


class ProcessedOutput(BaseModel):
    sha256: str
    format: OutputFormat
    content_b64: str


class ReportSummary(BaseModel):
    ok: bool
    success_rate: float = 0.0
    deterministic: bool = True


class ProcessResponse(BaseModel):
    output: ProcessedOutput
    stats: ProcessingStats
    summary: ReportSummary


class HealthResponse(BaseModel):
    ok: bool = True
