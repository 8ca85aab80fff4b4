"""Tests for configuration defaults, presets and env overrides."""

import pytest
from pydantic import ValidationError

from csvprep.config import PipelineSettings
from csvprep.exceptions import ConfigurationError, UnknownDatasetTypeError
from csvprep.models import DatasetType, EncodingMarker, FieldSchema, OutputFormat
from csvprep.schemas import build_config, preset_fields


def test_default_settings():
    settings = PipelineSettings()
    assert settings.progress_interval == 1000
    assert settings.dedup_capacity == 100_000


def test_env_override(monkeypatch):
    monkeypatch.setenv("CSVPREP_PROGRESS_INTERVAL", "5")
    monkeypatch.setenv("CSVPREP_LOG_LEVEL", "DEBUG")
    settings = PipelineSettings()
    assert settings.progress_interval == 5
    assert settings.log_level == "DEBUG"


def test_config_defaults():
    config = build_config("sentiment")
    assert config.dataset_type is DatasetType.SENTIMENT
    assert config.encoding is EncodingMarker.AUTO
    assert config.delimiter is None
    assert config.has_header
    assert config.output_format is OutputFormat.TXT
    assert [f.name for f in config.fields] == ["text", "sentiment"]
    assert config.field_count == 2
    assert config.label_position == 1


def test_presets():
    assert [f.name for f in preset_fields(DatasetType.LEETCODE)] == ["title", "difficulty", "description"]
    assert preset_fields(DatasetType.LEETCODE)[2].min_length == 50
    assert [f.name for f in preset_fields(DatasetType.QA)] == ["question", "answer"]
    assert preset_fields(DatasetType.CLASSIFICATION)[1].is_label
    assert build_config("custom").label_position is None


def test_custom_fields_override_preset():
    fields = [FieldSchema(name="id", index=0, required=True), FieldSchema(name="body", index=1, max_length=100)]
    config = build_config(DatasetType.CUSTOM, fields=fields)
    assert config.fields == fields


def test_dataset_type_from_name():
    assert DatasetType.from_name(" QA ") is DatasetType.QA
    with pytest.raises(UnknownDatasetTypeError):
        DatasetType.from_name("poetry")


def test_config_is_frozen():
    config = build_config("qa")
    with pytest.raises(ValidationError):
        config.strict_mode = True


@pytest.mark.parametrize("bad", [{"delimiter": ",,"}, {"max_lines": -1}, {"skip_lines": -3}])
def test_invalid_config(bad):
    with pytest.raises(ValidationError):
        build_config("qa", **bad)


def test_schema_field_limit():
    fields = [FieldSchema(name=f"f{i}", index=i) for i in range(17)]
    with pytest.raises(ValidationError):
        build_config("custom", fields=fields)


def test_delimiter_spellings():
    assert build_config("qa", delimiter="\\t").delimiter == "\t"
    assert build_config("qa", delimiter="\0").delimiter is None
    assert build_config("qa", delimiter=";").delimiter == ";"


@pytest.mark.parametrize("bad", [{"progress_interval": 0}, {"dedup_capacity": -1}, {"max_upload_bytes": 0}])
def test_settings_reject_out_of_range(bad):
    with pytest.raises(ValidationError):
        PipelineSettings(**bad)


def test_settings_reject_zero_interval_from_env(monkeypatch):
    monkeypatch.setenv("CSVPREP_PROGRESS_INTERVAL", "0")
    with pytest.raises(ValidationError):
        PipelineSettings()


def test_unknown_type_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        build_config("poetry")
