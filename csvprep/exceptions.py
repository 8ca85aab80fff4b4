"""csvprep exception hierarchy."""

from __future__ import annotations


class CsvPrepError(Exception):
    """Base exception for all csvprep errors."""


class ConfigurationError(CsvPrepError):
    """Configuration cannot drive a run."""


class UnknownDatasetTypeError(ConfigurationError):
    """Dataset type name is not one of the known variants."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown dataset type: {name!r}")


class StreamOpenError(CsvPrepError):
    """Input or output stream could not be opened; nothing was processed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error opening file '{path}': {reason}")
