"""Exceptions raised by gallery lookups and settings updates."""

from __future__ import annotations


class UnknownChartError(ValueError):
    """Raised when a chart name does not match any ``ChartType``."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown chart type: {name!r}")
        self.name = name


class UnknownDatasetError(LookupError):
    """Raised when a dataset name is not held by the store."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown dataset: {name!r}")
        self.name = name


class InvalidSettingError(ValueError):
    """Raised when a settings update carries an unknown key or bad value."""
