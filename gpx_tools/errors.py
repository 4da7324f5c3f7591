"""Central error types used across the application."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when solver parameters can never describe a valid search."""


class GpxFormatError(RuntimeError):
    """Raised when a GPX document cannot be parsed."""


__all__ = [
    "ConfigurationError",
    "GpxFormatError",
]
