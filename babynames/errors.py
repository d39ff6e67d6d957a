"""
errors.py - Exception hierarchy for the baby names pipeline.

Configuration problems are raised before any aggregation work starts,
sink problems after it has finished. DataError covers bad raw input.
"""
from __future__ import annotations


class BabyNamesError(Exception):
    """Base exception for all pipeline failures."""


class ConfigError(BabyNamesError):
    """Raised for missing or invalid run options."""


class DataError(BabyNamesError):
    """Raised for malformed raw records or an invalid year range."""


class SinkError(BabyNamesError):
    """Raised when an output sink fails to write."""


class SourceError(BabyNamesError):
    """Raised when the raw dataset cannot be fetched or unpacked."""
