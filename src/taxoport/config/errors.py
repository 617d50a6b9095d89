"""Errors raised while building configuration."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when an option or environment variable holds an unusable value."""
