"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid or cannot be read."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""
