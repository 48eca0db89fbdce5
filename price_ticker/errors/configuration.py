"""Startup configuration errors."""

from typing import Optional

from ..config.validation import ValidationError


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be loaded or fails validation."""

    def __init__(self, message: str, errors: Optional[list[ValidationError]] = None):
        super().__init__(message)
        self.errors = errors or []
