"""Configuration validation utilities."""

import signal
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_endpoint_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate endpoint parameters."""
        errors = []

        if "url" in params:
            value = params["url"]
            parsed = urlparse(value) if isinstance(value, str) else None
            if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append(ValidationError(
                    field="url",
                    message="Must be an absolute http(s) URL",
                    value=value
                ))

        if "price_path" in params:
            value = params["price_path"]
            if (not isinstance(value, (list, tuple)) or not value
                    or not all(isinstance(key, str) and key for key in value)):
                errors.append(ValidationError(
                    field="price_path",
                    message="Must be a non-empty list of keys",
                    value=value
                ))

        for name in ("connect_timeout", "read_timeout"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_retry_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate retry parameters."""
        errors = []

        if "max_attempts" in params:
            value = params["max_attempts"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="max_attempts",
                    message="Must be an integer >= 1",
                    value=value
                ))

        for name in ("transport_backoff", "rate_limit_backoff", "server_error_backoff"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_schedule_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate schedule parameters."""
        errors = []

        if "interval_ticks" in params:
            value = params["interval_ticks"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="interval_ticks",
                    message="Must be an integer >= 1",
                    value=value
                ))

        if "tick_seconds" in params:
            value = params["tick_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="tick_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_shutdown_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate shutdown parameters."""
        errors = []

        if "quit_command" in params:
            value = params["quit_command"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="quit_command",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "keyboard_enabled" in params and not isinstance(params["keyboard_enabled"], bool):
            errors.append(ValidationError(
                field="keyboard_enabled",
                message="Must be a boolean",
                value=params["keyboard_enabled"]
            ))

        if "signals" in params:
            value = params["signals"]
            if (not isinstance(value, (list, tuple))
                    or not all(isinstance(name, str) and hasattr(signal, name) for name in value)):
                errors.append(ValidationError(
                    field="signals",
                    message="Must be a list of signal names known to this platform",
                    value=value
                ))

        if "join_timeout" in params:
            value = params["join_timeout"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="join_timeout",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_display_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate display parameters."""
        errors = []

        for name in ("asset_label", "currency_symbol", "time_format"):
            if name in params and not isinstance(params[name], str):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a string",
                    value=params[name]
                ))

        if "clear_screen" in params and not isinstance(params["clear_screen"], bool):
            errors.append(ValidationError(
                field="clear_screen",
                message="Must be a boolean",
                value=params["clear_screen"]
            ))

        if "progress_width" in params:
            value = params["progress_width"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="progress_width",
                    message="Must be an integer >= 1",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {sorted(_LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        sections = {
            "endpoint": ConfigValidator.validate_endpoint_params,
            "retry": ConfigValidator.validate_retry_params,
            "schedule": ConfigValidator.validate_schedule_params,
            "shutdown": ConfigValidator.validate_shutdown_params,
            "display": ConfigValidator.validate_display_params,
            "logging": ConfigValidator.validate_logging_params,
        }

        for section, validate in sections.items():
            params = config.get(section, {})
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            errors.extend(
                ValidationError(field=f"{section}.{err.field}", message=err.message, value=err.value)
                for err in validate(params)
            )

        return errors
