"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..errors import TimeZoneNotFoundError
from ..utils.time import resolve_timezone

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_extraction_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate extraction parameters."""
        errors = []

        if "interval_minutes" in params:
            value = params["interval_minutes"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="extraction.interval_minutes",
                    message="Must be a positive integer",
                    value=value
                ))

        if "timezone" in params:
            value = params["timezone"]
            try:
                resolve_timezone(value)
            except TimeZoneNotFoundError:
                errors.append(ValidationError(
                    field="extraction.timezone",
                    message="Time zone not found in the zone database",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_output_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate output parameters."""
        errors = []

        if "folder" in params:
            value = params["folder"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="output.folder",
                    message="Output folder path is required",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_retry_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate retry parameters."""
        errors = []

        if "max_attempts" in params:
            value = params["max_attempts"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="retry.max_attempts",
                    message="Must be a positive integer",
                    value=value
                ))

        if "delay_seconds" in params:
            value = params["delay_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="retry.delay_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="logging.format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []
        validators = {
            "extraction": ConfigValidator.validate_extraction_params,
            "output": ConfigValidator.validate_output_params,
            "retry": ConfigValidator.validate_retry_params,
            "logging": ConfigValidator.validate_logging_params,
        }

        for section, validate in validators.items():
            # Non-mapping sections are reported by the loader
            if isinstance(config.get(section), dict):
                errors.extend(validate(config[section]))

        return errors
