"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    AppConfig,
    ExtractionParams,
    LoggingParams,
    OutputParams,
    RetryParams,
    get_default_config,
)
from .validation import ConfigValidator, ValidationError

DEFAULT_CONFIG_FILE = Path(__file__).parent.parent.parent / "config" / "settings.yaml"

SECTIONS = {
    "extraction": ExtractionParams,
    "output": OutputParams,
    "retry": RetryParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_file: Path
    defaults: AppConfig
    required: bool = False

    @classmethod
    def create(cls, config_file: Optional[Path] = None) -> "ConfigLoader":
        """
        Create a ConfigLoader instance.

        An explicitly given file must exist; the bundled default file is optional.
        """
        if config_file is None:
            return cls(config_file=DEFAULT_CONFIG_FILE, defaults=get_default_config())

        return cls(
            config_file=Path(config_file),
            defaults=get_default_config(),
            required=True,
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load settings from the YAML configuration file."""
        if not self.config_file.exists():
            if self.required:
                raise ConfigurationError(
                    f"Configuration file not found: {self.config_file}",
                    context={"config_file": str(self.config_file)},
                )
            return {}

        try:
            with open(self.config_file) as f:
                file_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file {self.config_file}: {e}",
                context={"config_file": str(self.config_file)},
            ) from e

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Configuration file {self.config_file} must contain a mapping",
                context={"config_file": str(self.config_file)},
            )

        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Command-line overrides (highest priority)
        2. Configuration file
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, self._drop_unset(overrides))

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> AppConfig:
        """
        Load, validate and build the application configuration.

        Raises:
            ConfigurationError: Carrying every validation error found
        """
        config = self.merge_config(overrides)

        errors = self._unknown_keys(config)
        errors.extend(ConfigValidator.validate_config(config))
        if errors:
            raise ConfigurationError(
                "Configuration validation failed",
                errors=errors,
                context={"config_file": str(self.config_file)},
            )

        return AppConfig(**{
            name: section_cls(**config[name])
            for name, section_cls in SECTIONS.items()
        })

    def _unknown_keys(self, config: dict[str, Any]) -> list[ValidationError]:
        """Report sections and settings that have no counterpart in the defaults."""
        errors = []

        for section, values in config.items():
            if section not in SECTIONS:
                errors.append(ValidationError(field=section, message="Unknown section", value=values))
                continue
            if not isinstance(values, dict):
                errors.append(ValidationError(field=section, message="Must be a mapping", value=values))
                continue

            known = {f.name for f in fields(SECTIONS[section])}
            for key, value in values.items():
                if key not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown setting",
                        value=value
                    ))

        return errors

    def _drop_unset(self, overrides: dict[str, Any]) -> dict[str, Any]:
        """Remove None values so unset command-line options do not mask lower tiers."""
        result = {}
        for key, value in overrides.items():
            if isinstance(value, dict):
                value = self._drop_unset(value)
                if value:
                    result[key] = value
            elif value is not None:
                result[key] = value
        return result

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
