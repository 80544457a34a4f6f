"""Default configuration parameters for the position extractor."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionParams:
    """Scheduling and business calendar parameters."""
    interval_minutes: int = 15                  # Minutes between scheduled extractions
    timezone: str = "Europe/Berlin"             # Zone the day-ahead date and periods refer to


@dataclass(frozen=True)
class OutputParams:
    """Report output parameters."""
    folder: str = "Output"                      # Folder receiving one CSV per run


@dataclass(frozen=True)
class RetryParams:
    """Fixed-delay retry policy for failed extractions."""
    max_attempts: int = 3                       # Attempts per scheduled run, first one included
    delay_seconds: float = 5.0                  # Constant pause between attempts


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    extraction: ExtractionParams
    output: OutputParams
    retry: RetryParams
    logging: LoggingParams


def get_default_config() -> AppConfig:
    """Get the default configuration instance."""
    return AppConfig(
        extraction=ExtractionParams(),
        output=OutputParams(),
        retry=RetryParams(),
        logging=LoggingParams(),
    )
