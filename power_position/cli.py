"""Command-line entry point for the position extractor."""

import argparse
import signal
import sys
from pathlib import Path
from typing import Any, Optional

import structlog

from . import __version__
from .config.defaults import AppConfig
from .config.loader import ConfigLoader
from .data.sources import BaseTradeSource, SimulatedTradeSource, YamlTradeSource
from .delivery.csv_writer import CsvPositionWriter
from .errors import ConfigurationError, RetriesExhaustedError
from .extractor import PositionExtractor
from .logging.config import configure_logging
from .scheduling.calculator import ScheduleCalculator
from .scheduling.runner import RetryPolicy, ScheduledExtractor

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="power-position",
        description="Power Trade Position Extractor",
        epilog=(
            "Configuration can also be provided via a YAML file. "
            "Command line arguments take precedence over configuration file values."
        ),
    )
    parser.add_argument("-o", "--output-folder", help="Output folder for CSV files (default: Output)")
    parser.add_argument("-i", "--interval", type=int, help="Extract interval in minutes (default: 15)")
    parser.add_argument("-t", "--timezone", help="Time zone ID (default: Europe/Berlin)")
    parser.add_argument("-c", "--config", type=Path, help="Path to a YAML configuration file")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit logs as JSON")
    parser.add_argument("--once", action="store_true", help="Run a single extraction and exit")
    parser.add_argument("--seed", type=int, help="Seed for the simulated trade source")
    parser.add_argument("--trades-file", type=Path, help="YAML file of trades to use instead of the simulated source")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Map parsed options onto configuration sections; unset options stay None."""
    return {
        "extraction": {
            "interval_minutes": args.interval,
            "timezone": args.timezone,
        },
        "output": {"folder": args.output_folder},
        "logging": {
            "level": args.log_level,
            "format_json": args.json_logs,
        },
    }


def build_scheduler(
    config: AppConfig,
    seed: Optional[int] = None,
    trades_file: Optional[Path] = None,
) -> ScheduledExtractor:
    """Wire the extraction pipeline from configuration."""
    trade_source: BaseTradeSource
    if trades_file is not None:
        trade_source = YamlTradeSource(trades_file)
    else:
        trade_source = SimulatedTradeSource(seed=seed)

    calculator = ScheduleCalculator(
        interval_minutes=config.extraction.interval_minutes,
        timezone_id=config.extraction.timezone,
    )
    extractor = PositionExtractor(
        trade_source=trade_source,
        writer=CsvPositionWriter(config.output.folder),
        schedule_calculator=calculator,
    )
    return ScheduledExtractor(
        extractor=extractor,
        schedule_calculator=calculator,
        retry_policy=RetryPolicy.from_params(config.retry),
    )


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader.create(args.config).load(overrides_from_args(args))
    except ConfigurationError as e:
        print(f"Configuration validation failed: {e}", file=sys.stderr)
        for error in e.errors:
            print(f"  - {error.field}: {error.message} (got: {error.value!r})", file=sys.stderr)
        return 1

    configure_logging(level=config.logging.level, format_json=config.logging.format_json)
    logger.info(
        "Configuration loaded",
        output_folder=config.output.folder,
        interval_minutes=config.extraction.interval_minutes,
        timezone=config.extraction.timezone,
    )

    scheduler = build_scheduler(config, seed=args.seed, trades_file=args.trades_file)

    if not scheduler.extractor.writer.health_check():
        logger.error("Output folder is not writable", output_folder=config.output.folder)
        return 1

    def _handle_signal(signum, frame):
        scheduler.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    logger.info("Power Trade Position Extractor starting, press Ctrl+C to stop")
    try:
        if args.once:
            scheduler.run_extraction()
        else:
            scheduler.run()
    except RetriesExhaustedError:
        logger.error("Extraction retries exhausted, shutting down", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
