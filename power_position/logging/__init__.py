"""
Logging configuration and utilities for the position extractor.
"""
from .config import configure_logging, get_scheduler_logger

__all__ = ["configure_logging", "get_scheduler_logger"]
