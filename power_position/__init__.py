"""
Power Position Extractor

Converts day-ahead hourly power trade volumes into a UTC-normalized hourly
position report, running on a recurring interval schedule. Local delivery
hours are reconciled with daylight-saving transitions of the configured
timezone before volumes are aggregated.
"""

__version__ = "0.1.0"
__author__ = "Power Position Team"
