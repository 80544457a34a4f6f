"""
Trade data models and trade sources.
"""
from .models import AggregationResult, DiscardedPeriod, Position, Trade, TradePeriod

__all__ = ["AggregationResult", "DiscardedPeriod", "Position", "Trade", "TradePeriod"]
