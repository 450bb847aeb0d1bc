"""Aggregate RSS/Atom feeds into one keyword-filtered, time-ordered article list."""

from rss_aggregator.core.aggregate import aggregate, aggregate_sync
from rss_aggregator.core.errors import AggregationError, InvalidRequestError
from rss_aggregator.core.types import AggregationResult, Article, FeedSource

__all__ = [
    "AggregationError",
    "AggregationResult",
    "Article",
    "FeedSource",
    "InvalidRequestError",
    "aggregate",
    "aggregate_sync",
]

__version__ = "1.0.0"
