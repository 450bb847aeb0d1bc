"""
Exceptions raised by the RSS Aggregator.

Per-feed failures never surface as exceptions: the fetcher turns them into an
empty entry list. Only the two request-level failures below reach callers.
"""


class InvalidRequestError(ValueError):
    """The caller omitted or malformed part of the request payload."""


class AggregationError(RuntimeError):
    """Unexpected failure of the aggregation pipeline as a whole."""
