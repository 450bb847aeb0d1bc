"""HTTP API for the RSS Aggregator."""

from rss_aggregator.api.app import create_app

__all__ = ["create_app"]
