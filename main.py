"""
ASGI entrypoint for the RSS Aggregator API.

Run with::

    uvicorn main:app

Settings are read from ``RSS_AGGREGATOR_*`` environment variables or a
``.env`` file in the working directory.
"""

from rss_aggregator.api.app import create_app
from rss_aggregator.config import get_settings
from rss_aggregator.core.log_handler import configure_logging

settings = get_settings()
configure_logging(settings.log_level, settings.log_file)

app = create_app(settings)

__all__ = ("app",)
