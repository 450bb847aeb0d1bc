"""
RSS News Fetcher Module.

This module provides functionality to fetch and parse RSS/Atom feeds
from news sources. Every failure is contained here: a broken feed
contributes no entries instead of failing the whole aggregation.
"""

import logging
import time
from typing import Any, Mapping, Optional, Union

import feedparser
import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .types import FeedSource, RawEntry

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "rss-aggregator/1.0 (+https://github.com/rss-aggregator)",
    "Accept": (
        "application/rss+xml,application/atom+xml,application/xml;q=0.9,"
        "text/xml;q=0.8,*/*;q=0.5"
    ),
}


class FeedParserConfig(BaseModel):
    """Parser settings shared read-only by every concurrent fetch."""
    extra_fields: tuple[str, ...] = ("media_content", "media_thumbnail")
    headers: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))
    # None leaves the timeout to the transport, i.e. no timeout at all
    timeout: Optional[float] = None

    model_config = ConfigDict(frozen=True)


DEFAULT_PARSER_CONFIG = FeedParserConfig()


def _iso_from_struct(value: Optional[time.struct_time]) -> Optional[str]:
    if not value:
        return None
    return time.strftime("%Y-%m-%dT%H:%M:%S.000Z", value)


def _entry_content(entry: Mapping[str, Any]) -> Optional[str]:
    contents = entry.get("content") or []
    for item in contents:
        value = item.get("value")
        if value:
            return value
    return None


def to_raw_entry(entry: Mapping[str, Any], config: FeedParserConfig = DEFAULT_PARSER_CONFIG) -> RawEntry:
    """Map a ``feedparser`` entry onto a :class:`RawEntry`."""
    extras = {
        field: entry.get(field)
        for field in config.extra_fields
        if entry.get(field) is not None
    }
    return RawEntry(
        title=entry.get("title"),
        link=entry.get("link"),
        pub_date=entry.get("published") or entry.get("updated"),
        iso_date=_iso_from_struct(entry.get("published_parsed") or entry.get("updated_parsed")),
        content_snippet=entry.get("summary"),
        content=_entry_content(entry),
        description=entry.get("description"),
        extras=extras,
    )


def parse_feed(body: Union[bytes, str], config: FeedParserConfig = DEFAULT_PARSER_CONFIG) -> list[RawEntry]:
    """Parse a feed document into entries, in document order.

    Raises:
        ValueError: If the body is not a feed ``feedparser`` can make sense of.
    """
    feed = feedparser.parse(body)
    if feed.bozo and not feed.entries:
        raise ValueError(f"Malformed feed: {feed.get('bozo_exception')}")
    if not feed.get("version") and not feed.entries:
        raise ValueError("Unsupported feed format")
    return [to_raw_entry(entry, config) for entry in feed.entries]


def fetch_rss_articles(
    source: Union[FeedSource, Mapping[str, Any]],
    config: FeedParserConfig = DEFAULT_PARSER_CONFIG,
) -> list[RawEntry]:
    """Fetch the entries of one feed.

    Args:
        source: The feed to fetch. Plain mappings are validated into a
            :class:`FeedSource`; an invalid descriptor counts as a failed feed.
        config: Shared parser configuration.

    Returns:
        The feed entries in document order, or an empty list on any failure.
    """
    url = source.get("url") if isinstance(source, Mapping) else getattr(source, "url", None)
    try:
        if not isinstance(source, FeedSource):
            source = FeedSource.model_validate(source)
        url = source.url

        logger.info("Fetching data from URL: %s", url)
        response = requests.get(url, headers=config.headers, timeout=config.timeout)
        response.raise_for_status()

        entries = parse_feed(response.content, config)
        if not entries:
            logger.warning("No entries found for %s", source.name)
        else:
            logger.info("Successfully extracted %d entries from %s", len(entries), source.name)
        return entries

    except (requests.RequestException, ValueError, ValidationError) as e:
        logger.error("Error fetching %s: %s", url, e, exc_info=True)
        return []
    except Exception as e:
        logger.error("Unexpected error fetching from %s: %s", url, e, exc_info=True)
        return []
