"""
Feed aggregation pipeline.

Fetches every requested feed concurrently, normalizes and keyword-filters the
entries, then merges them into one list sorted by publish date (newest first)
and bounded in size.

Components:
- parse_request: Validate a raw request payload
- aggregate: Run the pipeline (async)
- aggregate_sync: Blocking wrapper for scripts and the CLI
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence, Union

from .errors import AggregationError, InvalidRequestError
from .fetch_rss_news import DEFAULT_PARSER_CONFIG, FeedParserConfig, fetch_rss_articles
from .normalize import DESCRIPTION_LENGTH, fetch_timestamp_ms, normalize_entry, parse_pub_date
from .types import AggregationResult, Article, FeedSource

logger = logging.getLogger(__name__)

MAX_ARTICLES = 50

FeedInput = Union[FeedSource, Mapping[str, Any]]


def parse_request(payload: Any) -> tuple[list[Any], Optional[list[str]]]:
    """Extract ``feeds`` and ``keywords`` from a request body.

    Raises:
        InvalidRequestError: If ``feeds`` is missing or not a list, or
            ``keywords`` is present but not a list of strings.
    """
    if not isinstance(payload, Mapping):
        raise InvalidRequestError("Feeds array is required")

    feeds = payload.get("feeds")
    if not isinstance(feeds, list):
        raise InvalidRequestError("Feeds array is required")

    keywords = payload.get("keywords")
    if keywords is not None and (
        not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords)
    ):
        raise InvalidRequestError("Keywords must be an array of strings")

    return feeds, keywords


def _sort_key(article: Article) -> tuple[bool, float]:
    parsed: Optional[datetime] = parse_pub_date(article.pub_date)
    # Unparseable dates sort after every dated article
    return parsed is not None, parsed.timestamp() if parsed else 0.0


async def _fetch_relevant_articles(
    feed: FeedInput,
    keywords: Optional[Sequence[str]],
    config: FeedParserConfig,
    description_length: int,
    semaphore: Optional[asyncio.Semaphore],
) -> list[Article]:
    """One fetch -> normalize -> match pass for a single feed."""
    if semaphore is None:
        entries = await asyncio.to_thread(fetch_rss_articles, feed, config)
    else:
        async with semaphore:
            entries = await asyncio.to_thread(fetch_rss_articles, feed, config)

    if not entries:
        return []

    source = feed if isinstance(feed, FeedSource) else FeedSource.model_validate(feed)
    fetch_timestamp = fetch_timestamp_ms()
    articles = [
        normalize_entry(entry, source, index, fetch_timestamp, list(keywords or []), description_length)
        for index, entry in enumerate(entries)
    ]
    relevant = [article for article in articles if article.is_relevant]
    logger.info("Kept %d of %d articles from %s", len(relevant), len(articles), source.name)
    return relevant


async def aggregate(
    feeds: Sequence[FeedInput],
    keywords: Optional[Sequence[str]] = None,
    *,
    max_articles: int = MAX_ARTICLES,
    description_length: int = DESCRIPTION_LENGTH,
    max_concurrency: Optional[int] = None,
    config: FeedParserConfig = DEFAULT_PARSER_CONFIG,
) -> AggregationResult:
    """Aggregate the relevant articles of all ``feeds``.

    Args:
        feeds: Feeds to fetch. Invalid descriptors count as failed feeds.
        keywords: Optional keyword filter; empty or ``None`` keeps everything.
        max_articles: Maximum number of articles in the result.
        description_length: Maximum description length in characters.
        max_concurrency: Bound on simultaneous fetches, unbounded when ``None``.
        config: Shared parser configuration.

    Returns:
        The merged, sorted and truncated result.

    Raises:
        InvalidRequestError: If ``feeds`` is not a list of feeds.
        AggregationError: On any unexpected failure outside a single feed.
    """
    if feeds is None or not isinstance(feeds, (list, tuple)):
        raise InvalidRequestError("Feeds array is required")

    try:
        logger.info("Aggregating %d feeds with %d keywords", len(feeds), len(keywords or []))
        semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None
        results = await asyncio.gather(
            *(
                _fetch_relevant_articles(feed, keywords, config, description_length, semaphore)
                for feed in feeds
            ),
            return_exceptions=True,
        )

        all_articles: list[Article] = []
        for feed, result in zip(feeds, results):
            if isinstance(result, BaseException):
                logger.error("Feed pass failed for %s: %s", feed, result, exc_info=result)
                continue
            all_articles.extend(result)

        all_articles.sort(key=_sort_key, reverse=True)
        limited_articles = all_articles[:max_articles]
        logger.info(
            "Returning %d of %d relevant articles from %d feeds",
            len(limited_articles),
            len(all_articles),
            len(feeds),
        )
        return AggregationResult(articles=limited_articles, total_feeds=len(feeds))

    except Exception as e:
        logger.error("RSS parsing error: %s", e, exc_info=True)
        raise AggregationError(str(e)) from e


def aggregate_sync(
    feeds: Sequence[FeedInput],
    keywords: Optional[Sequence[str]] = None,
    **kwargs: Any,
) -> AggregationResult:
    """Run :func:`aggregate` to completion from synchronous code."""
    return asyncio.run(aggregate(feeds, keywords, **kwargs))
