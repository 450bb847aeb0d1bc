"""
Command line runner for the aggregation pipeline.

Loads feed sources (and optionally keywords) from JSON files, aggregates
them once and writes the result payload as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from rss_aggregator.config import Settings
from rss_aggregator.core.aggregate import aggregate_sync
from rss_aggregator.core.errors import AggregationError
from rss_aggregator.core.log_handler import configure_logging
from rss_aggregator.core.utils import ConfigLoader

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Aggregate RSS/Atom feeds into one article list")
    parser.add_argument(
        "--sources",
        required=True,
        help="Path to a JSON array of {\"name\", \"url\"} feed sources",
    )
    parser.add_argument(
        "--keywords",
        help="Path to a JSON array of keywords (default: no filtering)",
    )
    parser.add_argument(
        "--output",
        help="Write the result to this file instead of stdout",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level, settings.log_file, stream=sys.stderr)

    config_loader = ConfigLoader()
    try:
        sources = config_loader.load_news_sources(args.sources)
        keywords = config_loader.load_keywords(args.keywords) if args.keywords else []
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Could not load configuration: %s", exc)
        return 1

    logger.info("Loaded %d news sources and %d keywords", len(sources), len(keywords))

    try:
        result = aggregate_sync(
            sources,
            keywords,
            max_articles=settings.max_articles,
            description_length=settings.description_length,
            max_concurrency=settings.max_concurrency,
            config=settings.parser_config(),
        )
    except AggregationError as exc:
        logger.error("Pipeline failed with error: %s", exc)
        return 1

    output = json.dumps(result.to_payload(), ensure_ascii=False, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        logger.info("Wrote %d articles to %s", len(result.articles), args.output)
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
