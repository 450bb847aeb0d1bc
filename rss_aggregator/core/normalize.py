"""
Article normalization.

Turns raw feed entries into the canonical :class:`Article` shape. Missing
fields fall back to defaults, so normalization never fails.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil.parser import parse as parse_date

from .keywords import match_keywords
from .types import Article, FeedSource, RawEntry, utc_now_iso

NO_TITLE = "No title"
DESCRIPTION_LENGTH = 300

_TAG_RE = re.compile(r"<[^>]*>")

# Zone abbreviations still common in RSS pubDate values
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
}


def clean_description(entry: RawEntry, length: int = DESCRIPTION_LENGTH) -> str:
    """Pick the first available text field, strip tags and cut to ``length`` characters."""
    text = entry.content_snippet or entry.content or entry.description or ""
    return _TAG_RE.sub("", text)[:length]


def resolve_pub_date(entry: RawEntry) -> str:
    return entry.pub_date or entry.iso_date or utc_now_iso()


def parse_pub_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a feed date string (RFC 822, ISO-8601 or a textual date).

    Naive values are taken as UTC. Returns ``None`` when the string is not a date.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = parse_date(value, tzinfos=TZINFOS)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def fetch_timestamp_ms(moment: Optional[datetime] = None) -> int:
    """Milliseconds since the epoch, used as the id suffix."""
    moment = moment or datetime.now(timezone.utc)
    return int(moment.timestamp() * 1000)


def normalize_entry(
    entry: RawEntry,
    source: FeedSource,
    index: int,
    fetch_timestamp: int,
    keywords: Optional[list[str]] = None,
    description_length: int = DESCRIPTION_LENGTH,
) -> Article:
    """Build the :class:`Article` for one entry of ``source``.

    Args:
        entry: Raw entry as returned by the fetcher.
        source: The feed the entry came from.
        index: Zero-based position of the entry within its feed.
        fetch_timestamp: Fetch time in epoch milliseconds.
        keywords: Optional keyword filter used to compute relevance.
        description_length: Maximum description length in characters.
    """
    title = entry.title or NO_TITLE
    description = clean_description(entry, description_length)
    matched, is_relevant = match_keywords(f"{entry.title or ''} {description}", keywords)

    return Article(
        id=f"{source.name}-{index}-{fetch_timestamp}",
        title=title,
        description=description,
        link=entry.link,
        pub_date=resolve_pub_date(entry),
        source=source.name,
        matched_keywords=matched,
        is_relevant=is_relevant,
    )
