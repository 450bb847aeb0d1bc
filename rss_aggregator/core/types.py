"""
Type definitions and Pydantic models for the RSS Aggregator.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    """Return the current UTC time as ISO-8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class FeedSource(BaseModel):
    """Descriptor of a single feed to fetch."""
    name: str = Field(..., min_length=1, description="Name of the feed source")
    url: str = Field(..., description="URL of the RSS/Atom feed")

    model_config = ConfigDict(extra="ignore")


class RawEntry(BaseModel):
    """One entry of a parsed feed, before normalization.

    ``extras`` holds the raw values of ``FeedParserConfig.extra_fields`` (media
    content and thumbnails by default). It is parser-side data only: the
    normalizer ignores it and it never appears in an :class:`Article`.
    """

    title: Optional[str] = None
    link: Optional[str] = None
    pub_date: Optional[str] = None
    iso_date: Optional[str] = None
    content_snippet: Optional[str] = None
    content: Optional[str] = None
    description: Optional[str] = None
    extras: Dict[str, Any] = Field(default_factory=dict)


class Article(BaseModel):
    """Represents a normalized news article."""
    id: str
    title: str
    description: str
    link: Optional[str] = None
    pub_date: str = Field(..., alias="pubDate")
    source: str
    matched_keywords: List[str] = Field(default_factory=list, alias="matchedKeywords")
    is_relevant: bool = Field(True, alias="isRelevant")

    model_config = ConfigDict(populate_by_name=True)


class AggregationResult(BaseModel):
    """Payload returned to the client after a successful aggregation."""
    success: bool = True
    articles: List[Article] = Field(default_factory=list)
    total_feeds: int = Field(..., alias="totalFeeds")
    timestamp: str = Field(default_factory=utc_now_iso)

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Dump to the JSON shape expected by clients (camelCase keys)."""
        return self.model_dump(by_alias=True, mode="json")
