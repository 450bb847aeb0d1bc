"""Runtime settings, read from the environment (and a ``.env`` file if present)."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from rss_aggregator.core.aggregate import MAX_ARTICLES
from rss_aggregator.core.fetch_rss_news import FeedParserConfig
from rss_aggregator.core.normalize import DESCRIPTION_LENGTH

__all__ = ["ENV_PREFIX", "Settings", "get_settings"]

ENV_PREFIX = "RSS_AGGREGATOR_"


class Settings(BaseModel):
    """Settings shared by the API and the CLI."""

    max_articles: int = Field(default=MAX_ARTICLES, gt=0)
    description_length: int = Field(default=DESCRIPTION_LENGTH, gt=0)
    request_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-request timeout in seconds; unset leaves it to the transport.",
    )
    max_concurrency: Optional[int] = Field(
        default=None,
        gt=0,
        description="Maximum number of feeds fetched at once; unset fetches all at once.",
    )
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``RSS_AGGREGATOR_*`` variables.

        Empty variables are ignored. Raises ``ValueError`` on invalid values.
        """
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        values = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ValueError(f"Invalid settings in environment:\n{exc}") from exc

    def parser_config(self) -> FeedParserConfig:
        """Return the parser configuration matching these settings."""

        return FeedParserConfig(timeout=self.request_timeout)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
