"""Helpers to load feed sources and keywords from JSON files."""

import json
import logging
import os
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .types import FeedSource

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load the feed sources and keyword lists used by the CLI."""

    @staticmethod
    def _read_json(config_file: str) -> Any:
        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Config file not found: {config_file}")

        with open(config_file, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in configuration file: {config_file}") from exc

    def load_news_sources(self, source_config_file: str) -> list[FeedSource]:
        """Load feed sources from a JSON array of ``{"name", "url"}`` objects."""
        data = self._read_json(source_config_file)
        try:
            sources = TypeAdapter(list[FeedSource]).validate_python(data)
        except ValidationError as exc:
            raise ValueError(f"Configuration file is invalid: {source_config_file}\n{exc}") from exc
        logger.info("Loaded %d news sources from config file", len(sources))
        return sources

    def load_keywords(self, keyword_config_file: str) -> list[str]:
        """Load keywords from a JSON array of strings."""
        data = self._read_json(keyword_config_file)
        try:
            keywords = TypeAdapter(list[str]).validate_python(data)
        except ValidationError as exc:
            raise ValueError(f"Configuration file is invalid: {keyword_config_file}\n{exc}") from exc
        logger.info("Loaded %d keywords from config file", len(keywords))
        return keywords
