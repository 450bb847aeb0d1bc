import json
from pathlib import Path

import pytest

from rss_aggregator.config import Settings
from rss_aggregator.core.types import FeedSource
from rss_aggregator.core.utils import ConfigLoader


def test_settings_defaults() -> None:
    settings = Settings.from_env({})

    assert settings.max_articles == 50
    assert settings.description_length == 300
    assert settings.request_timeout is None
    assert settings.max_concurrency is None
    assert settings.cors_origins == ["*"]
    assert settings.parser_config().timeout is None


def test_settings_from_env() -> None:
    settings = Settings.from_env(
        {
            "RSS_AGGREGATOR_MAX_ARTICLES": "20",
            "RSS_AGGREGATOR_REQUEST_TIMEOUT": "12.5",
            "RSS_AGGREGATOR_MAX_CONCURRENCY": "4",
            "RSS_AGGREGATOR_CORS_ORIGINS": "https://a.example.com, https://b.example.com",
            "RSS_AGGREGATOR_LOG_FILE": "   ",
        }
    )

    assert settings.max_articles == 20
    assert settings.request_timeout == 12.5
    assert settings.max_concurrency == 4
    assert settings.cors_origins == ["https://a.example.com", "https://b.example.com"]
    assert settings.log_file is None
    assert settings.parser_config().timeout == 12.5


def test_settings_invalid_value() -> None:
    with pytest.raises(ValueError, match="Invalid settings"):
        Settings.from_env({"RSS_AGGREGATOR_MAX_ARTICLES": "zero"})


def test_load_news_sources(tmp_path: Path) -> None:
    config_path = tmp_path / "sources.json"
    config_path.write_text(
        json.dumps([{"name": "Test", "url": "https://example.com/rss"}]), encoding="utf-8"
    )

    sources = ConfigLoader().load_news_sources(str(config_path))

    assert sources == [FeedSource(name="Test", url="https://example.com/rss")]


def test_load_keywords(tmp_path: Path) -> None:
    config_path = tmp_path / "keywords.json"
    config_path.write_text(json.dumps(["Python", "data science"]), encoding="utf-8")

    assert ConfigLoader().load_keywords(str(config_path)) == ["Python", "data science"]


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigLoader().load_keywords(str(tmp_path / "missing.json"))


def test_load_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "keywords.json"
    config_path.write_text("[not json", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid JSON"):
        ConfigLoader().load_keywords(str(config_path))


def test_load_invalid_sources(tmp_path: Path) -> None:
    config_path = tmp_path / "sources.json"
    config_path.write_text(json.dumps([{"name": "No URL"}]), encoding="utf-8")

    with pytest.raises(ValueError, match="invalid"):
        ConfigLoader().load_news_sources(str(config_path))
