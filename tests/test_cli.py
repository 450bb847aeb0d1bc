# pylint: disable=redefined-outer-name
"""
Tests for the command line runner.
"""

import json
import logging
from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest

from rss_aggregator import cli
from rss_aggregator.config import ENV_PREFIX, Settings
from rss_aggregator.core.log_handler import AGGREGATOR_HANDLERS
from rss_aggregator.core.types import RawEntry

FETCH = "rss_aggregator.core.aggregate.fetch_rss_articles"


@pytest.fixture
def sources_file(tmp_path: Path) -> Path:
    path = tmp_path / "sources.json"
    path.write_text(
        json.dumps([{"name": "Test", "url": "https://example.com/rss"}]), encoding="utf-8"
    )
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep the host environment and any .env file out of the settings."""
    monkeypatch.chdir(tmp_path)
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, AGGREGATOR_HANDLERS):
            root_logger.removeHandler(handler)


def test_cli_writes_result(sources_file: Path, tmp_path: Path) -> None:
    keywords_file = tmp_path / "keywords.json"
    keywords_file.write_text(json.dumps(["python"]), encoding="utf-8")
    output_file = tmp_path / "out.json"
    entries = [
        RawEntry(title="Python news", pub_date="2024-01-01T00:00:00Z"),
        RawEntry(title="Rust news", pub_date="2024-01-02T00:00:00Z"),
    ]

    with patch(FETCH, return_value=entries):
        exit_code = cli.main(
            [
                "--sources",
                str(sources_file),
                "--keywords",
                str(keywords_file),
                "--output",
                str(output_file),
            ]
        )

    assert exit_code == 0
    payload = json.loads(output_file.read_text(encoding="utf-8"))
    assert payload["success"] is True
    assert payload["totalFeeds"] == 1
    assert [article["title"] for article in payload["articles"]] == ["Python news"]


def test_cli_prints_to_stdout(sources_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch(FETCH, return_value=[RawEntry(title="Anything")]):
        exit_code = cli.main(["--sources", str(sources_file)])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["articles"][0]["title"] == "Anything"


def test_cli_missing_sources_file(tmp_path: Path) -> None:
    assert cli.main(["--sources", str(tmp_path / "missing.json")]) == 1


def test_cli_pipeline_failure(sources_file: Path) -> None:
    entries = [RawEntry(title="x"), RawEntry(title="y")]
    with patch(FETCH, return_value=entries), patch(
        "rss_aggregator.core.aggregate.parse_pub_date", side_effect=RuntimeError("boom")
    ):
        assert cli.main(["--sources", str(sources_file)]) == 1
