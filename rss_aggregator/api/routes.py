"""API routes exposing the feed aggregation pipeline."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from rss_aggregator.config import Settings
from rss_aggregator.core.aggregate import aggregate, parse_request
from rss_aggregator.core.errors import AggregationError, InvalidRequestError
from rss_aggregator.core.fetch_rss_news import FeedParserConfig

logger = logging.getLogger(__name__)

router = APIRouter()

AGGREGATION_FAILED = "Failed to fetch RSS feeds"


@router.post("/rss")
async def aggregate_feeds(request: Request) -> JSONResponse:
    """Fetch, filter and merge the feeds listed in the request body."""

    try:
        payload = await request.json()
    except ValueError:
        payload = None

    try:
        feeds, keywords = parse_request(payload)
    except InvalidRequestError as exc:
        logger.warning("Rejected aggregation request: %s", exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})

    settings: Settings = request.app.state.settings
    parser_config: FeedParserConfig = request.app.state.parser_config

    try:
        result = await aggregate(
            feeds,
            keywords,
            max_articles=settings.max_articles,
            description_length=settings.description_length,
            max_concurrency=settings.max_concurrency,
            config=parser_config,
        )
    except AggregationError as exc:
        return JSONResponse(
            status_code=500,
            content={"error": AGGREGATION_FAILED, "message": str(exc)},
        )

    return JSONResponse(status_code=200, content=result.to_payload())


@router.options("/rss")
async def preflight_feeds() -> Response:
    """Answer CORS preflight requests without running the pipeline."""

    return Response(status_code=200)


@router.api_route("/rss", methods=["GET", "PUT", "PATCH", "DELETE"])
async def method_not_allowed() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})
