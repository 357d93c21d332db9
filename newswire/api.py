from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .core import AggregateOptions, NewsAggregator
from .logging import get_logger
from .registry import parse_sources_param

logger = get_logger(__name__)

NEWS_PATH = "/api/news/fetch"

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Content-Type": "application/json",
}

app = FastAPI(
    title="newswire",
    version=__version__,
)


def get_aggregator() -> NewsAggregator:
    return NewsAggregator(AggregateOptions.from_env())


def _news_response(
    news: List[Dict[str, Any]],
    *,
    status_code: int = 200,
    error: Optional[str] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {"success": error is None, "news": news}
    if error is not None:
        body["error"] = error
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


@app.get(NEWS_PATH)
async def fetch_news(
    sources: Optional[str] = Query(None, description="Comma-separated source keys."),
    aggregator: NewsAggregator = Depends(get_aggregator),
) -> JSONResponse:
    keys = parse_sources_param(sources)
    try:
        items = await aggregator.aggregate(keys)
    except Exception as e:
        logger.error("news_fetch_failed", sources=keys, error=str(e), exc_info=True)
        return _news_response([], status_code=500, error=str(e) or "Failed to fetch news")
    return _news_response([it.to_dict() for it in items])


@app.options(NEWS_PATH)
async def news_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@app.exception_handler(StarletteHTTPException)
async def news_http_error(request: Request, exc: StarletteHTTPException) -> Response:
    # Any method other than GET/OPTIONS on the news path gets the news envelope.
    if exc.status_code == 405 and request.url.path == NEWS_PATH:
        return _news_response([], status_code=405, error="Method not allowed")
    return await http_exception_handler(request, exc)


@app.get("/healthz")
async def healthz() -> Dict[str, str]:
    return {"status": "ok"}
