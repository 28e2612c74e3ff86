"""FastAPI app serving the blog pages and a small JSON API."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import HTMLResponse

from .config import get_settings
from .datocms import ContentFetchError, DatoCMSClient
from .models import Article, PostPage
from .pages import render_home, render_not_found, render_post
from .similarity import rank_related

logger = logging.getLogger(__name__)

app = FastAPI(title="Blog HME ITB")


def _content_client() -> DatoCMSClient:
    """Build the CMS client from settings; patched out in tests."""
    return DatoCMSClient.from_settings(get_settings())


def _related_limit() -> int:
    return get_settings().related_limit


def _fetch_articles() -> List[Article]:
    try:
        return _content_client().fetch_articles()
    except ContentFetchError as exc:
        logger.warning("Homepage fetch failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


def _fetch_post(slug: str) -> PostPage:
    try:
        return _content_client().fetch_post(slug)
    except ContentFetchError as exc:
        logger.warning("Post fetch failed for %s: %s", slug, exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
def home() -> HTMLResponse:
    return HTMLResponse(render_home(_fetch_articles()))


@app.get("/blog/{slug}", response_class=HTMLResponse)
def blog_post(slug: str) -> HTMLResponse:
    page = _fetch_post(slug)
    if page.article is None:
        return HTMLResponse(render_not_found(), status_code=status.HTTP_404_NOT_FOUND)
    related = rank_related(page.article, page.candidates, limit=_related_limit())
    return HTMLResponse(render_post(page.article, related))


@app.get("/api/articles")
def list_articles() -> List[Dict[str, Any]]:
    return [article.model_dump(mode="json") for article in _fetch_articles()]


@app.get("/api/articles/{slug}/related")
def related_articles(slug: str) -> List[Dict[str, Any]]:
    """Related articles for `slug`, most similar first; bodies are omitted."""
    page = _fetch_post(slug)
    if page.article is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown article: {slug}"
        )
    related = rank_related(page.article, page.candidates, limit=_related_limit())
    return [item.model_dump(mode="json", exclude={"content"}) for item in related]


if __name__ == "__main__":
    import uvicorn

    from .logging_utils import setup_logging

    setup_logging(get_settings().log_level)
    uvicorn.run(
        "hme_blog.server:app",
        host=os.getenv("BLOG_HOST", "0.0.0.0"),
        port=int(os.getenv("BLOG_PORT", "8000")),
        reload=os.getenv("BLOG_RELOAD", "false").lower() == "true",
    )
