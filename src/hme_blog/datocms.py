"""GraphQL client for the DatoCMS Content Delivery API.

The token is passed in at construction; nothing here reads the environment.
Responses are validated into `Article` records before they leave this module.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .config import Settings
from .models import Article, PostPage

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://graphql.datocms.com"

_ARTICLE_FIELDS = """
    id
    title
    slug
    date
    excerpt
    coverImage {
      url
    }
"""

HOMEPAGE_QUERY = f"""
query HomePage {{
  allArticles {{{_ARTICLE_FIELDS}  }}
}}
"""

POST_QUERY = f"""
query PostBySlug($slug: String) {{
  article(filter: {{slug: {{eq: $slug}}}}) {{{_ARTICLE_FIELDS}    content {{
      value
    }}
  }}
  allArticles {{{_ARTICLE_FIELDS}  }}
}}
"""


class ContentFetchError(RuntimeError):
    """Raised when the CMS cannot be reached or returns an unusable response."""


class DatoCMSClient:
    """Thin wrapper around a GraphQL POST to DatoCMS."""

    def __init__(
        self,
        api_token: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 10.0,
        include_drafts: bool = False,
        exclude_invalid: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.include_drafts = include_drafts
        self.exclude_invalid = exclude_invalid
        self._api_token = api_token
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.BaseTransport] = None
    ) -> "DatoCMSClient":
        return cls(
            settings.require_api_token(),
            endpoint=settings.endpoint,
            timeout=settings.request_timeout,
            include_drafts=settings.include_drafts,
            exclude_invalid=settings.exclude_invalid,
            transport=transport,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_token}",
            "Accept": "application/json",
        }
        if self.include_drafts:
            headers["X-Include-Drafts"] = "true"
        if self.exclude_invalid:
            headers["X-Exclude-Invalid"] = "true"
        return headers

    def request(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """POST a GraphQL query and return its `data` object."""
        payload = {"query": query, "variables": variables or {}}
        logger.debug("POST %s variables=%s", self.endpoint, payload["variables"])
        try:
            with httpx.Client(
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                resp = client.post(self.endpoint, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("CMS request failed: %s", exc)
            raise ContentFetchError(f"{type(exc).__name__}: {exc}") from exc

        if resp.status_code >= 400:
            logger.warning("CMS returned HTTP %s", resp.status_code)
            raise ContentFetchError(
                f"CMS returned HTTP {resp.status_code}: {resp.text[:200]}"
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise ContentFetchError("CMS returned a non-JSON response.") from exc

        if not isinstance(body, dict):
            raise ContentFetchError("CMS response must be a JSON object.")
        errors = body.get("errors")
        if errors:
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise ContentFetchError(f"GraphQL errors: {messages}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise ContentFetchError("CMS response is missing a data object.")
        return data

    def fetch_articles(self) -> List[Article]:
        """Return every article for the homepage listing."""
        data = self.request(HOMEPAGE_QUERY)
        return _parse_articles(data.get("allArticles"))

    def fetch_post(self, slug: str) -> PostPage:
        """Return the article for `slug` (None if unknown) and the candidate pool."""
        data = self.request(POST_QUERY, {"slug": slug})
        raw_article = data.get("article")
        article = None
        if raw_article is not None:
            try:
                article = Article.model_validate(raw_article)
            except ValidationError as exc:
                raise ContentFetchError(f"Malformed article {slug!r}: {exc}") from exc
        return PostPage(article=article, candidates=_parse_articles(data.get("allArticles")))


def _parse_articles(raw: Any) -> List[Article]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ContentFetchError("allArticles must be a list.")
    try:
        return [Article.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise ContentFetchError(f"Malformed article record: {exc}") from exc
