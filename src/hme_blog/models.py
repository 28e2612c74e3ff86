"""Data models for articles fetched from the CMS."""

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CoverImage(BaseModel):
    url: str


class Article(BaseModel):
    """Normalized representation of a blog article record."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    slug: str
    title: str
    date: date
    excerpt: str = Field(
        "", description="Short summary; absent or malformed values become empty."
    )
    cover_image: Optional[CoverImage] = Field(None, alias="coverImage")
    content: Optional[Dict[str, Any]] = Field(
        None, description="Structured text document; only rendered on detail pages."
    )

    @field_validator("excerpt", mode="before")
    @classmethod
    def _excerpt_as_text(cls, value: Any) -> str:
        if isinstance(value, str):
            return value
        return ""

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, value: Any) -> Any:
        """Keep the calendar date of DateTime values; the time is not displayed."""
        if isinstance(value, datetime):
            return value.date()
        if not isinstance(value, str) or "T" not in value:
            return value
        txt = value.strip()
        # fromisoformat on older interpreters rejects "Z" and "+0700" offsets.
        if txt.endswith(("Z", "z")):
            txt = f"{txt[:-1]}+00:00"
        else:
            txt = re.sub(r"([+-]\d{2})(\d{2})$", r"\1:\2", txt)
        try:
            return datetime.fromisoformat(txt).date()
        except ValueError:
            return value

    @property
    def text(self) -> str:
        """Title and excerpt joined by a single space."""
        return f"{self.title} {self.excerpt}"


class ScoredArticle(Article):
    """An article annotated with its similarity to the article being read."""

    score: float = Field(..., description="Cosine similarity in [0, 1].")


class PostPage(BaseModel):
    """Result of the detail-page query: the article (if any) and the candidate pool."""

    article: Optional[Article] = None
    candidates: List[Article] = Field(default_factory=list)
