"""Jinja2 page rendering for the homepage and article detail views."""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import Article, ScoredArticle
from .structured_text import render_structured_text

SITE_TITLE = "Blog HME ITB"

INDONESIAN_MONTHS = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)


def format_date_id(value: date) -> str:
    """Long Indonesian date, e.g. 15 Januari 2024."""
    return f"{value.day} {INDONESIAN_MONTHS[value.month - 1]} {value.year}"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html"]),
    )
    env.filters["date_id"] = format_date_id
    env.globals["site_title"] = SITE_TITLE
    return env


def render_home(articles: Sequence[Article]) -> str:
    template = _environment().get_template("home.html")
    return template.render(articles=articles)


def render_post(article: Article, related: Sequence[ScoredArticle]) -> str:
    template = _environment().get_template("post.html")
    return template.render(
        post=article,
        body=render_structured_text(article.content),
        related=related,
    )


def render_not_found() -> str:
    return _environment().get_template("not_found.html").render()
