"""Command-line entry points for the blog front end."""

import json
from typing import Optional

import typer
from rich import print as rprint

from .config import get_settings
from .datocms import ContentFetchError, DatoCMSClient
from .logging_utils import setup_logging
from .similarity import rank_related

app = typer.Typer(help="Serve the HME ITB blog and inspect its related-article ranking.")


def _client() -> DatoCMSClient:
    try:
        return DatoCMSClient.from_settings(get_settings())
    except RuntimeError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL for this run."
    ),
):
    setup_logging(log_level or get_settings().log_level)


@app.command("serve")
def serve_command(
    host: str = typer.Option("0.0.0.0", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
):
    """Run the web server with uvicorn."""
    import uvicorn

    uvicorn.run("hme_blog.server:app", host=host, port=port, reload=reload)


@app.command("list")
def list_command():
    """Print every article as slug, date and title."""
    try:
        articles = _client().fetch_articles()
    except ContentFetchError as exc:
        rprint(f"[red]Fetch failed: {exc}[/red]")
        raise typer.Exit(code=1)
    for article in articles:
        rprint(f"[cyan]{article.slug}[/cyan]  {article.date.isoformat()}  {article.title}")
    rprint(f"[green]{len(articles)} articles[/green]")


@app.command("related")
def related_command(
    slug: str = typer.Argument(..., help="Slug of the article being read."),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", help="Maximum related articles (defaults to RELATED_LIMIT)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
):
    """Rank the related articles for one slug."""
    if limit is not None and limit < 0:
        raise typer.BadParameter("limit must be >= 0.")
    try:
        page = _client().fetch_post(slug)
    except ContentFetchError as exc:
        rprint(f"[red]Fetch failed: {exc}[/red]")
        raise typer.Exit(code=1)

    if page.article is None:
        rprint(f"[red]Article not found: {slug}[/red]")
        raise typer.Exit(code=1)

    effective_limit = limit if limit is not None else get_settings().related_limit
    related = rank_related(page.article, page.candidates, limit=effective_limit)

    if as_json:
        payload = [
            {"slug": item.slug, "title": item.title, "score": item.score}
            for item in related
        ]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    rprint(f"[cyan]Related to {page.article.title}[/cyan]")
    if not related:
        rprint("[yellow]No other articles to recommend.[/yellow]")
    for item in related:
        rprint(f"{item.score:.4f}  [bold]{item.slug}[/bold]  {item.title}")


def main():
    app()


if __name__ == "__main__":
    main()
