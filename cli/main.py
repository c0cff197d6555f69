"""Digilaw CLI — run the bulletin pipeline from a terminal.

Usage:
    python cli/main.py --help

Commands:
    locate     → print the URL of the latest Bulletin Officiel PDF
    page       → print the text of one page of the latest bulletin
    companies  → print the text of the first pages of the latest bulletin
    serve      → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from digilaw.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import httpx
import typer

from digilaw.bulletin.fetcher import PageFetcher, ScrapingProxyFetcher, build_client
from digilaw.config import configure_logging, settings
from digilaw.errors import DigilawError
from digilaw.pdf.extractor import ExtractionRequest
from digilaw.pipeline import extract_latest, resolve_latest

T = TypeVar("T")

app = typer.Typer(
    name="digilaw",
    help="Digilaw — Bulletin Officiel text extraction.",
    no_args_is_help=True,
)


def _run(job: Callable[[httpx.AsyncClient, PageFetcher], Awaitable[T]]) -> T:
    """Run *job* with a fresh HTTP client; exit 1 on pipeline errors."""

    async def _main() -> T:
        async with build_client() as client:
            return await job(client, ScrapingProxyFetcher(client))

    try:
        return asyncio.run(_main())
    except DigilawError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging("DEBUG" if verbose else None)


@app.command("locate")
def locate() -> None:
    """Print the download URL of the latest bulletin."""
    reference = _run(lambda client, fetcher: resolve_latest(fetcher))
    typer.echo(f"[locate] {reference.period}  {reference.url}")


@app.command("page")
def page(
    number: int = typer.Option(..., "--page", "-p", min=1, help="Page number to extract."),
) -> None:
    """Print the text of one page of the latest bulletin."""
    request = ExtractionRequest.single_page(number)
    result = _run(lambda client, fetcher: extract_latest(client, fetcher, request))
    typer.echo(result.text)


@app.command("companies")
def companies(
    max_pages: Optional[int] = typer.Option(
        None, "--max-pages", min=1, help="Number of leading pages to extract."
    ),
) -> None:
    """Print the text of the first pages of the latest bulletin."""
    request = ExtractionRequest.first_pages(max_pages or settings.companies_max_pages)
    result = _run(lambda client, fetcher: extract_latest(client, fetcher, request))
    typer.echo(result.text)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address."),
    port: Optional[int] = typer.Option(None, help="Bind port."),
    reload: bool = typer.Option(False, help="Reload on code changes (development)."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"🚀 Server is running on http://{bind_host}:{bind_port}")
    uvicorn.run(
        "digilaw.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
