"""Document commands: parse files, fetch URLs, list and check links."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import httpx
import typer

from content_eval.ingest import (
    DocumentParseError,
    ParsedDocument,
    extract_links,
    fetch_document,
    parse_document,
)
from content_eval.linkcheck import check_links_sync

from cli.rendering import render_document, render_link_check


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def read_input(source: str) -> str:
    """Return the text of *source*, or of stdin when *source* is ``-``."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        typer.echo(f"Error: file not found: {source}", err=True)
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8", errors="replace")


def load_document(target: str, tag: str) -> ParsedDocument:
    """Parse a local file, or fetch *target* when it is an http(s) URL."""
    try:
        if target.startswith(("http://", "https://")):
            return fetch_document(target)
        path = Path(target)
        if not path.is_file():
            typer.echo(f"[{tag}] Error: file not found: {target}", err=True)
            raise typer.Exit(code=1)
        return parse_document(path.read_bytes(), path.name)
    except DocumentParseError as exc:
        typer.echo(f"[{tag}] Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        typer.echo(f"[{tag}] Fetch failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def parse_cmd(
    path: str = typer.Argument(..., help="PDF, DOCX, HTML or text file to parse."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    full: bool = typer.Option(False, "--full", help="Print the full text, not a preview."),
) -> None:
    """Extract text, a title and links from a local document."""
    doc = load_document(path, "parse")
    if as_json:
        echo_json(doc.to_dict())
        return
    typer.echo(render_document(doc, "parse", full_text=full))


def fetch_cmd(
    url: str = typer.Argument(..., help="URL to fetch."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    full: bool = typer.Option(False, "--full", help="Print the full text, not a preview."),
) -> None:
    """Fetch a URL and extract its text, title and links."""
    if not url.startswith(("http://", "https://")):
        typer.echo(f"[fetch] Error: not an http(s) URL: {url}", err=True)
        raise typer.Exit(code=1)
    if not as_json:
        typer.echo(f"[fetch] Fetching {url!r} …")
    doc = load_document(url, "fetch")
    if as_json:
        echo_json(doc.to_dict())
        return
    typer.echo(render_document(doc, "fetch", full_text=full))


def links_cmd(
    source: str = typer.Argument(..., help="File to scan, or '-' for stdin."),
    as_json: bool = typer.Option(False, "--json", help="Print the links as a JSON array."),
) -> None:
    """List the links found in raw text, markdown or HTML (no network)."""
    links = extract_links(read_input(source))
    if as_json:
        echo_json(links)
        return
    if not links:
        typer.echo("[links] No links found.")
        return
    typer.echo(f"[links] {len(links)} link(s):")
    for url in links:
        typer.echo(f"  {url}")


def check_links_cmd(
    source: str = typer.Argument(..., help="File to scan, or '-' for stdin."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", min=1, help="Checks in flight at once."),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="Per-request timeout in seconds."),
) -> None:
    """Check every absolute link in a file and report which are broken."""
    result = check_links_sync(read_input(source), batch_size=batch_size, timeout=timeout)
    if as_json:
        echo_json(result.to_dict())
        return
    if not result.total_links:
        typer.echo("[check-links] No links to check.")
        return
    typer.echo(render_link_check(result))
