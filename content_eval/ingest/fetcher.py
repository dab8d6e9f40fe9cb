"""URL input: fetch a page over HTTP and parse it like an uploaded document."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from urllib.parse import urlparse

import httpx
import trafilatura

from content_eval.config import settings
from content_eval.ingest.models import ParsedDocument
from content_eval.ingest.parser import html_body_text, parse_document, parse_html

logger = logging.getLogger(__name__)

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml", "application/html")


def _is_html(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "").lower()
    if any(ct in content_type for ct in _HTML_CONTENT_TYPES):
        return True
    # Servers that omit the header: sniff the first bytes.
    return not content_type and response.content[:512].lstrip().lower().startswith(
        (b"<!doctype html", b"<html")
    )


def _readable_text(html: str, url: str) -> str:
    """Main-content text via trafilatura, falling back to the whole ``<body>``."""
    text: str | None = trafilatura.extract(
        html,
        include_links=False,
        include_images=False,
        include_tables=True,
        no_fallback=False,
        url=url,
    )
    return text or html_body_text(html)


def _filename_for(url: str) -> str:
    """Best filename for dispatching a non-HTML response on its extension."""
    name = PurePosixPath(urlparse(url).path).name
    return name or "document.txt"


def fetch_document(url: str) -> ParsedDocument:
    """Fetch *url* and return a :class:`ParsedDocument`.

    HTML responses keep the HTML title cascade and link extraction, with body
    text narrowed to the main article by ``trafilatura``.  Anything else
    (PDF, DOCX, plain text) goes through :func:`parse_document` using the
    filename from the URL path.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        httpx.HTTPError: On connection failures and timeouts.
    """
    logger.info("[fetch] GET %s", url)
    with httpx.Client(
        headers={"User-Agent": settings.fetch_user_agent},
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()

    if _is_html(response):
        html = response.text
        parsed = parse_html(html)
        return ParsedDocument(
            text=_readable_text(html, url),
            title=parsed.title,
            links=parsed.links,
            source_format="html",
        )

    return parse_document(response.content, _filename_for(url))
