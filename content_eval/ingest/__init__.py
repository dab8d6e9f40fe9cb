"""Ingestion package — document parsing, title and link extraction."""

from content_eval.ingest.fetcher import fetch_document
from content_eval.ingest.links import extract_html_links, extract_links
from content_eval.ingest.models import ParsedDocument
from content_eval.ingest.parser import (
    DocumentParseError,
    DocumentResourceError,
    InvalidDocumentError,
    is_supported_filename,
    parse_document,
)
from content_eval.ingest.titles import extract_html_title, extract_title

__all__ = [
    "ParsedDocument",
    "parse_document",
    "fetch_document",
    "extract_links",
    "extract_html_links",
    "extract_title",
    "extract_html_title",
    "is_supported_filename",
    "DocumentParseError",
    "DocumentResourceError",
    "InvalidDocumentError",
]
