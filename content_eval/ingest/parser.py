"""Document parsing: turns uploaded bytes into a :class:`ParsedDocument`.

Dispatch is by file extension:

    .pdf            pypdf (in-memory, then one retry from a temp file)
    .docx / .doc    python-docx paragraphs + tables
    .html / .htm    BeautifulSoup title cascade, link extraction, body text
    anything else   UTF-8 text with the generic title / link heuristics

Binary decoder failures never reach the caller.  They are converted into a
*degraded* document whose text is a bounded dump of the printable bytes and
whose title is a sentinel such as ``"PDF Parsing Failed"``.  Only failures
that leave nothing usable (the temp file cannot be written) are raised, as
:class:`DocumentResourceError`.
"""

from __future__ import annotations

import io
import logging
import tempfile
import uuid
from pathlib import Path
from typing import BinaryIO, List, Union

from bs4 import BeautifulSoup

from content_eval.ingest.links import dedupe_links, extract_html_links, extract_links
from content_eval.ingest.models import ParsedDocument
from content_eval.ingest.titles import extract_html_title, extract_title

logger = logging.getLogger(__name__)

PDF_EXTENSIONS = {".pdf"}
DOCX_EXTENSIONS = {".docx", ".doc"}
HTML_EXTENSIONS = {".html", ".htm"}
TEXT_EXTENSIONS = {".txt", ".md"}
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS | DOCX_EXTENSIONS | HTML_EXTENSIONS | TEXT_EXTENSIONS

# Upper bound on the raw-byte dump returned for a degraded parse.
DEGRADED_TEXT_LIMIT = 1000

_NON_PRINTABLE = bytes(range(0x00, 0x20)) + bytes(range(0x7F, 0x100))


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class DocumentParseError(Exception):
    """Base class for failures the parser reports to its caller."""


class InvalidDocumentError(DocumentParseError, ValueError):
    """The upload was rejected before parsing (empty, too large, wrong type)."""


class DocumentResourceError(DocumentParseError, OSError):
    """A local resource needed for parsing (temp file) was unavailable."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def file_extension(filename: str) -> str:
    """Return the lower-cased extension of *filename*, including the dot."""
    return Path(filename).suffix.lower()


def is_supported_filename(filename: str) -> bool:
    """Return ``True`` if *filename* has an extension the upload filter allows."""
    return file_extension(filename) in SUPPORTED_EXTENSIONS


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8-sig", errors="replace")


def _degraded(data: bytes, label: str, source_format: str) -> ParsedDocument:
    """Build the diagnostic document returned when a binary decoder fails."""
    printable = data.translate(None, _NON_PRINTABLE).decode("ascii")
    snippet = printable[:DEGRADED_TEXT_LIMIT] or "Unable to extract text content"
    return ParsedDocument(
        text=f"Note: {label} parsing failed, limited text extracted. {snippet}...",
        title=f"{label} Parsing Failed",
        links=[],
        degraded=True,
        source_format=source_format,
    )


def _write_temp_file(data: bytes, suffix: str) -> Path:
    """Write *data* to a uniquely named file in the system temp directory."""
    path = Path(tempfile.gettempdir()) / f"{uuid.uuid4()}{suffix}"
    try:
        path.write_bytes(data)
    except OSError as exc:
        path.unlink(missing_ok=True)
        raise DocumentResourceError(f"Could not write temporary file {path}: {exc}") from exc
    return path


def _remove_temp_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("[parse] could not remove temp file %s: %s", path, exc)


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------

def _pdf_annotation_links(reader) -> List[str]:  # type: ignore[no-untyped-def]
    """Return ``/URI`` targets of link annotations across all pages."""
    uris: List[str] = []
    for page in reader.pages:
        annots = page.get("/Annots")
        if annots is None:
            continue
        for ref in annots.get_object():
            annot = ref.get_object()
            action = annot.get("/A")
            if action is None:
                continue
            uri = action.get_object().get("/URI")
            if uri:
                uris.append(str(uri))
    return uris


def _read_pdf(source: Union[BinaryIO, Path]) -> ParsedDocument:
    """Decode a PDF with ``pypdf``.  Raises whatever the decoder raises."""
    import pypdf  # noqa: PLC0415

    reader = pypdf.PdfReader(source)
    pages: List[str] = []
    for page in reader.pages:
        text = page.extract_text() or ""
        if text.strip():
            pages.append(text)
    text = "\n\n".join(pages)

    meta_title = reader.metadata.title if reader.metadata else None
    title = (meta_title or "").strip() or extract_title(text)
    links = dedupe_links(extract_links(text) + _pdf_annotation_links(reader))

    return ParsedDocument(text=text, title=title, links=links, source_format="pdf")


def parse_pdf(data: bytes) -> ParsedDocument:
    """Parse PDF bytes, retrying once from disk before degrading."""
    try:
        return _read_pdf(io.BytesIO(data))
    except Exception as exc:  # noqa: BLE001
        logger.info("[parse] in-memory PDF decode failed (%s); retrying from a temp file", exc)

    tmp_path = _write_temp_file(data, ".pdf")
    try:
        return _read_pdf(tmp_path)
    except Exception as exc:  # noqa: BLE001
        logger.warning("[parse] PDF decode failed, returning degraded text: %s", exc)
        return _degraded(data, "PDF", "pdf")
    finally:
        _remove_temp_file(tmp_path)


# ---------------------------------------------------------------------------
# DOCX
# ---------------------------------------------------------------------------

def _read_docx(data: bytes) -> ParsedDocument:
    """Decode a Word document with ``python-docx``."""
    from docx import Document  # noqa: PLC0415
    from docx.opc.constants import RELATIONSHIP_TYPE as RT  # noqa: PLC0415

    doc = Document(io.BytesIO(data))

    paragraphs: List[str] = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            row_text = " | ".join(
                cell.text.strip() for cell in row.cells if cell.text.strip()
            )
            if row_text:
                paragraphs.append(row_text)
    text = "\n\n".join(paragraphs)

    hyperlinks = [
        rel.target_ref
        for rel in doc.part.rels.values()
        if rel.reltype == RT.HYPERLINK and rel.is_external
    ]
    links = dedupe_links(extract_links(text) + hyperlinks)

    core_title = doc.core_properties.title if doc.core_properties else None
    title = (core_title or "").strip() or extract_title(text)

    return ParsedDocument(text=text, title=title, links=links, source_format="docx")


def parse_docx(data: bytes) -> ParsedDocument:
    """Parse DOCX bytes, degrading on any decoder failure.

    Legacy binary ``.doc`` files are not readable by python-docx and always
    take the degraded path.
    """
    try:
        return _read_docx(data)
    except Exception as exc:  # noqa: BLE001
        logger.warning("[parse] DOCX decode failed, returning degraded text: %s", exc)
        return _degraded(data, "DOCX", "docx")


# ---------------------------------------------------------------------------
# HTML / plain text
# ---------------------------------------------------------------------------

def html_body_text(html: str) -> str:
    """Return the visible text of the ``<body>`` with scripts and styles removed."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    container = soup.body or soup
    text = container.get_text(separator="\n")
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    return "\n".join(lines)


def parse_html(html: str) -> ParsedDocument:
    """Parse an HTML document that has already been decoded to text."""
    return ParsedDocument(
        text=html_body_text(html),
        title=extract_html_title(html),
        links=extract_html_links(html),
        source_format="html",
    )


def parse_text(text: str) -> ParsedDocument:
    """Parse plain text (or anything without a dedicated decoder)."""
    return ParsedDocument(
        text=text,
        title=extract_title(text),
        links=extract_links(text),
        source_format="text",
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_document(
    data: bytes,
    filename: str,
    *,
    strict: bool = False,
    max_bytes: int | None = None,
) -> ParsedDocument:
    """Parse an uploaded document into ``{text, title, links}``.

    Args:
        data: Raw file contents.
        filename: Original filename; only its extension is used.
        strict: Reject extensions outside :data:`SUPPORTED_EXTENSIONS`
            instead of treating them as plain text.
        max_bytes: Optional upload size limit.

    Returns:
        A :class:`ParsedDocument`.  ``degraded`` is set when a binary decoder
        failed and the text is only a raw-byte dump.

    Raises:
        InvalidDocumentError: Empty payload, oversize payload, missing
            filename, or (with *strict*) a disallowed extension.
        DocumentResourceError: A temp file for the PDF retry could not be
            written.
    """
    if not filename:
        raise InvalidDocumentError("A filename is required to choose a parser.")
    if not data:
        raise InvalidDocumentError(f"{filename!r} is empty.")
    if max_bytes is not None and len(data) > max_bytes:
        raise InvalidDocumentError(
            f"{filename!r} is {len(data)} bytes; the limit is {max_bytes} bytes."
        )

    extension = file_extension(filename)
    if strict and extension not in SUPPORTED_EXTENSIONS:
        raise InvalidDocumentError(
            f"Invalid file type {extension or '(none)'!r}. "
            "Only PDF, DOCX, HTML and text files are allowed."
        )

    logger.debug("[parse] %s (%d bytes)", filename, len(data))

    if extension in PDF_EXTENSIONS:
        return parse_pdf(data)
    if extension in DOCX_EXTENSIONS:
        return parse_docx(data)

    text = _decode_text(data)
    if extension in HTML_EXTENSIONS:
        try:
            return parse_html(text)
        except Exception as exc:  # noqa: BLE001
            logger.warning("[parse] HTML parse of %s failed, treating as text: %s", filename, exc)
    return parse_text(text)
