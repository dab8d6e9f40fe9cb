"""Document endpoints — file upload and URL.

Routes
------
POST /api/parse-document    Multipart file upload     → parse_document
POST /api/fetch-document    Body: {"url": "https://..."} → fetch_document
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel, HttpUrl
from starlette.concurrency import run_in_threadpool

from content_eval.config import settings
from content_eval.ingest import (
    DocumentResourceError,
    InvalidDocumentError,
    fetch_document,
    is_supported_filename,
    parse_document,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class UrlFetchRequest(BaseModel):
    url: HttpUrl


class ParsedDocumentResponse(BaseModel):
    text: str
    title: Optional[str]
    links: List[str]
    degraded: bool = False


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

def _too_large() -> HTTPException:
    return HTTPException(
        status_code=413,
        detail=f"File too large. The limit is {settings.max_upload_bytes // (1024 * 1024)} MB.",
    )


@router.post("/parse-document", response_model=ParsedDocumentResponse)
async def parse_document_endpoint(file: Optional[UploadFile] = File(None)) -> dict[str, Any]:
    """Extract text, a title and links from an uploaded PDF, DOCX or HTML file.

    Decoder failures still return 200 with ``degraded: true`` and a
    diagnostic text body.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if not is_supported_filename(file.filename):
        raise HTTPException(
            status_code=415,
            detail="Invalid file type. Only PDF, DOCX, HTML and text files are allowed.",
        )

    if file.size is not None and file.size > settings.max_upload_bytes:
        raise _too_large()
    data = await file.read()
    if len(data) > settings.max_upload_bytes:
        raise _too_large()

    try:
        parsed = await run_in_threadpool(parse_document, data, file.filename, strict=True)
    except InvalidDocumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except DocumentResourceError as exc:
        logger.error("[api] parse of %s failed: %s", file.filename, exc)
        raise HTTPException(status_code=500, detail=f"Failed to parse document: {exc}") from exc

    return parsed.to_dict()


@router.post("/fetch-document", response_model=ParsedDocumentResponse)
def fetch_document_endpoint(body: UrlFetchRequest) -> dict[str, Any]:
    """Fetch a URL and extract its text, title and links."""
    url_str = str(body.url)
    try:
        parsed = fetch_document(url_str)
    except httpx.HTTPError as exc:
        raise HTTPException(status_code=502, detail=f"Fetch failed: {exc}") from exc
    except InvalidDocumentError as exc:
        raise HTTPException(status_code=502, detail=f"Fetched document is unusable: {exc}") from exc
    except DocumentResourceError as exc:
        raise HTTPException(status_code=500, detail=f"Failed to parse document: {exc}") from exc
    return parsed.to_dict()
