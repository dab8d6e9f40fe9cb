"""Link health endpoint.

Routes
------
POST /api/check-links    Body: {"content": "..."} → LinkCheckResult
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from content_eval.linkcheck import check_links

router = APIRouter()


class CheckLinksRequest(BaseModel):
    content: str = Field(..., min_length=1, description="Text, markdown or HTML to scan")


@router.post("/check-links")
async def check_links_endpoint(body: CheckLinksRequest, request: Request) -> dict[str, Any]:
    """Check every absolute link in *content* and report which are broken."""
    client = getattr(request.app.state, "http_client", None)
    result = await check_links(body.content, client=client)
    return result.to_dict()
