"""Evaluation endpoints.

Routes
------
POST /api/evaluate    Body: EvaluationRequest   → ContentEvaluation
POST /api/compare     Body: ComparativeRequest  → ComparativeAnalysis

Both bodies and results are camelCase.  The caller's OpenAI key travels in
the body and is never stored.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from fastapi import APIRouter, HTTPException, Request

from content_eval.linkcheck import LinkCheckResult, check_links
from content_eval.llm import (
    ComparativeRequest,
    EvaluationError,
    EvaluationRequest,
    compare_content,
    evaluate_content,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _optional_link_check(content: str, request: Request) -> Optional[LinkCheckResult]:
    """Run a link check for the evaluation; a failure only drops the section."""
    client = getattr(request.app.state, "http_client", None)
    try:
        return await check_links(content, client=client)
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("[evaluate] link check skipped: %s", exc)
        return None


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/evaluate")
async def evaluate_endpoint(body: EvaluationRequest, request: Request) -> dict[str, Any]:
    """Score content against the E-E-A-T and Helpful Content rubrics."""
    link_check = await _optional_link_check(body.content, request) if body.check_links else None
    try:
        result = await evaluate_content(body, link_check)
    except EvaluationError as exc:
        logger.error("[evaluate] %s", exc)
        raise HTTPException(status_code=502, detail=f"Error evaluating content: {exc}") from exc
    return result.model_dump(mode="json", by_alias=True)


@router.post("/compare")
async def compare_endpoint(body: ComparativeRequest) -> dict[str, Any]:
    """Compare a primary article against one or more competing articles."""
    try:
        result = await compare_content(body)
    except EvaluationError as exc:
        logger.error("[compare] %s", exc)
        raise HTTPException(status_code=502, detail=f"Error comparing content: {exc}") from exc
    return result.model_dump(mode="json", by_alias=True)
