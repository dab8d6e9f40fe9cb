"""OpenAI-backed content evaluation.

The model's judgment is a black box: this module only builds the prompt,
sends it to the chat-completions endpoint in JSON mode, and validates the
reply against :mod:`content_eval.llm.models`.  The API key travels with
each request (users bring their own), so no client is cached.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Tuple

import httpx
from pydantic import ValidationError

from content_eval.config import settings
from content_eval.linkcheck.models import LinkCheckResult
from content_eval.llm.models import (
    ComparativeAnalysis,
    ComparativeRequest,
    ContentEvaluation,
    EvaluationRequest,
    ModelComparison,
    ModelEvaluation,
)
from content_eval.llm.prompts import build_comparison_prompt, build_evaluation_prompt

logger = logging.getLogger(__name__)

# A keyword found at or before this index counts as "at the beginning".
KEYWORD_BEGINNING_WINDOW = 10


class EvaluationError(RuntimeError):
    """The evaluator could not produce a usable result."""


# ---------------------------------------------------------------------------
# Keyword / title analysis
# ---------------------------------------------------------------------------

def analyze_keyword(title: Optional[str], keyword: Optional[str]) -> Tuple[int, int]:
    """Return ``(keyword_in_title, keyword_at_beginning)`` as 0/1 flags.

    Matching is case-insensitive; "at the beginning" means the keyword starts
    within the first :data:`KEYWORD_BEGINNING_WINDOW` characters.
    """
    if not title or not keyword or not keyword.strip():
        return 0, 0
    position = title.lower().find(keyword.lower())
    if position < 0:
        return 0, 0
    return 1, int(position <= KEYWORD_BEGINNING_WINDOW)


# ---------------------------------------------------------------------------
# Chat-completions call
# ---------------------------------------------------------------------------

def _api_error_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.text[:200] or response.reason_phrase


async def _chat_json(prompt: str, api_key: str) -> dict[str, Any]:
    """Send *prompt* in JSON mode and return the decoded reply object."""
    if not api_key:
        raise EvaluationError("OpenAI API key is required")

    payload = {
        "model": settings.openai_chat_model,
        "messages": [{"role": "user", "content": prompt}],
        "response_format": {"type": "json_object"},
        "temperature": settings.openai_temperature,
    }
    try:
        async with httpx.AsyncClient(timeout=settings.llm_timeout) as client:
            response = await client.post(
                f"{settings.openai_base_url.rstrip('/')}/chat/completions",
                headers={"Authorization": f"Bearer {api_key}"},
                json=payload,
            )
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        message = _api_error_message(exc.response)
        raise EvaluationError(
            f"OpenAI API error ({exc.response.status_code}): {message}"
        ) from exc
    except httpx.HTTPError as exc:
        raise EvaluationError(f"OpenAI API request failed: {exc}") from exc

    try:
        content = response.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise EvaluationError("Malformed response from OpenAI") from exc
    if not content:
        raise EvaluationError("No response from OpenAI")

    try:
        reply = json.loads(content)
    except json.JSONDecodeError as exc:
        raise EvaluationError("OpenAI returned invalid JSON") from exc
    if not isinstance(reply, dict):
        raise EvaluationError("OpenAI returned JSON that is not an object")
    return reply


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def evaluate_content(
    request: EvaluationRequest,
    link_check: Optional[LinkCheckResult] = None,
) -> ContentEvaluation:
    """Score *request* against the E-E-A-T and Helpful Content rubrics.

    Args:
        request: Content, optional title/keyword, and the caller's API key.
        link_check: Optional link health results to include in the prompt
            and echo back on the result.

    Raises:
        EvaluationError: Missing key, API failure, or an unusable reply.
    """
    logger.info("[evaluate] Evaluating %d chars with %s", len(request.content), settings.openai_chat_model)
    reply = await _chat_json(build_evaluation_prompt(request, link_check), request.api_key)
    try:
        scores = ModelEvaluation.model_validate(reply)
    except ValidationError as exc:
        raise EvaluationError(f"OpenAI reply did not match the evaluation schema: {exc}") from exc

    in_title, at_beginning = analyze_keyword(request.title, request.keyword)
    return ContentEvaluation(
        **scores.model_dump(),
        title=request.title or "Untitled content",
        content=request.content,
        keyword=request.keyword or None,
        keyword_in_title=in_title,
        keyword_at_beginning=at_beginning,
        link_check=link_check.to_dict() if link_check is not None else None,
    )


async def compare_content(request: ComparativeRequest) -> ComparativeAnalysis:
    """Compare the primary article of *request* with its competitors.

    Raises:
        EvaluationError: Missing key, API failure, or an unusable reply.
    """
    logger.info(
        "[compare] Comparing primary article with %d competitor(s)",
        len(request.competing_articles),
    )
    reply = await _chat_json(build_comparison_prompt(request), request.api_key)
    try:
        comparison = ModelComparison.model_validate(reply)
    except ValidationError as exc:
        raise EvaluationError(f"OpenAI reply did not match the comparison schema: {exc}") from exc

    return ComparativeAnalysis(
        **comparison.model_dump(),
        primary_article_title=request.primary_article.title or "Untitled content",
    )
