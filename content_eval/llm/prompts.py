"""Prompt builders for the evaluation and comparison calls."""

from __future__ import annotations

import json
from typing import Optional

from content_eval.linkcheck.models import LinkCheckResult
from content_eval.llm.models import ComparativeRequest, EvaluationRequest

# Cap on the broken URLs listed in the prompt.
_MAX_BROKEN_LISTED = 20

_EVALUATION_SCHEMA = {
    "overallScore": "number",
    "summary": "string",
    "experienceScore": "number",
    "experienceExplanation": "string",
    "expertiseScore": "number",
    "expertiseExplanation": "string",
    "authoritativenessScore": "number",
    "authoritativenessExplanation": "string",
    "trustworthinessScore": "number",
    "trustworthinessExplanation": "string",
    "userFirstScore": "number",
    "userFirstExplanation": "string",
    "depthValueScore": "number",
    "depthValueExplanation": "string",
    "satisfactionScore": "number",
    "satisfactionExplanation": "string",
    "originalityScore": "number",
    "originalityExplanation": "string",
    "strengths": ["string"],
    "improvements": ["string"],
    "recommendations": ["string"],
}

_COMPARISON_SCHEMA = {
    "overallComparison": "string",
    "summary": "string",
    "informationGainScore": "number",
    "informationGainExplanation": "string",
    "uniqueInsightsScore": "number",
    "uniqueInsightsExplanation": "string",
    "comprehensivenessScore": "number",
    "comprehensivenessExplanation": "string",
    "recencyScore": "number",
    "recencyExplanation": "string",
    "sourceQualityScore": "number",
    "sourceQualityExplanation": "string",
    "strengths": ["string"],
    "weaknesses": ["string"],
    "recommendations": ["string"],
    "analysisDetails": {"<topic>": "string"},
}


def _link_section(link_check: LinkCheckResult) -> str:
    broken = [link for link in link_check.links if not link.ok]
    lines = [
        "",
        "LINK CHECK RESULTS:",
        f"- Total links: {link_check.total_links}",
        f"- Working links: {link_check.working_links}",
        f"- Broken links: {link_check.broken_links}",
    ]
    for link in broken[:_MAX_BROKEN_LISTED]:
        reason = link.status if link.status is not None else (link.error or "unreachable")
        lines.append(f"  * {link.url} ({reason})")
    lines.append(
        "Take broken links into account when scoring trustworthiness and "
        "mention them in the improvements if there are any."
    )
    return "\n".join(lines)


def build_evaluation_prompt(
    request: EvaluationRequest,
    link_check: Optional[LinkCheckResult] = None,
) -> str:
    """Prompt asking for E-E-A-T and Helpful Content scores as JSON."""
    parts = [
        "You are an expert content evaluator specializing in Google's E-E-A-T "
        "and Helpful Content guidelines.",
        "Analyze the following content and provide a detailed evaluation.",
        "",
        f"CONTENT TITLE: {request.title or 'Untitled content'}",
    ]
    if request.keyword:
        parts.append(f"TARGET KEYWORD: {request.keyword}")
    parts += [
        "",
        "CONTENT:",
        request.content,
    ]
    if link_check is not None and link_check.total_links:
        parts.append(_link_section(link_check))
    parts += [
        "",
        "Evaluate this content based on Google's E-E-A-T criteria (Experience, "
        "Expertise, Authoritativeness, Trustworthiness) and Helpful Content "
        "guidelines (user-first intent, depth and value, satisfaction, originality).",
        "",
        "For EACH criterion, provide:",
        "1. A score from 1-10 (10 being the highest)",
        "2. A brief explanation for the score",
        "",
        "Also provide:",
        "- An overall score from 1-10",
        "- A brief summary of the content quality",
        "- 3-5 specific strengths of the content",
        "- 3-5 specific areas for improvement",
        "- 3-5 specific, actionable recommendations",
        "",
        "Respond in the following JSON format:",
        json.dumps(_EVALUATION_SCHEMA, indent=2),
    ]
    return "\n".join(parts)


def build_comparison_prompt(request: ComparativeRequest) -> str:
    """Prompt comparing the primary article with its competitors."""
    primary = request.primary_article
    parts = [
        "You are an expert content strategist. Compare the PRIMARY ARTICLE "
        "against the COMPETING ARTICLES and judge how much value the primary "
        "article adds over them.",
        "",
        f"PRIMARY ARTICLE TITLE: {primary.title or 'Untitled content'}",
        "PRIMARY ARTICLE CONTENT:",
        primary.content,
    ]
    for index, article in enumerate(request.competing_articles, start=1):
        parts += [
            "",
            f"COMPETING ARTICLE {index} TITLE: {article.title or 'Untitled content'}",
            f"COMPETING ARTICLE {index} CONTENT:",
            article.content,
        ]
    parts += [
        "",
        "Score the primary article from 1-10 on information gain, unique "
        "insights, comprehensiveness, recency and source quality relative to "
        "the competing articles, each with a brief explanation.",
        "Also give an overall comparison, a summary, 3-5 strengths, 3-5 "
        "weaknesses, 3-5 actionable recommendations, and per-topic analysis "
        "details as an object mapping topic to explanation.",
        "",
        "Respond in the following JSON format:",
        json.dumps(_COMPARISON_SCHEMA, indent=2),
    ]
    return "\n".join(parts)
