"""Plain-text rendering of parse, link-check and evaluation results."""

from __future__ import annotations

from typing import List

from content_eval.ingest import ParsedDocument
from content_eval.linkcheck import LinkCheckResult
from content_eval.llm import ComparativeAnalysis, ContentEvaluation

# Characters of document text shown before "…" in the summary view.
PREVIEW_CHARS = 500

_EVALUATION_CRITERIA = [
    ("Experience", "experience"),
    ("Expertise", "expertise"),
    ("Authoritativeness", "authoritativeness"),
    ("Trustworthiness", "trustworthiness"),
    ("User-first", "user_first"),
    ("Depth & value", "depth_value"),
    ("Satisfaction", "satisfaction"),
    ("Originality", "originality"),
]

_COMPARISON_CRITERIA = [
    ("Information gain", "information_gain"),
    ("Unique insights", "unique_insights"),
    ("Comprehensiveness", "comprehensiveness"),
    ("Recency", "recency"),
    ("Source quality", "source_quality"),
]


def _bullets(heading: str, items: List[str]) -> List[str]:
    if not items:
        return []
    return ["", f"{heading}:"] + [f"  - {item}" for item in items]


def render_document(doc: ParsedDocument, tag: str, full_text: bool = False) -> str:
    """Summarise a parsed document as ``[tag]`` lines followed by its text."""
    lines = [
        f"[{tag}] Title  : {doc.title or '(none)'}",
        f"[{tag}] Format : {doc.source_format}" + ("  (degraded)" if doc.degraded else ""),
        f"[{tag}] Words  : {len(doc.text.split())}",
        f"[{tag}] Links  : {len(doc.links)}",
    ]
    lines += [f"  {url}" for url in doc.links]
    text = doc.text
    if not full_text and len(text) > PREVIEW_CHARS:
        text = text[:PREVIEW_CHARS].rstrip() + " …"
    lines += ["", text]
    return "\n".join(lines)


def render_link_check(result: LinkCheckResult) -> str:
    lines = [
        f"[check-links] Total   : {result.total_links}",
        f"[check-links] Working : {result.working_links}",
        f"[check-links] Broken  : {result.broken_links}",
    ]
    for link in result.links:
        marker = "ok " if link.ok else "BAD"
        status = link.status if link.status is not None else "---"
        suffix = f"  ({link.error})" if link.error else ""
        lines.append(f"  {marker} {status}  {link.url}{suffix}")
    return "\n".join(lines)


def render_evaluation(evaluation: ContentEvaluation) -> str:
    lines = [
        f"[evaluate] Title   : {evaluation.title}",
        f"[evaluate] Overall : {evaluation.overall_score}/10",
    ]
    if evaluation.keyword:
        lines.append(
            f"[evaluate] Keyword : {evaluation.keyword!r}  "
            f"in title={bool(evaluation.keyword_in_title)}  "
            f"at beginning={bool(evaluation.keyword_at_beginning)}"
        )
    lines += ["", evaluation.summary or "", ""]
    for label, name in _EVALUATION_CRITERIA:
        score = getattr(evaluation, f"{name}_score")
        explanation = getattr(evaluation, f"{name}_explanation")
        lines.append(f"  {label:<18} {score:>4}  {explanation or ''}")
    lines += _bullets("Strengths", evaluation.strengths)
    lines += _bullets("Improvements", evaluation.improvements)
    lines += _bullets("Recommendations", evaluation.recommendations)
    if evaluation.link_check is not None:
        lines += [
            "",
            f"Links: {evaluation.link_check['totalLinks']} total, "
            f"{evaluation.link_check['brokenLinks']} broken",
        ]
    return "\n".join(lines)


def render_comparison(analysis: ComparativeAnalysis) -> str:
    lines = [
        f"[compare] Primary : {analysis.primary_article_title}",
        "",
        analysis.overall_comparison or "",
        "",
        analysis.summary or "",
        "",
    ]
    for label, name in _COMPARISON_CRITERIA:
        score = getattr(analysis, f"{name}_score")
        explanation = getattr(analysis, f"{name}_explanation")
        lines.append(f"  {label:<18} {score:>4}  {explanation or ''}")
    lines += _bullets("Strengths", analysis.strengths)
    lines += _bullets("Weaknesses", analysis.weaknesses)
    lines += _bullets("Recommendations", analysis.recommendations)
    if analysis.analysis_details:
        lines += ["", "Details:"]
        lines += [f"  {topic}: {text}" for topic, text in analysis.analysis_details.items()]
    return "\n".join(lines)
