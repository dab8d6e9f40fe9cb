"""Shared fixtures: canned evaluator replies in the camelCase wire shape."""

from __future__ import annotations

from typing import Any

import pytest


EVALUATION_REPLY: dict[str, Any] = {
    "overallScore": 7.5,
    "summary": "Solid practical guide with room for more sourcing.",
    "experienceScore": 8,
    "experienceExplanation": "First-hand testing is described.",
    "expertiseScore": 7,
    "expertiseExplanation": "Accurate terminology throughout.",
    "authoritativenessScore": 6,
    "authoritativenessExplanation": "Few external citations.",
    "trustworthinessScore": 7,
    "trustworthinessExplanation": "Claims are mostly verifiable.",
    "userFirstScore": 8,
    "userFirstExplanation": "Written for readers, not crawlers.",
    "depthValueScore": 7,
    "depthValueExplanation": "Covers the main steps.",
    "satisfactionScore": 8,
    "satisfactionExplanation": "Answers the core question.",
    "originalityScore": 6,
    "originalityExplanation": "Some unique observations.",
    "strengths": ["Clear structure", "Practical tips"],
    "improvements": ["Cite sources"],
    "recommendations": ["Add an author bio"],
}

COMPARISON_REPLY: dict[str, Any] = {
    "overallComparison": "The primary article adds moderate value.",
    "summary": "Better examples, weaker sourcing.",
    "informationGainScore": 7,
    "informationGainExplanation": "Two new data points.",
    "uniqueInsightsScore": 6,
    "uniqueInsightsExplanation": "One original angle.",
    "comprehensivenessScore": 8,
    "comprehensivenessExplanation": "Covers more subtopics.",
    "recencyScore": 5,
    "recencyExplanation": "Similar publication dates.",
    "sourceQualityScore": 4,
    "sourceQualityExplanation": "Fewer primary sources.",
    "strengths": ["Examples"],
    "weaknesses": ["Sources"],
    "recommendations": ["Link primary research"],
    "analysisDetails": {"structure": "Comparable headings."},
}


@pytest.fixture
def evaluation_reply() -> dict[str, Any]:
    return dict(EVALUATION_REPLY)


@pytest.fixture
def comparison_reply() -> dict[str, Any]:
    return dict(COMPARISON_REPLY)
