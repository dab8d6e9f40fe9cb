"""Pydantic models for the evaluation boundary.

Requests arrive and results leave in camelCase (``apiKey``,
``overallScore``); Python code uses the snake_case field names.  Every model
accepts either spelling on input.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Score = Annotated[Union[int, float], Field(ge=0, le=10)]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class EvaluationRequest(_CamelModel):
    content: str = Field(min_length=1, description="Content to evaluate")
    title: Optional[str] = None
    keyword: Optional[str] = None
    api_key: str = Field(min_length=1, description="OpenAI API key")
    check_links: bool = False


class ArticleInput(_CamelModel):
    title: Optional[str] = None
    content: str = Field(min_length=1)


class ComparativeRequest(_CamelModel):
    primary_article: ArticleInput
    competing_articles: list[ArticleInput] = Field(min_length=1)
    api_key: str = Field(min_length=1, description="OpenAI API key")


# ---------------------------------------------------------------------------
# Model replies (exact JSON the prompt asks for)
# ---------------------------------------------------------------------------

class ModelEvaluation(_CamelModel):
    overall_score: Score
    summary: Optional[str] = None
    experience_score: Score
    experience_explanation: Optional[str] = None
    expertise_score: Score
    expertise_explanation: Optional[str] = None
    authoritativeness_score: Score
    authoritativeness_explanation: Optional[str] = None
    trustworthiness_score: Score
    trustworthiness_explanation: Optional[str] = None
    user_first_score: Score
    user_first_explanation: Optional[str] = None
    depth_value_score: Score
    depth_value_explanation: Optional[str] = None
    satisfaction_score: Score
    satisfaction_explanation: Optional[str] = None
    originality_score: Score
    originality_explanation: Optional[str] = None
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ModelComparison(_CamelModel):
    overall_comparison: Optional[str] = None
    summary: Optional[str] = None
    information_gain_score: Score
    information_gain_explanation: Optional[str] = None
    unique_insights_score: Score
    unique_insights_explanation: Optional[str] = None
    comprehensiveness_score: Score
    comprehensiveness_explanation: Optional[str] = None
    recency_score: Score
    recency_explanation: Optional[str] = None
    source_quality_score: Score
    source_quality_explanation: Optional[str] = None
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    analysis_details: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Results returned to callers
# ---------------------------------------------------------------------------

class ContentEvaluation(ModelEvaluation):
    title: str
    content: str
    keyword: Optional[str] = None
    keyword_in_title: int = 0
    keyword_at_beginning: int = 0
    created_at: datetime = Field(default_factory=_now)
    link_check: Optional[dict[str, Any]] = None


class ComparativeAnalysis(ModelComparison):
    primary_article_title: str
    created_at: datetime = Field(default_factory=_now)
