"""External LLM evaluator boundary."""

from content_eval.llm.client import (
    EvaluationError,
    analyze_keyword,
    compare_content,
    evaluate_content,
)
from content_eval.llm.models import (
    ArticleInput,
    ComparativeAnalysis,
    ComparativeRequest,
    ContentEvaluation,
    EvaluationRequest,
)

__all__ = [
    "evaluate_content",
    "compare_content",
    "analyze_keyword",
    "EvaluationError",
    "EvaluationRequest",
    "ComparativeRequest",
    "ArticleInput",
    "ContentEvaluation",
    "ComparativeAnalysis",
]
