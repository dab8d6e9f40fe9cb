"""Evaluation commands backed by the OpenAI chat-completions API."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer
from pydantic import ValidationError

from content_eval.config import settings
from content_eval.linkcheck import check_links_sync
from content_eval.llm import (
    ArticleInput,
    ComparativeRequest,
    EvaluationError,
    EvaluationRequest,
    compare_content,
    evaluate_content,
)

from cli.commands.documents import echo_json, load_document
from cli.rendering import render_comparison, render_evaluation


def _require_api_key(api_key: Optional[str], tag: str) -> str:
    key = api_key or settings.openai_api_key
    if not key:
        typer.echo(f"[{tag}] Error: pass --api-key or set OPENAI_API_KEY.", err=True)
        raise typer.Exit(code=1)
    return key


def evaluate_cmd(
    target: str = typer.Argument(..., help="File or URL with the content to evaluate."),
    title: Optional[str] = typer.Option(None, help="Title (defaults to the detected one)."),
    keyword: Optional[str] = typer.Option(None, help="Target keyword."),
    check_links: bool = typer.Option(False, "--check-links", help="Check links before evaluating."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="OpenAI API key."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Score content against the E-E-A-T and Helpful Content rubrics."""
    key = _require_api_key(api_key, "evaluate")
    doc = load_document(target, "evaluate")
    try:
        request = EvaluationRequest(
            content=doc.text,
            title=title or doc.title,
            keyword=keyword,
            api_key=key,
            check_links=check_links,
        )
    except ValidationError as exc:
        typer.echo(f"[evaluate] Invalid request: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    link_check = None
    if check_links:
        if not as_json:
            typer.echo(f"[evaluate] Checking {len(doc.links)} link(s) …")
        link_check = check_links_sync("\n".join(doc.links))

    if not as_json:
        typer.echo(f"[evaluate] Sending {len(doc.text)} chars to {settings.openai_chat_model} …")
    try:
        evaluation = asyncio.run(evaluate_content(request, link_check))
    except EvaluationError as exc:
        typer.echo(f"[evaluate] Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if as_json:
        echo_json(evaluation.model_dump(mode="json", by_alias=True))
        return
    typer.echo(render_evaluation(evaluation))


def compare_cmd(
    primary: str = typer.Argument(..., help="File or URL of the primary article."),
    competing: List[str] = typer.Argument(..., help="Files or URLs of competing articles."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="OpenAI API key."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Compare a primary article against one or more competitors."""
    key = _require_api_key(api_key, "compare")
    articles = [load_document(target, "compare") for target in [primary, *competing]]
    try:
        request = ComparativeRequest(
            primary_article=ArticleInput(title=articles[0].title, content=articles[0].text),
            competing_articles=[
                ArticleInput(title=doc.title, content=doc.text) for doc in articles[1:]
            ],
            api_key=key,
        )
    except ValidationError as exc:
        typer.echo(f"[compare] Invalid request: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not as_json:
        typer.echo(f"[compare] Comparing against {len(competing)} competitor(s) …")
    try:
        analysis = asyncio.run(compare_content(request))
    except EvaluationError as exc:
        typer.echo(f"[compare] Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if as_json:
        echo_json(analysis.model_dump(mode="json", by_alias=True))
        return
    typer.echo(render_comparison(analysis))
