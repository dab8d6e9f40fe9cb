"""Content evaluator CLI — entry-point for parsing, link checks and evaluation.

Usage:
    python cli/main.py --help

Commands:
    parse         → extract text, title and links from a local file
    fetch         → the same for a URL
    links         → list links found in a file (no network)
    check-links   → check those links and report broken ones
    evaluate      → E-E-A-T / Helpful Content evaluation via OpenAI
    compare       → compare a primary article against competitors
    serve         → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from content_eval.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from content_eval.config import configure_logging

from cli.commands.documents import check_links_cmd, fetch_cmd, links_cmd, parse_cmd
from cli.commands.evaluate import compare_cmd, evaluate_cmd

app = typer.Typer(
    name="content-eval",
    help="Content evaluator CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL (e.g. DEBUG)."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level.upper() if log_level else None)


# ---------------------------------------------------------------------------
# Documents and links
# ---------------------------------------------------------------------------
app.command("parse")(parse_cmd)
app.command("fetch")(fetch_cmd)
app.command("links")(links_cmd)
app.command("check-links")(check_links_cmd)

# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------
app.command("evaluate")(evaluate_cmd)
app.command("compare")(compare_cmd)


# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
) -> None:
    """Run the FastAPI app with uvicorn."""
    import uvicorn  # noqa: PLC0415

    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("content_eval.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
