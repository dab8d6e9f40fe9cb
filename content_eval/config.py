"""Centralised settings for the content evaluator.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Document fetching / uploads
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    max_upload_bytes: int = field(
        default_factory=lambda: int(os.environ.get("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
    )
    fetch_user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "FETCH_USER_AGENT",
            "Mozilla/5.0 (compatible; ContentEvaluator/1.0)",
        )
    )

    # ------------------------------------------------------------------
    # Link health checker
    # ------------------------------------------------------------------
    link_check_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LINK_CHECK_TIMEOUT", "5.0"))
    )
    link_check_batch_size: int = field(
        default_factory=lambda: int(os.environ.get("LINK_CHECK_BATCH_SIZE", "5"))
    )
    link_check_user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "LINK_CHECK_USER_AGENT",
            "Mozilla/5.0 (compatible; ContentEvaluator/1.0)",
        )
    )
    # 403/405 usually mean "bot blocked", not "gone".  Turning this off makes
    # the checker report them as broken.
    treat_restricted_as_working: bool = field(
        default_factory=lambda: _env_bool("TREAT_RESTRICTED_AS_WORKING", "true")
    )

    # ------------------------------------------------------------------
    # LLM evaluator
    # ------------------------------------------------------------------
    openai_api_key: str = field(
        default_factory=lambda: os.environ.get("OPENAI_API_KEY", "")
    )
    openai_base_url: str = field(
        default_factory=lambda: os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1")
    )
    openai_chat_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_CHAT_MODEL", "gpt-4o")
    )
    openai_temperature: float = field(
        default_factory=lambda: float(os.environ.get("OPENAI_TEMPERATURE", "0.7"))
    )
    llm_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LLM_TIMEOUT", "120.0"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton, import this everywhere:
#   from content_eval.config import settings
settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once for the API process or the CLI."""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
