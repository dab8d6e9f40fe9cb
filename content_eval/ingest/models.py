"""Data models for the document ingestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class ParsedDocument:
    """Uniform ``{text, title, links}`` result of ingesting one document.

    ``degraded`` is ``True`` when the format decoder failed and ``text`` is a
    best-effort dump of the raw bytes rather than real extracted content.
    """

    text: str
    title: Optional[str] = None
    links: List[str] = field(default_factory=list)
    degraded: bool = False
    source_format: str = "text"

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON payload served by the parse endpoint."""
        return {
            "text": self.text,
            "title": self.title,
            "links": list(self.links),
            "degraded": self.degraded,
        }
