"""Data models for link health checks.

``to_dict`` emits the camelCase wire shape shared with the evaluator prompt
and the UI: ``{links, totalLinks, brokenLinks, workingLinks}``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

# Statuses that usually mean "this server blocks automated checks".
RESTRICTED_STATUSES = frozenset({403, 405})


@dataclass(frozen=True)
class LinkStatus:
    """Outcome of probing a single URL."""

    url: str
    status: Optional[int]
    ok: bool
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"url": self.url, "status": self.status, "ok": self.ok}
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(frozen=True)
class LinkCheckResult:
    """All checkd links of one document, in extraction order."""

    links: List[LinkStatus] = field(default_factory=list)

    @property
    def total_links(self) -> int:
        return len(self.links)

    @property
    def broken_links(self) -> int:
        return sum(1 for link in self.links if not link.ok)

    @property
    def working_links(self) -> int:
        return self.total_links - self.broken_links

    @property
    def restricted_links(self) -> int:
        """Links counted as working although the server answered 403/405."""
        return sum(1 for link in self.links if link.ok and link.status in RESTRICTED_STATUSES)

    def to_dict(self) -> dict[str, Any]:
        return {
            "links": [link.to_dict() for link in self.links],
            "totalLinks": self.total_links,
            "brokenLinks": self.broken_links,
            "workingLinks": self.working_links,
        }
