"""Link health checker.

``check_links`` extracts every absolute URL from a piece of content and
checks them over HTTP in fixed-size batches: all checks in a batch run
concurrently, and the next batch only starts once every check in the current
one has settled.  That caps in-flight requests at the batch size no matter
how many links the content holds.

Each check is a ``HEAD`` request with its own deadline.  Servers that answer
``HEAD`` with 403/405 get one ``GET`` retry under a fresh deadline (the body
is never read).  Network failures are recorded on the :class:`LinkStatus`
and never abort the overall check.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, List, Optional

import httpx

from content_eval.config import settings
from content_eval.ingest.links import clean_url, extract_links
from content_eval.linkcheck.models import RESTRICTED_STATUSES, LinkCheckResult, LinkStatus

logger = logging.getLogger(__name__)

_CHECK_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}
_CHECKABLE_RE = re.compile(r"^https?://", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def is_working_status(status: int, treat_restricted: Optional[bool] = None) -> bool:
    """Return ``True`` if *status* means the link is (likely) reachable.

    2xx and 3xx always count.  403/405 count too unless *treat_restricted*
    (default: ``settings.treat_restricted_as_working``) is off.
    """
    if treat_restricted is None:
        treat_restricted = settings.treat_restricted_as_working
    if 200 <= status < 400:
        return True
    return treat_restricted and status in RESTRICTED_STATUSES


def _describe(exc: BaseException, timeout: float) -> str:
    if isinstance(exc, (asyncio.TimeoutError, httpx.TimeoutException)):
        return f"Request timed out after {timeout:g}s"
    return str(exc) or type(exc).__name__


# ---------------------------------------------------------------------------
# Single check
# ---------------------------------------------------------------------------

async def _request_status(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    timeout: float,
) -> int:
    """Send one request and return its status without reading the body."""

    async def _send() -> int:
        async with client.stream(
            method,
            url,
            headers={"User-Agent": settings.link_check_user_agent, **_CHECK_HEADERS},
            timeout=timeout,
            follow_redirects=True,
        ) as response:
            return response.status_code

    return await asyncio.wait_for(_send(), timeout=timeout)


async def check_link_status(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: Optional[float] = None,
    treat_restricted: Optional[bool] = None,
) -> LinkStatus:
    """Check *url* and classify the outcome.  Never raises for network errors."""
    timeout = settings.link_check_timeout if timeout is None else timeout
    target = clean_url(url)

    try:
        status = await _request_status(client, "HEAD", target, timeout)
    except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError, ValueError) as exc:
        logger.debug("[links] %s failed: %s", target, exc)
        return LinkStatus(url=target, status=None, ok=False, error=_describe(exc, timeout))

    if status in RESTRICTED_STATUSES:
        try:
            status = await _request_status(client, "GET", target, timeout)
        except (httpx.HTTPError, asyncio.TimeoutError) as exc:
            # Keep the HEAD status.
            logger.debug("[links] GET retry for %s failed: %s", target, exc)

    return LinkStatus(url=target, status=status, ok=is_working_status(status, treat_restricted))


# ---------------------------------------------------------------------------
# Batch driver
# ---------------------------------------------------------------------------

def checkable_links(content: str) -> List[str]:
    """Absolute ``http(s)`` links of *content*; relative paths have no host."""
    return [url for url in extract_links(content) if _CHECKABLE_RE.match(url)]


async def _check_batches(
    client: httpx.AsyncClient,
    urls: List[str],
    batch_size: int,
    timeout: float,
    treat_restricted: Optional[bool],
) -> List[LinkStatus]:
    results: List[LinkStatus] = []
    for start in range(0, len(urls), batch_size):
        batch = urls[start:start + batch_size]
        outcomes = await asyncio.gather(
            *(
                check_link_status(
                    client, url, timeout=timeout, treat_restricted=treat_restricted
                )
                for url in batch
            ),
            return_exceptions=True,
        )
        for url, outcome in zip(batch, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning("[links] unexpected error probing %s: %s", url, outcome)
                outcome = LinkStatus(
                    url=clean_url(url), status=None, ok=False, error=_describe(outcome, timeout)
                )
            results.append(outcome)
    return results


async def check_links(
    content: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    batch_size: Optional[int] = None,
    timeout: Optional[float] = None,
    treat_restricted: Optional[bool] = None,
) -> LinkCheckResult:
    """Extract and check every absolute link in *content*.

    Args:
        content: Raw text, markdown or HTML.
        client: Shared ``httpx.AsyncClient``; a private one is opened (and
            closed) when omitted.
        batch_size: Maximum checks in flight (default
            ``settings.link_check_batch_size``).
        timeout: Per-request deadline in seconds (default
            ``settings.link_check_timeout``).
        treat_restricted: Count 403/405 as working (default
            ``settings.treat_restricted_as_working``).

    Returns:
        A :class:`LinkCheckResult` whose ``links`` follow extraction order.
    """
    batch_size = settings.link_check_batch_size if batch_size is None else batch_size
    timeout = settings.link_check_timeout if timeout is None else timeout
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")

    urls = checkable_links(content)
    if not urls:
        return LinkCheckResult(links=[])

    logger.info("[links] Checking %d link(s) in batches of %d", len(urls), batch_size)
    if client is None:
        async with httpx.AsyncClient() as owned:
            statuses = await _check_batches(owned, urls, batch_size, timeout, treat_restricted)
    else:
        statuses = await _check_batches(client, urls, batch_size, timeout, treat_restricted)

    result = LinkCheckResult(links=statuses)
    logger.info(
        "[links] Link check complete: %d link(s), %d broken, %d working with security restrictions",
        result.total_links,
        result.broken_links,
        result.restricted_links,
    )
    return result


def check_links_sync(content: str, **kwargs: Any) -> LinkCheckResult:
    """Blocking wrapper around :func:`check_links` for the CLI."""
    return asyncio.run(check_links(content, **kwargs))
