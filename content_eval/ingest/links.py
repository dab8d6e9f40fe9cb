"""Hyperlink extraction from raw text, markdown and HTML.

:func:`extract_links` runs an ordered list of independent matchers over the
input, accumulates every candidate, then cleans and deduplicates them while
preserving first-seen order.  It never raises: patterns that do not match
simply contribute nothing.

:func:`extract_html_links` is the HTML-aware variant used for ``.html``
documents.  It reads ``<a>``, ``<link>`` and ``<meta>`` tags through
BeautifulSoup before falling back to the generic matchers over the visible
text.
"""

from __future__ import annotations

import html as html_lib
import re
from typing import Callable, Iterable, List

from bs4 import BeautifulSoup

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# One URL "atom": anything but whitespace, brackets, angle brackets or double
# quotes, or a balanced ``( ... )`` group (Wikipedia-style URLs).
_URL_BODY = r'(?:[^\s()<>\[\]{}"]|\([^\s()<>\[\]{}"]*\))+'

_ANCHOR_RE = re.compile(
    r"""<a\s[^>]*?(?<![\w-])href\s*=\s*(["'])(.*?)\1""",
    re.IGNORECASE | re.DOTALL,
)
_BARE_URL_RE = re.compile(r"https?://" + _URL_BODY, re.IGNORECASE)
# ``www.`` not already part of a scheme-qualified URL or a longer hostname.
_WWW_URL_RE = re.compile(r"(?<![\w/.@-])www\." + _URL_BODY, re.IGNORECASE)
_MARKDOWN_RE = re.compile(r"\[[^\]]*\]\(\s*(" + _URL_BODY + r")\s*\)")

_ABSOLUTE_RE = re.compile(r"^https?://", re.IGNORECASE)

# Characters stripped from the end of every candidate.
_TRAILING = ",.!?;:'\")]"
_CLOSERS = {")": "(", "]": "["}

# Meta tags whose ``content`` attribute is a URL.
_URL_META_KEYS = {
    "og:url",
    "og:image",
    "og:image:url",
    "og:video",
    "twitter:url",
    "twitter:image",
}
_URL_LINK_RELS = {"canonical", "alternate", "amphtml"}


# ---------------------------------------------------------------------------
# Candidate normalisation
# ---------------------------------------------------------------------------

def clean_url(url: str) -> str:
    """Trim whitespace and trailing punctuation from *url*.

    A closing ``)`` or ``]`` is only stripped when it is unbalanced, so
    ``https://en.wikipedia.org/wiki/Python_(language)`` survives intact.
    """
    url = url.strip()
    while url and url[-1] in _TRAILING:
        last = url[-1]
        opener = _CLOSERS.get(last)
        if opener is not None and url.count(opener) >= url.count(last):
            break
        url = url[:-1].rstrip()
    return url


def _is_domain_relative(href: str) -> bool:
    return href.startswith("/") and not href.startswith("//")


def _absolute_or_none(href: str) -> str | None:
    """Return *href* as an absolute URL, or ``None`` if it is not one.

    ``www.`` hosts without a scheme are promoted to ``http://``.
    """
    href = href.strip()
    if _ABSOLUTE_RE.match(href):
        return href
    if href.lower().startswith("www."):
        return "http://" + href
    return None


# ---------------------------------------------------------------------------
# Matchers (applied in order)
# ---------------------------------------------------------------------------

def match_anchor_hrefs(content: str) -> List[str]:
    """Absolute URLs found in ``<a href="...">`` attributes."""
    found: List[str] = []
    for m in _ANCHOR_RE.finditer(content):
        url = _absolute_or_none(html_lib.unescape(m.group(2)))
        if url:
            found.append(url)
    return found


def match_bare_urls(content: str) -> List[str]:
    """``http://`` / ``https://`` URLs written directly in the text."""
    return [m.group(0) for m in _BARE_URL_RE.finditer(content)]


def match_www_urls(content: str) -> List[str]:
    """Protocol-less ``www.`` URLs, promoted to ``http://``."""
    return ["http://" + m.group(0) for m in _WWW_URL_RE.finditer(content)]


def match_markdown_links(content: str) -> List[str]:
    """Absolute targets of markdown ``[text](url)`` links."""
    found: List[str] = []
    for m in _MARKDOWN_RE.finditer(content):
        url = _absolute_or_none(m.group(1))
        if url:
            found.append(url)
    return found


def match_relative_paths(content: str) -> List[str]:
    """Domain-relative ``/path`` targets of anchors and markdown links."""
    found: List[str] = []
    for m in _ANCHOR_RE.finditer(content):
        href = html_lib.unescape(m.group(2)).strip()
        if _is_domain_relative(href):
            found.append(href)
    for m in _MARKDOWN_RE.finditer(content):
        href = m.group(1).strip()
        if _is_domain_relative(href):
            found.append(href)
    return found


LINK_MATCHERS: tuple[Callable[[str], List[str]], ...] = (
    match_anchor_hrefs,
    match_bare_urls,
    match_www_urls,
    match_markdown_links,
    match_relative_paths,
)


def dedupe_links(candidates: Iterable[str]) -> List[str]:
    """Clean every candidate and drop empties and repeats, keeping order."""
    seen: set[str] = set()
    links: List[str] = []
    for candidate in candidates:
        url = clean_url(candidate)
        if url and url not in seen:
            seen.add(url)
            links.append(url)
    return links


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_links(content: str) -> List[str]:
    """Return every hyperlink-like substring of *content*.

    Matchers run in :data:`LINK_MATCHERS` order: anchor hrefs, bare URLs,
    ``www.`` URLs, markdown links, then domain-relative paths.  Results are
    deduplicated by exact string match in order of first discovery.
    """
    if not content:
        return []
    candidates: List[str] = []
    for matcher in LINK_MATCHERS:
        candidates.extend(matcher(content))
    return dedupe_links(candidates)


def extract_html_links(html: str) -> List[str]:
    """Return the links of an HTML document.

    Tag attributes come first (``<a href>``, ``<link rel=canonical|alternate>``,
    URL-valued ``<meta>`` tags), followed by any URLs written in the visible
    text.  Fragment, ``mailto:``, ``javascript:`` and page-relative hrefs are
    ignored.
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    candidates: List[str] = []

    for tag in soup.find_all("a", href=True):
        href = str(tag["href"]).strip()
        url = _absolute_or_none(href)
        if url:
            candidates.append(url)
        elif _is_domain_relative(href):
            candidates.append(href)

    for tag in soup.find_all("link", href=True):
        rels = {str(r).lower() for r in (tag.get("rel") or [])}
        if rels & _URL_LINK_RELS:
            url = _absolute_or_none(str(tag["href"]))
            if url:
                candidates.append(url)

    for tag in soup.find_all("meta", content=True):
        key = str(tag.get("property") or tag.get("name") or "").lower()
        if key in _URL_META_KEYS:
            url = _absolute_or_none(str(tag["content"]))
            if url:
                candidates.append(url)

    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    candidates.extend(extract_links(soup.get_text(separator=" ")))

    return dedupe_links(candidates)
