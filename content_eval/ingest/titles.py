"""Best-guess document titles.

Content submitted for evaluation is frequently an SEO draft carrying literal
``Meta Title:`` / ``Meta Description:`` blocks, so the cascade tries that
convention first, generic headings next, and a blind first-line guess last.

Every strategy is an independent function taking the document text and
returning a title or ``None``.  :func:`extract_title` walks
:data:`TITLE_STRATEGIES` in order and returns the first hit;
:func:`extract_html_title` does the same over :data:`HTML_TITLE_STRATEGIES`
(which take a parsed soup) before handing the visible text to the generic
cascade.
"""

from __future__ import annotations

import html as html_lib
import re
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag

# Acceptance windows (exclusive on both ends for labelled titles).
MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 200
# Inclusive window for the first-line fallback.
MIN_FIRST_LINE_LENGTH = 10
MAX_FIRST_LINE_LENGTH = 100
# Bold text near the top of an HTML page is only a title if it is short.
MAX_BOLD_TITLE_LENGTH = 100
_BOLD_CANDIDATES = 5

_QUOTES = "\"'“”‘’`*"

_META_BLOCK_RE = re.compile(
    r"meta\s*title\s*:\s*(.*?)\s*meta\s*description\s*:",
    re.IGNORECASE | re.DOTALL,
)
_META_LINE_RE = re.compile(r"meta\s*title\s*:[ \t]*([^\n.!?]+)", re.IGNORECASE)
# A capture must not swallow the next label when the title value is empty.
_NOT_LABEL = r"(?!meta\s*description)"
_GAP = r"(?:\s|&nbsp;|&#160;|<[^>]+>)*"
_META_HTML_RE = re.compile(
    r"meta" + _GAP + r"title" + _GAP + r":" + _GAP + _NOT_LABEL + r"([^<\n]+)",
    re.IGNORECASE,
)
_TITLE_PHRASE_RE = re.compile(
    r"\b(?:meta|page|post)\s+title\b[ \t]*:?[ \t]*" + _NOT_LABEL + r"([^\n]+)",
    re.IGNORECASE,
)
_MARKDOWN_HEADING_RE = re.compile(r"^[ \t]{0,3}#{1,6}[ \t]+(.+?)[ \t#]*$", re.MULTILINE)
_EQUALS_HEADING_RE = re.compile(r"^[ \t]*={2,}[ \t]*(.+?)[ \t]*=*[ \t]*$", re.MULTILINE)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _collapse(text: str) -> str:
    """Decode HTML entities and collapse whitespace runs to single spaces."""
    return " ".join(html_lib.unescape(text).split())


def _tidy(candidate: str) -> str:
    """Strip whitespace, quote and newline remnants around a captured title."""
    return _collapse(candidate).strip(_QUOTES + " ")


def _accept(candidate: Optional[str]) -> Optional[str]:
    """Return the tidied *candidate* if it lies strictly inside the window."""
    if candidate is None:
        return None
    title = _tidy(candidate)
    if MIN_TITLE_LENGTH < len(title) < MAX_TITLE_LENGTH:
        return title
    return None


def _first_accepted(pattern: re.Pattern[str], text: str) -> Optional[str]:
    for m in pattern.finditer(text):
        title = _accept(m.group(1))
        if title:
            return title
    return None


# ---------------------------------------------------------------------------
# Generic (plain-text) strategies
# ---------------------------------------------------------------------------

def title_from_meta_block(text: str) -> Optional[str]:
    """``Meta Title: ...`` up to the following ``Meta Description:`` label."""
    return _first_accepted(_META_BLOCK_RE, text)


def title_from_meta_line(text: str) -> Optional[str]:
    """``Meta Title: ...`` up to the first sentence terminator or newline."""
    return _first_accepted(_META_LINE_RE, text)


def title_from_meta_html(text: str) -> Optional[str]:
    """``Meta Title`` label separated from its value by tags or ``&nbsp;``."""
    return _first_accepted(_META_HTML_RE, text)


def title_from_title_phrase(text: str) -> Optional[str]:
    """``meta title`` / ``page title`` / ``post title`` with optional colon."""
    return _first_accepted(_TITLE_PHRASE_RE, text)


def title_from_heading(text: str) -> Optional[str]:
    """A markdown ``# Heading`` or ``== Heading ==`` line."""
    return _first_accepted(_MARKDOWN_HEADING_RE, text) or _first_accepted(
        _EQUALS_HEADING_RE, text
    )


def title_from_first_line(text: str) -> Optional[str]:
    """The first non-empty line of plausible title length."""
    for line in text.splitlines():
        line = line.strip()
        if MIN_FIRST_LINE_LENGTH <= len(line) <= MAX_FIRST_LINE_LENGTH:
            return line
    return None


TITLE_STRATEGIES: tuple[Callable[[str], Optional[str]], ...] = (
    title_from_meta_block,
    title_from_meta_line,
    title_from_meta_html,
    title_from_title_phrase,
    title_from_heading,
    title_from_first_line,
)


def extract_title(text: str) -> Optional[str]:
    """Return a best-guess title for *text*, or ``None``.

    Strategies run in :data:`TITLE_STRATEGIES` order; the first non-``None``
    result wins.
    """
    if not text:
        return None
    for strategy in TITLE_STRATEGIES:
        title = strategy(text)
        if title:
            return title
    return None


# ---------------------------------------------------------------------------
# HTML strategies
# ---------------------------------------------------------------------------

def _text_of(tag: Optional[Tag]) -> str:
    return _collapse(tag.get_text(separator=" ")) if tag is not None else ""


def title_from_title_tag(soup: BeautifulSoup) -> Optional[str]:
    """The ``<title>`` element, entity-decoded and whitespace-collapsed."""
    return _text_of(soup.find("title")) or None


def title_from_open_graph(soup: BeautifulSoup) -> Optional[str]:
    """The ``og:title`` meta tag."""
    tag = soup.find("meta", attrs={"property": re.compile(r"^og:title$", re.I)})
    if tag is None:
        tag = soup.find("meta", attrs={"name": re.compile(r"^og:title$", re.I)})
    if tag is None or not tag.get("content"):
        return None
    return _collapse(str(tag["content"])) or None


def title_from_h1(soup: BeautifulSoup) -> Optional[str]:
    return _text_of(soup.find("h1")) or None


def title_from_h2(soup: BeautifulSoup) -> Optional[str]:
    return _text_of(soup.find("h2")) or None


def title_from_bold(soup: BeautifulSoup) -> Optional[str]:
    """A short ``<strong>`` / ``<b>`` element among the first few on the page."""
    for tag in soup.find_all(["strong", "b"], limit=_BOLD_CANDIDATES):
        text = _text_of(tag)
        if MIN_TITLE_LENGTH < len(text) <= MAX_BOLD_TITLE_LENGTH:
            return text
    return None


HTML_TITLE_STRATEGIES: tuple[Callable[[BeautifulSoup], Optional[str]], ...] = (
    title_from_title_tag,
    title_from_open_graph,
    title_from_h1,
    title_from_h2,
    title_from_bold,
)


def visible_text(soup: BeautifulSoup) -> str:
    """Newline-separated text of *soup* without script/style content."""
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return soup.get_text(separator="\n")


def extract_html_title(html: str) -> Optional[str]:
    """Return the title of an HTML document, or ``None``.

    Tag-based signals (:data:`HTML_TITLE_STRATEGIES`) are tried first; if none
    matches, a tag-split ``Meta Title`` label in the raw markup is tried, then
    the generic :func:`extract_title` cascade over the visible text.
    """
    if not html:
        return None
    soup = BeautifulSoup(html, "html.parser")
    for strategy in HTML_TITLE_STRATEGIES:
        title = strategy(soup)
        if title:
            return title
    return title_from_meta_html(html) or extract_title(visible_text(soup))
