"""Tests for the title heuristics (plain-text cascade and HTML cascade)."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from content_eval.ingest.titles import (
    TITLE_STRATEGIES,
    extract_html_title,
    extract_title,
    title_from_bold,
    title_from_first_line,
    title_from_heading,
    title_from_meta_block,
    title_from_meta_html,
    title_from_meta_line,
    title_from_title_phrase,
)


# ---------------------------------------------------------------------------
# Generic strategies
# ---------------------------------------------------------------------------

class TestMetaTitleStrategies:
    def test_meta_block_scenario(self) -> None:
        text = "Meta Title: Best Widgets Ever\nMeta Description: buy now"
        assert title_from_meta_block(text) == "Best Widgets Ever"
        assert extract_title(text) == "Best Widgets Ever"

    def test_meta_block_strips_quotes(self) -> None:
        text = 'Meta Title: "Quoted Title Here"\nMeta Description: d'
        assert title_from_meta_block(text) == "Quoted Title Here"

    def test_meta_line_stops_at_sentence_end(self) -> None:
        text = "Meta Title: Ten Tips for Gardeners. More text follows here"
        assert title_from_meta_block(text) is None
        assert title_from_meta_line(text) == "Ten Tips for Gardeners"

    def test_meta_html_label_split_by_tags(self) -> None:
        text = "<p>Meta Title:<span>&nbsp;</span><em>Split Label Title</em></p>"
        assert title_from_meta_html(text) == "Split Label Title"

    def test_title_phrase_without_colon(self) -> None:
        assert title_from_title_phrase("Page title Choosing a Road Bike") == "Choosing a Road Bike"

    @pytest.mark.parametrize(
        "strategy",
        [title_from_meta_block, title_from_meta_line, title_from_meta_html, title_from_title_phrase],
    )
    def test_four_char_title_rejected(self, strategy) -> None:
        assert strategy("Meta Title: abcd\nMeta Description: x") is None

    @pytest.mark.parametrize(
        "strategy",
        [title_from_meta_block, title_from_meta_line, title_from_meta_html, title_from_title_phrase],
    )
    def test_six_char_title_accepted(self, strategy) -> None:
        assert strategy("Meta Title: abcdef\nMeta Description: x") == "abcdef"

    def test_five_char_title_rejected(self) -> None:
        assert title_from_meta_block("Meta Title: abcde\nMeta Description: x") is None

    def test_over_long_title_rejected(self) -> None:
        text = f"Meta Title: {'x' * 200}\nMeta Description: x"
        assert title_from_meta_block(text) is None

    def test_cascade_never_returns_short_value(self) -> None:
        # Falls through to the first-line guess, which keeps the label.
        assert extract_title("Meta Title: abcd\nMeta Description: x") != "abcd"
        assert extract_title("Meta Title: abcdef\nMeta Description: x") == "abcdef"


class TestHeadingAndFirstLine:
    def test_markdown_heading(self) -> None:
        text = "Intro paragraph that is long enough\n\n# Getting Started With Python\n\nBody"
        assert title_from_heading(text) == "Getting Started With Python"

    def test_equals_heading(self) -> None:
        assert title_from_heading("== Section Title ==\ntext") == "Section Title"

    def test_first_line_window(self) -> None:
        assert title_from_first_line("\n\n  A Reasonable Title  \nbody") == "A Reasonable Title"
        assert title_from_first_line("Short\nSecond line is long enough") == "Second line is long enough"
        assert title_from_first_line("x" * 101) is None
        assert title_from_first_line("x" * 100) == "x" * 100
        assert title_from_first_line("x" * 10) == "x" * 10

    def test_first_line_skips_lines_outside_window(self) -> None:
        text = "Hi\nThis line is long enough to be a title"
        assert extract_title(text) == "This line is long enough to be a title"
        assert title_from_first_line("tiny\n" + "y" * 150 + "\nA Later Plausible Title") == "A Later Plausible Title"
        assert title_from_first_line("one\ntwo\n" + "z" * 101) is None

    def test_heading_beats_first_line(self) -> None:
        text = "An opening sentence of text\n# The Real Heading"
        assert extract_title(text) == "The Real Heading"

    def test_no_title(self) -> None:
        assert extract_title("") is None
        assert extract_title("tiny") is None

    def test_strategy_order(self) -> None:
        assert TITLE_STRATEGIES[0] is title_from_meta_block
        assert TITLE_STRATEGIES[-1] is title_from_first_line


# ---------------------------------------------------------------------------
# HTML cascade
# ---------------------------------------------------------------------------

class TestExtractHtmlTitle:
    def test_title_tag_collapsed(self) -> None:
        html = "<html><head><title>  My   Guide </title></head><body><h1>Other</h1></body></html>"
        assert extract_html_title(html) == "My Guide"

    def test_title_tag_entities_decoded(self) -> None:
        assert extract_html_title("<title>Fish &amp; Chips</title>") == "Fish & Chips"

    def test_open_graph_when_no_title(self) -> None:
        html = '<head><meta property="og:title" content="Graph Title"></head><h1>Heading</h1>'
        assert extract_html_title(html) == "Graph Title"

    def test_h1_then_h2(self) -> None:
        assert extract_html_title("<body><h2>Second</h2><h1>First Heading</h1></body>") == "First Heading"
        assert extract_html_title("<body><h2>Only Subheading</h2></body>") == "Only Subheading"

    def test_bold_text(self) -> None:
        html = "<body><p><b>Hi</b> <strong>Bold Headline Here</strong></p></body>"
        assert extract_html_title(html) == "Bold Headline Here"

    def test_bold_too_long_ignored(self) -> None:
        soup = BeautifulSoup(f"<strong>{'y' * 101}</strong>", "html.parser")
        assert title_from_bold(soup) is None

    def test_split_meta_title_label(self) -> None:
        html = "<body><p>Meta Title:<span>&nbsp;</span><em>Split Label Title</em></p></body>"
        assert extract_html_title(html) == "Split Label Title"

    def test_falls_back_to_visible_text(self) -> None:
        html = "<body><script>var t = 1;</script><p>A plain first paragraph</p></body>"
        assert extract_html_title(html) == "A plain first paragraph"

    def test_empty_html(self) -> None:
        assert extract_html_title("") is None
