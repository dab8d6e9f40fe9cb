"""Tests for hyperlink extraction (text, markdown and HTML)."""

from __future__ import annotations

from content_eval.ingest.links import (
    LINK_MATCHERS,
    clean_url,
    dedupe_links,
    extract_html_links,
    extract_links,
    match_anchor_hrefs,
    match_markdown_links,
    match_relative_paths,
    match_www_urls,
)


# ---------------------------------------------------------------------------
# clean_url
# ---------------------------------------------------------------------------

class TestCleanUrl:
    def test_strips_trailing_punctuation(self) -> None:
        assert clean_url("https://x.com/page!") == "https://x.com/page"
        assert clean_url("https://x.com/a;:") == "https://x.com/a"
        assert clean_url("  https://x.com/a.  ") == "https://x.com/a"

    def test_strips_unbalanced_closer(self) -> None:
        assert clean_url("https://x.com/a).") == "https://x.com/a"

    def test_keeps_balanced_parentheses(self) -> None:
        url = "https://en.wikipedia.org/wiki/Python_(language)"
        assert clean_url(url) == url

    def test_empty_string(self) -> None:
        assert clean_url("") == ""


# ---------------------------------------------------------------------------
# Individual matchers
# ---------------------------------------------------------------------------

class TestMatchers:
    def test_anchor_hrefs_skip_non_absolute(self) -> None:
        html = '<a href="https://a.com/x">A</a> <a href="#top">T</a> <a href=\'mailto:me@x.com\'>M</a>'
        assert match_anchor_hrefs(html) == ["https://a.com/x"]

    def test_anchor_href_entities_decoded(self) -> None:
        assert match_anchor_hrefs('<a class="x" href="https://a.com/?p=1&amp;q=2">') == [
            "https://a.com/?p=1&q=2"
        ]

    def test_data_href_is_not_an_anchor(self) -> None:
        html = '<a data-href="https://t.example/x">z</a> <a data-x="1" href="https://a.com/y">y</a>'
        assert match_anchor_hrefs(html) == ["https://a.com/y"]
        assert match_relative_paths('<a data-href="/private">z</a>') == []
        assert extract_links('<a data-href="/private">z</a>') == []

    def test_www_urls_promoted_to_http(self) -> None:
        assert match_www_urls("visit www.example.org/page today") == [
            "http://www.example.org/page"
        ]

    def test_www_inside_full_url_not_matched_twice(self) -> None:
        assert match_www_urls("https://www.example.org/page") == []

    def test_markdown_links_absolute_only(self) -> None:
        text = "[docs](https://docs.example.com/guide) and [about](/about)"
        assert match_markdown_links(text) == ["https://docs.example.com/guide"]

    def test_relative_paths(self) -> None:
        text = '[about](/about) <a href="/contact">c</a> <a href="//cdn.x.com/a">cdn</a>'
        assert match_relative_paths(text) == ["/contact", "/about"]

    def test_matcher_order(self) -> None:
        assert [m.__name__ for m in LINK_MATCHERS] == [
            "match_anchor_hrefs",
            "match_bare_urls",
            "match_www_urls",
            "match_markdown_links",
            "match_relative_paths",
        ]


# ---------------------------------------------------------------------------
# extract_links
# ---------------------------------------------------------------------------

class TestExtractLinks:
    def test_first_discovery_order_and_dedup(self) -> None:
        content = (
            'Read [guide](https://b.com/guide) and <a href="https://a.com">A</a> '
            "or www.c.com, then https://b.com/guide again."
        )
        assert extract_links(content) == [
            "https://a.com",
            "https://b.com/guide",
            "http://www.c.com",
        ]

    def test_bare_url_in_parentheses(self) -> None:
        assert extract_links("(see https://a.com/x)") == ["https://a.com/x"]

    def test_wikipedia_style_url(self) -> None:
        url = "https://en.wikipedia.org/wiki/Python_(language)"
        assert extract_links(f"Background: {url}.") == [url]

    def test_relative_paths_come_last(self) -> None:
        content = "[about](/about) then http://y.com/b"
        assert extract_links(content) == ["http://y.com/b", "/about"]

    def test_no_duplicates(self) -> None:
        links = extract_links("https://a.com https://a.com, https://a.com.")
        assert links == ["https://a.com"]

    def test_idempotent_on_absolute_links(self) -> None:
        content = "http://y.com/b and https://x.com/a?x=1 plus www.z.org/path"
        first = extract_links(content)
        assert extract_links(" ".join(first)) == first

    def test_never_raises_on_malformed_input(self) -> None:
        for content in ["", "<a href=", "[broken](", "http://", "((((", "\x00\xff"]:
            assert isinstance(extract_links(content), list)

    def test_empty_content(self) -> None:
        assert extract_links("") == []


class TestDedupeLinks:
    def test_cleans_before_comparing(self) -> None:
        assert dedupe_links(["https://a.com.", "https://a.com", " ", ""]) == ["https://a.com"]


# ---------------------------------------------------------------------------
# extract_html_links
# ---------------------------------------------------------------------------

class TestExtractHtmlLinks:
    def test_scenario_anchor_then_text(self) -> None:
        html = (
            "<html><head><title>  My   Guide </title></head>"
            '<body>See <a href="https://x.com/a">here</a> and http://y.com/b.</body></html>'
        )
        assert extract_html_links(html) == ["https://x.com/a", "http://y.com/b"]

    def test_head_links_and_meta(self) -> None:
        html = """\
<html><head>
  <link rel="canonical" href="https://site.com/post">
  <link rel="stylesheet" href="https://site.com/style.css">
  <meta property="og:url" content="https://site.com/og">
  <meta name="description" content="https://not-a-url-field.com">
</head><body><a href="/relative">r</a></body></html>
"""
        assert extract_html_links(html) == [
            "/relative",
            "https://site.com/post",
            "https://site.com/og",
        ]

    def test_script_urls_ignored(self) -> None:
        html = '<body><script>var u = "https://tracker.example/x";</script><p>Text</p></body>'
        assert extract_html_links(html) == []

    def test_fragment_and_mailto_ignored(self) -> None:
        html = '<a href="#top">top</a><a href="mailto:a@b.com">mail</a><a href="javascript:void(0)">js</a>'
        assert extract_html_links(html) == []

    def test_empty_html(self) -> None:
        assert extract_html_links("") == []
